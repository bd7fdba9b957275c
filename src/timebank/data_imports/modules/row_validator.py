from typing import Any, List, Mapping, Optional

from loguru import logger
from pydantic import ValidationError

from timebank.data_imports.modules.normalizers import normalize_date, normalize_time
from timebank.pydantic_models.config.imports_config import ColumnAliases
from timebank.pydantic_models.data.cell_value import is_blank
from timebank.pydantic_models.data.import_result import RowValidationResult
from timebank.pydantic_models.data.time_entry import TimeEntryDraft
from timebank.pydantic_models.data.work_settings import DEFAULT_CONTRACTUAL_HOURS
from timebank.shared_modules.utils import safe_str, to_float

_DEFAULT_ALIASES = ColumnAliases()


def resolve_column(row: Mapping[str, Any], names: List[str]) -> Any:
    """
    Liefert den ersten vorhandenen, nicht leeren Wert unter den angegebenen Spaltennamen.
    Eine numerische 0 gilt als vorhanden (z. B. 00:00 als Tagesbruchteil).
    """
    for name in names:
        value = row.get(name)
        if not is_blank(value):
            return value
    return None


def validate_row(
    row: Mapping[str, Any],
    row_index: int,
    aliases: Optional[ColumnAliases] = None,
    default_contractual_hours: float = DEFAULT_CONTRACTUAL_HOURS,
) -> RowValidationResult:
    """
    Prüft eine Datenzeile und baut bei Erfolg einen TimeEntryDraft.

    Alle Regeln werden ausgewertet, damit der Nutzer sämtliche Fehler der Zeile
    auf einmal sieht. Die Zeilennummer in den Meldungen ist row_index + 2
    (Zeile 1 der Tabelle ist die Kopfzeile).

    Args:
        row: Spaltenname -> Rohwert.
        row_index: 0-basierter Index der Datenzeile in der Quelldatei.
        aliases: Spaltennamen je Feld (Default: ColumnAliases()).
        default_contractual_hours: Wert für leere Vertragsstunden.
    """
    cols = aliases or _DEFAULT_ALIASES
    line = row_index + 2
    errors: List[str] = []

    entry_date = normalize_date(resolve_column(row, cols.date))
    if not entry_date:
        errors.append(f"Linha {line}: Data inválida ou ausente")

    check_in = normalize_time(resolve_column(row, cols.check_in))
    if not check_in:
        errors.append(f"Linha {line}: Horário de entrada inválido ou ausente")

    check_out = normalize_time(resolve_column(row, cols.check_out))
    if not check_out:
        errors.append(f"Linha {line}: Horário de saída inválido ou ausente")

    lunch_out = normalize_time(resolve_column(row, cols.lunch_out))
    lunch_in = normalize_time(resolve_column(row, cols.lunch_in))
    if (lunch_out is None) != (lunch_in is None):
        errors.append(
            f"Linha {line}: Se informado horário de almoço, tanto saída quanto volta devem ser preenchidos"
        )

    contractual_hours = default_contractual_hours
    raw_hours = resolve_column(row, cols.contractual_hours)
    if raw_hours is not None:
        parsed = to_float(raw_hours)
        # NaN scheitert an beiden Vergleichen
        if parsed is None or not 0 <= parsed <= 24:
            errors.append(f"Linha {line}: Horas contratuais inválidas (deve ser entre 0 e 24)")
        else:
            contractual_hours = parsed

    raw_notes = resolve_column(row, cols.notes)
    notes = safe_str(raw_notes).strip() or None

    if errors:
        return RowValidationResult(is_valid=False, errors=errors)

    try:
        draft = TimeEntryDraft(
            date=entry_date,
            check_in=check_in,
            check_out=check_out,
            lunch_out=lunch_out,
            lunch_in=lunch_in,
            contractual_hours=contractual_hours,
            notes=notes,
        )
    except ValidationError as exc:
        # sollte nach den Prüfungen oben nicht auftreten
        logger.error(f"Zeile {line}: Validierungsfehler: {exc}")
        return RowValidationResult(is_valid=False, errors=[f"Linha {line}: Registro inválido"])
    return RowValidationResult(is_valid=True, data=draft)
