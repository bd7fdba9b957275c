from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from loguru import logger

from timebank.data_imports.modules.row_validator import validate_row
from timebank.data_imports.modules.table_reader import read_table
from timebank.pydantic_models.config.imports_config import ColumnAliases
from timebank.pydantic_models.data.cell_value import is_blank
from timebank.pydantic_models.data.import_result import ImportResult
from timebank.pydantic_models.data.time_entry import TimeEntryDraft
from timebank.pydantic_models.data.work_settings import DEFAULT_CONTRACTUAL_HOURS
from timebank.shared_modules.utils import column_letter, safe_str

MSG_TOO_FEW_ROWS = "A planilha deve conter pelo menos uma linha de cabeçalho e uma linha de dados"
MSG_READ_ERROR = "Erro ao ler o arquivo"
MSG_PROCESS_ERROR = "Erro ao processar arquivo: {detail}"


def header_names(header: Sequence[Any], width: int) -> List[str]:
    """
    Spaltennamen aus der Kopfzeile. Leere Überschriften erhalten den Spaltenbuchstaben,
    damit der Buchstaben-Fallback der Aliase greift.
    """
    names: List[str] = []
    for idx in range(width):
        raw = header[idx] if idx < len(header) else None
        name = safe_str(raw).strip() if not is_blank(raw) else ""
        names.append(name or column_letter(idx))
    return names


def map_row(names: Sequence[str], values: Sequence[Any]) -> Dict[str, Any]:
    """Positionswerte -> {Spaltenname: Wert}; bei doppelten Namen gewinnt die erste Spalte."""
    mapped: Dict[str, Any] = {}
    for idx, name in enumerate(names):
        mapped.setdefault(name, values[idx] if idx < len(values) else None)
    return mapped


class SpreadsheetImporter:
    """
    Liest eine Excel-/CSV-Datei, prüft jede Datenzeile und liefert einen ImportResult.
    Es wird nichts gespeichert: die Übernahme ins Ledger ist ein separater, bestätigter Schritt.
    Fehler verlassen den Importer nie als Exception, sondern immer als Ergebnis.
    """

    def __init__(
        self,
        aliases: Optional[ColumnAliases] = None,
        default_contractual_hours: float = DEFAULT_CONTRACTUAL_HOURS,
    ):
        self.aliases = aliases or ColumnAliases()
        self.default_contractual_hours = default_contractual_hours

    def import_file(self, file_path: Union[str, Path]) -> ImportResult:
        path = Path(file_path)
        logger.info(f"Verarbeite: {path.name}")
        try:
            data = path.read_bytes()
        except OSError as exc:
            logger.error(f"Datei {path} nicht lesbar: {exc}")
            return ImportResult.failure(MSG_READ_ERROR)
        return self.import_bytes(data, filename=path.name)

    async def import_file_async(self, file_path: Union[str, Path]) -> ImportResult:
        """
        Wie import_file, aber Lesen und Verarbeiten laufen in einem Worker-Thread.
        """
        return await asyncio.to_thread(self.import_file, file_path)

    def import_bytes(self, data: bytes, filename: Optional[str] = None) -> ImportResult:
        try:
            rows = read_table(data, filename)
        except Exception as exc:
            logger.exception(f"Datei {filename or '<bytes>'} konnte nicht dekodiert werden: {exc}")
            return ImportResult.failure(MSG_PROCESS_ERROR.format(detail=exc))

        if len(rows) < 2:
            logger.warning(f"Zu wenige Zeilen in {filename or '<bytes>'}: {len(rows)}")
            return ImportResult.failure(MSG_TOO_FEW_ROWS)

        try:
            result = self._process_rows(rows[0], rows[1:])
        except Exception as exc:
            logger.exception(f"Zeilen aus {filename or '<bytes>'} konnten nicht verarbeitet werden: {exc}")
            return ImportResult.failure(MSG_PROCESS_ERROR.format(detail=exc))
        logger.info(
            f"{result.valid_rows} von {result.total_rows} Zeilen gültig, "
            f"{len(result.errors)} Fehler ({filename or '<bytes>'})."
        )
        return result

    def _process_rows(self, header: Sequence[Any], data_rows: Sequence[Sequence[Any]]) -> ImportResult:
        width = max(len(header), *(len(r) for r in data_rows))
        names = header_names(header, width)

        entries: List[TimeEntryDraft] = []
        errors: List[str] = []
        total = 0
        # row_index bleibt der absolute Index, auch wenn leere Zeilen übersprungen werden
        for row_index, values in enumerate(data_rows):
            if all(is_blank(v) for v in values):
                continue
            total += 1
            validation = validate_row(
                map_row(names, values),
                row_index,
                aliases=self.aliases,
                default_contractual_hours=self.default_contractual_hours,
            )
            if validation.is_valid and validation.data is not None:
                entries.append(validation.data)
            else:
                errors.extend(validation.errors)

        return ImportResult(
            success=not errors,
            entries=entries,
            errors=errors,
            total_rows=total,
            valid_rows=len(entries),
        )
