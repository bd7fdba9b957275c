from io import BytesIO
from pathlib import Path
from typing import Any, List, Union

import pandas as pd
from loguru import logger

from timebank.shared_modules.utils import column_letter, ensure_dir

TEMPLATE_FILENAME = "modelo_banco_de_horas.xlsx"
TEMPLATE_SHEET_NAME = "Registros de Ponto"
TEMPLATE_HEADER = [
    "Data",
    "Entrada",
    "Saída Almoço",
    "Volta Almoço",
    "Saída",
    "Horas Contratuais",
    "Observações",
]
TEMPLATE_ROWS: List[List[Any]] = [
    ["2024-01-15", "09:00", "12:00", "13:00", "18:00", 8, "Exemplo de registro"],
    ["2024-01-16", "08:30", "12:30", "13:30", "17:30", 8, ""],
]
COLUMN_WIDTHS = [12, 10, 12, 12, 10, 15, 20]


def template_rows() -> List[List[Any]]:
    """Kopfzeile plus Beispielzeilen, genau wie in der Vorlage."""
    return [list(TEMPLATE_HEADER)] + [list(r) for r in TEMPLATE_ROWS]


def _write(target: Union[Path, BytesIO]) -> None:
    df = pd.DataFrame(TEMPLATE_ROWS, columns=TEMPLATE_HEADER)
    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=TEMPLATE_SHEET_NAME, index=False)
        ws = writer.sheets[TEMPLATE_SHEET_NAME]
        for idx, width in enumerate(COLUMN_WIDTHS):
            ws.column_dimensions[column_letter(idx)].width = width


def template_bytes() -> bytes:
    """Vorlage als .xlsx im Speicher (z. B. für einen Download)."""
    buf = BytesIO()
    _write(buf)
    return buf.getvalue()


def write_template(target_dir: Path) -> Path:
    """
    Schreibt die Import-Vorlage ins Zielverzeichnis und gibt den Dateipfad zurück.
    """
    out_file = ensure_dir(Path(target_dir)) / TEMPLATE_FILENAME
    _write(out_file)
    logger.info(f"Import-Vorlage geschrieben: {out_file}")
    return out_file
