from io import BytesIO
from pathlib import Path
from typing import Any, List, Optional, Tuple

import pandas as pd
from loguru import logger
from openpyxl import load_workbook

from timebank.pydantic_models.data.cell_value import is_blank

_ZIP_SIGNATURE = b"PK\x03\x04"
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
_CSV_ENCODINGS = ("utf-8-sig", "latin-1")

Table = List[List[Any]]


def _is_workbook(data: bytes, filename: Optional[str]) -> bool:
    if data.startswith(_ZIP_SIGNATURE):
        return True
    return bool(filename) and Path(filename).suffix.lower() in _EXCEL_SUFFIXES


def _read_workbook(data: bytes) -> Table:
    """
    Liest das erste Blatt mit openpyxl. data_only liefert berechnete Werte statt Formeln.
    """
    wb = load_workbook(BytesIO(data), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def _parse_csv(data: bytes, encoding: str, width: Optional[int] = None) -> Tuple[pd.DataFrame, int]:
    """
    Ein Durchlauf von pandas.read_csv. Zeilen mit mehr Feldern als die erste Zeile
    werden übersprungen und nur ihre Breite gemerkt.

    Returns:
        (DataFrame, größte Feldanzahl der übersprungenen Zeilen, 0 wenn keine)
    """
    widths: List[int] = []

    def _note_width(fields: List[str]) -> None:
        widths.append(len(fields))
        return None

    df = pd.read_csv(
        BytesIO(data),
        header=None,
        names=list(range(width)) if width else None,
        dtype=str,
        keep_default_na=False,
        sep=None,
        engine="python",
        encoding=encoding,
        skip_blank_lines=False,
        on_bad_lines=_note_width,
    )
    return df, max(widths, default=0)


def _read_csv(data: bytes) -> Table:
    """
    Liest CSV als reinen Text. Trennzeichen (",", ";", Tab) werden erkannt,
    Zellen bleiben Strings und werden erst beim Validieren normalisiert.
    Zeilen unterschiedlicher Länge sind erlaubt: gibt es breitere Zeilen als die
    Kopfzeile, wird mit der größten Breite ein zweites Mal gelesen.
    """
    last_error: Optional[Exception] = None
    for encoding in _CSV_ENCODINGS:
        try:
            df, widest = _parse_csv(data, encoding)
            if widest:
                logger.debug(f"CSV mit ungleich langen Zeilen, lese erneut mit {widest} Spalten.")
                df, _ = _parse_csv(data, encoding, width=widest)
        except UnicodeDecodeError as exc:
            logger.debug(f"CSV nicht als {encoding} lesbar: {exc}")
            last_error = exc
            continue
        return df.values.tolist()
    raise ValueError(f"CSV-Kodierung nicht erkannt: {last_error}")


def read_table(data: bytes, filename: Optional[str] = None) -> Table:
    """
    Dekodiert eine Excel- oder CSV-Datei in Zeilen (Liste von Zellwerten).
    Die erste Zeile ist die Kopfzeile. Leere Zeilen am Ende werden entfernt.

    Raises:
        Exception: Jeder Dekodierfehler wird an den Aufrufer weitergereicht.
    """
    rows = _read_workbook(data) if _is_workbook(data, filename) else _read_csv(data)
    while rows and all(is_blank(v) for v in rows[-1]):
        rows.pop()
    return rows
