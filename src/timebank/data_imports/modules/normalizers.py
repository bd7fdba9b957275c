"""
Normalisierung heterogener Zellwerte aus Excel/CSV in kanonische Formen.

Beide Funktionen sind total: unbekannte Eingaben ergeben None, es wird nie eine
Exception geworfen. Die Zuordnung erfolgt über die Zellart (EmptyCell, TextCell,
NumberCell, DateCell) und einen Konverter je Art.
"""

import re
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Optional

from openpyxl.utils.datetime import from_excel

from timebank.pydantic_models.data.cell_value import cell_from_raw

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_DMY_DATE_RE = re.compile(r"^(\d{1,2})([/-])(\d{1,2})\2(\d{4})$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

MINUTES_PER_DAY = 24 * 60


def _iso(year: int, month: int, day: int) -> Optional[str]:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def _date_from_text(s: str) -> Optional[str]:
    s = s.strip()
    if _ISO_DATE_RE.match(s):
        # bereits kanonisch, nur auf ein echtes Kalenderdatum prüfen
        return s if _iso(*map(int, s.split("-"))) else None
    match = _DMY_DATE_RE.match(s)
    if match:
        day, _sep, month, year = match.groups()
        return _iso(int(year), int(month), int(day))
    return None


def _date_from_serial(v: float) -> Optional[str]:
    """Excel-Seriennummer (Tage seit 1899-12-30, inkl. Lotus-Schaltjahrfehler)."""
    if v < 1:
        return None
    try:
        return from_excel(v).date().isoformat()
    except (OverflowError, ValueError):
        return None


def _date_from_native(v: Any) -> Optional[str]:
    if isinstance(v, datetime):
        return v.date().isoformat()
    if isinstance(v, date):
        return v.isoformat()
    return None


def _time_from_text(s: str) -> Optional[str]:
    match = _TIME_RE.match(s.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return f"{hours:02d}:{minutes:02d}"


def _time_from_fraction(v: float) -> Optional[str]:
    """Excel-Zeit als Tagesbruchteil (0.375 -> 09:00)."""
    if not 0 <= v < 1:
        return None
    total_minutes = round(v * MINUTES_PER_DAY)
    if total_minutes >= MINUTES_PER_DAY:
        # knapp unter 1 rundet auf 24:00, das ist keine Uhrzeit
        return None
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def _time_from_native(v: Any) -> Optional[str]:
    if isinstance(v, (datetime, time)):
        return f"{v.hour:02d}:{v.minute:02d}"
    return None


_DATE_CONVERTERS: Dict[str, Callable[[Any], Optional[str]]] = {
    "empty": lambda _c: None,
    "text": lambda c: _date_from_text(c.value),
    "number": lambda c: _date_from_serial(c.value),
    "date": lambda c: _date_from_native(c.value),
}

_TIME_CONVERTERS: Dict[str, Callable[[Any], Optional[str]]] = {
    "empty": lambda _c: None,
    "text": lambda c: _time_from_text(c.value),
    "number": lambda c: _time_from_fraction(c.value),
    "date": lambda c: _time_from_native(c.value),
}


def normalize_date(value: Any) -> Optional[str]:
    """Zellwert -> "YYYY-MM-DD" oder None."""
    cell = cell_from_raw(value)
    return _DATE_CONVERTERS[cell.kind](cell)


def normalize_time(value: Any) -> Optional[str]:
    """Zellwert -> "HH:MM" oder None."""
    cell = cell_from_raw(value)
    return _TIME_CONVERTERS[cell.kind](cell)
