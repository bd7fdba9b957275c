"""
Reine Zeitarithmetik auf kanonischen Werten (HH:MM, YYYY-MM-DD).
Eingaben werden hier nicht mehr validiert; das geschieht beim Import bzw. im TimeEntryDraft.
"""

import math
import re
from datetime import datetime
from typing import Optional

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_to_minutes(value: str) -> int:
    """
    "HH:MM" -> Minuten seit Mitternacht.

    Raises:
        ValueError: Wenn value nicht dem Muster H:MM/HH:MM entspricht.
    """
    match = _HHMM_RE.match(value or "")
    if not match:
        raise ValueError(f"Ungültige Uhrzeit: {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def compute_worked_hours(
    check_in: str,
    check_out: str,
    lunch_out: Optional[str] = None,
    lunch_in: Optional[str] = None,
) -> float:
    """
    Gearbeitete Stunden = (Ende - Beginn) - Mittagspause, nie negativ.
    Die Pause wird nur abgezogen, wenn beide Zeiten vorliegen.
    Schichten über Mitternacht werden nicht abgebildet und ergeben 0.
    """
    total = parse_time_to_minutes(check_out) - parse_time_to_minutes(check_in)
    if lunch_out and lunch_in:
        total -= parse_time_to_minutes(lunch_in) - parse_time_to_minutes(lunch_out)
    return max(0, total) / 60


def compute_balance(worked_hours: float, contractual_hours: float) -> float:
    return worked_hours - contractual_hours


def format_hours(hours: float) -> str:
    """
    Dezimalstunden -> "HH:MM", negative Werte mit "-" (z. B. -1.25 -> "-01:15").
    Auf 60 gerundete Minuten werden in die volle Stunde übertragen.
    """
    magnitude = abs(hours)
    h = math.floor(magnitude)
    m = round((magnitude - h) * 60)
    if m == 60:
        h, m = h + 1, 0
    formatted = f"{h:02d}:{m:02d}"
    # kein "-00:00" für winzige negative Reste
    return f"-{formatted}" if hours < 0 and (h or m) else formatted


def format_date(value: str) -> str:
    """"YYYY-MM-DD" -> "DD/MM/YYYY" (Anzeigeformat pt-BR)."""
    return datetime.strptime(value, "%Y-%m-%d").strftime("%d/%m/%Y")
