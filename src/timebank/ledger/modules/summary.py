import math
from typing import Iterable

from timebank.pydantic_models.data.time_bank_summary import TimeBankSummary
from timebank.pydantic_models.data.time_entry import TimeEntry


def summarize(entries: Iterable[TimeEntry]) -> TimeBankSummary:
    """
    Summen und Tagesdurchschnitt über alle Einträge.
    fsum liefert exakt gerundete Summen und damit dasselbe Ergebnis für jede Reihenfolge.
    """
    items = list(entries)
    count = len(items)
    total_worked = math.fsum(e.worked_hours for e in items)
    return TimeBankSummary(
        total_balance=math.fsum(e.balance for e in items),
        total_worked_hours=total_worked,
        total_contractual_hours=math.fsum(e.contractual_hours for e in items),
        average_worked_hours=total_worked / count if count else 0.0,
        days_worked=count,
    )
