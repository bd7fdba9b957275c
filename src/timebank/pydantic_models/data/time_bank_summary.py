from pydantic import BaseModel


class TimeBankSummary(BaseModel):
    """
    Kennzahlen über alle Einträge. Wird bei jedem Lesen neu berechnet, nie gespeichert.
    """
    total_balance: float = 0.0
    total_worked_hours: float = 0.0
    total_contractual_hours: float = 0.0
    average_worked_hours: float = 0.0
    days_worked: int = 0
