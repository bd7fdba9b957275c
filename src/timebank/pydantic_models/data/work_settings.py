from typing import List

from pydantic import BaseModel, Field

DEFAULT_CONTRACTUAL_HOURS = 8.0
DEFAULT_WORK_DAYS = ["monday", "tuesday", "wednesday", "thursday", "friday"]


class WorkSettings(BaseModel):
    """
    Prozessweite Einstellungen. Wird einmal geladen und bei Änderungen komplett ersetzt.
    lunch_break_minutes und work_days sind rein informativ und fließen nicht in die Berechnung ein.
    """
    default_contractual_hours: float = Field(default=DEFAULT_CONTRACTUAL_HOURS, ge=0, le=24)
    lunch_break_minutes: int = Field(default=60, ge=0)
    work_days: List[str] = Field(default_factory=lambda: list(DEFAULT_WORK_DAYS))
