from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class TimeEntryDraft(BaseModel):
    """
    Fachliches Datenmodell für einen Arbeitstag ohne ID und abgeleitete Felder.
    Wird sowohl bei manueller Erfassung als auch beim Tabellen-Import erzeugt.
    Datum und Uhrzeiten liegen immer in kanonischer Form vor (YYYY-MM-DD, HH:MM).
    """
    date: str
    check_in: str
    check_out: str
    lunch_out: Optional[str] = None
    lunch_in: Optional[str] = None
    contractual_hours: float = Field(ge=0, le=24)
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def canonical_date(cls, v: str) -> str:
        # strptime akzeptiert auch "2024-1-5", daher zusätzlich die Länge prüfen
        try:
            valid = len(v) == 10 and datetime.strptime(v, "%Y-%m-%d") is not None
        except ValueError:
            valid = False
        if not valid:
            raise ValueError(f"Datum nicht im Format YYYY-MM-DD: {v!r}")
        return v

    @field_validator("lunch_out", "lunch_in", "notes", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        """
        Leere Strings aus Formularen gelten als nicht gesetzt.
        """
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("check_in", "check_out", "lunch_out", "lunch_in")
    @classmethod
    def canonical_time(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not _TIME_RE.match(v):
            raise ValueError(f"Uhrzeit nicht im Format HH:MM: {v!r}")
        return v

    @model_validator(mode="after")
    def lunch_pair(self) -> "TimeEntryDraft":
        """
        Mittagspause: entweder beide Zeiten oder keine.
        """
        if (self.lunch_out is None) != (self.lunch_in is None):
            raise ValueError("Saída e volta do almoço devem ser informadas juntas.")
        return self


class TimeEntry(TimeEntryDraft):
    """
    Gespeicherter Eintrag im Ledger. worked_hours und balance werden bei jeder
    Erstellung und jeder Änderung der Zeiten neu berechnet.
    """
    id: str
    worked_hours: float = Field(ge=0)
    balance: float
