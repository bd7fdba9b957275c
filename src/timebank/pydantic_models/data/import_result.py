from typing import List, Optional

from pydantic import BaseModel, Field

from timebank.pydantic_models.data.time_entry import TimeEntryDraft


class RowValidationResult(BaseModel):
    """
    Ergebnis der Prüfung einer einzelnen Datenzeile.
    data ist nur bei gültigen Zeilen gesetzt.
    """
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    data: Optional[TimeEntryDraft] = None


class ImportResult(BaseModel):
    """
    Bericht eines Importversuchs. Die Einträge sind noch Entwürfe und werden
    erst nach ausdrücklicher Bestätigung ins Ledger übernommen.
    """
    success: bool
    entries: List[TimeEntryDraft] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    total_rows: int = 0
    valid_rows: int = 0

    @classmethod
    def failure(cls, message: str) -> "ImportResult":
        """
        Struktureller Fehler: genau eine Meldung, keine Zeilen, keine Einträge.
        """
        return cls(success=False, errors=[message])
