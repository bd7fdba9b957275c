from __future__ import annotations

import uuid
from typing import Any, Iterable, List, Optional

from loguru import logger
from pydantic import ValidationError

from timebank.ledger.modules.storage import ENTRIES_SLOT, SETTINGS_SLOT, LedgerStorage
from timebank.ledger.modules.summary import summarize
from timebank.ledger.modules.time_calculations import compute_balance, compute_worked_hours
from timebank.pydantic_models.data.time_bank_summary import TimeBankSummary
from timebank.pydantic_models.data.time_entry import TimeEntry, TimeEntryDraft
from timebank.pydantic_models.data.work_settings import WorkSettings
from timebank.shared_modules.utils import log_exceptions


def _new_id() -> str:
    return uuid.uuid4().hex


def _sorted(entries: Iterable[TimeEntry]) -> List[TimeEntry]:
    # ISO-Datum sortiert lexikographisch korrekt
    return sorted(entries, key=lambda e: e.date, reverse=True)


def build_entry(draft: TimeEntryDraft, entry_id: Optional[str] = None) -> TimeEntry:
    """
    Ergänzt einen Entwurf um ID, gearbeitete Stunden und Saldo.
    """
    worked = compute_worked_hours(draft.check_in, draft.check_out, draft.lunch_out, draft.lunch_in)
    # nur die Entwurfsfelder, auch wenn ein bestehender TimeEntry übergeben wird
    return TimeEntry(
        **draft.model_dump(include=set(TimeEntryDraft.model_fields)),
        id=entry_id or _new_id(),
        worked_hours=worked,
        balance=compute_balance(worked, draft.contractual_hours),
    )


class Ledger:
    """
    Hält die Einträge und Einstellungen einer Person und ist die einzige Stelle,
    an der sie verändert werden. Nach jeder Änderung wird der betroffene Slot
    komplett in den Speicher geschrieben.

    Vor der ersten Änderung muss load() aufgerufen werden.
    """

    def __init__(self, storage: LedgerStorage, default_settings: Optional[WorkSettings] = None):
        self.storage = storage
        self.default_settings = default_settings or WorkSettings()
        self._entries: List[TimeEntry] = []
        self._settings: WorkSettings = self.default_settings.model_copy()
        self._loaded = False

    # --------------------------------------------------------------------- #
    # Laden / Speichern
    # --------------------------------------------------------------------- #

    def load(self) -> "Ledger":
        """
        Lädt beide Slots. Beschädigte Daten werden verworfen (leere Liste bzw. Default-Einstellungen).
        """
        self._entries = _sorted(self._parse_entries(self.storage.load(ENTRIES_SLOT)))
        self._settings = self._parse_settings(self.storage.load(SETTINGS_SLOT))
        self._loaded = True
        logger.info(f"Ledger geladen: {len(self._entries)} Einträge.")
        return self

    def _parse_entries(self, raw: Any) -> List[TimeEntry]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning(f"Gespeicherte Einträge haben ein unerwartetes Format ({type(raw).__name__}), starte leer.")
            return []
        entries: List[TimeEntry] = []
        for idx, item in enumerate(raw):
            try:
                entries.append(TimeEntry.model_validate(item))
            except ValidationError as exc:
                logger.warning(f"Gespeicherter Eintrag {idx} ungültig, wird übersprungen: {exc}")
        return entries

    def _parse_settings(self, raw: Any) -> WorkSettings:
        if raw is None:
            return self.default_settings.model_copy()
        try:
            return WorkSettings.model_validate(raw)
        except ValidationError as exc:
            logger.warning(f"Gespeicherte Einstellungen ungültig, verwende Defaults: {exc}")
            return self.default_settings.model_copy()

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError("Ledger ist nicht geladen, zuerst load() aufrufen.")

    def _persist_entries(self) -> None:
        with log_exceptions("Fehler beim Speichern der Einträge"):
            self.storage.save(ENTRIES_SLOT, [e.model_dump() for e in self._entries])

    def _persist_settings(self) -> None:
        with log_exceptions("Fehler beim Speichern der Einstellungen"):
            self.storage.save(SETTINGS_SLOT, self._settings.model_dump())

    # --------------------------------------------------------------------- #
    # Lesen
    # --------------------------------------------------------------------- #

    @property
    def entries(self) -> List[TimeEntry]:
        """Alle Einträge, absteigend nach Datum."""
        return list(self._entries)

    @property
    def settings(self) -> WorkSettings:
        return self._settings.model_copy()

    def summary(self) -> TimeBankSummary:
        return summarize(self._entries)

    def entries_for_date(self, date: str) -> List[TimeEntry]:
        return [e for e in self._entries if e.date == date]

    def get_entry(self, entry_id: str) -> Optional[TimeEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def new_draft(
        self,
        date: str,
        check_in: str = "09:00",
        check_out: str = "18:00",
        lunch_out: Optional[str] = None,
        lunch_in: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> TimeEntryDraft:
        """
        Entwurf für die manuelle Erfassung, vorbelegt mit den konfigurierten Vertragsstunden.
        """
        return TimeEntryDraft(
            date=date,
            check_in=check_in,
            check_out=check_out,
            lunch_out=lunch_out,
            lunch_in=lunch_in,
            contractual_hours=self._settings.default_contractual_hours,
            notes=notes,
        )

    # --------------------------------------------------------------------- #
    # Ändern
    # --------------------------------------------------------------------- #

    def create_entry(self, draft: TimeEntryDraft) -> TimeEntry:
        self._require_loaded()
        entry = build_entry(draft)
        self._entries = _sorted([entry] + self._entries)
        logger.debug(f"Eintrag {entry.id} für {entry.date} angelegt.")
        self._persist_entries()
        return entry

    def bulk_import(self, drafts: Iterable[TimeEntryDraft]) -> int:
        """
        Übernimmt importierte Entwürfe. Entwürfe, deren Datum bereits im Ledger
        existiert, werden verworfen; Duplikate innerhalb des Stapels bleiben erhalten.

        Returns:
            int: Anzahl tatsächlich eingefügter Einträge.
        """
        self._require_loaded()
        existing_dates = {e.date for e in self._entries}
        new_entries = [build_entry(d) for d in drafts if d.date not in existing_dates]
        if new_entries:
            self._entries = _sorted(new_entries + self._entries)
            self._persist_entries()
        logger.info(f"{len(new_entries)} Einträge importiert.")
        return len(new_entries)

    def update_entry(self, entry_id: str, draft: TimeEntryDraft) -> Optional[TimeEntry]:
        """
        Ersetzt die Felder eines Eintrags und berechnet Stunden und Saldo neu.
        Unbekannte IDs werden ignoriert (Rückgabe None).
        """
        self._require_loaded()
        for idx, entry in enumerate(self._entries):
            if entry.id == entry_id:
                updated = build_entry(draft, entry_id=entry_id)
                self._entries[idx] = updated
                self._entries = _sorted(self._entries)
                logger.debug(f"Eintrag {entry_id} aktualisiert.")
                self._persist_entries()
                return updated
        logger.debug(f"Eintrag {entry_id} nicht gefunden, keine Änderung.")
        return None

    def delete_entry(self, entry_id: str) -> bool:
        self._require_loaded()
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            logger.debug(f"Eintrag {entry_id} nicht gefunden, keine Änderung.")
            return False
        self._entries = remaining
        logger.debug(f"Eintrag {entry_id} gelöscht.")
        self._persist_entries()
        return True

    def update_settings(self, settings: WorkSettings) -> WorkSettings:
        self._require_loaded()
        self._settings = settings.model_copy()
        logger.info("Einstellungen aktualisiert.")
        self._persist_settings()
        return self.settings
