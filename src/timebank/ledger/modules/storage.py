import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from loguru import logger

from timebank.shared_modules.utils import ensure_dir

ENTRIES_SLOT = "entries"
SETTINGS_SLOT = "settings"
SLOTS = (ENTRIES_SLOT, SETTINGS_SLOT)


class LedgerStorage(Protocol):
    """
    Dauerhafter Speicher mit zwei Slots ("entries", "settings").
    Jeder save überschreibt den kompletten Snapshot des Slots.
    """

    def load(self, slot: str) -> Optional[Any]:
        ...

    def save(self, slot: str, snapshot: Any) -> None:
        ...


def _check_slot(slot: str) -> None:
    if slot not in SLOTS:
        raise KeyError(f"Unbekannter Speicher-Slot: {slot}")


class MemoryStorage:
    """Flüchtiger Speicher, z. B. für Tests oder eine eingebettete Nutzung ohne Dateien."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._slots: Dict[str, Any] = {}
        for slot, snapshot in (initial or {}).items():
            self.save(slot, snapshot)

    def load(self, slot: str) -> Optional[Any]:
        _check_slot(slot)
        raw = self._slots.get(slot)
        return json.loads(raw) if raw is not None else None

    def save(self, slot: str, snapshot: Any) -> None:
        _check_slot(slot)
        # Kopie als JSON-Text, unabhängig vom Objekt des Aufrufers
        self._slots[slot] = json.dumps(snapshot)


class JsonFileStorage:
    """
    Eine JSON-Datei pro Slot im Datenverzeichnis.
    Fehlende oder beschädigte Dateien gelten als leer (None).
    """

    def __init__(
        self,
        directory: Path,
        entries_file: str = "timebank_entries.json",
        settings_file: str = "timebank_settings.json",
    ):
        self.directory = ensure_dir(Path(directory))
        self.files: Dict[str, Path] = {
            ENTRIES_SLOT: self.directory / entries_file,
            SETTINGS_SLOT: self.directory / settings_file,
        }

    def load(self, slot: str) -> Optional[Any]:
        _check_slot(slot)
        path = self.files[slot]
        if not path.exists():
            logger.debug(f"Slot '{slot}' noch nicht vorhanden: {path}")
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning(f"Slot '{slot}' nicht lesbar ({path}), wird ignoriert: {exc}")
            return None

    def save(self, slot: str, snapshot: Any) -> None:
        """
        Schreibt in eine temporäre Datei im selben Verzeichnis und ersetzt dann das Ziel atomar.
        """
        _check_slot(slot)
        path = self.files[slot]
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{slot}-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(snapshot, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except Exception:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise
        logger.debug(f"Slot '{slot}' gespeichert: {path}")
