import sys
from pathlib import Path
from typing import Any, Dict, Optional, Type

import yaml
from loguru import logger
from pydantic import BaseModel

from timebank.pydantic_models.config.imports_config import ColumnAliases, ImportsConfig
from timebank.pydantic_models.config.logging_config import LoggingConfig
from timebank.pydantic_models.config.storage_config import StorageConfig
from timebank.pydantic_models.config.structure_config import StructureConfig
from timebank.pydantic_models.data.work_settings import WorkSettings
from timebank.shared_modules.utils import ensure_dir


class Config:
    """
    Singleton für das Laden und Prüfen der Konfiguration.
    Nutzt statische Pydantic-Modelle für alle Abschnitte.
    Fehlende Abschnitte werden mit den Defaults der Modelle belegt.
    """

    _instance: Optional["Config"] = None

    def __new__(cls, config_path: Path):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Path):
        # Fallback-Logger für Fehler beim Laden der Config
        logger.remove()
        logger.add(sys.stderr, level="WARNING")
        self.config_path = Path(config_path)
        try:
            self.raw_config: Dict[str, Any] = self._load_config()
            self.logging = self._parse_section(self.raw_config, "logging", LoggingConfig)
            self._setup_logging()
            logger.debug(f"Lade Konfiguration von {config_path}")

            self.structure = self._parse_section(self.raw_config, "structure", StructureConfig)
            self.storage = self._parse_section(self.raw_config, "storage", StorageConfig)
            self.work_settings = self._parse_section(self.raw_config, "work_settings", WorkSettings)
            self.imports = self._parse_imports(self.raw_config.get("imports") or {})

            self._validate_structure_and_paths()
        except Exception as e:
            logger.error(f"Fehler beim Laden der Konfiguration: {e}")
            raise
        logger.debug("Konfiguration erfolgreich geladen und validiert.")
        self._initialized = True

    def _setup_logging(self) -> None:
        """
        Initialisiert loguru mit den Einstellungen aus der Config-Datei.
        """
        logger.remove()
        log_file = self.logging.log_file
        log_level = self.logging.log_level or "INFO"
        if log_file:
            logger.add(log_file, level=log_level)
        logger.add(sys.stderr, level=log_level)

    def _load_config(self) -> Dict[str, Any]:
        """
        Lädt die YAML-Konfigurationsdatei. Eine leere Datei ergibt eine leere Config.
        """
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _parse_section(self, config: Dict[str, Any], section: str, model: Type[BaseModel]) -> Any:
        """
        Parst einen Abschnitt der Config mit dem passenden Pydantic-Modell.
        """
        data = config.get(section) or {}
        logger.debug(f"Parsiere Abschnitt '{section}': {data}")
        return model(**data)

    def _parse_imports(self, data: Dict[str, Any]) -> ImportsConfig:
        """
        Spalten-Aliase werden feldweise übernommen; nicht genannte Felder behalten die Defaults.
        """
        logger.debug(f"Parsiere Abschnitt 'imports': {data}")
        return ImportsConfig(
            use_settings_default=data.get("use_settings_default", True),
            column_aliases=ColumnAliases.from_config(data.get("column_aliases") or {}),
        )

    def _validate_structure_and_paths(self) -> None:
        """
        Prüft einmalig die Projektwurzel. Daten- und Ausgabeverzeichnis werden bei Bedarf angelegt.
        Ein relativer prj_root bezieht sich auf das Verzeichnis der Config-Datei.
        """
        prj_root = Path(self.structure.prj_root).expanduser()
        if not prj_root.is_absolute():
            prj_root = self.config_path.parent / prj_root
        prj_root = prj_root.resolve()
        if not prj_root.exists():
            logger.error(f"Projektwurzel existiert nicht: {prj_root}")
            raise FileNotFoundError(f"Projektwurzel nicht gefunden: {prj_root}")
        self.prj_root = prj_root

        if not self.storage.entries_file or not self.storage.settings_file:
            logger.error("storage.entries_file und storage.settings_file müssen gesetzt sein.")
            raise ValueError("storage.entries_file und storage.settings_file sind Pflicht.")
        if self.storage.entries_file == self.storage.settings_file:
            logger.error("storage.entries_file und storage.settings_file dürfen nicht identisch sein.")
            raise ValueError("Die beiden Speicher-Slots brauchen verschiedene Dateien.")

    @property
    def data_dir(self) -> Path:
        return ensure_dir(self.prj_root / (self.structure.local_data_path or "data"))

    @property
    def output_dir(self) -> Path:
        return ensure_dir(self.prj_root / (self.structure.output_path or "output"))

    def get(self, key: str, default: Any = None) -> Any:
        """
        Allgemeiner Getter für beliebige Felder (dot-notation für verschachtelte Felder).
        """
        parts = key.split(".")
        val = self.raw_config
        for part in parts:
            if isinstance(val, dict) and part in val:
                val = val[part]
            else:
                logger.debug(f"Feld '{key}' nicht gefunden, Rückgabe Default: {default}")
                return default
        return val
