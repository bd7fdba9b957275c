from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from loguru import logger

from timebank.data_imports.modules.spreadsheet_importer import SpreadsheetImporter
from timebank.data_imports.modules.template_export import write_template
from timebank.ledger.modules.ledger import Ledger
from timebank.ledger.modules.storage import JsonFileStorage, LedgerStorage
from timebank.ledger.modules.time_calculations import format_hours
from timebank.pydantic_models.data.import_result import ImportResult
from timebank.pydantic_models.data.work_settings import DEFAULT_CONTRACTUAL_HOURS
from timebank.shared_modules.config import Config


class TimeBank:
    """
    Verbindet Config, Speicher, Ledger und Import.
    Der Import läuft in zwei Schritten: read_import() liefert den Bericht zur Durchsicht,
    erst confirm_import() übernimmt die gültigen Einträge ins Ledger.
    """

    def __init__(self, config: Config, storage: Optional[LedgerStorage] = None):
        self.config = config
        self.storage = storage or JsonFileStorage(
            config.data_dir,
            entries_file=config.storage.entries_file,
            settings_file=config.storage.settings_file,
        )
        self.ledger = Ledger(self.storage, default_settings=config.work_settings).load()

    def importer(self) -> SpreadsheetImporter:
        """
        Importer mit den konfigurierten Spaltennamen. Leere Vertragsstunden werden
        je nach imports.use_settings_default mit dem aktuellen Standard oder mit 8 belegt.
        """
        default_hours = (
            self.ledger.settings.default_contractual_hours
            if self.config.imports.use_settings_default
            else DEFAULT_CONTRACTUAL_HOURS
        )
        return SpreadsheetImporter(
            aliases=self.config.imports.column_aliases,
            default_contractual_hours=default_hours,
        )

    def read_import(self, source: Union[str, Path, bytes], filename: Optional[str] = None) -> ImportResult:
        """Liest eine Datei (Pfad oder Bytes) ohne etwas zu übernehmen."""
        if isinstance(source, bytes):
            return self.importer().import_bytes(source, filename=filename)
        return self.importer().import_file(source)

    def confirm_import(self, result: ImportResult) -> int:
        """Übernimmt die geprüften Entwürfe; Tage, die schon erfasst sind, werden übersprungen."""
        if not result.entries:
            logger.info("Keine gültigen Einträge zum Übernehmen.")
            return 0
        return self.ledger.bulk_import(result.entries)

    def write_template(self, target_dir: Optional[Path] = None) -> Path:
        return write_template(target_dir or self.config.output_dir)


def main() -> None:
    """
    Einstiegspunkt:
    - Lädt zentrale Config (Pydantic-validiert), setzt Logging.
    - Lädt das Ledger und protokolliert den aktuellen Saldo.
    """
    config_path = Path(__file__).parents[2] / ".config" / "timebank_config.yaml"
    config = Config(config_path)
    bank = TimeBank(config)
    summary = bank.ledger.summary()
    logger.info(
        f"{summary.days_worked} Tage erfasst, Saldo {format_hours(summary.total_balance)}, "
        f"gearbeitet {format_hours(summary.total_worked_hours)} "
        f"(Ø {format_hours(summary.average_worked_hours)})."
    )


if __name__ == "__main__":
    main()
