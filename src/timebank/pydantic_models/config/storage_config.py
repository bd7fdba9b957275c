from pydantic import BaseModel


class StorageConfig(BaseModel):
    """
    Dateinamen der beiden dauerhaften Slots ("entries" und "settings").
    Die Dateien liegen im lokalen Datenverzeichnis (structure.local_data_path).
    """
    entries_file: str = "timebank_entries.json"
    settings_file: str = "timebank_settings.json"
