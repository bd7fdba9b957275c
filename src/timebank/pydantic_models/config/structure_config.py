from typing import Optional
from pydantic import BaseModel

class StructureConfig(BaseModel):
    """
    Modell für die Struktur-Konfiguration des Projekts.

    Attribute:
        prj_root (str): Wurzelverzeichnis des Projekts (muss existieren).
        local_data_path (Optional[str]): Ablage der JSON-Slots relativ zu prj_root (Standard: "data").
        output_path (Optional[str]): Ausgabeverzeichnis, z. B. für die Import-Vorlage (Standard: "output").
    """
    prj_root: str = "."
    local_data_path: Optional[str] = "data"
    output_path: Optional[str] = "output"
