from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class ColumnAliases(BaseModel):
    """
    Abbildung der kanonischen Felder auf akzeptierte Spaltenüberschriften.
    Die Reihenfolge ist die Suchreihenfolge; der erste vorhandene, nicht leere
    Wert gewinnt. Der nackte Spaltenbuchstabe (A..G) dient als letzter Fallback
    für Spalten ohne Überschrift.
    """
    date: List[str] = ["Data", "data", "DATE", "Data do Ponto", "A"]
    check_in: List[str] = ["Entrada", "entrada", "CHECK_IN", "Horário Entrada", "B"]
    lunch_out: List[str] = ["Saída Almoço", "saida_almoco", "LUNCH_OUT", "Saída para Almoço", "C"]
    lunch_in: List[str] = ["Volta Almoço", "volta_almoco", "LUNCH_IN", "Volta do Almoço", "D"]
    check_out: List[str] = ["Saída", "saida", "CHECK_OUT", "Horário Saída", "E"]
    contractual_hours: List[str] = [
        "Horas Contratuais",
        "horas_contratuais",
        "CONTRACTUAL_HOURS",
        "Carga Horária",
        "F",
    ]
    notes: List[str] = ["Observações", "observacoes", "NOTES", "Obs", "G"]

    @field_validator("*")
    @classmethod
    def not_empty(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("Mindestens ein Spaltenname pro Feld ist Pflicht.")
        return v

    @classmethod
    def from_config(cls, cfg: Dict[str, List[str]]) -> "ColumnAliases":
        """
        Übernimmt nur die in der Config gesetzten Felder, der Rest bleibt Default.
        """
        return cls(**{field: names for field, names in (cfg or {}).items() if names})


class ImportsConfig(BaseModel):
    """
    Einstellungen für den Tabellen-Import.
    - use_settings_default: Fehlende Vertragsstunden mit dem konfigurierten
      Standard (WorkSettings) statt dem festen Wert 8 auffüllen.
    - column_aliases: Spaltenüberschriften je Feld.
    """
    use_settings_default: bool = True
    column_aliases: ColumnAliases = Field(default_factory=ColumnAliases)
