from __future__ import annotations

import math
import numbers
from datetime import date, datetime, time
from typing import Annotated, Any, Callable, Dict, Literal, Union

from pydantic import BaseModel, Field


class EmptyCell(BaseModel):
    kind: Literal["empty"] = "empty"


class TextCell(BaseModel):
    kind: Literal["text"] = "text"
    value: str


class NumberCell(BaseModel):
    kind: Literal["number"] = "number"
    value: float


class DateCell(BaseModel):
    """
    Nativer Datums-/Zeitwert, wie ihn openpyxl für formatierte Zellen liefert.
    """
    kind: Literal["date"] = "date"
    value: Union[datetime, date, time]


Cell = Annotated[
    Union[EmptyCell, TextCell, NumberCell, DateCell],
    Field(discriminator="kind"),
]


def _from_number(v: Any) -> Cell:
    try:
        v = float(v)
    except OverflowError:
        # ganze Zahl außerhalb des float-Bereichs
        return TextCell(value=str(v))
    if math.isnan(v) or math.isinf(v):
        return EmptyCell()
    return NumberCell(value=v)


def _from_text(v: str) -> Cell:
    return TextCell(value=v) if v.strip() else EmptyCell()


_CELL_CONVERTERS: Dict[type, Callable[[Any], Cell]] = {
    type(None): lambda _v: EmptyCell(),
    bool: lambda v: TextCell(value=str(v)),
    int: _from_number,
    float: _from_number,
    str: _from_text,
    datetime: lambda v: DateCell(value=v),
    date: lambda v: DateCell(value=v),
    time: lambda v: DateCell(value=v),
}


def cell_from_raw(value: Any) -> Cell:
    """
    Ordnet einen rohen Zellwert genau einer Zellart zu.
    Unbekannte Typen (z. B. numpy-Zahlen, pandas.Timestamp) werden über ihre
    Basisklasse zugeordnet, alles andere als Text behandelt.
    """
    conv = _CELL_CONVERTERS.get(type(value))
    if conv:
        return conv(value)
    if isinstance(value, (datetime, date, time)):
        return DateCell(value=value)
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return _from_number(value)
    return _from_text(str(value))


def is_blank(value: Any) -> bool:
    """True für None, NaN und reine Leerzeichen-Strings."""
    return isinstance(cell_from_raw(value), EmptyCell)
