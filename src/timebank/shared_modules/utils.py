import re
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Generator, Optional

from loguru import logger
from openpyxl.utils.cell import get_column_letter


def safe_str(val) -> str:
    """
    Gibt immer einen String zurück, auch wenn val None oder numerisch ist.
    """
    return "" if val is None else str(val)


@contextmanager
def log_exceptions(msg: str, continue_on_error: bool = True) -> Generator[None, None, None]:
    """
    Context-Manager für das Logging von Ausnahmen.
    Loggt eine Fehlermeldung und entscheidet, ob die Exception weitergereicht wird.

    Args:
        msg (str): Nachricht für das Logging im Fehlerfall.
        continue_on_error (bool): Bei False wird die Exception erneut ausgelöst, ansonsten nur geloggt.

    Beispiel:
        with log_exceptions("Fehler beim Speichern der Einträge"):
            storage.save("entries", snapshot)
    """
    try:
        yield
    except Exception as e:
        logger.error(f"{msg}: {e}")
        if not continue_on_error:
            raise


_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def _parse_float_str(s: str) -> Optional[float]:
    # Dezimalkomma ("7,5") und Tausender-Apostroph tolerieren
    s = s.strip().replace("’", "").replace("'", "").replace(" ", "").replace(",", ".")
    if not _DECIMAL_RE.match(s):
        return None
    return float(s)


def _int_to_float(v: int) -> Optional[float]:
    try:
        return float(v)
    except OverflowError:
        return None


_FLOAT_CONVERTERS: Dict[type, Callable[[Any], Optional[float]]] = {
    type(None): lambda _v: None,
    int: _int_to_float,
    float: lambda v: float(v),
    str: _parse_float_str,
}


def to_float(v: Any) -> Optional[float]:
    """Typbasierte Zahl-Konvertierung (None/str/int/float -> float|None)."""
    conv = _FLOAT_CONVERTERS.get(type(v))
    return conv(v) if conv else None


def column_letter(index: int) -> str:
    """0-basierter Spaltenindex -> Excel-Spaltenbuchstabe (0 -> "A")."""
    return get_column_letter(index + 1)


def ensure_dir(path: Path) -> Path:
    """Erzeugt ein Verzeichnis (rekursiv), falls es fehlt, und gibt den Pfad zurück."""
    path.mkdir(parents=True, exist_ok=True)
    return path
