"""
Lightweight parsers for quantities typed by hand or listed in text files.

Accepted forms: "4.5 mV", "4,5mV", "-1e-3 kOhm", "12" (dimensionless), "inf Hz",
"-infinity dBm", "nan W". The special words must stand alone ("infHz" is rejected).
Decimal commas and non-breaking spaces are normalized; the unit part goes
through Unit.from_symbol, so ASCII aliases like "uV" and "Ohm" work.
"""
from __future__ import annotations

from typing import List
import re

from .errors import InvalidArgumentError
from .units import Unit
from .values import PhysicalValue

# number (with optional decimal comma and exponent), then the unit remainder
_QUANTITY_RE = re.compile(r"^\s*([+-]?(?:\d+(?:[.,]\d*)?|[.,]\d+)(?:[eE][+-]?\d+)?|[+-]?inf(?:inity)?(?![a-z])|nan(?![a-z]))\s*(.*?)\s*$",
                          re.IGNORECASE)


def _norm_number(s: str) -> float:
    s_clean = s.strip().replace("\u00a0", "").replace(" ", "").replace(",", ".")
    try:
        return float(s_clean)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid numeric value: '{s}'") from e


def parse_quantity(text: str) -> PhysicalValue:
    if text is None:
        raise InvalidArgumentError("quantity text is required")
    m = _QUANTITY_RE.match(text.replace("\u00a0", " "))
    if not m:
        raise InvalidArgumentError(f"Malformed quantity: '{text}'")
    magnitude = _norm_number(m.group(1))
    unit_part = m.group(2)
    unit = Unit.from_symbol(unit_part) if unit_part else Unit.NONE
    return PhysicalValue(magnitude, unit)


def parse_quantity_lines(text: str) -> List[PhysicalValue]:
    """One quantity per line; blank lines and '#' comments are skipped."""
    out: List[PhysicalValue] = []
    for n, ln in enumerate(text.splitlines(), start=1):
        ln = ln.split("#", 1)[0].strip()
        if not ln:
            continue
        try:
            out.append(parse_quantity(ln))
        except InvalidArgumentError as e:
            raise InvalidArgumentError(f"line {n}: {e}") from e
    return out
