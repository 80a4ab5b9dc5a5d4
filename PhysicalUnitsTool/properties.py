"""
Base properties: the closed set of physical quantity kinds.

Each BaseProperty names exactly one SI anchor unit; every Unit of that kind
converts through the anchor's numeric value. Cross-kind conversions exist only
for declared pairs (currently time <-> frequency, by reciprocal).
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, NamedTuple, Tuple

from . import formulas as F
from .errors import InternalInconsistencyError, InvalidArgumentError

if TYPE_CHECKING:
    from .units import Unit


class BaseProperty(Enum):
    """A physical (scalar) property. The value is the name of its SI anchor in Unit."""

    NONE = "NONE"
    VOLTAGE = "V"
    CURRENT = "A"
    RESISTANCE = "Ohm"
    POWER = "W"
    TIME = "s"
    FREQUENCY = "Hz"
    CAPACITANCE = "F"
    INDUCTANCE = "H"
    TEMPERATURE = "K"
    ENERGY = "J"
    DISTANCE = "m"
    VELOCITY = "mps"

    @property
    def si_unit(self) -> "Unit":
        from .units import Unit
        return Unit[self.value]

    @property
    def symbol(self) -> str:
        return self.si_unit.symbol

    def __str__(self) -> str:
        return self.symbol


# --- Cross-kind conversion rules ---
# Declared as unordered pairs; both directions are registered from one rule so
# the compatibility relation stays symmetric.

class CrossKindRule(NamedTuple):
    a: BaseProperty
    b: BaseProperty
    a_to_b: Callable[[float], float]
    b_to_a: Callable[[float], float]


CROSS_KIND_RULES: Tuple[CrossKindRule, ...] = (
    CrossKindRule(BaseProperty.TIME, BaseProperty.FREQUENCY, F.reciprocal, F.reciprocal),
)


def _build_registry() -> Dict[BaseProperty, Dict[BaseProperty, Callable[[float], float]]]:
    registry: Dict[BaseProperty, Dict[BaseProperty, Callable[[float], float]]] = {p: {} for p in BaseProperty}
    for rule in CROSS_KIND_RULES:
        registry[rule.a][rule.b] = rule.a_to_b
        registry[rule.b][rule.a] = rule.b_to_a
    return registry


_CROSS_KIND: Dict[BaseProperty, Dict[BaseProperty, Callable[[float], float]]] = _build_registry()


def _require_property(p: object, name: str) -> BaseProperty:
    if p is None:
        raise InvalidArgumentError(f"{name} is required")
    if not isinstance(p, BaseProperty):
        raise InvalidArgumentError(f"{name} must be a BaseProperty, got {type(p).__name__}")
    return p


def _conversions_from(p: BaseProperty) -> Dict[BaseProperty, Callable[[float], float]]:
    try:
        return _CROSS_KIND[p]
    except KeyError:
        raise InternalInconsistencyError(f"BaseProperty {p.name} missing from cross-kind registry") from None


def can_convert(p1: BaseProperty, p2: BaseProperty) -> bool:
    """True if p1 and p2 are equal or a declared convertible pair (either order)."""
    _require_property(p1, "p1")
    _require_property(p2, "p2")
    if p1 is p2:
        return True
    return p2 in _conversions_from(p1)


def convert(magnitude: float, from_p: BaseProperty, to_p: BaseProperty) -> float:
    """Convert an SI-anchor magnitude of from_p into the SI-anchor magnitude of to_p.

    Time <-> frequency is 1/magnitude both ways; a zero magnitude gives a signed
    infinity rather than an error.
    """
    _require_property(from_p, "from_p")
    _require_property(to_p, "to_p")
    if from_p is to_p:
        return magnitude
    fn = _conversions_from(from_p).get(to_p)
    if fn is None:
        raise InvalidArgumentError(f"Cannot convert {from_p.name} to {to_p.name}")
    return fn(magnitude)


def convertible_properties(p: BaseProperty) -> Tuple[BaseProperty, ...]:
    """p itself followed by every property it converts to, in catalog order."""
    _require_property(p, "p")
    targets = _conversions_from(p)
    return (p,) + tuple(q for q in BaseProperty if q in targets)
