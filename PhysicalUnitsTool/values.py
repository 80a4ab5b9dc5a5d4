"""
PhysicalValue: a magnitude paired with a Unit.

Thin convenience over units.convert_to_unit and autorange.auto_range; the
auto-range defaults (policy, strictness, rounding) are read from settings at
call time.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from . import settings as CFG
from .autorange import AutoRangePolicy, auto_range
from .errors import InvalidArgumentError
from .units import Unit, convert_to_unit, prefix_units_of


@dataclass(frozen=True)
class PhysicalValue:
    magnitude: float
    unit: Unit

    def __post_init__(self):
        if not isinstance(self.unit, Unit):
            raise InvalidArgumentError(f"unit must be a Unit, got {type(self.unit).__name__}")

    def convert_to(self, unit: Unit) -> "PhysicalValue":
        return PhysicalValue(convert_to_unit(self.magnitude, self.unit, unit), unit)

    def si_value(self) -> float:
        """Magnitude in the SI anchor unit of this value's base property."""
        return self.unit.to_si(self.magnitude)

    def auto_ranged(self, policy: Optional[AutoRangePolicy] = None,
                    candidates: Optional[Iterable[Unit]] = None,
                    strict_property: Optional[bool] = None,
                    round_magnitude: Optional[bool] = None) -> "PhysicalValue":
        """Re-express in the best-scoring unit; candidates default to the prefix units of this property."""
        if policy is None:
            policy = AutoRangePolicy[CFG.DEFAULT_POLICY]
        if candidates is None:
            candidates = prefix_units_of(self.unit.base_property)
        if strict_property is None:
            strict_property = CFG.STRICT_PROPERTY
        if round_magnitude is None:
            round_magnitude = CFG.ROUND_MAGNITUDE
        best = auto_range(policy, self.magnitude, self.unit, list(candidates), strict_property, round_magnitude)
        return self.convert_to(best)

    def __str__(self) -> str:
        if not self.unit.symbol:
            return f"{self.magnitude:g}"
        return f"{self.magnitude:g} {self.unit.symbol}"
