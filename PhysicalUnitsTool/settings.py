"""
Centralized auto-range defaults.

These are intentionally mutable module-level knobs; helpers read them at call
time, so set_autorange_defaults() takes effect immediately for PhysicalValue,
the API and the CLI. The core functions in autorange.py always take explicit
arguments and only use ROUND_SIGNIFICANT_DIGITS from here.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .errors import InvalidArgumentError

# --- Auto-range policy used when a caller does not name one ---
# Engineering notation: prefer magnitudes in [1, 1000).
DEFAULT_POLICY: str = "PREFER_1_1000"

# Restrict candidates to the originating unit's base property (no s -> Hz jumps).
STRICT_PROPERTY: bool = True

# Significant digits kept when auto_range(round_magnitude=True) scores a value.
# 12 digits absorbs conversion noise like 999.9999999999999 (1 kV -> V chain).
ROUND_SIGNIFICANT_DIGITS: int = 12

# Apply rounding by default in PhysicalValue.auto_ranged()
ROUND_MAGNITUDE: bool = True


def set_autorange_defaults(*, policy: Optional[str] = None, strict_property: Optional[bool] = None,
                           round_magnitude: Optional[bool] = None,
                           round_significant_digits: Optional[int] = None) -> None:
	"""Override auto-range defaults. Safe for tests; pass only what changes."""
	global DEFAULT_POLICY, STRICT_PROPERTY, ROUND_MAGNITUDE, ROUND_SIGNIFICANT_DIGITS
	if policy is not None:
		from .autorange import AutoRangePolicy
		if policy not in AutoRangePolicy.__members__:
			raise InvalidArgumentError(f"Unknown auto-range policy: {policy!r}")
		DEFAULT_POLICY = policy
	if strict_property is not None:
		STRICT_PROPERTY = bool(strict_property)
	if round_magnitude is not None:
		ROUND_MAGNITUDE = bool(round_magnitude)
	if round_significant_digits is not None:
		if not 1 <= int(round_significant_digits) <= 17:
			raise InvalidArgumentError("round_significant_digits must be in 1..17")
		ROUND_SIGNIFICANT_DIGITS = int(round_significant_digits)


def get_autorange_defaults() -> Dict[str, Any]:
	return {
		"policy": DEFAULT_POLICY,
		"strict_property": STRICT_PROPERTY,
		"round_magnitude": ROUND_MAGNITUDE,
		"round_significant_digits": ROUND_SIGNIFICANT_DIGITS,
	}
