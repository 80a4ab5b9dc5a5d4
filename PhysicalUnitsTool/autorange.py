"""
Auto-ranging: pick the display unit that puts a magnitude closest to a
preferred decimal window.

Scoring uses an explicit (bin x policy) table rather than a formula; several
cells are policy specific. Values inside the policy's window score positive
(bigger is better, so the full window is used); values outside score negative,
with too-large values divided down by their distance from the window and all
sub-1 values (outside the [0.1, 1) policy) scoring -|x| so the smallest wins.

Selection is a running max over the origin unit followed by the candidates in
caller order; ties keep the first unit that reached the maximum.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import logging
import math

from . import formulas as F
from . import settings as CFG
from .errors import InternalInconsistencyError, InvalidArgumentError
from .units import Unit, convert_to_unit

logger = logging.getLogger(__name__)


class AutoRangeBin(Enum):
    """Half-open absolute-magnitude intervals [range_min, range_max), top bin first."""

    INTERVAL_1000_POS_INFTY = (1000.0, math.inf)
    INTERVAL_100_1000 = (100.0, 1000.0)
    INTERVAL_10_100 = (10.0, 100.0)
    INTERVAL_1_10 = (1.0, 10.0)
    INTERVAL_0p1_1 = (0.1, 1.0)
    INTERVAL_0p01_0p1 = (0.01, 0.1)
    INTERVAL_0p001_0p01 = (0.001, 0.01)
    INTERVAL_ZERO_0p001 = (0.0, 0.001)

    @property
    def range_min(self) -> float:
        return self.value[0]

    @property
    def range_max(self) -> float:
        return self.value[1]

    def contains(self, x: float) -> bool:
        x = abs(x)
        # top bin is unbounded, so +inf belongs to it
        return x >= self.range_min and (x < self.range_max or self.range_max == math.inf)

    @classmethod
    def of(cls, x: float) -> "AutoRangeBin":
        """Bin of abs(x). NaN has no bin."""
        if math.isnan(x):
            raise InvalidArgumentError("NaN has no auto-range bin")
        for b in cls:
            if b.contains(x):
                return b
        raise InternalInconsistencyError(f"No auto-range bin covers {x!r}")


class AutoRangePolicy(Enum):
    """Preferred decimal window: (preferred decimal point index, window_min, window_max)."""

    PREFER_1_1000 = (2, 1.0, 1000.0)
    PREFER_1_100 = (1, 1.0, 100.0)
    PREFER_1_10 = (0, 1.0, 10.0)
    PREFER_0p1_1 = (0, 0.1, 1.0)

    @property
    def preferred_decimal_point_index(self) -> int:
        return self.value[0]

    @property
    def window(self) -> Tuple[float, float]:
        return self.value[1], self.value[2]

    def in_window(self, magnitude: float) -> bool:
        lo, hi = self.window
        return lo <= abs(magnitude) < hi


_P = AutoRangePolicy
_B = AutoRangeBin

# score = sign * |x| / divisor
SCORE_TABLE: Dict[AutoRangeBin, Dict[AutoRangePolicy, Tuple[int, float]]] = {
    _B.INTERVAL_1000_POS_INFTY: {
        _P.PREFER_1_1000: (-1, 1000.0),
        _P.PREFER_1_100: (-1, 100.0),
        _P.PREFER_1_10: (-1, 10.0),
        _P.PREFER_0p1_1: (-1, 1.0),
    },
    _B.INTERVAL_100_1000: {
        _P.PREFER_1_1000: (+1, 1.0),
        _P.PREFER_1_100: (-1, 100.0),
        _P.PREFER_1_10: (-1, 10.0),
        _P.PREFER_0p1_1: (-1, 1.0),
    },
    _B.INTERVAL_10_100: {
        _P.PREFER_1_1000: (+1, 10.0),
        _P.PREFER_1_100: (+1, 1.0),
        _P.PREFER_1_10: (-1, 10.0),
        _P.PREFER_0p1_1: (-1, 1.0),
    },
    _B.INTERVAL_1_10: {
        _P.PREFER_1_1000: (+1, 100.0),
        _P.PREFER_1_100: (+1, 10.0),
        _P.PREFER_1_10: (+1, 1.0),
        _P.PREFER_0p1_1: (-1, 1.0),
    },
    _B.INTERVAL_0p1_1: {
        _P.PREFER_1_1000: (-1, 1.0),
        _P.PREFER_1_100: (-1, 1.0),
        _P.PREFER_1_10: (-1, 1.0),
        _P.PREFER_0p1_1: (+1, 1.0),
    },
    # too small for every policy
    _B.INTERVAL_0p01_0p1: {p: (-1, 1.0) for p in _P},
    _B.INTERVAL_0p001_0p01: {p: (-1, 1.0) for p in _P},
    _B.INTERVAL_ZERO_0p001: {p: (-1, 1.0) for p in _P},
}


def score_magnitude(policy: AutoRangePolicy, magnitude: float) -> float:
    """Score |magnitude| under policy; higher is better. NaN scores -inf."""
    if policy is None:
        raise InvalidArgumentError("policy is required")
    if not isinstance(policy, AutoRangePolicy):
        raise InvalidArgumentError(f"policy must be an AutoRangePolicy, got {type(policy).__name__}")
    if math.isnan(magnitude):
        return -math.inf
    x = abs(magnitude)
    b = AutoRangeBin.of(x)
    try:
        sign, divisor = SCORE_TABLE[b][policy]
    except KeyError:
        raise InternalInconsistencyError(f"SCORE_TABLE has no cell for {b.name} x {policy.name}") from None
    return sign * x / divisor


@dataclass(frozen=True)
class CandidateScore:
    unit: Unit
    magnitude: float
    score: float
    kept: bool  # survived the running-max filter when it was scored


def _prepared(magnitude: float, round_magnitude: bool) -> float:
    if round_magnitude:
        return F.round_significant(magnitude, CFG.ROUND_SIGNIFICANT_DIGITS)
    return magnitude


def score_candidates(policy: AutoRangePolicy, magnitude: float, from_unit: Unit,
                     to_units: Optional[Iterable[Unit]], strict_property: bool = False,
                     round_magnitude: bool = False) -> List[CandidateScore]:
    """Evaluate the origin and every eligible candidate, in evaluation order.

    The origin unit is always first. Candidates equal to the origin, and with
    strict_property those of another base property, are skipped. A non-strict
    candidate whose property cannot be converted raises InvalidArgumentError.
    """
    if policy is None:
        raise InvalidArgumentError("policy is required")
    if from_unit is None:
        raise InvalidArgumentError("from_unit is required")
    if not isinstance(from_unit, Unit):
        raise InvalidArgumentError(f"from_unit must be a Unit, got {type(from_unit).__name__}")

    base = _prepared(magnitude, round_magnitude)
    best = score_magnitude(policy, base)
    out = [CandidateScore(from_unit, base, best, True)]
    for to_unit in (to_units or ()):
        if to_unit is from_unit:
            continue
        if not isinstance(to_unit, Unit):
            raise InvalidArgumentError(f"candidate must be a Unit, got {type(to_unit).__name__}")
        if strict_property and to_unit.base_property is not from_unit.base_property:
            continue
        value = _prepared(convert_to_unit(magnitude, from_unit, to_unit), round_magnitude)
        score = score_magnitude(policy, value)
        kept = not score < best
        if score > best:
            best = score
        logger.debug("auto-range %s: %r %s -> score %r%s", policy.name, value, to_unit, score, "" if kept else " (pruned)")
        out.append(CandidateScore(to_unit, value, score, kept))
    return out


def auto_range(policy: AutoRangePolicy, magnitude: float, from_unit: Unit,
               to_units: Optional[Iterable[Unit]], strict_property: bool = False,
               round_magnitude: bool = False) -> Unit:
    """Return the unit (origin or candidate) whose magnitude scores best under policy.

    Ties go to the earliest unit: the origin if it ties the maximum, else the
    first candidate in caller order. An empty or None candidate set returns
    from_unit. The converted magnitude is not returned; re-convert if needed.
    """
    if policy is None:
        raise InvalidArgumentError("policy is required")
    if from_unit is None:
        raise InvalidArgumentError("from_unit is required")
    if not to_units:
        return from_unit
    scored = score_candidates(policy, magnitude, from_unit, to_units, strict_property, round_magnitude)
    # the origin is always scored first
    winner = scored[0]
    for c in scored[1:]:
        if c.score > winner.score:
            winner = c
    logger.debug("auto-range %s: %r %s -> %s", policy.name, magnitude, from_unit, winner.unit)
    return winner.unit
