import math

from .anchors import ANCHORS

# =============================
# SI pivot primitives
# =============================
# Every catalog unit converts to/from the numeric value of its base property's
# SI anchor through one of these pairs. Results follow IEEE-754: overflow and
# division by zero give signed infinities, never exceptions.

ZERO_CELSIUS_K: float = float(ANCHORS["ZERO_CELSIUS_K"])      # [K]
FAHRENHEIT_SLOPE: float = float(ANCHORS["FAHRENHEIT_SLOPE"])  # [K/F]
ZERO_FAHRENHEIT_F: float = float(ANCHORS["ZERO_FAHRENHEIT_F"])  # [F]
DBM_REF_W: float = float(ANCHORS["DBM_REF_W"])                # [W]

# K = F * slope + offset
FAHRENHEIT_OFFSET_K: float = ZERO_CELSIUS_K - ZERO_FAHRENHEIT_F * FAHRENHEIT_SLOPE


def scale_to_si(x: float, factor: float) -> float:
    """unit → SI anchor, pure scaling."""
    return factor * x

def scale_from_si(x: float, factor: float) -> float:
    """SI anchor → unit, pure scaling."""
    return x / factor

def affine_to_si(x: float, factor: float, offset: float) -> float:
    """unit → SI anchor for offset scales (°C, °F)."""
    return x * factor + offset

def affine_from_si(x: float, factor: float, offset: float) -> float:
    """SI anchor → unit for offset scales (°C, °F)."""
    return (x - offset) / factor

def dbm_to_w(p_dbm: float) -> float:
    """dBm → W."""
    try:
        return DBM_REF_W * math.pow(10.0, p_dbm / 10.0)
    except OverflowError:
        return math.inf

def w_to_dbm(p_w: float) -> float:
    """W → dBm. 0 W is -inf dBm; negative power has no dBm value (NaN)."""
    if math.isnan(p_w) or p_w < 0:
        return math.nan
    if p_w == 0:
        return -math.inf
    return 10.0 * math.log10(p_w / DBM_REF_W)

def reciprocal(x: float) -> float:
    """1/x with IEEE semantics: ±0 → ±inf."""
    if x == 0:
        return math.copysign(math.inf, x)
    return 1.0 / x

def round_significant(x: float, digits: int) -> float:
    """Round to `digits` significant digits; 0, inf and NaN pass through."""
    if x == 0 or not math.isfinite(x):
        return x
    return round(x, digits - 1 - int(math.floor(math.log10(abs(x)))))
