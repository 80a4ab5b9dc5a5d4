"""
Unit catalog and the pivot conversion engine.

The catalog is a closed Enum of unit identifiers plus a static props table
(UNIT_PROPS) giving each unit its BaseProperty, its conversion kind and
parameters, and its display symbol. Conversions always pivot through the
numeric value of the base property's SI anchor unit:

    same kind:   to.from_si(from.to_si(x))
    cross kind:  to.from_si(properties.convert(from.to_si(x), from_kind, to_kind))

Symbols use U+03BC (micro) and U+03A9 (ohm); keep those code points intact.
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Dict, NamedTuple, Optional, Tuple

from . import formulas as F
from . import properties as P
from .errors import InternalInconsistencyError, InvalidArgumentError
from .properties import BaseProperty

MU = "\u03bc"   # GREEK SMALL LETTER MU
OHM = "\u03a9"  # GREEK CAPITAL LETTER OMEGA


class ConversionKind(Enum):
    MULTIPLICATIVE = "multiplicative"  # x -> k*x
    AFFINE = "affine"                  # x -> k*x + offset
    CUSTOM = "custom"                  # explicit function pair (dBm)


class UnitProps(NamedTuple):
    base_property: BaseProperty
    kind: ConversionKind
    symbol: str
    factor: float = 1.0
    offset: float = 0.0
    custom_to_si: Optional[Callable[[float], float]] = None
    custom_from_si: Optional[Callable[[float], float]] = None


class Unit(Enum):
    """A physical (scalar) display unit. Attributes come from UNIT_PROPS."""

    # Dimensionless
    NONE = auto()

    # Voltage
    pV = auto()
    nV = auto()
    muV = auto()
    mV = auto()
    V = auto()
    kV = auto()

    # Current
    pA = auto()
    nA = auto()
    muA = auto()
    mA = auto()
    A = auto()
    kA = auto()

    # Resistance / impedance
    muOhm = auto()
    mOhm = auto()
    Ohm = auto()
    kOhm = auto()
    MOhm = auto()
    GOhm = auto()

    # Power
    aW = auto()
    fW = auto()
    pW = auto()
    nW = auto()
    muW = auto()
    mW = auto()
    W = auto()
    kW = auto()
    dBm = auto()

    # Time (interval)
    ps = auto()
    ns = auto()
    mus = auto()
    ms = auto()
    s = auto()
    ks = auto()
    Ms = auto()
    Gs = auto()

    # Frequency
    muHz = auto()
    mHz = auto()
    Hz = auto()
    kHz = auto()
    MHz = auto()
    GHz = auto()
    THz = auto()

    # Capacitance
    pF = auto()
    nF = auto()
    muF = auto()
    mF = auto()
    F = auto()
    kF = auto()
    MF = auto()

    # Inductance
    pH = auto()
    nH = auto()
    muH = auto()
    mH = auto()
    H = auto()
    kH = auto()
    MH = auto()

    # Temperature
    K = auto()
    C = auto()
    degF = auto()

    # Energy
    aJ = auto()
    fJ = auto()
    pJ = auto()
    nJ = auto()
    muJ = auto()
    mJ = auto()
    J = auto()
    kJ = auto()
    MJ = auto()
    GJ = auto()
    TJ = auto()
    PJ = auto()
    EJ = auto()

    # Distance
    am = auto()
    fm = auto()
    pm = auto()
    nm = auto()
    mum = auto()
    mm = auto()
    cm = auto()
    dm = auto()
    m = auto()
    dam = auto()
    hm = auto()
    km = auto()
    Mm = auto()
    Gm = auto()
    Tm = auto()
    Pm = auto()
    Em = auto()

    # Velocity
    amps = auto()
    fmps = auto()
    pmps = auto()
    nmps = auto()
    mumps = auto()
    mmps = auto()
    cmps = auto()
    dmps = auto()
    mps = auto()
    damps = auto()
    hmps = auto()
    kmps = auto()
    Mmps = auto()
    Gmps = auto()
    Tmps = auto()

    # --- Props ---

    @property
    def props(self) -> UnitProps:
        try:
            return UNIT_PROPS[self]
        except KeyError:
            raise InternalInconsistencyError(f"Unit {self.name} missing from UNIT_PROPS") from None

    @property
    def base_property(self) -> BaseProperty:
        return self.props.base_property

    @property
    def symbol(self) -> str:
        return self.props.symbol

    @property
    def is_si_unit(self) -> bool:
        return self.base_property.si_unit is self

    @property
    def is_multiplicative(self) -> bool:
        """True if to/from SI is pure scaling, i.e. linear interpolation in this unit is meaningful."""
        return self.props.kind is ConversionKind.MULTIPLICATIVE

    def __str__(self) -> str:
        return self.symbol

    # --- SI pivot ---

    def to_si(self, x: float) -> float:
        """Magnitude in this unit → magnitude in the base property's SI anchor unit."""
        p = self.props
        if p.kind is ConversionKind.MULTIPLICATIVE:
            return F.scale_to_si(x, p.factor)
        if p.kind is ConversionKind.AFFINE:
            return F.affine_to_si(x, p.factor, p.offset)
        if p.kind is ConversionKind.CUSTOM and p.custom_to_si is not None:
            return p.custom_to_si(x)
        raise InternalInconsistencyError(f"No to_si conversion for {self.name} ({p.kind})")

    def from_si(self, x: float) -> float:
        """Magnitude in the SI anchor unit → magnitude in this unit."""
        p = self.props
        if p.kind is ConversionKind.MULTIPLICATIVE:
            return F.scale_from_si(x, p.factor)
        if p.kind is ConversionKind.AFFINE:
            return F.affine_from_si(x, p.factor, p.offset)
        if p.kind is ConversionKind.CUSTOM and p.custom_from_si is not None:
            return p.custom_from_si(x)
        raise InternalInconsistencyError(f"No from_si conversion for {self.name} ({p.kind})")

    def convert(self, magnitude: float, to_unit: "Unit") -> float:
        return convert_to_unit(magnitude, self, to_unit)

    @classmethod
    def from_symbol(cls, text: str) -> "Unit":
        """Resolve a display symbol (or a common ASCII alias) to its Unit."""
        if text is None:
            raise InvalidArgumentError("unit symbol is required")
        key = str(text).strip().replace("\u00b5", MU).replace("\u2126", OHM)
        if key in _BY_SYMBOL:
            return _BY_SYMBOL[key]
        if key in _ALIASES:
            return _ALIASES[key]
        ascii_key = key
        if ascii_key.startswith("u") and len(ascii_key) > 1:
            ascii_key = MU + ascii_key[1:]
        for word in ("Ohm", "ohm"):
            if ascii_key.endswith(word):
                ascii_key = ascii_key[: -len(word)] + OHM
        if ascii_key in _BY_SYMBOL:
            return _BY_SYMBOL[ascii_key]
        raise InvalidArgumentError(f"Unknown unit symbol: {text!r}")


# --- Props table ---

def _mul(prop: BaseProperty, factor: float, symbol: str) -> UnitProps:
    return UnitProps(prop, ConversionKind.MULTIPLICATIVE, symbol, factor=factor)

def _affine(prop: BaseProperty, factor: float, offset: float, symbol: str) -> UnitProps:
    return UnitProps(prop, ConversionKind.AFFINE, symbol, factor=factor, offset=offset)

def _custom(prop: BaseProperty, to_si: Callable[[float], float], from_si: Callable[[float], float], symbol: str) -> UnitProps:
    return UnitProps(prop, ConversionKind.CUSTOM, symbol, custom_to_si=to_si, custom_from_si=from_si)


_BP = BaseProperty

UNIT_PROPS: Dict[Unit, UnitProps] = {
    Unit.NONE: _mul(_BP.NONE, 1, ""),

    Unit.pV: _mul(_BP.VOLTAGE, 1e-12, "pV"),
    Unit.nV: _mul(_BP.VOLTAGE, 1e-9, "nV"),
    Unit.muV: _mul(_BP.VOLTAGE, 1e-6, MU + "V"),
    Unit.mV: _mul(_BP.VOLTAGE, 1e-3, "mV"),
    Unit.V: _mul(_BP.VOLTAGE, 1, "V"),
    Unit.kV: _mul(_BP.VOLTAGE, 1e3, "kV"),

    Unit.pA: _mul(_BP.CURRENT, 1e-12, "pA"),
    Unit.nA: _mul(_BP.CURRENT, 1e-9, "nA"),
    Unit.muA: _mul(_BP.CURRENT, 1e-6, MU + "A"),
    Unit.mA: _mul(_BP.CURRENT, 1e-3, "mA"),
    Unit.A: _mul(_BP.CURRENT, 1, "A"),
    Unit.kA: _mul(_BP.CURRENT, 1e3, "kA"),

    Unit.muOhm: _mul(_BP.RESISTANCE, 1e-6, MU + OHM),
    Unit.mOhm: _mul(_BP.RESISTANCE, 1e-3, "m" + OHM),
    Unit.Ohm: _mul(_BP.RESISTANCE, 1, OHM),
    Unit.kOhm: _mul(_BP.RESISTANCE, 1e3, "k" + OHM),
    Unit.MOhm: _mul(_BP.RESISTANCE, 1e6, "M" + OHM),
    Unit.GOhm: _mul(_BP.RESISTANCE, 1e9, "G" + OHM),

    Unit.aW: _mul(_BP.POWER, 1e-18, "aW"),
    Unit.fW: _mul(_BP.POWER, 1e-15, "fW"),
    Unit.pW: _mul(_BP.POWER, 1e-12, "pW"),
    Unit.nW: _mul(_BP.POWER, 1e-9, "nW"),
    Unit.muW: _mul(_BP.POWER, 1e-6, MU + "W"),
    Unit.mW: _mul(_BP.POWER, 1e-3, "mW"),
    Unit.W: _mul(_BP.POWER, 1, "W"),
    Unit.kW: _mul(_BP.POWER, 1e3, "kW"),
    Unit.dBm: _custom(_BP.POWER, F.dbm_to_w, F.w_to_dbm, "dBm"),

    Unit.ps: _mul(_BP.TIME, 1e-12, "ps"),
    Unit.ns: _mul(_BP.TIME, 1e-9, "ns"),
    Unit.mus: _mul(_BP.TIME, 1e-6, MU + "s"),
    Unit.ms: _mul(_BP.TIME, 1e-3, "ms"),
    Unit.s: _mul(_BP.TIME, 1, "s"),
    Unit.ks: _mul(_BP.TIME, 1e3, "ks"),
    Unit.Ms: _mul(_BP.TIME, 1e6, "Ms"),
    Unit.Gs: _mul(_BP.TIME, 1e9, "Gs"),

    Unit.muHz: _mul(_BP.FREQUENCY, 1e-6, MU + "Hz"),
    Unit.mHz: _mul(_BP.FREQUENCY, 1e-3, "mHz"),
    Unit.Hz: _mul(_BP.FREQUENCY, 1, "Hz"),
    Unit.kHz: _mul(_BP.FREQUENCY, 1e3, "kHz"),
    Unit.MHz: _mul(_BP.FREQUENCY, 1e6, "MHz"),
    Unit.GHz: _mul(_BP.FREQUENCY, 1e9, "GHz"),
    Unit.THz: _mul(_BP.FREQUENCY, 1e12, "THz"),

    Unit.pF: _mul(_BP.CAPACITANCE, 1e-12, "pF"),
    Unit.nF: _mul(_BP.CAPACITANCE, 1e-9, "nF"),
    Unit.muF: _mul(_BP.CAPACITANCE, 1e-6, MU + "F"),
    Unit.mF: _mul(_BP.CAPACITANCE, 1e-3, "mF"),
    Unit.F: _mul(_BP.CAPACITANCE, 1, "F"),
    Unit.kF: _mul(_BP.CAPACITANCE, 1e3, "kF"),
    Unit.MF: _mul(_BP.CAPACITANCE, 1e6, "MF"),

    Unit.pH: _mul(_BP.INDUCTANCE, 1e-12, "pH"),
    Unit.nH: _mul(_BP.INDUCTANCE, 1e-9, "nH"),
    Unit.muH: _mul(_BP.INDUCTANCE, 1e-6, MU + "H"),
    Unit.mH: _mul(_BP.INDUCTANCE, 1e-3, "mH"),
    Unit.H: _mul(_BP.INDUCTANCE, 1, "H"),
    Unit.kH: _mul(_BP.INDUCTANCE, 1e3, "kH"),
    Unit.MH: _mul(_BP.INDUCTANCE, 1e6, "MH"),

    Unit.K: _mul(_BP.TEMPERATURE, 1, "K"),
    Unit.C: _affine(_BP.TEMPERATURE, 1.0, F.ZERO_CELSIUS_K, "C"),
    Unit.degF: _affine(_BP.TEMPERATURE, F.FAHRENHEIT_SLOPE, F.FAHRENHEIT_OFFSET_K, "°F"),

    Unit.aJ: _mul(_BP.ENERGY, 1e-18, "aJ"),
    Unit.fJ: _mul(_BP.ENERGY, 1e-15, "fJ"),
    Unit.pJ: _mul(_BP.ENERGY, 1e-12, "pJ"),
    Unit.nJ: _mul(_BP.ENERGY, 1e-9, "nJ"),
    Unit.muJ: _mul(_BP.ENERGY, 1e-6, MU + "J"),
    Unit.mJ: _mul(_BP.ENERGY, 1e-3, "mJ"),
    Unit.J: _mul(_BP.ENERGY, 1, "J"),
    Unit.kJ: _mul(_BP.ENERGY, 1e3, "kJ"),
    Unit.MJ: _mul(_BP.ENERGY, 1e6, "MJ"),
    Unit.GJ: _mul(_BP.ENERGY, 1e9, "GJ"),
    Unit.TJ: _mul(_BP.ENERGY, 1e12, "TJ"),
    Unit.PJ: _mul(_BP.ENERGY, 1e15, "PJ"),
    Unit.EJ: _mul(_BP.ENERGY, 1e18, "EJ"),

    Unit.am: _mul(_BP.DISTANCE, 1e-18, "am"),
    Unit.fm: _mul(_BP.DISTANCE, 1e-15, "fm"),
    Unit.pm: _mul(_BP.DISTANCE, 1e-12, "pm"),
    Unit.nm: _mul(_BP.DISTANCE, 1e-9, "nm"),
    Unit.mum: _mul(_BP.DISTANCE, 1e-6, MU + "m"),
    Unit.mm: _mul(_BP.DISTANCE, 1e-3, "mm"),
    Unit.cm: _mul(_BP.DISTANCE, 1e-2, "cm"),
    Unit.dm: _mul(_BP.DISTANCE, 1e-1, "dm"),
    Unit.m: _mul(_BP.DISTANCE, 1, "m"),
    Unit.dam: _mul(_BP.DISTANCE, 1e1, "dam"),
    Unit.hm: _mul(_BP.DISTANCE, 1e2, "hm"),
    Unit.km: _mul(_BP.DISTANCE, 1e3, "km"),
    Unit.Mm: _mul(_BP.DISTANCE, 1e6, "Mm"),
    Unit.Gm: _mul(_BP.DISTANCE, 1e9, "Gm"),
    Unit.Tm: _mul(_BP.DISTANCE, 1e12, "Tm"),
    Unit.Pm: _mul(_BP.DISTANCE, 1e15, "Pm"),
    Unit.Em: _mul(_BP.DISTANCE, 1e18, "Em"),

    Unit.amps: _mul(_BP.VELOCITY, 1e-18, "am/s"),
    Unit.fmps: _mul(_BP.VELOCITY, 1e-15, "fm/s"),
    Unit.pmps: _mul(_BP.VELOCITY, 1e-12, "pm/s"),
    Unit.nmps: _mul(_BP.VELOCITY, 1e-9, "nm/s"),
    Unit.mumps: _mul(_BP.VELOCITY, 1e-6, MU + "m/s"),
    Unit.mmps: _mul(_BP.VELOCITY, 1e-3, "mm/s"),
    Unit.cmps: _mul(_BP.VELOCITY, 1e-2, "cm/s"),
    Unit.dmps: _mul(_BP.VELOCITY, 1e-1, "dm/s"),
    Unit.mps: _mul(_BP.VELOCITY, 1, "m/s"),
    Unit.damps: _mul(_BP.VELOCITY, 1e1, "dam/s"),
    Unit.hmps: _mul(_BP.VELOCITY, 1e2, "hm/s"),
    Unit.kmps: _mul(_BP.VELOCITY, 1e3, "km/s"),
    Unit.Mmps: _mul(_BP.VELOCITY, 1e6, "Mm/s"),
    Unit.Gmps: _mul(_BP.VELOCITY, 1e9, "Gm/s"),
    Unit.Tmps: _mul(_BP.VELOCITY, 1e12, "Tm/s"),
}

_BY_SYMBOL: Dict[str, Unit] = {p.symbol: u for u, p in UNIT_PROPS.items()}

_ALIASES: Dict[str, Unit] = {
    "°C": Unit.C,
    "degC": Unit.C,
    "degF": Unit.degF,
    "mps": Unit.mps,
}

_BY_PROPERTY: Dict[BaseProperty, Tuple[Unit, ...]] = {
    prop: tuple(u for u in Unit if u in UNIT_PROPS and UNIT_PROPS[u].base_property is prop)
    for prop in BaseProperty
}


def units_of(prop: BaseProperty) -> Tuple[Unit, ...]:
    """All units of a base property, in catalog order."""
    if not isinstance(prop, BaseProperty):
        raise InvalidArgumentError(f"prop must be a BaseProperty, got {type(prop).__name__}")
    return _BY_PROPERTY[prop]


def prefix_units_of(prop: BaseProperty) -> Tuple[Unit, ...]:
    """Units of a property that differ only by a scale factor (no dBm, C or F).

    These are the default auto-range candidates: scoring a log or offset
    scale against a decimal window is meaningless.
    """
    return tuple(u for u in units_of(prop) if u.is_multiplicative)


def _require_unit(u: object, name: str) -> Unit:
    if u is None:
        raise InvalidArgumentError(f"{name} is required")
    if not isinstance(u, Unit):
        raise InvalidArgumentError(f"{name} must be a Unit, got {type(u).__name__}")
    return u


# --- Conversion ---

def convert_to_unit(magnitude: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert magnitude expressed in from_unit into to_unit.

    Identity returns magnitude untouched (no float round trip). Same-kind units
    pivot through the shared SI anchor value; distinct kinds additionally pass
    through properties.convert and must be declared convertible.

    Raises InvalidArgumentError for absent units or incompatible kinds.
    """
    _require_unit(from_unit, "from_unit")
    _require_unit(to_unit, "to_unit")
    if from_unit is to_unit:
        return magnitude
    from_p = from_unit.base_property
    to_p = to_unit.base_property
    if from_p is to_p:
        return to_unit.from_si(from_unit.to_si(magnitude))
    if not P.can_convert(from_p, to_p):
        raise InvalidArgumentError(
            f"Cannot convert {from_unit.name} ({from_p.name}) to {to_unit.name} ({to_p.name})")
    si_from = from_unit.to_si(magnitude)
    si_to = P.convert(si_from, from_p, to_p)
    return to_unit.from_si(si_to)


# --- Catalog self-check ---

def check_catalog() -> Dict[str, int]:
    """Verify table completeness and anchor invariants.

    Raises InternalInconsistencyError on the first violation; returns counts
    for reporting otherwise.
    """
    missing = [u.name for u in Unit if u not in UNIT_PROPS]
    if missing:
        raise InternalInconsistencyError(f"Units missing from UNIT_PROPS: {missing}")
    if len(_BY_SYMBOL) != len(UNIT_PROPS):
        raise InternalInconsistencyError("Duplicate unit symbols in UNIT_PROPS")
    for prop in BaseProperty:
        try:
            anchor = prop.si_unit
        except KeyError:
            raise InternalInconsistencyError(f"{prop.name} names unknown anchor {prop.value!r}") from None
        if anchor.base_property is not prop:
            raise InternalInconsistencyError(f"Anchor {anchor.name} is not a {prop.name} unit")
        if not anchor.is_multiplicative or anchor.props.factor != 1:
            raise InternalInconsistencyError(f"Anchor {anchor.name} must be multiplicative with factor 1")
        anchors = [u for u in units_of(prop) if u.is_si_unit]
        if anchors != [anchor]:
            raise InternalInconsistencyError(f"{prop.name} must have exactly one SI unit, got {anchors}")
        P.convertible_properties(prop)
    for u in Unit:
        p = u.props
        if p.kind is ConversionKind.CUSTOM and (p.custom_to_si is None or p.custom_from_si is None):
            raise InternalInconsistencyError(f"Custom unit {u.name} lacks a conversion pair")
    return {"properties": len(BaseProperty), "units": len(UNIT_PROPS)}
