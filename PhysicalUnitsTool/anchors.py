"""
Frozen anchor set for the numeric constants behind the unit catalog.

These values fix the affine and logarithmic conversions (Celsius, Fahrenheit,
dBm) and the constants table. Tests assert no drift relative to these values.
Update this file deliberately, together with the conversion tests.
"""

ANCHORS: dict[str, float | int | str] = {
    # Temperature
    "ZERO_CELSIUS_K": 273.15,        # K at 0 C
    "FAHRENHEIT_SLOPE": 5.0 / 9.0,   # K per F
    "ZERO_FAHRENHEIT_F": 32.0,       # F at 0 C

    # Power
    "DBM_REF_W": 1e-3,               # 0 dBm in W

    # Velocity
    "C_MPS": 299792458.0,            # m/s, exact by definition of the metre
}

# Origins (free-text for docs)
ORIGINS: dict[str, str] = {
    "ZERO_CELSIUS_K": "Celsius scale defined as K - 273.15 (SI brochure)",
    "FAHRENHEIT_SLOPE": "1 F step = 5/9 K",
    "DBM_REF_W": "dBm is referenced to 1 mW",
    "C_MPS": "Speed of light in vacuum, exact since 1983",
}
