# tests/test_settings.py

import pytest

from PhysicalUnitsTool import anchors, formulas as F, settings as CFG
from PhysicalUnitsTool.constants import C_MPS, CONSTANTS, ZERO_CELSIUS_K
from PhysicalUnitsTool.errors import InvalidArgumentError
from PhysicalUnitsTool.units import Unit


def test_defaults():
    assert CFG.get_autorange_defaults() == {
        "policy": "PREFER_1_1000",
        "strict_property": True,
        "round_magnitude": True,
        "round_significant_digits": 12,
    }


def test_set_defaults_partially():
    CFG.set_autorange_defaults(policy="PREFER_1_10", strict_property=False)
    d = CFG.get_autorange_defaults()
    assert d["policy"] == "PREFER_1_10"
    assert d["strict_property"] is False
    assert d["round_magnitude"] is True


def test_set_defaults_rejects_bad_values():
    with pytest.raises(InvalidArgumentError):
        CFG.set_autorange_defaults(policy="PREFER_EVERYTHING")
    with pytest.raises(InvalidArgumentError):
        CFG.set_autorange_defaults(round_significant_digits=0)
    assert CFG.DEFAULT_POLICY == "PREFER_1_1000"


def test_no_anchor_drift():
    a = anchors.ANCHORS
    assert F.ZERO_CELSIUS_K == a["ZERO_CELSIUS_K"]
    assert F.FAHRENHEIT_SLOPE == a["FAHRENHEIT_SLOPE"]
    assert F.ZERO_FAHRENHEIT_F == a["ZERO_FAHRENHEIT_F"]
    assert F.DBM_REF_W == a["DBM_REF_W"]
    assert F.FAHRENHEIT_OFFSET_K == pytest.approx(255.37222222222223)


def test_constants():
    assert C_MPS.magnitude == 299792458.0
    assert C_MPS.unit is Unit.mps
    assert ZERO_CELSIUS_K.convert_to(Unit.C).magnitude == 0.0
    assert set(CONSTANTS) == {"C_MPS", "ZERO_CELSIUS_K"}


def test_round_significant():
    assert F.round_significant(999.9999999999999, 12) == 1000.0
    assert F.round_significant(0.000123456, 3) == pytest.approx(0.000123)
    assert F.round_significant(0.0, 12) == 0.0
    assert F.round_significant(float("inf"), 12) == float("inf")
