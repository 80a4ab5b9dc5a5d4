# tests/test_properties.py

import itertools
import math

import pytest

from PhysicalUnitsTool import properties as P
from PhysicalUnitsTool.errors import InternalInconsistencyError, InvalidArgumentError
from PhysicalUnitsTool.properties import BaseProperty, can_convert, convert, convertible_properties
from PhysicalUnitsTool.units import Unit


def test_catalog_has_thirteen_properties():
    assert len(BaseProperty) == 13


def test_si_anchor_units():
    assert BaseProperty.VOLTAGE.si_unit is Unit.V
    assert BaseProperty.RESISTANCE.si_unit is Unit.Ohm
    assert BaseProperty.VELOCITY.si_unit is Unit.mps
    assert BaseProperty.NONE.si_unit is Unit.NONE
    assert str(BaseProperty.RESISTANCE) == "Ω"
    assert BaseProperty.FREQUENCY.symbol == "Hz"


def test_can_convert_is_reflexive_and_symmetric():
    for p in BaseProperty:
        assert can_convert(p, p)
    for p1, p2 in itertools.product(BaseProperty, repeat=2):
        assert can_convert(p1, p2) == can_convert(p2, p1)


def test_only_time_and_frequency_cross_convert():
    pairs = {
        frozenset((p1, p2))
        for p1, p2 in itertools.product(BaseProperty, repeat=2)
        if p1 is not p2 and can_convert(p1, p2)
    }
    assert pairs == {frozenset((BaseProperty.TIME, BaseProperty.FREQUENCY))}


def test_can_convert_rejects_absent_arguments():
    with pytest.raises(InvalidArgumentError):
        can_convert(None, BaseProperty.TIME)
    with pytest.raises(InvalidArgumentError):
        can_convert(BaseProperty.TIME, None)
    with pytest.raises(InvalidArgumentError):
        can_convert("TIME", BaseProperty.TIME)


def test_convert_identity_returns_magnitude_unchanged():
    assert convert(0.1 + 0.2, BaseProperty.ENERGY, BaseProperty.ENERGY) == 0.1 + 0.2


def test_convert_time_frequency_reciprocal_both_ways():
    assert convert(4.0, BaseProperty.TIME, BaseProperty.FREQUENCY) == 0.25
    assert convert(0.25, BaseProperty.FREQUENCY, BaseProperty.TIME) == 4.0


def test_convert_zero_propagates_signed_infinity():
    """Zero is not guarded: the reciprocal yields an IEEE infinity, not an error."""
    assert convert(0.0, BaseProperty.TIME, BaseProperty.FREQUENCY) == math.inf
    assert convert(-0.0, BaseProperty.FREQUENCY, BaseProperty.TIME) == -math.inf


def test_convert_rejects_undeclared_pairs_and_absent_arguments():
    with pytest.raises(InvalidArgumentError):
        convert(1.0, BaseProperty.VOLTAGE, BaseProperty.CURRENT)
    with pytest.raises(InvalidArgumentError):
        convert(1.0, None, BaseProperty.CURRENT)
    with pytest.raises(InvalidArgumentError):
        convert(1.0, BaseProperty.CURRENT, None)


def test_convertible_properties():
    assert convertible_properties(BaseProperty.TIME) == (BaseProperty.TIME, BaseProperty.FREQUENCY)
    assert convertible_properties(BaseProperty.FREQUENCY) == (BaseProperty.FREQUENCY, BaseProperty.TIME)
    assert convertible_properties(BaseProperty.VOLTAGE) == (BaseProperty.VOLTAGE,)


def test_missing_registry_entry_is_internal_inconsistency(monkeypatch):
    monkeypatch.delitem(P._CROSS_KIND, BaseProperty.TIME)
    with pytest.raises(InternalInconsistencyError):
        can_convert(BaseProperty.TIME, BaseProperty.FREQUENCY)
    with pytest.raises(InternalInconsistencyError):
        convert(1.0, BaseProperty.TIME, BaseProperty.FREQUENCY)


def test_error_kinds_are_distinguishable():
    assert not issubclass(InvalidArgumentError, InternalInconsistencyError)
    assert not issubclass(InternalInconsistencyError, InvalidArgumentError)
    assert issubclass(InvalidArgumentError, ValueError)
