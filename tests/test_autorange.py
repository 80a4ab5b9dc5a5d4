# tests/test_autorange.py

import math

import pytest

from PhysicalUnitsTool import autorange as AR
from PhysicalUnitsTool.autorange import (
    AutoRangeBin,
    AutoRangePolicy,
    auto_range,
    score_candidates,
    score_magnitude,
)
from PhysicalUnitsTool.errors import InternalInconsistencyError, InvalidArgumentError
from PhysicalUnitsTool.units import Unit

P = AutoRangePolicy


@pytest.mark.parametrize("x,expected", [
    (math.inf, AutoRangeBin.INTERVAL_1000_POS_INFTY),
    (1000.0, AutoRangeBin.INTERVAL_1000_POS_INFTY),
    (999.999, AutoRangeBin.INTERVAL_100_1000),
    (100.0, AutoRangeBin.INTERVAL_100_1000),
    (10.0, AutoRangeBin.INTERVAL_10_100),
    (1.0, AutoRangeBin.INTERVAL_1_10),
    (0.5, AutoRangeBin.INTERVAL_0p1_1),
    (-0.5, AutoRangeBin.INTERVAL_0p1_1),
    (0.01, AutoRangeBin.INTERVAL_0p01_0p1),
    (0.001, AutoRangeBin.INTERVAL_0p001_0p01),
    (0.0009, AutoRangeBin.INTERVAL_ZERO_0p001),
    (0.0, AutoRangeBin.INTERVAL_ZERO_0p001),
])
def test_bin_of(x, expected):
    assert AutoRangeBin.of(x) is expected


def test_every_magnitude_lands_in_exactly_one_bin():
    samples = [0.0, 5e-7, 0.001, 0.0099, 0.05, 0.1, 0.99, 1.0, 9.99, 10.0, 99.0, 100.0, 999.0, 1000.0, 1e300, math.inf]
    for x in samples:
        assert sum(b.contains(x) for b in AutoRangeBin) == 1, x


def test_nan_has_no_bin():
    with pytest.raises(InvalidArgumentError):
        AutoRangeBin.of(math.nan)


# one representative magnitude per bin -> expected score per policy,
# columns: PREFER_1_1000, PREFER_1_100, PREFER_1_10, PREFER_0p1_1
EXPECTED_SCORES = {
    5000.0: (-5.0, -50.0, -500.0, -5000.0),
    500.0: (500.0, -5.0, -50.0, -500.0),
    50.0: (5.0, 50.0, -5.0, -50.0),
    5.0: (0.05, 0.5, 5.0, -5.0),
    0.5: (-0.5, -0.5, -0.5, 0.5),
    0.05: (-0.05, -0.05, -0.05, -0.05),
    0.005: (-0.005, -0.005, -0.005, -0.005),
    0.0005: (-0.0005, -0.0005, -0.0005, -0.0005),
}
POLICY_COLUMNS = (P.PREFER_1_1000, P.PREFER_1_100, P.PREFER_1_10, P.PREFER_0p1_1)


@pytest.mark.parametrize("policy,x,expected", [
    (policy, x, row[i])
    for x, row in EXPECTED_SCORES.items()
    for i, policy in enumerate(POLICY_COLUMNS)
])
def test_score_table_cells(policy, x, expected):
    assert score_magnitude(policy, x) == pytest.approx(expected)


def test_score_grid_covers_every_bin_and_policy():
    bins = {AutoRangeBin.of(x) for x in EXPECTED_SCORES}
    assert bins == set(AutoRangeBin)
    assert set(POLICY_COLUMNS) == set(P)
    assert all(len(AR.SCORE_TABLE[b]) == len(P) for b in AutoRangeBin)


def test_score_uses_absolute_value():
    assert score_magnitude(P.PREFER_1_10, -5.0) == score_magnitude(P.PREFER_1_10, 5.0)


def test_score_special_values():
    assert score_magnitude(P.PREFER_1_1000, math.nan) == -math.inf
    assert score_magnitude(P.PREFER_1_1000, math.inf) == -math.inf
    assert score_magnitude(P.PREFER_1_1000, 0.0) == 0.0


def test_score_requires_policy():
    with pytest.raises(InvalidArgumentError):
        score_magnitude(None, 1.0)
    with pytest.raises(InvalidArgumentError):
        score_magnitude("PREFER_1_10", 1.0)


def test_missing_score_cell_is_internal_inconsistency(monkeypatch):
    monkeypatch.delitem(AR.SCORE_TABLE[AutoRangeBin.INTERVAL_1_10], P.PREFER_1_10)
    with pytest.raises(InternalInconsistencyError):
        score_magnitude(P.PREFER_1_10, 5.0)


def test_policy_windows():
    assert P.PREFER_1_1000.window == (1.0, 1000.0)
    assert P.PREFER_0p1_1.window == (0.1, 1.0)
    assert P.PREFER_1_100.preferred_decimal_point_index == 1
    assert P.PREFER_1_10.in_window(9.99)
    assert not P.PREFER_1_10.in_window(10.0)
    assert len({p.value for p in P}) == 4


def test_engineering_prefix_selection():
    assert auto_range(P.PREFER_1_1000, 1500.0, Unit.V, [Unit.mV, Unit.V, Unit.kV]) is Unit.kV
    assert auto_range(P.PREFER_1_1000, 0.25, Unit.V, [Unit.mV, Unit.kV]) is Unit.mV


def test_sub_one_values_prefer_the_smallest():
    """Outside every window, the least-penalized (smallest) magnitude wins."""
    assert auto_range(P.PREFER_1_10, 0.0045, Unit.mV, [Unit.mV, Unit.V, Unit.kV]) is Unit.kV


def test_in_window_candidate_beats_everything_else():
    assert auto_range(P.PREFER_1_10, 0.0045, Unit.mV, [Unit.muV, Unit.mV, Unit.V]) is Unit.muV


def test_empty_or_absent_candidates_return_origin():
    assert auto_range(P.PREFER_1_10, 12345.0, Unit.V, []) is Unit.V
    assert auto_range(P.PREFER_1_10, 12345.0, Unit.V, None) is Unit.V


def test_absent_arguments_raise():
    with pytest.raises(InvalidArgumentError):
        auto_range(None, 1.0, Unit.V, [Unit.mV])
    with pytest.raises(InvalidArgumentError):
        auto_range(P.PREFER_1_10, 1.0, None, [Unit.mV])
    with pytest.raises(InvalidArgumentError):
        auto_range(P.PREFER_1_10, 1.0, Unit.V, [None])


def test_origin_wins_ties():
    # 1 s and 1 Hz score identically
    assert auto_range(P.PREFER_1_10, 1.0, Unit.s, [Unit.Hz]) is Unit.s


def test_first_candidate_wins_ties():
    assert auto_range(P.PREFER_1_10, 1000.0, Unit.ms, [Unit.Hz, Unit.s]) is Unit.Hz
    assert auto_range(P.PREFER_1_10, 1000.0, Unit.ms, [Unit.s, Unit.Hz]) is Unit.s


def test_strict_property_skips_other_kinds():
    assert auto_range(P.PREFER_1_10, 1000.0, Unit.ms, [Unit.Hz, Unit.s], strict_property=True) is Unit.s
    assert auto_range(P.PREFER_1_10, 1.0, Unit.V, [Unit.H], strict_property=True) is Unit.V


def test_non_strict_incompatible_candidate_raises():
    with pytest.raises(InvalidArgumentError):
        auto_range(P.PREFER_1_10, 1.0, Unit.V, [Unit.H])


def test_nan_magnitude_keeps_origin():
    assert auto_range(P.PREFER_1_1000, math.nan, Unit.V, [Unit.mV, Unit.kV]) is Unit.V


def test_rounding_absorbs_conversion_noise():
    x = 999.9999999999999
    assert auto_range(P.PREFER_1_1000, x, Unit.V, [Unit.kV]) is Unit.V
    assert auto_range(P.PREFER_1_1000, x, Unit.V, [Unit.kV], round_magnitude=True) is Unit.kV


def test_score_candidates_order_and_pruning():
    scored = score_candidates(P.PREFER_1_1000, 1500.0, Unit.V, [Unit.mV, Unit.V, Unit.kV, Unit.muV])
    assert [c.unit for c in scored] == [Unit.V, Unit.mV, Unit.kV, Unit.muV]
    assert [c.kept for c in scored] == [True, False, True, False]
    assert scored[2].magnitude == pytest.approx(1.5)
    assert scored[2].score == pytest.approx(0.015)
    assert scored[0].score == pytest.approx(-1.5)


def test_origin_only_when_every_candidate_is_skipped():
    assert auto_range(P.PREFER_1_10, 0.0045, Unit.mV, [Unit.mV]) is Unit.mV
    assert auto_range(P.PREFER_1_10, 0.0045, Unit.mV, [Unit.H, Unit.s], strict_property=True) is Unit.mV


def test_candidates_may_be_any_iterable():
    assert auto_range(P.PREFER_1_1000, 1500.0, Unit.V, (u for u in [Unit.mV, Unit.kV])) is Unit.kV
