import logging

import pytest

from fuzzy_engine import (
    Defuzzifier,
    bisector,
    centroid,
    defuzzify,
    gaussian,
    get_defuzzifier,
    largest_of_maximum,
    mean_of_maximum,
    smallest_of_maximum,
    trapezoidal,
    triangular,
    weighted_average,
)

METHODS = ["centroid", "bisector", "mom", "som", "lom"]


@pytest.fixture
def defuzzifier():
    return Defuzzifier()


def test_defuzzifier_init(defuzzifier):
    assert defuzzifier is not None
    assert defuzzifier.method == "centroid"


# ------------------------------------------------------------
# Degenerate input: no membership anywhere
# ------------------------------------------------------------
@pytest.mark.parametrize("method", METHODS)
@pytest.mark.parametrize("vmin,vmax", [(0, 100), (-3, 7), (-50.5, -10.25)])
def test_zero_membership_returns_midpoint(zero_mf, method, vmin, vmax):
    assert defuzzify(zero_mf, method, vmin, vmax, 100) == (vmin + vmax) / 2


@pytest.mark.parametrize("method", METHODS)
def test_non_positive_resolution_returns_midpoint(method):
    assert defuzzify(triangular(0, 25, 50), method, 0, 100, 0) == 50.0


# ------------------------------------------------------------
# Centroid
# ------------------------------------------------------------
def test_centroid_of_symmetric_gaussian():
    assert centroid(gaussian(50, 10), 0, 100, 100) == pytest.approx(50.0, abs=1e-6)


def test_centroid_of_symmetric_triangle():
    assert centroid(triangular(20, 30, 40), 0, 100, 100) == pytest.approx(30.0)


def test_centroid_of_right_skewed_set_moves_right():
    assert centroid(triangular(0, 80, 100), 0, 100, 100) > 50.0


def test_centroid_of_clipped_sets():
    # two equal plateaus at 25 and 75 clipped to the same height balance at 50
    clipped = lambda x: min(max(triangular(0, 25, 50)(x), triangular(50, 75, 100)(x)), 0.5)  # noqa: E731
    assert centroid(clipped, 0, 100, 100) == pytest.approx(50.0)


# ------------------------------------------------------------
# Bisector
# ------------------------------------------------------------
def test_bisector_of_symmetric_triangle():
    assert bisector(triangular(20, 50, 80), 0, 100, 100) == pytest.approx(50.0)


def test_bisector_of_left_heavy_set_is_left_of_center():
    assert bisector(trapezoidal(0, 0, 30, 100), 0, 100, 100) < 50.0


def test_bisector_returns_grid_point():
    value = bisector(gaussian(33, 7), 0, 100, 100)
    assert value == pytest.approx(round(value))


# ------------------------------------------------------------
# Maximum-based methods
# ------------------------------------------------------------
def test_maximum_methods_on_single_peak():
    f = triangular(20, 30, 40)
    assert mean_of_maximum(f, 0, 100, 100) == pytest.approx(30.0)
    assert smallest_of_maximum(f, 0, 100, 100) == pytest.approx(30.0)
    assert largest_of_maximum(f, 0, 100, 100) == pytest.approx(30.0)


def test_maximum_methods_on_plateau():
    f = trapezoidal(20, 30, 60, 70)
    assert smallest_of_maximum(f, 0, 100, 100) == pytest.approx(30.0)
    assert largest_of_maximum(f, 0, 100, 100) == pytest.approx(60.0)
    assert mean_of_maximum(f, 0, 100, 100) == pytest.approx(45.0)


def test_maximum_methods_on_two_separate_peaks():
    # the left peak is clipped lower than the right one
    f = lambda x: max(min(triangular(0, 20, 40)(x), 0.4), triangular(60, 80, 100)(x))  # noqa: E731
    assert smallest_of_maximum(f, 0, 100, 100) == pytest.approx(80.0)
    assert largest_of_maximum(f, 0, 100, 100) == pytest.approx(80.0)


def test_mom_of_two_equal_peaks_is_between_them():
    f = lambda x: max(triangular(0, 20, 40)(x), triangular(60, 80, 100)(x))  # noqa: E731
    assert mean_of_maximum(f, 0, 100, 100) == pytest.approx(50.0)
    assert smallest_of_maximum(f, 0, 100, 100) == pytest.approx(20.0)
    assert largest_of_maximum(f, 0, 100, 100) == pytest.approx(80.0)


# ------------------------------------------------------------
# Lookup and stage object
# ------------------------------------------------------------
def test_method_lookup():
    assert get_defuzzifier("centroid") is centroid
    assert get_defuzzifier("bisector") is bisector
    assert get_defuzzifier("mom") is mean_of_maximum
    assert get_defuzzifier("som") is smallest_of_maximum
    assert get_defuzzifier("lom") is largest_of_maximum


def test_unknown_method_falls_back_to_centroid(caplog):
    with caplog.at_level(logging.WARNING):
        assert get_defuzzifier("center_of_sums") is centroid
    assert "center_of_sums" in caplog.text


@pytest.mark.parametrize("method,expected", [("som", 30.0), ("lom", 60.0), ("mom", 45.0)])
def test_stage_object_uses_configured_method(method, expected):
    stage = Defuzzifier(method)
    assert stage.defuzzify(trapezoidal(20, 30, 60, 70), 0, 100, 100) == pytest.approx(expected)


# ------------------------------------------------------------
# Weighted average (Sugeno-style)
# ------------------------------------------------------------
def test_weighted_average_normal_case():
    # Sum(W*Z) = (0.8 * 0.5) + (0.2 * -0.3) = 0.34, Sum(W) = 1.0
    rule_outputs = [(0.8, 0.5), (0.2, -0.3)]
    assert weighted_average(rule_outputs) == pytest.approx(0.34, abs=1e-9)


def test_weighted_average_no_rules():
    assert weighted_average([]) == 0.0


def test_weighted_average_zero_firing_strength():
    rule_outputs = [(0.0, 0.5), (0.0, -0.3)]
    assert weighted_average(rule_outputs) == 0.5
