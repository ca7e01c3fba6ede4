"""Tests for nice-number interval arithmetic."""

import math

import pytest

from chartaxis.nice_numbers import (
    NON_FINITE_INTERVAL,
    ZERO_RANGE_INTERVAL,
    next_nice_number,
    nice_fraction,
    nice_interval,
    previous_nice_number,
)
from chartaxis.precision import MAX_FINITE, clamp_finite, decimal_places, round_to_precision


def test_nice_interval_standard_range():
    """Test 0..95 in 5 intervals snaps 19 up to 20."""
    assert nice_interval(0, 95, 5) == 20.0


@pytest.mark.parametrize(
    "min_value,max_value,desired,expected",
    [
        (0, 100, 5, 20.0),
        (0, 10, 5, 2.0),
        (0, 36, 5, 10.0),  # 7.2 is past the 7.0 breakpoint
        (0, 12, 5, 2.0),
        (-75, 75, 5, 50.0),
        (0, 1, 10, 0.1),
    ],
)
def test_nice_interval_snaps_to_family(min_value, max_value, desired, expected):
    """Test normal ranges snap to 1, 2, 5 or 10 times a power of ten."""
    assert nice_interval(min_value, max_value, desired) == pytest.approx(expected)


def test_nice_interval_reversed_range():
    """Test the range width is taken as an absolute value."""
    assert nice_interval(95, 0, 5) == 20.0


def test_fewer_intervals_give_larger_spacing():
    """Test asking for fewer intervals widens the spacing."""
    assert nice_interval(0, 1000, 2) > nice_interval(0, 1000, 20)


# ---------------------------------------------------------------------------
# Degenerate ranges
# ---------------------------------------------------------------------------


def test_zero_range_at_zero():
    """Test an all-zero range returns the fixed small interval."""
    assert nice_interval(0, 0, 5) == ZERO_RANGE_INTERVAL


@pytest.mark.parametrize(
    "value,expected",
    [
        (5, 0.1),
        (100, 10.0),
        (-250, 10.0),
        (0.04, 0.001),
    ],
)
def test_zero_range_uses_value_magnitude(value, expected):
    """Test equal non-zero bounds derive the interval from the value itself."""
    assert nice_interval(value, value, 5) == pytest.approx(expected)


def test_near_zero_width_range_is_degenerate():
    """Test ranges narrower than epsilon go through the zero-range handler."""
    assert nice_interval(42.0, 42.0 + 1e-12, 5) == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# Tiny ranges
# ---------------------------------------------------------------------------


def test_tiny_range_interval():
    """Test a sub-millesimal range keeps a sub-millesimal interval."""
    interval = nice_interval(0, 0.0005, 5)

    assert interval > 0
    assert interval == pytest.approx(1e-4)


def test_tiny_range_with_offset():
    """Test a tiny range far from zero does not underflow."""
    interval = nice_interval(1.0, 1.0000001, 5)

    assert interval > 0
    assert interval < 1e-6
    assert math.isfinite(interval)


def test_tiny_range_snapping():
    """Test tiny ranges use the same 1-2-5 snapping."""
    # rough 3.6e-5 -> 5e-5
    assert nice_interval(0, 0.00018, 5) == pytest.approx(5e-5)


# ---------------------------------------------------------------------------
# Huge ranges
# ---------------------------------------------------------------------------


def test_huge_range_interval():
    """Test a range above 1e9 gives a round large interval."""
    assert nice_interval(0, 1e12, 5) == pytest.approx(2e11)


def test_huge_range_prefers_five_over_ten():
    """Test the 7.5 breakpoint keeps 7.2 at 5 for huge ranges."""
    # Same normalized value (7.2) snaps to 10 in the normal regime
    assert nice_interval(0, 3.6e10, 5) == pytest.approx(5e9)
    assert nice_interval(0, 36, 5) == pytest.approx(10.0)


def test_overflowing_range_snaps_like_huge_range():
    """Test a range wider than the largest double still gets a nice interval."""
    assert nice_interval(-1e308, 1e308, 5) == pytest.approx(5e307)


def test_overflowing_range_single_interval_stays_finite():
    """Test an interval that would itself overflow drops to its power of ten."""
    interval = nice_interval(-1e308, 1e308, 1)

    assert math.isfinite(interval)
    assert interval == pytest.approx(1e308)


# ---------------------------------------------------------------------------
# Guarantees and preconditions
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "min_value,max_value",
    [
        (0, 0),
        (7, 7),
        (-3, -3),
        (0, 1e-7),
        (5, 5 + 1e-8),
        (0, 1e13),
        (-1e15, 1e15),
        (0.1, 0.7),
        (-0.001, 0.001),
    ],
)
def test_interval_always_positive_and_finite(min_value, max_value):
    """Test every regime returns a finite, positive interval."""
    for desired in (1, 5, 10):
        interval = nice_interval(min_value, max_value, desired)
        assert interval > 0
        assert math.isfinite(interval)


@pytest.mark.parametrize("desired", [0, -1])
def test_non_positive_desired_intervals_rejected(desired):
    """Test desired_intervals <= 0 is a precondition failure."""
    with pytest.raises(ValueError):
        nice_interval(0, 100, desired)


@pytest.mark.parametrize(
    "min_value,max_value",
    [(math.nan, 10), (0, math.inf), (-math.inf, math.inf)],
)
def test_non_finite_input_falls_back(min_value, max_value):
    """Test NaN and infinity never propagate into the interval."""
    assert nice_interval(min_value, max_value, 5) == NON_FINITE_INTERVAL


# ---------------------------------------------------------------------------
# Nice number helpers
# ---------------------------------------------------------------------------


def test_nice_fraction_breakpoints():
    """Test the snapping breakpoints."""
    assert nice_fraction(1.2) == 1.0
    assert nice_fraction(1.9) == 2.0
    assert nice_fraction(3.0) == 5.0
    assert nice_fraction(7.2) == 10.0
    assert nice_fraction(7.2, upper_breakpoint=7.5) == 5.0


def test_next_nice_number():
    """Test stepping up within the 1-2-5 family."""
    assert next_nice_number(3) == 5.0
    assert next_nice_number(1) == 2.0
    assert next_nice_number(70) == 100.0
    assert next_nice_number(0) == 1.0


def test_previous_nice_number():
    """Test stepping down within the 1-2-5 family."""
    assert previous_nice_number(3) == 2.0
    assert previous_nice_number(1) == 0.5
    assert previous_nice_number(40) == 20.0
    assert previous_nice_number(0) == -1.0


# ---------------------------------------------------------------------------
# Precision helpers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "interval,expected",
    [(1, 0), (20, 0), (0.5, 1), (0.25, 2), (0.1, 1), (0.005, 3), (1e-8, 6)],
)
def test_decimal_places(interval, expected):
    """Test decimal places follow the interval magnitude, capped at 6."""
    assert decimal_places(interval) == expected


def test_round_to_precision_removes_noise():
    """Test float noise is removed at the interval's precision."""
    assert round_to_precision(0.1 + 0.2, 0.1) == 0.3
    assert round_to_precision(0.1 * 7, 0.1) == 0.7


def test_round_to_precision_keeps_tiny_values():
    """Test tiny tick values survive rounding at a tiny interval."""
    assert round_to_precision(3e-8, 1e-8) == pytest.approx(3e-8)


def test_round_to_precision_keeps_interval_decimals():
    """Test an interval with more decimals than its magnitude keeps them."""
    assert round_to_precision(0.375, 0.125) == 0.375
    assert round_to_precision(7.5, 2.5) == 7.5


def test_round_to_precision_no_negative_zero():
    """Test rounding a tiny negative value yields positive zero."""
    result = round_to_precision(-1e-17, 0.5)

    assert result == 0.0
    assert math.copysign(1.0, result) == 1.0


def test_round_to_precision_without_reference():
    """Test the default precision is ten decimals."""
    assert round_to_precision(1.23456789012345) == 1.2345678901


def test_clamp_finite():
    """Test overflowed bounds come back to the largest double."""
    assert clamp_finite(math.inf) == MAX_FINITE
    assert clamp_finite(-math.inf) == -MAX_FINITE
    assert clamp_finite(12.5) == 12.5
