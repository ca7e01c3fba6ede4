"""Tests for per-chart-family axis ranges."""

import math

import pytest
from pydantic import ValidationError

from chartaxis.chart_bounds import (
    EMPTY_DATA_BOUNDS,
    category_axis_bounds,
    chart_bounds,
    data_bounds,
    domain_axis_bounds,
    value_axis_bounds,
)
from chartaxis.models import AxisConfiguration, ChartType, DataPoint
from chartaxis.precision import MAX_FINITE


@pytest.fixture
def bar_points():
    """Create four bar values."""
    return [DataPoint(x=i, y=y) for i, y in enumerate([10, 20, 30, 45])]


@pytest.fixture
def line_points():
    """Create a line series over x 0..10."""
    return [DataPoint(x=i, y=i * 9.5) for i in range(11)]


# ---------------------------------------------------------------------------
# Value axis
# ---------------------------------------------------------------------------


def test_value_axis_enough_headroom():
    """Test 0..95 rounds up to 100 with no extra interval."""
    assert value_axis_bounds(0, 95) == (0, 100)


def test_value_axis_adds_headroom():
    """Test data ending exactly on a tick gets one more interval."""
    assert value_axis_bounds(0, 100) == (0, 120)


def test_value_axis_positive_data_starts_at_zero():
    """Test positive data is anchored at zero."""
    y_min, y_max = value_axis_bounds(10, 95)

    assert y_min == 0
    assert y_max == 100


def test_value_axis_negative_data():
    """Test negative data keeps an interval-aligned floor."""
    assert value_axis_bounds(-37, 42) == (-40, 60)


def test_value_axis_start_from_zero_ignored_for_negative_data():
    """Test the zero anchor does not cut off negative values."""
    assert value_axis_bounds(-10, 50, start_from_zero=True) == (-10, 60)


def test_value_axis_explicit_range():
    """Test explicit min and max are returned unchanged."""
    config = AxisConfiguration(min=5, max=50)

    assert value_axis_bounds(0, 1000, config) == (5, 50)


def test_value_axis_explicit_max_only():
    """Test an explicit max is kept and the floor still computed."""
    config = AxisConfiguration(max=200)

    assert value_axis_bounds(0, 95, config) == (0, 200)


def test_value_axis_explicit_interval():
    """Test a configured interval drives the rounding."""
    config = AxisConfiguration(interval=25)

    assert value_axis_bounds(0, 95, config) == (0, 100)


def test_value_axis_all_zero():
    """Test all-zero data still gives a non-empty axis."""
    y_min, y_max = value_axis_bounds(0, 0)

    assert y_min == 0
    assert y_max > y_min


def test_value_axis_non_finite():
    """Test NaN data is treated as zero."""
    y_min, y_max = value_axis_bounds(math.nan, math.nan)

    assert y_min == 0
    assert y_max > 0
    assert math.isfinite(y_max)


@pytest.mark.parametrize(
    "data_min,data_max",
    [(0, 95), (0, 100), (3, 7), (-50, -5), (0.2, 0.9), (1, 123456)],
)
def test_value_axis_contains_data(data_min, data_max):
    """Test the value axis always encloses the data."""
    y_min, y_max = value_axis_bounds(data_min, data_max)

    assert y_min <= data_min
    assert y_max >= data_max
    assert y_min < y_max


def test_value_axis_near_largest_double():
    """Test headroom past the largest double is clamped to it."""
    y_min, y_max = value_axis_bounds(0, 1.7e308)

    assert y_min == 0
    assert y_max == MAX_FINITE


# ---------------------------------------------------------------------------
# Domain and category axes
# ---------------------------------------------------------------------------


def test_domain_axis_exact():
    """Test the X axis spans the data exactly by default."""
    assert domain_axis_bounds(3, 97) == (3, 97)


def test_domain_axis_nice():
    """Test interval-aligned X bounds on request."""
    assert domain_axis_bounds(3, 97, use_nice_bounds=True) == (0, 100)


def test_domain_axis_explicit_min():
    """Test an explicit X min is honoured."""
    config = AxisConfiguration(min=0)

    assert domain_axis_bounds(3, 97, config) == (0, 97)


def test_domain_axis_non_finite():
    """Test a non-finite domain falls back to the unit range."""
    assert domain_axis_bounds(math.inf, 5) == (0, 1)


def test_category_axis():
    """Test categories get half a slot of margin."""
    assert category_axis_bounds(4) == (-0.5, 3.5)
    assert category_axis_bounds(1) == (-0.5, 0.5)


def test_category_axis_rejects_negative_count():
    """Test a negative point count is rejected."""
    with pytest.raises(ValueError):
        category_axis_bounds(-1)


# ---------------------------------------------------------------------------
# Data extents and chart orchestration
# ---------------------------------------------------------------------------


def test_data_bounds(line_points):
    """Test extents of a point sequence."""
    extents = data_bounds(line_points)

    assert extents.min_x == 0
    assert extents.max_x == 10
    assert extents.min_y == 0
    assert extents.max_y == 95
    assert extents.x_range == 10


def test_data_bounds_empty():
    """Test an empty series reports the default extents."""
    assert data_bounds([]) == EMPTY_DATA_BOUNDS


def test_chart_bounds_bar(bar_points):
    """Test bar charts use category X bounds and a zero-based Y axis."""
    x_range, y_range = chart_bounds(bar_points, ChartType.BAR)

    assert x_range == (-0.5, 3.5)
    assert y_range == (0, 50)


def test_chart_bounds_stacked_bar_uses_category_axis(bar_points):
    """Test stacked bars share the bar policy."""
    x_range, _ = chart_bounds(bar_points, ChartType.STACKED_BAR)

    assert x_range == (-0.5, 3.5)


def test_chart_bounds_line(line_points):
    """Test line charts span the X data exactly."""
    x_range, y_range = chart_bounds(line_points, ChartType.LINE)

    assert x_range == (0, 10)
    assert y_range == (0, 100)


def test_chart_bounds_empty_series():
    """Test an empty series still yields usable ranges."""
    x_range, y_range = chart_bounds([], ChartType.BAR)

    assert x_range == (-0.5, 0.5)
    assert y_range.min < y_range.max


def test_axis_configuration_validation():
    """Test invalid axis configurations are rejected."""
    with pytest.raises(ValidationError):
        AxisConfiguration(min=10, max=10)

    with pytest.raises(ValidationError):
        AxisConfiguration(desired_intervals=0)
