"""Per-chart-family axis range policy built on the axis calculator."""

import logging
import math
from typing import Optional, Sequence, Tuple

from .axis_calculator import round_down, round_up
from .models import AxisConfiguration, AxisRange, ChartType, DataBounds, DataPoint
from .nice_numbers import nice_interval
from .precision import clamp_finite, round_to_precision

logger = logging.getLogger(__name__)

# Minimum headroom above the data max, as a share of one interval
HEADROOM_RATIO = 0.15

# Extents reported for an empty series
EMPTY_DATA_BOUNDS = DataBounds(min_x=0.0, max_x=10.0, min_y=0.0, max_y=100.0)

_BAR_FAMILY = (ChartType.BAR, ChartType.STACKED_BAR)


def value_axis_bounds(
    data_min: float,
    data_max: float,
    config: Optional[AxisConfiguration] = None,
    start_from_zero: bool = False,
) -> AxisRange:
    """
    Calculate Y (value) axis bounds aligned with the axis labels.

    Non-negative data is anchored at zero; negative data keeps its minimum.
    The ceiling is rounded up to an interval multiple, and one more interval
    is added when that leaves less than 15% of an interval above the data.

    Args:
        data_min: Smallest Y value
        data_max: Largest Y value
        config: Axis configuration; explicit min/max/interval win
        start_from_zero: Anchor at zero when data is non-negative (bar charts)

    Returns:
        AxisRange(min, max)
    """
    config = config or AxisConfiguration()

    if config.min is not None and config.max is not None:
        return AxisRange(config.min, config.max)

    if not (math.isfinite(data_min) and math.isfinite(data_max)):
        logger.warning(f"Non-finite value range [{data_min}, {data_max}], treating as zero")
        data_min = data_max = 0.0

    if config.min is not None:
        floor = config.min
    elif start_from_zero and data_min >= 0:
        floor = 0.0
    elif data_min >= 0:
        # Positive data starts at zero unless told otherwise
        floor = 0.0
    else:
        floor = data_min

    ceiling = config.max if config.max is not None else data_max

    interval = config.interval or nice_interval(floor, ceiling, config.desired_intervals)

    lower = config.min if config.min is not None else round_down(floor, interval)
    upper = config.max if config.max is not None else round_up(ceiling, interval)

    if config.max is None and upper - data_max < interval * HEADROOM_RATIO:
        upper += interval

    # An explicit min above the data still needs a non-empty axis
    if upper <= lower:
        upper = lower + interval

    return AxisRange(
        clamp_finite(round_to_precision(lower, interval)),
        clamp_finite(round_to_precision(upper, interval)),
    )


def domain_axis_bounds(
    data_min: float,
    data_max: float,
    config: Optional[AxisConfiguration] = None,
    use_nice_bounds: bool = False,
) -> AxisRange:
    """
    Calculate X (domain) axis bounds for a continuous axis.

    Data is expected to span the full width, so exact data bounds are used
    unless ``use_nice_bounds`` asks for interval-aligned ones.
    """
    config = config or AxisConfiguration()

    if config.min is not None and config.max is not None:
        return AxisRange(config.min, config.max)

    effective_min = config.min if config.min is not None else data_min
    effective_max = config.max if config.max is not None else data_max

    if not (math.isfinite(effective_min) and math.isfinite(effective_max)):
        logger.warning(f"Non-finite domain range [{effective_min}, {effective_max}], using [0, 1]")
        return AxisRange(0.0, 1.0)

    if not use_nice_bounds:
        return AxisRange(effective_min, effective_max)

    interval = config.interval or nice_interval(
        effective_min, effective_max, config.desired_intervals
    )
    lower = config.min if config.min is not None else round_down(effective_min, interval)
    upper = config.max if config.max is not None else round_up(effective_max, interval)
    if upper <= lower:
        lower, upper = lower - interval, upper + interval
    return AxisRange(
        clamp_finite(round_to_precision(lower, interval)),
        clamp_finite(round_to_precision(upper, interval)),
    )


def category_axis_bounds(point_count: int) -> AxisRange:
    """
    Bounds of an index-based category axis.

    Categories sit at 0..n-1 with half a category of margin on each side.
    """
    if point_count < 0:
        raise ValueError(f"Point count must be non-negative, got {point_count}")
    return AxisRange(-0.5, point_count - 0.5)


def data_bounds(points: Sequence[DataPoint]) -> DataBounds:
    """Raw x/y extents of a point sequence."""
    if not points:
        return EMPTY_DATA_BOUNDS

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return DataBounds(min_x=min(xs), max_x=max(xs), min_y=min(ys), max_y=max(ys))


def chart_bounds(
    points: Sequence[DataPoint],
    chart_type: ChartType = ChartType.LINE,
    x_axis: Optional[AxisConfiguration] = None,
    y_axis: Optional[AxisConfiguration] = None,
) -> Tuple[AxisRange, AxisRange]:
    """
    Calculate both axis ranges for a chart family.

    Bar-style charts place one category per point on the X axis and start
    the value axis at zero. Line and area charts use a continuous X axis
    spanning the data exactly.

    Args:
        points: The series, sorted by x
        chart_type: Chart family
        x_axis: X axis configuration
        y_axis: Y axis configuration

    Returns:
        (x_range, y_range)
    """
    extents = data_bounds(points)
    chart_type = ChartType(chart_type)

    if chart_type in _BAR_FAMILY:
        x_range = category_axis_bounds(max(len(points), 1))
        y_range = value_axis_bounds(extents.min_y, extents.max_y, y_axis, start_from_zero=True)
    else:
        x_range = domain_axis_bounds(extents.min_x, extents.max_x, x_axis)
        y_range = value_axis_bounds(extents.min_y, extents.max_y, y_axis)

    return x_range, y_range
