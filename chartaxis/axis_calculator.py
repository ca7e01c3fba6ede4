"""Axis bounds calculation with padding policies and degenerate-range handling."""

import logging
import math
from typing import Optional

from .models import AxisBounds, RangePadding
from .nice_numbers import nice_fraction, nice_interval
from .precision import EPSILON, clamp_finite, decimal_places, round_to_precision
from .ticks import generate_label_values, generate_minor_ticks, interval_count

logger = logging.getLogger(__name__)

# Above this data range the auto policy snaps to round numbers
AUTO_ROUND_RANGE = 1000.0

# Zero-range fallback around 0
_ZERO_BOUNDS = AxisBounds(min=-1.0, max=1.0, interval=0.5, decimal_places=1)

__all__ = [
    "nice_bounds",
    "zero_range_bounds",
    "round_down",
    "round_up",
    "round_to_nice_number",
    "generate_label_values",
    "generate_minor_ticks",
]


def round_down(value: float, interval: float) -> float:
    """Largest multiple of ``interval`` at or below ``value``."""
    return math.floor(value / interval) * interval


def round_up(value: float, interval: float) -> float:
    """Smallest multiple of ``interval`` at or above ``value``."""
    return math.ceil(value / interval) * interval


def round_to_nice_number(value: float, interval: float, round_down: bool) -> float:
    """
    Snap ``value`` to a 1-2-5 multiple at the interval's magnitude.

    Args:
        value: Data bound to snap
        interval: Tick interval whose power of ten sets the scale
        round_down: Snap toward negative infinity when True, otherwise up

    Returns:
        Snapped bound
    """
    magnitude = 10.0 ** math.floor(math.log10(interval))
    normalized = value / magnitude
    fraction = nice_fraction(normalized)

    if round_down:
        snapped = math.floor(normalized / fraction) * fraction
    else:
        snapped = math.ceil(normalized / fraction) * fraction
    return snapped * magnitude


def zero_range_bounds(value: float) -> AxisBounds:
    """
    Bounds for a range whose min and max coincide.

    The half-width scales with the value: half the value below 1, a fixed 10
    below 100, and half its power of ten above that. The interval is half the
    half-width, so the axis always spans four intervals.

    Args:
        value: The single data value

    Returns:
        Bounds centred on ``value`` with ``min < max``
    """
    if abs(value) < EPSILON:
        return _ZERO_BOUNDS

    magnitude_value = abs(value)
    if magnitude_value < 1.0:
        half_width = magnitude_value * 0.5
    elif magnitude_value < 100:
        half_width = 10.0
    else:
        half_width = 10.0 ** math.floor(math.log10(magnitude_value)) * 0.5

    interval = half_width / 2
    return AxisBounds(
        min=clamp_finite(round_to_precision(value - half_width, interval)),
        max=clamp_finite(round_to_precision(value + half_width, interval)),
        interval=interval,
        decimal_places=decimal_places(interval),
    )


def _apply_padding(
    data_min: float,
    data_max: float,
    interval: float,
    padding: RangePadding,
) -> AxisBounds:
    if padding == RangePadding.NONE:
        lower, upper = data_min, data_max
    elif padding == RangePadding.NORMAL:
        lower, upper = round_down(data_min, interval), round_up(data_max, interval)
    elif padding == RangePadding.ROUND:
        lower = round_to_nice_number(data_min, interval, round_down=True)
        upper = round_to_nice_number(data_max, interval, round_down=False)
    elif padding == RangePadding.ADDITIONAL:
        lower = round_down(data_min, interval) - interval
        upper = round_up(data_max, interval) + interval
    else:
        if data_max - data_min > AUTO_ROUND_RANGE:
            lower = round_to_nice_number(data_min, interval, round_down=True)
            upper = round_to_nice_number(data_max, interval, round_down=False)
        elif data_min >= 0 and data_max > 0:
            lower, upper = 0.0, round_up(data_max, interval)
        else:
            lower, upper = round_down(data_min, interval), round_up(data_max, interval)

    if padding != RangePadding.NONE:
        lower = clamp_finite(round_to_precision(lower, interval))
        upper = clamp_finite(round_to_precision(upper, interval))

    return AxisBounds(
        min=lower,
        max=upper,
        interval=interval,
        decimal_places=decimal_places(interval),
    )


def nice_bounds(
    data_min: float,
    data_max: float,
    desired_intervals: int = 5,
    padding: RangePadding = RangePadding.AUTO,
    interval: Optional[float] = None,
) -> AxisBounds:
    """
    Calculate human-friendly axis bounds for a data range.

    Args:
        data_min: Smallest data value
        data_max: Largest data value
        desired_intervals: Approximate number of tick intervals
        padding: How far the bounds extend past the data
        interval: Explicit tick interval; computed when omitted

    Returns:
        AxisBounds with a positive interval and min < max

    Raises:
        ValueError: On a non-positive desired_intervals or interval, when
            data_min exceeds data_max, or when an explicit interval would
            need more than MAX_TICK_COUNT ticks
    """
    if desired_intervals <= 0:
        raise ValueError(f"Desired intervals must be positive, got {desired_intervals}")
    if interval is not None and not interval > 0:
        raise ValueError(f"Interval must be positive, got {interval}")

    if not (math.isfinite(data_min) and math.isfinite(data_max)):
        logger.warning(f"Non-finite data range [{data_min}, {data_max}], using fallback bounds")
        return _ZERO_BOUNDS

    if data_min > data_max:
        raise ValueError(f"Min ({data_min}) must be <= max ({data_max})")

    if abs(data_max - data_min) < EPSILON:
        logger.debug(f"Zero-width range at {data_min}, centring bounds on the value")
        return zero_range_bounds(data_min)

    # An explicit interval far finer than the range would flood the axis
    if interval is not None:
        interval_count(data_min, data_max, interval)

    effective_interval = interval or nice_interval(data_min, data_max, desired_intervals)
    return _apply_padding(data_min, data_max, effective_interval, RangePadding(padding))
