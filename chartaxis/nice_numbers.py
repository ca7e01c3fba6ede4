"""Nice-number interval arithmetic for axis ticks."""

import logging
import math

from .precision import EPSILON

logger = logging.getLogger(__name__)

# Range regimes
TINY_RANGE = 0.001
HUGE_RANGE = 1e9

# Interval returned for an all-zero range
ZERO_RANGE_INTERVAL = 0.2

# Interval returned when the range itself is not a finite number
NON_FINITE_INTERVAL = 1.0

# Upper snapping breakpoint (normalized value below it snaps to 5)
DEFAULT_UPPER_BREAKPOINT = 7.0
HUGE_UPPER_BREAKPOINT = 7.5


def _magnitude(value: float) -> float:
    """Power of ten at or below ``value`` (``value`` > 0)."""
    return 10.0 ** math.floor(math.log10(value))


def nice_fraction(normalized: float, upper_breakpoint: float = DEFAULT_UPPER_BREAKPOINT) -> float:
    """
    Snap a normalized value to 1, 2, 5 or 10.

    Args:
        normalized: Value in [1, 10) (other values snap to the nearest end)
        upper_breakpoint: Values below this (and >= 3) snap to 5

    Returns:
        One of 1.0, 2.0, 5.0, 10.0
    """
    if normalized < 1.5:
        return 1.0
    if normalized < 3.0:
        return 2.0
    if normalized < upper_breakpoint:
        return 5.0
    return 10.0


def _snap(range_size: float, desired_intervals: int, upper_breakpoint: float) -> float:
    rough = range_size / desired_intervals
    magnitude = _magnitude(rough)
    return nice_fraction(rough / magnitude, upper_breakpoint) * magnitude


def _zero_range_interval(min_value: float, max_value: float) -> float:
    """Interval for a range narrower than EPSILON."""
    if abs(min_value) < EPSILON and abs(max_value) < EPSILON:
        return ZERO_RANGE_INTERVAL

    average = abs((min_value + max_value) / 2)
    if average < EPSILON:
        return ZERO_RANGE_INTERVAL / 2

    return 10.0 ** (math.floor(math.log10(average)) - 1)


def _tiny_interval(range_size: float, desired_intervals: int) -> float:
    """Interval for ranges below 0.001, snapped at their own magnitude."""
    return _snap(range_size, desired_intervals, DEFAULT_UPPER_BREAKPOINT)


def _huge_interval(range_size: float, desired_intervals: int) -> float:
    """Interval for ranges above 1e9, biased toward 5 over 10."""
    return _snap(range_size, desired_intervals, HUGE_UPPER_BREAKPOINT)


def _overflow_interval(min_value: float, max_value: float, desired_intervals: int) -> float:
    """
    Interval for a range wider than the largest double.

    The width is taken in halves so it stays finite. Normalized values up
    to 20 snap to 10, and a snapped interval that would itself overflow
    drops to its power of ten.
    """
    half_rough = abs(max_value / 2 - min_value / 2) / desired_intervals
    magnitude = _magnitude(half_rough)
    normalized = 2 * half_rough / magnitude

    interval = nice_fraction(normalized, HUGE_UPPER_BREAKPOINT) * magnitude
    if not math.isfinite(interval):
        interval = magnitude
    return interval


def nice_interval(min_value: float, max_value: float, desired_intervals: int) -> float:
    """
    Calculate a "nice" tick interval for a numeric range.

    The rough interval ``range / desired_intervals`` is normalized into
    [1, 10) by its power of ten and snapped to 1, 2, 5 or 10 times that
    power. Zero-width, tiny (< 0.001) and huge (> 1e9) ranges each have
    their own handling so the result is always finite and positive.

    Args:
        min_value: Range start
        max_value: Range end
        desired_intervals: Approximate number of intervals wanted

    Returns:
        Positive tick interval

    Raises:
        ValueError: If desired_intervals is not positive
    """
    if desired_intervals <= 0:
        raise ValueError(f"Desired intervals must be positive, got {desired_intervals}")

    if not (math.isfinite(min_value) and math.isfinite(max_value)):
        logger.warning(
            f"Non-finite range [{min_value}, {max_value}], "
            f"using fallback interval {NON_FINITE_INTERVAL}"
        )
        return NON_FINITE_INTERVAL

    range_size = abs(max_value - min_value)

    # Overflow past the largest double lands here as inf
    if not math.isfinite(range_size):
        return _overflow_interval(min_value, max_value, desired_intervals)

    if range_size < EPSILON:
        return _zero_range_interval(min_value, max_value)

    if range_size < TINY_RANGE:
        return _tiny_interval(range_size, desired_intervals)

    if range_size > HUGE_RANGE:
        return _huge_interval(range_size, desired_intervals)

    return _snap(range_size, desired_intervals, DEFAULT_UPPER_BREAKPOINT)


def next_nice_number(value: float) -> float:
    """Smallest member of the 1-2-5 family above ``value`` at its magnitude."""
    if abs(value) < EPSILON:
        return 1.0

    magnitude = _magnitude(abs(value))
    normalized = value / magnitude

    if normalized < 1.0:
        step = 1.0
    elif normalized < 2.0:
        step = 2.0
    elif normalized < 5.0:
        step = 5.0
    else:
        step = 10.0
    return step * magnitude


def previous_nice_number(value: float) -> float:
    """Next lower member of the 1-2-5 family at ``value``'s magnitude."""
    if abs(value) < EPSILON:
        return -1.0

    magnitude = _magnitude(abs(value))
    normalized = value / magnitude

    if normalized <= 1.0:
        step = 0.5
    elif normalized <= 2.0:
        step = 1.0
    elif normalized <= 5.0:
        step = 2.0
    elif normalized <= 10.0:
        step = 5.0
    else:
        step = 10.0
    return step * magnitude
