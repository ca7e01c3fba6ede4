"""Major and minor tick value generation."""

import math
from typing import List

from .precision import round_to_precision

# Relative slack used when comparing generated ticks against the axis end
_TOLERANCE = 1e-9

# Upper limit on the ticks one axis may produce
MAX_TICK_COUNT = 10000


def _is_aligned(value: float, interval: float) -> bool:
    """True when ``value`` sits on a multiple of ``interval``."""
    steps = value / interval
    return abs(steps - round(steps)) < _TOLERANCE * max(1.0, abs(steps))


def interval_count(min_value: float, max_value: float, interval: float) -> float:
    """
    Number of ``interval`` steps between ``min_value`` and ``max_value``.

    Each bound is divided separately, so axes spanning more than the largest
    double still give a finite count.

    Raises:
        ValueError: If the count is not finite or exceeds MAX_TICK_COUNT
    """
    count = max_value / interval - min_value / interval
    if not math.isfinite(count) or count > MAX_TICK_COUNT:
        raise ValueError(
            f"Interval {interval} over [{min_value}, {max_value}] gives {count} ticks "
            f"(limit {MAX_TICK_COUNT})"
        )
    return count


def generate_label_values(min_value: float, max_value: float, interval: float) -> List[float]:
    """
    Generate major tick values from ``min_value`` to ``max_value``.

    Values are computed as ``min + i * interval`` rather than by repeated
    addition, so error does not accumulate along the axis. Each value is
    cleaned to the interval's precision when the axis starts on an interval
    multiple; exact data bounds keep ten decimals instead.

    Args:
        min_value: Axis minimum
        max_value: Axis maximum
        interval: Tick spacing

    Returns:
        Ascending tick values; ``max_value`` is always the last one

    Raises:
        ValueError: If interval is not positive, min exceeds max, or the
            axis would need more than MAX_TICK_COUNT ticks
    """
    if not interval > 0:
        raise ValueError(f"Interval must be positive, got {interval}")
    if min_value > max_value:
        raise ValueError(f"Min ({min_value}) must be <= max ({max_value})")

    reference = interval if _is_aligned(min_value, interval) else None
    slack = interval * _TOLERANCE
    steps = math.floor(interval_count(min_value, max_value, interval) + 0.5) + 1

    values: List[float] = []
    for i in range(steps):
        value = min_value + interval * i
        if value <= max_value + slack:
            values.append(round_to_precision(value, reference))

    if not values or abs(values[-1] - max_value) > slack:
        values.append(max_value)

    return values


def generate_minor_ticks(
    min_value: float,
    max_value: float,
    interval: float,
    minor_ticks_per_interval: int,
) -> List[float]:
    """
    Generate minor tick values strictly between ``min_value`` and ``max_value``.

    Positions that coincide with a major tick are skipped.

    Args:
        min_value: Axis minimum (first major tick)
        max_value: Axis maximum
        interval: Major tick spacing
        minor_ticks_per_interval: Minor ticks between two major ticks

    Returns:
        Ascending minor tick values, empty when no minor ticks are requested

    Raises:
        ValueError: If the axis would need more than MAX_TICK_COUNT ticks
    """
    if minor_ticks_per_interval <= 0 or not interval > 0:
        return []

    divisions = minor_ticks_per_interval + 1
    minor_interval = interval / divisions
    interval_count(min_value, max_value, minor_interval)

    reference = minor_interval if _is_aligned(min_value, minor_interval) else None
    slack = minor_interval * _TOLERANCE

    ticks: List[float] = []
    k = 1
    while True:
        value = min_value + minor_interval * k
        if value >= max_value - slack:
            break
        if k % divisions != 0:
            ticks.append(round_to_precision(value, reference))
        k += 1

    return ticks
