"""
Axis label alignment to exact data point indices.

When a series has far more points than labels (365 daily values, 12 labels),
labels must still land on real data points. This module picks those point
indices. The first and last point always carry a label.
"""

import logging
import math
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .models import DataPoint, LabelAlignment, LabelAlignmentStrategy

logger = logging.getLogger(__name__)

# Spacing sample used by the sequential check (first N points)
SEQUENTIAL_SAMPLE_SIZE = 10
SEQUENTIAL_TOLERANCE = 0.2

# Nearest-index search window, as a share of the step, clamped to [1, 10]
SEARCH_WINDOW_RATIO = 0.2
SEARCH_WINDOW_MIN = 1
SEARCH_WINDOW_MAX = 10

_NICE_INDEX_STEPS = (1, 2, 5, 10, 20, 25, 50, 100)


class PeriodType(str, Enum):
    """Calendar granularity inferred for time-like data."""

    HOURLY = "hourly"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"
    IRREGULAR = "irregular"


# (total_points, desired_label_count, rough_interval) -> matches
PeriodPredicate = Callable[[int, int, float], bool]

# Checked in order; the first match wins, CUSTOM otherwise
PERIOD_RULES: List[Tuple[PeriodPredicate, PeriodType]] = [
    # 24 hourly points, ~6 labels
    (lambda n, k, rough: n <= 24 and rough <= 4, PeriodType.HOURLY),
    # a month of daily points, weekly labels
    (lambda n, k, rough: 28 <= n <= 31 and k <= 8, PeriodType.WEEKLY),
    # a year of daily points, monthly labels
    (lambda n, k, rough: 90 <= n <= 366 and k <= 12, PeriodType.MONTHLY),
    # a year of weekly points, quarterly labels
    (lambda n, k, rough: 48 <= n <= 56 and k <= 6, PeriodType.QUARTERLY),
    # a year of monthly points, quarterly labels
    (lambda n, k, rough: 12 <= n <= 15 and k <= 4, PeriodType.QUARTERLY),
    (lambda n, k, rough: 10 <= n <= 100 and rough >= 10, PeriodType.YEARLY),
]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def nice_index_step(rough_interval: float) -> int:
    """
    Snap a rough index interval to a nice integer step.

    Steps come from 1, 2, 5, 10, 20, 25, 50, 100; anything larger rounds up
    to the next multiple of ten.
    """
    for step in _NICE_INDEX_STEPS:
        if rough_interval <= step:
            return step
    return int(math.ceil(rough_interval / 10)) * 10


def _build(
    points: Sequence[DataPoint],
    indices: List[int],
    interval: Optional[float] = None,
) -> LabelAlignment:
    return LabelAlignment(
        indices=indices,
        values=[points[i].x for i in indices],
        total_point_count=len(points),
        interval=interval,
    )


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def _even_distribution(points: Sequence[DataPoint], label_count: int) -> LabelAlignment:
    total = len(points)
    interval = (total - 1) / (label_count - 1)

    indices = [0]
    indices.extend(_round_half_up(i * interval) for i in range(1, label_count - 1))
    indices.append(total - 1)

    return _build(points, indices, interval)


def _round_to_nice(points: Sequence[DataPoint], label_count: int) -> LabelAlignment:
    total = len(points)
    step = nice_index_step(total / label_count)

    indices = list(range(0, total - 1, step))
    if indices[-1] != total - 1:
        indices.append(total - 1)

    return _build(points, indices, float(step))


def is_sequential(points: Sequence[DataPoint]) -> bool:
    """
    Check whether x values look like an evenly spaced time series.

    x must strictly increase across the whole sequence, and the gaps within
    the first ten points must stay within 20% of their mean.
    """
    if len(points) < 3:
        return True

    for previous, current in zip(points, points[1:]):
        if current.x <= previous.x:
            return False

    sample = points[:SEQUENTIAL_SAMPLE_SIZE]
    spacings = [b.x - a.x for a, b in zip(sample, sample[1:])]
    average = sum(spacings) / len(spacings)
    max_deviation = max(abs(s - average) for s in spacings)

    return max_deviation < average * SEQUENTIAL_TOLERANCE


def detect_period_type(points: Sequence[DataPoint], desired_label_count: int) -> PeriodType:
    """Infer the natural label period of a series from its size and spacing."""
    if not is_sequential(points):
        return PeriodType.IRREGULAR

    total = len(points)
    desired_label_count = max(desired_label_count, 2)
    rough_interval = total / desired_label_count

    for predicate, period in PERIOD_RULES:
        if predicate(total, desired_label_count, rough_interval):
            return period

    return PeriodType.CUSTOM


def period_step(period: PeriodType, total_points: int, desired_label_count: int) -> int:
    """Index step between labels for a period type (always >= 1)."""
    desired_label_count = max(desired_label_count, 2)
    rough_interval = total_points / desired_label_count

    if period == PeriodType.HOURLY:
        step = min(max(_round_half_up(rough_interval), 1), 6)
    elif period == PeriodType.WEEKLY:
        step = 7
    elif period == PeriodType.MONTHLY:
        step = _round_half_up(total_points / 12)
    elif period == PeriodType.QUARTERLY:
        step = _round_half_up(total_points / 4)
    elif period == PeriodType.CUSTOM:
        step = nice_index_step(rough_interval)
    else:
        step = _round_half_up(rough_interval)

    return max(step, 1)


def _nearest_index(
    points: Sequence[DataPoint],
    ideal_position: int,
    ideal_x: float,
    window: int,
) -> int:
    """Index within ``window`` of ``ideal_position`` whose x is closest to ``ideal_x``."""
    start = max(0, ideal_position - window)
    end = min(len(points) - 1, ideal_position + window)

    best = min(max(ideal_position, 0), len(points) - 1)
    best_distance = math.inf
    for i in range(start, end + 1):
        distance = abs(points[i].x - ideal_x)
        if distance < best_distance:
            best_distance = distance
            best = i
    return best


def _start_of_period(points: Sequence[DataPoint], label_count: int) -> LabelAlignment:
    period = detect_period_type(points, label_count)

    if period == PeriodType.IRREGULAR:
        logger.debug("Data is not sequential, falling back to even distribution")
        return _even_distribution(points, label_count)

    total = len(points)
    step = period_step(period, total, label_count)
    window = min(max(_round_half_up(step * SEARCH_WINDOW_RATIO), SEARCH_WINDOW_MIN), SEARCH_WINDOW_MAX)

    origin = points[0].x
    spacing = (points[-1].x - origin) / (total - 1)

    indices = [0]
    for ideal_position in range(step, total - 1, step):
        ideal_x = origin + ideal_position * spacing
        index = _nearest_index(points, ideal_position, ideal_x, window)
        if indices[-1] < index < total - 1:
            indices.append(index)

    indices.append(total - 1)

    logger.debug(f"Detected {period.value} period, step {step}, {len(indices)} labels")
    return _build(points, indices, float(step))


_STRATEGIES = {
    LabelAlignmentStrategy.EVEN_DISTRIBUTION: _even_distribution,
    LabelAlignmentStrategy.ROUND_TO_NICE: _round_to_nice,
    LabelAlignmentStrategy.START_OF_PERIOD: _start_of_period,
}


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def align(
    points: Sequence[DataPoint],
    desired_label_count: int,
    strategy: LabelAlignmentStrategy = LabelAlignmentStrategy.EVEN_DISTRIBUTION,
) -> LabelAlignment:
    """
    Choose which data points carry axis labels.

    Guarantees for ``len(points) > desired_label_count``:

    - the first label is at index 0 and the last at index n-1;
    - indices are strictly increasing;
    - every label sits on an actual data point.

    Args:
        points: Series sorted by x
        desired_label_count: Labels wanted; values below 2 count as 2
        strategy: Index selection strategy

    Returns:
        LabelAlignment (empty for an empty series)
    """
    if not points:
        return LabelAlignment.empty()

    label_count = max(desired_label_count, 2)

    if len(points) <= label_count:
        return _build(points, list(range(len(points))))

    return _STRATEGIES[LabelAlignmentStrategy(strategy)](points, label_count)


def for_values(points: Sequence[DataPoint], target_values: Sequence[float]) -> LabelAlignment:
    """
    Align labels to the data points nearest each target x value.

    One index per target, in target order; ties go to the earlier point.
    """
    if not points:
        return LabelAlignment.empty()

    indices = []
    for target in target_values:
        closest = min(range(len(points)), key=lambda i: abs(points[i].x - target))
        indices.append(closest)

    return _build(points, indices)


def with_interval(points: Sequence[DataPoint], step: int) -> LabelAlignment:
    """
    Label every ``step``-th point, always including the last one.

    Raises:
        ValueError: If step is not positive
    """
    if step <= 0:
        raise ValueError(f"Step must be positive, got {step}")
    if not points:
        return LabelAlignment.empty()

    total = len(points)
    indices = list(range(0, total, step))
    if indices[-1] != total - 1:
        indices.append(total - 1)

    return _build(points, indices, float(step))


def validate_alignment(alignment: LabelAlignment, point_count: int) -> bool:
    """True when every label index falls inside ``[0, point_count)``."""
    return all(0 <= i < point_count for i in alignment.indices)
