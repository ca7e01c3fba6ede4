"""LTTB (Largest Triangle Three Buckets) downsampling algorithm."""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .config import settings
from .models import DataPoint, DownsampleMethod

logger = logging.getLogger(__name__)


def triangle_area(
    a: Tuple[float, float], b: Tuple[float, float], c: Tuple[float, float]
) -> float:
    """Area of the triangle a-b-c (half the absolute cross product)."""
    return abs(
        (a[0] - c[0]) * (b[1] - a[1])
        - (a[0] - b[0]) * (c[1] - a[1])
    ) / 2


def _bucket_bounds(index: int, bucket_size: float, count: int) -> Tuple[int, int]:
    """Half-open index range of interior bucket ``index``; last point excluded."""
    start = int(math.floor(index * bucket_size)) + 1
    end = int(math.floor((index + 1) * bucket_size)) + 1
    return min(start, count - 1), min(end, count - 1)


def _average(points: Sequence[DataPoint]) -> Tuple[float, float]:
    n = len(points)
    return sum(p.x for p in points) / n, sum(p.y for p in points) / n


def select_bucket_point(
    previous: DataPoint,
    bucket: Sequence[DataPoint],
    apex: Tuple[float, float],
) -> DataPoint:
    """
    Pick the bucket point forming the largest triangle with its neighbours.

    Args:
        previous: Point selected from the preceding bucket
        bucket: Candidate points (non-empty)
        apex: Average of the next bucket, or the last point

    Returns:
        The first candidate reaching the maximum area
    """
    anchor = (previous.x, previous.y)
    max_area = -1.0
    selected = bucket[0]

    for candidate in bucket:
        area = triangle_area(anchor, (candidate.x, candidate.y), apex)
        if area > max_area:
            max_area = area
            selected = candidate

    return selected


def lttb_downsample(points: Sequence[DataPoint], target: int) -> List[DataPoint]:
    """
    Reduce a DataPoint series to ``target`` points with LTTB.

    Each interior bucket contributes the point spanning the widest triangle
    between the previous pick and the next bucket's centroid, so spikes and
    dips survive the reduction.

    Args:
        points: Points sorted by x
        target: Target number of points

    Returns:
        Downsampled list of points (a new list; the points themselves are shared)
    """
    n = len(points)

    if n <= target or target <= 0:
        return list(points)

    if target < 3:
        return [points[0], points[-1]]

    # Endpoints are kept verbatim
    sampled = [points[0]]

    # Interior buckets share the n - 2 inner points
    bucket_size = (n - 2) / (target - 2)
    bucket_count = target - 2

    previous = points[0]

    for i in range(bucket_count):
        start, end = _bucket_bounds(i, bucket_size, n)
        if start >= end:
            continue

        # Final bucket, or an empty next bucket, aims at the true last point
        next_start, next_end = _bucket_bounds(i + 1, bucket_size, n)
        if i == bucket_count - 1 or next_start >= next_end:
            apex = (points[-1].x, points[-1].y)
        else:
            apex = _average(points[next_start:next_end])

        previous = select_bucket_point(previous, points[start:end], apex)
        sampled.append(previous)

    # Close the series on its true last point
    sampled.append(points[-1])

    return sampled


def adaptive_target_count(
    pixel_width: float,
    points_per_pixel: Optional[float] = None,
) -> int:
    """
    Choose a target point count for a plot width.

    ``pixel_width * points_per_pixel``, clamped to the configured range
    (50 to 2000 by default).
    """
    density = points_per_pixel if points_per_pixel is not None else settings.adaptive_points_per_pixel
    target = int(math.floor(pixel_width * density + 0.5))
    return max(settings.adaptive_min_points, min(target, settings.adaptive_max_points))


def adaptive_downsample(
    points: Sequence[DataPoint],
    pixel_width: float,
    points_per_pixel: Optional[float] = None,
) -> List[DataPoint]:
    """Downsample to a target derived from the plot width."""
    return lttb_downsample(points, adaptive_target_count(pixel_width, points_per_pixel))


def progressive_downsample(
    points: Sequence[DataPoint],
    levels: Optional[Sequence[int]] = None,
) -> Dict[int, List[DataPoint]]:
    """
    Build several levels of detail, one per target count.

    Args:
        points: Points sorted by x
        levels: Target counts; the configured levels when omitted

    Returns:
        Mapping of level to downsampled series
    """
    levels = levels if levels is not None else settings.progressive_levels
    return {level: lttb_downsample(points, level) for level in levels}


def _point_to_segment_distance(
    point: DataPoint, start: DataPoint, end: DataPoint
) -> float:
    dx = end.x - start.x
    dy = end.y - start.y

    if dx == 0 and dy == 0:
        return math.hypot(point.x - start.x, point.y - start.y)

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / (dx * dx + dy * dy)
    t = max(0.0, min(1.0, t))

    return math.hypot(point.x - (start.x + t * dx), point.y - (start.y + t * dy))


def estimate_error(
    original: Sequence[DataPoint],
    downsampled: Sequence[DataPoint],
) -> float:
    """
    Estimate the visual error introduced by downsampling.

    For every segment of the downsampled line, the original points inside its
    x span are measured against it. The mean distance is normalized by the
    original y range.

    Both series are sorted by x, so the segments are matched to the original
    in one forward sweep (linear in the combined length).

    Returns:
        Error between 0 (exact) and 1
    """
    if not original or not downsampled:
        return 0.0

    total_error = 0.0
    comparisons = 0
    count = len(original)
    low = 0

    for start, end in zip(downsampled, downsampled[1:]):
        while low < count and original[low].x < start.x:
            low += 1
        high = low
        while high < count and original[high].x <= end.x:
            high += 1

        # Segments holding only their own endpoints carry no error
        if high - low <= 2:
            continue

        for point in original[low:high]:
            total_error += _point_to_segment_distance(point, start, end)
            comparisons += 1

    if comparisons == 0:
        return 0.0

    ys = [p.y for p in original]
    y_range = max(ys) - min(ys)
    if y_range <= 0:
        return 0.0

    return max(0.0, min(1.0, (total_error / comparisons) / y_range))


# ---------------------------------------------------------------------------
# Simple bucket methods
# ---------------------------------------------------------------------------


def _first_per_bucket(points: Sequence[DataPoint], target: int) -> List[DataPoint]:
    bucket_size = len(points) / target
    return [points[int(math.floor(i * bucket_size))] for i in range(target)]


def _last_per_bucket(points: Sequence[DataPoint], target: int) -> List[DataPoint]:
    bucket_size = len(points) / target
    last = len(points) - 1
    return [
        points[max(0, min(int(math.floor((i + 1) * bucket_size - 1)), last))]
        for i in range(target)
    ]


def _average_per_bucket(points: Sequence[DataPoint], target: int) -> List[DataPoint]:
    bucket_size = len(points) / target
    averaged = []

    for i in range(target):
        start = int(math.floor(i * bucket_size))
        end = min(int(math.floor((i + 1) * bucket_size)), len(points))
        if start >= end:
            continue
        x, y = _average(points[start:end])
        averaged.append(DataPoint(x=x, y=y))

    return averaged


def _min_max_per_bucket(points: Sequence[DataPoint], target: int) -> List[DataPoint]:
    """Keep the extremes of ``target // 2`` buckets, in x order."""
    bucket_count = max(1, min(target // 2, len(points) // 2))
    bucket_size = len(points) / bucket_count
    kept = []

    for i in range(bucket_count):
        start = int(math.floor(i * bucket_size))
        end = min(int(math.floor((i + 1) * bucket_size)), len(points))
        bucket = points[start:end]
        if not bucket:
            continue

        low = min(bucket, key=lambda p: p.y)
        high = max(bucket, key=lambda p: p.y)
        if low is high:
            kept.append(low)
        elif low.x <= high.x:
            kept.extend((low, high))
        else:
            kept.extend((high, low))

    return kept


_METHODS = {
    DownsampleMethod.FIRST: _first_per_bucket,
    DownsampleMethod.LAST: _last_per_bucket,
    DownsampleMethod.AVERAGE: _average_per_bucket,
    DownsampleMethod.MIN_MAX: _min_max_per_bucket,
}


def downsample(
    points: Sequence[DataPoint],
    target: int,
    method: DownsampleMethod = DownsampleMethod.LTTB,
) -> List[DataPoint]:
    """
    Reduce a series to at most ``target`` points with the given method.

    Args:
        points: Points sorted by x
        target: Target number of points
        method: Bucket reduction method

    Returns:
        Downsampled list of points
    """
    method = DownsampleMethod(method)

    if len(points) <= target or target <= 0:
        return list(points)

    if method == DownsampleMethod.LTTB:
        return lttb_downsample(points, target)

    if target == 2:
        return [points[0], points[-1]]
    if target == 1:
        return [points[-1]]

    return _METHODS[method](points, target)


def downsample_if_needed(
    points: Sequence[DataPoint],
    threshold: Optional[int] = None,
) -> List[DataPoint]:
    """Apply LTTB only when the series exceeds the size threshold."""
    threshold = threshold if threshold is not None else settings.downsample_threshold

    if len(points) <= threshold:
        return list(points)

    logger.info(f"Downsampling {len(points)} points to {threshold}")
    return lttb_downsample(points, threshold)
