"""Pydantic models for engine values and API request/response schemas."""

from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .ticks import generate_label_values, generate_minor_ticks


class RangePadding(str, Enum):
    """How an axis range is widened around the data."""

    AUTO = "auto"
    NONE = "none"
    NORMAL = "normal"
    ROUND = "round"
    ADDITIONAL = "additional"


class LabelAlignmentStrategy(str, Enum):
    """How label positions are picked among data points."""

    EVEN_DISTRIBUTION = "even_distribution"
    ROUND_TO_NICE = "round_to_nice"
    START_OF_PERIOD = "start_of_period"


class DownsampleMethod(str, Enum):
    """Bucket reduction method."""

    LTTB = "lttb"
    FIRST = "first"
    LAST = "last"
    AVERAGE = "average"
    MIN_MAX = "min_max"


class ChartType(str, Enum):
    """Chart family, which decides the axis bounds policy."""

    LINE = "line"
    AREA = "area"
    BAR = "bar"
    STACKED_BAR = "stacked_bar"


class DataPoint(BaseModel):
    """Single chart data point."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    label: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class AxisRange(NamedTuple):
    """Final (min, max) of one axis."""

    min: float
    max: float


class DataBounds(NamedTuple):
    """Raw extents of a point sequence."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def x_range(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y


class AxisBounds(BaseModel):
    """Calculated bounds and tick spacing of an axis."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    interval: float = Field(..., gt=0)
    decimal_places: int = Field(default=2, ge=0)
    minor_tick_interval: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_order(self) -> "AxisBounds":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must be <= max ({self.max})")
        return self

    @property
    def range(self) -> float:
        return self.max - self.min

    @property
    def major_tick_count(self) -> int:
        """Number of major ticks, both ends included."""
        if self.range == 0:
            return 1
        return round(self.max / self.interval - self.min / self.interval) + 1

    @property
    def major_ticks(self) -> List[float]:
        return generate_label_values(self.min, self.max, self.interval)

    @property
    def minor_ticks(self) -> List[float]:
        if self.minor_tick_interval is None:
            return []
        per_interval = round(self.interval / self.minor_tick_interval) - 1
        return generate_minor_ticks(self.min, self.max, self.interval, per_interval)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def normalize(self, value: float) -> float:
        """Map ``value`` into [0, 1] along the axis (0.5 for a zero range)."""
        if self.range == 0:
            return 0.5
        return (value - self.min) / self.range

    def denormalize(self, fraction: float) -> float:
        return self.min + fraction * self.range


class AxisConfiguration(BaseModel):
    """Axis options supplied by the chart author."""

    min: Optional[float] = None
    max: Optional[float] = None
    interval: Optional[float] = Field(default=None, gt=0)
    desired_intervals: int = Field(default=5, gt=0)
    range_padding: RangePadding = RangePadding.AUTO

    @model_validator(mode="after")
    def _check_explicit_range(self) -> "AxisConfiguration":
        if self.min is not None and self.max is not None and self.min >= self.max:
            raise ValueError(f"Axis min ({self.min}) must be less than max ({self.max})")
        return self


class LabelAlignment(BaseModel):
    """Data point indices that carry axis labels."""

    model_config = ConfigDict(frozen=True)

    indices: List[int] = Field(default_factory=list)
    values: List[float] = Field(default_factory=list)
    total_point_count: int = 0
    interval: Optional[float] = None

    @classmethod
    def empty(cls) -> "LabelAlignment":
        return cls()

    @property
    def label_count(self) -> int:
        return len(self.indices)

    @property
    def is_empty(self) -> bool:
        return not self.indices

    @property
    def is_valid(self) -> bool:
        if self.is_empty:
            return True
        in_bounds = all(0 <= i < self.total_point_count for i in self.indices)
        return in_bounds and len(self.indices) == len(self.values)

    def should_show_label(self, point_index: int) -> bool:
        return point_index in self.indices

    def label_position(self, point_index: int) -> Optional[int]:
        """Position of ``point_index`` within ``indices``, or None if unlabeled."""
        try:
            return self.indices.index(point_index)
        except ValueError:
            return None

    def relative_position(self, point_index: int) -> float:
        if self.total_point_count <= 1:
            return 0.0
        return point_index / (self.total_point_count - 1)


# ---------------------------------------------------------------------------
# API schemas
# ---------------------------------------------------------------------------


class DownsampleRequest(BaseModel):
    """Downsampling request."""

    points: List[DataPoint]
    target_points: Optional[int] = Field(default=None, ge=1, le=100000)
    pixel_width: Optional[float] = Field(default=None, gt=0)
    method: DownsampleMethod = DownsampleMethod.LTTB


class DownsampleResponse(BaseModel):
    """Downsampling response."""

    points: List[DataPoint]
    original_count: int
    returned_count: int
    error_estimate: float
    duration_ms: int


class BoundsRequest(BaseModel):
    """Axis bounds request."""

    data_min: float
    data_max: float
    desired_intervals: int = Field(default=5, ge=1, le=100)
    padding: RangePadding = RangePadding.AUTO
    interval: Optional[float] = Field(default=None, gt=0)


class BoundsResponse(BaseModel):
    """Axis bounds with the tick values they produce."""

    min: float
    max: float
    interval: float
    decimal_places: int
    ticks: List[float]


class ChartBoundsRequest(BaseModel):
    """Chart-level bounds request."""

    points: List[DataPoint]
    chart_type: ChartType = ChartType.LINE
    x_axis: Optional[AxisConfiguration] = None
    y_axis: Optional[AxisConfiguration] = None


class ChartBoundsResponse(BaseModel):
    """Both axis ranges of a chart."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float


class LabelsRequest(BaseModel):
    """Label alignment request."""

    points: List[DataPoint]
    desired_label_count: int = Field(default=6, ge=0, le=1000)
    strategy: LabelAlignmentStrategy = LabelAlignmentStrategy.EVEN_DISTRIBUTION


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
