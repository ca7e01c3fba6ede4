"""Numeric axis and downsampling engine for charts."""

from .alignment import PeriodType, align, detect_period_type, for_values, with_interval
from .axis_calculator import generate_label_values, generate_minor_ticks, nice_bounds
from .chart_bounds import (
    category_axis_bounds,
    chart_bounds,
    data_bounds,
    domain_axis_bounds,
    value_axis_bounds,
)
from .downsampler import (
    adaptive_downsample,
    adaptive_target_count,
    downsample,
    downsample_if_needed,
    estimate_error,
    lttb_downsample,
    progressive_downsample,
)
from .models import (
    AxisBounds,
    AxisConfiguration,
    AxisRange,
    ChartType,
    DataBounds,
    DataPoint,
    DownsampleMethod,
    LabelAlignment,
    LabelAlignmentStrategy,
    RangePadding,
)
from .nice_numbers import next_nice_number, nice_interval, previous_nice_number
from .precision import decimal_places, round_to_precision

__version__ = "1.0.0"
