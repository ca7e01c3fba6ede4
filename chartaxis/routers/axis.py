"""Axis router: bounds, chart ranges and label alignment."""

import logging

from fastapi import APIRouter, HTTPException

from ..alignment import align
from ..axis_calculator import nice_bounds
from ..chart_bounds import chart_bounds
from ..models import (
    BoundsRequest,
    BoundsResponse,
    ChartBoundsRequest,
    ChartBoundsResponse,
    LabelAlignment,
    LabelsRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/bounds", response_model=BoundsResponse)
async def get_bounds(request: BoundsRequest):
    """Nice bounds and tick values for a data range."""
    try:
        bounds = nice_bounds(
            request.data_min,
            request.data_max,
            desired_intervals=request.desired_intervals,
            padding=request.padding,
            interval=request.interval,
        )
        ticks = bounds.major_ticks
    except ValueError as e:
        logger.warning(f"Rejected bounds request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return BoundsResponse(
        min=bounds.min,
        max=bounds.max,
        interval=bounds.interval,
        decimal_places=bounds.decimal_places,
        ticks=ticks,
    )


@router.post("/chart-bounds", response_model=ChartBoundsResponse)
async def get_chart_bounds(request: ChartBoundsRequest):
    """Both axis ranges for a series drawn as the given chart type."""
    x_range, y_range = chart_bounds(
        request.points,
        chart_type=request.chart_type,
        x_axis=request.x_axis,
        y_axis=request.y_axis,
    )
    return ChartBoundsResponse(
        x_min=x_range.min,
        x_max=x_range.max,
        y_min=y_range.min,
        y_max=y_range.max,
    )


@router.post("/labels", response_model=LabelAlignment)
async def get_labels(request: LabelsRequest):
    """Data point indices that should carry axis labels."""
    return align(request.points, request.desired_label_count, request.strategy)
