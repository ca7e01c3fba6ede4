"""Downsampling router."""

import time

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..downsampler import adaptive_target_count, downsample, estimate_error
from ..models import DownsampleRequest, DownsampleResponse

router = APIRouter()


@router.post("", response_model=DownsampleResponse)
async def downsample_series(request: DownsampleRequest):
    """Reduce a series for display, preserving its visual shape."""
    return downsample_points(request)


def downsample_points(request: DownsampleRequest) -> DownsampleResponse:
    """Run the requested reduction and measure how far it drifts from the original."""
    start_time = time.time()

    if request.target_points is not None:
        target = request.target_points
    elif request.pixel_width is not None:
        target = adaptive_target_count(request.pixel_width)
    else:
        target = settings.downsample_threshold

    try:
        points = downsample(request.points, target, request.method)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    duration_ms = int((time.time() - start_time) * 1000)

    return DownsampleResponse(
        points=points,
        original_count=len(request.points),
        returned_count=len(points),
        error_estimate=estimate_error(request.points, points),
        duration_ms=duration_ms,
    )
