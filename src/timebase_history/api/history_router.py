"""Tag history endpoints."""

from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Query, Request
from loguru import logger

from timebase_history.api.history_service import HistoryService
from timebase_history.api.models import ResampleResponse, TableResponse, ValueResponse
from timebase_history.core.lookup import ResampleMethod
from timebase_history.exceptions import ServiceError, StateError, ValidationError
from timebase_history.utils.errors import to_http_error


router = APIRouter(prefix="/history", tags=["history"])


def get_service(request: Request) -> HistoryService:
    """Get history service from app state."""
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise to_http_error(StateError("History service not initialized"))
    return service


@router.get("/datasets/{dataset}/value", response_model=ValueResponse)
async def get_value(
    request: Request,
    dataset: str,
    tagname: str = Query(..., description="Tag name"),
    at: datetime = Query(..., description="Query instant (ISO-8601 with offset)"),
    start: Optional[datetime] = Query(None, description="Fetch window start"),
    end: Optional[datetime] = Query(None, description="Fetch window end, defaults to `at`"),
) -> ValueResponse:
    """Get the value of a tag at an instant."""
    service = get_service(request)
    try:
        series, value = await service.value_at(dataset, tagname, at, start=start, end=end)
    except ServiceError as e:
        logger.error(f"Value lookup failed for '{tagname}': {e.message}")
        raise to_http_error(e)

    return ValueResponse(
        dataset=dataset,
        tag=series.metadata,
        timestamp=at,
        value=value,
        samples=len(series)
    )


@router.get("/datasets/{dataset}/resample", response_model=ResampleResponse)
async def get_resampled(
    request: Request,
    dataset: str,
    tagname: str = Query(..., description="Tag name"),
    start: datetime = Query(..., description="First grid instant"),
    end: datetime = Query(..., description="Exclusive grid end"),
    interval: float = Query(3600.0, gt=0, allow_inf_nan=False, description="Grid step in seconds"),
    method: ResampleMethod = Query(ResampleMethod.SWEEP, description="Lookup strategy"),
) -> ResampleResponse:
    """Resample a tag onto a fixed-interval grid."""
    try:
        step = timedelta(seconds=interval)
    except (OverflowError, ValueError):
        raise to_http_error(ValidationError("Interval out of range", {"interval": interval}))

    service = get_service(request)
    try:
        series, points = await service.resample(
            dataset, tagname, start, end, step, method=method
        )
    except ServiceError as e:
        logger.error(f"Resample failed for '{tagname}': {e.message}")
        raise to_http_error(e)

    return ResampleResponse(
        dataset=dataset,
        tag=series.metadata,
        interval=interval,
        method=method,
        points=points
    )


@router.get("/datasets/{dataset}/table", response_model=TableResponse)
async def get_table(
    request: Request,
    dataset: str,
    tagname: List[str] = Query(..., description="Tag names in column order"),
    start: Optional[datetime] = Query(None, description="First row timestamp"),
    end: Optional[datetime] = Query(None, description="Fetch window end"),
    emit_final: bool = Query(False, description="Emit the state at the last timestamp"),
) -> TableResponse:
    """Align several tags into one change-driven table."""
    service = get_service(request)
    try:
        columns, rows = await service.table(
            dataset, tagname, start=start, end=end, emit_final=emit_final
        )
    except ServiceError as e:
        logger.error(f"Table alignment failed for {tagname}: {e.message}")
        raise to_http_error(e)

    return TableResponse(
        dataset=dataset,
        columns=columns,
        emit_final=emit_final,
        rows=rows
    )
