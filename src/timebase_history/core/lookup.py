"""Point-in-time lookup and grid resampling.

Sample values follow step interpolation: a value holds from its own
timestamp until the next sample supersedes it.

Queries before the first sample are clamped low and return the FIRST
sample's value rather than ``None``.
"""

from bisect import bisect_right
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict

from timebase_history.core.models import TagSeries, Value


class ResampleMethod(str, Enum):
    """Strategy used by :func:`resample`."""
    LOOKUP = "lookup"  # binary search per grid step
    SWEEP = "sweep"  # single forward pass


class ResampledPoint(BaseModel):
    """Value of a tag at one grid instant."""
    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    value: Optional[Value] = None


def _require_aware(timestamp: datetime, name: str) -> None:
    if timestamp.tzinfo is None or timestamp.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware: {timestamp.isoformat()}")


def value_at(series: TagSeries, timestamp: datetime) -> Optional[Value]:
    """Get the value effective at a timestamp.

    Args:
        series: Tag series to search
        timestamp: Timezone-aware query instant

    Returns:
        Value of the latest sample at or before `timestamp`, the first
        sample's value when `timestamp` precedes all samples, or None for
        an empty series

    Raises:
        ValueError: If `timestamp` is naive
    """
    _require_aware(timestamp, "timestamp")

    if series.is_empty:
        return None

    index = bisect_right(series.timestamps, timestamp) - 1
    if index < 0:
        index = 0

    return series.samples[index].value


MAX_GRID_POINTS = 1_000_000


def grid_size(start: datetime, end: datetime, interval: timedelta) -> int:
    """Number of grid instants from `start` in steps of `interval` before `end`."""
    if interval <= timedelta(0):
        raise ValueError(f"interval must be positive, got {interval}")
    if end <= start:
        return 0
    steps, remainder = divmod(end - start, interval)
    return steps + (1 if remainder else 0)


def _grid(start: datetime, end: datetime, interval: timedelta) -> List[datetime]:
    grid = []
    current = start
    while current < end:
        grid.append(current)
        current = current + interval
    return grid


def resample(
    series: TagSeries,
    start: datetime,
    end: datetime,
    interval: timedelta,
    method: ResampleMethod = ResampleMethod.SWEEP
) -> List[ResampledPoint]:
    """Resample a series onto a fixed-interval grid.

    Grid instants run from `start` in steps of `interval`, strictly before
    `end`. Both methods return identical points.

    Args:
        series: Tag series to resample
        start: First grid instant
        end: Exclusive grid end
        interval: Grid step, must be positive
        method: Lookup strategy

    Returns:
        One point per grid instant

    Raises:
        ValueError: If `interval` is not positive, a bound is naive, or the
            grid exceeds MAX_GRID_POINTS
    """
    _require_aware(start, "start")
    _require_aware(end, "end")
    size = grid_size(start, end, interval)
    if size > MAX_GRID_POINTS:
        raise ValueError(f"Grid of {size} points exceeds the limit of {MAX_GRID_POINTS}")

    grid = _grid(start, end, interval)

    if method == ResampleMethod.LOOKUP:
        return [
            ResampledPoint(timestamp=instant, value=value_at(series, instant))
            for instant in grid
        ]

    if series.is_empty:
        return [ResampledPoint(timestamp=instant) for instant in grid]

    points = []
    timestamps = series.timestamps
    last_index = len(timestamps) - 1
    index = 0
    for instant in grid:
        while index < last_index and timestamps[index + 1] <= instant:
            index += 1
        points.append(
            ResampledPoint(timestamp=instant, value=series.samples[index].value)
        )

    return points
