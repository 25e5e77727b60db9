"""Root test configuration and shared fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence, Tuple, Union

from timebase_history.core.models import (
    FloatValue,
    IntegerValue,
    Sample,
    TagMetadata,
    TagSeries,
    TextValue,
    Value,
    build_series,
)
from timebase_history.core.quality import classify


BASE_TIME = datetime(2025, 11, 1, 5, 0, 0, tzinfo=timezone.utc)
GOOD_QUALITY = 0xC0

RawValue = Optional[Union[int, float, str]]


def at(seconds: float) -> datetime:
    """Timestamp `seconds` after the base time."""
    return BASE_TIME + timedelta(seconds=seconds)


def make_value(raw: RawValue) -> Optional[Value]:
    """Wrap a plain python value."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return IntegerValue(value=raw)
    if isinstance(raw, float):
        return FloatValue(value=raw)
    return TextValue(value=raw)


def make_series(name: str, points: Sequence[Tuple[float, RawValue]], **metadata) -> TagSeries:
    """Build a series from (seconds, value) pairs in any order."""
    samples = [
        Sample(timestamp=at(seconds), value=make_value(raw), quality=classify(GOOD_QUALITY))
        for seconds, raw in points
    ]
    return build_series(TagMetadata(name=name, **metadata), samples)


@pytest.fixture
def series_factory() -> Callable[..., TagSeries]:
    """Factory for tag series built from (seconds, value) pairs."""
    return make_series


@pytest.fixture
def ts() -> Callable[[float], datetime]:
    """Factory for timestamps relative to the base time."""
    return at


@pytest.fixture
def value_of() -> Callable[[RawValue], Optional[Value]]:
    """Factory wrapping plain values."""
    return make_value


@pytest.fixture
def empty_series() -> TagSeries:
    """Series without samples."""
    return TagSeries(metadata=TagMetadata(name="empty"))


@pytest.fixture
def flow_series() -> TagSeries:
    """Flow meter series sampled irregularly."""
    return make_series(
        "131-FT-001.PV",
        [(0, 1.5), (10, 2.5), (25, 4.0), (60, 3.25)],
        unit_of_measure="m3/h"
    )
