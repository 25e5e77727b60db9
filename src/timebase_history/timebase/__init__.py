"""Timebase retrieval: wire models, HTTP client and decoding."""

from timebase_history.timebase.client import TimebaseClient
from timebase_history.timebase.decoding import (
    metadata_from_wire,
    resolve_value,
    sample_from_wire,
    series_from_item,
    time_series,
)
from timebase_history.timebase.models import (
    DataQuery,
    GetDataResponse,
    TagItem,
    WireSample,
    WireTag,
)

__all__ = [
    "TimebaseClient",
    "metadata_from_wire",
    "resolve_value",
    "sample_from_wire",
    "series_from_item",
    "time_series",
    "DataQuery",
    "GetDataResponse",
    "TagItem",
    "WireSample",
    "WireTag",
]
