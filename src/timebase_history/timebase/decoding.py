"""Decoding of Timebase payloads into tag series."""

from typing import List, Optional, Union

from loguru import logger

from timebase_history.core.models import (
    INT32_MAX,
    INT32_MIN,
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
from timebase_history.timebase.models import GetDataResponse, TagItem, WireSample, WireTag


def resolve_value(raw: Optional[Union[int, float, str]]) -> Optional[Value]:
    """Resolve an untagged wire value into a typed value.

    Integers outside the 32-bit range are kept as floats.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return IntegerValue(value=int(raw))
    if isinstance(raw, int):
        if INT32_MIN <= raw <= INT32_MAX:
            return IntegerValue(value=raw)
        return FloatValue(value=float(raw))
    if isinstance(raw, float):
        return FloatValue(value=raw)
    return TextValue(value=raw)


def metadata_from_wire(tag: WireTag) -> TagMetadata:
    """Build tag metadata from a wire tag.

    A unit mapping with a single entry is the unit of measure; more entries
    are discrete states. An empty mapping means no unit.
    """
    unit_of_measure = None
    states = {}
    if tag.uom:
        if len(tag.uom) == 1:
            unit_of_measure = next(iter(tag.uom.values()))
        else:
            states = dict(tag.uom)

    return TagMetadata(
        name=tag.name,
        description=tag.description,
        format=tag.format,
        unit_of_measure=unit_of_measure,
        states=states,
        fields=dict(tag.fields or {}),
    )


def sample_from_wire(sample: WireSample) -> Sample:
    """Build a sample from a wire sample."""
    return Sample(
        timestamp=sample.timestamp,
        value=resolve_value(sample.value),
        quality=classify(sample.quality),
    )


def series_from_item(item: TagItem) -> TagSeries:
    """Build a sorted tag series from a wire tag item."""
    return build_series(
        metadata_from_wire(item.tag),
        (sample_from_wire(sample) for sample in item.data),
    )


def time_series(response: GetDataResponse) -> List[TagSeries]:
    """Decode every tag of a response, keeping response order."""
    series_list = [series_from_item(item) for item in response.tags]
    logger.debug(
        f"Decoded {len(series_list)} tags with "
        f"{sum(len(series) for series in series_list)} samples"
    )
    return series_list
