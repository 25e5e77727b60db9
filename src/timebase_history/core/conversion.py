"""Conversion of sample values to a caller-chosen type.

Each target type has its own conversion function. A conversion that cannot
produce a value returns None; nothing defaults to zero.

Narrowing a float to an integer rounds half away from zero. The
fraction is dropped.
"""

import math
import re
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict

from timebase_history.core.models import (
    INT32_MAX,
    INT32_MIN,
    FloatValue,
    IntegerValue,
    TagSeries,
    TextValue,
    Value,
)


_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")

PlainValue = Union[int, float, str]


class ValueKind(str, Enum):
    """Target type of a conversion."""
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"


class TypedPoint(BaseModel):
    """Sample timestamp with a converted plain value."""
    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    value: Optional[PlainValue] = None


def _round_half_away(number: float) -> int:
    truncated = math.trunc(number)
    if abs(number - truncated) >= 0.5:
        return truncated + (1 if number > 0 else -1)
    return truncated


def _in_int32(number: int) -> bool:
    return INT32_MIN <= number <= INT32_MAX


def to_integer(value: Optional[Value]) -> Optional[int]:
    """Convert a value to a 32-bit integer.

    Floats round half away from zero. Text must be an optionally signed run
    of digits. NaN, infinities, unparseable text and results outside the
    32-bit range give None.
    """
    if isinstance(value, IntegerValue):
        return value.value
    if isinstance(value, FloatValue):
        if not math.isfinite(value.value):
            return None
        rounded = _round_half_away(value.value)
        return rounded if _in_int32(rounded) else None
    if isinstance(value, TextValue):
        if not _INTEGER_TEXT.fullmatch(value.value):
            return None
        parsed = int(value.value)
        return parsed if _in_int32(parsed) else None
    return None


def to_float(value: Optional[Value]) -> Optional[float]:
    """Convert a value to a float.

    Text is parsed as a float literal, without surrounding whitespace or
    digit separators.
    """
    if isinstance(value, IntegerValue):
        return float(value.value)
    if isinstance(value, FloatValue):
        return value.value
    if isinstance(value, TextValue):
        text = value.value
        if not text or text != text.strip() or "_" in text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None


def to_text(value: Optional[Value]) -> Optional[str]:
    """Convert a value to text."""
    if isinstance(value, (IntegerValue, FloatValue)):
        return str(value.value)
    if isinstance(value, TextValue):
        return value.value
    return None


_CONVERTERS: Dict[ValueKind, Callable[[Optional[Value]], Optional[PlainValue]]] = {
    ValueKind.INTEGER: to_integer,
    ValueKind.FLOAT: to_float,
    ValueKind.TEXT: to_text,
}


def coerce(value: Optional[Value], kind: ValueKind) -> Optional[PlainValue]:
    """Convert a value to the given kind."""
    return _CONVERTERS[kind](value)


def convert_series(series: TagSeries, kind: ValueKind) -> List[TypedPoint]:
    """Convert every sample value of a series.

    Args:
        series: Tag series
        kind: Target kind

    Returns:
        One point per sample, in timestamp order
    """
    convert = _CONVERTERS[kind]
    return [
        TypedPoint(timestamp=sample.timestamp, value=convert(sample.value))
        for sample in series.samples
    ]
