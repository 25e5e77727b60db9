"""Core tag history model and algorithms.

- Data model: values, quality, tag metadata, samples and series
- classify: raw quality code to quality category
- value_at / resample: point lookup with step interpolation
- align: multi-tag forward-filled alignment
- Conversions: per-target value conversion
"""

from timebase_history.core.models import (
    AlignedRow,
    FloatValue,
    IntegerValue,
    QualityCategory,
    QualityStatus,
    Sample,
    TagMetadata,
    TagSeries,
    TextValue,
    Value,
    build_series,
)
from timebase_history.core.quality import classify
from timebase_history.core.lookup import (
    MAX_GRID_POINTS,
    ResampledPoint,
    ResampleMethod,
    grid_size,
    resample,
    value_at,
)
from timebase_history.core.alignment import align
from timebase_history.core.conversion import (
    TypedPoint,
    ValueKind,
    coerce,
    convert_series,
    to_float,
    to_integer,
    to_text,
)

__all__ = [
    "AlignedRow",
    "FloatValue",
    "IntegerValue",
    "QualityCategory",
    "QualityStatus",
    "Sample",
    "TagMetadata",
    "TagSeries",
    "TextValue",
    "Value",
    "build_series",
    "classify",
    "MAX_GRID_POINTS",
    "ResampledPoint",
    "grid_size",
    "ResampleMethod",
    "resample",
    "value_at",
    "align",
    "TypedPoint",
    "ValueKind",
    "coerce",
    "convert_series",
    "to_float",
    "to_integer",
    "to_text",
]
