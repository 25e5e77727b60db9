"""Data models for tag history."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, Iterable, Literal, Optional, Tuple, Union

from loguru import logger
from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT16_MIN = -(2 ** 15)
INT16_MAX = 2 ** 15 - 1


class IntegerValue(BaseModel):
    """32-bit signed integer sample value."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["integer"] = "integer"
    value: StrictInt = Field(..., ge=INT32_MIN, le=INT32_MAX)

    def __str__(self) -> str:
        return str(self.value)


class FloatValue(BaseModel):
    """64-bit floating point sample value."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["float"] = "float"
    value: StrictFloat

    def __str__(self) -> str:
        return str(self.value)


class TextValue(BaseModel):
    """Text sample value."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: StrictStr

    def __str__(self) -> str:
        return self.value


Value = Annotated[
    Union[IntegerValue, FloatValue, TextValue],
    Field(discriminator="kind")
]


class QualityStatus(str, Enum):
    """Quality category of a sample."""
    GOOD = "good"
    BAD = "bad"
    UNKNOWN = "unknown"


class QualityCategory(BaseModel):
    """Classified quality with the raw code kept for diagnostics."""
    model_config = ConfigDict(frozen=True)

    status: QualityStatus
    code: int = Field(..., ge=INT16_MIN, le=INT16_MAX)

    @property
    def is_good(self) -> bool:
        return self.status == QualityStatus.GOOD

    @property
    def is_bad(self) -> bool:
        return self.status == QualityStatus.BAD

    @property
    def is_unknown(self) -> bool:
        return self.status == QualityStatus.UNKNOWN


class TagMetadata(BaseModel):
    """Tag metadata.

    A tag carries either a single unit of measure or a mapping of discrete
    state codes to labels, never both. A tag with neither is a unitless,
    non-discrete tag.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Tag name, unique within a query")
    description: Optional[str] = Field(None, description="Tag description")
    format: Optional[str] = Field(None, description="Display format")
    unit_of_measure: Optional[str] = Field(None, description="Engineering unit")
    states: Dict[int, str] = Field(default_factory=dict, description="State code to label")
    fields: Dict[str, str] = Field(default_factory=dict, description="Free-form fields")

    @model_validator(mode="after")
    def validate_unit_or_states(self) -> "TagMetadata":
        """Reject a unit of measure combined with discrete states."""
        if self.unit_of_measure is not None and self.states:
            raise ValueError(
                f"Tag '{self.name}' cannot have both a unit of measure and discrete states"
            )
        return self

    @property
    def is_discrete(self) -> bool:
        """Whether the tag's values are discrete state codes."""
        return bool(self.states)

    def state_label(self, code: int) -> Optional[str]:
        """Get the label for a state code, if any."""
        return self.states.get(code)


class Sample(BaseModel):
    """One observation of a tag."""
    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    value: Optional[Value] = None
    quality: QualityCategory

    def __str__(self) -> str:
        return (
            f"Sample(timestamp={self.timestamp.isoformat()}, "
            f"value={self.value}, quality={self.quality.status.value})"
        )


class TagSeries(BaseModel):
    """Timestamp-sorted samples of one tag plus its metadata.

    Series are immutable once built. Use :func:`build_series` for samples
    in arrival order; constructing a series directly with out-of-order
    samples fails validation.
    """
    model_config = ConfigDict(frozen=True)

    metadata: TagMetadata
    samples: Tuple[Sample, ...] = ()

    _timestamps: Tuple[datetime, ...] = PrivateAttr(default=())

    @field_validator("samples")
    @classmethod
    def validate_sorted(cls, v: Tuple[Sample, ...]) -> Tuple[Sample, ...]:
        """Validate that samples are in ascending timestamp order."""
        for index in range(1, len(v)):
            if v[index].timestamp < v[index - 1].timestamp:
                raise ValueError(
                    f"Samples out of order at index {index}: "
                    f"{v[index].timestamp.isoformat()} < {v[index - 1].timestamp.isoformat()}"
                )
        return v

    def model_post_init(self, __context) -> None:
        self._timestamps = tuple(sample.timestamp for sample in self.samples)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def timestamps(self) -> Tuple[datetime, ...]:
        """Sample timestamps in ascending order."""
        return self._timestamps

    @property
    def is_empty(self) -> bool:
        return not self.samples

    @property
    def first(self) -> Optional[Sample]:
        return self.samples[0] if self.samples else None

    @property
    def last(self) -> Optional[Sample]:
        return self.samples[-1] if self.samples else None

    def __len__(self) -> int:
        return len(self.samples)

    def __str__(self) -> str:
        return f"TagSeries(name='{self.name}', samples={len(self.samples)})"


class AlignedRow(BaseModel):
    """State of every aligned tag from `timestamp` until the next row."""
    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    values: Tuple[Optional[Value], ...]


def build_series(metadata: TagMetadata, samples: Iterable[Sample]) -> TagSeries:
    """Build a series from samples in arrival order.

    Samples are sorted by timestamp. The sort is stable, so samples sharing
    a timestamp keep their arrival order.

    Args:
        metadata: Tag metadata
        samples: Samples in any order

    Returns:
        Sorted tag series
    """
    ordered = sorted(samples, key=lambda sample: sample.timestamp)

    duplicates = sum(
        1 for index in range(1, len(ordered))
        if ordered[index].timestamp == ordered[index - 1].timestamp
    )
    if duplicates:
        logger.warning(
            f"Tag '{metadata.name}' has {duplicates} duplicate timestamps, keeping arrival order"
        )

    return TagSeries(metadata=metadata, samples=tuple(ordered))
