"""API response models."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from timebase_history.core.lookup import ResampledPoint, ResampleMethod
from timebase_history.core.models import AlignedRow, TagMetadata, Value


class ValueResponse(BaseModel):
    """Value of one tag at one instant."""

    dataset: str
    tag: TagMetadata
    timestamp: datetime
    value: Optional[Value] = None
    samples: int = Field(..., description="Number of samples the lookup searched")


class ResampleResponse(BaseModel):
    """Tag values on a fixed-interval grid."""

    dataset: str
    tag: TagMetadata
    interval: float = Field(..., description="Grid step in seconds")
    method: ResampleMethod
    points: List[ResampledPoint]


class TableResponse(BaseModel):
    """Change-driven, forward-filled table across tags."""

    dataset: str
    columns: List[str] = Field(..., description="Tag names in column order")
    emit_final: bool
    rows: List[AlignedRow]
