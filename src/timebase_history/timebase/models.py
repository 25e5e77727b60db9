"""Timebase wire models.

The Timebase data endpoint answers with short JSON keys; the models below
map them onto readable field names through aliases.
"""

from typing import Dict, List, Optional, Tuple, Union

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator, model_validator


class WireTag(BaseModel):
    """Tag definition as sent by Timebase."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="n")
    description: Optional[str] = Field(None, alias="d")
    format: Optional[str] = Field(None, alias="f")
    uom: Optional[Dict[int, str]] = Field(None, alias="u")
    fields: Optional[Dict[str, str]] = Field(None, alias="fl")
    data_type: Optional[str] = Field(None, alias="t")


class WireSample(BaseModel):
    """Single sample as sent by Timebase.

    The value is untagged on the wire: a number or a string.
    """
    model_config = ConfigDict(populate_by_name=True)

    timestamp: AwareDatetime = Field(..., alias="t")
    value: Optional[Union[int, float, str]] = Field(None, alias="v")
    quality: int = Field(..., alias="q", ge=-(2 ** 15), le=2 ** 15 - 1)


class TagItem(BaseModel):
    """Tag definition with its samples."""
    model_config = ConfigDict(populate_by_name=True)

    tag: WireTag = Field(..., alias="t")
    data: List[WireSample] = Field(default_factory=list, alias="d")


class GetDataResponse(BaseModel):
    """Response of the dataset data endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    start: AwareDatetime = Field(..., alias="s")
    end: AwareDatetime = Field(..., alias="e")
    tags: List[TagItem] = Field(default_factory=list, alias="tl")


class DataQuery(BaseModel):
    """Data request for one dataset.

    Replaces chained request building with named, validated options.
    """
    model_config = ConfigDict(frozen=True)

    dataset: str = Field(..., min_length=1, description="Dataset name")
    tag_names: List[str] = Field(..., min_length=1, description="Tags to fetch, in column order")
    start: Optional[AwareDatetime] = Field(None, description="Range start")
    end: Optional[AwareDatetime] = Field(None, description="Range end")

    @field_validator("tag_names")
    @classmethod
    def validate_tag_names(cls, v: List[str]) -> List[str]:
        """Validate that no tag name is blank."""
        if any(not name.strip() for name in v):
            raise ValueError("Tag names must not be blank")
        return v

    @model_validator(mode="after")
    def validate_range(self) -> "DataQuery":
        """Validate that start does not come after end."""
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError(
                f"start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )
        return self

    def query_params(self) -> List[Tuple[str, str]]:
        """Render query string pairs."""
        params = [("tagname", name) for name in self.tag_names]
        if self.start is not None:
            params.append(("start", self.start.isoformat()))
        if self.end is not None:
            params.append(("end", self.end.isoformat()))
        return params
