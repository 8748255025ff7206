"""Data contracts for the pension endpoints."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from pensionflow.core.editing import EditableField
from pensionflow.core.wage_table import RegionWages
from pensionflow.models import PensionResult, Settings, YearRecord


class PingResponse(BaseModel):
    message: str
    app: str
    version: str


class SeriesResponse(BaseModel):
    """Generated baseline series with any policy warnings."""

    series: List[YearRecord]
    warnings: List[str] = Field(default_factory=list)


class CalculateRequest(BaseModel):
    """Inputs required to evaluate the pension formula."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    settings: Settings
    series: List[YearRecord]


class ProjectionRequest(BaseModel):
    """Settings plus the series currently on screen, if any.

    Ratios from ``previousSeries`` are kept for years that still exist.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    settings: Settings
    previousSeries: List[YearRecord] = Field(default_factory=list)


class ProjectionResponse(BaseModel):
    series: List[YearRecord]
    result: PensionResult
    warnings: List[str] = Field(default_factory=list)


class EditRequest(BaseModel):
    """A single-field edit of one year of the series."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    settings: Settings
    series: List[YearRecord]
    index: int = Field(..., ge=0, description="Position of the year in the series.")
    field: EditableField
    value: float = Field(..., ge=0, description="New ratio or monthly wage.")


class EditResponse(BaseModel):
    series: List[YearRecord]
    result: PensionResult
    warnings: List[str] = Field(default_factory=list)


class ProjectResponse(BaseModel):
    """An imported project with its result recomputed."""

    settings: Settings
    series: List[YearRecord]
    result: PensionResult


class RegionsResponse(BaseModel):
    regions: List[RegionWages]
