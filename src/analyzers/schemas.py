from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from analysis import PipelineVariant
from container_models import Grid
from utils.constants import StageName


class BaseModelConfig(BaseModel):
    """Frozen base for request and response bodies; unknown fields are rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class GridFile(BaseModelConfig):
    path: Path = Field(
        ...,
        description="Path to a semicolon-delimited grid file without a header row.",
    )


class LoadedGrid(BaseModelConfig):
    grid: Grid = Field(..., description="Rows of values as read from the file.")


class AnalyzeGrid(BaseModelConfig):
    grid: Grid = Field(
        ...,
        description="Rectangular grid of values, at least one row and one column.",
        examples=[[[0, 1, 2], [3, 4, 5], [6, 7, 8]]],
    )
    variant: PipelineVariant | None = Field(
        None,
        description="Pipeline variant to run; the configured default when omitted.",
    )


class AnalyzeFile(GridFile):
    variant: PipelineVariant | None = Field(
        None,
        description="Pipeline variant to run; the configured default when omitted.",
    )


class AnalysisResult(BaseModelConfig):
    variant: PipelineVariant
    images: dict[StageName, str] = Field(
        ...,
        description="PNG data URL (`data:image/png;base64,...`) per observable stage.",
    )


class VariantInfo(BaseModelConfig):
    name: PipelineVariant
    stages: list[StageName] = Field(..., description="Observable stages in execution order.")
