"""
Pipeline variants and their configuration.

A :class:`PipelineVariant` names one of the preconfigured analysis chains, a
:class:`PipelineConfig` spells out the parameters of every stage in it. The
orchestrator only ever looks at the config, so callers may bring their own.
"""

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from container_models import BYTE_RANGE, UNIT_RANGE, ValueRange
from mutations import GaussianBlur, Invert, MatrixMutation, Normalize, OtsuThreshold
from utils.constants import BorderMode, StageName


class PipelineVariant(StrEnum):
    PREVIEW = "preview"
    SEGMENTATION = "segmentation"
    SEGMENTATION_INVERTED = "segmentation-inverted"


class NormalizationParams(BaseModel):
    value_range: ValueRange = UNIT_RANGE
    as_uint8: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


class SmoothingParams(BaseModel):
    kernel_size: int = Field(default=5, gt=0)
    sigma: float = Field(
        default=1.0, description="Values <= 0 derive sigma from the kernel size."
    )
    border: BorderMode = BorderMode.CONSTANT
    fill_value: float = 0.0

    model_config = ConfigDict(frozen=True, extra="forbid")


class PipelineConfig(BaseModel):
    normalization: NormalizationParams = NormalizationParams()
    smoothing: SmoothingParams = SmoothingParams()
    threshold: bool = False
    invert: bool = False
    observable: frozenset[StageName] = frozenset(
        {StageName.NORMALIZED, StageName.GAUSSIAN}
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def stages_are_compatible(self) -> Self:
        if (self.threshold or self.invert) and not self.normalization.as_uint8:
            raise ValueError("Thresholding and inversion require 8-bit normalization")
        if self.invert and not self.threshold:
            raise ValueError("Inversion is only supported after thresholding")
        enabled = {stage for stage, _ in build_stages(self)}
        if missing := self.observable - enabled:
            raise ValueError(
                f"Observable stage(s) not in the pipeline: {sorted(missing)}"
            )
        return self


def build_stages(config: PipelineConfig) -> list[tuple[StageName, MatrixMutation]]:
    """Instantiate the mutations of `config` in execution order, keyed by stage name."""
    normalization, smoothing = config.normalization, config.smoothing
    stages: list[tuple[StageName, MatrixMutation]] = [
        (
            StageName.NORMALIZED,
            Normalize(
                lower=normalization.value_range.lower,
                upper=normalization.value_range.upper,
                as_uint8=normalization.as_uint8,
            ),
        ),
        (
            StageName.GAUSSIAN,
            GaussianBlur(
                kernel_size=smoothing.kernel_size,
                sigma=smoothing.sigma,
                border=smoothing.border,
                fill_value=smoothing.fill_value,
            ),
        ),
    ]
    if config.threshold:
        stages.append((StageName.THRESHOLD, OtsuThreshold()))
    if config.invert:
        stages.append((StageName.INVERTED, Invert()))
    return stages


_SEGMENTATION_NORMALIZATION = NormalizationParams(value_range=BYTE_RANGE, as_uint8=True)
_SEGMENTATION_SMOOTHING = SmoothingParams(
    kernel_size=3, sigma=0.0, border=BorderMode.REFLECT
)

PIPELINE_CONFIGS: dict[PipelineVariant, PipelineConfig] = {
    PipelineVariant.PREVIEW: PipelineConfig(),
    PipelineVariant.SEGMENTATION: PipelineConfig(
        normalization=_SEGMENTATION_NORMALIZATION,
        smoothing=_SEGMENTATION_SMOOTHING,
        threshold=True,
        observable=frozenset(
            {StageName.NORMALIZED, StageName.GAUSSIAN, StageName.THRESHOLD}
        ),
    ),
    PipelineVariant.SEGMENTATION_INVERTED: PipelineConfig(
        normalization=_SEGMENTATION_NORMALIZATION,
        smoothing=_SEGMENTATION_SMOOTHING,
        threshold=True,
        invert=True,
        observable=frozenset(StageName),
    ),
}
