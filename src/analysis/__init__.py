"""
Grid analysis pipelines.

`analyze_grid` validates a grid, runs it through the stages of a pipeline variant
and returns the rendered observable stages as a mapping of stage name to data URL.
"""

from .orchestrator import ResultSet, analyze_grid, resolve_config, validate_grid
from .variants import (
    PIPELINE_CONFIGS,
    NormalizationParams,
    PipelineConfig,
    PipelineVariant,
    SmoothingParams,
    build_stages,
)

__all__ = (
    "PIPELINE_CONFIGS",
    "NormalizationParams",
    "PipelineConfig",
    "PipelineVariant",
    "ResultSet",
    "SmoothingParams",
    "analyze_grid",
    "build_stages",
    "resolve_config",
    "validate_grid",
)
