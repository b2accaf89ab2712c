"""
Run a grid through the stages of a pipeline variant.

The grid is validated into a :class:`~container_models.matrix.MatrixContainer` and
then handed from stage to stage with railway binding. After every observable stage
the intermediate matrix is rasterized and its data URL is collected. The first
failing step ends the run; its failure is returned unchanged and no partial
result set is produced.
"""

from functools import partial

import numpy as np
from loguru import logger
from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import ResultE, Success, safe

from analysis.variants import (
    PIPELINE_CONFIGS,
    PipelineConfig,
    PipelineVariant,
    build_stages,
)
from container_models import Grid, MatrixContainer
from exceptions import InputError
from mutations import MatrixMutation
from renders import rasterize
from utils.constants import StageName
from utils.logger import log_railway_function

type ResultSet = dict[str, str]
type _StageState = tuple[MatrixContainer, ResultSet]


@log_railway_function("Failed to validate grid")
@safe
def validate_grid(grid: Grid) -> MatrixContainer:
    """
    Check that `grid` is a non-empty rectangle of finite float32 values and convert it.

    :param grid: Rows of values, as produced by the loader.
    :returns: The grid as a read-only `MatrixContainer` without a value range.
    :raises InputError: If the grid has no rows, no columns, rows of unequal length, or
        values that are NaN, infinite or beyond the float32 range.
    """
    if not grid:
        raise InputError("Grid is empty, it has no rows")
    width = len(grid[0])
    if width == 0:
        raise InputError("Grid is empty, its first row has no values")
    for index, row in enumerate(grid):
        if len(row) != width:
            raise InputError(
                f"Grid is not rectangular: row {index} has {len(row)} value(s), "
                f"expected {width}"
            )
    with np.errstate(over="ignore"):
        data = np.asarray(grid, dtype=np.float32)
    if not np.all(np.isfinite(data)):
        row, column = np.argwhere(~np.isfinite(data))[0]
        raise InputError(
            f"Grid value at row {row}, column {column} is not a finite float32 number"
        )
    return MatrixContainer(data=data)


@safe
def resolve_config(variant: PipelineVariant | PipelineConfig | str) -> PipelineConfig:
    if isinstance(variant, PipelineConfig):
        return variant
    return PIPELINE_CONFIGS[PipelineVariant(variant)]


def _observe(name: StageName, images: ResultSet, matrix: MatrixContainer):
    return rasterize(matrix).map(
        lambda raster: (matrix, images | {name.value: raster.data_url})
    )


def _run_stage(
    name: StageName,
    mutation: MatrixMutation,
    observable: frozenset[StageName],
    state: _StageState,
) -> ResultE[_StageState]:
    matrix, images = state
    logger.debug(f"Running stage {name}")
    result = mutation(matrix)
    if name not in observable:
        return result.map(lambda output: (output, images))
    return result.bind(partial(_observe, name, images))


def _run_pipeline(
    config: PipelineConfig, matrix: MatrixContainer
) -> ResultE[ResultSet]:
    steps = (
        bind(partial(_run_stage, name, mutation, config.observable))
        for name, mutation in build_stages(config)
    )
    state: ResultE[_StageState] = flow(Success((matrix, {})), *steps)
    return state.map(lambda final: final[1])


@log_railway_function("Failed to analyze grid", "Successfully analyzed grid")
def analyze_grid(
    grid: Grid,
    variant: PipelineVariant | PipelineConfig | str = PipelineVariant.PREVIEW,
) -> ResultE[ResultSet]:
    """
    Analyze `grid` with the stages of `variant` and render the observable stages.

    :param grid: Rows of values; must be non-empty and rectangular.
    :param variant: A preconfigured variant (or its name), or a custom config.
    :returns: A `Result` with the mapping of stage name to PNG data URL, or the
        first failure encountered.
    """
    return resolve_config(variant).bind(
        lambda config: validate_grid(grid).bind(partial(_run_pipeline, config))
    )
