from functools import partial
from http import HTTPStatus

from fastapi import APIRouter
from loguru import logger

from analysis import PIPELINE_CONFIGS, PipelineVariant, analyze_grid, build_stages
from constants import AnalyzerEndpoint, RoutePrefix
from parsers import load_grid
from pipelines import run_pipeline
from settings import SettingsDep

from .schemas import AnalysisResult, AnalyzeFile, AnalyzeGrid, GridFile, LoadedGrid, VariantInfo

ROUTE = f"/{RoutePrefix.ANALYZER}"
analyzer_route = APIRouter(prefix=ROUTE, tags=[ROUTE])

ANALYSIS_ERRORS = {
    HTTPStatus.UNPROCESSABLE_ENTITY: {"description": "Grid is empty or not rectangular"},
    HTTPStatus.INTERNAL_SERVER_ERROR: {"description": "A processing stage or the image encoding failed"},
}


@analyzer_route.get(
    path=f"/{AnalyzerEndpoint.ROOT}",
    summary="Check that the analyzer is available",
)
def analyzer_root() -> dict[str, str]:
    return {"message": "Hello from the analyzer"}


@analyzer_route.get(
    path=f"/{AnalyzerEndpoint.VARIANTS}",
    summary="List the available pipeline variants.",
    description="""Lists every pipeline variant together with the stages that are rendered for it.""",
)
def list_variants() -> list[VariantInfo]:
    return [
        VariantInfo(
            name=variant,
            stages=[stage for stage, _ in build_stages(config) if stage in config.observable],
        )
        for variant, config in PIPELINE_CONFIGS.items()
    ]


@analyzer_route.post(
    path=f"/{AnalyzerEndpoint.LOAD}",
    summary="Read a grid from a delimited text file.",
    description="""
    Reads a semicolon-delimited file without header row. Fields that are not numbers are read as `0.0`,
    blank lines are skipped. The shape of the grid is not checked here.
""",
    responses={HTTPStatus.NOT_FOUND: {"description": "Grid file cannot be read"}},
)
def load(grid_file: GridFile) -> LoadedGrid:
    grid = run_pipeline(grid_file.path, load_grid, error_message="Failed to load grid file")
    return LoadedGrid(grid=grid)


@analyzer_route.post(
    path=f"/{AnalyzerEndpoint.ANALYZE}",
    summary="Analyze a grid and render its intermediate stages.",
    description="""
    Runs the grid through the stages of the requested pipeline variant and returns every observable
    stage as a PNG **data URL**, keyed by stage name.
""",
    responses=ANALYSIS_ERRORS,
)
def analyze(request: AnalyzeGrid, settings: SettingsDep) -> AnalysisResult:
    variant = request.variant or settings.default_variant
    logger.info(f"Analyzing {len(request.grid)} row grid with variant '{variant}'")
    images = run_pipeline(
        request.grid,
        partial(analyze_grid, variant=variant),
        error_message="Failed to analyze grid",
    )
    return AnalysisResult(variant=variant, images=images)


@analyzer_route.post(
    path=f"/{AnalyzerEndpoint.ANALYZE_FILE}",
    summary="Load a grid file and analyze it.",
    description="""Combines `load` and `analyze`: the grid is read from the file and analyzed in one request.""",
    responses={HTTPStatus.NOT_FOUND: {"description": "Grid file cannot be read"}} | ANALYSIS_ERRORS,
)
def analyze_file(request: AnalyzeFile, settings: SettingsDep) -> AnalysisResult:
    variant: PipelineVariant = request.variant or settings.default_variant
    images = run_pipeline(
        load_grid(request.path).bind_result(partial(analyze_grid, variant=variant)),
        error_message=f"Failed to analyze grid file '{request.path.name}'",
    )
    return AnalysisResult(variant=variant, images=images)
