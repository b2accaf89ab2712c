from .router import analyzer_route
from .schemas import AnalysisResult, AnalyzeFile, AnalyzeGrid

__all__ = (
    "analyzer_route",
    "AnalysisResult",
    "AnalyzeFile",
    "AnalyzeGrid",
)
