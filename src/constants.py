from enum import StrEnum


class RoutePrefix(StrEnum):
    ANALYZER = "analyzer"


class AnalyzerEndpoint(StrEnum):
    ROOT = ""
    VARIANTS = "variants"
    LOAD = "load"
    ANALYZE = "analyze"
    ANALYZE_FILE = "analyze-file"
