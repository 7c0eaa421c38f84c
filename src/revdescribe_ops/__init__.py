from .describe import describe_graph, describe_repository, select_best
from .subpath import find_filtered_start, parse_subpaths

__all__ = [
    "describe_graph",
    "describe_repository",
    "find_filtered_start",
    "parse_subpaths",
    "select_best",
]
