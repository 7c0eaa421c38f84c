from .errors import (
    ConfigError,
    DescribeError,
    GraphIntegrityError,
    NoTagsError,
    RepositoryError,
    TagResolutionError,
)
from .graph import CommitFilter, CommitGraph, CommitId
from .memory import InMemoryGraph
from .models import Description
from .search import distance_between, find_tagged_ancestors
from .tags import build_tag_index

__all__ = [
    "CommitFilter",
    "CommitGraph",
    "CommitId",
    "ConfigError",
    "Description",
    "DescribeError",
    "GraphIntegrityError",
    "InMemoryGraph",
    "NoTagsError",
    "RepositoryError",
    "TagResolutionError",
    "build_tag_index",
    "distance_between",
    "find_tagged_ancestors",
]
