"""
describe.py - Assemble a revision description from the ancestry graph.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from revdescribe_core.config import DescribeSettings
from revdescribe_core.errors import NoTagsError
from revdescribe_core.graph import CommitGraph, CommitId
from revdescribe_core.models import Description
from revdescribe_core.search import distance_between, find_tagged_ancestors
from revdescribe_core.tags import build_tag_index
from revdescribe_core.vcs import open_repository

from .subpath import find_filtered_start, parse_subpaths

logger = logging.getLogger(__name__)


def score_candidates(
    graph: CommitGraph,
    start: CommitId,
    candidates: Sequence[Tuple[CommitId, str]],
) -> List[Tuple[str, int]]:
    """Pair each candidate tag with its distance from ``start``."""
    scored: List[Tuple[str, int]] = []
    for commit_id, tag in candidates:
        distance = distance_between(graph, start, commit_id)
        if distance is None:
            logger.debug(f"Tag {tag} at {commit_id} is not an ancestor of {start}")
            continue
        scored.append((tag, distance))
    return scored


def select_best(scored: Sequence[Tuple[str, int]]) -> Optional[Tuple[str, int]]:
    """Nearest tag; equally near tags resolve to the lexically smallest name."""
    if not scored:
        return None
    return min(scored, key=lambda item: (item[1], item[0]))


def check_dirty(graph: CommitGraph) -> bool:
    """Working tree state, treating a failed status check as clean."""
    try:
        return not graph.is_clean()
    except Exception as e:
        logger.warning(f"Could not determine working tree state, assuming clean: {e}")
        return False


def describe_graph(
    graph: CommitGraph,
    settings: DescribeSettings,
    *,
    subpaths: Optional[Sequence[str]] = None,
) -> Description:
    """Describe ``settings.ref`` on any commit graph accessor.

    ``subpaths`` overrides ``settings.subdir`` with already validated paths.
    """
    start = graph.resolve(settings.ref)
    paths = list(subpaths) if subpaths is not None else settings.subpaths()
    if paths:
        start = find_filtered_start(graph, start, graph.touches_paths(paths))

    tag_map = build_tag_index(graph)
    if not tag_map:
        raise NoTagsError("No tags found.")

    candidates = find_tagged_ancestors(graph, start, tag_map)
    best = select_best(score_candidates(graph, start, candidates))
    if best is None:
        logger.warning(f"No tag is reachable from {start}")
        tag, distance = "", 0
    else:
        tag, distance = best

    dirty = check_dirty(graph)
    return Description(
        tag=tag,
        distance=distance,
        abbrev_hash=start[: settings.abbrev],
        dirty=dirty,
        show_dirty=settings.show_dirty,
    )


def describe_repository(settings: DescribeSettings) -> Description:
    """Open the repository at ``settings.repo`` and describe it."""
    with open_repository(settings.repo) as graph:
        subpaths = parse_subpaths(settings.subdir, graph.work_tree) if settings.subdir else []
        description = describe_graph(graph, settings, subpaths=subpaths)
    logger.debug(f"Described {settings.ref} in {settings.repo} as {description}")
    return description
