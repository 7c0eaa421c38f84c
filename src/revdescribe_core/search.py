"""Nearest-tag search and distance calculation over the ancestry graph."""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Mapping, Optional, Set, Tuple

from .graph import CommitGraph, CommitId

logger = logging.getLogger(__name__)


def find_tagged_ancestors(
    graph: CommitGraph,
    start: CommitId,
    tag_map: Mapping[CommitId, str],
) -> List[Tuple[CommitId, str]]:
    """Collect the tagged commits nearest to ``start`` on every ancestry path.

    Breadth-first over parent edges. A tagged commit is recorded and its
    parents are not explored, so a tag hides everything behind it on that
    path. The result is in discovery order and is empty when no ancestor
    carries a tag.
    """
    queue: Deque[CommitId] = deque([start])
    seen: Set[CommitId] = {start}
    candidates: List[Tuple[CommitId, str]] = []

    while queue:
        commit = queue.popleft()
        tag = tag_map.get(commit)
        if tag is not None:
            candidates.append((commit, tag))
            continue
        for parent in graph.parents(commit):
            if parent not in seen:
                seen.add(parent)
                queue.append(parent)

    logger.debug(f"Visited {len(seen)} commits from {start}, found {len(candidates)} tagged ancestors")
    return candidates


def distance_between(
    graph: CommitGraph,
    source: CommitId,
    target: CommitId,
) -> Optional[int]:
    """Minimum number of parent hops from ``source`` back to ``target``.

    Returns 0 when both are the same commit and ``None`` when ``target`` is
    not an ancestor of ``source``.
    """
    if source == target:
        return 0

    current: Deque[CommitId] = deque([source])
    upcoming: Deque[CommitId] = deque()
    seen: Set[CommitId] = {source}
    distance = 1

    while current or upcoming:
        if not current:
            distance += 1
            current, upcoming = upcoming, current
        commit = current.popleft()
        for parent in graph.parents(commit):
            if parent == target:
                return distance
            if parent not in seen:
                seen.add(parent)
                upcoming.append(parent)

    return None
