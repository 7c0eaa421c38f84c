"""
subpath.py - Sub-path restriction for describe runs.

A sub-path restriction moves the starting commit back to the newest commit
that changed something under one of the given paths.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Deque, List, Set

from revdescribe_core.errors import ConfigError
from revdescribe_core.graph import CommitFilter, CommitGraph, CommitId

logger = logging.getLogger(__name__)


def parse_subpaths(subdir: str, work_tree: Path) -> List[str]:
    """Split a semicolon separated list and validate each entry.

    Entries may be relative to the work tree or absolute paths inside it.
    Returns POSIX style paths relative to the work tree.
    """
    root = work_tree.resolve()
    paths: List[str] = []
    for raw in subdir.split(";"):
        entry = raw.strip()
        if not entry:
            continue
        resolved = (root / entry.replace("\\", "/")).resolve()
        try:
            candidate = resolved.relative_to(root)
        except ValueError:
            raise ConfigError(f"'{entry}' does not appear to be a subdir of this repo.") from None
        if not resolved.exists():
            raise ConfigError(f"'{entry}' does not appear to be a subdir of this repo.")
        paths.append(candidate.as_posix())
    return paths


def find_filtered_start(graph: CommitGraph, start: CommitId, touches: CommitFilter) -> CommitId:
    """Nearest commit at or behind ``start`` accepted by ``touches``.

    Falls back to ``start`` when no ancestor matches.
    """
    queue: Deque[CommitId] = deque([start])
    seen: Set[CommitId] = {start}
    while queue:
        commit = queue.popleft()
        if touches(commit):
            if commit != start:
                logger.debug(f"Sub-path filter moved start from {start} to {commit}")
            return commit
        for parent in graph.parents(commit):
            if parent not in seen:
                seen.add(parent)
                queue.append(parent)
    logger.warning(f"No commit reachable from {start} touches the requested paths")
    return start
