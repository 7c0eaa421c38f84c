"""Tag index construction."""

from __future__ import annotations

import logging
from typing import Dict

from .errors import TagResolutionError
from .graph import CommitGraph, CommitId

logger = logging.getLogger(__name__)


def build_tag_index(graph: CommitGraph) -> Dict[CommitId, str]:
    """Map each tagged commit id to its tag name.

    Tags whose target cannot be peeled to a commit are skipped. When several
    tags point at the same commit the lexically smallest name is kept.
    """
    index: Dict[CommitId, str] = {}
    for name, object_id in sorted(graph.list_tags().items()):
        try:
            commit_id = graph.dereference_tag(object_id)
        except TagResolutionError as e:
            logger.warning(f"Skipping tag {name}: {e}")
            continue
        existing = index.setdefault(commit_id, name)
        if existing != name:
            logger.debug(f"Commit {commit_id} also tagged {name}, keeping {existing}")
    return index
