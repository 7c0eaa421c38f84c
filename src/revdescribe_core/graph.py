"""Commit graph accessor protocol."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Protocol, Sequence

CommitId = str

# Predicate over commits, e.g. "does this commit change anything under P".
CommitFilter = Callable[[CommitId], bool]


class CommitGraph(Protocol):
    """Read-only view of a repository's ancestry graph."""

    def resolve(self, ref: str) -> CommitId:
        """Resolve a reference name (or object id) to a commit id."""
        ...

    def parents(self, commit_id: CommitId) -> Sequence[CommitId]:
        """Parent ids of a commit; empty for root commits."""
        ...

    def list_tags(self) -> Dict[str, str]:
        """Tag name to the object id the tag ref points at."""
        ...

    def dereference_tag(self, object_id: str) -> CommitId:
        """Peel a tag target (possibly an annotated tag chain) to a commit."""
        ...

    def is_clean(self) -> bool:
        """True if the working tree has no uncommitted changes."""
        ...

    def touches_paths(self, paths: Iterable[str]) -> CommitFilter:
        """Predicate matching commits that modify something under ``paths``."""
        ...
