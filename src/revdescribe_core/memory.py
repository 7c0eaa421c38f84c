"""In-memory commit graph.

Deterministic accessor for tests and for callers that already hold the
ancestry data (e.g. exported from another tool).
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set

from .errors import GraphIntegrityError, RepositoryError, TagResolutionError
from .graph import CommitFilter, CommitId


class InMemoryGraph:
    """Commit graph backed by plain dictionaries.

    Args:
        parents: commit id -> ordered parent ids.
        tags: tag name -> target object id (a commit id or an annotated tag id).
        annotated: annotated tag object id -> the object it points at.
        refs: extra reference names -> commit id. ``HEAD`` defaults to ``head``.
        changed_paths: commit id -> paths the commit modifies.
        clean: working tree state reported by :meth:`is_clean`.
    """

    def __init__(
        self,
        parents: Mapping[CommitId, Sequence[CommitId]],
        tags: Optional[Mapping[str, str]] = None,
        *,
        head: Optional[CommitId] = None,
        annotated: Optional[Mapping[str, str]] = None,
        refs: Optional[Mapping[str, CommitId]] = None,
        changed_paths: Optional[Mapping[CommitId, Iterable[str]]] = None,
        clean: bool = True,
    ) -> None:
        self._parents: Dict[CommitId, List[CommitId]] = {k: list(v) for k, v in parents.items()}
        self._tags: Dict[str, str] = dict(tags or {})
        self._annotated: Dict[str, str] = dict(annotated or {})
        self._refs: Dict[str, CommitId] = dict(refs or {})
        if head is not None:
            self._refs.setdefault("HEAD", head)
        self._changed: Dict[CommitId, Set[str]] = {
            k: set(v) for k, v in (changed_paths or {}).items()
        }
        self._clean = clean

    def resolve(self, ref: str) -> CommitId:
        if ref in self._refs:
            return self._refs[ref]
        if ref in self._tags:
            return self.dereference_tag(self._tags[ref])
        if ref in self._parents:
            return ref
        raise RepositoryError(f"Could not find target: {ref}")

    def parents(self, commit_id: CommitId) -> Sequence[CommitId]:
        try:
            return tuple(self._parents[commit_id])
        except KeyError:
            raise GraphIntegrityError(f"Parent not found: {commit_id}") from None

    def list_tags(self) -> Dict[str, str]:
        return dict(self._tags)

    def dereference_tag(self, object_id: str) -> CommitId:
        seen: Set[str] = set()
        current = object_id
        while current in self._annotated:
            if current in seen:
                raise TagResolutionError(f"Tag cycle at {object_id}")
            seen.add(current)
            current = self._annotated[current]
        if current not in self._parents:
            raise TagResolutionError(f"Tag target is not a commit: {object_id}")
        return current

    def is_clean(self) -> bool:
        return self._clean

    def touches_paths(self, paths: Iterable[str]) -> CommitFilter:
        prefixes = [p.strip("/") for p in paths if p.strip("/")]

        def _touches(commit_id: CommitId) -> bool:
            for changed in self._changed.get(commit_id, ()):
                for prefix in prefixes:
                    if changed == prefix or changed.startswith(prefix + "/"):
                        return True
            return False

        return _touches
