"""Commit graph accessor backed by dulwich."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from dulwich import porcelain
from dulwich.diff_tree import tree_changes
from dulwich.errors import NotGitRepository
from dulwich.objects import Commit, Tag
from dulwich.objectspec import AmbiguousShortId, parse_commit
from dulwich.repo import Repo

from ..errors import GraphIntegrityError, RepositoryError, TagResolutionError
from ..graph import CommitFilter, CommitId

logger = logging.getLogger(__name__)

# Annotated tags may point at other tags; git itself stops well before this.
MAX_TAG_DEPTH = 32


@contextmanager
def open_repository(path: Union[str, Path] = ".") -> Iterator["DulwichGraph"]:
    """Discover the repository containing ``path`` and yield its graph."""
    try:
        repo = Repo.discover(str(path))
    except NotGitRepository as e:
        raise RepositoryError(f"Could not open repository at {path}") from e
    try:
        yield DulwichGraph(repo)
    finally:
        repo.close()


class DulwichGraph:
    """Read-only ancestry graph over a dulwich ``Repo``."""

    def __init__(self, repo: Repo) -> None:
        self._repo = repo
        self._parents: Dict[CommitId, Tuple[CommitId, ...]] = {}

    @property
    def work_tree(self) -> Path:
        return Path(self._repo.path)

    def _commit(self, commit_id: CommitId) -> Commit:
        try:
            obj = self._repo[commit_id.encode("ascii")]
        except KeyError:
            raise GraphIntegrityError(f"Parent not found: {commit_id}") from None
        if not isinstance(obj, Commit):
            raise GraphIntegrityError(f"Object {commit_id} is not a commit")
        return obj

    def resolve(self, ref: str) -> CommitId:
        try:
            obj = parse_commit(self._repo, ref.encode("utf-8"))
        except (KeyError, ValueError, AmbiguousShortId) as e:
            raise RepositoryError(f"Could not find target: {ref}") from e
        try:
            return self.dereference_tag(obj.id.decode("ascii"))
        except TagResolutionError as e:
            raise RepositoryError(f"Could not find target: {ref}") from e

    def parents(self, commit_id: CommitId) -> Sequence[CommitId]:
        cached = self._parents.get(commit_id)
        if cached is None:
            commit = self._commit(commit_id)
            cached = tuple(p.decode("ascii") for p in commit.parents)
            self._parents[commit_id] = cached
        return cached

    def list_tags(self) -> Dict[str, str]:
        refs = self._repo.refs.as_dict(b"refs/tags")
        return {
            name.decode("utf-8", errors="replace"): sha.decode("ascii")
            for name, sha in refs.items()
        }

    def dereference_tag(self, object_id: str) -> CommitId:
        sha = object_id.encode("ascii")
        for _ in range(MAX_TAG_DEPTH):
            try:
                obj = self._repo[sha]
            except KeyError as e:
                raise TagResolutionError(f"Tag target {object_id} not found") from e
            if isinstance(obj, Tag):
                _, sha = obj.object
                continue
            if isinstance(obj, Commit):
                return obj.id.decode("ascii")
            raise TagResolutionError(
                f"Tag target {object_id} is a {obj.type_name.decode('ascii')}, not a commit"
            )
        raise TagResolutionError(f"Tag chain from {object_id} is too deep")

    def is_clean(self) -> bool:
        status = porcelain.status(self._repo)
        if any(status.staged.values()):
            return False
        return not (status.unstaged or status.untracked)

    def touches_paths(self, paths: Iterable[str]) -> CommitFilter:
        """Build a predicate for commits that change anything under ``paths``.

        A merge only counts when it differs from every parent under the
        paths, the same simplification ``git log -- <path>`` applies.
        """
        prefixes = [_normalize(p) for p in paths]
        store = self._repo.object_store

        def _changed_under(old_tree: Optional[bytes], new_tree: bytes) -> bool:
            for change in tree_changes(store, old_tree, new_tree):
                for entry in (change.old, change.new):
                    path = getattr(entry, "path", None)
                    if path is not None and _under(path, prefixes):
                        return True
            return False

        def _touches(commit_id: CommitId) -> bool:
            commit = self._commit(commit_id)
            parent_trees: List[Optional[bytes]] = [
                self._commit(p.decode("ascii")).tree for p in commit.parents
            ] or [None]
            return all(_changed_under(tree, commit.tree) for tree in parent_trees)

        return _touches


def _normalize(path: str) -> bytes:
    cleaned = path.replace("\\", "/").strip("/")
    if cleaned == ".":
        cleaned = ""
    return cleaned.encode("utf-8")


def _under(path: bytes, prefixes: List[bytes]) -> bool:
    for prefix in prefixes:
        if not prefix or path == prefix or path.startswith(prefix + b"/"):
            return True
    return False
