import warnings
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from dulwich.objects import Blob, Commit, Tag, Tree
from dulwich.repo import Repo
from hypothesis import settings

# Newer dulwich releases deprecate some porcelain keywords; tests only build fixtures with them.
warnings.filterwarnings("ignore", category=DeprecationWarning, module=r"dulwich\..*")

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile("revdescribe-tests", database=None)
settings.load_profile("revdescribe-tests")

IDENTITY = b"Test User <test@example.com>"


class RepoBuilder:
    """Writes commits and tags straight into a dulwich object store."""

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(str(path))
        self._clock = 1_700_000_000

    def _write_tree(self, files: Dict[str, object]) -> bytes:
        tree = Tree()
        for name, value in sorted(files.items()):
            if isinstance(value, dict):
                tree.add(name.encode(), 0o040000, self._write_tree(value))
            else:
                blob = Blob.from_string(str(value).encode())
                self.repo.object_store.add_object(blob)
                tree.add(name.encode(), 0o100644, blob.id)
        self.repo.object_store.add_object(tree)
        return tree.id

    def tree(self, files: Dict[str, str]) -> bytes:
        nested: Dict[str, object] = {}
        for path, content in files.items():
            node = nested
            *dirs, leaf = path.split("/")
            for part in dirs:
                node = node.setdefault(part, {})  # type: ignore[assignment]
            node[leaf] = content
        return self._write_tree(nested)

    def commit(
        self,
        message: str = "commit",
        *,
        parents: Optional[List[str]] = None,
        files: Optional[Dict[str, str]] = None,
        move_head: bool = True,
    ) -> str:
        if parents is None:
            head = self.head()
            parents = [head] if head else []
        self._clock += 60
        commit = Commit()
        commit.tree = self.tree(files or {"README": message})
        commit.parents = [p.encode() for p in parents]
        commit.author = commit.committer = IDENTITY
        commit.author_time = commit.commit_time = self._clock
        commit.author_timezone = commit.commit_timezone = 0
        commit.message = message.encode()
        self.repo.object_store.add_object(commit)
        if move_head:
            self.repo.refs[b"HEAD"] = commit.id
            # Check the snapshot out so the index and work tree match HEAD.
            self.repo.get_worktree().reset_index(commit.tree)
        return commit.id.decode()

    def head(self) -> Optional[str]:
        try:
            return self.repo.refs[b"HEAD"].decode()
        except KeyError:
            return None

    def tag(self, name: str, commit_id: str) -> None:
        self.repo.refs[b"refs/tags/" + name.encode()] = commit_id.encode()

    def annotated_tag(self, name: str, commit_id: str, message: str = "release") -> str:
        tag = Tag()
        tag.name = name.encode()
        tag.object = (Commit, commit_id.encode())
        tag.tagger = IDENTITY
        tag.tag_time = self._clock
        tag.tag_timezone = 0
        tag.message = message.encode()
        self.repo.object_store.add_object(tag)
        self.repo.refs[b"refs/tags/" + name.encode()] = tag.id
        return tag.id.decode()


@pytest.fixture
def repo_builder(tmp_path: Path):
    builder = RepoBuilder(tmp_path)
    yield builder
    builder.repo.close()
