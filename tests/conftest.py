import io
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest
from git import Actor, Commit, Repo

AUTHOR = Actor("Test User", "test@example.com")


def properties(version: str, release: Optional[bool] = None) -> str:
    """Content of a properties file with the given version and release flag."""
    lines = [f"version={version}"]
    if release is not None:
        lines.append(f"release={str(release).lower()}")
    return "\n".join(lines) + "\n"


class RepoBuilder:
    """Builds commit graphs in a real repository.

    Each commit writes the given files (``None`` removes a file) on top of the
    current index and records the given parents, so branches and merges can
    be created without checking anything out.
    """

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(path)

    def commit(
        self,
        files: Dict[str, Optional[str]],
        message: str = "commit",
        parents: Optional[Iterable[Commit]] = None,
        head: bool = True,
    ) -> Commit:
        for name, content in files.items():
            target = self.path / name
            if content is None:
                self.repo.index.remove([str(target)], working_tree=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
                self.repo.index.add([str(target)])

        return self.repo.index.commit(
            message,
            parent_commits=list(parents) if parents is not None else None,
            head=head,
            author=AUTHOR,
            committer=AUTHOR,
        )

    def set_head(self, commit: Commit) -> None:
        """Point the current branch at ``commit``."""
        self.repo.head.reference.set_commit(commit)

    @property
    def git_dir(self) -> Path:
        return Path(self.repo.git_dir)


@pytest.fixture
def repo_builder(tmp_path):
    """An empty repository with helpers to create commits."""
    builder = RepoBuilder(tmp_path / "repo")
    yield builder
    builder.repo.close()


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("releasestate")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture
def props():
    """Factory for properties file contents."""
    return properties
