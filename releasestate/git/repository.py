"""
Repository access: opening a Git repository and resolving its head commit.

The repository handle is owned by the caller for the duration of one
invocation and is always released through :func:`open_repository`.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from git import Commit, Repo
from git.exc import GitError, InvalidGitRepositoryError, NoSuchPathError

from releasestate.exceptions import ReferenceNotFoundError, RepositoryAccessError

logger = logging.getLogger(__name__)

HEAD_REF = "HEAD"


@contextmanager
def open_repository(path: Union[str, Path]) -> Iterator[Repo]:
    """
    Open the Git repository at ``path`` and close it on exit.

    Args:
        path: The ``.git`` directory or the root of the working tree

    Yields:
        The open GitPython repository

    Raises:
        RepositoryAccessError: If the path is missing or is not a Git repository
    """
    path = Path(path)
    try:
        repo = Repo(str(path))
    except NoSuchPathError as e:
        raise RepositoryAccessError(
            f"Failed to read the Git repository: no such path {path}"
        ) from e
    except InvalidGitRepositoryError as e:
        raise RepositoryAccessError(
            f"Failed to read the Git repository: {path} is not a Git repository"
        ) from e

    logger.debug(f"Opened Git repository at {repo.git_dir}")
    try:
        yield repo
    finally:
        repo.close()


def get_head_commit(repo: Repo) -> Commit:
    """
    Resolve the commit referenced by ``HEAD``.

    Raises:
        ReferenceNotFoundError: If HEAD is unborn or dangling
        RepositoryAccessError: If the object store cannot be read
    """
    try:
        if not repo.head.is_valid():
            raise ReferenceNotFoundError(HEAD_REF, "the branch has no commits")
        commit = repo.head.commit
    except ReferenceNotFoundError:
        raise
    except ValueError as e:
        raise ReferenceNotFoundError(HEAD_REF, str(e)) from e
    except (GitError, OSError) as e:
        raise RepositoryAccessError(
            f"Failed to get the ref {HEAD_REF} from the Git repository: {e}"
        ) from e

    logger.debug(f"{HEAD_REF} is at {commit.hexsha}")
    return commit
