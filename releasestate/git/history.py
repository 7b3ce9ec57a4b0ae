"""
Historical file lookup: reading a properties file as it existed in a commit.

Lookups navigate the commit's tree along the single requested path instead of
walking the whole tree.
"""

import logging
from typing import Dict

import javaproperties
from git import Blob, Commit
from git.exc import GitError

from releasestate.exceptions import FileNotFoundInCommitError, RepositoryAccessError

logger = logging.getLogger(__name__)


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse the contents of a ``.properties`` file into a dictionary.

    The format is the one read by ``java.util.Properties.load``: ``=``, ``:``
    or whitespace separates key and value, ``#`` and ``!`` start comments,
    a trailing backslash continues the line and escapes such as ``\\uXXXX``
    are decoded. Later duplicates win and keys without a value map to ``""``.
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    return javaproperties.loads(text)


def read_blob_properties(blob: Blob) -> Dict[str, str]:
    """Read and parse the contents of a blob as UTF-8 properties."""
    try:
        content = blob.data_stream.read().decode("utf-8")
    except (GitError, OSError, ValueError) as e:
        raise RepositoryAccessError(
            f"Failed to read the file from the Git repository: {e}",
            path=blob.path,
        ) from e
    return parse_properties(content)


def lookup_blob(commit: Commit, path: str) -> Blob:
    """
    Return the blob at ``path`` in the commit's tree.

    Raises:
        FileNotFoundInCommitError: If the path is absent or names a directory
    """
    try:
        item = commit.tree / path
    except KeyError as e:
        raise FileNotFoundInCommitError(path, commit.hexsha) from e
    except (GitError, OSError) as e:
        raise RepositoryAccessError(
            f"Failed to read the tree of the commit: {e}",
            commit=commit.hexsha,
            path=path,
        ) from e

    if item.type != "blob":
        raise FileNotFoundInCommitError(path, commit.hexsha)
    return item


def read_properties(commit: Commit, path: str) -> Dict[str, str]:
    """
    Read the properties file at ``path`` as of ``commit``.

    Args:
        commit: The commit whose tree is inspected
        path: POSIX path of the file, relative to the repository root

    Returns:
        The parsed properties

    Raises:
        FileNotFoundInCommitError: If the file does not exist in that commit
    """
    blob = lookup_blob(commit, path)
    logger.debug(f"Reading {path} at {commit.hexsha[:12]} (blob {blob.hexsha[:12]})")
    return read_blob_properties(blob)
