"""
Ancestor and predecessor resolution.

The commit graph is traversed explicitly: nodes are commits, edges are parent
links, and every walk is a breadth-first queue with a visited set bounded by a
maximum number of commits. The bound is a resource cap, not a correctness
guarantee for deep histories.
"""

import logging
from collections import deque
from typing import List, Optional

from git import Commit, Diff
from git.exc import GitError

from releasestate.exceptions import (
    CommonAncestorNotFoundError,
    DiffResolutionError,
    RepositoryAccessError,
)

logger = logging.getLogger(__name__)

DEFAULT_ANCESTOR_SEARCH_DEPTH = 50

# Change type reported by git for an in-place content modification
MODIFY = "M"


def walk_ancestors(start: Commit, limit: int) -> List[Commit]:
    """
    Walk the history breadth-first from ``start``.

    Args:
        start: First commit of the walk, included in the result
        limit: Maximum number of commits to visit

    Returns:
        The visited commits, in visit order
    """
    visited: List[Commit] = []
    seen = {start.hexsha}
    queue = deque([start])

    try:
        while queue and len(visited) < limit:
            commit = queue.popleft()
            visited.append(commit)
            for parent in commit.parents:
                if parent.hexsha not in seen:
                    seen.add(parent.hexsha)
                    queue.append(parent)
    except (GitError, OSError, ValueError) as e:
        raise RepositoryAccessError(
            f"An error occurred while traversing the commit tree: {e}",
            commit=start.hexsha,
        ) from e

    return visited


def find_common_ancestor(
    first: Commit, second: Commit, limit: int = DEFAULT_ANCESTOR_SEARCH_DEPTH
) -> Commit:
    """
    Find the nearest common ancestor of two commits.

    Both histories are walked up to ``limit`` commits each. The result is the
    first commit of the second walk that was also seen in the first one.

    Raises:
        ValueError: If ``limit`` is lower than 1
        CommonAncestorNotFoundError: If the walks do not overlap
    """
    if limit < 1:
        raise ValueError(f"The ancestor search depth must be at least 1, got {limit}")

    first_side = {commit.hexsha for commit in walk_ancestors(first, limit)}
    for commit in walk_ancestors(second, limit):
        if commit.hexsha in first_side:
            logger.debug(
                f"Common ancestor of {first.hexsha[:12]} and {second.hexsha[:12]} "
                f"is {commit.hexsha[:12]}"
            )
            return commit

    raise CommonAncestorNotFoundError(first.hexsha, second.hexsha, limit)


def resolve_predecessor(
    head: Commit, limit: int = DEFAULT_ANCESTOR_SEARCH_DEPTH
) -> Optional[Commit]:
    """
    Pick the commit the head should be compared against.

    A regular commit is compared against its parent, a merge against the
    common ancestor of its first two parents. A root commit has no
    predecessor and ``None`` is returned.
    """
    parents = head.parents
    if not parents:
        logger.debug(f"{head.hexsha[:12]} is a root commit")
        return None
    if len(parents) == 1:
        return parents[0]

    logger.debug(
        f"{head.hexsha[:12]} is a merge commit, searching for a common ancestor"
    )
    return find_common_ancestor(parents[0], parents[1], limit)


def find_modification(old: Commit, new: Commit, path: str) -> Optional[Diff]:
    """
    Return the diff entry modifying ``path`` between two commits, if any.

    Only in-place modifications count: files added, deleted, renamed or with a
    changed type between the two commits yield ``None``.

    Raises:
        DiffResolutionError: If git fails to compute the diff
    """
    try:
        diffs = old.diff(new, paths=[path])
    except (GitError, OSError, ValueError) as e:
        raise DiffResolutionError(
            f"An error occurred while diffing the commits: {e}",
            commit=new.hexsha,
            path=path,
        ) from e

    for diff in diffs:
        if diff.change_type == MODIFY and diff.b_path == path:
            return diff
    return None
