"""
Release state resolution.

For each tracked project, the properties file at the head commit is compared
with the same file at the predecessor commit (the parent, or the common
ancestor of a merge's first two parents). When the file was not modified
between the two, the previous state is the current one.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from git import Commit

from releasestate.exceptions import (
    MissingPropertyError,
    ReleaseStateError,
    ReleaseStateFileError,
    ReleaseStateRunError,
)
from releasestate.git import (
    DEFAULT_ANCESTOR_SEARCH_DEPTH,
    find_modification,
    get_head_commit,
    open_repository,
    read_blob_properties,
    read_properties,
    resolve_predecessor,
)
from releasestate.model import (
    ProjectDescriptor,
    ReleaseState,
    parse_bool,
    write_release_state,
)

logger = logging.getLogger(__name__)

VERSION_PROPERTY = "version"
RELEASE_PROPERTY = "release"

Writer = Callable[[ReleaseState, Path], None]


@dataclass
class ResolutionResult:
    """Outcome of resolving one project."""

    project: ProjectDescriptor
    state: Optional[ReleaseState] = None
    error: Optional[ReleaseStateError] = None

    @property
    def success(self) -> bool:
        return self.error is None


class ReleaseStateResolver:
    """
    Derives the release state of projects from the last commit of a repository.

    Args:
        repository_path: The ``.git`` directory or the working tree root
        ancestor_search_depth: Commits walked per side when resolving merges
        fail_fast: Stop at the first failing project. When False, every
            project is attempted and a ReleaseStateRunError listing the
            failures is raised at the end.
    """

    def __init__(
        self,
        repository_path: Union[str, Path],
        ancestor_search_depth: int = DEFAULT_ANCESTOR_SEARCH_DEPTH,
        fail_fast: bool = True,
    ):
        if ancestor_search_depth < 1:
            raise ValueError(
                f"The ancestor search depth must be at least 1, got {ancestor_search_depth}"
            )
        self.repository_path = Path(repository_path)
        self.ancestor_search_depth = ancestor_search_depth
        self.fail_fast = fail_fast

    def resolve(self, head: Commit, project: ProjectDescriptor) -> ReleaseState:
        """
        Compute the release state of one project at ``head``.

        Raises:
            FileNotFoundInCommitError: If the properties file is not in ``head``
            MissingPropertyError: If the current properties lack a version
            CommonAncestorNotFoundError: If a merge has no ancestor within bounds
            DiffResolutionError: If the diff cannot be computed
        """
        path = project.properties_path
        current = read_properties(head, path)
        current_version = current.get(VERSION_PROPERTY)
        if current_version is None:
            raise MissingPropertyError(VERSION_PROPERTY, path, head.hexsha)

        previous = self._read_previous(head, path, current)

        state = ReleaseState(
            previous_version=previous.get(VERSION_PROPERTY),
            current_version=current_version,
            previous_release=parse_bool(previous.get(RELEASE_PROPERTY)),
            current_release=parse_bool(current.get(RELEASE_PROPERTY)),
        )
        logger.debug(f"{project.name}: {state}")
        return state

    def _read_previous(
        self, head: Commit, path: str, current: Dict[str, str]
    ) -> Dict[str, str]:
        predecessor = resolve_predecessor(head, self.ancestor_search_depth)
        if predecessor is None:
            return current

        modification = find_modification(predecessor, head, path)
        if modification is None:
            logger.debug(
                f"{path} not modified since {predecessor.hexsha[:12]}, "
                "previous state is the current one"
            )
            return current

        logger.debug(f"{path} modified since {predecessor.hexsha[:12]}")
        return read_blob_properties(modification.a_blob)

    def run(
        self,
        projects: Iterable[ProjectDescriptor],
        writer: Writer = write_release_state,
    ) -> List[ResolutionResult]:
        """
        Resolve and write the release state of every project, in order.

        The repository is opened once and closed when done, whether the run
        succeeds or fails. States already written are left in place on failure.

        Raises:
            ReleaseStateError: The first failure, when failing fast
            ReleaseStateRunError: After all projects, when not failing fast
        """
        results: List[ResolutionResult] = []
        failures: List[ReleaseStateError] = []

        with open_repository(self.repository_path) as repo:
            head = get_head_commit(repo)
            for project in projects:
                try:
                    state = self.resolve(head, project)
                    self._write(writer, state, project)
                except ReleaseStateError as e:
                    e.with_project(project.name)
                    if self.fail_fast:
                        raise
                    logger.error(f"Failed to resolve {project.name}: {e}")
                    failures.append(e)
                    results.append(ResolutionResult(project, error=e))
                    continue
                results.append(ResolutionResult(project, state=state))

        if failures:
            raise ReleaseStateRunError(failures)
        return results

    @staticmethod
    def _write(writer: Writer, state: ReleaseState, project: ProjectDescriptor) -> None:
        try:
            writer(state, project.output_file)
        except OSError as e:
            raise ReleaseStateFileError(
                f"Failed to write the release state: {e}",
                path=str(project.output_file),
            ) from e


def generate_release_states(
    repository_path: Union[str, Path],
    projects: Iterable[ProjectDescriptor],
    writer: Writer = write_release_state,
    ancestor_search_depth: int = DEFAULT_ANCESTOR_SEARCH_DEPTH,
    fail_fast: bool = True,
) -> List[ResolutionResult]:
    """Resolve and write the release state of ``projects`` in one invocation."""
    resolver = ReleaseStateResolver(
        repository_path,
        ancestor_search_depth=ancestor_search_depth,
        fail_fast=fail_fast,
    )
    return resolver.run(projects, writer)
