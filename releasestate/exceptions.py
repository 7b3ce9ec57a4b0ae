"""
Exception classes for release state resolution.

Every error raised while deriving a release state is fatal for the current
project. Errors carry the context needed to diagnose them without re-running
(project name, commit id and file path) whenever that context is known.
"""

from typing import Iterable, Optional


class ReleaseStateError(Exception):
    """Base exception for all release-state errors."""

    def __init__(
        self,
        message: str,
        project: Optional[str] = None,
        commit: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.message = message
        self.project = project
        self.commit = commit
        self.path = path
        super().__init__(message)

    def with_project(self, project: str) -> "ReleaseStateError":
        """Attach the project name, keeping any context already present."""
        if self.project is None:
            self.project = project
        return self

    def __str__(self) -> str:
        context = []
        if self.project:
            context.append(f"project={self.project}")
        if self.commit:
            context.append(f"commit={self.commit[:12]}")
        if self.path:
            context.append(f"path={self.path}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class RepositoryAccessError(ReleaseStateError):
    """Raised when the Git repository cannot be opened or read."""

    pass


class ReferenceNotFoundError(ReleaseStateError):
    """Raised when a symbolic reference (usually HEAD) cannot be resolved."""

    def __init__(self, ref: str, reason: str = ""):
        self.ref = ref
        message = f"No ref {ref} found in the Git repository"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class FileNotFoundInCommitError(ReleaseStateError):
    """Raised when the tracked properties file is absent from a commit's tree."""

    def __init__(self, path: str, commit: str):
        super().__init__("File not found in commit", commit=commit, path=path)


class CommonAncestorNotFoundError(ReleaseStateError):
    """Raised when a merge's parents share no ancestor within the search bound."""

    def __init__(self, first: str, second: str, limit: int):
        self.first = first
        self.second = second
        self.limit = limit
        super().__init__(
            f"Common ancestor not found between {first} and {second} "
            f"within {limit} commits"
        )


class DiffResolutionError(ReleaseStateError):
    """Raised when the diff between two commits cannot be computed."""

    pass


class MissingPropertyError(ReleaseStateError):
    """Raised when a properties file lacks a mandatory key."""

    def __init__(self, key: str, path: str, commit: Optional[str] = None):
        self.key = key
        super().__init__(f"Property '{key}' not defined", commit=commit, path=path)


class ManifestError(ReleaseStateError):
    """Raised when a project manifest cannot be loaded or is invalid."""

    pass


class ReleaseStateFileError(ReleaseStateError):
    """Raised when a release state file cannot be read or written."""

    pass


class ReleaseStateRunError(ReleaseStateError):
    """Raised at the end of a best-effort run when some projects failed."""

    def __init__(self, failures: Iterable[ReleaseStateError]):
        self.failures = list(failures)
        names = ", ".join(f.project or "?" for f in self.failures)
        super().__init__(
            f"Failed to resolve the release state of {len(self.failures)} "
            f"project(s): {names}"
        )
