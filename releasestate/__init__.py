"""releasestate - release state of the last commit of a Git repository."""

from releasestate.exceptions import (
    CommonAncestorNotFoundError,
    DiffResolutionError,
    FileNotFoundInCommitError,
    ManifestError,
    MissingPropertyError,
    ReferenceNotFoundError,
    ReleaseStateError,
    ReleaseStateFileError,
    ReleaseStateRunError,
    RepositoryAccessError,
)
from releasestate.model import ProjectDescriptor, ProjectManifest, ReleaseState
from releasestate.resolver import (
    ReleaseStateResolver,
    ResolutionResult,
    generate_release_states,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ReleaseStateResolver",
    "ResolutionResult",
    "generate_release_states",
    "ProjectDescriptor",
    "ProjectManifest",
    "ReleaseState",
    "ReleaseStateError",
    "RepositoryAccessError",
    "ReferenceNotFoundError",
    "FileNotFoundInCommitError",
    "CommonAncestorNotFoundError",
    "DiffResolutionError",
    "MissingPropertyError",
    "ManifestError",
    "ReleaseStateFileError",
    "ReleaseStateRunError",
]
