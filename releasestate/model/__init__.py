from .project import ProjectDescriptor, ProjectManifest
from .state import ReleaseState, parse_bool, write_release_state

__all__ = [
    "ProjectDescriptor",
    "ProjectManifest",
    "ReleaseState",
    "parse_bool",
    "write_release_state",
]
