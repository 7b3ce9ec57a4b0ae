"""Error formatting for CLI output."""

from releasestate.exceptions import ReleaseStateError, ReleaseStateRunError


def format_error(error: ReleaseStateError) -> str:
    """Format a ReleaseStateError with the context needed to diagnose it.

    Example output:
        File not found in commit
          Project: app
          Commit: 3f2a9c1e0b7d4e5f6a7b8c9d0e1f2a3b4c5d6e7f
          Path: app/gradle.properties
          Cause: 'gradle.properties'
    """
    if isinstance(error, ReleaseStateRunError):
        parts = [error.message]
        for failure in error.failures:
            nested = format_error(failure).replace("\n", "\n  ")
            parts.append(f"  - {nested}")
        return "\n".join(parts)

    parts = [error.message]
    if error.project:
        parts.append(f"  Project: {error.project}")
    if error.commit:
        parts.append(f"  Commit: {error.commit}")
    if error.path:
        parts.append(f"  Path: {error.path}")
    if error.__cause__ is not None:
        parts.append(f"  Cause: {error.__cause__}")
    return "\n".join(parts)
