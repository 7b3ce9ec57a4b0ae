"""
Git access for release state resolution, built on GitPython.

- repository: open a repository and resolve its head commit
- history: read a properties file as of a given commit
- ancestry: pick the comparison commit and detect modifications
"""

from .ancestry import (
    DEFAULT_ANCESTOR_SEARCH_DEPTH,
    find_common_ancestor,
    find_modification,
    resolve_predecessor,
    walk_ancestors,
)
from .history import lookup_blob, parse_properties, read_blob_properties, read_properties
from .repository import get_head_commit, open_repository

__all__ = [
    "DEFAULT_ANCESTOR_SEARCH_DEPTH",
    "find_common_ancestor",
    "find_modification",
    "get_head_commit",
    "lookup_blob",
    "open_repository",
    "parse_properties",
    "read_blob_properties",
    "read_properties",
    "resolve_predecessor",
    "walk_ancestors",
]
