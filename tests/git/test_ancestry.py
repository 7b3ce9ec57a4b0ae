"""
Tests for predecessor and common ancestor resolution.

Traversal tests use lightweight fake commits; diff tests use real
repositories built with GitPython.
"""

import pytest

from releasestate.exceptions import CommonAncestorNotFoundError
from releasestate.git.ancestry import (
    find_common_ancestor,
    find_modification,
    resolve_predecessor,
    walk_ancestors,
)


class FakeCommit:
    def __init__(self, hexsha, *parents):
        self.hexsha = hexsha
        self.parents = list(parents)

    def __repr__(self):
        return f"FakeCommit({self.hexsha})"


def shas(commits):
    return [c.hexsha for c in commits]


@pytest.fixture
def diamond():
    """a <- b, a <- c, (b, c) <- d"""
    a = FakeCommit("a")
    b = FakeCommit("b", a)
    c = FakeCommit("c", a)
    d = FakeCommit("d", b, c)
    return a, b, c, d


@pytest.mark.short
class TestWalkAncestors:
    def test_breadth_first_order(self, diamond):
        a, b, c, d = diamond
        assert shas(walk_ancestors(d, 10)) == ["d", "b", "c", "a"]

    def test_shared_ancestor_visited_once(self, diamond):
        _, _, _, d = diamond
        visited = shas(walk_ancestors(d, 10))
        assert visited.count("a") == 1

    def test_limit_bounds_the_walk(self, diamond):
        _, _, _, d = diamond
        assert shas(walk_ancestors(d, 2)) == ["d", "b"]

    def test_start_is_included(self):
        root = FakeCommit("root")
        assert shas(walk_ancestors(root, 5)) == ["root"]


@pytest.mark.short
class TestFindCommonAncestor:
    def test_diamond(self, diamond):
        a, b, c, _ = diamond
        assert find_common_ancestor(b, c).hexsha == "a"

    def test_parent_is_ancestor_of_other_parent(self):
        a = FakeCommit("a")
        b = FakeCommit("b", a)
        c = FakeCommit("c", b)
        assert find_common_ancestor(b, c).hexsha == "b"

    def test_first_seen_in_second_walk_wins(self):
        # x and y are both shared, y comes first in the walk from the second side
        x = FakeCommit("x")
        y = FakeCommit("y", x)
        first = FakeCommit("first", x, y)
        second = FakeCommit("second", y)
        assert find_common_ancestor(first, second).hexsha == "y"

    def test_unrelated_histories(self):
        first = FakeCommit("p1", FakeCommit("r1"))
        second = FakeCommit("p2", FakeCommit("r2"))
        with pytest.raises(CommonAncestorNotFoundError) as exc_info:
            find_common_ancestor(first, second)
        assert exc_info.value.first == "p1"
        assert exc_info.value.second == "p2"
        assert exc_info.value.limit == 50

    def test_ancestor_beyond_limit(self):
        base = FakeCommit("base")
        left = base
        for i in range(5):
            left = FakeCommit(f"l{i}", left)
        right = FakeCommit("r0", base)

        with pytest.raises(CommonAncestorNotFoundError):
            find_common_ancestor(left, right, limit=3)
        assert find_common_ancestor(left, right, limit=6).hexsha == "base"

    def test_invalid_limit(self, diamond):
        _, b, c, _ = diamond
        with pytest.raises(ValueError, match="at least 1"):
            find_common_ancestor(b, c, limit=0)


@pytest.mark.short
class TestResolvePredecessor:
    def test_single_parent(self):
        parent = FakeCommit("parent")
        head = FakeCommit("head", parent)
        assert resolve_predecessor(head) is parent

    def test_root_commit(self):
        assert resolve_predecessor(FakeCommit("root")) is None

    def test_merge_uses_common_ancestor(self, diamond):
        _, _, _, d = diamond
        assert resolve_predecessor(d).hexsha == "a"

    def test_merge_without_common_ancestor(self):
        head = FakeCommit("m", FakeCommit("r1"), FakeCommit("r2"))
        with pytest.raises(CommonAncestorNotFoundError):
            resolve_predecessor(head)

    def test_merge_limit_is_passed(self):
        base = FakeCommit("base")
        left = FakeCommit("l1", FakeCommit("l0", base))
        head = FakeCommit("m", left, FakeCommit("r0", base))
        with pytest.raises(CommonAncestorNotFoundError):
            resolve_predecessor(head, limit=2)
        assert resolve_predecessor(head, limit=3).hexsha == "base"


@pytest.mark.short
class TestFindModification:
    def test_modified_file(self, repo_builder, props):
        old = repo_builder.commit({"app.properties": props("1.0")})
        new = repo_builder.commit({"app.properties": props("1.1")})

        diff = find_modification(old, new, "app.properties")

        assert diff is not None
        assert diff.change_type == "M"
        assert diff.a_blob.data_stream.read().decode() == props("1.0")

    def test_unmodified_file(self, repo_builder, props):
        old = repo_builder.commit({"app.properties": props("1.0"), "README": "a"})
        new = repo_builder.commit({"README": "b"})

        assert find_modification(old, new, "app.properties") is None

    def test_added_file_is_not_a_modification(self, repo_builder, props):
        old = repo_builder.commit({"README": "a"})
        new = repo_builder.commit({"app.properties": props("1.0")})

        assert find_modification(old, new, "app.properties") is None

    def test_deleted_file_is_not_a_modification(self, repo_builder, props):
        old = repo_builder.commit({"app.properties": props("1.0"), "README": "a"})
        new = repo_builder.commit({"app.properties": None})

        assert find_modification(old, new, "app.properties") is None

    def test_other_file_modified(self, repo_builder, props):
        old = repo_builder.commit(
            {"a/app.properties": props("1.0"), "b/app.properties": props("1.0")}
        )
        new = repo_builder.commit({"b/app.properties": props("2.0")})

        assert find_modification(old, new, "a/app.properties") is None
        assert find_modification(old, new, "b/app.properties") is not None
