"""Tests for set reconciliation in unfollow_checker/core/reconciler.py."""

from __future__ import annotations

import random

import pytest

from unfollow_checker.core import RelationshipSets, difference, intersection, reconcile


class TestDifference:
    """Tests for difference()."""

    def test_basic(self):
        assert difference(["alice", "bob", "carol"], ["bob", "carol", "dave"]) == ["alice"]

    def test_preserves_first_argument_order(self):
        assert difference(["z", "a", "m", "b"], ["a"]) == ["z", "m", "b"]

    def test_self_difference_is_empty(self):
        a = ["x", "y", "z"]
        assert difference(a, a) == []

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ([], [], []),
            ([], ["a"], []),
            (["a"], [], ["a"]),
        ],
    )
    def test_empty_inputs(self, a, b, expected):
        assert difference(a, b) == expected


class TestIntersection:
    """Tests for intersection()."""

    def test_basic(self):
        assert intersection(["alice", "bob", "carol"], ["bob", "carol", "dave"]) == ["bob", "carol"]

    def test_preserves_first_argument_order(self):
        assert intersection(["c", "b", "a"], ["a", "b", "c"]) == ["c", "b", "a"]

    def test_self_intersection(self):
        a = ["x", "y", "z"]
        assert intersection(a, a) == a

    def test_symmetric_as_sets(self):
        a = ["p", "q", "r", "s"]
        b = ["s", "t", "q"]
        assert set(intersection(a, b)) == set(intersection(b, a))

    def test_empty_inputs(self):
        assert intersection([], ["a"]) == []
        assert intersection(["a"], []) == []


class TestPartition:
    """difference and intersection split the first argument exactly."""

    @pytest.mark.parametrize("seed", range(5))
    def test_partition(self, seed):
        rng = random.Random(seed)
        pool = [f"user{i}" for i in range(200)]
        a = rng.sample(pool, 120)
        b = rng.sample(pool, 90)

        only_a = difference(a, b)
        both = intersection(a, b)

        assert set(only_a).isdisjoint(both)
        assert sorted(only_a + both) == sorted(a)


class TestReconcile:
    """Tests for reconcile()."""

    def test_scenario(self):
        sets = reconcile(["alice", "bob", "carol"], ["bob", "carol", "dave"])
        assert sets == RelationshipSets(
            unfollowers=["alice"],
            not_following_back=["dave"],
            mutual=["bob", "carol"],
        )

    def test_one_sided_sets_are_disjoint(self):
        sets = reconcile(["a", "b", "c", "d"], ["c", "d", "e"])
        assert set(sets.unfollowers).isdisjoint(sets.not_following_back)

    def test_mutual_uses_followers_order(self):
        sets = reconcile(["c", "b", "a"], ["a", "b", "c"])
        assert sets.mutual == ["c", "b", "a"]

    def test_empty(self):
        assert reconcile([], []) == RelationshipSets()
