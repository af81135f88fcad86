"""
Set reconciliation over username collections.

Both operations keep the order of their first argument, which callers rely on
for a stable display order.
"""

from __future__ import annotations

from dataclasses import dataclass, field


def difference(a: list[str], b: list[str]) -> list[str]:
    """Return the elements of ``a`` that are not in ``b``, in ``a``'s order.

    Examples:
        >>> difference(["alice", "bob", "carol"], ["bob", "carol", "dave"])
        ['alice']
    """
    members = set(b)
    return [item for item in a if item not in members]


def intersection(a: list[str], b: list[str]) -> list[str]:
    """Return the elements of ``a`` that are also in ``b``, in ``a``'s order.

    Examples:
        >>> intersection(["alice", "bob", "carol"], ["bob", "carol", "dave"])
        ['bob', 'carol']
    """
    members = set(b)
    return [item for item in a if item in members]


@dataclass
class RelationshipSets:
    """The three collections derived from a followers/following pair.

    Attributes:
        unfollowers: In followers, not in following.
        not_following_back: In following, not in followers.
        mutual: In both, in followers order.
    """

    unfollowers: list[str] = field(default_factory=list)
    not_following_back: list[str] = field(default_factory=list)
    mutual: list[str] = field(default_factory=list)


def reconcile(followers: list[str], following: list[str]) -> RelationshipSets:
    """Compute all three relationship sets for a followers/following pair."""
    return RelationshipSets(
        unfollowers=difference(followers, following),
        not_following_back=difference(following, followers),
        mutual=intersection(followers, following),
    )
