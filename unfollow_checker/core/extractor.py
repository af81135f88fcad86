"""
Username extraction from social-graph export files.

Export files come in several shapes: a bare array of entries, an object
wrapping the entries under ``relationships_following``, or entries nested
inside arbitrary extra structure. Every entry carries its handle as
``string_list_data[].value``. The extractor walks the whole document
without assuming a schema and collects every handle it finds.

Usage:
    from unfollow_checker.core import extract_usernames

    with open("followers_1.json", encoding="utf-8") as f:
        usernames = extract_usernames(json.load(f))
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# Field holding the list of handle entries
STRING_LIST_FIELD = "string_list_data"

# Field holding the handle inside each entry
VALUE_FIELD = "value"

# Wrapper key used by the "following" export variant
FOLLOWING_WRAPPER_FIELD = "relationships_following"


class JsonKind(Enum):
    """Tag for the variant of a decoded JSON value."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value: Any) -> JsonKind | None:
    """Classify a decoded JSON value.

    Args:
        value: Any value produced by ``json.load``.

    Returns:
        The matching JsonKind, or None for values JSON cannot produce.

    Examples:
        >>> json_kind([1, 2])
        <JsonKind.ARRAY: 'array'>
        >>> json_kind(True)
        <JsonKind.BOOL: 'bool'>
    """
    if value is None:
        return JsonKind.NULL
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    return None


def normalize_username(value: str) -> str:
    """Normalize a handle: strip surrounding whitespace and lower-case it.

    Examples:
        >>> normalize_username("  Alice ")
        'alice'
    """
    return value.strip().lower()


def _collect_entries(entries: list[Any], found: dict[str, None]) -> None:
    """Record the ``value`` of every object in a ``string_list_data`` array."""
    for entry in entries:
        if json_kind(entry) is not JsonKind.OBJECT:
            continue
        value = entry.get(VALUE_FIELD)
        if json_kind(value) is not JsonKind.STRING:
            continue
        username = normalize_username(value)
        if username:
            found.setdefault(username, None)


def extract_usernames(raw: Any) -> list[str]:
    """Extract a de-duplicated list of normalized usernames from an export.

    Walks the document depth-first with an explicit stack, so nesting depth
    is bounded only by memory. Nodes are visited in the same order as a
    recursive pre-order walk, which keeps the output in first-seen order.

    Args:
        raw: A decoded JSON document of any shape.

    Returns:
        Unique usernames in the order they were first found. Empty if the
        document holds no recognizable entries.

    Examples:
        >>> extract_usernames([{"string_list_data": [{"value": "X"}, {"value": "x"}]}])
        ['x']
        >>> extract_usernames({"relationships_following": [
        ...     {"string_list_data": [{"value": "Eve"}]}]})
        ['eve']
        >>> extract_usernames(None)
        []
    """
    # dict keeps insertion order and gives O(1) membership for de-duplication
    found: dict[str, None] = {}
    stack: list[Any] = [raw]

    while stack:
        node = stack.pop()
        kind = json_kind(node)

        if kind is JsonKind.ARRAY:
            stack.extend(reversed(node))
        elif kind is JsonKind.OBJECT:
            entries = node.get(STRING_LIST_FIELD)
            if json_kind(entries) is JsonKind.ARRAY:
                _collect_entries(entries, found)

            # The wrapper is walked ahead of the other fields; walking it a
            # second time with the rest could not add new usernames.
            wrapper = node.get(FOLLOWING_WRAPPER_FIELD)
            if wrapper:
                children = [wrapper] + [
                    value for key, value in node.items() if key != FOLLOWING_WRAPPER_FIELD
                ]
            else:
                children = list(node.values())
            stack.extend(reversed(children))

    return list(found)
