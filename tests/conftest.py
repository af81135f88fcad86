"""Pytest configuration and shared fixtures for unfollow_checker tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from unfollow_checker.core.pipeline import Analyzer
from unfollow_checker.core.session import MemoryKeyValueStore, SessionStore


def make_entry(username: str, timestamp: int = 1700000000) -> dict[str, Any]:
    """Build one export entry the way the followers/following files do."""
    return {
        "title": "",
        "media_list_data": [],
        "string_list_data": [
            {
                "href": f"https://www.instagram.com/{username}",
                "value": username,
                "timestamp": timestamp,
            }
        ],
    }


def make_followers_export(usernames: list[str]) -> list[dict[str, Any]]:
    """Followers exports are a bare array of entries."""
    return [make_entry(u) for u in usernames]


def make_following_export(usernames: list[str]) -> dict[str, Any]:
    """Following exports wrap the entries under relationships_following."""
    return {"relationships_following": [make_entry(u) for u in usernames]}


def write_json(path: Path, data: Any) -> Path:
    """Helper to write a JSON document to a file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
    return path


@pytest.fixture
def followers_export() -> list[dict[str, Any]]:
    """Return a followers export for alice, bob and carol."""
    return make_followers_export(["alice", "bob", "carol"])


@pytest.fixture
def following_export() -> dict[str, Any]:
    """Return a following export for bob, carol and dave."""
    return make_following_export(["bob", "carol", "dave"])


@pytest.fixture
def export_files(tmp_path, followers_export, following_export) -> tuple[Path, Path]:
    """Write the followers/following exports to disk and return their paths."""
    followers = write_json(tmp_path / "followers_1.json", followers_export)
    following = write_json(tmp_path / "following.json", following_export)
    return followers, following


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def analyzer(memory_store) -> Analyzer:
    """Return an Analyzer persisting sessions in memory."""
    return Analyzer(SessionStore(memory_store))
