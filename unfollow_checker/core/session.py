"""
Session persistence for the last completed analysis.

A Session is stored as a single JSON record under a fixed key in a
key-value store with get/set/delete, backed by a directory on disk or an
in-memory dict.

Record layout:
    {
        "followers": [...],
        "following": [...],
        "unfollowers": [...],
        "not_following_back": [...],
        "mutual": [...],
        "timestamp": "2026-01-31T12:00:00+00:00"
    }
"""

from __future__ import annotations

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from unfollow_checker.core.reconciler import RelationshipSets

logger = logging.getLogger(__name__)

# Key the session record is stored under
SESSION_KEY = "unfollow_checker_session"

# Environment variable overriding the default session directory
HOME_ENV_VAR = "UNFOLLOW_CHECKER_HOME"

RECORD_FIELDS = (
    "followers",
    "following",
    "unfollowers",
    "not_following_back",
    "mutual",
)


def default_session_dir() -> Path:
    """Return the directory sessions are stored in by default.

    Uses $UNFOLLOW_CHECKER_HOME when set, otherwise ~/.unfollow_checker.
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".unfollow_checker"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Session:
    """The last computed analysis.

    Attributes:
        followers: Usernames extracted from the followers export.
        following: Usernames extracted from the following export.
        sets: The derived relationship sets.
        timestamp: ISO-8601 time the analysis completed.
    """

    followers: list[str] = field(default_factory=list)
    following: list[str] = field(default_factory=list)
    sets: RelationshipSets = field(default_factory=RelationshipSets)
    timestamp: str = field(default_factory=_now_iso)

    def to_record(self) -> dict[str, Any]:
        """Return the session as its persisted record."""
        return {
            "followers": list(self.followers),
            "following": list(self.following),
            "unfollowers": list(self.sets.unfollowers),
            "not_following_back": list(self.sets.not_following_back),
            "mutual": list(self.sets.mutual),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Session":
        """Build a session from a persisted record.

        Raises:
            ValueError: If a field is missing or has the wrong type.
        """
        for name in RECORD_FIELDS:
            value = record.get(name)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Session field '{name}' must be a list of strings")
        timestamp = record.get("timestamp")
        if not isinstance(timestamp, str):
            raise ValueError("Session field 'timestamp' must be a string")

        return cls(
            followers=record["followers"],
            following=record["following"],
            sets=RelationshipSets(
                unfollowers=record["unfollowers"],
                not_following_back=record["not_following_back"],
                mutual=record["mutual"],
            ),
            timestamp=timestamp,
        )


class KeyValueStore(ABC):
    """Minimal key-value store holding serialized blobs."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the blob stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, blob: str) -> None:
        """Store blob under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Deleting a missing key is not an error."""
        pass


class MemoryKeyValueStore(KeyValueStore):
    """In-process store backed by a dict."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, blob: str) -> None:
        self._data[key] = blob

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileKeyValueStore(KeyValueStore):
    """Store that keeps each key in ``<directory>/<key>.json``.

    Writes go to a temporary file that is renamed over the target, so a
    crash mid-write never leaves a truncated record behind.
    """

    _KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not self._KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, blob: str) -> None:
        path = self._path_for(key)
        os.makedirs(self.directory, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(blob, encoding="utf-8")
        os.replace(tmp_path, path)

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass


class SessionStore:
    """Reads and writes the Session record in a KeyValueStore."""

    SESSION_KEY: str = SESSION_KEY

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def save(self, session: Session) -> None:
        """Persist the session, overwriting any previous one."""
        blob = json.dumps(session.to_record(), ensure_ascii=False)
        self.store.set(self.SESSION_KEY, blob)
        logger.debug("Saved session from %s", session.timestamp)

    def load(self) -> Session | None:
        """Return the stored session, or None if there is none.

        A record that cannot be read or decoded is treated as absent.
        """
        try:
            blob = self.store.get(self.SESSION_KEY)
        except OSError as e:
            logger.warning("Cannot read session record: %s", e)
            return None
        if blob is None:
            return None
        try:
            record = json.loads(blob)
            if not isinstance(record, dict):
                raise ValueError("Session record must be an object")
            return Session.from_record(record)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Ignoring corrupt session record: %s", e)
            return None

    def clear(self) -> None:
        """Remove the stored session."""
        self.store.delete(self.SESSION_KEY)
