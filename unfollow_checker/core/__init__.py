"""
Core analysis for social-graph exports.

This module extracts usernames from followers/following export files,
reconciles the two collections and persists the result.

Usage:
    from unfollow_checker.core import extract_usernames, reconcile

    followers = extract_usernames(followers_json)
    following = extract_usernames(following_json)
    sets = reconcile(followers, following)
    print(sets.unfollowers)
"""

from unfollow_checker.core.errors import AnalysisError, ErrorKind
from unfollow_checker.core.exporters import (
    EXPORT_FORMATS,
    export_collection,
    export_csv,
    export_json,
    export_txt,
    render_collection,
)
from unfollow_checker.core.extractor import (
    JsonKind,
    extract_usernames,
    json_kind,
    normalize_username,
)
from unfollow_checker.core.loader import ExportLoader, load_export_pair
from unfollow_checker.core.pipeline import AnalysisSummary, Analyzer, rate, summarize
from unfollow_checker.core.reconciler import (
    RelationshipSets,
    difference,
    intersection,
    reconcile,
)
from unfollow_checker.core.session import (
    FileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    Session,
    SessionStore,
    default_session_dir,
)

__all__ = [
    # Errors
    "AnalysisError",
    "ErrorKind",
    # Extraction
    "JsonKind",
    "extract_usernames",
    "json_kind",
    "normalize_username",
    # Reconciliation
    "RelationshipSets",
    "difference",
    "intersection",
    "reconcile",
    # Loading
    "ExportLoader",
    "load_export_pair",
    # Pipeline
    "Analyzer",
    "AnalysisSummary",
    "rate",
    "summarize",
    # Sessions
    "Session",
    "SessionStore",
    "KeyValueStore",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "default_session_dir",
    # Exports
    "EXPORT_FORMATS",
    "export_collection",
    "export_csv",
    "export_json",
    "export_txt",
    "render_collection",
]
