"""
Analysis pipeline tying extraction, reconciliation and persistence together.

Usage:
    analyzer = Analyzer(SessionStore(FileKeyValueStore(default_session_dir())))
    session = asyncio.run(analyzer.analyze_files("followers_1.json", "following.json"))
    summary = summarize(session)
    print(summary.unfollowers, summary.unfollower_rate)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from unfollow_checker.core.errors import AnalysisError, ErrorKind
from unfollow_checker.core.extractor import extract_usernames
from unfollow_checker.core.loader import ExportLoader, load_export_pair
from unfollow_checker.core.reconciler import reconcile
from unfollow_checker.core.session import MemoryKeyValueStore, Session, SessionStore

logger = logging.getLogger(__name__)


def rate(count: int, base: int) -> float:
    """Return ``count / base * 100`` rounded to one decimal, 0 when base is 0.

    Examples:
        >>> rate(1, 3)
        33.3
        >>> rate(5, 0)
        0
    """
    if base == 0:
        return 0
    return round(count / base * 100, 1)


@dataclass
class AnalysisSummary:
    """Counts and rates for display.

    Rates are percentages: unfollowers and mutual relative to followers,
    not-following-back relative to following.
    """

    followers: int
    following: int
    unfollowers: int
    not_following_back: int
    mutual: int
    unfollower_rate: float
    not_following_back_rate: float
    mutual_rate: float
    timestamp: str


def summarize(session: Session) -> AnalysisSummary:
    """Compute display statistics for a session."""
    followers = len(session.followers)
    following = len(session.following)
    sets = session.sets
    return AnalysisSummary(
        followers=followers,
        following=following,
        unfollowers=len(sets.unfollowers),
        not_following_back=len(sets.not_following_back),
        mutual=len(sets.mutual),
        unfollower_rate=rate(len(sets.unfollowers), followers),
        not_following_back_rate=rate(len(sets.not_following_back), following),
        mutual_rate=rate(len(sets.mutual), followers),
        timestamp=session.timestamp,
    )


class Analyzer:
    """Runs analyses and owns the persisted Session.

    Attributes:
        session_store: Where completed sessions are persisted.
        allow_empty: Accept an export with zero usernames as a valid result
            instead of failing with analysis_failed.
        session: The current session, or None before the first analysis.
    """

    def __init__(
        self,
        session_store: SessionStore | None = None,
        *,
        allow_empty: bool = False,
        loader: ExportLoader | None = None,
    ) -> None:
        if session_store is None:
            session_store = SessionStore(MemoryKeyValueStore())
        self.session_store = session_store
        self.allow_empty = allow_empty
        self.loader = loader or ExportLoader()
        self.session: Session | None = None

    async def analyze_files(
        self, followers_path: str | None, following_path: str | None
    ) -> Session:
        """Load both exports concurrently and analyze them.

        Raises:
            AnalysisError: On any load or analysis failure. Failures that are
                not already classified are reported as analysis_failed.
        """
        try:
            followers_raw, following_raw = await load_export_pair(
                followers_path, following_path, self.loader
            )
        except AnalysisError:
            raise
        except Exception as e:
            raise AnalysisError(
                ErrorKind.ANALYSIS_FAILED, "Could not load the exports", str(e)
            ) from e
        return self.analyze_documents(followers_raw, following_raw)

    def analyze_documents(self, followers_raw: Any, following_raw: Any) -> Session:
        """Analyze two decoded exports and persist the result.

        Args:
            followers_raw: Decoded followers export.
            following_raw: Decoded following export.

        Returns:
            The new Session.

        Raises:
            AnalysisError: analysis_failed if either side yields no usernames
                (unless allow_empty is set), the computation fails or the
                session cannot be saved.
        """
        try:
            followers = extract_usernames(followers_raw)
            following = extract_usernames(following_raw)
        except Exception as e:
            raise AnalysisError(
                ErrorKind.ANALYSIS_FAILED, "Could not extract usernames", str(e)
            ) from e

        if not self.allow_empty:
            empty = [
                name
                for name, usernames in (("followers", followers), ("following", following))
                if not usernames
            ]
            if empty:
                raise AnalysisError(
                    ErrorKind.ANALYSIS_FAILED,
                    f"No usernames found in the {' and '.join(empty)} export",
                    "Check that you selected the right files",
                )

        try:
            sets = reconcile(followers, following)
        except Exception as e:
            raise AnalysisError(
                ErrorKind.ANALYSIS_FAILED, "Could not compare the exports", str(e)
            ) from e

        session = Session(followers=followers, following=following, sets=sets)
        try:
            self.session_store.save(session)
        except Exception as e:
            raise AnalysisError(
                ErrorKind.ANALYSIS_FAILED, "Could not save the session", str(e)
            ) from e
        self.session = session
        logger.info(
            "Analyzed %d followers and %d following: %d unfollowers, "
            "%d not following back, %d mutual",
            len(followers),
            len(following),
            len(sets.unfollowers),
            len(sets.not_following_back),
            len(sets.mutual),
        )
        return session

    def restore(self) -> Session | None:
        """Load the persisted session, if any, and make it current."""
        self.session = self.session_store.load()
        return self.session

    def clear(self) -> None:
        """Discard the current and persisted session."""
        self.session = None
        self.session_store.clear()
        logger.info("Session cleared")
