"""
Background Task Mixin for running the analysis with progress feedback.

Provides a reusable pattern for:
- Pushing a progress screen
- Running the analysis in an async worker on the app's event loop
- Handling completion and errors
- Dismissing the progress screen
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Callable

from textual import work

from unfollow_checker.core.errors import AnalysisError, ErrorKind

if TYPE_CHECKING:
    from unfollow_checker.core.pipeline import Analyzer
    from unfollow_checker.core.session import Session
    from unfollow_checker.tui.screens.progress import ProgressScreen


class BackgroundTaskMixin:
    """Mixin providing analysis execution with progress UI.

    File reads suspend on the event loop, so the UI stays responsive while
    both exports load. Extraction and reconciliation then run synchronously.

    Usage:
        class MyApp(BackgroundTaskMixin, App):
            def start(self):
                self._run_analysis_task(
                    analyzer,
                    "followers_1.json",
                    "following.json",
                    on_complete=self._show_results,
                    on_error=self._show_error,
                )
    """

    # Configurable delays
    TASK_COMPLETION_DELAY: float = 0.5
    TASK_ERROR_DELAY: float = 2.0

    def _run_analysis_task(
        self,
        analyzer: "Analyzer",
        followers_path: str | None,
        following_path: str | None,
        on_complete: Callable[["Session"], None],
        on_error: Callable[[AnalysisError], None] | None = None,
        *,
        screen_title: str | None = None,
    ) -> None:
        """Run an analysis with a progress screen.

        Args:
            analyzer: The Analyzer that owns the session.
            followers_path: Path to the followers export.
            following_path: Path to the following export.
            on_complete: Called with the new Session on success.
            on_error: Called with the AnalysisError on failure.
            screen_title: Optional custom title for progress screen.
        """
        from unfollow_checker.tui.screens.progress import AnalyzingScreen

        screen = AnalyzingScreen(title=screen_title)
        self.app.push_screen(screen)
        self._run_analysis_worker(
            screen, analyzer, followers_path, following_path, on_complete, on_error
        )

    @work(exclusive=True, group="analysis")
    async def _run_analysis_worker(
        self,
        screen: "ProgressScreen",
        analyzer: "Analyzer",
        followers_path: str | None,
        following_path: str | None,
        on_complete: Callable[["Session"], None],
        on_error: Callable[[AnalysisError], None] | None,
    ) -> None:
        """Async worker for the analysis."""
        try:
            screen.update_status("Reading export files...")
            session = await analyzer.analyze_files(followers_path, following_path)
        except AnalysisError as e:
            await self._finish_with_error(screen, e, on_error)
            return
        except Exception as e:
            error = AnalysisError(ErrorKind.ANALYSIS_FAILED, "Analysis failed", str(e))
            await self._finish_with_error(screen, error, on_error)
            return

        screen.set_complete(
            f"Found {len(session.followers):,} followers and "
            f"{len(session.following):,} following"
        )
        await asyncio.sleep(self.TASK_COMPLETION_DELAY)
        self.app.pop_screen()
        on_complete(session)

    async def _finish_with_error(
        self,
        screen: "ProgressScreen",
        error: AnalysisError,
        on_error: Callable[[AnalysisError], None] | None,
    ) -> None:
        screen.set_error(f"Error: {error.message}", error.detail or "")
        await asyncio.sleep(self.TASK_ERROR_DELAY)
        self.app.pop_screen()
        if on_error:
            on_error(error)
