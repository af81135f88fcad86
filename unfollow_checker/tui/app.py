"""
Main Textual application for the Unfollow Checker.

Compares a followers export with a following export and shows who
unfollowed, who does not follow back and who is mutual. The last analysis
is saved and shown again on the next start.

Usage:
    python -m unfollow_checker.tui.app followers_1.json following.json
    python -m unfollow_checker.tui.app            # reopen the saved session
"""

import argparse
import logging
import os
import sys

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from unfollow_checker.core.errors import AnalysisError
from unfollow_checker.core.pipeline import Analyzer
from unfollow_checker.core.session import (
    FileKeyValueStore,
    Session,
    SessionStore,
    default_session_dir,
)
from unfollow_checker.tui.mixins import BackgroundTaskMixin
from unfollow_checker.tui.views.summary import SummaryScreen

WELCOME_TEXT = (
    "No analysis loaded.\n\n"
    "Start the app with your followers and following export files:\n"
    "  unfollow-checker-tui followers_1.json following.json\n\n"
    "Press r to analyze the files given on the command line, q to quit."
)


class UnfollowCheckerApp(BackgroundTaskMixin, App):
    """A Textual app for comparing followers and following exports."""

    TITLE = "Unfollow Checker"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }

    DataTable > .datatable--header {
        background: $primary-darken-1;
        color: $text;
        text-style: bold;
    }

    DataTable > .datatable--cursor {
        background: $secondary;
        color: $text;
    }

    #welcome {
        padding: 2 4;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "reanalyze", "Analyze", show=True),
    ]

    def __init__(
        self,
        followers_path: str | None = None,
        following_path: str | None = None,
        analyzer: Analyzer | None = None,
        output_dir: str | None = None,
    ):
        """Initialize the app.

        Args:
            followers_path: Path to the followers export, if analyzing.
            following_path: Path to the following export, if analyzing.
            analyzer: Analyzer owning the session (defaults to one storing
                sessions in default_session_dir()).
            output_dir: Output directory for export operations.
        """
        super().__init__()
        self.followers_path = followers_path
        self.following_path = following_path
        if analyzer is None:
            analyzer = Analyzer(SessionStore(FileKeyValueStore(default_session_dir())))
        self.analyzer = analyzer
        self.output_dir = output_dir

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(WELCOME_TEXT, id="welcome")
        yield Footer()

    def on_mount(self) -> None:
        """Restore the saved session, then analyze if files were given."""
        restored = self.analyzer.restore()
        if self.followers_path or self.following_path:
            self._start_analysis()
        elif restored is not None:
            self._show_session(restored)
            self.notify("Restored previous session")

    @property
    def has_inputs(self) -> bool:
        return bool(self.followers_path and self.following_path)

    def _start_analysis(self) -> None:
        self._run_analysis_task(
            self.analyzer,
            self.followers_path,
            self.following_path,
            on_complete=self._on_analysis_complete,
            on_error=self._on_analysis_error,
        )

    def _show_session(self, session: Session) -> None:
        """Replace any pushed screens with the summary of session."""
        while len(self.screen_stack) > 1:
            self.pop_screen()
        self.push_screen(SummaryScreen(session))

    def _on_analysis_complete(self, session: Session) -> None:
        """Called when the analysis worker finishes successfully."""
        self._show_session(session)
        self.notify(f"Analysis saved ({len(session.sets.unfollowers):,} unfollowers)")

    def _on_analysis_error(self, error: AnalysisError) -> None:
        """Called when the analysis worker fails."""
        self.notify(str(error), title=error.kind.value, severity="error", timeout=8)
        if self.analyzer.session is not None and not isinstance(self.screen, SummaryScreen):
            self._show_session(self.analyzer.session)

    def on_summary_screen_reanalyze_requested(
        self, message: SummaryScreen.ReanalyzeRequested
    ) -> None:
        self.action_reanalyze()

    def on_summary_screen_clear_requested(
        self, message: SummaryScreen.ClearRequested
    ) -> None:
        """Discard the session and return to the welcome screen."""
        try:
            self.analyzer.clear()
        except OSError as e:
            self.notify(f"Cannot clear session: {e}", severity="error")
            return
        while len(self.screen_stack) > 1:
            self.pop_screen()
        self.notify("Session cleared")

    def action_reanalyze(self) -> None:
        if not self.has_inputs:
            self.notify(
                "Pass the followers and following files on the command line",
                severity="warning",
            )
            return
        self._start_analysis()


def main() -> None:
    """Parse arguments and run the application."""
    parser = argparse.ArgumentParser(
        description="Find who unfollowed you, who doesn't follow back and who is mutual, "
        "from your followers and following JSON exports."
    )
    parser.add_argument(
        "followers",
        nargs="?",
        help="Path to the followers export (e.g. followers_1.json)",
    )
    parser.add_argument(
        "following",
        nargs="?",
        help="Path to the following export (e.g. following.json)",
    )
    parser.add_argument(
        "-O",
        "--output-dir",
        default="exports",
        help="Output directory for export operations (default: exports)",
    )
    parser.add_argument(
        "--session-dir",
        default=None,
        help="Directory the last session is saved in "
        "(default: $UNFOLLOW_CHECKER_HOME or ~/.unfollow_checker)",
    )
    parser.add_argument(
        "--allow-empty",
        action="store_true",
        help="Accept an export with no usernames instead of reporting an error",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write debug logs to this file",
    )
    args = parser.parse_args()

    if bool(args.followers) != bool(args.following):
        parser.error("both FOLLOWERS and FOLLOWING are required to run an analysis")

    # Verify the paths exist
    for path in (args.followers, args.following):
        if path is None:
            continue
        if not os.path.exists(path):
            print(f"Error: Path not found: {path}", file=sys.stderr)
            sys.exit(1)
        if not os.access(path, os.R_OK):
            print(f"Error: Permission denied: {path}", file=sys.stderr)
            sys.exit(1)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    session_dir = args.session_dir or default_session_dir()
    analyzer = Analyzer(
        SessionStore(FileKeyValueStore(session_dir)),
        allow_empty=args.allow_empty,
    )

    app = UnfollowCheckerApp(
        followers_path=args.followers,
        following_path=args.following,
        analyzer=analyzer,
        output_dir=args.output_dir,
    )
    app.run()


if __name__ == "__main__":
    main()
