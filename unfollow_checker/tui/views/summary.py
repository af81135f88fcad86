"""
Summary Screen for the Unfollow Checker.

Shows counts and rates for the current session. Select a relationship row
with Enter to open its username list.
"""

from __future__ import annotations

from datetime import datetime

from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from unfollow_checker.core.pipeline import AnalysisSummary, summarize
from unfollow_checker.core.session import Session
from unfollow_checker.tui.mixins import VimNavigationMixin
from unfollow_checker.tui.views.relationship_list import RelationshipListScreen

# Row key -> (label, RelationshipSets attribute)
RELATIONSHIP_ROWS: dict[str, tuple[str, str]] = {
    "unfollowers": ("Unfollowers", "unfollowers"),
    "not_following_back": ("Not following back", "not_following_back"),
    "mutual": ("Mutual", "mutual"),
}

# (header, width); None lets the last column fill the table
SUMMARY_COLUMNS: list[tuple[str, int | None]] = [
    ("LIST", 24),
    ("COUNT", 10),
    ("RATE", 10),
    ("OF", None),
]


def summary_rows(summary: AnalysisSummary) -> list[tuple[str, tuple[str, str, str, str]]]:
    """Build the (row key, cells) pairs shown in the summary table.

    Rate cells are blank for the two source lists, which have no base.
    """
    return [
        ("followers", ("Followers", f"{summary.followers:,}", "", "")),
        ("following", ("Following", f"{summary.following:,}", "", "")),
        (
            "unfollowers",
            ("Unfollowers", f"{summary.unfollowers:,}", f"{summary.unfollower_rate}%", "followers"),
        ),
        (
            "not_following_back",
            (
                "Not following back",
                f"{summary.not_following_back:,}",
                f"{summary.not_following_back_rate}%",
                "following",
            ),
        ),
        ("mutual", ("Mutual", f"{summary.mutual:,}", f"{summary.mutual_rate}%", "followers")),
    ]


def format_timestamp(timestamp: str) -> str:
    """Format an ISO-8601 timestamp for display, falling back to the raw text.

    Examples:
        >>> format_timestamp("2026-01-31T12:05:00+00:00")
        '2026-01-31 12:05'
        >>> format_timestamp("yesterday")
        'yesterday'
    """
    try:
        return datetime.fromisoformat(timestamp).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return timestamp


class SummaryScreen(VimNavigationMixin, Screen):
    """Screen showing the statistics of an analysis."""

    CSS = """
    SummaryScreen {
        layout: vertical;
    }

    #summary-header {
        background: $primary-background;
        color: $text;
        padding: 1;
        text-align: center;
        text-style: bold;
    }

    #summary-table {
        height: 1fr;
        border: solid $primary;
    }

    Header {
        dock: top;
    }

    Footer {
        dock: bottom;
    }
    """

    BINDINGS = VimNavigationMixin.VIM_BINDINGS + [
        Binding("q", "quit", "Quit", show=True),
        Binding("r", "reanalyze", "Re-run"),
        Binding("x", "clear_session", "Clear"),
    ]

    class ClearRequested(Message):
        """Posted when the user asks to discard the session."""

    class ReanalyzeRequested(Message):
        """Posted when the user asks to run the analysis again."""

    def __init__(
        self,
        session: Session,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the SummaryScreen.

        Args:
            session: The session to summarize.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._session = session

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield Static(
            f"Analysis from {format_timestamp(self._session.timestamp)}",
            id="summary-header",
        )
        yield DataTable(id="summary-table")
        yield Footer()

    def on_mount(self) -> None:
        """Populate the table when the screen is mounted."""
        self.title = "Unfollow Checker - Summary"
        table = self.query_one("#summary-table", DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        for header, width in SUMMARY_COLUMNS:
            table.add_column(header, width=width)
        for key, cells in summary_rows(summarize(self._session)):
            table.add_row(*cells, key=key)

        # Start on the unfollowers row
        table.move_cursor(row=2)
        table.focus()

    def _collection_for(self, key: str) -> list[str] | None:
        if key == "followers":
            return self._session.followers
        if key == "following":
            return self._session.following
        if key in RELATIONSHIP_ROWS:
            return getattr(self._session.sets, RELATIONSHIP_ROWS[key][1])
        return None

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open the username list for the selected row."""
        key = event.row_key.value
        if key is None:
            return
        usernames = self._collection_for(key)
        if usernames is None:
            return

        title = RELATIONSHIP_ROWS[key][0] if key in RELATIONSHIP_ROWS else key.title()
        self.app.push_screen(
            RelationshipListScreen(title=title, usernames=usernames, export_name=key)
        )

    def action_reanalyze(self) -> None:
        self.post_message(self.ReanalyzeRequested())

    def action_clear_session(self) -> None:
        self.post_message(self.ClearRequested())

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
