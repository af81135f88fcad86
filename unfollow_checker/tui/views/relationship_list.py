"""
Relationship List Screen for the Unfollow Checker.

Shows one derived collection (unfollowers, not following back or mutual)
in a virtualized list with a debounced search box.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static

from unfollow_checker.tui.list_window import EmptyState, QueryDebouncer
from unfollow_checker.tui.mixins import ExportMixin, VimNavigationMixin
from unfollow_checker.tui.widgets.username_list import UsernameList

EMPTY_MESSAGES: dict[EmptyState, str] = {
    EmptyState.NO_ITEMS: "Nobody here. This list is empty.",
    EmptyState.NO_MATCHES: "No usernames match your search.",
}


class RelationshipListScreen(ExportMixin, VimNavigationMixin, Screen):
    """Screen that displays a single username collection."""

    CSS = """
    RelationshipListScreen {
        layout: vertical;
    }

    #search-input {
        dock: top;
        margin: 0 1;
    }

    #list-status {
        height: 1;
        padding: 0 2;
        color: $text-muted;
    }

    #empty-message {
        display: none;
        padding: 1 2;
        text-align: center;
        color: $text-muted;
        text-style: italic;
    }

    #empty-message.visible {
        display: block;
    }

    #username-list {
        border: solid $primary;
    }

    Header {
        dock: top;
    }

    Footer {
        dock: bottom;
    }
    """

    BINDINGS = (
        VimNavigationMixin.VIM_BINDINGS
        + ExportMixin.EXPORT_BINDINGS
        + [
            Binding("q", "quit", "Quit", show=False),
            Binding("escape", "go_back", "Back", show=True),
            Binding("slash", "focus_search", "Search", show=True),
        ]
    )

    # Delay between the last keystroke and the filter being applied
    DEBOUNCE_DELAY: float = QueryDebouncer.DEFAULT_DELAY

    def __init__(
        self,
        title: str,
        usernames: list[str],
        export_name: str,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the RelationshipListScreen.

        Args:
            title: Heading for the collection (e.g. "Unfollowers").
            usernames: The collection to show. Held by reference, not copied.
            export_name: Base file name used for exports.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._title = title
        self._usernames = usernames
        self._export_name = export_name
        self._debouncer = QueryDebouncer(
            self.set_timer, self._apply_query, delay=self.DEBOUNCE_DELAY
        )

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield Input(placeholder="Search usernames...", id="search-input")
        yield Static("", id="list-status")
        yield Static("", id="empty-message")
        yield UsernameList(self._usernames, id="username-list")
        yield Footer()

    def on_mount(self) -> None:
        self.title = f"Unfollow Checker - {self._title}"
        self._update_status()
        self.query_one(UsernameList).focus()

    def _export_target(self) -> tuple[list[str], str]:
        # Export what the user is looking at: the filtered rows
        return self.query_one(UsernameList).model.items, self._export_name

    def on_input_changed(self, event: Input.Changed) -> None:
        """Restart the debounce timer on every keystroke."""
        if event.input.id == "search-input":
            self._debouncer.submit(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Apply the query immediately and move focus to the list."""
        if event.input.id == "search-input":
            self._debouncer.flush()
            self.query_one(UsernameList).focus()

    def _apply_query(self, query: str) -> None:
        self.query_one(UsernameList).set_query(query)
        self._update_status()

    @property
    def status_text(self) -> str:
        """The status line for the current filter."""
        username_list = self.query_one(UsernameList)
        total = username_list.total_count
        if username_list.model.query:
            return f"{self._title}: showing {username_list.filtered_count:,} of {total:,}"
        return f"{self._title}: {total:,}"

    @property
    def empty_message(self) -> str | None:
        """The message shown instead of rows, or None when rows are shown."""
        state = self.query_one(UsernameList).empty_state
        return None if state is None else EMPTY_MESSAGES[state]

    def _update_status(self) -> None:
        self.query_one("#list-status", Static).update(self.status_text)

        empty = self.query_one("#empty-message", Static)
        message = self.empty_message
        if message is None:
            empty.remove_class("visible")
        else:
            empty.update(message)
            empty.add_class("visible")

    def on_username_list_selected(self, event: UsernameList.Selected) -> None:
        """Copy the selected username to the clipboard."""
        self.app.copy_to_clipboard(event.username)
        self.notify(f"Copied {event.username}")

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_go_back(self) -> None:
        """Return to the summary, or leave the search box first."""
        search = self.query_one("#search-input", Input)
        if search.has_focus:
            self.query_one(UsernameList).focus()
            return
        self._debouncer.cancel()
        self.app.pop_screen()

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
