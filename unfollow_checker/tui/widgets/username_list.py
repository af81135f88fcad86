"""
Virtualized username list widget.

Renders a username collection through Textual's line API. Only the rows in
the current ListWindow (visible rows plus an overscan margin) are
materialized, so a list of tens of thousands of usernames scrolls as cheaply
as a list of twenty.
"""

from __future__ import annotations

from rich.segment import Segment
from textual.binding import Binding
from textual.geometry import Size
from textual.message import Message
from textual.reactive import reactive
from textual.scroll_view import ScrollView
from textual.strip import Strip

from unfollow_checker.tui.list_window import (
    EmptyState,
    FilteredList,
    ListWindow,
    compute_window,
)


class UsernameList(ScrollView, can_focus=True):
    """Scrollable, filterable list of usernames.

    Attributes:
        cursor_index: Index of the highlighted row within the filtered list.
    """

    COMPONENT_CLASSES = {
        "username-list--cursor",
        "username-list--index",
    }

    DEFAULT_CSS = """
    UsernameList {
        height: 1fr;
        background: $surface;
    }

    UsernameList > .username-list--cursor {
        background: $secondary;
        color: $text;
        text-style: bold;
    }

    UsernameList > .username-list--index {
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("up", "cursor_up", "Up", show=False),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("pageup", "page_up", "Page Up", show=False),
        Binding("pagedown", "page_down", "Page Down", show=False),
        Binding("home", "cursor_home", "Top", show=False),
        Binding("end", "cursor_end", "Bottom", show=False),
        Binding("enter", "select_cursor", "Copy", show=True),
    ]

    # Height of a row in terminal lines
    ROW_HEIGHT: int = 1

    # Rows materialized above and below the viewport
    OVERSCAN: int = 10

    # Width reserved for the row number column
    INDEX_WIDTH: int = 7

    cursor_index: reactive[int] = reactive(0)

    class Selected(Message):
        """Posted when Enter is pressed on a row."""

        def __init__(self, username: str, index: int) -> None:
            self.username = username
            self.index = index
            super().__init__()

    def __init__(
        self,
        usernames: list[str] | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the list.

        Args:
            usernames: The collection to render (held by reference).
            name: Optional widget name.
            id: Optional widget ID.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._model = FilteredList(usernames if usernames is not None else [])
        self._window = ListWindow(0, 0, 0)
        self._rows: dict[int, str] = {}

    @property
    def model(self) -> FilteredList:
        return self._model

    @property
    def filtered_count(self) -> int:
        return self._model.filtered_count

    @property
    def total_count(self) -> int:
        return self._model.total_count

    @property
    def empty_state(self) -> EmptyState | None:
        return self._model.empty_state

    @property
    def window(self) -> ListWindow:
        """The window of rows currently materialized."""
        return self._window

    @property
    def materialized_count(self) -> int:
        return len(self._rows)

    @property
    def viewport_height(self) -> int:
        return self.scrollable_content_region.height

    def set_usernames(self, usernames: list[str]) -> None:
        """Replace the collection, keeping the current query."""
        query = self._model.query
        self._model = FilteredList(usernames)
        self._model.set_query(query)
        self._reset()

    def set_query(self, query: str) -> None:
        """Filter the list and jump back to the top."""
        self._model.set_query(query)
        self._reset()

    def highlighted_username(self) -> str | None:
        items = self._model.items
        if 0 <= self.cursor_index < len(items):
            return items[self.cursor_index]
        return None

    def _reset(self) -> None:
        self._rows.clear()
        self._window = ListWindow(0, 0, 0)
        self.cursor_index = 0
        self._update_virtual_size()
        self.scroll_home(animate=False)
        self.refresh()

    def _update_virtual_size(self) -> None:
        self.virtual_size = Size(
            self.size.width, self._model.filtered_count * self.ROW_HEIGHT
        )

    def on_resize(self) -> None:
        self._update_virtual_size()

    def _sync_window(self) -> None:
        """Recompute the window for the current scroll offset.

        Rows leaving the window are dropped and rows entering it are built, so
        the number of materialized rows stays bounded by the window size.
        """
        window = compute_window(
            self._model.filtered_count,
            scroll_offset=self.scroll_offset.y,
            viewport_height=self.viewport_height,
            row_height=self.ROW_HEIGHT,
            overscan=self.OVERSCAN,
        )
        if window == self._window and len(self._rows) == len(window):
            return

        items = self._model.items
        self._rows = {
            index: self._rows.get(index) or items[index]
            for index in range(window.start, window.end)
        }
        self._window = window

    def render_line(self, y: int) -> Strip:
        """Render one line of the viewport from the materialized rows."""
        self._sync_window()
        scroll_x, scroll_y = self.scroll_offset
        width = self.size.width
        row_index = (scroll_y + y) // self.ROW_HEIGHT

        username = self._rows.get(row_index)
        if username is None:
            return Strip.blank(width, self.rich_style)

        if row_index == self.cursor_index and self.has_focus:
            row_style = self.get_component_rich_style("username-list--cursor")
        else:
            row_style = self.rich_style
        index_style = row_style + self.get_component_rich_style(
            "username-list--index", partial=True
        )

        number = f"{row_index + 1:>{self.INDEX_WIDTH - 1}} "
        name = username.ljust(max(0, width - len(number)))
        strip = Strip(
            [Segment(number, index_style), Segment(name, row_style)]
        )
        return strip.crop(scroll_x, scroll_x + width)

    def watch_cursor_index(self, old_index: int, new_index: int) -> None:
        self._scroll_cursor_into_view()
        self.refresh()

    def _scroll_cursor_into_view(self) -> None:
        height = self.viewport_height
        if height <= 0:
            return
        top = self.cursor_index * self.ROW_HEIGHT
        scroll_y = self.scroll_offset.y
        if top < scroll_y:
            self.scroll_to(y=top, animate=False)
        elif top + self.ROW_HEIGHT > scroll_y + height:
            self.scroll_to(y=top + self.ROW_HEIGHT - height, animate=False)

    def _move_cursor(self, index: int) -> None:
        count = self._model.filtered_count
        if count == 0:
            self.cursor_index = 0
            return
        self.cursor_index = max(0, min(index, count - 1))

    def action_cursor_up(self) -> None:
        self._move_cursor(self.cursor_index - 1)

    def action_cursor_down(self) -> None:
        self._move_cursor(self.cursor_index + 1)

    def action_page_up(self) -> None:
        self._move_cursor(self.cursor_index - max(1, self.viewport_height))

    def action_page_down(self) -> None:
        self._move_cursor(self.cursor_index + max(1, self.viewport_height))

    def action_cursor_home(self) -> None:
        self._move_cursor(0)

    def action_cursor_end(self) -> None:
        self._move_cursor(self._model.filtered_count - 1)

    def action_select_cursor(self) -> None:
        username = self.highlighted_username()
        if username is not None:
            self.post_message(self.Selected(username, self.cursor_index))
