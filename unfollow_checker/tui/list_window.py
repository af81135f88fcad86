"""
Filtering and windowing model behind the username list widget.

Kept free of Textual so the arithmetic can be tested directly:
- FilteredList: case-insensitive substring filter over a collection
- compute_window(): which filtered rows to materialize for a scroll offset
- QueryDebouncer: last-query-wins delay before a filter is applied
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol


class EmptyState(Enum):
    """Why a list has nothing to show."""

    NO_ITEMS = "no_items"
    NO_MATCHES = "no_matches"


class FilteredList:
    """A username collection with a live substring filter.

    The source collection is held by reference and never copied or mutated.
    """

    def __init__(self, items: list[str]) -> None:
        self._items = items
        self._query = ""
        self._filtered: list[str] = items

    @property
    def query(self) -> str:
        return self._query

    @property
    def items(self) -> list[str]:
        """The filtered entries, in source order."""
        return self._filtered

    @property
    def total_count(self) -> int:
        return len(self._items)

    @property
    def filtered_count(self) -> int:
        return len(self._filtered)

    def set_query(self, query: str) -> None:
        """Apply a new filter. A blank query shows everything.

        Surrounding whitespace is ignored, so " an" filters like "an".

        Examples:
            >>> view = FilteredList(["anna", "bob", "Dan"])
            >>> view.set_query("AN")
            >>> view.items
            ['anna', 'Dan']
        """
        needle = query.strip().lower()
        self._query = needle
        if not needle:
            self._filtered = self._items
        else:
            self._filtered = [item for item in self._items if needle in item.lower()]

    @property
    def empty_state(self) -> EmptyState | None:
        """Return why nothing is shown, or None if there are rows."""
        if not self._items:
            return EmptyState.NO_ITEMS
        if not self._filtered:
            return EmptyState.NO_MATCHES
        return None


@dataclass(frozen=True)
class ListWindow:
    """Half-open range ``[start, end)`` of filtered rows to materialize.

    Attributes:
        start: First materialized row index.
        end: One past the last materialized row index.
        total_height: Scrollable extent (row count times row height).
    """

    start: int
    end: int
    total_height: int

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.start <= index < self.end


def compute_window(
    item_count: int,
    scroll_offset: int,
    viewport_height: int,
    row_height: int = 1,
    overscan: int = 5,
) -> ListWindow:
    """Compute which rows to materialize for a scroll position.

    The window covers the rows intersecting the viewport plus ``overscan``
    rows on either side, clamped to the list bounds. It never holds more
    than ``ceil(viewport_height / row_height) + 2 * overscan`` rows.

    Args:
        item_count: Number of rows after filtering.
        scroll_offset: Distance scrolled from the top, in the same unit as
            row_height.
        viewport_height: Height of the visible area.
        row_height: Fixed height of every row.
        overscan: Extra rows kept above and below the visible range.

    Returns:
        The ListWindow for this position.

    Examples:
        >>> compute_window(10_000, scroll_offset=100, viewport_height=20, overscan=5)
        ListWindow(start=95, end=125, total_height=10000)
    """
    if row_height <= 0:
        raise ValueError(f"row_height must be positive (got {row_height})")

    total_height = item_count * row_height
    if item_count == 0 or viewport_height <= 0:
        return ListWindow(0, 0, total_height)

    first = max(0, scroll_offset) // row_height
    visible = math.ceil(viewport_height / row_height)
    start = max(0, min(first, item_count) - overscan)
    end = min(item_count, first + visible + overscan)
    return ListWindow(start, max(start, end), total_height)


class TimerHandle(Protocol):
    """Anything with a stop() method, such as a Textual Timer."""

    def stop(self) -> Any: ...


class DebounceState(Enum):
    """Lifecycle of the debounce timer."""

    IDLE = "idle"
    PENDING = "pending"
    FIRED = "fired"


class QueryDebouncer:
    """Delay applying a query until typing pauses.

    Each submit() cancels any pending timer and starts a new one, so only the
    last query in a burst is delivered.

    Args:
        schedule: Callable(delay, callback) that starts a timer and returns a
            handle with stop(). In the app this is Widget.set_timer.
        on_query: Called with the query once the delay elapses.
        delay: Seconds to wait after the last keystroke.
    """

    DEFAULT_DELAY: float = 0.3

    def __init__(
        self,
        schedule: Callable[[float, Callable[[], None]], TimerHandle],
        on_query: Callable[[str], None],
        delay: float = DEFAULT_DELAY,
    ) -> None:
        self._schedule = schedule
        self._on_query = on_query
        self.delay = delay
        self._timer: TimerHandle | None = None
        self._pending_query: str | None = None
        self.state = DebounceState.IDLE

    def submit(self, query: str) -> None:
        """Schedule query, replacing any query still waiting."""
        self.cancel()
        self._pending_query = query
        self.state = DebounceState.PENDING
        self._timer = self._schedule(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending query, if any."""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
        self._pending_query = None
        self.state = DebounceState.IDLE

    def flush(self) -> None:
        """Deliver the pending query immediately."""
        if self.state is DebounceState.PENDING:
            if self._timer is not None:
                self._timer.stop()
            self._fire()

    def _fire(self) -> None:
        query = self._pending_query
        self._timer = None
        self._pending_query = None
        if query is None:
            self.state = DebounceState.IDLE
            return
        self.state = DebounceState.FIRED
        try:
            self._on_query(query)
        finally:
            self.state = DebounceState.IDLE
