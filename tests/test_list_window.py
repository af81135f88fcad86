"""Tests for the list view model in unfollow_checker/tui/list_window.py."""

from __future__ import annotations

import math
import random
import string

import pytest

from unfollow_checker.tui.list_window import (
    DebounceState,
    EmptyState,
    FilteredList,
    ListWindow,
    QueryDebouncer,
    compute_window,
)


def random_usernames(count: int, seed: int = 7) -> list[str]:
    rng = random.Random(seed)
    alphabet = string.ascii_lowercase + "._"
    return [
        "".join(rng.choice(alphabet) for _ in range(rng.randint(3, 12))) + str(i)
        for i in range(count)
    ]


class TestFilteredList:
    """Tests for FilteredList filtering."""

    def test_blank_query_shows_everything(self):
        view = FilteredList(["a", "b"])
        view.set_query("   ")
        assert view.items == ["a", "b"]
        assert view.filtered_count == view.total_count == 2

    def test_case_insensitive_substring(self):
        view = FilteredList(["anna", "bob", "dan", "annie"])
        view.set_query("AN")
        assert view.items == ["anna", "dan", "annie"]
        assert view.filtered_count == 3
        assert view.total_count == 4

    def test_surrounding_whitespace_ignored(self):
        view = FilteredList(["anna", "bob", "dan"])
        view.set_query("  an ")
        assert view.query == "an"
        assert view.items == ["anna", "dan"]

    def test_query_replaced_not_narrowed(self):
        """Each query filters the full source, not the previous result."""
        view = FilteredList(["anna", "bob"])
        view.set_query("an")
        view.set_query("bo")
        assert view.items == ["bob"]

    def test_source_not_copied_or_mutated(self):
        source = ["a", "b"]
        view = FilteredList(source)
        assert view.items is source
        view.set_query("a")
        assert source == ["a", "b"]

    def test_matches_naive_scan_on_large_list(self):
        usernames = random_usernames(10_000)
        view = FilteredList(usernames)
        view.set_query("an")
        expected = [u for u in usernames if "an" in u]
        assert view.filtered_count == len(expected)
        assert view.items == expected
        assert view.total_count == 10_000


class TestEmptyState:
    """Tests for the two empty states."""

    def test_no_items(self):
        view = FilteredList([])
        assert view.empty_state is EmptyState.NO_ITEMS
        view.set_query("x")
        assert view.empty_state is EmptyState.NO_ITEMS

    def test_no_matches(self):
        view = FilteredList(["alice"])
        view.set_query("zzz")
        assert view.empty_state is EmptyState.NO_MATCHES

    def test_has_rows(self):
        view = FilteredList(["alice"])
        assert view.empty_state is None


class TestComputeWindow:
    """Tests for compute_window()."""

    def test_top_of_list(self):
        window = compute_window(1000, scroll_offset=0, viewport_height=20, overscan=5)
        assert window == ListWindow(start=0, end=25, total_height=1000)

    def test_middle_of_list(self):
        window = compute_window(1000, scroll_offset=500, viewport_height=20, overscan=5)
        assert (window.start, window.end) == (495, 525)
        assert 510 in window
        assert 525 not in window

    def test_bottom_of_list(self):
        window = compute_window(1000, scroll_offset=980, viewport_height=20, overscan=5)
        assert (window.start, window.end) == (975, 1000)

    def test_scrolled_past_end_is_clamped(self):
        window = compute_window(10, scroll_offset=500, viewport_height=20, overscan=5)
        assert window.start <= window.end == 10

    def test_short_list(self):
        window = compute_window(3, scroll_offset=0, viewport_height=20, overscan=5)
        assert (window.start, window.end) == (0, 3)

    def test_empty_list(self):
        window = compute_window(0, scroll_offset=0, viewport_height=20)
        assert len(window) == 0
        assert window.total_height == 0

    def test_zero_viewport(self):
        assert len(compute_window(100, scroll_offset=0, viewport_height=0)) == 0

    def test_row_height(self):
        window = compute_window(
            1000, scroll_offset=300, viewport_height=100, row_height=10, overscan=2
        )
        # Rows 30..39 are visible
        assert (window.start, window.end) == (28, 42)
        assert window.total_height == 10_000

    def test_invalid_row_height(self):
        with pytest.raises(ValueError):
            compute_window(10, scroll_offset=0, viewport_height=10, row_height=0)

    @pytest.mark.parametrize("viewport_height,row_height", [(20, 1), (37, 3), (5, 2)])
    def test_window_size_bounded(self, viewport_height, row_height):
        """No scroll position materializes more than visible + 2 * overscan rows."""
        overscan = 4
        count = 10_000
        limit = math.ceil(viewport_height / row_height) + 2 * overscan
        for offset in range(0, count * row_height + 50, 997):
            window = compute_window(
                count, offset, viewport_height, row_height=row_height, overscan=overscan
            )
            assert len(window) <= limit
            assert 0 <= window.start <= window.end <= count

    def test_window_covers_visible_rows(self):
        for offset in (0, 1, 17, 4000, 9980):
            window = compute_window(10_000, offset, viewport_height=20, overscan=3)
            for row in range(offset, min(offset + 20, 10_000)):
                assert row in window

    def test_filtered_large_list(self):
        """Windowing the filtered list of 10,000 entries stays bounded."""
        view = FilteredList(random_usernames(10_000))
        view.set_query("an")
        window = compute_window(view.filtered_count, 40, viewport_height=30, overscan=10)
        assert len(window) <= 30 + 2 * 10
        assert window.total_height == view.filtered_count


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.stopped = False

    def stop(self):
        self.stopped = True

    def fire(self):
        if not self.stopped:
            self.callback()


class FakeScheduler:
    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    def fire_all(self):
        for timer in list(self.timers):
            timer.fire()


class TestQueryDebouncer:
    """Tests for QueryDebouncer."""

    def test_fires_after_delay(self):
        scheduler = FakeScheduler()
        received = []
        debouncer = QueryDebouncer(scheduler, received.append, delay=0.3)

        debouncer.submit("a")
        assert debouncer.state is DebounceState.PENDING
        assert scheduler.timers[0].delay == 0.3
        assert received == []

        scheduler.fire_all()
        assert received == ["a"]
        assert debouncer.state is DebounceState.IDLE

    def test_last_query_wins(self):
        scheduler = FakeScheduler()
        received = []
        debouncer = QueryDebouncer(scheduler, received.append)

        for query in ("a", "an", "ann"):
            debouncer.submit(query)

        assert [t.stopped for t in scheduler.timers] == [True, True, False]
        scheduler.fire_all()
        assert received == ["ann"]

    def test_state_is_fired_during_callback(self):
        scheduler = FakeScheduler()
        states = []
        debouncer = QueryDebouncer(scheduler, lambda q: states.append(debouncer.state))
        debouncer.submit("x")
        scheduler.fire_all()
        assert states == [DebounceState.FIRED]

    def test_cancel(self):
        scheduler = FakeScheduler()
        received = []
        debouncer = QueryDebouncer(scheduler, received.append)
        debouncer.submit("a")
        debouncer.cancel()
        scheduler.fire_all()
        assert received == []
        assert debouncer.state is DebounceState.IDLE

    def test_flush(self):
        scheduler = FakeScheduler()
        received = []
        debouncer = QueryDebouncer(scheduler, received.append)
        debouncer.submit("bo")
        debouncer.flush()
        assert received == ["bo"]
        # The stopped timer must not deliver again
        scheduler.fire_all()
        assert received == ["bo"]

    def test_flush_without_pending(self):
        received = []
        debouncer = QueryDebouncer(FakeScheduler(), received.append)
        debouncer.flush()
        assert received == []
