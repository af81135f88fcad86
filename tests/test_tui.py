"""Headless tests for the username list widget and the list screen.

Each test drives a small Textual app with App.run_test() inside asyncio.run.
"""

from __future__ import annotations

import asyncio

from textual.app import App, ComposeResult
from textual.screen import Screen

from unfollow_checker.tui.list_window import EmptyState
from unfollow_checker.tui.views.relationship_list import (
    EMPTY_MESSAGES,
    RelationshipListScreen,
)
from unfollow_checker.tui.widgets.username_list import UsernameList

STEMS = ["anna", "bob", "dan", "eve", "ian", "zoe"]


def make_usernames(count: int) -> list[str]:
    """Build count distinct usernames, some of which contain "an"."""
    return [f"{STEMS[i % len(STEMS)]}{i:05d}" for i in range(count)]


class ListApp(App):
    """App holding a single UsernameList."""

    def __init__(self, usernames: list[str]):
        super().__init__()
        self.usernames = usernames

    def compose(self) -> ComposeResult:
        yield UsernameList(self.usernames, id="list")


class ScreenApp(App):
    """App that opens a given screen on startup."""

    def __init__(self, screen: Screen):
        super().__init__()
        self._start_screen = screen

    def on_mount(self) -> None:
        self.push_screen(self._start_screen)


class TestUsernameListWindowing:
    """Tests that only the visible window of rows is materialized."""

    def test_materialization_bounded_while_scrolling(self):
        usernames = make_usernames(10_000)

        async def run():
            app = ListApp(usernames)
            async with app.run_test(size=(60, 20)) as pilot:
                await pilot.pause()
                widget = app.query_one(UsernameList)
                bound = widget.viewport_height + 2 * widget.OVERSCAN

                widget.render_line(0)
                assert widget.viewport_height > 0
                assert 0 < widget.materialized_count <= bound

                for y in (500, 5_000, 9_990):
                    widget.scroll_to(y=y, animate=False)
                    await pilot.pause()
                    first_line = widget.render_line(0)
                    first = widget.scroll_offset.y
                    assert first > 0
                    assert widget.materialized_count <= bound
                    assert first in widget.window
                    assert usernames[first] in first_line.text

        asyncio.run(run())

    def test_virtual_height_tracks_filter(self):
        usernames = make_usernames(10_000)

        async def run():
            app = ListApp(usernames)
            async with app.run_test(size=(60, 20)) as pilot:
                await pilot.pause()
                widget = app.query_one(UsernameList)
                assert widget.virtual_size.height == 10_000 * widget.ROW_HEIGHT

                widget.set_query("an")
                await pilot.pause()
                expected = [u for u in usernames if "an" in u.lower()]
                assert widget.filtered_count == len(expected)
                assert widget.total_count == 10_000
                assert widget.virtual_size.height == len(expected) * widget.ROW_HEIGHT

                first_line = widget.render_line(0)
                assert widget.window.start == 0
                assert widget.materialized_count <= widget.viewport_height + 2 * widget.OVERSCAN
                assert expected[0] in first_line.text

        asyncio.run(run())

    def test_cursor_end_scrolls_into_view(self):
        usernames = make_usernames(10_000)

        async def run():
            app = ListApp(usernames)
            async with app.run_test(size=(60, 20)) as pilot:
                widget = app.query_one(UsernameList)
                widget.focus()
                await pilot.press("end")
                await pilot.pause()
                widget.render_line(0)
                assert widget.cursor_index == 9_999
                assert widget.highlighted_username() == usernames[-1]
                assert 9_999 in widget.window

                await pilot.press("home")
                await pilot.pause()
                assert widget.cursor_index == 0

        asyncio.run(run())

    def test_enter_posts_selected(self):
        selected = []

        class SelectApp(ListApp):
            def on_username_list_selected(self, event: UsernameList.Selected) -> None:
                selected.append((event.username, event.index))

        async def run():
            app = SelectApp(["alice", "bob"])
            async with app.run_test() as pilot:
                app.query_one(UsernameList).focus()
                await pilot.press("down", "enter")
                await pilot.pause()

        asyncio.run(run())
        assert selected == [("bob", 1)]


class TestRelationshipListScreen:
    """Tests for search, status line and empty states on the list screen."""

    USERNAMES = ["anna", "bob", "dan", "eve", "ian"]

    def test_initial_status(self):
        async def run():
            screen = RelationshipListScreen("Mutual", self.USERNAMES, "mutual")
            async with ScreenApp(screen).run_test() as pilot:
                await pilot.pause()
                assert screen.status_text == "Mutual: 5"
                assert screen.empty_message is None
                assert not screen.query_one("#empty-message").has_class("visible")

        asyncio.run(run())

    def test_debounced_search(self):
        async def run():
            screen = RelationshipListScreen("Mutual", self.USERNAMES, "mutual")
            async with ScreenApp(screen).run_test() as pilot:
                await pilot.pause()
                await pilot.press("slash", "a", "n")
                await pilot.pause(screen.DEBOUNCE_DELAY + 0.3)

                username_list = screen.query_one(UsernameList)
                assert username_list.model.items == ["anna", "dan", "ian"]
                assert screen.status_text == "Mutual: showing 3 of 5"

                await pilot.press("z", "z")
                await pilot.pause(screen.DEBOUNCE_DELAY + 0.3)
                assert username_list.filtered_count == 0
                assert screen.empty_message == EMPTY_MESSAGES[EmptyState.NO_MATCHES]
                assert screen.query_one("#empty-message").has_class("visible")

        asyncio.run(run())

    def test_enter_applies_search_immediately(self):
        async def run():
            screen = RelationshipListScreen("Mutual", self.USERNAMES, "mutual")
            async with ScreenApp(screen).run_test() as pilot:
                await pilot.pause()
                await pilot.press("slash", "b", "enter")
                await pilot.pause()

                username_list = screen.query_one(UsernameList)
                assert username_list.model.items == ["bob"]
                assert screen.status_text == "Mutual: showing 1 of 5"
                assert screen.focused is username_list

        asyncio.run(run())

    def test_empty_collection(self):
        async def run():
            screen = RelationshipListScreen("Unfollowers", [], "unfollowers")
            async with ScreenApp(screen).run_test() as pilot:
                await pilot.pause()
                assert screen.status_text == "Unfollowers: 0"
                assert screen.empty_message == EMPTY_MESSAGES[EmptyState.NO_ITEMS]
                assert screen.query_one("#empty-message").has_class("visible")

        asyncio.run(run())
