"""TUI widgets for the Unfollow Checker."""

from unfollow_checker.tui.widgets.username_list import UsernameList

__all__ = ["UsernameList"]
