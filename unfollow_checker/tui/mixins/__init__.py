"""Mixins for the TUI application."""

from unfollow_checker.tui.mixins.background_task import BackgroundTaskMixin
from unfollow_checker.tui.mixins.export import ExportMixin
from unfollow_checker.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "BackgroundTaskMixin",
    "ExportMixin",
    "VimNavigationMixin",
]
