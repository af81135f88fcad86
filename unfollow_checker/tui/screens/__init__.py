"""Reusable screen components for the TUI application."""

from unfollow_checker.tui.screens.progress import AnalyzingScreen, ProgressScreen

__all__ = [
    "ProgressScreen",
    "AnalyzingScreen",
]
