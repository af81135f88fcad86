"""TUI views for the Unfollow Checker."""

from unfollow_checker.tui.views.relationship_list import RelationshipListScreen
from unfollow_checker.tui.views.summary import SummaryScreen

__all__ = ["RelationshipListScreen", "SummaryScreen"]
