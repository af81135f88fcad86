"""
TUI Unfollow Checker.

A Textual-based terminal UI for comparing a followers export with a
following export.

Usage:
    uv run python -m unfollow_checker.tui.app followers_1.json following.json

Components:
    - UnfollowCheckerApp: Main application class
    - SummaryScreen: Counts and rates for the analysis
    - RelationshipListScreen: Searchable list for one derived set
    - UsernameList: Virtualized list widget
    - FilteredList / compute_window / QueryDebouncer: list view model
"""
