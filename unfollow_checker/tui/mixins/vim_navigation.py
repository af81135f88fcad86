"""
Vim Navigation Mixin for global vim-style keybindings.

Provides j/k/g/G navigation that works across all screens by delegating
to the currently focused widget's native navigation methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.binding import Binding
from textual.widgets import DataTable

from unfollow_checker.tui.widgets.username_list import UsernameList

if TYPE_CHECKING:
    from textual.widget import Widget


class VimNavigationMixin:
    """Mixin providing global vim-style navigation keybindings.

    This mixin adds vim keybindings that delegate to the focused widget:
    - j/k: Move cursor down/up (works with DataTable and UsernameList)
    - g: Jump to first item
    - G: Jump to last item

    Keys typed into an Input are consumed by the Input, so these bindings
    never fire while the search box has focus.

    Usage:
        class MyScreen(VimNavigationMixin, Screen):
            BINDINGS = VimNavigationMixin.VIM_BINDINGS + [...]
    """

    VIM_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
    ]

    def _get_navigable_widget(self) -> Widget | None:
        """Get the currently focused widget if it supports navigation.

        Returns:
            The focused widget if it's a DataTable or UsernameList,
            otherwise None.
        """
        focused = self.focused
        if isinstance(focused, (DataTable, UsernameList)):
            return focused
        return None

    def action_vim_down(self) -> None:
        """Move cursor down (vim j key)."""
        widget = self._get_navigable_widget()
        if widget is not None:
            widget.action_cursor_down()

    def action_vim_up(self) -> None:
        """Move cursor up (vim k key)."""
        widget = self._get_navigable_widget()
        if widget is not None:
            widget.action_cursor_up()

    def action_vim_top(self) -> None:
        """Jump to first item (vim g)."""
        widget = self._get_navigable_widget()
        if widget is None:
            return

        if isinstance(widget, DataTable):
            if widget.row_count > 0:
                widget.move_cursor(row=0)
        else:
            widget.action_cursor_home()

    def action_vim_bottom(self) -> None:
        """Jump to last item (vim G)."""
        widget = self._get_navigable_widget()
        if widget is None:
            return

        if isinstance(widget, DataTable):
            if widget.row_count > 0:
                widget.move_cursor(row=widget.row_count - 1)
        else:
            widget.action_cursor_end()
