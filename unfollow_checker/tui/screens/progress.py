"""
Progress Screen components for background task feedback.

Provides a base ProgressScreen class and the AnalyzingScreen shown while
export files are read and compared.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Center, Middle
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Static


class ProgressScreen(Screen):
    """Base screen for displaying progress of background tasks.

    Usage:
        screen = ProgressScreen(title="Working...")
        screen.update_status("Reading files")
        screen.set_complete("Done!", "10 items processed")
    """

    DEFAULT_CSS = """
    ProgressScreen {
        align: center middle;
    }

    .progress-container {
        width: 60;
        height: auto;
        border: solid $primary;
        padding: 1 2;
    }

    .progress-title {
        text-style: bold;
        text-align: center;
    }

    .progress-status, .progress-detail {
        text-align: center;
        color: $text-muted;
    }
    """

    # Subclasses can override these
    TITLE_DEFAULT: str = "Processing..."

    def __init__(
        self,
        title: str | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the progress screen.

        Args:
            title: Title text to display. Uses TITLE_DEFAULT if not provided.
            name: Optional screen name.
            id: Optional screen ID.
            classes: Optional CSS classes.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._title_text = title or self.TITLE_DEFAULT
        self._status_text = "Preparing..."
        self._detail_text = ""

    def compose(self) -> ComposeResult:
        """Compose the progress screen layout."""
        yield Header()
        with Center():
            with Middle(id=self._get_container_id(), classes="progress-container"):
                yield Static(self._title_text, id="progress-title", classes="progress-title")
                yield Static(self._status_text, id="progress-status", classes="progress-status")
                yield Static(self._detail_text, id="progress-detail", classes="progress-detail")
        yield Footer()

    def _get_container_id(self) -> str:
        """Return the container ID. Override in subclasses for custom CSS."""
        return "progress-container"

    def _set_text(self, selector: str, text: str) -> None:
        # The worker may report before the screen has composed
        try:
            self.query_one(selector, Static).update(text)
        except NoMatches:
            pass

    def update_status(self, status: str) -> None:
        """Update the main status message."""
        self._status_text = status
        self._set_text("#progress-status", status)

    def update_detail(self, detail: str) -> None:
        """Update the detail text."""
        self._detail_text = detail
        self._set_text("#progress-detail", detail)

    def set_complete(self, message: str, detail: str = "") -> None:
        """Show completion state."""
        self._title_text = "Complete"
        self._set_text("#progress-title", "Complete")
        self.update_status(message)
        self.update_detail(detail)

    def set_error(self, message: str, detail: str = "") -> None:
        """Show error state."""
        self._title_text = "Error"
        self._set_text("#progress-title", "Error")
        self.update_status(message)
        self.update_detail(detail)


class AnalyzingScreen(ProgressScreen):
    """Screen displayed while the exports are read and compared."""

    TITLE_DEFAULT = "Analyzing exports..."

    def _get_container_id(self) -> str:
        return "analyzing-container"
