"""
Export Mixin for writing username collections from a screen.

Provides:
- EXPORT_BINDINGS: C/J/T keys for CSV, JSON and text export
- _get_output_dir(): Get output directory from app or default
- _run_export(): Write a collection in a background thread and notify

Usage:
    class MyScreen(ExportMixin, Screen):
        BINDINGS = ExportMixin.EXPORT_BINDINGS + [...]

        def _export_target(self):
            return self._usernames, "unfollowers"
"""

from __future__ import annotations

from textual import work
from textual.binding import Binding

from unfollow_checker.core.exporters import export_collection

DEFAULT_OUTPUT_DIR = "exports"


class ExportMixin:
    """Mixin providing export actions for a username collection.

    Screens using this mixin implement _export_target() returning the
    collection to export and the base file name to write it under.
    """

    EXPORT_BINDINGS = [
        Binding("C", "export('csv')", "CSV"),
        Binding("J", "export('json')", "JSON"),
        Binding("T", "export('txt')", "Text"),
    ]

    def _get_output_dir(self) -> str:
        """Get the output directory from app or use default.

        Returns:
            The output directory path.
        """
        output_dir = getattr(self.app, "output_dir", None)
        if not output_dir:
            output_dir = DEFAULT_OUTPUT_DIR
        return output_dir

    def _export_target(self) -> tuple[list[str], str]:
        """Return (usernames, base_name) for export. Override in screens."""
        raise NotImplementedError

    def action_export(self, format: str) -> None:
        """Export the screen's collection in the given format."""
        usernames, name = self._export_target()
        if not usernames:
            self.notify("Nothing to export", severity="warning")
            return
        self._run_export(list(usernames), name, format)

    @work(thread=True, group="export")
    def _run_export(self, usernames: list[str], name: str, format: str) -> None:
        """Write the export in a background thread."""
        output_dir = self._get_output_dir()
        try:
            path = export_collection(usernames, output_dir, name, format)
        except (OSError, ValueError) as e:
            self.app.call_from_thread(
                self.notify, f"Export failed: {e}", severity="error"
            )
            return

        plural = "" if len(usernames) == 1 else "s"
        self.app.call_from_thread(
            self.notify, f"Exported {len(usernames):,} username{plural} to {path}"
        )
