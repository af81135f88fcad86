"""
Asynchronous loader for social-graph export files.

This module reads and decodes the followers/following JSON exports. Reads go
through aiofiles so the two sides of an analysis can load concurrently on
the event loop. Every failure is raised as an AnalysisError with a
file_invalid or file_format kind.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiofiles

from unfollow_checker.core.errors import AnalysisError, ErrorKind

logger = logging.getLogger(__name__)


class ExportLoader:
    """Loader for JSON export files.

    The top-level value must be an object or an array; anything deeper is
    left for the extractor to interpret.

    Attributes:
        format_name: Returns 'json'.
        supported_extensions: Returns ['.json'].
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "json"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".json"]

    def check_path(self, filename: str | None) -> Path:
        """Validate a selected file before reading it.

        Args:
            filename: Path chosen by the user, or None if nothing was chosen.

        Returns:
            The path as a Path object.

        Raises:
            AnalysisError: file_invalid if no file was given, the extension is
                not supported, or the file does not exist.
        """
        if not filename:
            raise AnalysisError(ErrorKind.FILE_INVALID, "No file supplied")

        path = Path(filename)
        if path.suffix.lower() not in self.supported_extensions:
            raise AnalysisError(
                ErrorKind.FILE_INVALID,
                f"Please select a JSON file: {path.name}",
                f"Supported extensions: {', '.join(self.supported_extensions)}",
            )
        if not path.is_file():
            raise AnalysisError(ErrorKind.FILE_INVALID, f"File not found: {filename}")
        return path

    def parse(self, text: str, source: str = "<string>") -> Any:
        """Decode export text and check its top-level shape.

        Args:
            text: Raw file content.
            source: Name used in error messages.

        Returns:
            The decoded object or array.

        Raises:
            AnalysisError: file_invalid if the text is not valid JSON or is
                nested too deeply to decode, file_format if the top-level
                value is not an object or array.

        Examples:
            >>> ExportLoader().parse('[{"string_list_data": []}]')
            [{'string_list_data': []}]
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise AnalysisError(
                ErrorKind.FILE_INVALID, f"Invalid JSON in {source}", str(e)
            ) from e
        except RecursionError as e:
            # Valid JSON nested deeper than the decoder can follow
            raise AnalysisError(
                ErrorKind.FILE_INVALID, f"{source} is nested too deeply", str(e)
            ) from e

        if not isinstance(data, (dict, list)):
            raise AnalysisError(
                ErrorKind.FILE_FORMAT,
                f"{source} must contain an object or array (got {type(data).__name__})",
            )
        return data

    async def load(self, filename: str | None) -> Any:
        """Read and decode one export file.

        Args:
            filename: Path to the JSON export.

        Returns:
            The decoded top-level object or array.

        Raises:
            AnalysisError: file_invalid or file_format, see check_path() and parse().
        """
        path = self.check_path(filename)
        logger.debug("Reading export %s", path)

        try:
            # utf-8-sig tolerates the byte-order mark some editors add
            async with aiofiles.open(path, "r", encoding="utf-8-sig") as f:
                text = await f.read()
        except UnicodeDecodeError as e:
            raise AnalysisError(
                ErrorKind.FILE_INVALID, f"{path.name} is not UTF-8 text", str(e)
            ) from e
        except OSError as e:
            raise AnalysisError(
                ErrorKind.FILE_INVALID, f"Cannot read {path.name}", str(e)
            ) from e

        return self.parse(text, source=path.name)


async def load_export_pair(
    followers_path: str | None,
    following_path: str | None,
    loader: ExportLoader | None = None,
) -> tuple[Any, Any]:
    """Load the followers and following exports concurrently.

    Both reads must succeed. The first error raised wins and no partial
    result is returned.

    Args:
        followers_path: Path to the followers export.
        following_path: Path to the following export.
        loader: Loader to use (defaults to a new ExportLoader).

    Returns:
        A tuple of (followers_raw, following_raw).

    Raises:
        AnalysisError: If either file fails to load.
    """
    if loader is None:
        loader = ExportLoader()
    followers_raw, following_raw = await asyncio.gather(
        loader.load(followers_path),
        loader.load(following_path),
    )
    return followers_raw, following_raw
