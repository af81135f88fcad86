"""
Export username collections to CSV, JSON or plain text.

All formats keep the collection order exactly.
"""

from __future__ import annotations

import csv
import io
import json
import os
from pathlib import Path

# Mapping of export format names to file extensions
EXPORT_FORMATS: dict[str, str] = {
    "csv": ".csv",
    "json": ".json",
    "txt": ".txt",
}

CSV_HEADER = "username"


def export_csv(usernames: list[str]) -> str:
    """Render usernames as CSV with a single ``username`` column.

    Examples:
        >>> export_csv(["alice", "bob"])
        'username\\nalice\\nbob\\n'
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([CSV_HEADER])
    for username in usernames:
        writer.writerow([username])
    return buffer.getvalue()


def export_json(usernames: list[str]) -> str:
    """Render usernames as a pretty-printed JSON array."""
    return json.dumps(usernames, indent=2, ensure_ascii=False)


def export_txt(usernames: list[str]) -> str:
    """Render usernames one per line."""
    return "\n".join(usernames)


_RENDERERS = {
    "csv": export_csv,
    "json": export_json,
    "txt": export_txt,
}


def render_collection(usernames: list[str], format: str) -> str:
    """Render a collection in the given format.

    Raises:
        ValueError: If format is not one of EXPORT_FORMATS.
    """
    if format not in _RENDERERS:
        raise ValueError(
            f"Unsupported export format: {format}. "
            f"Use one of: {', '.join(sorted(EXPORT_FORMATS))}."
        )
    return _RENDERERS[format](usernames)


def export_collection(
    usernames: list[str],
    output_dir: str,
    name: str,
    format: str = "csv",
) -> str:
    """Write a collection to ``{output_dir}/{name}.{ext}``.

    Creates the output directory if it doesn't exist.

    Args:
        usernames: The collection to export.
        output_dir: Directory path for the output file.
        name: Base file name without extension (e.g. "unfollowers").
        format: 'csv', 'json' or 'txt'. Defaults to 'csv'.

    Returns:
        The path to the created file.

    Raises:
        ValueError: If format is not supported.
        OSError: If the directory cannot be created or the file cannot be written.

    Examples:
        >>> path = export_collection(["alice"], "exports", "unfollowers", "json")
        >>> print(path)  # "exports/unfollowers.json"
    """
    content = render_collection(usernames, format)

    os.makedirs(output_dir, exist_ok=True)
    output_path = Path(output_dir) / f"{name}{EXPORT_FORMATS[format]}"

    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(content)

    return str(output_path)
