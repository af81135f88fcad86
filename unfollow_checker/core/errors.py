"""
Error taxonomy for the analysis pipeline.

Every failure the pipeline reports is an AnalysisError carrying one of three
kinds, so the presentation layer can show a message without inspecting the
underlying exception.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Kinds of errors surfaced to the presentation layer."""

    FILE_INVALID = "file_invalid"
    FILE_FORMAT = "file_format"
    ANALYSIS_FAILED = "analysis_failed"


class AnalysisError(Exception):
    """Structured pipeline error.

    Attributes:
        kind: The ErrorKind classifying the failure.
        message: Human-readable message.
        detail: Optional underlying detail (e.g. the original exception text).
    """

    def __init__(self, kind: ErrorKind, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a ``{kind, message, detail?}`` dictionary.

        Examples:
            >>> AnalysisError(ErrorKind.FILE_FORMAT, "bad").to_dict()
            {'kind': 'file_format', 'message': 'bad'}
        """
        data: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.detail:
            data["detail"] = self.detail
        return data

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message
