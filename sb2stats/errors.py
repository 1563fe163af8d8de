"""Exceptions raised while analyzing Scratch 2 projects."""

from typing import Optional


class AnalyzerError(Exception):
    """Base exception for analyzer failures."""

    def __init__(self, message: str, detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class MalformedInputError(AnalyzerError):
    """A required field is missing or has an unexpected shape."""

    def __init__(self, message: str, detail: str = "", field: Optional[str] = None):
        self.field = field
        super().__init__(message, detail)


class ProjectLoadError(AnalyzerError):
    """The project file could not be read."""
