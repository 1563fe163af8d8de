"""Diagnostic messages for sprite analysis.

Analysis never fails on odd-but-valid content. Things worth pointing out,
such as block names missing from the category table or variables that no
script mentions, are recorded here and printed by the CLI on request.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class DiagnosticLevel(Enum):
    """Severity level for diagnostic messages."""
    WARNING = "Warning"
    INFO = "Info"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    level: DiagnosticLevel
    message: str
    sprite: str

    def __str__(self) -> str:
        return f"{self.level.value}: {self.message}: Sprite '{self.sprite}'"


@dataclass
class DiagnosticContext:
    """Diagnostics recorded while analyzing one sprite (or the stage)."""
    sprite_name: str = "Stage"
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def add(self, level: DiagnosticLevel, message: str) -> None:
        self.diagnostics.append(Diagnostic(level=level, message=message, sprite=self.sprite_name))

    def warning(self, message: str) -> None:
        self.add(DiagnosticLevel.WARNING, message)

    def info(self, message: str) -> None:
        self.add(DiagnosticLevel.INFO, message)


class DiagnosticCollector:
    """Collects diagnostics across every target of a project."""

    def __init__(self) -> None:
        self.all_diagnostics: List[Diagnostic] = []

    def add_context_diagnostics(self, ctx: DiagnosticContext) -> None:
        """Add all diagnostics from a context."""
        self.all_diagnostics.extend(ctx.diagnostics)

    def print_all(self) -> None:
        """Print all diagnostics to stdout."""
        for diag in self.all_diagnostics:
            print(diag)

    def summary(self) -> str:
        """Return a summary of diagnostics."""
        warnings = sum(1 for d in self.all_diagnostics if d.level == DiagnosticLevel.WARNING)
        notes = sum(1 for d in self.all_diagnostics if d.level == DiagnosticLevel.INFO)
        parts = []
        if warnings:
            parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")
        if notes:
            parts.append(f"{notes} note{'s' if notes != 1 else ''}")
        return ", ".join(parts) if parts else "No issues"
