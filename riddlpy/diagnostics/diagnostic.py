"""Diagnostics core types."""

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from riddlpy.text import SourcePosition, SourceRange


class Severity(IntEnum):
    """Presentation severity; values match the LSP DiagnosticSeverity numbers."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class Phase(StrEnum):
    """Compiler phase that produced a record."""

    SYNTAX = "syntax"
    VALIDATION = "validation"


@dataclass(frozen=True, slots=True)
class DiagnosticRecord:
    """Reconciled compiler message with an exact highlight range."""

    severity_kind: str
    message: str
    phase: Phase
    range: SourceRange
    severity: Severity = Severity.ERROR
    reported_at: SourcePosition | None = None
    source: str = "RIDDL"
    code: str | None = None

    @property
    def identity(self) -> tuple[int, int, str]:
        """Dedup key: reported (line, column) and message."""
        position = self.reported_at if self.reported_at is not None else self.range.start
        return (position.line, position.column, self.message)
