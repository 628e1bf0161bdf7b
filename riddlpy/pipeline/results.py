"""Pipeline run result carriers for editor entrypoints."""

from __future__ import annotations

from dataclasses import dataclass, field

from riddlpy.diagnostics import DiagnosticRecord
from riddlpy.lexer import Token
from riddlpy.text import SourceRange


@dataclass(frozen=True, slots=True)
class ValidationRunResult:
    """Reconciled diagnostics of one validation pass over one text snapshot."""

    diagnostics: list[DiagnosticRecord]
    succeeded: bool
    has_errors: bool


@dataclass(frozen=True, slots=True)
class DefinitionRunResult:
    """Definition lookup; `target` is None when no resolvable token is under the cursor."""

    target: Token | None = None
    definition: SourceRange | None = None


@dataclass(frozen=True, slots=True)
class ReferencesRunResult:
    target: Token | None = None
    references: list[SourceRange] = field(default_factory=list)
