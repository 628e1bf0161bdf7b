"""Compiler service contract and its raw (wire-level) result carriers.

Everything here is one-based, exactly as the compiler reports it. Normalization to
zero-based positions happens in `riddlpy.analysis.stream` and `riddlpy.diagnostics.reconcile`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RawLocation:
    """One-based line/column plus optional character offsets."""

    line: int
    col: int
    offset: int | None = None
    end_offset: int | None = None
    source: str = ""


@dataclass(frozen=True, slots=True)
class RawToken:
    text: str
    kind: str
    location: RawLocation


@dataclass(frozen=True, slots=True)
class RawMessage:
    """Error, warning or info record reported by the compiler."""

    kind: str
    message: str
    location: RawLocation | None


@dataclass(frozen=True, slots=True)
class TokenizeResult:
    succeeded: bool
    tokens: tuple[RawToken, ...] = ()
    errors: tuple[RawMessage, ...] = ()


@dataclass(frozen=True, slots=True)
class ValidationMessages:
    """Validation output grouped by severity bucket."""

    errors: tuple[RawMessage, ...] = ()
    warnings: tuple[RawMessage, ...] = ()
    info: tuple[RawMessage, ...] = ()


@dataclass(frozen=True, slots=True)
class ValidateResult:
    """Result of a parse + validate run.

    `validation_messages` is None when validation did not run (e.g. the parse failed).
    """

    succeeded: bool
    syntax_errors: tuple[RawMessage, ...] = ()
    validation_messages: ValidationMessages | None = field(default=None)


class CompilerService(Protocol):
    """External compiler: tokenizer plus parser/validator."""

    def tokenize(self, source: str, origin: str) -> TokenizeResult: ...

    def validate(self, source: str, origin: str, strip_formatting: bool) -> ValidateResult: ...
