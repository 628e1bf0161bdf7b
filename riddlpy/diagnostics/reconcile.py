"""Diagnostic reconciliation: approximate compiler locations to exact highlight ranges.

All knowledge of upstream message wording lives in this module.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import re
from typing import Final

from riddlpy.compiler import RawMessage, ValidateResult
from riddlpy.diagnostics.codes import (
    SYNTAX_ERROR,
    VALIDATION_ERROR,
    VALIDATION_EXCEPTION,
    VALIDATION_INFO,
    VALIDATION_WARNING,
    DiagnosticSpec,
    severity_for_kind,
)
from riddlpy.diagnostics.diagnostic import DiagnosticRecord
from riddlpy.diagnostics.report import collect_diagnostics, dedupe_diagnostics
from riddlpy.lexer import CATEGORY_WORDS
from riddlpy.options import DEFAULT_IDENTIFIER_SEARCH_BACKOFF
from riddlpy.text import ORIGIN, LineIndex, SourcePosition, SourceRange

logger = logging.getLogger(__name__)

ANSI_ESCAPE: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b[@-Z\\-_]")
QUOTED_NAME: Final[re.Pattern[str]] = re.compile(
    r"\b(" + "|".join(sorted(CATEGORY_WORDS)) + r")\s+'([^']+)'",
    re.IGNORECASE,
)
WORD: Final[re.Pattern[str]] = re.compile(r"[A-Za-z0-9_-]+")


class ReconcileError(ValueError):
    """A raw record that cannot be placed in the current document."""


def strip_formatting(message: str) -> str:
    """Remove terminal colour/control sequences."""
    return ANSI_ESCAPE.sub("", message)


def reconcile(
    raw: RawMessage,
    text: str | LineIndex,
    *,
    spec: DiagnosticSpec = SYNTAX_ERROR,
    search_backoff: int = DEFAULT_IDENTIFIER_SEARCH_BACKOFF,
) -> DiagnosticRecord:
    """Reconcile one raw compiler message against the current document text."""
    lines = text if isinstance(text, LineIndex) else LineIndex(text)
    location = raw.location
    if location is None:
        raise ReconcileError(f"Message has no location: {raw.message!r}")

    line = max(0, location.line - 1)
    column = max(0, location.col - 1)
    if not lines.has_line(line):
        raise ReconcileError(f"Line {location.line} is outside the document ({lines.line_count} lines)")

    message = strip_formatting(raw.message)
    highlight = resolve_range(
        message,
        lines.line_text(line),
        line,
        column,
        offset=location.offset,
        end_offset=location.end_offset,
        search_backoff=search_backoff,
    )
    return DiagnosticRecord(
        severity_kind=raw.kind,
        message=message,
        phase=spec.phase,
        range=highlight,
        severity=spec.severity if spec.severity is not None else severity_for_kind(raw.kind),
        reported_at=SourcePosition(line, column),
        source=spec.source,
        code=spec.code or raw.kind,
    )


def resolve_range(
    message: str,
    line_text: str,
    line: int,
    column: int,
    *,
    offset: int | None = None,
    end_offset: int | None = None,
    search_backoff: int = DEFAULT_IDENTIFIER_SEARCH_BACKOFF,
) -> SourceRange:
    """Pick the highlight range for a message reported at zero-based (line, column).

    Priority: quoted definition name from the message, then the reported offset span,
    then the word under the column, then a single character.
    """
    named = _quoted_name_range(message, line_text, line, column, search_backoff)
    if named is not None:
        return named

    if offset is not None and end_offset is not None:
        return SourceRange.on_line(line, column, column + max(1, end_offset - offset))

    if column >= len(line_text):
        return SourceRange.empty(SourcePosition(line, len(line_text)))

    for match in WORD.finditer(line_text):
        if match.start() <= column < match.end():
            return SourceRange.on_line(line, match.start(), match.end())
        if match.start() > column:
            break
    return SourceRange.on_line(line, column, column + 1)


def reconcile_all(
    raws: Iterable[RawMessage],
    text: str | LineIndex,
    *,
    spec: DiagnosticSpec = SYNTAX_ERROR,
    search_backoff: int = DEFAULT_IDENTIFIER_SEARCH_BACKOFF,
) -> list[DiagnosticRecord]:
    """Reconcile a batch; records that cannot be reconciled are dropped and logged."""
    lines = text if isinstance(text, LineIndex) else LineIndex(text)
    records: list[DiagnosticRecord] = []
    for raw in raws:
        try:
            records.append(reconcile(raw, lines, spec=spec, search_backoff=search_backoff))
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("dropping %s record %r: %s", spec.source, raw, exc)
    return records


def reconcile_result(
    result: ValidateResult,
    text: str | LineIndex,
    *,
    search_backoff: int = DEFAULT_IDENTIFIER_SEARCH_BACKOFF,
) -> list[DiagnosticRecord]:
    """One validation pass: syntax errors first, then validation buckets, deduplicated."""
    lines = text if isinstance(text, LineIndex) else LineIndex(text)
    syntax = reconcile_all(result.syntax_errors, lines, spec=SYNTAX_ERROR, search_backoff=search_backoff)
    messages = result.validation_messages
    if messages is None:
        return dedupe_diagnostics(syntax)
    return dedupe_diagnostics(
        collect_diagnostics(
            syntax,
            reconcile_all(messages.errors, lines, spec=VALIDATION_ERROR, search_backoff=search_backoff),
            reconcile_all(messages.warnings, lines, spec=VALIDATION_WARNING, search_backoff=search_backoff),
            reconcile_all(messages.info, lines, spec=VALIDATION_INFO, search_backoff=search_backoff),
        )
    )


def exception_diagnostic(exc: BaseException) -> DiagnosticRecord:
    """Single visible diagnostic standing in for a crashed validation call."""
    detail = str(exc) or type(exc).__name__
    return DiagnosticRecord(
        severity_kind="Error",
        message=f"Validation error: {detail}",
        phase=VALIDATION_EXCEPTION.phase,
        range=SourceRange.at(ORIGIN, 1),
        severity=VALIDATION_EXCEPTION.severity,
        reported_at=ORIGIN,
        source=VALIDATION_EXCEPTION.source,
        code=VALIDATION_EXCEPTION.code,
    )


def _quoted_name_range(
    message: str,
    line_text: str,
    line: int,
    column: int,
    search_backoff: int,
) -> SourceRange | None:
    for match in QUOTED_NAME.finditer(message):
        name = match.group(2).strip()
        for candidate in _name_candidates(name):
            start = _search_name(line_text, candidate, max(0, column - search_backoff))
            if start is None:
                start = _search_name(line_text, candidate, 0)
            if start is not None:
                return SourceRange.on_line(line, start, start + len(candidate))
    return None


def _name_candidates(name: str) -> list[str]:
    if not name:
        return []
    candidates = [name]
    if "." in name:
        last = name.rsplit(".", 1)[1]
        if last:
            candidates.append(last)
    return candidates


def _search_name(line_text: str, name: str, start: int) -> int | None:
    """First whole-word occurrence of `name` at or after `start`."""
    index = line_text.find(name, start)
    while index != -1:
        before = line_text[index - 1] if index > 0 else ""
        after = line_text[index + len(name) : index + len(name) + 1]
        if not _is_name_char(before) and not _is_name_char(after):
            return index
        index = line_text.find(name, index + 1)
    return None


def _is_name_char(ch: str) -> bool:
    return bool(ch) and (ch.isalnum() or ch == "_")
