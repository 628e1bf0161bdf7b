"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from riddlpy.diagnostics.diagnostic import DiagnosticRecord, Phase, Severity


def collect_diagnostics(*groups: Iterable[DiagnosticRecord]) -> list[DiagnosticRecord]:
    diagnostics: list[DiagnosticRecord] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def dedupe_diagnostics(diagnostics: Iterable[DiagnosticRecord]) -> list[DiagnosticRecord]:
    """Keep the first record for each (line, column, message) identity, preserving order."""
    deduped: list[DiagnosticRecord] = []
    seen: set[tuple[int, int, str]] = set()
    for diagnostic in diagnostics:
        key = diagnostic.identity
        if key in seen:
            continue
        seen.add(key)
        deduped.append(diagnostic)
    return deduped


def has_errors(diagnostics: Iterable[DiagnosticRecord]) -> bool:
    return any(d.severity == Severity.ERROR for d in diagnostics)


def syntax_diagnostics(diagnostics: Iterable[DiagnosticRecord]) -> list[DiagnosticRecord]:
    return [d for d in diagnostics if d.phase == Phase.SYNTAX]
