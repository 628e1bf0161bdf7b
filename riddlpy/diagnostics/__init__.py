"""Diagnostics."""

from riddlpy.diagnostics.codes import (
    SYNTAX_ERROR,
    VALIDATION_ERROR,
    VALIDATION_EXCEPTION,
    VALIDATION_INFO,
    VALIDATION_WARNING,
    DiagnosticSpec,
    severity_for_kind,
)
from riddlpy.diagnostics.diagnostic import DiagnosticRecord, Phase, Severity
from riddlpy.diagnostics.reconcile import (
    ReconcileError,
    exception_diagnostic,
    reconcile,
    reconcile_all,
    reconcile_result,
    resolve_range,
    strip_formatting,
)
from riddlpy.diagnostics.report import (
    collect_diagnostics,
    dedupe_diagnostics,
    has_errors,
    syntax_diagnostics,
)

__all__ = [
    "SYNTAX_ERROR",
    "VALIDATION_ERROR",
    "VALIDATION_EXCEPTION",
    "VALIDATION_INFO",
    "VALIDATION_WARNING",
    "DiagnosticRecord",
    "DiagnosticSpec",
    "Phase",
    "ReconcileError",
    "Severity",
    "collect_diagnostics",
    "dedupe_diagnostics",
    "exception_diagnostic",
    "has_errors",
    "reconcile",
    "reconcile_all",
    "reconcile_result",
    "resolve_range",
    "severity_for_kind",
    "strip_formatting",
    "syntax_diagnostics",
]
