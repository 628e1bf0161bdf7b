"""Diagnostic sources, codes and severity vocabulary."""

from dataclasses import dataclass
from typing import Final

from riddlpy.diagnostics.diagnostic import Phase, Severity


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str | None
    source: str
    phase: Phase
    severity: Severity | None = None


SYNTAX_ERROR: Final[DiagnosticSpec] = DiagnosticSpec(
    code=None,
    source="RIDDL (syntax)",
    phase=Phase.SYNTAX,
)
"""Parse errors keep their reported kind and map it to a severity."""

VALIDATION_ERROR: Final[DiagnosticSpec] = DiagnosticSpec(
    code=None,
    source="RIDDL (validation)",
    phase=Phase.VALIDATION,
    severity=Severity.ERROR,
)

VALIDATION_WARNING: Final[DiagnosticSpec] = DiagnosticSpec(
    code=None,
    source="RIDDL (validation)",
    phase=Phase.VALIDATION,
    severity=Severity.WARNING,
)

VALIDATION_INFO: Final[DiagnosticSpec] = DiagnosticSpec(
    code=None,
    source="RIDDL (info)",
    phase=Phase.VALIDATION,
    severity=Severity.INFORMATION,
)

VALIDATION_EXCEPTION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="validation-exception",
    source="RIDDL (exception)",
    phase=Phase.VALIDATION,
    severity=Severity.ERROR,
)

SEVERITY_BY_KIND: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "info": Severity.INFORMATION,
    "information": Severity.INFORMATION,
    "hint": Severity.HINT,
}


def severity_for_kind(kind: str) -> Severity:
    """Case-insensitive kind mapping; unrecognized kinds are errors."""
    return SEVERITY_BY_KIND.get(kind.strip().lower(), Severity.ERROR)
