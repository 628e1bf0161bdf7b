"""Per-request editor pipeline entrypoints."""

from riddlpy.pipeline.entrypoints import (
    DEFAULT_ORIGIN,
    run_definition,
    run_hover,
    run_references,
    run_semantic_tokens,
    run_validation,
    tokenize,
)
from riddlpy.pipeline.results import DefinitionRunResult, ReferencesRunResult, ValidationRunResult

__all__ = [
    "DEFAULT_ORIGIN",
    "DefinitionRunResult",
    "ReferencesRunResult",
    "ValidationRunResult",
    "run_definition",
    "run_hover",
    "run_references",
    "run_semantic_tokens",
    "run_validation",
    "tokenize",
]
