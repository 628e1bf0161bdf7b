"""Compiler service contract and the in-process implementation."""

from riddlpy.compiler.local import LocalCompilerService
from riddlpy.compiler.service import (
    CompilerService,
    RawLocation,
    RawMessage,
    RawToken,
    TokenizeResult,
    ValidateResult,
    ValidationMessages,
)

__all__ = [
    "CompilerService",
    "LocalCompilerService",
    "RawLocation",
    "RawMessage",
    "RawToken",
    "TokenizeResult",
    "ValidateResult",
    "ValidationMessages",
]
