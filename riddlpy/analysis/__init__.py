"""Token stream, position index and symbol resolution."""

from riddlpy.analysis.position import find_token_at
from riddlpy.analysis.stream import TokenStream, normalize_token, tokenize_document
from riddlpy.analysis.symbols import (
    NameSymbolResolver,
    Occurrence,
    SymbolResolver,
    classify_and_find,
    classify_occurrences,
    find_definition,
    find_references,
    is_definition_occurrence,
    is_resolvable,
)

__all__ = [
    "NameSymbolResolver",
    "Occurrence",
    "SymbolResolver",
    "TokenStream",
    "classify_and_find",
    "classify_occurrences",
    "find_definition",
    "find_references",
    "find_token_at",
    "is_definition_occurrence",
    "is_resolvable",
    "normalize_token",
    "tokenize_document",
]
