"""Semantic token classification for presentation colouring."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from riddlpy.analysis import NameSymbolResolver, SymbolResolver
from riddlpy.lexer import Token, TokenKind

TOKEN_TYPES: Final[tuple[str, ...]] = (
    "namespace",
    "class",
    "enum",
    "interface",
    "struct",
    "type",
    "parameter",
    "variable",
    "property",
    "function",
    "method",
    "keyword",
    "comment",
    "string",
    "number",
    "operator",
    "macro",
)

TOKEN_MODIFIERS: Final[tuple[str, ...]] = (
    "declaration",
    "definition",
    "readonly",
    "static",
    "deprecated",
    "abstract",
    "async",
    "modification",
    "documentation",
    "defaultLibrary",
)

TYPE_BY_KIND: Final[dict[TokenKind, str]] = {
    TokenKind.KEYWORD: "keyword",
    TokenKind.IDENTIFIER: "variable",
    TokenKind.READABILITY: "macro",
    TokenKind.PUNCTUATION: "operator",
    TokenKind.PREDEFINED: "type",
    TokenKind.COMMENT: "comment",
    TokenKind.STRING: "string",
    TokenKind.NUMBER: "number",
}

DECLARATION_MODIFIER: Final[int] = 1 << TOKEN_MODIFIERS.index("declaration")


@dataclass(frozen=True, slots=True)
class SemanticToken:
    """Absolute position, length, legend type index and modifier bitset."""

    line: int
    column: int
    length: int
    token_type: int
    modifiers: int = 0


def token_type_index(kind: TokenKind) -> int:
    return TOKEN_TYPES.index(TYPE_BY_KIND.get(kind, "variable"))


def classify_tokens(
    tokens: Sequence[Token],
    resolver: SymbolResolver | None = None,
) -> list[SemanticToken]:
    """One semantic token per source token; definition occurrences get `declaration`."""
    resolver = resolver or NameSymbolResolver()
    classified: list[SemanticToken] = []
    for index, token in enumerate(tokens):
        length = _first_line_length(token.text)
        if length == 0:
            continue
        modifiers = DECLARATION_MODIFIER if resolver.is_definition(tokens, index) else 0
        classified.append(
            SemanticToken(
                line=token.line,
                column=token.column,
                length=length,
                token_type=token_type_index(token.kind),
                modifiers=modifiers,
            )
        )
    return classified


def encode_semantic_tokens(tokens: Sequence[SemanticToken]) -> list[int]:
    """LSP relative encoding: deltaLine, deltaStart, length, tokenType, modifiers."""
    data: list[int] = []
    previous_line = 0
    previous_column = 0
    for token in sorted(tokens, key=lambda t: (t.line, t.column)):
        delta_line = token.line - previous_line
        delta_start = token.column - previous_column if delta_line == 0 else token.column
        data.extend((delta_line, delta_start, token.length, token.token_type, token.modifiers))
        previous_line = token.line
        previous_column = token.column
    return data


def _first_line_length(text: str) -> int:
    for index, ch in enumerate(text):
        if ch == "\n" or ch == "\r":
            return index
    return len(text)
