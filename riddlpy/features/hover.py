"""Hover content for the token under the cursor."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from riddlpy.analysis import NameSymbolResolver, SymbolResolver, find_token_at
from riddlpy.lexer import Token, TokenKind
from riddlpy.lexer.vocabulary import KEYWORD_DOCS, PREDEFINED_TYPE_DOCS, READABILITY_DOCS
from riddlpy.text import SourceRange


@dataclass(frozen=True, slots=True)
class HoverInfo:
    """Markdown hover text and the range it applies to."""

    contents: str
    range: SourceRange


def hover_at(
    tokens: Sequence[Token],
    line: int,
    column: int,
    resolver: SymbolResolver | None = None,
) -> HoverInfo | None:
    token = find_token_at(tokens, line, column)
    if token is None:
        return None
    return hover_for_token(token, tokens, resolver)


def hover_for_token(
    token: Token,
    tokens: Sequence[Token] = (),
    resolver: SymbolResolver | None = None,
) -> HoverInfo | None:
    match token.kind:
        case TokenKind.KEYWORD:
            body = _documented("RIDDL Keyword", token.text, KEYWORD_DOCS.get(token.text.lower()))
        case TokenKind.PREDEFINED:
            body = _documented("RIDDL Type", token.text, PREDEFINED_TYPE_DOCS.get(token.text))
        case TokenKind.READABILITY:
            body = _readability(token.text)
        case TokenKind.IDENTIFIER:
            body = _identifier(token, tokens, resolver or NameSymbolResolver())
        case TokenKind.PUNCTUATION:
            body = f"**Punctuation:** `{token.text}`\n"
        case _:
            body = f"**{token.kind.value}:** `{token.text}`\n"

    if body is None:
        return None
    footer = f"\n\n---\n\nLine {token.line + 1}, Column {token.column + 1}"
    return HoverInfo(contents=body + footer, range=token.range)


def _documented(title: str, text: str, doc: str | None) -> str | None:
    if doc is None:
        return None
    return f"**{title}:** `{text}`\n\n{doc}"


def _readability(word: str) -> str:
    doc = READABILITY_DOCS.get(word.lower())
    parts = [f"**Readability Word:** `{word}`\n\n"]
    if doc:
        parts.append(doc + " ")
    parts.append("A structural keyword that improves readability. These words are optional syntactic sugar.")
    return "".join(parts)


def _identifier(token: Token, tokens: Sequence[Token], resolver: SymbolResolver) -> str:
    text = f"**Identifier:** `{token.text}`\n\nUser-defined name."
    if not tokens:
        return text
    definition = resolver.find_definition(tokens, token)
    if definition is not None:
        text += f" Defined on line {definition.start_line + 1}."
    return text
