"""Name-based symbol resolution over a flat token sequence.

There is no symbol table: a token is a definition occurrence when the token right before it
is a definition-introducing keyword, and every same-named Identifier/Predefined token is an
occurrence of that symbol. Scoping is ignored, so results are only as good as name
uniqueness within the document.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from typing import Protocol

from riddlpy.lexer import Token, TokenKind, is_definition_keyword
from riddlpy.text import SourceRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Occurrence:
    """One occurrence of a name, classified as definition or reference."""

    token: Token
    index: int
    is_definition: bool

    @property
    def range(self) -> SourceRange:
        return self.token.range


def is_resolvable(token: Token) -> bool:
    return token.kind.is_resolvable


def is_definition_occurrence(
    tokens: Sequence[Token],
    index: int,
    extra_keywords: frozenset[str] = frozenset(),
) -> bool:
    """True when the token at `index` directly follows a definition keyword."""
    if index <= 0 or index >= len(tokens):
        return False
    previous = tokens[index - 1]
    return previous.kind == TokenKind.KEYWORD and is_definition_keyword(previous.text, extra_keywords)


def classify_occurrences(
    tokens: Sequence[Token],
    name: str,
    extra_keywords: frozenset[str] = frozenset(),
) -> list[Occurrence]:
    """All resolvable tokens spelled `name`, in document order."""
    occurrences: list[Occurrence] = []
    for index, token in enumerate(tokens):
        if not is_resolvable(token) or token.text != name:
            continue
        occurrences.append(
            Occurrence(
                token=token,
                index=index,
                is_definition=is_definition_occurrence(tokens, index, extra_keywords),
            )
        )
    occurrences.sort(key=lambda occurrence: (occurrence.token.line, occurrence.token.column))
    return occurrences


def find_definition(
    tokens: Sequence[Token],
    target: Token,
    extra_keywords: frozenset[str] = frozenset(),
) -> SourceRange | None:
    """Range of the first definition occurrence named like `target`, if any."""
    if not is_resolvable(target):
        return None
    for occurrence in classify_occurrences(tokens, target.text, extra_keywords):
        if occurrence.is_definition:
            return occurrence.range
    return None


def find_references(
    tokens: Sequence[Token],
    target: Token,
    include_declaration: bool,
    extra_keywords: frozenset[str] = frozenset(),
) -> list[SourceRange]:
    """Ranges of every occurrence named like `target`; definitions only with `include_declaration`."""
    if not is_resolvable(target):
        return []
    return [
        occurrence.range
        for occurrence in classify_occurrences(tokens, target.text, extra_keywords)
        if include_declaration or not occurrence.is_definition
    ]


def classify_and_find(
    tokens: Sequence[Token],
    target: Token,
    include_declaration: bool,
    extra_keywords: frozenset[str] = frozenset(),
) -> list[SourceRange]:
    return find_references(tokens, target, include_declaration, extra_keywords)


class SymbolResolver(Protocol):
    """Definition/reference lookup contract; alternative resolvers plug in here."""

    def find_definition(self, tokens: Sequence[Token], target: Token) -> SourceRange | None: ...

    def find_references(
        self,
        tokens: Sequence[Token],
        target: Token,
        include_declaration: bool,
    ) -> list[SourceRange]: ...

    def is_definition(self, tokens: Sequence[Token], index: int) -> bool: ...


@dataclass(frozen=True, slots=True)
class NameSymbolResolver:
    """Default resolver: keyword adjacency plus exact name match, first definition wins."""

    extra_keywords: frozenset[str] = field(default_factory=frozenset)

    def find_definition(self, tokens: Sequence[Token], target: Token) -> SourceRange | None:
        definition = find_definition(tokens, target, self.extra_keywords)
        logger.debug("definition of %r: %s", target.text, definition)
        return definition

    def find_references(
        self,
        tokens: Sequence[Token],
        target: Token,
        include_declaration: bool,
    ) -> list[SourceRange]:
        references = find_references(tokens, target, include_declaration, self.extra_keywords)
        logger.debug("references of %r: %d found", target.text, len(references))
        return references

    def is_definition(self, tokens: Sequence[Token], index: int) -> bool:
        return is_resolvable(tokens[index]) and is_definition_occurrence(tokens, index, self.extra_keywords)
