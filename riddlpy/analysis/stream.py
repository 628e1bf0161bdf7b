"""Token stream adapter over the compiler service tokenizer."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import logging
from typing import overload

from riddlpy.analysis.position import find_token_at
from riddlpy.compiler import CompilerService, RawToken
from riddlpy.lexer import Token, TokenKind, TokenLocation

logger = logging.getLogger(__name__)


class TokenStream(Sequence[Token]):
    """Immutable, document-ordered token sequence for one text snapshot.

    Never cached across edits; build a fresh one per query.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        self._tokens: tuple[Token, ...] = tuple(sorted(tokens, key=lambda token: (token.line, token.column)))

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Token]: ...

    def __getitem__(self, index: int | slice) -> Token | Sequence[Token]:
        return self._tokens[index]

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({len(self._tokens)} tokens)"

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    def token_at(self, line: int, column: int) -> Token | None:
        return find_token_at(self._tokens, line, column)


def tokenize_document(service: CompilerService, text: str, origin: str) -> TokenStream | None:
    """Tokenize `text` and normalize tokens to zero-based locations.

    Returns None when the service fails; never raises.
    """
    try:
        result = service.tokenize(text, origin)
    except Exception:
        logger.exception("tokenize failed for %s", origin)
        return None

    if not result.succeeded:
        logger.debug("tokenize reported failure for %s: %d error(s)", origin, len(result.errors))
        return None

    tokens: list[Token] = []
    for raw in result.tokens:
        token = normalize_token(raw)
        if token is None:
            logger.warning("dropping malformed token from %s: %r", origin, raw)
            continue
        tokens.append(token)

    logger.debug("tokenized %s: %d token(s)", origin, len(tokens))
    return TokenStream(tokens)


def normalize_token(raw: RawToken) -> Token | None:
    """Convert a one-based wire token into a zero-based Token, or None if unusable."""
    location = getattr(raw, "location", None)
    text = getattr(raw, "text", None)
    if location is None or not isinstance(text, str):
        return None
    line = getattr(location, "line", None)
    column = getattr(location, "col", None)
    if not isinstance(line, int) or not isinstance(column, int) or line < 1 or column < 1:
        return None

    offset = getattr(location, "offset", None)
    end_offset = getattr(location, "end_offset", None)
    if offset is not None and end_offset is not None and end_offset < offset:
        end_offset = None

    return Token(
        text=text,
        kind=TokenKind.parse(str(getattr(raw, "kind", ""))),
        location=TokenLocation(line=line - 1, column=column - 1, offset=offset, end_offset=end_offset),
    )
