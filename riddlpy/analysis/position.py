"""Position index: map a cursor position to the token under it."""

from collections.abc import Iterable

from riddlpy.lexer import Token


def find_token_at(tokens: Iterable[Token], line: int, column: int) -> Token | None:
    """Return the token whose [start, start+length) span on `line` contains `column`.

    Linear scan; token counts per document are small and this runs once per gesture.
    """
    for token in tokens:
        if token.spans(line, column):
            return token
    return None

