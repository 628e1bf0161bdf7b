"""Lexer tokens."""

from dataclasses import dataclass
from enum import StrEnum

from riddlpy.text import SourcePosition, SourceRange


class TokenKind(StrEnum):
    """Token classification as delivered by the compiler service.

    Values are the kind strings used on the wire.
    """

    KEYWORD = "Keyword"
    IDENTIFIER = "Identifier"
    PREDEFINED = "Predefined"
    READABILITY = "Readability"
    PUNCTUATION = "Punctuation"
    COMMENT = "Comment"
    STRING = "String"
    NUMBER = "Number"
    OTHER = "Other"

    @property
    def is_resolvable(self) -> bool:
        """Kinds that can name a user-defined symbol."""
        return self in (TokenKind.IDENTIFIER, TokenKind.PREDEFINED)

    @staticmethod
    def parse(kind: str) -> "TokenKind":
        """Map a wire kind string to a TokenKind; unknown kinds become OTHER."""
        try:
            return TokenKind(kind)
        except ValueError:
            return TokenKind.OTHER


@dataclass(frozen=True, slots=True)
class TokenLocation:
    """Zero-based token location.

    `offset`/`end_offset` are character offsets into the document when the service reports them.
    """

    line: int
    column: int
    offset: int | None = None
    end_offset: int | None = None

    def __post_init__(self):
        if self.line < 0 or self.column < 0:
            raise ValueError("TokenLocation cannot be negative")
        if self.offset is not None and self.end_offset is not None and self.end_offset < self.offset:
            raise ValueError("TokenLocation invariant violated: offset > end_offset")


@dataclass(frozen=True, slots=True)
class Token:
    """A single classified token with a zero-based location."""

    text: str
    kind: TokenKind
    location: TokenLocation

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def start(self) -> SourcePosition:
        return SourcePosition(self.location.line, self.location.column)

    @property
    def range(self) -> SourceRange:
        """Range of the token on its starting line."""
        return SourceRange.at(self.start, self.length)

    def spans(self, line: int, column: int) -> bool:
        """Check whether [column, column+length) on this token's line contains the position."""
        return self.location.line == line and self.location.column <= column < self.location.column + self.length
