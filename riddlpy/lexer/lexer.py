"""Reference RIDDL lexer used by the in-process compiler service."""

from dataclasses import dataclass

from riddlpy.lexer.tokens import Token, TokenKind, TokenLocation
from riddlpy.lexer.vocabulary import KEYWORDS, PREDEFINED_TYPES, READABILITY_WORDS

PUNCTUATION_CHARS = frozenset("{}()[],:;.=?+*|<>@!&/-#%^~")


@dataclass(frozen=True, slots=True)
class LexError:
    """Lexical problem found while scanning."""

    message: str
    line: int
    column: int
    offset: int
    end_offset: int


class Lexer:
    """Lexer that emits non-trivia tokens with zero-based locations.

    Whitespace is skipped; comments are kept as `Comment` tokens.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._line = 0
        self._line_start = 0
        self._errors: list[LexError] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def errors(self) -> list[LexError]:
        """Lexical errors found so far."""
        return self._errors

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            self._skip_whitespace()
            if self.is_eof:
                break
            tokens.append(self._next_token())
        return tokens

    def _next_token(self) -> Token:
        start = self._position
        line = self._line
        column = self._position - self._line_start
        kind = self._lex_token()
        text = self._source[start : self._position]
        return Token(
            text=text,
            kind=kind,
            location=TokenLocation(line=line, column=column, offset=start, end_offset=self._position),
        )

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch == "/" and self._peek_char() == "/":
            return self._lex_line_comment()
        if ch == "/" and self._peek_char() == "*":
            return self._lex_block_comment()

        if ch == '"':
            return self._lex_string()

        if ch.isdigit():
            return self._lex_number()

        if ch.isalpha() or ch == "_":
            return self._lex_word()

        if ch == "?" and self._peek_char() == "?" and self._peek_char(2) == "?":
            self._advance(3)
            return TokenKind.PUNCTUATION

        if ch in PUNCTUATION_CHARS:
            self._advance(1)
            return TokenKind.PUNCTUATION

        self._error(f"Unexpected character '{ch}'", self._position, self._position + 1)
        self._advance(1)
        return TokenKind.OTHER

    def _lex_line_comment(self) -> TokenKind:
        # Consume until end of line, do not consume the newline itself.
        while not self.is_eof:
            ch = self._current_char()
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)
        return TokenKind.COMMENT

    def _lex_block_comment(self) -> TokenKind:
        start = self._position
        self._advance(2)
        while not self.is_eof:
            if self._current_char() == "*" and self._peek_char() == "/":
                self._advance(2)
                return TokenKind.COMMENT
            self._advance_char()
        self._error("Unterminated block comment", start, self._position)
        return TokenKind.COMMENT

    def _lex_string(self) -> TokenKind:
        start = self._position
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch == '"':
                self._advance(1)
                return TokenKind.STRING
            if ch == "\\":
                self._advance(1)
                if not self.is_eof and self._current_char() not in "\r\n":
                    self._advance(1)
                continue
            if ch == "\n" or ch == "\r":
                break
            self._advance(1)
        self._error("Unterminated string literal", start, self._position)
        return TokenKind.STRING

    def _lex_number(self) -> TokenKind:
        saw_dot = False
        while not self.is_eof:
            ch = self._current_char()
            if ch.isdigit():
                self._advance(1)
                continue
            if ch == "." and not saw_dot and self._peek_char().isdigit():
                saw_dot = True
                self._advance(1)
                continue
            break
        return TokenKind.NUMBER

    def _lex_word(self) -> TokenKind:
        start = self._position
        self._advance(1)
        while not self.is_eof:
            ch = self._current_char()
            if ch.isalnum() or ch == "_":
                self._advance(1)
                continue
            break
        word = self._source[start : self._position]
        if word in KEYWORDS:
            return TokenKind.KEYWORD
        if word in READABILITY_WORDS:
            return TokenKind.READABILITY
        if word in PREDEFINED_TYPES:
            return TokenKind.PREDEFINED
        return TokenKind.IDENTIFIER

    def _skip_whitespace(self) -> None:
        while not self.is_eof:
            ch = self._current_char()
            if ch == " " or ch == "\t" or ch == "\n" or ch == "\r" or ch == "\f":
                self._advance_char()
                continue
            break

    def _advance_char(self) -> None:
        """Advance one character, tracking line starts."""
        ch = self._current_char()
        self._position += 1
        if ch == "\r" and self._current_char() == "\n":
            self._position += 1
            ch = "\n"
        if ch == "\n" or ch == "\r":
            self._line += 1
            self._line_start = self._position

    def _error(self, message: str, start: int, end: int) -> None:
        line, column = self.position_of(start)
        self._errors.append(LexError(message=message, line=line, column=column, offset=start, end_offset=end))

    def position_of(self, offset: int) -> tuple[int, int]:
        """Zero-based (line, column) of an offset at or before the current position."""
        line = self._source.count("\n", 0, offset) + _count_lone_cr(self._source, offset)
        line_start = max(self._source.rfind("\n", 0, offset), self._source.rfind("\r", 0, offset)) + 1
        return line, offset - line_start

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def _count_lone_cr(source: str, end: int) -> int:
    count = 0
    index = source.find("\r", 0, end)
    while index != -1:
        if index + 1 >= len(source) or source[index + 1] != "\n":
            count += 1
        index = source.find("\r", index + 1, end)
    return count


def lex(source: str) -> tuple[list[Token], list[LexError]]:
    lexer = Lexer(source)
    tokens = lexer.lex()
    return tokens, lexer.errors


def dump_tokens(tokens: list[Token], errors: list[LexError] | None = None) -> None:
    """Print token list with kind, location and text for debugging."""
    for i, tok in enumerate(tokens):
        print(f"{i:03d} {tok.kind.value:<12} at={tok.line}:{tok.column} text={tok.text!r}")

    if errors is not None:
        print("\nErrors:")
        for e in errors:
            print(f"- {e.line}:{e.column} {e.message}")
