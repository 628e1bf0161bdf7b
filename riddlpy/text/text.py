from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True, order=True)
class SourcePosition:
    """Zero-based (line, column) position in a document."""

    line: int
    column: int

    def __post_init__(self):
        if self.line < 0 or self.column < 0:
            raise ValueError("SourcePosition cannot be negative")

    def __repr__(self) -> str:
        return f"SourcePosition({self.line}, {self.column})"


ORIGIN: Final[SourcePosition] = SourcePosition(0, 0)
"""Start of every document."""


@dataclass(frozen=True, slots=True, order=True)
class SourceRange:
    """
    Range between two positions, half-open on columns (end is exclusive).

    Invariant:
    - start <= end
    """

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def __post_init__(self):
        if min(self.start_line, self.start_column, self.end_line, self.end_column) < 0:
            raise ValueError("SourceRange positions cannot be negative")
        if (self.start_line, self.start_column) > (self.end_line, self.end_column):
            raise ValueError("SourceRange invariant violated: start > end")

    @staticmethod
    def on_line(line: int, start: int, end: int) -> "SourceRange":
        """Create a single-line range [start, end) on the given line."""
        return SourceRange(line, start, line, end)

    @staticmethod
    def at(position: SourcePosition, length: int) -> "SourceRange":
        """Create a single-line range of the given length starting at position."""
        return SourceRange(position.line, position.column, position.line, position.column + length)

    @staticmethod
    def empty(position: SourcePosition) -> "SourceRange":
        """Create a zero-width range at the given position."""
        return SourceRange(position.line, position.column, position.line, position.column)

    @property
    def start(self) -> SourcePosition:
        return SourcePosition(self.start_line, self.start_column)

    @property
    def end(self) -> SourcePosition:
        return SourcePosition(self.end_line, self.end_column)

    def is_empty(self) -> bool:
        return self.start == self.end

    def is_single_line(self) -> bool:
        return self.start_line == self.end_line

    def contains(self, position: SourcePosition) -> bool:
        """Check if the range contains the given position (end exclusive)."""
        return self.start <= position < self.end

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.start_line, self.start_column, self.end_line, self.end_column)

    def __repr__(self) -> str:
        return f"SourceRange({self.start_line}:{self.start_column}-{self.end_line}:{self.end_column})"


class LineIndex:
    """Line-oriented view of a document text.

    Line breaks follow the editor convention: `\\n`, `\\r\\n` and lone `\\r` all end a line,
    and a trailing break opens one more (empty) line.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._lines = _split_lines(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def has_line(self, line: int) -> bool:
        return 0 <= line < len(self._lines)

    def line_text(self, line: int) -> str:
        """Text of one line without its terminator."""
        if not self.has_line(line):
            raise ValueError(f"Line {line} is outside the document ({len(self._lines)} lines)")
        return self._lines[line]

    def line_length(self, line: int) -> int:
        return len(self.line_text(line))

    def end_position(self) -> SourcePosition:
        last = len(self._lines) - 1
        return SourcePosition(last, len(self._lines[last]))


def _split_lines(text: str) -> list[str]:
    lines: list[str] = []
    start = 0
    index = 0
    length = len(text)
    while index < length:
        ch = text[index]
        if ch == "\n" or ch == "\r":
            lines.append(text[start:index])
            if ch == "\r" and index + 1 < length and text[index + 1] == "\n":
                index += 1
            start = index + 1
        index += 1
    lines.append(text[start:])
    return lines
