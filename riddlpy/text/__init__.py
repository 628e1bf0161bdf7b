"""Source positions and ranges."""

from riddlpy.text.text import ORIGIN, LineIndex, SourcePosition, SourceRange

__all__ = ["ORIGIN", "LineIndex", "SourcePosition", "SourceRange"]
