"""Lexer."""

from riddlpy.lexer.lexer import LexError, Lexer, dump_tokens, lex
from riddlpy.lexer.tokens import Token, TokenKind, TokenLocation
from riddlpy.lexer.vocabulary import (
    CATEGORY_WORDS,
    DEFINITION_KEYWORDS,
    KEYWORDS,
    PREDEFINED_TYPES,
    READABILITY_WORDS,
    is_definition_keyword,
)

__all__ = [
    "CATEGORY_WORDS",
    "DEFINITION_KEYWORDS",
    "KEYWORDS",
    "PREDEFINED_TYPES",
    "READABILITY_WORDS",
    "LexError",
    "Lexer",
    "Token",
    "TokenKind",
    "TokenLocation",
    "dump_tokens",
    "is_definition_keyword",
    "lex",
]
