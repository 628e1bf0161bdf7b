"""In-process compiler service backed by the reference lexer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Final

from riddlpy.compiler.service import (
    RawLocation,
    RawMessage,
    RawToken,
    TokenizeResult,
    ValidateResult,
    ValidationMessages,
)
from riddlpy.lexer import LexError, Lexer, Token, TokenKind, is_definition_keyword

logger = logging.getLogger(__name__)

OPENERS: Final[dict[str, str]] = {"{": "}", "(": ")", "[": "]"}
CLOSERS: Final[dict[str, str]] = {closer: opener for opener, closer in OPENERS.items()}

ANSI_RED: Final[str] = "\x1b[31m"
ANSI_YELLOW: Final[str] = "\x1b[33m"
ANSI_RESET: Final[str] = "\x1b[0m"


@dataclass(frozen=True, slots=True)
class _Definition:
    keyword: Token
    name: Token
    index: int


class LocalCompilerService:
    """Compiler service that tokenizes and checks RIDDL text without an external runtime.

    Syntax checking covers lexical errors and bracket balance. Validation only runs on
    syntactically clean input and reports empty (`{ ??? }`) and duplicate definitions.
    """

    def tokenize(self, source: str, origin: str) -> TokenizeResult:
        lexer = Lexer(source)
        tokens = lexer.lex()
        return TokenizeResult(
            succeeded=True,
            tokens=tuple(_raw_token(token, origin) for token in tokens),
            errors=tuple(_lex_error_message(error, origin, strip_formatting=True) for error in lexer.errors),
        )

    def validate(self, source: str, origin: str, strip_formatting: bool) -> ValidateResult:
        lexer = Lexer(source)
        tokens = lexer.lex()

        syntax_errors = [_lex_error_message(error, origin, strip_formatting) for error in lexer.errors]
        syntax_errors.extend(_bracket_errors(tokens, lexer, origin, strip_formatting))
        logger.debug("validate %s: %d tokens, %d syntax error(s)", origin, len(tokens), len(syntax_errors))
        if syntax_errors:
            return ValidateResult(succeeded=False, syntax_errors=tuple(syntax_errors))

        definitions = _collect_definitions(tokens)
        return ValidateResult(
            succeeded=True,
            validation_messages=ValidationMessages(
                errors=tuple(_duplicate_definition_errors(definitions, origin, strip_formatting)),
                warnings=tuple(_empty_definition_warnings(tokens, definitions, origin, strip_formatting)),
            ),
        )


def _raw_token(token: Token, origin: str) -> RawToken:
    return RawToken(
        text=token.text,
        kind=token.kind.value,
        location=_raw_location(token.line, token.column, token.location.offset, token.location.end_offset, origin),
    )


def _raw_location(line: int, column: int, offset: int | None, end_offset: int | None, origin: str) -> RawLocation:
    return RawLocation(line=line + 1, col=column + 1, offset=offset, end_offset=end_offset, source=origin)


def _format(message: str, color: str, strip_formatting: bool) -> str:
    if strip_formatting:
        return message
    return f"{color}{message}{ANSI_RESET}"


def _lex_error_message(error: LexError, origin: str, strip_formatting: bool) -> RawMessage:
    return RawMessage(
        kind="Error",
        message=_format(error.message, ANSI_RED, strip_formatting),
        location=_raw_location(error.line, error.column, error.offset, error.end_offset, origin),
    )


def _bracket_errors(tokens: Sequence[Token], lexer: Lexer, origin: str, strip_formatting: bool) -> list[RawMessage]:
    errors: list[RawMessage] = []
    stack: list[Token] = []
    for token in tokens:
        if token.kind != TokenKind.PUNCTUATION:
            continue
        if token.text in OPENERS:
            stack.append(token)
            continue
        if token.text not in CLOSERS:
            continue
        if not stack:
            message = f"Unexpected '{token.text}'"
        elif OPENERS[stack[-1].text] != token.text:
            message = f"Expected '{OPENERS[stack[-1].text]}' but found '{token.text}'"
            stack.pop()
        else:
            stack.pop()
            continue
        errors.append(
            RawMessage(
                kind="Error",
                message=_format(message, ANSI_RED, strip_formatting),
                location=_raw_location(
                    token.line, token.column, token.location.offset, token.location.end_offset, origin
                ),
            )
        )

    if stack:
        end = len(lexer.source)
        line, column = lexer.position_of(end)
        opener = stack[-1]
        message = (
            f"Expected '{OPENERS[opener.text]}' before end of input "
            f"to close '{opener.text}' at {opener.line + 1}:{opener.column + 1}"
        )
        errors.append(
            RawMessage(
                kind="Error",
                message=_format(message, ANSI_RED, strip_formatting),
                location=_raw_location(line, column, None, None, origin),
            )
        )
    return errors


def _collect_definitions(tokens: Sequence[Token]) -> list[_Definition]:
    definitions: list[_Definition] = []
    for index in range(1, len(tokens)):
        previous = tokens[index - 1]
        token = tokens[index]
        if previous.kind == TokenKind.KEYWORD and is_definition_keyword(previous.text) and token.kind.is_resolvable:
            definitions.append(_Definition(keyword=previous, name=token, index=index))
    return definitions


def _duplicate_definition_errors(
    definitions: Sequence[_Definition],
    origin: str,
    strip_formatting: bool,
) -> list[RawMessage]:
    errors: list[RawMessage] = []
    seen: set[tuple[str, str]] = set()
    for definition in definitions:
        key = (definition.keyword.text.lower(), definition.name.text)
        if key not in seen:
            seen.add(key)
            continue
        message = f"{definition.keyword.text.capitalize()} '{definition.name.text}' is defined more than once"
        errors.append(
            RawMessage(
                kind="Error",
                message=_format(message, ANSI_RED, strip_formatting),
                location=_raw_location(definition.keyword.line, definition.keyword.column, None, None, origin),
            )
        )
    return errors


def _empty_definition_warnings(
    tokens: Sequence[Token],
    definitions: Sequence[_Definition],
    origin: str,
    strip_formatting: bool,
) -> list[RawMessage]:
    warnings: list[RawMessage] = []
    for definition in definitions:
        index = definition.index + 1
        while index < len(tokens) and tokens[index].kind == TokenKind.READABILITY:
            index += 1
        body = [token.text for token in tokens[index : index + 3]]
        if body != ["{", "???", "}"]:
            continue
        message = f"{definition.keyword.text.capitalize()} '{definition.name.text}' is empty"
        warnings.append(
            RawMessage(
                kind="MissingWarning",
                message=_format(message, ANSI_YELLOW, strip_formatting),
                location=_raw_location(definition.keyword.line, definition.keyword.column, None, None, origin),
            )
        )
    return warnings
