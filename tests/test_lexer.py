import textwrap

import pytest

from riddlpy.lexer import Lexer, Token, TokenKind, lex
from tests._shared_cases import RIDDL_CASES, RiddlCase, case_id


def kinds(tokens: list[Token]) -> list[tuple[str, TokenKind]]:
    return [(token.text, token.kind) for token in tokens]


def test_definition_line_classifies_each_word() -> None:
    tokens, errors = lex("type UserId is Id(User)")

    assert errors == []
    assert kinds(tokens) == [
        ("type", TokenKind.KEYWORD),
        ("UserId", TokenKind.IDENTIFIER),
        ("is", TokenKind.READABILITY),
        ("Id", TokenKind.PREDEFINED),
        ("(", TokenKind.PUNCTUATION),
        ("User", TokenKind.IDENTIFIER),
        (")", TokenKind.PUNCTUATION),
    ]


def test_locations_are_zero_based_with_offsets() -> None:
    tokens, _ = lex("domain A is {\n  ???\n}")

    question = tokens[4]
    assert question.text == "???"
    assert question.kind == TokenKind.PUNCTUATION
    assert (question.line, question.column) == (1, 2)
    assert (question.location.offset, question.location.end_offset) == (16, 19)

    closing = tokens[5]
    assert (closing.line, closing.column) == (2, 0)


def test_crlf_and_lone_cr_both_end_lines() -> None:
    tokens, _ = lex("a\r\nb\rc")

    assert [(token.text, token.line, token.column) for token in tokens] == [
        ("a", 0, 0),
        ("b", 1, 0),
        ("c", 2, 0),
    ]


def test_comments_are_tokens_and_whitespace_is_skipped() -> None:
    src = textwrap.dedent(
        """
        // line comment
        type A is String /* block
        comment */ type B is Number
        """
    ).lstrip()

    tokens, errors = lex(src)

    assert errors == []
    comments = [token for token in tokens if token.kind == TokenKind.COMMENT]
    assert [comment.text for comment in comments] == ["// line comment", "/* block\ncomment */"]
    assert (comments[1].line, comments[1].column) == (1, 17)

    after_block = tokens[tokens.index(comments[1]) + 1]
    assert after_block.text == "type"
    assert (after_block.line, after_block.column) == (2, 11)


def test_strings_keep_quotes_and_escapes() -> None:
    tokens, errors = lex(r'briefly "say \"hi\""')

    assert errors == []
    assert tokens[1].kind == TokenKind.STRING
    assert tokens[1].text == r'"say \"hi\""'


def test_unterminated_string_is_reported() -> None:
    tokens, errors = lex('term Foo is "never closed\ntype B is String')

    assert tokens[3].kind == TokenKind.STRING
    assert tokens[3].text == '"never closed'
    assert len(errors) == 1
    assert errors[0].message == "Unterminated string literal"
    assert (errors[0].line, errors[0].column) == (0, 12)
    assert tokens[4].text == "type"


def test_numbers_with_fraction() -> None:
    tokens, _ = lex("constant Pi is Number = 3.14")

    assert tokens[-1].kind == TokenKind.NUMBER
    assert tokens[-1].text == "3.14"


def test_unexpected_character_yields_other_token_and_error() -> None:
    tokens, errors = lex("type A is $")

    assert tokens[-1].kind == TokenKind.OTHER
    assert tokens[-1].text == "$"
    assert errors[0].message == "Unexpected character '$'"


def test_keywords_are_case_sensitive_words() -> None:
    tokens, _ = lex("Type type")

    assert tokens[0].kind == TokenKind.IDENTIFIER
    assert tokens[1].kind == TokenKind.KEYWORD


def test_token_spans_are_half_open() -> None:
    token = Lexer("entity Cart").lex()[1]

    assert token.spans(0, 7)
    assert token.spans(0, 10)
    assert not token.spans(0, 11)
    assert not token.spans(1, 7)
    assert token.range.as_tuple() == (0, 7, 0, 11)


def test_unknown_wire_kind_maps_to_other() -> None:
    assert TokenKind.parse("Identifier") == TokenKind.IDENTIFIER
    assert TokenKind.parse("Mystery") == TokenKind.OTHER


@pytest.mark.parametrize("case", RIDDL_CASES, ids=case_id)
def test_lexer_tokens_are_in_document_order(case: RiddlCase) -> None:
    tokens, _ = lex(case.source)

    positions = [(token.line, token.column) for token in tokens]
    assert positions == sorted(positions)
    for token in tokens:
        assert token.location.offset is not None
        assert case.source[token.location.offset : token.location.end_offset] == token.text
