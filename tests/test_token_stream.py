from riddlpy.analysis import TokenStream, find_token_at, normalize_token, tokenize_document
from riddlpy.compiler import LocalCompilerService, RawLocation, RawToken
from riddlpy.lexer import TokenKind
from riddlpy.pipeline import tokenize
from tests._shared_cases import USER_ID_SOURCE, CannedService, FailingService, RaisingService, raw_token


def test_local_service_tokens_are_normalized_to_zero_based() -> None:
    tokens = tokenize_document(LocalCompilerService(), USER_ID_SOURCE, "test.riddl")

    assert tokens is not None
    assert len(tokens) == 14
    command = tokens[7]
    assert command.text == "command"
    assert (command.line, command.column) == (1, 0)


def test_tokenize_failure_returns_none() -> None:
    service = FailingService()

    assert tokenize_document(service, "type A is String", "test.riddl") is None
    assert service.tokenize_calls == 1


def test_tokenize_exception_returns_none() -> None:
    assert tokenize_document(RaisingService(), "type A is String", "test.riddl") is None


def test_pipeline_tokenize_degrades_to_empty_stream() -> None:
    stream = tokenize("type A is String", RaisingService())

    assert isinstance(stream, TokenStream)
    assert len(stream) == 0


def test_empty_document_tokenizes_to_empty_sequence() -> None:
    tokens = tokenize_document(LocalCompilerService(), "", "empty.riddl")

    assert tokens is not None
    assert list(tokens) == []


def test_malformed_tokens_are_dropped_and_order_is_restored() -> None:
    service = CannedService(
        tokens=(
            raw_token("B", "Identifier", 2, 1),
            raw_token("broken", "Identifier", 0, 1),
            raw_token("A", "Identifier", 1, 5),
            raw_token("is", "Readability", 1, 7),
            raw_token("?", "Sparkle", 1, 10),
        )
    )

    tokens = tokenize_document(service, "ignored", "test.riddl")

    assert tokens is not None
    assert [(token.text, token.line, token.column) for token in tokens] == [
        ("A", 0, 4),
        ("is", 0, 6),
        ("?", 0, 9),
        ("B", 1, 0),
    ]
    assert tokens[2].kind == TokenKind.OTHER


def test_normalize_token_rejects_unusable_records() -> None:
    assert normalize_token(RawToken(text="x", kind="Identifier", location=RawLocation(line=1, col=0))) is None
    no_text = RawToken(text=None, kind="Identifier", location=RawLocation(line=1, col=1))  # type: ignore[arg-type]
    assert normalize_token(no_text) is None


def test_normalize_token_drops_inverted_offsets() -> None:
    token = normalize_token(
        RawToken(text="x", kind="Identifier", location=RawLocation(line=3, col=4, offset=10, end_offset=2))
    )

    assert token is not None
    assert (token.line, token.column) == (2, 3)
    assert token.location.offset == 10
    assert token.location.end_offset is None


def test_find_token_at_uses_half_open_spans() -> None:
    tokens = tokenize_document(LocalCompilerService(), USER_ID_SOURCE, "test.riddl")
    assert tokens is not None

    user_id = find_token_at(tokens, 1, 23)
    assert user_id is not None
    assert user_id.text == "UserId"
    assert find_token_at(tokens, 1, 28) is user_id
    assert find_token_at(tokens, 1, 29) is not None
    assert find_token_at(tokens, 1, 29).text == ")"  # type: ignore[union-attr]
    assert find_token_at(tokens, 0, 4) is None
    assert find_token_at(tokens, 5, 0) is None
    assert tokens.token_at(0, 5) is tokens[1]
