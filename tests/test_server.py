import asyncio

from lsprotocol import types as lsp
from pygls.workspace import TextDocument

from riddlpy.compiler import LocalCompilerService
from riddlpy.options import AnalysisOptions
from riddlpy.server import RiddlLanguageServer, server
from riddlpy.server.server import _options_from_initialization

ASTRAL_URI = "file:///users.riddl"
# the emoji is one code point but two UTF-16 units, so `UserId` on line 1 sits at
# code points 30..36 and UTF-16 units 31..37
ASTRAL_SOURCE = 'type UserId is String\ncommand C is { note: "😀", id: UserId }'


def _astral_document() -> TextDocument:
    return TextDocument(uri=ASTRAL_URI, source=ASTRAL_SOURCE)


def _fresh_server() -> RiddlLanguageServer:
    return RiddlLanguageServer("riddl-test", "0", service=LocalCompilerService())


def test_initialization_options_are_parsed_or_ignored() -> None:
    assert _options_from_initialization({"debounceDelay": 0.1}).debounce_delay == 0.1
    assert _options_from_initialization({"debounceDelay": -1}) == AnalysisOptions()
    assert _options_from_initialization({"stripFormatting": "false"}) == AnalysisOptions()
    assert _options_from_initialization(None) == AnalysisOptions()


def test_module_server_uses_local_compiler_by_default() -> None:
    assert isinstance(server, RiddlLanguageServer)
    assert isinstance(server.compiler, LocalCompilerService)


def test_scheduler_picks_up_configured_delay() -> None:
    ls = _fresh_server()
    ls.configure(AnalysisOptions(debounce_delay=0.05))

    assert ls.scheduler.delay == 0.05
    assert ls.scheduler is ls.scheduler


def test_references_read_client_position_in_utf16_units() -> None:
    ls = _fresh_server()

    # last `d` of the second `UserId`, counted in UTF-16 units
    locations = ls.references_at(_astral_document(), lsp.Position(line=1, character=36))

    assert [location.uri for location in locations] == [ASTRAL_URI, ASTRAL_URI]
    assert [location.range for location in locations] == [
        lsp.Range(start=lsp.Position(line=0, character=5), end=lsp.Position(line=0, character=11)),
        lsp.Range(start=lsp.Position(line=1, character=31), end=lsp.Position(line=1, character=37)),
    ]


def test_definition_and_hover_after_astral_character() -> None:
    ls = _fresh_server()
    document = _astral_document()

    location = ls.definition_at(document, lsp.Position(line=1, character=31))
    hover = ls.hover_at(document, lsp.Position(line=1, character=36))

    assert location is not None
    assert location.range == lsp.Range(
        start=lsp.Position(line=0, character=5),
        end=lsp.Position(line=0, character=11),
    )
    assert hover is not None
    assert hover.range is not None
    assert (hover.range.start.character, hover.range.end.character) == (31, 37)


def test_cursor_on_space_after_identifier_finds_nothing() -> None:
    ls = _fresh_server()

    # UTF-16 unit 37 is the space after `UserId`
    assert ls.references_at(_astral_document(), lsp.Position(line=1, character=37)) == []


def test_semantic_tokens_are_encoded_in_utf16_units() -> None:
    ls = _fresh_server()

    data = ls.semantic_tokens(_astral_document()).data

    line = column = 0
    absolute: list[tuple[int, int, int]] = []
    for index in range(0, len(data), 5):
        delta_line, delta_start, length = data[index : index + 3]
        line += delta_line
        column = delta_start if delta_line else column + delta_start
        absolute.append((line, column, length))

    assert (1, 21, 4) in absolute
    assert (1, 31, 6) in absolute


def test_stop_revalidation_cancels_pending_timers() -> None:
    ls = _fresh_server()
    ls.configure(AnalysisOptions(debounce_delay=60.0))

    async def scenario() -> bool:
        ls.scheduler.schedule(ASTRAL_URI, ASTRAL_SOURCE)
        pending_before = ls.scheduler.is_pending(ASTRAL_URI)
        await ls.stop_revalidation()
        return pending_before

    assert asyncio.run(scenario()) is True
    assert ls.scheduler.is_pending(ASTRAL_URI) is False
    assert ls.scheduler.generation(ASTRAL_URI) is None


def test_stop_revalidation_without_scheduled_documents_is_a_no_op() -> None:
    ls = _fresh_server()

    asyncio.run(ls.stop_revalidation())

    assert ls._scheduler is None
