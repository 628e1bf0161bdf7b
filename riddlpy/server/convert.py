"""Conversions from riddlpy values to `lsprotocol` wire types.

Riddlpy columns count code points. When a `TextDocument` is passed, outgoing ranges are
re-expressed in the client's negotiated position encoding (UTF-16 unless agreed otherwise).
"""

from __future__ import annotations

from collections.abc import Iterable

from lsprotocol import types as lsp
from pygls.workspace import TextDocument

from riddlpy.diagnostics import DiagnosticRecord, Severity
from riddlpy.features import HoverInfo, SemanticToken, TOKEN_MODIFIERS, TOKEN_TYPES
from riddlpy.text import SourceRange

SEVERITY_TO_LSP: dict[Severity, lsp.DiagnosticSeverity] = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.INFORMATION: lsp.DiagnosticSeverity.Information,
    Severity.HINT: lsp.DiagnosticSeverity.Hint,
}

SEMANTIC_TOKENS_LEGEND = lsp.SemanticTokensLegend(
    token_types=list(TOKEN_TYPES),
    token_modifiers=list(TOKEN_MODIFIERS),
)


def to_lsp_range(source_range: SourceRange, document: TextDocument | None = None) -> lsp.Range:
    converted = lsp.Range(
        start=lsp.Position(line=source_range.start_line, character=source_range.start_column),
        end=lsp.Position(line=source_range.end_line, character=source_range.end_column),
    )
    if document is None:
        return converted
    return document.position_codec.range_to_client_units(document.lines, converted)


def from_client_position(position: lsp.Position, document: TextDocument) -> tuple[int, int]:
    """Client (line, character) as a zero-based code-point (line, column) in `document`."""
    converted = document.position_codec.position_from_client_units(document.lines, position)
    return converted.line, converted.character


def to_lsp_diagnostic(record: DiagnosticRecord, document: TextDocument | None = None) -> lsp.Diagnostic:
    return lsp.Diagnostic(
        range=to_lsp_range(record.range, document),
        message=record.message,
        severity=SEVERITY_TO_LSP[record.severity],
        source=record.source,
        code=record.code,
    )


def to_lsp_diagnostics(
    records: Iterable[DiagnosticRecord],
    document: TextDocument | None = None,
) -> list[lsp.Diagnostic]:
    return [to_lsp_diagnostic(record, document) for record in records]


def to_lsp_location(uri: str, source_range: SourceRange, document: TextDocument | None = None) -> lsp.Location:
    return lsp.Location(uri=uri, range=to_lsp_range(source_range, document))


def to_lsp_locations(
    uri: str,
    ranges: Iterable[SourceRange],
    document: TextDocument | None = None,
) -> list[lsp.Location]:
    return [to_lsp_location(uri, source_range, document) for source_range in ranges]


def to_lsp_hover(info: HoverInfo, document: TextDocument | None = None) -> lsp.Hover:
    return lsp.Hover(
        contents=lsp.MarkupContent(kind=lsp.MarkupKind.Markdown, value=info.contents),
        range=to_lsp_range(info.range, document),
    )


def to_client_semantic_tokens(tokens: Iterable[SemanticToken], document: TextDocument) -> list[SemanticToken]:
    """Re-express token columns and lengths in the client's position encoding."""
    converted: list[SemanticToken] = []
    for token in tokens:
        source_range = SourceRange.on_line(token.line, token.column, token.column + token.length)
        client_range = to_lsp_range(source_range, document)
        converted.append(
            SemanticToken(
                line=token.line,
                column=client_range.start.character,
                length=client_range.end.character - client_range.start.character,
                token_type=token.token_type,
                modifiers=token.modifiers,
            )
        )
    return converted
