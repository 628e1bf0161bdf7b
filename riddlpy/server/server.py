"""RIDDL language server: thin LSP host adapter over `riddlpy.pipeline`."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from riddlpy.compiler import CompilerService, LocalCompilerService
from riddlpy.diagnostics import DiagnosticRecord
from riddlpy.features import encode_semantic_tokens
from riddlpy.options import AnalysisOptions
from riddlpy.pipeline import run_definition, run_hover, run_references, run_semantic_tokens
from riddlpy.scheduler import RevalidationScheduler, validate_document
from riddlpy.server.convert import (
    SEMANTIC_TOKENS_LEGEND,
    from_client_position,
    to_client_semantic_tokens,
    to_lsp_diagnostics,
    to_lsp_hover,
    to_lsp_location,
    to_lsp_locations,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "riddl-language-server"
SERVER_VERSION = "0.1.0"


class RiddlLanguageServer(LanguageServer):
    """Language server that owns the compiler service and the revalidation schedule.

    Query methods take the open `TextDocument` and client positions; conversion between
    client units and code-point columns happens here and in `riddlpy.server.convert`.
    """

    def __init__(self, *args: Any, service: CompilerService | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.compiler: CompilerService = service or LocalCompilerService()
        self.analysis_options = AnalysisOptions()
        self._scheduler: RevalidationScheduler | None = None

    @property
    def scheduler(self) -> RevalidationScheduler:
        if self._scheduler is None:
            self._scheduler = RevalidationScheduler(
                self._validate,
                self.publish_records,
                delay=self.analysis_options.debounce_delay,
            )
        return self._scheduler

    def configure(self, options: AnalysisOptions) -> None:
        if self._scheduler is not None:
            logger.warning("options changed after documents were scheduled; keeping debounce delay")
        self.analysis_options = options
        logger.info("configured: %s", options)

    async def stop_revalidation(self) -> None:
        if self._scheduler is not None:
            await self._scheduler.shutdown()

    def document(self, uri: str) -> TextDocument:
        return self.workspace.get_text_document(uri)

    def publish_records(self, uri: str, records: Sequence[DiagnosticRecord]) -> None:
        # a cleared document may already be gone from the workspace
        diagnostics = to_lsp_diagnostics(records, self.document(uri)) if records else []
        self.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics))

    def hover_at(self, document: TextDocument, position: lsp.Position) -> lsp.Hover | None:
        line, column = from_client_position(position, document)
        info = run_hover(
            document.source,
            line,
            column,
            self.compiler,
            origin=document.uri,
            options=self.analysis_options,
        )
        return None if info is None else to_lsp_hover(info, document)

    def definition_at(self, document: TextDocument, position: lsp.Position) -> lsp.Location | None:
        line, column = from_client_position(position, document)
        result = run_definition(
            document.source,
            line,
            column,
            self.compiler,
            origin=document.uri,
            options=self.analysis_options,
        )
        if result.definition is None:
            return None
        return to_lsp_location(document.uri, result.definition, document)

    def references_at(
        self,
        document: TextDocument,
        position: lsp.Position,
        include_declaration: bool = True,
    ) -> list[lsp.Location]:
        line, column = from_client_position(position, document)
        result = run_references(
            document.source,
            line,
            column,
            self.compiler,
            include_declaration=include_declaration,
            origin=document.uri,
            options=self.analysis_options,
        )
        return to_lsp_locations(document.uri, result.references, document)

    def semantic_tokens(self, document: TextDocument) -> lsp.SemanticTokens:
        tokens = run_semantic_tokens(
            document.source,
            self.compiler,
            origin=document.uri,
            options=self.analysis_options,
        )
        return lsp.SemanticTokens(data=encode_semantic_tokens(to_client_semantic_tokens(tokens, document)))

    async def _validate(self, uri: str, text: str) -> list[DiagnosticRecord]:
        return await validate_document(self.compiler, uri, text, self.analysis_options)


server = RiddlLanguageServer(
    SERVER_NAME,
    SERVER_VERSION,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)


def _options_from_initialization(raw: object) -> AnalysisOptions:
    if not isinstance(raw, dict):
        return AnalysisOptions()
    try:
        return AnalysisOptions.from_mapping(raw)
    except (TypeError, ValueError):
        logger.warning("ignoring invalid initializationOptions: %r", raw, exc_info=True)
        return AnalysisOptions()


@server.feature(lsp.INITIALIZE)
def on_initialize(params: lsp.InitializeParams) -> None:
    server.configure(_options_from_initialization(params.initialization_options))


@server.feature(lsp.SHUTDOWN)
async def on_shutdown(params: None) -> None:
    await server.stop_revalidation()


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    document = params.text_document
    server.scheduler.schedule(document.uri, document.text)


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    uri = params.text_document.uri
    server.scheduler.schedule(uri, server.document(uri).source)


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    server.scheduler.close(params.text_document.uri)


@server.feature(lsp.TEXT_DOCUMENT_HOVER)
def hover(params: lsp.HoverParams) -> lsp.Hover | None:
    return server.hover_at(server.document(params.text_document.uri), params.position)


@server.feature(lsp.TEXT_DOCUMENT_DEFINITION)
def definition(params: lsp.DefinitionParams) -> lsp.Location | None:
    return server.definition_at(server.document(params.text_document.uri), params.position)


@server.feature(lsp.TEXT_DOCUMENT_REFERENCES)
def references(params: lsp.ReferenceParams) -> list[lsp.Location]:
    include_declaration = params.context.include_declaration if params.context else True
    return server.references_at(server.document(params.text_document.uri), params.position, include_declaration)


@server.feature(lsp.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, SEMANTIC_TOKENS_LEGEND)
def semantic_tokens_full(params: lsp.SemanticTokensParams) -> lsp.SemanticTokens:
    return server.semantic_tokens(server.document(params.text_document.uri))

def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="RIDDL language server (stdio)")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level for messages written to stderr",
    )
    args = parser.parse_args(argv)

    # stdout carries the LSP stream
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("starting %s %s", SERVER_NAME, SERVER_VERSION)
    server.start_io()
    return 0
