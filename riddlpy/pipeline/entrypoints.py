"""Entrypoints that run one editor query against one document text snapshot.

Each call retokenizes from scratch. None of them raise on compiler failure: tokenize
failures yield empty results and a failed validation yields one synthetic diagnostic.
"""

from __future__ import annotations

import logging

from riddlpy.analysis import NameSymbolResolver, SymbolResolver, TokenStream, tokenize_document
from riddlpy.compiler import CompilerService
from riddlpy.diagnostics import exception_diagnostic, has_errors, reconcile_result
from riddlpy.features import HoverInfo, SemanticToken, classify_tokens, hover_for_token
from riddlpy.options import AnalysisOptions
from riddlpy.pipeline.results import DefinitionRunResult, ReferencesRunResult, ValidationRunResult

logger = logging.getLogger(__name__)

DEFAULT_ORIGIN = "untitled.riddl"


def run_validation(
    text: str,
    service: CompilerService,
    *,
    origin: str = DEFAULT_ORIGIN,
    options: AnalysisOptions | None = None,
) -> ValidationRunResult:
    """Validate `text` and reconcile syntax + validation messages into one diagnostic set."""
    resolved_options = options or AnalysisOptions()
    try:
        result = service.validate(text, origin, resolved_options.strip_formatting)
        diagnostics = reconcile_result(result, text, search_backoff=resolved_options.identifier_search_backoff)
    except Exception as exc:
        logger.exception("validation failed for %s", origin)
        return ValidationRunResult(diagnostics=[exception_diagnostic(exc)], succeeded=False, has_errors=True)

    logger.debug("validated %s: %d diagnostic(s)", origin, len(diagnostics))
    return ValidationRunResult(
        diagnostics=diagnostics,
        succeeded=result.succeeded,
        has_errors=has_errors(diagnostics),
    )


def run_definition(
    text: str,
    line: int,
    column: int,
    service: CompilerService,
    *,
    origin: str = DEFAULT_ORIGIN,
    options: AnalysisOptions | None = None,
    resolver: SymbolResolver | None = None,
) -> DefinitionRunResult:
    """Definition of the symbol at zero-based (line, column)."""
    tokens = tokenize_document(service, text, origin)
    if not tokens:
        return DefinitionRunResult()
    target = tokens.token_at(line, column)
    if target is None or not target.kind.is_resolvable:
        logger.debug("definition at %d:%d: no resolvable token (%r)", line, column, target)
        return DefinitionRunResult()

    definition = _resolve_resolver(resolver, options).find_definition(tokens, target)
    return DefinitionRunResult(target=target, definition=definition)


def run_references(
    text: str,
    line: int,
    column: int,
    service: CompilerService,
    *,
    include_declaration: bool = True,
    origin: str = DEFAULT_ORIGIN,
    options: AnalysisOptions | None = None,
    resolver: SymbolResolver | None = None,
) -> ReferencesRunResult:
    """All occurrences of the symbol at zero-based (line, column), in document order."""
    tokens = tokenize_document(service, text, origin)
    if not tokens:
        return ReferencesRunResult()
    target = tokens.token_at(line, column)
    if target is None or not target.kind.is_resolvable:
        logger.debug("references at %d:%d: no resolvable token (%r)", line, column, target)
        return ReferencesRunResult()

    references = _resolve_resolver(resolver, options).find_references(tokens, target, include_declaration)
    return ReferencesRunResult(target=target, references=references)


def run_hover(
    text: str,
    line: int,
    column: int,
    service: CompilerService,
    *,
    origin: str = DEFAULT_ORIGIN,
    options: AnalysisOptions | None = None,
    resolver: SymbolResolver | None = None,
) -> HoverInfo | None:
    tokens = tokenize_document(service, text, origin)
    if not tokens:
        return None
    token = tokens.token_at(line, column)
    if token is None:
        return None
    return hover_for_token(token, tokens, _resolve_resolver(resolver, options))


def run_semantic_tokens(
    text: str,
    service: CompilerService,
    *,
    origin: str = DEFAULT_ORIGIN,
    options: AnalysisOptions | None = None,
    resolver: SymbolResolver | None = None,
) -> list[SemanticToken]:
    tokens = tokenize_document(service, text, origin)
    if not tokens:
        return []
    return classify_tokens(tokens, _resolve_resolver(resolver, options))


def tokenize(
    text: str,
    service: CompilerService,
    *,
    origin: str = DEFAULT_ORIGIN,
) -> TokenStream:
    """Token stream for `text`; empty when the service fails."""
    return tokenize_document(service, text, origin) or TokenStream()


def _resolve_resolver(resolver: SymbolResolver | None, options: AnalysisOptions | None) -> SymbolResolver:
    if resolver is not None:
        return resolver
    resolved_options = options or AnalysisOptions()
    return NameSymbolResolver(extra_keywords=resolved_options.extra_definition_keywords)
