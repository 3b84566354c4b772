"""
LSP server implementation for pseudo documents.

Provides:
- Incremental document sync into the analysis engine
- Real-time diagnostics, republished in full after every change
- Context-aware keyword completion with resolve support
"""

from __future__ import annotations

import logging

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from .. import __version__
from ..config import Config
from ..engine import AnalysisEngine
from ..models import CompletionCandidate, Diagnostic, Position, Range, TextEdit

logger = logging.getLogger(__name__)

TRIGGER_CHARACTERS = [" ", ":", '"']
DEFAULT_TCP_HOST = "localhost"
DEFAULT_TCP_PORT = 2087

CATEGORY_KINDS = {
    "declarations": lsp.CompletionItemKind.Keyword,
    "modifiers": lsp.CompletionItemKind.Keyword,
    "control": lsp.CompletionItemKind.Keyword,
    "properties": lsp.CompletionItemKind.Property,
    "actions": lsp.CompletionItemKind.Method,
    "types": lsp.CompletionItemKind.TypeParameter,
}


class PseudoLanguageServer(LanguageServer):
    """Language server for pseudo description files."""

    def __init__(self, config: Config | None = None):
        super().__init__(
            name="pseudo-language-server",
            version=__version__,
            text_document_sync_kind=lsp.TextDocumentSyncKind.Incremental,
        )
        self.config = config or Config()
        self.engine = AnalysisEngine.from_config(self.config, publish=self.publish_engine_diagnostics)

    def publish_engine_diagnostics(self, uri: str, diagnostics: list[Diagnostic]) -> None:
        """Send the complete diagnostic set for `uri` to the client."""
        self.text_document_publish_diagnostics(
            lsp.PublishDiagnosticsParams(
                uri=uri,
                diagnostics=[to_lsp_diagnostic(d) for d in diagnostics],
            )
        )


def to_position(position: lsp.Position) -> Position:
    return Position(line=position.line, character=position.character)


def to_text_edits(changes: list) -> list[TextEdit]:
    """Convert LSP content changes; whole-document changes carry no range."""
    edits = []
    for change in changes:
        change_range = getattr(change, "range", None)
        if change_range is None:
            edits.append(TextEdit(range=None, text=change.text))
        else:
            edits.append(
                TextEdit(
                    range=Range(start=to_position(change_range.start), end=to_position(change_range.end)),
                    text=change.text,
                )
            )
    return edits


def to_lsp_diagnostic(diagnostic: Diagnostic) -> lsp.Diagnostic:
    start, end = diagnostic.range.start, diagnostic.range.end
    return lsp.Diagnostic(
        range=lsp.Range(
            start=lsp.Position(line=start.line, character=start.character),
            end=lsp.Position(line=end.line, character=end.character),
        ),
        message=diagnostic.message,
        severity=lsp.DiagnosticSeverity(int(diagnostic.severity)),
        source=diagnostic.source,
        code=diagnostic.code,
    )


def to_completion_item(candidate: CompletionCandidate) -> lsp.CompletionItem:
    return lsp.CompletionItem(
        label=candidate.label,
        kind=CATEGORY_KINDS.get(candidate.category, lsp.CompletionItemKind.Text),
        detail=candidate.detail,
        documentation=candidate.documentation,
        insert_text=candidate.insert_text,
        insert_text_format=(
            lsp.InsertTextFormat.Snippet if candidate.is_snippet_template else lsp.InsertTextFormat.PlainText
        ),
        data={"category": candidate.category},
    )


def from_completion_item(item: lsp.CompletionItem) -> CompletionCandidate:
    """Rebuild a candidate from an item echoed back by the client."""
    category = ""
    if isinstance(item.data, dict):
        category = str(item.data.get("category", ""))
    documentation = item.documentation if isinstance(item.documentation, str) else None
    return CompletionCandidate(
        label=item.label,
        category=category,
        detail=item.detail or "",
        insert_text=item.insert_text or item.label,
        is_snippet_template=item.insert_text_format == lsp.InsertTextFormat.Snippet,
        documentation=documentation,
    )


def create_server(config: Config | None = None) -> PseudoLanguageServer:
    """Create and configure the LSP server."""
    server = PseudoLanguageServer(config)
    engine = server.engine

    @server.feature(lsp.INITIALIZE)
    def initialize(params: lsp.InitializeParams) -> None:
        """Record the client before capabilities are negotiated."""
        client = params.client_info.name if params.client_info else "unknown client"
        logger.info(f"Initializing for {client}")

    @server.feature(lsp.INITIALIZED)
    def initialized(params: lsp.InitializedParams) -> None:
        logger.info("Pseudo Language Server initialized")

    @server.feature(lsp.WORKSPACE_DID_CHANGE_WORKSPACE_FOLDERS)
    def workspace_folders_changed(params: lsp.DidChangeWorkspaceFoldersParams) -> None:
        logger.debug("Workspace folder change event received")

    @server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
    def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
        """Handle document open - track text and publish diagnostics."""
        doc = params.text_document
        engine.document_opened(doc.uri, doc.text, doc.version)

    @server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
    def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
        """Handle document change - apply edits, rescan the full text."""
        engine.document_changed(
            params.text_document.uri,
            to_text_edits(list(params.content_changes)),
            params.text_document.version,
        )

    @server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
    def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
        """Handle document close - forget text and clear diagnostics."""
        engine.document_closed(params.text_document.uri)

    @server.feature(
        lsp.TEXT_DOCUMENT_COMPLETION,
        lsp.CompletionOptions(trigger_characters=TRIGGER_CHARACTERS, resolve_provider=True),
    )
    def completion(params: lsp.CompletionParams) -> lsp.CompletionList:
        candidates = engine.completion_requested(params.text_document.uri, to_position(params.position))
        return lsp.CompletionList(is_incomplete=False, items=[to_completion_item(c) for c in candidates])

    @server.feature(lsp.COMPLETION_ITEM_RESOLVE)
    def completion_resolve(item: lsp.CompletionItem) -> lsp.CompletionItem:
        resolved = engine.completion_item_resolve_requested(from_completion_item(item))
        item.detail = resolved.detail
        item.documentation = resolved.documentation
        return item

    return server


def start_server(
    config: Config | None = None,
    transport: str = "stdio",
    host: str = DEFAULT_TCP_HOST,
    port: int = DEFAULT_TCP_PORT,
) -> None:
    """Start the LSP server.

    Args:
        config: Resolved settings (defaults when None)
        transport: Transport method ("stdio" or "tcp")
        host: TCP host, ignored for stdio
        port: TCP port, ignored for stdio
    """
    server = create_server(config)

    if transport == "stdio":
        server.start_io()
    else:
        # TCP transport for debugging
        logger.info(f"Listening on {host}:{port}")
        server.start_tcp(host, port)
