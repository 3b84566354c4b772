"""Tests for the LSP adapter conversions and wiring."""

from types import SimpleNamespace

from lsprotocol import types as lsp

from pseudolang.analysis.completion import make_candidate
from pseudolang.analysis.scanner import scan
from pseudolang.lsp.server import (
    PseudoLanguageServer,
    from_completion_item,
    to_completion_item,
    to_lsp_diagnostic,
    to_text_edits,
)
from pseudolang.models import Position, TextEdit

URI = "file:///workspace/app.pseudo"


def test_partial_and_full_changes_convert_to_edits():
    changes = [
        SimpleNamespace(
            range=lsp.Range(start=lsp.Position(line=0, character=1), end=lsp.Position(line=0, character=3)),
            text="x",
        ),
        SimpleNamespace(text="whole"),
    ]
    edits = to_text_edits(changes)

    assert edits[0].range.start == Position(0, 1)
    assert edits[0].range.end == Position(0, 3)
    assert edits[0].text == "x"
    assert edits[1] == TextEdit(range=None, text="whole")


def test_diagnostic_conversion():
    diagnostic = to_lsp_diagnostic(scan("model User Profile:")[0])

    assert diagnostic.severity == lsp.DiagnosticSeverity.Warning
    assert diagnostic.range.start.character == 6
    assert diagnostic.range.end.character == 18
    assert diagnostic.source == "pseudo-lang"
    assert diagnostic.code == "unquoted-name"


def test_declaration_item_is_snippet_keyword():
    item = to_completion_item(make_candidate("app", "declarations"))

    assert item.kind == lsp.CompletionItemKind.Keyword
    assert item.insert_text_format == lsp.InsertTextFormat.Snippet
    assert item.insert_text == 'app "${1:ProjectName}":'
    assert item.data == {"category": "declarations"}


def test_item_kinds_per_category():
    assert to_completion_item(make_candidate("path", "properties")).kind == lsp.CompletionItemKind.Property
    assert to_completion_item(make_candidate("create", "actions")).kind == lsp.CompletionItemKind.Method
    assert to_completion_item(make_candidate("uuid", "types")).kind == lsp.CompletionItemKind.TypeParameter
    assert to_completion_item(make_candidate("unique", "modifiers")).kind == lsp.CompletionItemKind.Keyword


def test_item_echoed_by_client_restores_candidate():
    candidate = make_candidate("required", "modifiers")
    assert from_completion_item(to_completion_item(candidate)) == candidate


def test_item_without_data_has_no_category():
    candidate = from_completion_item(lsp.CompletionItem(label="free"))
    assert candidate.category == ""
    assert candidate.insert_text == "free"


def test_server_publishes_through_pygls(monkeypatch):
    server = PseudoLanguageServer()
    sent: list[lsp.PublishDiagnosticsParams] = []
    monkeypatch.setattr(server, "text_document_publish_diagnostics", sent.append)

    server.engine.document_opened(URI, "page Sign Up:", 1)
    server.engine.document_closed(URI)

    assert [p.uri for p in sent] == [URI, URI]
    assert len(sent[0].diagnostics) == 1
    assert sent[1].diagnostics == []
