"""Tests for completion candidates and resolve."""

import pytest

from pseudolang.analysis.completion import complete, declaration_template, resolve
from pseudolang.errors import InvalidPosition
from pseudolang.keywords import keywords_for
from pseudolang.models import CompletionCandidate, Document, Position


def _labels(candidates: list[CompletionCandidate], category: str | None = None) -> list[str]:
    return [c.label for c in candidates if category is None or c.category == category]


def _complete(text: str, line: int, character: int) -> list[CompletionCandidate]:
    return complete(Document(uri="file:///t.pseudo", text=text, version=1), Position(line, character))


def test_empty_line_offers_every_declaration_then_modifiers():
    candidates = _complete("", 0, 0)

    assert _labels(candidates, "declarations") == list(keywords_for("declarations"))
    assert _labels(candidates) == list(keywords_for("declarations")) + list(keywords_for("modifiers"))


def test_declarations_are_snippets_with_distinct_app_placeholder():
    candidates = {c.label: c for c in _complete("", 0, 0) if c.category == "declarations"}

    assert candidates["app"].insert_text == 'app "${1:ProjectName}":'
    assert candidates["model"].insert_text == 'model "${1:Name}":'
    assert all(c.is_snippet_template for c in candidates.values())
    assert "ProjectName" not in candidates["page"].insert_text
    assert candidates["model"].detail == "model declaration"


def test_indented_blank_line_counts_as_line_start():
    candidates = _complete("app X:\n    ", 1, 4)
    assert "model" in _labels(candidates, "declarations")


def test_after_colon_offers_properties_actions_types_and_modifiers():
    candidates = _complete("  email: ", 0, 9)

    categories = [c.category for c in candidates]
    order = list(dict.fromkeys(categories))
    assert order == ["properties", "actions", "types", "modifiers"]
    assert _labels(candidates, "properties") == list(keywords_for("properties"))
    assert _labels(candidates, "actions") == list(keywords_for("actions"))


def test_typing_type_name_offers_types_without_properties():
    candidates = _complete("  email: em", 0, 11)

    assert _labels(candidates, "types") == list(keywords_for("types"))
    assert _labels(candidates, "properties") == []
    assert _labels(candidates, "actions") == []


def test_non_declaration_candidates_insert_bare_keyword():
    candidates = _complete("  email: ", 0, 9)
    for candidate in candidates:
        assert candidate.insert_text == candidate.label
        assert not candidate.is_snippet_template


@pytest.mark.parametrize("prefix", ["model User", "  email: string req", "??", "page \"Sign Up\""])
def test_modifiers_always_present(prefix: str):
    candidates = _complete(prefix, 0, len(prefix))
    assert _labels(candidates, "modifiers") == list(keywords_for("modifiers"))


def test_mid_line_cursor_uses_prefix_only():
    # Cursor right after the colon; text after the cursor is ignored
    candidates = _complete("  email: string", 0, 8)
    assert "path" in _labels(candidates, "properties")


def test_line_past_end_raises_invalid_position():
    with pytest.raises(InvalidPosition):
        _complete("model User:", 3, 0)


def test_declaration_template_default_placeholder():
    assert declaration_template("service") == 'service "${1:Name}":'


def test_resolve_documents_keyword_categories():
    candidate = _complete("", 0, 0)[0]
    resolved = resolve(candidate)

    assert resolved.documentation == "app - A pseudolang keyword"
    assert resolved.label == candidate.label
    assert candidate.documentation is None


def test_resolve_leaves_other_categories_alone():
    candidate = next(c for c in _complete("  x: ", 0, 5) if c.category == "properties")
    assert resolve(candidate) is candidate


def test_resolve_accepts_unknown_category():
    candidate = CompletionCandidate(label="foo", category="", detail="", insert_text="foo")
    assert resolve(candidate) == candidate
