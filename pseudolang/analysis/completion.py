"""
Completion candidates from the keyword catalog.

Provides:
- `complete()` - candidates for a cursor position in a document
- `candidates_for()` - candidates for an already classified context list
- `resolve()` - documentation enrichment for keyword-like candidates
"""

from __future__ import annotations

from dataclasses import replace

from ..keywords import CATEGORY_NOUNS, keywords_for
from ..models import CompletionCandidate, Document, Position
from .context import CompletionContext, classify, line_prefix

# Catalog categories offered for each context, in emission order
CONTEXT_CATEGORIES: dict[CompletionContext, tuple[str, ...]] = {
    CompletionContext.LINE_START: ("declarations",),
    CompletionContext.AFTER_COLON: ("properties", "actions"),
    CompletionContext.TYPE_POSITION: ("types",),
    CompletionContext.ALWAYS: ("modifiers",),
}

# Categories the editor shows as plain keywords; only these are enriched
KEYWORD_CATEGORIES = frozenset({"declarations", "modifiers", "control"})

DEFAULT_PLACEHOLDER = "Name"
PLACEHOLDERS = {"app": "ProjectName"}


def declaration_template(keyword: str) -> str:
    """Snippet inserting a declaration header with a quoted name placeholder."""
    placeholder = PLACEHOLDERS.get(keyword, DEFAULT_PLACEHOLDER)
    return f'{keyword} "${{1:{placeholder}}}":'


def make_candidate(keyword: str, category: str) -> CompletionCandidate:
    detail = f"{keyword} {CATEGORY_NOUNS[category]}"
    if category == "declarations":
        return CompletionCandidate(
            label=keyword,
            category=category,
            detail=detail,
            insert_text=declaration_template(keyword),
            is_snippet_template=True,
        )
    return CompletionCandidate(label=keyword, category=category, detail=detail, insert_text=keyword)


def candidates_for(contexts: list[CompletionContext]) -> list[CompletionCandidate]:
    """One candidate per keyword of every category the contexts select.

    No deduplication: a keyword reachable twice would be listed twice.
    """
    candidates: list[CompletionCandidate] = []
    for context in contexts:
        for category in CONTEXT_CATEGORIES[context]:
            candidates.extend(make_candidate(keyword, category) for keyword in keywords_for(category))
    return candidates


def complete(document: Document, position: Position) -> list[CompletionCandidate]:
    """Completion candidates for `position` in `document`.

    Raises:
        InvalidPosition: if the position lies outside the document text
    """
    return candidates_for(classify(line_prefix(document, position)))


def resolve(candidate: CompletionCandidate) -> CompletionCandidate:
    """Attach documentation to keyword-like candidates; never fails."""
    if candidate.category not in KEYWORD_CATEGORIES:
        return candidate
    return replace(candidate, documentation=f"{candidate.label} - A pseudolang keyword")
