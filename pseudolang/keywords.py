"""
Keyword catalog for the pseudo description language.

The catalog is the single source of truth for the surface vocabulary:
- completion draws candidates from it, one category at a time
- the diagnostic scanner builds its declaration-header pattern from it
- grammar generators read it through `as_json()` / `pseudolang keywords`

Categories are fixed and ordered; keywords inside a category keep the
order in which completion offers them.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Mapping

# Canonical category order (prevents implicit dict ordering contract)
CATEGORY_ORDER: tuple[str, ...] = (
    "declarations",
    "types",
    "modifiers",
    "actions",
    "control",
    "properties",
)

KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "declarations": (
            "app",
            "domain",
            "feature",
            "model",
            "component",
            "page",
            "request",
            "response",
            "route",
            "auth",
            "guard",
            "form",
            "service",
            "repository",
            "config",
            "event",
            "state",
        ),
        "types": ("string", "number", "boolean", "date", "email", "url", "uuid", "array", "object"),
        "modifiers": ("required", "optional", "unique", "indexed", "default"),
        "actions": (
            "create",
            "update",
            "delete",
            "query",
            "list",
            "show",
            "hide",
            "toggle",
            "validate",
            "redirect",
            "authenticate",
            "authorize",
            "transform",
            "filter",
            "sort",
            "paginate",
        ),
        "control": ("if", "else", "when", "for each", "try", "catch", "return"),
        "properties": (
            "path",
            "guard",
            "description",
            "language",
            "framework",
            "database",
            "styling",
            "components",
            "authentication",
        ),
    }
)

# Singular nouns used in completion detail text ("model declaration")
CATEGORY_NOUNS: Mapping[str, str] = MappingProxyType(
    {
        "declarations": "declaration",
        "types": "type",
        "modifiers": "modifier",
        "actions": "action",
        "control": "control keyword",
        "properties": "property",
    }
)


def keywords_for(category: str) -> tuple[str, ...]:
    """Return the ordered keywords of one category.

    Raises:
        KeyError: if the category is not part of the catalog
    """
    return KEYWORDS[category]


def catalog() -> dict[str, list[str]]:
    """Return a mutable copy of the catalog in canonical category order."""
    return {category: list(KEYWORDS[category]) for category in CATEGORY_ORDER}


def as_json(category: str | None = None, indent: int | None = 2) -> str:
    """Serialize the catalog for syntax-highlighting grammar generators.

    With `category`, only that category is included.

    Raises:
        KeyError: if the category is not part of the catalog
    """
    data = catalog()
    if category is not None:
        data = {category: data[category]}
    return json.dumps(data, indent=indent)
