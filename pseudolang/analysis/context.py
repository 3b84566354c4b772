"""
Completion context classification.

Context is derived from the text of the cursor line up to the cursor
("prefix") with a handful of line-local patterns; there is no tokenizer.
All matching contexts are returned, in precedence order, because a prefix
can legitimately match more than one of them.
"""

from __future__ import annotations

import re
from enum import Enum

from ..documents import index_to_utf16, utf16_to_index
from ..errors import InvalidPosition
from ..models import Document, Position


class CompletionContext(str, Enum):
    """Where the cursor sits, as far as completion is concerned."""

    LINE_START = "line_start"
    AFTER_COLON = "after_colon"
    TYPE_POSITION = "type_position"
    ALWAYS = "always"


LINE_START_PATTERN = re.compile(r"^\s*$")
AFTER_COLON_PATTERN = re.compile(r":\s*$")
TYPE_POSITION_PATTERN = re.compile(r":\s*\w*$")

# Evaluated in this order; ALWAYS is appended unconditionally
CONTEXT_RULES: tuple[tuple[CompletionContext, re.Pattern[str]], ...] = (
    (CompletionContext.LINE_START, LINE_START_PATTERN),
    (CompletionContext.AFTER_COLON, AFTER_COLON_PATTERN),
    (CompletionContext.TYPE_POSITION, TYPE_POSITION_PATTERN),
)


def line_text(document: Document, line: int) -> str:
    """Return the text of one line, raising InvalidPosition when absent."""
    lines = document.lines
    if line < 0 or line >= len(lines):
        raise InvalidPosition(line, 0, f"document has {len(lines)} lines")
    return lines[line]


def line_prefix(document: Document, position: Position) -> str:
    """Text of the cursor line from column 0 up to the cursor."""
    text = line_text(document, position.line)
    if position.character < 0 or position.character > index_to_utf16(text, len(text)):
        raise InvalidPosition(position.line, position.character, "character outside line")
    return text[: utf16_to_index(text, position.character)]


def classify(prefix: str) -> list[CompletionContext]:
    """Return every context whose pattern matches `prefix`, ALWAYS last."""
    contexts = [context for context, pattern in CONTEXT_RULES if pattern.search(prefix)]
    contexts.append(CompletionContext.ALWAYS)
    return contexts
