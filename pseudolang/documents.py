"""
Document store for open pseudo documents.

Holds the live text and version of every open document and applies the
incremental edits an editor sends. Positions arrive in UTF-16 code units
(the LSP default encoding) and are converted to Python string indices here.

Every successful open, edit and close notifies the registered listeners
with the affected uri; the analysis engine uses that to re-validate.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Literal

from .errors import DuplicateDocument, StaleVersion, UnknownDocument
from .models import Document, Position, TextEdit

logger = logging.getLogger(__name__)

DuplicatePolicy = Literal["reject", "replace"]
ChangeListener = Callable[[str], None]


def utf16_length(text: str) -> int:
    """Length of `text` in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


def utf16_to_index(line: str, units: int) -> int:
    """Convert a UTF-16 offset within `line` to a string index.

    Offsets past the end of the line clamp to the line length.
    """
    if units <= 0:
        return 0
    count = 0
    for index, char in enumerate(line):
        if count >= units:
            return index
        count += 2 if ord(char) > 0xFFFF else 1
    return len(line)


def index_to_utf16(line: str, index: int) -> int:
    """Convert a string index within `line` to a UTF-16 offset."""
    return utf16_length(line[:index])


def offset_at(text: str, position: Position) -> int:
    """Absolute string offset of `position` in `text`.

    Lines past the end clamp to the end of the text; characters past the
    end of a line clamp to the end of that line.
    """
    lines = text.split("\n")
    if position.line < 0:
        return 0
    if position.line >= len(lines):
        return len(text)
    start = sum(len(line) + 1 for line in lines[: position.line])
    return start + utf16_to_index(lines[position.line], position.character)


def apply_text_edits(text: str, edits: Iterable[TextEdit]) -> str:
    """Apply `edits` to `text` in order and return the new text.

    Each edit's range refers to the text produced by the previous edit.
    """
    for edit in edits:
        if edit.range is None:
            text = edit.text
            continue
        start = offset_at(text, edit.range.start)
        end = offset_at(text, edit.range.end)
        if end < start:
            start, end = end, start
        text = text[:start] + edit.text + text[end:]
    return text


class DocumentStore:
    """Tracks the current text and version of every open document."""

    def __init__(self, duplicate_open: DuplicatePolicy = "reject"):
        if duplicate_open not in ("reject", "replace"):
            raise ValueError(f"Unknown duplicate policy: {duplicate_open}")
        self.duplicate_open = duplicate_open
        self._documents: dict[str, Document] = {}
        self._listeners: list[ChangeListener] = []

    def add_listener(self, listener: ChangeListener) -> None:
        """Register a callback invoked with the uri after every mutation."""
        self._listeners.append(listener)

    def open(self, uri: str, text: str, version: int) -> Document:
        if uri in self._documents:
            if self.duplicate_open == "reject":
                raise DuplicateDocument(uri)
            logger.debug(f"Replacing already open document {uri}")

        document = Document(uri=uri, text=text, version=version)
        self._documents[uri] = document
        logger.debug(f"Opened {uri} at version {version}")
        self._notify(uri)
        return document

    def apply_edit(self, uri: str, edits: Iterable[TextEdit], new_version: int) -> Document:
        current = self._documents.get(uri)
        if current is None:
            raise UnknownDocument(uri)
        if new_version <= current.version:
            raise StaleVersion(uri, current.version, new_version)

        document = Document(uri=uri, text=apply_text_edits(current.text, edits), version=new_version)
        self._documents[uri] = document
        logger.debug(f"Applied edit to {uri}, now at version {new_version}")
        self._notify(uri)
        return document

    def close(self, uri: str) -> None:
        if self._documents.pop(uri, None) is None:
            return
        logger.debug(f"Closed {uri}")
        self._notify(uri)

    def get(self, uri: str) -> Document | None:
        return self._documents.get(uri)

    def __contains__(self, uri: object) -> bool:
        return uri in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def _notify(self, uri: str) -> None:
        for listener in self._listeners:
            listener(uri)
