"""
Analysis engine: the boundary between the core and any protocol adapter.

The engine owns a DocumentStore and wires every store mutation to a full
re-validation whose result is handed to the `publish` callback. Inbound
methods named after editor events (`document_opened`, ...) never raise:
core errors are logged and turned into empty results. The strict variants
(`complete`, `validate`) raise and are meant for callers that want the
error kind.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from .analysis.completion import complete, resolve
from .analysis.scanner import scan
from .config import Config
from .documents import DocumentStore, DuplicatePolicy
from .errors import PseudolangError, UnknownDocument
from .models import CompletionCandidate, Diagnostic, Document, Position, TextEdit

logger = logging.getLogger(__name__)

Publisher = Callable[[str, list[Diagnostic]], None]


def _discard(uri: str, diagnostics: list[Diagnostic]) -> None:
    pass


class AnalysisEngine:
    """In-memory request/response engine keyed by document uri."""

    def __init__(self, publish: Publisher | None = None, duplicate_open: DuplicatePolicy = "reject"):
        self.store = DocumentStore(duplicate_open=duplicate_open)
        self.publish = publish or _discard
        self.store.add_listener(self._revalidate)

    @classmethod
    def from_config(cls, config: Config, publish: Publisher | None = None) -> "AnalysisEngine":
        return cls(publish=publish, duplicate_open=config.duplicate_open)

    # ------------------------------------------------------------------
    # Inbound editor events
    # ------------------------------------------------------------------
    def document_opened(self, uri: str, text: str, version: int) -> None:
        try:
            self.store.open(uri, text, version)
        except PseudolangError as e:
            logger.warning(f"Ignoring open: {e}")

    def document_changed(self, uri: str, edits: Iterable[TextEdit], new_version: int) -> None:
        try:
            self.store.apply_edit(uri, list(edits), new_version)
        except PseudolangError as e:
            logger.warning(f"Ignoring change: {e}")

    def document_closed(self, uri: str) -> None:
        self.store.close(uri)

    def completion_requested(self, uri: str, position: Position) -> list[CompletionCandidate]:
        try:
            return self.complete(uri, position)
        except PseudolangError as e:
            logger.warning(f"No completions: {e}")
            return []

    def completion_item_resolve_requested(self, candidate: CompletionCandidate) -> CompletionCandidate:
        return resolve(candidate)

    # ------------------------------------------------------------------
    # Strict operations
    # ------------------------------------------------------------------
    def document(self, uri: str) -> Document:
        document = self.store.get(uri)
        if document is None:
            raise UnknownDocument(uri)
        return document

    def complete(self, uri: str, position: Position) -> list[CompletionCandidate]:
        candidates = complete(self.document(uri), position)
        logger.debug(f"Returning {len(candidates)} completions for {uri} at {position.line}:{position.character}")
        return candidates

    def validate(self, uri: str) -> list[Diagnostic]:
        """Full rescan of one document."""
        return scan(self.document(uri).text)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _revalidate(self, uri: str) -> None:
        document = self.store.get(uri)
        diagnostics = scan(document.text) if document is not None else []
        logger.debug(f"Publishing {len(diagnostics)} diagnostics for {uri}")
        self.publish(uri, diagnostics)
