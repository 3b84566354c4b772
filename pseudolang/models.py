"""Data models shared by the document store, analysis and adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# Constant identifying diagnostics produced by this engine
DIAGNOSTIC_SOURCE = "pseudo-lang"


@dataclass(frozen=True)
class Position:
    """Zero-based line and UTF-16 code unit offset within that line."""

    line: int
    character: int


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position


@dataclass(frozen=True)
class TextEdit:
    """Range replacement applied to a document.

    A `range` of None replaces the whole text (full-sync change).
    """

    range: Range | None
    text: str


@dataclass(frozen=True)
class Document:
    """Snapshot of an open document."""

    uri: str
    text: str
    version: int

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")


class Severity(IntEnum):
    """Diagnostic severity; values match the LSP wire values."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


@dataclass(frozen=True)
class Diagnostic:
    """A single positioned finding from the scanner."""

    severity: Severity
    range: Range
    message: str
    source: str = DIAGNOSTIC_SOURCE
    code: str | None = None  # stable rule id, e.g. "unquoted-name"

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.name.lower(),
            "line": self.range.start.line,
            "start": self.range.start.character,
            "end": self.range.end.character,
            "message": self.message,
            "source": self.source,
            "code": self.code,
        }


@dataclass(frozen=True)
class CompletionCandidate:
    """A single completion suggestion before adapter conversion."""

    label: str
    category: str
    detail: str
    insert_text: str
    is_snippet_template: bool = False
    documentation: str | None = None
