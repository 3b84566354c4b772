"""Error kinds raised by the analysis core.

All of them are local and recoverable. The engine boundary
(`pseudolang.engine.AnalysisEngine`) turns them into empty results.
"""

from __future__ import annotations


class PseudolangError(Exception):
    """Base class for every error raised by pseudolang."""


class UnknownDocument(PseudolangError):
    """An operation referenced a uri with no tracked document."""

    def __init__(self, uri: str):
        super().__init__(f"Document not open: {uri}")
        self.uri = uri


class DuplicateDocument(PseudolangError):
    """A document was opened twice while the store rejects duplicates."""

    def __init__(self, uri: str):
        super().__init__(f"Document already open: {uri}")
        self.uri = uri


class StaleVersion(PseudolangError):
    """An edit arrived with a version not greater than the current one."""

    def __init__(self, uri: str, current: int, received: int):
        super().__init__(f"Stale version for {uri}: received {received}, current is {current}")
        self.uri = uri
        self.current = current
        self.received = received


class InvalidPosition(PseudolangError):
    """A line or character offset lies outside the document text."""

    def __init__(self, line: int, character: int, reason: str = "out of range"):
        super().__init__(f"Invalid position {line}:{character} ({reason})")
        self.line = line
        self.character = character


class ConfigError(PseudolangError):
    """A configuration file could not be read or holds invalid values."""
