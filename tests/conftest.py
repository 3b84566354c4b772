"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from pseudolang.engine import AnalysisEngine
from pseudolang.models import Diagnostic

URI = "file:///workspace/app.pseudo"

SAMPLE_DOCUMENT = "\n".join(
    [
        'app "Task Tracker":',
        "  description: Track tasks",
        "",
        "model User Profile:",
        "  email: email required",
        "",
        'page "Sign Up":',
        "  path: /signup",
        "",
    ]
)


class PublishRecorder:
    """Collects every diagnostics publication from an engine."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[Diagnostic]]] = []

    def __call__(self, uri: str, diagnostics: list[Diagnostic]) -> None:
        self.calls.append((uri, diagnostics))

    @property
    def last(self) -> list[Diagnostic]:
        return self.calls[-1][1]


@pytest.fixture
def published() -> PublishRecorder:
    return PublishRecorder()


@pytest.fixture
def engine(published: PublishRecorder) -> AnalysisEngine:
    """Engine publishing into the `published` recorder."""
    return AnalysisEngine(publish=published)


@pytest.fixture
def sample_engine(engine: AnalysisEngine) -> AnalysisEngine:
    """Engine with SAMPLE_DOCUMENT open at version 1."""
    engine.document_opened(URI, SAMPLE_DOCUMENT, 1)
    return engine
