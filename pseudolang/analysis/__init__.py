"""
Text analysis for pseudo documents.

This package holds the line-local analysis used by the engine:
- context: cursor context classification from the line prefix
- completion: catalog-driven completion candidates
- scanner: structural diagnostics over full document text
"""

from .completion import candidates_for, complete, resolve
from .context import CompletionContext, classify, line_prefix
from .scanner import scan

__all__ = [
    "CompletionContext",
    "candidates_for",
    "classify",
    "complete",
    "line_prefix",
    "resolve",
    "scan",
]
