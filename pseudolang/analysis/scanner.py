"""
Structural diagnostics for pseudo documents.

Runs line by line over the full text on every pass:
- lines shaped like a declaration header (`<keyword> <name>:`) are checked
- a multi-word name that is not quoted yields a warning on the name
- every other line is ignored

The scanner is stateless; callers replace the previously published set
with whatever a pass returns.
"""

from __future__ import annotations

import re

from ..documents import index_to_utf16
from ..keywords import keywords_for
from ..models import Diagnostic, Position, Range, Severity

UNQUOTED_NAME_RULE = "unquoted-name"


def _declaration_header_pattern() -> re.Pattern[str]:
    alternation = "|".join(re.escape(keyword) for keyword in keywords_for("declarations"))
    return re.compile(rf"^\s*({alternation})\s+([^:]+):\s*$")


DECLARATION_HEADER = _declaration_header_pattern()


def check_line(line: str, line_number: int) -> Diagnostic | None:
    """Return the naming diagnostic for one line, if any."""
    match = DECLARATION_HEADER.match(line)
    if not match:
        return None

    keyword, name = match.group(1), match.group(2)
    if " " not in name or name.startswith('"'):
        return None

    start = index_to_utf16(line, match.start(2))
    end = index_to_utf16(line, match.end(2))
    return Diagnostic(
        severity=Severity.WARNING,
        range=Range(
            start=Position(line=line_number, character=start),
            end=Position(line=line_number, character=end),
        ),
        message=f'Multi-word {keyword} names should be quoted: "{name}"',
        code=UNQUOTED_NAME_RULE,
    )


def scan(text: str) -> list[Diagnostic]:
    """Scan a whole document and return every diagnostic found."""
    diagnostics = []
    for line_number, line in enumerate(text.split("\n")):
        diagnostic = check_line(line, line_number)
        if diagnostic is not None:
            diagnostics.append(diagnostic)
    return diagnostics
