"""Check command implementation."""

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ..config import Config
from ..engine import AnalysisEngine
from ..models import Diagnostic, Severity
from ..watcher import path_uri, run_watch_loop, sync_file

FAIL_LEVELS = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
}

SEVERITY_STYLES = {
    Severity.ERROR: ("ERROR", "bold red"),
    Severity.WARNING: ("WARN", "yellow"),
    Severity.INFORMATION: ("INFO", "dim"),
    Severity.HINT: ("HINT", "dim"),
}


def collect_files(paths: list[Path], extensions: list[str]) -> list[Path]:
    """Expand directories into the pseudo files they contain."""
    suffixes = {e.lower() for e in extensions}
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(p for p in sorted(path.rglob("*")) if p.is_file() and p.suffix.lower() in suffixes)
        else:
            files.append(path)
    return files


def run_check(
    paths: list[Path],
    config: Config | None = None,
    fail_on: str = "warning",
    output_json: bool = False,
    watch: bool = False,
) -> int:
    """Scan pseudo files for structural problems.

    Args:
        paths: Files or directories to scan
        config: Resolved settings (extensions, duplicate policy)
        fail_on: Exit with error if this level or higher found ("error" or "warning")
        output_json: Output results as JSON instead of human-readable
        watch: Keep running and rescan files as they change

    Returns:
        Exit code (0 = success, 1 = failures found)
    """
    config = config or Config()
    console = Console(stderr=True)

    published: dict[str, list[Diagnostic]] = {}

    def publish(uri: str, diagnostics: list[Diagnostic]) -> None:
        published[uri] = diagnostics
        if watch:
            _print_file(console, uri, diagnostics)

    engine = AnalysisEngine.from_config(config, publish=publish)

    files = collect_files(paths, config.extensions)
    missing = [f for f in files if not f.is_file()]
    for f in missing:
        console.print(f"Not a file: {f}", style="bold red")

    for f in files:
        if f.is_file():
            sync_file(engine, f)

    if watch:
        console.print(f"[bold]Watching[/bold] {', '.join(str(p) for p in paths)}")
        console.print("[dim]Press Ctrl+C to stop watching[/dim]")
        run_watch_loop(engine, paths, config.extensions)
        return 0

    results = {str(f): published.get(path_uri(f), []) for f in files if f.is_file()}

    if output_json:
        _output_json(results)
    else:
        _print_human_output(console, results)

    threshold = FAIL_LEVELS[fail_on]
    failed = any(d.severity <= threshold for diagnostics in results.values() for d in diagnostics)
    return 1 if failed or missing else 0


def _output_json(results: dict[str, list[Diagnostic]]) -> None:
    output = {
        "files": {path: [d.to_dict() for d in diagnostics] for path, diagnostics in results.items()},
        "summary": _count(results),
    }
    print(json.dumps(output, indent=2))


def _count(results: dict[str, list[Diagnostic]]) -> dict[str, int]:
    counts = {"files": len(results), "errors": 0, "warnings": 0, "info": 0}
    for diagnostics in results.values():
        for d in diagnostics:
            if d.severity == Severity.ERROR:
                counts["errors"] += 1
            elif d.severity == Severity.WARNING:
                counts["warnings"] += 1
            else:
                counts["info"] += 1
    return counts


def _print_file(console: Console, ref: str, diagnostics: list[Diagnostic]) -> None:
    for d in diagnostics:
        prefix, style = SEVERITY_STYLES[d.severity]
        location = f"{ref}:{d.range.start.line + 1}:{d.range.start.character + 1}"
        console.print(f"{prefix}: {location} - {d.message}", style=style, highlight=False, markup=False, soft_wrap=True)


def _print_human_output(console: Console, results: dict[str, list[Diagnostic]]) -> None:
    """Print human-readable check output."""
    for path, diagnostics in results.items():
        _print_file(console, path, diagnostics)

    counts = _count(results)
    console.print()

    table = Table(title="Check Summary", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    table.add_row("Files", str(counts["files"]))
    table.add_row("Errors", str(counts["errors"]))
    table.add_row("Warnings", str(counts["warnings"]))
    console.print(table)

    console.print()
    if counts["errors"] > 0:
        console.print(f"❌ {counts['errors']} error(s)", style="bold red")
    if counts["warnings"] > 0:
        console.print(f"⚠️  {counts['warnings']} warning(s)", style="yellow")
    if counts["errors"] == 0 and counts["warnings"] == 0:
        console.print("✓ No issues found", style="bold green")
