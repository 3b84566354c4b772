"""Keywords command - print the keyword catalog."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ..keywords import CATEGORY_ORDER, as_json, catalog


def run_keywords(category: str | None = None, output_json: bool = False) -> int:
    """Print the catalog, or a single category of it.

    Returns:
        Exit code (0 = success, 1 = unknown category)
    """
    data = catalog()
    if category is not None and category not in data:
        console = Console(stderr=True)
        console.print(f"Unknown category: {category}", style="bold red")
        console.print(f"Available: {', '.join(CATEGORY_ORDER)}", style="dim")
        return 1

    if output_json:
        print(as_json(category))
        return 0

    if category is not None:
        data = {category: data[category]}

    table = Table(title="Keyword Catalog")
    table.add_column("Category", style="cyan")
    table.add_column("Keywords")
    for name, keywords in data.items():
        table.add_row(name, ", ".join(keywords))
    Console().print(table)
    return 0
