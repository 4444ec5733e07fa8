from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from rtcstats_report.classification.abstract import ClassificationRule
from rtcstats_report.domain.categories import Category
from rtcstats_report.domain.schema import SCHEMA_VERSION, all_categories, schema_for


def print_results(results: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render per-snapshot summaries as rich tables.

    One table per snapshot listing every category with records, followed by
    the dropped-record diagnostics when there are any.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No snapshots to display.[/yellow]")
        return

    for res in results:
        snapshot = res.get("snapshot", "Unknown")
        if "error" in res:
            console.print(f"[red]{snapshot}: {res['error']}[/red]")
            continue

        table = Table(
            title=f"{snapshot}\n[dim]Schema {SCHEMA_VERSION}[/dim]",
            box=box.ROUNDED,
            caption=(
                f"{res.get('normalized', 0):,} normalized / {res.get('records', 0):,} raw, "
                f"{res.get('dropped', 0):,} dropped in {res.get('duration_seconds', 0.0):.4f}s"
            ),
        )
        table.add_column("Category", style="cyan", no_wrap=True)
        table.add_column("Records", justify="right", style="magenta")

        counts = res.get("counts", {})
        for category in all_categories():
            count = counts.get(category.key, 0)
            if count:
                table.add_row(category.key, f"{count:,}")
        console.print(table)

        dropped = res.get("report", {}).get("dropped", [])
        if dropped:
            print_dropped(dropped, console=console)


def print_dropped(dropped: Iterable[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """Render dropped-record diagnostics."""
    console = console or Console()
    table = Table(title="Dropped records", box=box.SIMPLE)
    table.add_column("Id", style="yellow")
    table.add_column("Type", style="yellow")
    table.add_column("Reason", style="red")
    for entry in dropped:
        table.add_row(str(entry.get("id")), str(entry.get("type")), entry.get("reason", ""))
    console.print(table)


def print_categories(console: Optional[Console] = None) -> None:
    """Render the category list with schema sizes."""
    console = console or Console()
    table = Table(title=f"Stats categories (schema {SCHEMA_VERSION})", box=box.ROUNDED)
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Short name", style="green")
    table.add_column("Fields", justify="right", style="magenta")
    for category in all_categories():
        table.add_row(category.key, category.short_name, str(len(schema_for(category))))
    console.print(table)


def print_schema(category: Category, console: Optional[Console] = None) -> None:
    """Render the ordered field whitelist of one category."""
    console = console or Console()
    table = Table(title=category.key, box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Field", style="cyan")
    for position, name in enumerate(schema_for(category), start=1):
        table.add_row(str(position), name)
    console.print(table)


def print_rules(rules: Iterable[ClassificationRule], console: Optional[Console] = None) -> None:
    """Render the type -> category classification table."""
    console = console or Console()
    table = Table(title="Classification rules", box=box.ROUNDED)
    table.add_column("type", style="cyan", no_wrap=True)
    table.add_column("kind", style="green")
    table.add_column("remoteSource", style="green")
    table.add_column("Category", style="magenta")
    for rule in rules:
        table.add_row(
            rule.stats_type,
            rule.kind or "*",
            "*" if rule.remote_source is None else str(rule.remote_source).lower(),
            rule.category.key,
        )
    console.print(table)


__all__ = ["print_categories", "print_dropped", "print_results", "print_rules", "print_schema"]
