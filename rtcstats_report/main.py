from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List, Optional

import typer

from rtcstats_report.classification.rules import DEFAULT_RULES
from rtcstats_report.config import get_settings
from rtcstats_report.domain.categories import Category
from rtcstats_report.domain.errors import UnknownCategory
from rtcstats_report.domain.schema import SCHEMA_VERSION, all_categories
from rtcstats_report.orchestrator import RunConfig, run_normalization
from rtcstats_report.reporter import print_categories, print_results, print_rules, print_schema
from rtcstats_report.utils.logging import configure_logging

app = typer.Typer(help="Normalize WebRTC getStats() snapshots into categorized reports.")


def _parse_category(value: str) -> Category:
    try:
        return Category.parse(value)
    except UnknownCategory as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"schema={SCHEMA_VERSION} categories={len(all_categories())} | "
        f"env={settings.app_env} log_level={settings.log_level} json_logs={settings.log_json} | "
        f"reports_dir={settings.reports_dir} persist={settings.persist_reports}"
    )


@app.command()
def categories() -> None:
    """
    List every stats category and the size of its field whitelist.
    """
    print_categories()


@app.command()
def schema(
    category: str = typer.Argument(..., help="Category key (RTCCodecs) or short name (Codecs)."),
) -> None:
    """
    Show the ordered field whitelist of one category.
    """
    print_schema(_parse_category(category))


@app.command("rules")
def rules() -> None:
    """
    Show the type/kind -> category classification table.
    """
    print_rules(DEFAULT_RULES)


@app.command()
def normalize(
    snapshots: List[Path] = typer.Argument(..., help="JSON getStats() dumps to normalize."),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print normalized reports as JSON instead of summary tables.",
    ),
    category: Optional[str] = typer.Option(
        None,
        "--category",
        "-c",
        help="With --json, only print records of this category.",
    ),
    persist: Optional[bool] = typer.Option(
        None,
        "--persist/--no-persist",
        help="Write reports to the reports directory (default from settings).",
    ),
    reports_dir: Optional[Path] = typer.Option(
        None,
        "--reports-dir",
        help="Override the reports directory (default from settings).",
    ),
) -> None:
    """
    Normalize one or more snapshot files and print the categorized reports.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    selected = _parse_category(category) if category else None

    results = run_normalization(
        RunConfig(snapshot_paths=snapshots, persist=persist, reports_dir=reports_dir)
    )

    if as_json:
        if selected is not None:
            output = [
                {"snapshot": r["snapshot"], selected.key: r["report"]["stats"][selected.key]}
                for r in results
                if "report" in r
            ]
        else:
            output = [r.get("report", {"error": r.get("error")}) for r in results]
        typer.echo(json.dumps(output, indent=2, default=str))
    else:
        print_results(results)

    if any("error" in r for r in results):
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
