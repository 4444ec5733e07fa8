"""
Orchestrator for normalizing stats snapshot files, profiling each run, and persisting reports.

Usage (example from CLI):
    from rtcstats_report.orchestrator import RunConfig, run_normalization

    results = run_normalization(RunConfig(snapshot_paths=["dump.json"]))
    print(results[0]["counts"])

Outputs are saved to `reports/` when persistence is enabled:
- `reports/latest.json` (last run)
- `reports/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from rtcstats_report.config import get_settings
from rtcstats_report.domain.errors import SnapshotFormatError
from rtcstats_report.domain.models import CategorizedReport
from rtcstats_report.domain.schema import SCHEMA_VERSION
from rtcstats_report.infrastructure.snapshot_source import JsonFileSnapshotSource
from rtcstats_report.normalizer import ReportNormalizer
from rtcstats_report.utils.logging import get_logger
from rtcstats_report.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


@dataclass
class RunConfig:
    """
    Inputs for one orchestrated run.

    Attributes
    ----------
    snapshot_paths : sequence of path
        JSON snapshot dumps to normalize, processed in order.
    persist : bool | None
        Whether to write reports to disk. Defaults to settings.persist_reports.
    reports_dir : path | None
        Directory for JSON artifacts. Defaults to settings.reports_dir.
    """

    snapshot_paths: Sequence[Union[Path, str]] = field(default_factory=list)
    persist: Optional[bool] = None
    reports_dir: Optional[Union[Path, str]] = None


def _round_float(value: float, decimals: int = 4) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _summarize(path: Path, raw_count: int, report: CategorizedReport, stats: ProfileStats) -> dict:
    """Per-snapshot summary: record counts plus profiler stats."""
    return {
        "snapshot": str(path),
        "records": raw_count,
        "normalized": report.total_records,
        "dropped": report.dropped_count,
        "counts": {category.key: count for category, count in report.counts().items()},
        "duration_seconds": _round_float(stats.duration_seconds),
        "peak_rss_bytes": stats.peak_rss_bytes,
        "report": report.as_payload(),
    }


def _normalize_file(normalizer: ReportNormalizer, path: Path) -> dict:
    log.info(f"[SNAPSHOT START] {path}", extra={"snapshot": str(path)})
    try:
        records = JsonFileSnapshotSource(path).load()
    except (OSError, SnapshotFormatError) as exc:
        log.error(
            f"[SNAPSHOT FAILED] {path}", extra={"snapshot": str(path), "error": str(exc)}
        )
        return {"snapshot": str(path), "error": str(exc), "records": 0, "normalized": 0}

    with profile_block(str(path)) as stats:
        report = normalizer.normalize(records)

    summary = _summarize(path, len(records), report, stats)
    log.info(
        f"[SNAPSHOT DONE] {path}",
        extra={
            "snapshot": str(path),
            "records": summary["records"],
            "normalized": summary["normalized"],
            "dropped": summary["dropped"],
            "duration": summary["duration_seconds"],
        },
    )
    return summary


def _persist_results(payload: dict, reports_dir: Path) -> None:
    reports_dir.mkdir(parents=True, exist_ok=True)
    latest_path = reports_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = reports_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, default=str)

    log.info("Reports persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def run_normalization(
    config: RunConfig, normalizer: Optional[ReportNormalizer] = None
) -> List[Dict[str, Any]]:
    """
    Normalize every snapshot in `config` and optionally persist the reports.

    A snapshot that cannot be read yields a summary with an ``error`` entry;
    the remaining snapshots still run.

    Returns
    -------
    List[dict]
        One summary per snapshot, in input order.
    """
    settings = get_settings()
    persist = settings.persist_reports if config.persist is None else config.persist
    reports_dir = Path(config.reports_dir or settings.reports_dir)
    normalizer = normalizer or ReportNormalizer()

    results = [_normalize_file(normalizer, Path(p)) for p in config.snapshot_paths]

    if persist:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "schema_version": SCHEMA_VERSION,
            "results": results,
        }
        _persist_results(payload, reports_dir)

    failed = sum(1 for r in results if "error" in r)
    log.info(
        f"[ORCHESTRATOR COMPLETE] {len(results)} snapshot(s), {failed} failed",
        extra={"snapshots": len(results), "failed": failed},
    )
    return results


__all__ = ["RunConfig", "run_normalization"]
