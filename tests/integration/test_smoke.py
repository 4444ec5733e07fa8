"""
End-to-end smoke tests for the rtcstats-report CLI.

These tests drive the Typer app the way a user would and verify that:
1. Snapshot files on disk are normalized into categorized reports
2. Schema and classification tables can be inspected
3. Failures are reported through the exit code, not tracebacks
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Generator

import pytest
from typer.testing import CliRunner

from rtcstats_report.main import app

EXPECTED_CATEGORY_COUNT = 25
EXPECTED_RECORDS = 19


@pytest.fixture
def runner(monkeypatch) -> Generator[CliRunner, None, None]:
    """
    CLI runner with quiet logging; restores root logging after the test since
    the normalize command reconfigures it.
    """
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    root = logging.getLogger()
    previous_level, previous_handlers = root.level, root.handlers[:]
    yield CliRunner()
    root.handlers = previous_handlers
    root.setLevel(previous_level)


class TestInspectionCommands:
    """Commands that only read the static tables."""

    def test_info(self, runner: CliRunner):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0, result.output
        assert f"categories={EXPECTED_CATEGORY_COUNT}" in result.output

    def test_categories(self, runner: CliRunner):
        result = runner.invoke(app, ["categories"])
        assert result.exit_code == 0, result.output
        assert "RTCRemoteOutboundRtpAudioStreams" in result.output

    def test_schema_by_short_name(self, runner: CliRunner):
        result = runner.invoke(app, ["schema", "Codecs"])
        assert result.exit_code == 0, result.output
        assert "mimeType" in result.output

    def test_schema_unknown_category(self, runner: CliRunner):
        result = runner.invoke(app, ["schema", "Bogus"])
        assert result.exit_code != 0

    def test_rules(self, runner: CliRunner):
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0, result.output
        assert "remote-inbound-rtp" in result.output


class TestNormalizeCommand:
    """Normalization of snapshot files."""

    def test_normalize_json_output(self, runner: CliRunner, snapshot_file: Path):
        result = runner.invoke(app, ["normalize", str(snapshot_file), "--json", "--no-persist"])
        assert result.exit_code == 0, result.output

        (report,) = json.loads(result.stdout)
        assert report["total_records"] == EXPECTED_RECORDS
        assert len(report["stats"]) == EXPECTED_CATEGORY_COUNT
        (codec, _) = report["stats"]["RTCCodecs"]
        assert codec["mimeType"] == "audio/opus"

    def test_normalize_single_category(self, runner: CliRunner, snapshot_file: Path):
        args = ["normalize", str(snapshot_file), "--json", "--no-persist"]
        result = runner.invoke(app, args + ["-c", "InboundRtpVideoStreams"])
        assert result.exit_code == 0, result.output

        (entry,) = json.loads(result.stdout)
        (stats,) = entry["RTCInboundRtpVideoStreams"]
        assert stats["kind"] == "video"
        assert "mediaType" not in stats
        assert "isRemote" not in stats

    def test_normalize_table_output_and_persistence(
        self, runner: CliRunner, snapshot_file: Path, tmp_path: Path
    ):
        reports_dir = tmp_path / "reports"
        result = runner.invoke(
            app,
            ["normalize", str(snapshot_file), "--persist", "--reports-dir", str(reports_dir)],
        )
        assert result.exit_code == 0, result.output
        assert "RTCCodecs" in result.output
        assert (reports_dir / "latest.json").exists()

    def test_normalize_reports_failures_with_exit_code(self, runner: CliRunner, tmp_path: Path):
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["normalize", str(broken), "--no-persist"])
        assert result.exit_code == 1
