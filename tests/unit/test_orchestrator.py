from __future__ import annotations

import json
from pathlib import Path

from rtcstats_report import orchestrator
from rtcstats_report.domain.categories import Category
from rtcstats_report.orchestrator import RunConfig, run_normalization
from rtcstats_report.utils.profiler import ProfileStats

EXPECTED_RECORDS = 19
EXPECTED_CODECS = 2


def test_run_normalization_summarizes_snapshot(snapshot_file: Path, tmp_path: Path):
    (result,) = run_normalization(
        RunConfig(snapshot_paths=[snapshot_file], persist=False, reports_dir=tmp_path / "r")
    )

    assert result["snapshot"] == str(snapshot_file)
    assert result["records"] == EXPECTED_RECORDS
    assert result["normalized"] == EXPECTED_RECORDS
    assert result["dropped"] == 0
    assert result["counts"][Category.CODECS.key] == EXPECTED_CODECS
    assert set(result["counts"]) == {c.key for c in Category}
    assert result["duration_seconds"] >= 0.0
    assert set(result["report"]["stats"]) == {c.key for c in Category}
    assert not (tmp_path / "r").exists()


def test_run_normalization_persists_latest_and_archive(snapshot_file: Path, tmp_path: Path):
    reports_dir = tmp_path / "reports"
    run_normalization(
        RunConfig(snapshot_paths=[snapshot_file], persist=True, reports_dir=reports_dir)
    )

    latest = json.loads((reports_dir / "latest.json").read_text(encoding="utf-8"))
    archives = list(reports_dir.glob("run-*.json"))

    assert len(archives) == 1
    assert latest["schema_version"]
    assert latest["results"][0]["records"] == EXPECTED_RECORDS
    assert json.loads(archives[0].read_text(encoding="utf-8")) == latest


def test_run_normalization_uses_settings_for_persistence(
    monkeypatch, snapshot_file: Path, tmp_path: Path
):
    reports_dir = tmp_path / "from-env"
    monkeypatch.setenv("PERSIST_REPORTS", "true")
    monkeypatch.setenv("REPORTS_DIR", str(reports_dir))

    run_normalization(RunConfig(snapshot_paths=[snapshot_file]))

    assert (reports_dir / "latest.json").exists()


def test_unreadable_snapshot_does_not_stop_the_run(snapshot_file: Path, tmp_path: Path):
    broken = tmp_path / "broken.json"
    broken.write_text("[", encoding="utf-8")
    missing = tmp_path / "missing.json"

    results = run_normalization(
        RunConfig(snapshot_paths=[broken, snapshot_file, missing], persist=False)
    )

    assert [("error" in r) for r in results] == [True, False, True]
    assert results[1]["normalized"] == EXPECTED_RECORDS


def test_dropped_records_are_counted(tmp_path: Path):
    path = tmp_path / "mixed.json"
    path.write_text(
        json.dumps([{"id": "c", "type": "codec"}, {"id": "b", "type": "bogus-type"}]),
        encoding="utf-8",
    )
    (result,) = run_normalization(RunConfig(snapshot_paths=[path], persist=False))

    assert result["records"] == 2
    assert result["normalized"] == 1
    assert result["dropped"] == 1
    assert result["report"]["dropped"][0]["id"] == "b"


def test_summarize_rounds_duration(snapshot_file: Path):
    from rtcstats_report.normalizer import normalize

    report = normalize(json.loads(snapshot_file.read_text(encoding="utf-8")))
    stats = ProfileStats(label="x", duration_seconds=0.123456789, peak_rss_bytes=1024)

    summary = orchestrator._summarize(snapshot_file, EXPECTED_RECORDS, report, stats)

    assert summary["duration_seconds"] == 0.1235
    assert summary["peak_rss_bytes"] == 1024


def test_non_utf8_snapshot_does_not_stop_the_run(snapshot_file: Path, tmp_path: Path):
    latin1 = tmp_path / "latin1.json"
    latin1.write_bytes(b'[{"id": "\xff", "type": "codec"}]')

    results = run_normalization(RunConfig(snapshot_paths=[latin1, snapshot_file], persist=False))

    assert "not UTF-8" in results[0]["error"]
    assert results[1]["normalized"] == EXPECTED_RECORDS


def test_keyed_snapshot_with_non_object_value_drops_only_that_entry(tmp_path: Path):
    path = tmp_path / "keyed.json"
    path.write_text(
        json.dumps({"RTCCodec_1": {"id": "RTCCodec_1", "type": "codec"}, "junk": 5}),
        encoding="utf-8",
    )
    (result,) = run_normalization(RunConfig(snapshot_paths=[path], persist=False))

    assert result["records"] == 2
    assert result["normalized"] == 1
    assert result["dropped"] == 1
    assert result["counts"][Category.CODECS.key] == 1
