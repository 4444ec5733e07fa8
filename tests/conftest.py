"""
Pytest configuration for rtcstats-report.

Provides fixtures for:
- Synthetic getStats() snapshots (in memory and on disk)
- Settings cache isolation between tests
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Generator, List

import pytest

from rtcstats_report.config import get_settings
from rtcstats_report.normalizer import ReportNormalizer
from scripts.generate_snapshot import build_snapshot


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """
    Drop the cached Settings so env overrides in one test don't leak into the next.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def normalizer() -> ReportNormalizer:
    return ReportNormalizer()


@pytest.fixture
def sample_snapshot() -> List[Dict[str, Any]]:
    """
    Deterministic snapshot of one audio/video call (19 records).
    """
    return build_snapshot(seed=123)


@pytest.fixture
def codec_record() -> Dict[str, Any]:
    return {
        "id": "RTCCodec_0_Inbound_111",
        "type": "codec",
        "timestamp": 1_600_000_000_000.0,
        "payloadType": 111,
        "transportId": "RTCTransport_0_1",
        "mimeType": "audio/opus",
        "clockRate": 48_000,
        "channels": 2,
        "sdpFmtpLine": "minptime=10;useinbandfec=1",
        "experimentalFoo": 42,
    }


@pytest.fixture
def snapshot_file(tmp_path: Path, sample_snapshot: List[Dict[str, Any]]) -> Path:
    """
    Sample snapshot written to disk as a plain list of records.
    """
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(sample_snapshot), encoding="utf-8")
    return path
