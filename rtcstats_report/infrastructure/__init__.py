"""
Infrastructure package for rtcstats-report.

Centralizes snapshot acquisition concerns (reading stats dumps from disk).
Keep this layer focused on I/O, decoupled from classification and
normalization logic.
"""

from rtcstats_report.infrastructure.snapshot_source import (
    JsonFileSnapshotSource,
    SnapshotRecords,
    SnapshotSource,
    decode_snapshot,
)

__all__ = [
    "JsonFileSnapshotSource",
    "SnapshotRecords",
    "SnapshotSource",
    "decode_snapshot",
]
