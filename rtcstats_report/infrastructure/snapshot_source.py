"""
Snapshot sources: the acquisition boundary for raw `getStats()` reports.

Fetching stats from a live peer connection happens outside this package; what
arrives here is an already-materialized snapshot. `JsonFileSnapshotSource`
reads the JSON dumps that browsers and tooling produce:

- a list of record objects:            ``[{"id": ..., "type": ...}, ...]``
- an object keyed by record id:        ``{"RTCCodec_0": {...}, ...}``
- a list of ``[id, record]`` pairs:    ``JSON.stringify([...report])``
- any of the above under ``"stats"``:  ``{"stats": [...]}``
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Protocol, Union, runtime_checkable

from rtcstats_report.domain.errors import SnapshotFormatError
from rtcstats_report.utils.logging import get_logger

log = get_logger(__name__)

SnapshotRecords = List[Dict[str, Any]]


@runtime_checkable
class SnapshotSource(Protocol):
    """
    Anything that can hand over one point-in-time stats snapshot.
    """

    def load(self) -> SnapshotRecords:
        """Return the raw records of the snapshot."""
        ...


def _is_pair(item: Any) -> bool:
    return isinstance(item, list) and len(item) == 2 and isinstance(item[1], dict)


def _is_wrapper(document: Dict[str, Any]) -> bool:
    # A keyed snapshot may hold a record whose id is "stats"; records carry "type".
    wrapped = document.get("stats")
    if isinstance(wrapped, list):
        return True
    return isinstance(wrapped, dict) and "type" not in wrapped


def decode_snapshot(document: Any) -> SnapshotRecords:
    """
    Turn a decoded JSON document into a list of raw stats records.

    Entries that are not record objects are passed through so the normalizer
    reports them as dropped instead of rejecting the whole snapshot.

    Raises
    ------
    SnapshotFormatError
        If the document has none of the supported shapes.
    """
    if isinstance(document, dict) and _is_wrapper(document):
        document = document["stats"]

    if isinstance(document, dict):
        return list(document.values())

    if isinstance(document, list):
        if document and all(_is_pair(item) for item in document):
            return [item[1] for item in document]
        return list(document)

    raise SnapshotFormatError(
        f"Unsupported snapshot document of type {type(document).__name__}"
    )


class JsonFileSnapshotSource(SnapshotSource):
    """
    Read a stats snapshot from a JSON file on disk.
    """

    def __init__(self, path: Union[Path, str]) -> None:
        self.path = Path(path)

    def load(self) -> SnapshotRecords:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as exc:
            raise SnapshotFormatError(f"{self.path}: invalid JSON ({exc})") from exc
        except UnicodeDecodeError as exc:
            raise SnapshotFormatError(f"{self.path}: not UTF-8 encoded ({exc})") from exc

        records = decode_snapshot(document)
        log.debug(
            "Snapshot loaded", extra={"snapshot": str(self.path), "records": len(records)}
        )
        return records


__all__ = ["JsonFileSnapshotSource", "SnapshotRecords", "SnapshotSource", "decode_snapshot"]
