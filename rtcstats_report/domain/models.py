"""
Domain models for normalized stats reports.

`CategorizedReport` is the value returned to callers: one (possibly empty)
list of normalized records per category, plus the diagnostics for records
that could not be classified. Normalized records themselves are plain dicts.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from rtcstats_report.domain.categories import Category
from rtcstats_report.domain.schema import SCHEMA_VERSION, all_categories

NormalizedRecord = Dict[str, Any]


class DroppedRecord(BaseModel):
    """
    Diagnostic entry for a raw record that was skipped during normalization.
    """

    id: Optional[Any] = Field(None, description="`id` of the raw record, if it had one.")
    type: Optional[Any] = Field(None, description="`type` of the raw record, if it had one.")
    reason: str = Field(..., description="Why the record could not be classified.")

    model_config = {
        "frozen": True,
    }


class CategorizedReport:
    """
    Normalized records grouped by category.

    Every registered category is always present. Lookups accept a `Category`,
    its reference key (``"RTCCodecs"``) or its short name (``"Codecs"``).

    Example
    -------
        report = normalize(snapshot)
        for stats in report.get(Category.INBOUND_RTP_VIDEO_STREAMS):
            print(stats["packetsLost"])
    """

    __slots__ = ("_groups", "_dropped")

    def __init__(
        self,
        groups: Optional[Mapping[Category, Sequence[NormalizedRecord]]] = None,
        dropped: Sequence[DroppedRecord] = (),
    ) -> None:
        supplied = {
            Category.parse(category): records for category, records in (groups or {}).items()
        }
        self._groups: Dict[Category, List[NormalizedRecord]] = {
            category: list(supplied.get(category, ())) for category in all_categories()
        }
        self._dropped: Tuple[DroppedRecord, ...] = tuple(dropped)

    # --- Lookup ---

    def get(self, category: Union[Category, str]) -> List[NormalizedRecord]:
        """Records for `category` (empty list when the snapshot had none)."""
        return self._groups[Category.parse(category)]

    def __getitem__(self, category: Union[Category, str]) -> List[NormalizedRecord]:
        return self.get(category)

    def __contains__(self, category: object) -> bool:
        try:
            return Category.parse(category) in self._groups  # type: ignore[arg-type]
        except LookupError:
            return False

    def __iter__(self) -> Iterator[Category]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def items(self) -> Iterator[Tuple[Category, List[NormalizedRecord]]]:
        return iter(self._groups.items())

    @property
    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._groups)

    # --- Diagnostics ---

    @property
    def dropped(self) -> Tuple[DroppedRecord, ...]:
        return self._dropped

    @property
    def dropped_count(self) -> int:
        return len(self._dropped)

    @property
    def total_records(self) -> int:
        """Number of normalized records across all categories."""
        return sum(len(records) for records in self._groups.values())

    def counts(self) -> Dict[Category, int]:
        return {category: len(records) for category, records in self._groups.items()}

    # --- Serialization ---

    def to_dict(self) -> Dict[str, List[NormalizedRecord]]:
        """Plain mapping of reference key to records, in canonical order."""
        return {
            category.key: [dict(record) for record in records]
            for category, records in self._groups.items()
        }

    def as_payload(self) -> Dict[str, Any]:
        """JSON-ready payload including schema version and drop diagnostics."""
        return {
            "schema_version": SCHEMA_VERSION,
            "total_records": self.total_records,
            "dropped": [entry.model_dump() for entry in self._dropped],
            "stats": self.to_dict(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategorizedReport):
            return NotImplemented
        return self._groups == other._groups and self._dropped == other._dropped

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        populated = {c.short_name: n for c, n in self.counts().items() if n}
        return (
            f"CategorizedReport(records={self.total_records}, "
            f"dropped={self.dropped_count}, populated={populated})"
        )


__all__ = ["CategorizedReport", "DroppedRecord", "NormalizedRecord"]
