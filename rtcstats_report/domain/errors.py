"""
Error taxonomy for stats normalization.

`UnclassifiableRecord` is a data defect scoped to a single record; the
normalizer catches it, records a diagnostic and moves on. `UnknownCategory`
is a programming/versioning defect and is allowed to propagate.
"""

from __future__ import annotations

from typing import Any, Optional


class NormalizationError(Exception):
    """Base class for every error raised by this package."""


class UnclassifiableRecord(NormalizationError):
    """A raw record whose `type`/`kind` does not map to any category."""

    def __init__(
        self,
        reason: str,
        record_id: Optional[Any] = None,
        stats_type: Optional[Any] = None,
    ) -> None:
        self.reason = reason
        self.record_id = record_id
        self.stats_type = stats_type
        super().__init__(f"record id={record_id!r} type={stats_type!r}: {reason}")


class UnknownCategory(NormalizationError, LookupError):
    """Lookup of a category that is not registered in the schema table."""

    def __init__(self, category: Any) -> None:
        self.category = category
        super().__init__(f"Unknown stats category {category!r}")


class SnapshotFormatError(NormalizationError, ValueError):
    """A snapshot dump that cannot be decoded into a collection of records."""


__all__ = [
    "NormalizationError",
    "SnapshotFormatError",
    "UnclassifiableRecord",
    "UnknownCategory",
]
