"""
Classifier interfaces and the rule contract for mapping raw stats records to categories.

Concrete classifiers should implement the Classifier protocol and raise
UnclassifiableRecord for records they cannot place, so the normalizer can skip
them without aborting the rest of the snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from rtcstats_report.domain.categories import Category

RawStatRecord = Mapping[str, Any]

AUDIO = "audio"
VIDEO = "video"
MEDIA_KINDS = (AUDIO, VIDEO)


@dataclass(frozen=True)
class ClassificationRule:
    """
    One row of the type -> category table.

    Attributes
    ----------
    stats_type : str
        Value of the record's `type` member (e.g. ``"inbound-rtp"``).
    category : Category
        Category assigned when the rule matches.
    kind : str | None
        Required media kind (``"audio"``/``"video"``); None matches any record.
    remote_source : bool | None
        Required `remoteSource` flag (legacy ``track`` stats); None matches any record.
    """

    stats_type: str
    category: Category
    kind: Optional[str] = None
    remote_source: Optional[bool] = None

    @property
    def needs_kind(self) -> bool:
        return self.kind is not None

    @property
    def needs_remote_source(self) -> bool:
        return self.remote_source is not None

    def matches(self, kind: Optional[str], remote_source: Optional[bool]) -> bool:
        if self.kind is not None and kind != self.kind:
            return False
        if self.remote_source is not None and remote_source is not self.remote_source:
            return False
        return True


@runtime_checkable
class Classifier(Protocol):
    """
    Common interface for record classifiers.
    """

    def classify(self, record: RawStatRecord) -> Category:
        """
        Return the category for `record`.

        Raises
        ------
        UnclassifiableRecord
            If the record cannot be placed in any category.
        """
        ...


__all__ = [
    "AUDIO",
    "VIDEO",
    "MEDIA_KINDS",
    "ClassificationRule",
    "Classifier",
    "RawStatRecord",
]
