"""
Report normalizer: raw `getStats()` snapshot -> CategorizedReport.

Usage:
    from rtcstats_report.normalizer import normalize

    report = normalize(snapshot)
    recv_video = report.get("RTCInboundRtpVideoStreams")

The transform is pure and in-memory. Failures are isolated per record: a
record that cannot be classified is dropped with a diagnostic, and the rest
of the snapshot is still normalized.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from rtcstats_report.classification.abstract import Classifier, RawStatRecord
from rtcstats_report.classification.rules import RuleClassifier
from rtcstats_report.domain.categories import Category
from rtcstats_report.domain.errors import UnclassifiableRecord
from rtcstats_report.domain.models import CategorizedReport, DroppedRecord, NormalizedRecord
from rtcstats_report.domain.schema import FieldSchema, all_categories, schema_for
from rtcstats_report.utils.logging import get_logger

log = get_logger(__name__)

RawSnapshot = Union[Mapping[Any, RawStatRecord], Iterable[RawStatRecord]]


def project(record: RawStatRecord, schema: FieldSchema) -> NormalizedRecord:
    """
    Keep only the fields of `record` listed in `schema`, in schema order.

    Fields absent from the record are omitted rather than defaulted; values are
    passed through untouched.
    """
    return {field: record[field] for field in schema if field in record}


def _iter_records(snapshot: RawSnapshot) -> Iterable[Any]:
    if isinstance(snapshot, Mapping):
        return snapshot.values()
    return snapshot


class ReportNormalizer:
    """
    Classify, project and group every record of a raw stats snapshot.

    Parameters
    ----------
    classifier : Classifier | None
        Policy mapping a raw record to its category. Defaults to RuleClassifier.
    """

    def __init__(self, classifier: Optional[Classifier] = None) -> None:
        self.classifier: Classifier = classifier or RuleClassifier()

    def normalize(self, snapshot: RawSnapshot) -> CategorizedReport:
        """
        Normalize `snapshot` into a report with an entry for every category.

        Parameters
        ----------
        snapshot : Mapping | Iterable
            Raw records, either keyed by id (values are iterated) or as a plain
            iterable. Iteration order is preserved within each category.

        Returns
        -------
        CategorizedReport
            A fresh report owned by the caller.
        """
        groups: Dict[Category, List[NormalizedRecord]] = {
            category: [] for category in all_categories()
        }
        dropped: List[DroppedRecord] = []

        for record in _iter_records(snapshot):
            try:
                if not isinstance(record, Mapping):
                    raise UnclassifiableRecord(
                        f"record is a {type(record).__name__}, not a mapping"
                    )
                category = self.classifier.classify(record)
            except UnclassifiableRecord as exc:
                log.debug(
                    "Dropping unclassifiable stats record",
                    extra={
                        "record_id": exc.record_id,
                        "stats_type": exc.stats_type,
                        "reason": exc.reason,
                    },
                )
                dropped.append(
                    DroppedRecord(id=exc.record_id, type=exc.stats_type, reason=exc.reason)
                )
                continue

            groups[category].append(project(record, schema_for(category)))

        if dropped:
            log.info(
                f"Dropped {len(dropped)} unclassifiable stats record(s)",
                extra={"dropped": len(dropped)},
            )

        return CategorizedReport(groups, dropped)


_default_normalizer = ReportNormalizer()


def normalize(snapshot: RawSnapshot) -> CategorizedReport:
    """Normalize `snapshot` with the default rule-based classifier."""
    return _default_normalizer.normalize(snapshot)


__all__ = ["RawSnapshot", "ReportNormalizer", "normalize", "project"]
