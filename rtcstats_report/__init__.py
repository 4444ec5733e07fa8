"""
rtcstats-report - categorized, schema-filtered WebRTC stats reports.

Takes the raw snapshot returned by a peer connection's `getStats()` and turns
it into a stable report:

- every record is classified by its `type` (and media `kind`) into one of a
  fixed set of categories
- every record is projected onto its category's field whitelist
- every category is always present in the result, possibly empty

Usage:
    from rtcstats_report import Category, normalize

    report = normalize(snapshot)
    for stats in report.get(Category.INBOUND_RTP_VIDEO_STREAMS):
        print(stats["packetsLost"])
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from rtcstats_report.classification import (
    ClassificationRule,
    Classifier,
    RuleClassifier,
)
from rtcstats_report.config import Settings, get_settings
from rtcstats_report.domain import (
    SCHEMA_VERSION,
    CategorizedReport,
    Category,
    DroppedRecord,
    NormalizationError,
    SnapshotFormatError,
    UnclassifiableRecord,
    UnknownCategory,
    all_categories,
    schema_for,
)
from rtcstats_report.normalizer import ReportNormalizer, normalize, project
from rtcstats_report.orchestrator import RunConfig, run_normalization
from rtcstats_report.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Schema table
    "Category",
    "SCHEMA_VERSION",
    "all_categories",
    "schema_for",
    # Classification
    "ClassificationRule",
    "Classifier",
    "RuleClassifier",
    # Normalization
    "CategorizedReport",
    "DroppedRecord",
    "ReportNormalizer",
    "normalize",
    "project",
    # Orchestration
    "RunConfig",
    "run_normalization",
    # Errors
    "NormalizationError",
    "SnapshotFormatError",
    "UnclassifiableRecord",
    "UnknownCategory",
    # Logging
    "configure_logging",
    "get_logger",
]
