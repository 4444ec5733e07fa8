"""
Domain package for rtcstats-report.

Exports the category enumeration, the schema table, the report model and the
error taxonomy. Keep this package focused on data definitions; classification
and normalization live one level up.
"""

from rtcstats_report.domain.categories import Category
from rtcstats_report.domain.errors import (
    NormalizationError,
    SnapshotFormatError,
    UnclassifiableRecord,
    UnknownCategory,
)
from rtcstats_report.domain.models import CategorizedReport, DroppedRecord, NormalizedRecord
from rtcstats_report.domain.schema import (
    SCHEMA_VERSION,
    SCHEMAS,
    all_categories,
    is_field_allowed,
    schema_for,
)

__all__ = [
    "Category",
    "CategorizedReport",
    "DroppedRecord",
    "NormalizedRecord",
    "NormalizationError",
    "SnapshotFormatError",
    "UnclassifiableRecord",
    "UnknownCategory",
    "SCHEMA_VERSION",
    "SCHEMAS",
    "all_categories",
    "is_field_allowed",
    "schema_for",
]
