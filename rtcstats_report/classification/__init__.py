"""
Classification package for rtcstats-report.

This module re-exports the classifier interfaces and the default rule table so
downstream code can import from `rtcstats_report.classification` directly.
"""

from rtcstats_report.classification.abstract import (
    AUDIO,
    MEDIA_KINDS,
    VIDEO,
    ClassificationRule,
    Classifier,
    RawStatRecord,
)
from rtcstats_report.classification.rules import DEFAULT_RULES, RuleClassifier, media_kind

__all__ = [
    # Abstracts
    "ClassificationRule",
    "Classifier",
    "RawStatRecord",
    # Media kinds
    "AUDIO",
    "VIDEO",
    "MEDIA_KINDS",
    # Default policy
    "DEFAULT_RULES",
    "RuleClassifier",
    "media_kind",
]
