"""
Rule-based classifier: the explicit `type` (+ `kind`) -> category table.

The `type` vocabulary follows the W3C webrtc-stats RTCStatsType enum, plus the
legacy ``track`` type still emitted by older browsers, where the sender/receiver
split comes from the `remoteSource` flag. Where the category space is finer
than the `type` space, the media kind decides; legacy records that only carry
`mediaType` are accepted as well.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

from rtcstats_report.classification.abstract import (
    AUDIO,
    MEDIA_KINDS,
    VIDEO,
    ClassificationRule,
    Classifier,
    RawStatRecord,
)
from rtcstats_report.domain.categories import Category
from rtcstats_report.domain.errors import UnclassifiableRecord

R = ClassificationRule

DEFAULT_RULES: Tuple[ClassificationRule, ...] = (
    R("codec", Category.CODECS),
    R("inbound-rtp", Category.INBOUND_RTP_AUDIO_STREAMS, kind=AUDIO),
    R("inbound-rtp", Category.INBOUND_RTP_VIDEO_STREAMS, kind=VIDEO),
    R("outbound-rtp", Category.OUTBOUND_RTP_AUDIO_STREAMS, kind=AUDIO),
    R("outbound-rtp", Category.OUTBOUND_RTP_VIDEO_STREAMS, kind=VIDEO),
    R("remote-inbound-rtp", Category.REMOTE_INBOUND_RTP_AUDIO_STREAMS, kind=AUDIO),
    R("remote-inbound-rtp", Category.REMOTE_INBOUND_RTP_VIDEO_STREAMS, kind=VIDEO),
    R("remote-outbound-rtp", Category.REMOTE_OUTBOUND_RTP_AUDIO_STREAMS, kind=AUDIO),
    R("remote-outbound-rtp", Category.REMOTE_OUTBOUND_RTP_VIDEO_STREAMS, kind=VIDEO),
    R("media-source", Category.AUDIO_SOURCES, kind=AUDIO),
    R("media-source", Category.VIDEO_SOURCES, kind=VIDEO),
    R("csrc", Category.RTP_CONTRIBUTING_SOURCES),
    R("peer-connection", Category.PEER_CONNECTION),
    R("data-channel", Category.DATA_CHANNELS),
    R("stream", Category.MEDIA_STREAMS),
    R("sender", Category.AUDIO_SENDERS, kind=AUDIO),
    R("sender", Category.VIDEO_SENDERS, kind=VIDEO),
    R("receiver", Category.AUDIO_RECEIVERS, kind=AUDIO),
    R("receiver", Category.VIDEO_RECEIVERS, kind=VIDEO),
    R("track", Category.AUDIO_SENDERS, kind=AUDIO, remote_source=False),
    R("track", Category.VIDEO_SENDERS, kind=VIDEO, remote_source=False),
    R("track", Category.AUDIO_RECEIVERS, kind=AUDIO, remote_source=True),
    R("track", Category.VIDEO_RECEIVERS, kind=VIDEO, remote_source=True),
    R("transport", Category.TRANSPORTS),
    R("candidate-pair", Category.ICE_CANDIDATE_PAIRS),
    R("local-candidate", Category.LOCAL_ICE_CANDIDATES),
    R("remote-candidate", Category.REMOTE_ICE_CANDIDATES),
    R("certificate", Category.CERTIFICATES),
    R("ice-server", Category.STUN_SERVER_CONNECTIONS),
)


def media_kind(record: RawStatRecord) -> Optional[Any]:
    """Media kind of `record`: `kind` when present, else legacy `mediaType`."""
    kind = record.get("kind")
    if kind is None:
        kind = record.get("mediaType")
    return kind


class RuleClassifier(Classifier):
    """
    Classify records by looking them up in a table of ClassificationRule entries.

    Rules for the same `stats_type` are tried in table order; the first whose
    discriminators match wins.
    """

    def __init__(self, rules: Iterable[ClassificationRule] = DEFAULT_RULES) -> None:
        self.rules: Tuple[ClassificationRule, ...] = tuple(rules)
        self._by_type: Dict[str, List[ClassificationRule]] = {}
        for rule in self.rules:
            self._by_type.setdefault(rule.stats_type, []).append(rule)

    def known_types(self) -> List[str]:
        """Every `type` value this classifier understands, sorted."""
        return sorted(self._by_type)

    def categories(self) -> List[Category]:
        """Categories reachable through the rule table, in canonical order."""
        reachable = {rule.category for rule in self.rules}
        return [category for category in Category if category in reachable]

    def classify(self, record: RawStatRecord) -> Category:
        record_id = record.get("id")
        stats_type = record.get("type")
        if not isinstance(stats_type, str):
            raise UnclassifiableRecord("missing or non-string 'type'", record_id, stats_type)

        candidates = self._by_type.get(stats_type)
        if not candidates:
            raise UnclassifiableRecord("unknown stats type", record_id, stats_type)

        kind = media_kind(record)
        if any(rule.needs_kind for rule in candidates) and kind not in MEDIA_KINDS:
            raise UnclassifiableRecord(
                f"type requires kind in {MEDIA_KINDS}, got {kind!r}", record_id, stats_type
            )

        remote_source = record.get("remoteSource")
        if any(rule.needs_remote_source for rule in candidates) and not isinstance(
            remote_source, bool
        ):
            raise UnclassifiableRecord(
                f"type requires a boolean 'remoteSource', got {remote_source!r}",
                record_id,
                stats_type,
            )

        for rule in candidates:
            if rule.matches(kind, remote_source):
                return rule.category

        raise UnclassifiableRecord(
            f"no rule for kind={kind!r} remoteSource={remote_source!r}", record_id, stats_type
        )


__all__ = ["DEFAULT_RULES", "RuleClassifier", "media_kind"]
