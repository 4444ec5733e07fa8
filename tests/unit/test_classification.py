from __future__ import annotations

from typing import Any, Dict

import pytest

from rtcstats_report.classification import (
    DEFAULT_RULES,
    ClassificationRule,
    Classifier,
    RuleClassifier,
    media_kind,
)
from rtcstats_report.domain.categories import Category
from rtcstats_report.domain.errors import UnclassifiableRecord

CLASSIFICATION_TABLE = [
    ({"type": "codec"}, Category.CODECS),
    ({"type": "inbound-rtp", "kind": "audio"}, Category.INBOUND_RTP_AUDIO_STREAMS),
    ({"type": "inbound-rtp", "kind": "video"}, Category.INBOUND_RTP_VIDEO_STREAMS),
    ({"type": "outbound-rtp", "kind": "audio"}, Category.OUTBOUND_RTP_AUDIO_STREAMS),
    ({"type": "outbound-rtp", "kind": "video"}, Category.OUTBOUND_RTP_VIDEO_STREAMS),
    ({"type": "remote-inbound-rtp", "kind": "audio"}, Category.REMOTE_INBOUND_RTP_AUDIO_STREAMS),
    ({"type": "remote-inbound-rtp", "kind": "video"}, Category.REMOTE_INBOUND_RTP_VIDEO_STREAMS),
    ({"type": "remote-outbound-rtp", "kind": "audio"}, Category.REMOTE_OUTBOUND_RTP_AUDIO_STREAMS),
    ({"type": "remote-outbound-rtp", "kind": "video"}, Category.REMOTE_OUTBOUND_RTP_VIDEO_STREAMS),
    ({"type": "media-source", "kind": "audio"}, Category.AUDIO_SOURCES),
    ({"type": "media-source", "kind": "video"}, Category.VIDEO_SOURCES),
    ({"type": "csrc"}, Category.RTP_CONTRIBUTING_SOURCES),
    ({"type": "peer-connection"}, Category.PEER_CONNECTION),
    ({"type": "data-channel"}, Category.DATA_CHANNELS),
    ({"type": "stream"}, Category.MEDIA_STREAMS),
    ({"type": "sender", "kind": "audio"}, Category.AUDIO_SENDERS),
    ({"type": "sender", "kind": "video"}, Category.VIDEO_SENDERS),
    ({"type": "receiver", "kind": "audio"}, Category.AUDIO_RECEIVERS),
    ({"type": "receiver", "kind": "video"}, Category.VIDEO_RECEIVERS),
    ({"type": "track", "kind": "audio", "remoteSource": False}, Category.AUDIO_SENDERS),
    ({"type": "track", "kind": "video", "remoteSource": False}, Category.VIDEO_SENDERS),
    ({"type": "track", "kind": "audio", "remoteSource": True}, Category.AUDIO_RECEIVERS),
    ({"type": "track", "kind": "video", "remoteSource": True}, Category.VIDEO_RECEIVERS),
    ({"type": "transport"}, Category.TRANSPORTS),
    ({"type": "candidate-pair"}, Category.ICE_CANDIDATE_PAIRS),
    ({"type": "local-candidate"}, Category.LOCAL_ICE_CANDIDATES),
    ({"type": "remote-candidate"}, Category.REMOTE_ICE_CANDIDATES),
    ({"type": "certificate"}, Category.CERTIFICATES),
    ({"type": "ice-server"}, Category.STUN_SERVER_CONNECTIONS),
]


@pytest.fixture
def classifier() -> RuleClassifier:
    return RuleClassifier()


@pytest.mark.parametrize(("record", "expected"), CLASSIFICATION_TABLE)
def test_classify_maps_type_and_kind_to_category(
    classifier: RuleClassifier, record: Dict[str, Any], expected: Category
):
    assert classifier.classify({"id": "x", **record}) is expected


def test_every_category_is_reachable(classifier: RuleClassifier):
    assert classifier.categories() == list(Category)


def test_default_rules_have_no_ambiguous_rows():
    keys = [(r.stats_type, r.kind, r.remote_source) for r in DEFAULT_RULES]
    assert len(keys) == len(set(keys))


def test_inbound_rtp_kinds_never_share_a_category(classifier: RuleClassifier):
    audio = classifier.classify({"id": "a", "type": "inbound-rtp", "kind": "audio"})
    video = classifier.classify({"id": "v", "type": "inbound-rtp", "kind": "video"})
    assert audio is Category.INBOUND_RTP_AUDIO_STREAMS
    assert video is Category.INBOUND_RTP_VIDEO_STREAMS


def test_legacy_media_type_is_used_when_kind_is_missing(classifier: RuleClassifier):
    record = {"id": "legacy", "type": "outbound-rtp", "mediaType": "video"}
    assert classifier.classify(record) is Category.OUTBOUND_RTP_VIDEO_STREAMS


def test_kind_takes_precedence_over_media_type():
    assert media_kind({"kind": "audio", "mediaType": "video"}) == "audio"
    assert media_kind({"mediaType": "video"}) == "video"
    assert media_kind({}) is None


def test_kind_independent_types_ignore_kind(classifier: RuleClassifier):
    assert classifier.classify({"type": "codec", "kind": "data"}) is Category.CODECS


@pytest.mark.parametrize(
    "record",
    [
        {"id": "bogus", "type": "bogus-type"},
        {"id": "no-type"},
        {"id": "numeric-type", "type": 3},
        {"id": "no-kind", "type": "inbound-rtp"},
        {"id": "bad-kind", "type": "media-source", "kind": "data"},
        {"id": "case", "type": "sender", "kind": "Audio"},
        {"id": "no-remote-source", "type": "track", "kind": "audio"},
        {"id": "string-remote-source", "type": "track", "kind": "video", "remoteSource": "true"},
    ],
)
def test_unclassifiable_records_raise(classifier: RuleClassifier, record: Dict[str, Any]):
    with pytest.raises(UnclassifiableRecord) as excinfo:
        classifier.classify(record)
    assert excinfo.value.record_id == record["id"]
    assert excinfo.value.stats_type == record.get("type")
    assert excinfo.value.reason


def test_known_types_lists_the_wire_vocabulary(classifier: RuleClassifier):
    types = classifier.known_types()
    assert types == sorted(types)
    assert {"codec", "inbound-rtp", "candidate-pair", "track", "ice-server"} <= set(types)
    assert "bogus-type" not in types


def test_custom_rule_table():
    classifier = RuleClassifier([ClassificationRule("codec", Category.CERTIFICATES)])
    assert classifier.classify({"type": "codec"}) is Category.CERTIFICATES
    with pytest.raises(UnclassifiableRecord):
        classifier.classify({"type": "transport"})


def test_rule_classifier_satisfies_protocol(classifier: RuleClassifier):
    assert isinstance(classifier, Classifier)
