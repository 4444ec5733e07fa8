"""
Category schema table: the whitelist of fields each category may carry.

The table tracks one revision of the W3C "Identifiers for WebRTC's Statistics
API" dictionaries, identified by `SCHEMA_VERSION`. Entries are composed from the shared dictionary
fragments below (RTCStats, RTCRtpStreamStats, RTCReceivedRtpStreamStats, ...)
so that a field common to several dictionaries is written once. Update the
table as a unit when moving to a newer revision of the stats dictionary.

Usage:
    from rtcstats_report.domain.schema import schema_for

    schema_for(Category.CODECS)
    # ('type', 'id', 'payloadType', 'codecType', ...)
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple, Union

from rtcstats_report.domain.categories import Category
from rtcstats_report.domain.errors import UnknownCategory

# Bumped whenever the table below changes.
SCHEMA_VERSION = "1.0.0"

FieldSchema = Tuple[str, ...]

# --- Shared dictionary fragments ---

_STATS = ("timestamp", "type", "id")

_RTP_STREAM = _STATS + ("ssrc", "kind", "transportId", "codecId")

_RECEIVED_RTP_STREAM = _RTP_STREAM + (
    "packetsReceived",
    "packetsLost",
    "jitter",
    "packetsDiscarded",
    "packetsRepaired",
    "burstPacketsLost",
    "burstPacketsDiscarded",
    "burstLossCount",
    "burstDiscardCount",
    "burstLossRate",
    "burstDiscardRate",
    "gapLossRate",
    "gapDiscardRate",
)

_SENT_RTP_STREAM = _RTP_STREAM + (
    "packetsSent",
    "packetsDiscardedOnSend",
    "fecPacketsSent",
    "bytesSent",
    "bytesDiscardedOnSend",
)

_INBOUND_RTP_COMMON = (
    "trackId",
    "receiverId",
    "remoteId",
)

_INBOUND_RTP_TRANSPORT = (
    "lastPacketReceivedTimestamp",
    "averageRtcpInterval",
    "fecPacketsReceived",
    "bytesReceived",
    "packetsFailedDecryption",
    "packetsDuplicated",
    "perDscpPacketsReceived",
)

_OUTBOUND_RTP_COMMON = (
    "trackId",
    "mediaSourceId",
    "senderId",
    "remoteId",
    "lastPacketSentTimestamp",
    "retransmittedPacketsSent",
    "retransmittedBytesSent",
)

_OUTBOUND_RTP_QUALITY = (
    "averageRtcpInterval",
    "qualityLimitationReason",
    "qualityLimitationDurations",
    "perDscpPacketsSent",
)

_REMOTE_INBOUND_RTP_STREAM = _RECEIVED_RTP_STREAM + ("localId", "roundTripTime", "fractionLost")

_REMOTE_OUTBOUND_RTP_STREAM = _SENT_RTP_STREAM + ("localId", "remoteTimestamp")

_MEDIA_SOURCE = _STATS + ("trackIdentifier", "kind")

_MEDIA_HANDLER = _STATS + ("trackIdentifier", "remoteSource", "ended", "kind", "priority")

_VIDEO_HANDLER = _MEDIA_HANDLER + ("frameWidth", "frameHeight", "framesPerSecond")

_AUDIO_HANDLER = _MEDIA_HANDLER + (
    "audioLevel",
    "totalAudioEnergy",
    "voiceActivityFlag",
    "totalSamplesDuration",
)

_RECEIVER_PLAYOUT = ("estimatedPlayoutTimestamp", "jitterBufferDelay", "jitterBufferEmittedCount")


_SCHEMAS: Dict[Category, FieldSchema] = {
    # RTCCodecStats carries no timestamp in the reference table.
    Category.CODECS: (
        "type",
        "id",
        "payloadType",
        "codecType",
        "transportId",
        "mimeType",
        "clockRate",
        "channels",
        "sdpFmtpLine",
        "implementation",
    ),
    Category.INBOUND_RTP_VIDEO_STREAMS: _RECEIVED_RTP_STREAM
    + _INBOUND_RTP_COMMON
    + ("framesDecoded", "qpSum")
    + _INBOUND_RTP_TRANSPORT
    + ("firCount", "pliCount", "nackCount", "sliCount"),
    Category.INBOUND_RTP_AUDIO_STREAMS: _RECEIVED_RTP_STREAM
    + _INBOUND_RTP_COMMON
    + _INBOUND_RTP_TRANSPORT,
    Category.OUTBOUND_RTP_VIDEO_STREAMS: _SENT_RTP_STREAM
    + _OUTBOUND_RTP_COMMON
    + (
        "targetBitrate",
        "totalEncodedBytesTarget",
        "framesEncoded",
        "qpSum",
        "totalEncodeTime",
        "totalPacketSendDelay",
    )
    + _OUTBOUND_RTP_QUALITY
    + ("nackCount", "firCount", "pliCount", "sliCount"),
    Category.OUTBOUND_RTP_AUDIO_STREAMS: _SENT_RTP_STREAM
    + _OUTBOUND_RTP_COMMON
    + ("totalEncodedBytesTarget", "totalPacketSendDelay")
    + _OUTBOUND_RTP_QUALITY,
    Category.REMOTE_INBOUND_RTP_VIDEO_STREAMS: _REMOTE_INBOUND_RTP_STREAM,
    Category.REMOTE_INBOUND_RTP_AUDIO_STREAMS: _REMOTE_INBOUND_RTP_STREAM,
    Category.REMOTE_OUTBOUND_RTP_VIDEO_STREAMS: _REMOTE_OUTBOUND_RTP_STREAM,
    Category.REMOTE_OUTBOUND_RTP_AUDIO_STREAMS: _REMOTE_OUTBOUND_RTP_STREAM,
    Category.VIDEO_SOURCES: _MEDIA_SOURCE + ("width", "height", "frames", "framesPerSecond"),
    Category.AUDIO_SOURCES: _MEDIA_SOURCE,
    Category.RTP_CONTRIBUTING_SOURCES: _STATS
    + ("contributorSsrc", "inboundRtpStreamId", "packetsContributedTo", "audioLevel"),
    Category.PEER_CONNECTION: _STATS
    + (
        "dataChannelsOpened",
        "dataChannelsClosed",
        "dataChannelsRequested",
        "dataChannelsAccepted",
    ),
    Category.DATA_CHANNELS: _STATS
    + (
        "label",
        "protocol",
        "dataChannelIdentifier",
        "transportId",
        "state",
        "messagesSent",
        "bytesSent",
        "messagesReceived",
        "bytesReceived",
    ),
    Category.MEDIA_STREAMS: _STATS + ("streamIdentifier", "trackIds"),
    Category.VIDEO_SENDERS: _VIDEO_HANDLER
    + ("mediaSourceId", "framesCaptured", "framesSent", "hugeFramesSent", "keyFramesSent"),
    Category.AUDIO_SENDERS: _AUDIO_HANDLER
    + ("mediaSourceId", "echoReturnLoss", "echoReturnLossEnhancement", "totalSamplesSent"),
    Category.VIDEO_RECEIVERS: _VIDEO_HANDLER
    + _RECEIVER_PLAYOUT
    + (
        "framesReceived",
        "keyFramesReceived",
        "framesDecoded",
        "framesDropped",
        "partialFramesLost",
        "fullFramesLost",
    ),
    Category.AUDIO_RECEIVERS: _AUDIO_HANDLER
    + _RECEIVER_PLAYOUT
    + (
        "totalSamplesReceived",
        "concealedSamples",
        "silentConcealedSamples",
        "concealmentEvents",
        "insertedSamplesForDeceleration",
        "removedSamplesForAcceleration",
    ),
    Category.TRANSPORTS: _STATS
    + (
        "packetsSent",
        "packetsReceived",
        "bytesSent",
        "bytesReceived",
        "rtcpTransportStatsId",
        "iceRole",
        "dtlsState",
        "selectedCandidatePairId",
        "localCertificateId",
        "remoteCertificateId",
        "tlsVersion",
        "dtlsCipher",
        "srtpCipher",
        "tlsGroup",
    ),
    Category.ICE_CANDIDATE_PAIRS: _STATS
    + (
        "transportId",
        "localCandidateId",
        "remoteCandidateId",
        "state",
        "nominated",
        "packetsSent",
        "packetsReceived",
        "bytesSent",
        "bytesReceived",
        "lastPacketSentTimestamp",
        "lastPacketReceivedTimestamp",
        "firstRequestTimestamp",
        "lastRequestTimestamp",
        "lastResponseTimestamp",
        "totalRoundTripTime",
        "currentRoundTripTime",
        "availableOutgoingBitrate",
        "availableIncomingBitrate",
        "circuitBreakerTriggerCount",
        "requestsReceived",
        "requestsSent",
        "responsesReceived",
        "responsesSent",
        "retransmissionsReceived",
        "retransmissionsSent",
        "consentRequestsSent",
        "consentExpiredTimestamp",
    ),
    Category.LOCAL_ICE_CANDIDATES: _STATS
    + (
        "transportId",
        "networkType",
        "address",
        "port",
        "protocol",
        "candidateType",
        "priority",
        "url",
        "relayProtocol",
        "deleted",
    ),
    Category.REMOTE_ICE_CANDIDATES: _STATS
    + ("transportId", "address", "port", "protocol", "candidateType", "priority"),
    Category.CERTIFICATES: _STATS
    + ("fingerprint", "fingerprintAlgorithm", "base64Certificate", "issuerCertificateId"),
    Category.STUN_SERVER_CONNECTIONS: _STATS
    + (
        "url",
        "port",
        "protocol",
        "networkType",
        "totalRequestsSent",
        "totalResponsesReceived",
        "totalRoundTripTime",
    ),
}

SCHEMAS: Mapping[Category, FieldSchema] = MappingProxyType(_SCHEMAS)

_FIELD_SETS: Mapping[Category, FrozenSet[str]] = MappingProxyType(
    {category: frozenset(fields) for category, fields in _SCHEMAS.items()}
)


def schema_for(category: Union[Category, str]) -> FieldSchema:
    """
    Return the ordered field whitelist for `category`.

    Raises
    ------
    UnknownCategory
        If `category` is not registered in the table.
    """
    resolved = Category.parse(category)
    try:
        return SCHEMAS[resolved]
    except KeyError:
        raise UnknownCategory(category) from None


def all_categories() -> Tuple[Category, ...]:
    """Every registered category, in canonical order."""
    return tuple(category for category in Category if category in SCHEMAS)


def is_field_allowed(category: Union[Category, str], field: str) -> bool:
    """Whether `field` is part of the whitelist for `category`."""
    resolved = Category.parse(category)
    schema_for(resolved)
    return field in _FIELD_SETS[resolved]


__all__ = [
    "SCHEMAS",
    "SCHEMA_VERSION",
    "FieldSchema",
    "all_categories",
    "is_field_allowed",
    "schema_for",
]
