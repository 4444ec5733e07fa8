"""
Closed set of stats categories.

Member values are the reference keys used by the upstream stats wrapper
(`"RTCCodecs"`, `"RTCInboundRtpVideoStreams"`, ...). Declaration order is the
canonical order for report iteration and serialization.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from rtcstats_report.domain.errors import UnknownCategory

_KEY_PREFIX = "RTC"


class Category(str, Enum):
    CODECS = "RTCCodecs"
    INBOUND_RTP_VIDEO_STREAMS = "RTCInboundRtpVideoStreams"
    INBOUND_RTP_AUDIO_STREAMS = "RTCInboundRtpAudioStreams"
    OUTBOUND_RTP_VIDEO_STREAMS = "RTCOutboundRtpVideoStreams"
    OUTBOUND_RTP_AUDIO_STREAMS = "RTCOutboundRtpAudioStreams"
    REMOTE_INBOUND_RTP_VIDEO_STREAMS = "RTCRemoteInboundRtpVideoStreams"
    REMOTE_INBOUND_RTP_AUDIO_STREAMS = "RTCRemoteInboundRtpAudioStreams"
    REMOTE_OUTBOUND_RTP_VIDEO_STREAMS = "RTCRemoteOutboundRtpVideoStreams"
    REMOTE_OUTBOUND_RTP_AUDIO_STREAMS = "RTCRemoteOutboundRtpAudioStreams"
    VIDEO_SOURCES = "RTCVideoSources"
    AUDIO_SOURCES = "RTCAudioSources"
    RTP_CONTRIBUTING_SOURCES = "RTCRtpContributingSources"
    PEER_CONNECTION = "RTCPeerConnection"
    DATA_CHANNELS = "RTCDataChannels"
    MEDIA_STREAMS = "RTCMediaStreams"
    VIDEO_SENDERS = "RTCVideoSenders"
    AUDIO_SENDERS = "RTCAudioSenders"
    VIDEO_RECEIVERS = "RTCVideoReceivers"
    AUDIO_RECEIVERS = "RTCAudioReceivers"
    TRANSPORTS = "RTCTransports"
    ICE_CANDIDATE_PAIRS = "RTCIceCandidatePairs"
    LOCAL_ICE_CANDIDATES = "RTCLocalIceCandidates"
    REMOTE_ICE_CANDIDATES = "RTCRemoteIceCandidates"
    CERTIFICATES = "RTCCertificates"
    STUN_SERVER_CONNECTIONS = "RTCStunServerConnections"

    @property
    def key(self) -> str:
        """Reference key, e.g. ``RTCCodecs``."""
        return self.value

    @property
    def short_name(self) -> str:
        """Key without the ``RTC`` prefix, e.g. ``Codecs``."""
        return self.value[len(_KEY_PREFIX):]

    @classmethod
    def parse(cls, value: Union["Category", str]) -> "Category":
        """
        Resolve a Category from a member, a reference key or a short name.

        Raises
        ------
        UnknownCategory
            If `value` names no registered category.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
            try:
                return cls(_KEY_PREFIX + value)
            except ValueError:
                pass
        raise UnknownCategory(value)

    def __str__(self) -> str:
        return self.value


__all__ = ["Category"]
