"""
Sample snapshot generator for rtcstats-report.

Builds a deterministic pseudo-random `getStats()` dump for one peer connection
with audio and video flowing both ways, and writes it as JSON. Useful for
demos (`rtcstats-report normalize`) and for tests.
"""

from __future__ import annotations

import json
import random
import sys
import time
from pathlib import Path
from typing import Any, Dict, List

import typer

app = typer.Typer(help="Generate a synthetic WebRTC getStats() snapshot as JSON.")


def _rtp_pair(rng: random.Random, kind: str, ts: float, codec_id: str) -> List[Dict[str, Any]]:
    """Local inbound/outbound RTP stats for one media kind plus their remote counterparts."""
    in_ssrc, out_ssrc = rng.randint(1, 2**32 - 1), rng.randint(1, 2**32 - 1)
    suffix = kind.capitalize()
    inbound = {
        "id": f"RTCInboundRTP{suffix}Stream_{in_ssrc}",
        "type": "inbound-rtp",
        "timestamp": ts,
        "ssrc": in_ssrc,
        "kind": kind,
        "mediaType": kind,
        "transportId": "RTCTransport_0_1",
        "codecId": codec_id,
        "packetsReceived": rng.randint(1_000, 50_000),
        "packetsLost": rng.randint(0, 100),
        "jitter": round(rng.uniform(0, 0.05), 4),
        "bytesReceived": rng.randint(100_000, 5_000_000),
        "trackId": f"RTCMediaStreamTrack_receiver_{kind}",
        "remoteId": f"RTCRemoteOutboundRTP{suffix}Stream_{in_ssrc}",
        "isRemote": False,
    }
    outbound = {
        "id": f"RTCOutboundRTP{suffix}Stream_{out_ssrc}",
        "type": "outbound-rtp",
        "timestamp": ts,
        "ssrc": out_ssrc,
        "kind": kind,
        "transportId": "RTCTransport_0_1",
        "codecId": codec_id,
        "packetsSent": rng.randint(1_000, 50_000),
        "bytesSent": rng.randint(100_000, 5_000_000),
        "mediaSourceId": f"RTC{suffix}Source_1",
        "remoteId": f"RTCRemoteInboundRtp{suffix}Stream_{out_ssrc}",
        "retransmittedPacketsSent": rng.randint(0, 50),
        "headerBytesSent": rng.randint(10_000, 100_000),
    }
    if kind == "video":
        inbound.update(framesDecoded=rng.randint(100, 3_000), qpSum=rng.randint(1_000, 90_000))
        outbound.update(
            framesEncoded=rng.randint(100, 3_000),
            qualityLimitationReason=rng.choice(["none", "bandwidth", "cpu"]),
            frameWidth=640,
        )
    remote_inbound = {
        "id": f"RTCRemoteInboundRtp{suffix}Stream_{out_ssrc}",
        "type": "remote-inbound-rtp",
        "timestamp": ts,
        "ssrc": out_ssrc,
        "kind": kind,
        "transportId": "RTCTransport_0_1",
        "codecId": codec_id,
        "packetsLost": rng.randint(0, 20),
        "jitter": round(rng.uniform(0, 0.05), 4),
        "localId": outbound["id"],
        "roundTripTime": round(rng.uniform(0.01, 0.3), 3),
        "fractionLost": 0,
    }
    remote_outbound = {
        "id": inbound["remoteId"],
        "type": "remote-outbound-rtp",
        "timestamp": ts,
        "ssrc": in_ssrc,
        "kind": kind,
        "transportId": "RTCTransport_0_1",
        "codecId": codec_id,
        "packetsSent": inbound["packetsReceived"] + inbound["packetsLost"],
        "bytesSent": inbound["bytesReceived"],
        "localId": inbound["id"],
        "remoteTimestamp": ts - rng.uniform(0, 500),
    }
    return [inbound, outbound, remote_inbound, remote_outbound]


def build_snapshot(seed: int = 42, timestamp: float | None = None) -> List[Dict[str, Any]]:
    """Return a list of raw stats records describing one audio/video call."""
    rng = random.Random(seed)
    ts = timestamp if timestamp is not None else 1_600_000_000_000.0

    records: List[Dict[str, Any]] = [
        {
            "id": "RTCCodec_audio_111",
            "type": "codec",
            "timestamp": ts,
            "payloadType": 111,
            "transportId": "RTCTransport_0_1",
            "mimeType": "audio/opus",
            "clockRate": 48_000,
            "channels": 2,
            "sdpFmtpLine": "minptime=10;useinbandfec=1",
        },
        {
            "id": "RTCCodec_video_96",
            "type": "codec",
            "timestamp": ts,
            "payloadType": 96,
            "transportId": "RTCTransport_0_1",
            "mimeType": "video/VP8",
            "clockRate": 90_000,
        },
    ]
    records += _rtp_pair(rng, "audio", ts, "RTCCodec_audio_111")
    records += _rtp_pair(rng, "video", ts, "RTCCodec_video_96")
    records += [
        {
            "id": "RTCAudioSource_1",
            "type": "media-source",
            "timestamp": ts,
            "trackIdentifier": "mic-track",
            "kind": "audio",
            "audioLevel": round(rng.random(), 3),
        },
        {
            "id": "RTCVideoSource_1",
            "type": "media-source",
            "timestamp": ts,
            "trackIdentifier": "camera-track",
            "kind": "video",
            "width": 640,
            "height": 480,
            "framesPerSecond": 30,
        },
        {
            "id": "RTCPeerConnection",
            "type": "peer-connection",
            "timestamp": ts,
            "dataChannelsOpened": 1,
            "dataChannelsClosed": 0,
        },
        {
            "id": "RTCDataChannel_1",
            "type": "data-channel",
            "timestamp": ts,
            "label": "chat",
            "protocol": "",
            "dataChannelIdentifier": 1,
            "state": "open",
            "messagesSent": rng.randint(0, 100),
            "bytesSent": rng.randint(0, 10_000),
        },
        {
            "id": "RTCTransport_0_1",
            "type": "transport",
            "timestamp": ts,
            "bytesSent": rng.randint(1_000_000, 9_000_000),
            "bytesReceived": rng.randint(1_000_000, 9_000_000),
            "dtlsState": "connected",
            "selectedCandidatePairId": "RTCIceCandidatePair_a_b",
            "localCertificateId": "RTCCertificate_local",
            "remoteCertificateId": "RTCCertificate_remote",
        },
        {
            "id": "RTCIceCandidatePair_a_b",
            "type": "candidate-pair",
            "timestamp": ts,
            "transportId": "RTCTransport_0_1",
            "localCandidateId": "RTCIceCandidate_a",
            "remoteCandidateId": "RTCIceCandidate_b",
            "state": "succeeded",
            "nominated": True,
            "currentRoundTripTime": round(rng.uniform(0.01, 0.3), 3),
            "availableOutgoingBitrate": rng.randint(300_000, 3_000_000),
        },
        {
            "id": "RTCIceCandidate_a",
            "type": "local-candidate",
            "timestamp": ts,
            "transportId": "RTCTransport_0_1",
            "networkType": "wifi",
            "address": "192.0.2.10",
            "port": 50_000,
            "protocol": "udp",
            "candidateType": "host",
            "priority": 2_122_260_223,
        },
        {
            "id": "RTCIceCandidate_b",
            "type": "remote-candidate",
            "timestamp": ts,
            "transportId": "RTCTransport_0_1",
            "address": "198.51.100.20",
            "port": 3478,
            "protocol": "udp",
            "candidateType": "srflx",
            "priority": 1_686_052_607,
            "isRemote": True,
        },
        {
            "id": "RTCCertificate_local",
            "type": "certificate",
            "timestamp": ts,
            "fingerprint": "AB:CD:EF",
            "fingerprintAlgorithm": "sha-256",
            "base64Certificate": "MIIB",
        },
    ]
    return records


@app.command()
def main(
    output: Path = typer.Option(
        Path("snapshot.json"),
        "--output",
        "-o",
        help="Where to write the JSON snapshot.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    keyed: bool = typer.Option(
        False,
        "--keyed",
        help="Write an object keyed by record id instead of a list.",
    ),
) -> None:
    """
    Generate a synthetic snapshot and write it to disk.
    """
    start = time.perf_counter()
    records = build_snapshot(seed=seed)
    document: Any = {r["id"]: r for r in records} if keyed else records

    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        json.dump(document, f, indent=2)

    typer.echo(
        f"Wrote {len(records)} stats records -> {output} "
        f"(seed={seed}) in {time.perf_counter() - start:.3f}s"
    )


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
