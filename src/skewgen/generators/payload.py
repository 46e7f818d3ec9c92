from __future__ import annotations

import re

PAYLOAD_TEMPLATE = "Hello, Kafka! Message {sequence}"

_SEQUENCE_RE = re.compile(rb"Message (-?\d+)$")


def encode_payload(sequence: int) -> bytes:
    return PAYLOAD_TEMPLATE.format(sequence=sequence).encode()


def sequence_of(payload: bytes) -> int:
    """Recover the sequence number embedded by encode_payload."""
    match = _SEQUENCE_RE.search(payload)
    if match is None:
        raise ValueError(f"payload carries no sequence number: {payload!r}")
    return int(match.group(1))
