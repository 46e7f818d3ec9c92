"""Message and send outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Why a send failed."""

    TIMEOUT = "timeout"  # Deadline expired before delivery was confirmed
    BROKER_ERROR = "broker_error"  # Broker rejected or could not deliver


@dataclass(frozen=True)
class Message:
    """A single record, built fresh per iteration and discarded after the send."""

    topic: str
    payload: bytes
    partition: int | None = None  # None defers to the client partitioner

    def __post_init__(self):
        if self.partition is not None and self.partition < 0:
            raise ValueError("partition must be non-negative")


@dataclass(frozen=True)
class SendOutcome:
    """Result of one send. Consumed immediately for logging."""

    success: bool
    error: ErrorKind | None = None
    detail: str | None = None
    partition: int | None = None  # Partition the broker confirmed, when known

    @classmethod
    def ok(cls, partition: int | None = None) -> SendOutcome:
        return cls(success=True, partition=partition)

    @classmethod
    def timeout(cls, detail: str) -> SendOutcome:
        return cls(success=False, error=ErrorKind.TIMEOUT, detail=detail)

    @classmethod
    def broker_error(cls, detail: str) -> SendOutcome:
        return cls(success=False, error=ErrorKind.BROKER_ERROR, detail=detail)
