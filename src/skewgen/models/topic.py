"""Topic shape and provisioning result models."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TOPIC = "test-topic"
DEFAULT_PARTITIONS = 12
DEFAULT_REPLICATION_FACTOR = 3


@dataclass(frozen=True)
class TopicSpec:
    """Shape of the topic to provision. Fixed for the whole run."""

    name: str = DEFAULT_TOPIC
    partitions: int = DEFAULT_PARTITIONS
    replication_factor: int = DEFAULT_REPLICATION_FACTOR

    def __post_init__(self):
        if not self.name:
            raise ValueError("topic name must not be empty")
        if self.partitions < 1:
            raise ValueError("partitions must be at least 1")
        if self.replication_factor < 1:
            raise ValueError("replication_factor must be at least 1")


@dataclass(frozen=True)
class ProvisionResult:
    """Outcome of ensure_topic. There are no partial states."""

    created: bool
    warning: str | None = None
