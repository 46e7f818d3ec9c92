"""Error taxonomy for provisioning, configuration and sends."""

from __future__ import annotations


class SkewgenError(Exception):
    """Base class for all skewgen errors."""


class ConfigError(SkewgenError):
    """Invalid or unreadable configuration."""


class ProvisioningError(SkewgenError):
    """Topic creation failed for a reason other than the topic already existing."""

    def __init__(self, topic: str, reason: str):
        self.topic = topic
        self.reason = reason
        super().__init__(f"failed to create topic {topic}: {reason}")


class TopicAlreadyExistsError(SkewgenError):
    """The broker reported that the topic already exists."""

    def __init__(self, topic: str):
        self.topic = topic
        super().__init__(f"topic {topic} already exists")


class SendTimeoutError(SkewgenError):
    """A single send did not complete within its deadline."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"delivery not confirmed within {timeout:g}s")


class SendTransportError(SkewgenError):
    """The broker rejected or could not deliver a message."""
