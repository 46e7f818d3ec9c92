"""Cluster connection settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_BOOTSTRAP_SERVERS = "kafka-cluster-kafka-bootstrap:9092"

_SECURITY_PROTOCOLS = {"PLAINTEXT", "SSL", "SASL_PLAINTEXT", "SASL_SSL"}


@dataclass
class ClusterConfig:
    """Connection and optional security settings for the broker client."""

    bootstrap_servers: str = DEFAULT_BOOTSTRAP_SERVERS
    security_protocol: str = "PLAINTEXT"
    sasl_mechanism: str | None = None
    sasl_username: str | None = None
    sasl_password: str | None = field(default=None, repr=False)
    # Passed through to librdkafka untouched
    properties: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.bootstrap_servers:
            raise ValueError("bootstrap_servers must not be empty")
        self.security_protocol = str(self.security_protocol).upper()
        if self.security_protocol not in _SECURITY_PROTOCOLS:
            raise ValueError(
                f"security_protocol must be one of {', '.join(sorted(_SECURITY_PROTOCOLS))}"
            )
        if self.security_protocol.startswith("SASL") and not self.sasl_mechanism:
            raise ValueError(f"sasl_mechanism is required for {self.security_protocol}")

    def to_client_config(self) -> dict[str, Any]:
        config: dict[str, Any] = {
            "bootstrap.servers": self.bootstrap_servers,
            "security.protocol": self.security_protocol,
        }
        if self.sasl_mechanism:
            config["sasl.mechanism"] = self.sasl_mechanism
        if self.sasl_username is not None:
            config["sasl.username"] = self.sasl_username
        if self.sasl_password is not None:
            config["sasl.password"] = self.sasl_password
        config.update(self.properties)
        return config
