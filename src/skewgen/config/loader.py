from __future__ import annotations

from pathlib import Path

import yaml

from skewgen.errors import ConfigError
from skewgen.models.cluster import ClusterConfig

_KNOWN_KEYS = {
    "bootstrap_servers",
    "security_protocol",
    "sasl_mechanism",
    "sasl_username",
    "sasl_password",
    "properties",
}


def load_cluster_config(path: Path, bootstrap_servers: str | None = None) -> ClusterConfig:
    """Load cluster settings from a YAML file.

    An explicit ``bootstrap_servers`` overrides the value in the file.
    """
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read cluster config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"cluster config {path} must be a mapping")

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(f"unknown keys in {path}: {', '.join(sorted(unknown))}")

    properties = data.get("properties") or {}
    if not isinstance(properties, dict):
        raise ConfigError(f"'properties' in {path} must be a mapping")

    kwargs = {key: value for key, value in data.items() if value is not None}
    kwargs["properties"] = properties
    if bootstrap_servers:
        kwargs["bootstrap_servers"] = bootstrap_servers

    try:
        return ClusterConfig(**kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"invalid cluster config {path}: {e}") from e
