"""Idempotent topic provisioning."""

from __future__ import annotations

import logging
from typing import Protocol

from skewgen.errors import TopicAlreadyExistsError
from skewgen.models.topic import ProvisionResult, TopicSpec

logger = logging.getLogger(__name__)


class TopicAdmin(Protocol):
    def create_topic(self, spec: TopicSpec) -> str | None: ...


def ensure_topic(admin: TopicAdmin, spec: TopicSpec) -> ProvisionResult:
    """Make sure ``spec`` exists on the cluster.

    An existing topic counts as success and is never re-shaped. Any other
    failure propagates as ProvisioningError.
    """
    logger.info(
        "Creating topic %s (%d partitions, replication factor %d)",
        spec.name,
        spec.partitions,
        spec.replication_factor,
    )
    try:
        warning = admin.create_topic(spec)
    except TopicAlreadyExistsError:
        logger.info("Topic %s already exists", spec.name)
        return ProvisionResult(created=False)

    if warning is not None:
        logger.warning("Failed to create topic %s: %s", spec.name, warning)
        return ProvisionResult(created=False, warning=warning)

    logger.info("Created topic %s", spec.name)
    return ProvisionResult(created=True)
