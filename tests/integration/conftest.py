"""Fixtures for integration tests using testcontainers."""

import uuid

import pytest
from testcontainers.kafka import KafkaContainer

from skewgen.kafka.admin import KafkaAdmin
from skewgen.kafka.sender import KafkaSender
from skewgen.models.cluster import ClusterConfig


@pytest.fixture(scope="module")
def kafka_container():
    """Start a single-broker Kafka container for integration tests."""
    with KafkaContainer("confluentinc/cp-kafka:7.5.0") as kafka:
        yield kafka


@pytest.fixture(scope="module")
def cluster_config(kafka_container):
    return ClusterConfig(bootstrap_servers=kafka_container.get_bootstrap_server())


@pytest.fixture
def admin(cluster_config):
    return KafkaAdmin(cluster_config.bootstrap_servers, cluster_config=cluster_config)


@pytest.fixture
def sender(cluster_config):
    with KafkaSender(cluster_config) as kafka_sender:
        yield kafka_sender


@pytest.fixture
def topic_name():
    return f"skewgen-{uuid.uuid4().hex[:8]}"
