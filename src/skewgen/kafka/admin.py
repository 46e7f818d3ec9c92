"""Topic administration on top of confluent_kafka's AdminClient."""

from __future__ import annotations

from concurrent.futures import TimeoutError as FutureTimeoutError

from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, NewTopic

from skewgen.errors import ConfigError, ProvisioningError, TopicAlreadyExistsError
from skewgen.models.cluster import ClusterConfig
from skewgen.models.topic import TopicSpec

# Topic-level codes that mean the broker accepted the request but could not
# confirm completion; the topic normally appears shortly after.
_NON_FATAL_RESULT_CODES = {KafkaError.REQUEST_TIMED_OUT}


class KafkaAdmin:
    def __init__(
        self,
        bootstrap_servers: str,
        cluster_config: ClusterConfig | None = None,
        timeout: float = 30.0,
    ):
        if cluster_config is None:
            cluster_config = ClusterConfig(bootstrap_servers=bootstrap_servers)
        try:
            self._client = AdminClient(cluster_config.to_client_config())
        except KafkaException as e:
            raise ConfigError(f"unable to create kafka admin client: {e}") from e
        self._timeout = timeout

    def create_topic(self, spec: TopicSpec) -> str | None:
        """Create ``spec`` on the cluster.

        Returns a warning string when the broker accepted the request but
        reported a non-fatal result-level error, otherwise ``None``.

        Raises TopicAlreadyExistsError when the topic exists and
        ProvisioningError for every other failure.
        """
        new_topic = NewTopic(
            spec.name,
            num_partitions=spec.partitions,
            replication_factor=spec.replication_factor,
        )
        try:
            futures = self._client.create_topics(
                [new_topic],
                operation_timeout=self._timeout,
                request_timeout=self._timeout,
            )
        except KafkaException as e:
            raise ProvisioningError(spec.name, str(e)) from e

        try:
            futures[spec.name].result(timeout=self._timeout)
        except KafkaException as e:
            err = e.args[0] if e.args else None
            if not isinstance(err, KafkaError):
                raise ProvisioningError(spec.name, str(e)) from e
            if err.code() == KafkaError.TOPIC_ALREADY_EXISTS:
                raise TopicAlreadyExistsError(spec.name) from e
            if err.code() in _NON_FATAL_RESULT_CODES:
                return err.str()
            raise ProvisioningError(spec.name, err.str()) from e
        except FutureTimeoutError as e:
            raise ProvisioningError(
                spec.name, f"no response within {self._timeout:g}s"
            ) from e

        return None
