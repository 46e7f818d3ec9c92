"""Synchronous, deadline-bounded sends on top of confluent_kafka's Producer."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from confluent_kafka import KafkaError, KafkaException, Producer

from skewgen.errors import ConfigError, SendTimeoutError, SendTransportError
from skewgen.models.cluster import ClusterConfig
from skewgen.models.message import Message, SendOutcome

logger = logging.getLogger(__name__)

# Leader ack only, so sends keep succeeding while a follower broker is down.
# Idempotence is off so broker disruption shows up as visible failures.
PRODUCER_DEFAULTS: dict[str, Any] = {
    "acks": "1",
    "enable.idempotence": False,
    "allow.auto.create.topics": True,
}


class _Delivery:
    """Delivery report holder scoped to a single send."""

    def __init__(self, payload: bytes):
        self.payload = payload
        self.done = False
        self.error: KafkaError | None = None
        self.partition: int | None = None
        self.abandoned = False

    def __call__(self, err: KafkaError | None, msg: Any) -> None:
        if self.abandoned:
            logger.debug("Ignoring late delivery report for %r: %s", self.payload, err)
            return
        self.done = True
        self.error = err
        if err is None and msg is not None:
            self.partition = msg.partition()


class KafkaSender:
    """Sends one message at a time and waits for its delivery report."""

    def __init__(
        self,
        cluster_config: ClusterConfig,
        overrides: dict[str, Any] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        config = {**PRODUCER_DEFAULTS, **cluster_config.to_client_config()}
        if overrides:
            config.update(overrides)
        try:
            self._producer = Producer(config)
        except KafkaException as e:
            raise ConfigError(f"unable to create kafka client: {e}") from e
        self._clock = clock

    def send(self, message: Message, timeout: float) -> SendOutcome:
        try:
            partition = self.deliver(message, timeout)
        except SendTimeoutError as e:
            return SendOutcome.timeout(str(e))
        except SendTransportError as e:
            return SendOutcome.broker_error(str(e))
        return SendOutcome.ok(partition=partition)

    def deliver(self, message: Message, timeout: float) -> int | None:
        """Produce ``message`` and wait for its delivery report.

        Returns the partition the broker confirmed. Raises SendTimeoutError
        when no report arrives within ``timeout`` seconds and
        SendTransportError when the message is rejected or cannot be queued.
        """
        delivery = _Delivery(message.payload)
        deadline = self._clock() + timeout

        kwargs: dict[str, Any] = {}
        if message.partition is not None:
            kwargs["partition"] = message.partition

        try:
            self._producer.produce(
                message.topic,
                value=message.payload,
                on_delivery=delivery,
                **kwargs,
            )
        except BufferError as e:
            raise SendTransportError(f"local queue full: {e}") from e
        except KafkaException as e:
            raise SendTransportError(str(e)) from e

        while not delivery.done:
            remaining = deadline - self._clock()
            if remaining <= 0:
                delivery.abandoned = True
                self._release_pending()
                raise SendTimeoutError(timeout)
            self._producer.poll(remaining)

        if delivery.error is not None:
            raise SendTransportError(delivery.error.str())
        return delivery.partition

    def _release_pending(self) -> None:
        # Drop the timed-out message so it cannot complete during a later send.
        self._producer.purge(in_queue=True, in_flight=True, blocking=True)
        self._producer.poll(0)

    def close(self, timeout: float = 5.0) -> None:
        remaining = self._producer.flush(timeout)
        if remaining:
            logger.warning("%d message(s) still undelivered at shutdown", remaining)

    def __enter__(self) -> KafkaSender:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
