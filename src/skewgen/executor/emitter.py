"""Sequential send loop with per-send deadline and pacing."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable
from typing import Protocol

from skewgen.executor.pacing import PacingPolicy
from skewgen.executor.result import EmissionResult
from skewgen.generators.partition import PartitionWeightTable, RandomSource, choose_partition
from skewgen.generators.payload import encode_payload
from skewgen.models.message import Message, SendOutcome

logger = logging.getLogger(__name__)

DEFAULT_SEND_TIMEOUT = 1.0


class Sender(Protocol):
    def send(self, message: Message, timeout: float) -> SendOutcome: ...


class Emitter:
    """Emits a fixed number of messages to one topic, one at a time.

    Failed sends are logged and counted; they never stop the run or get
    retried. Every attempt is followed by the pacing pause.
    """

    def __init__(
        self,
        sender: Sender,
        topic: str,
        send_timeout: float = DEFAULT_SEND_TIMEOUT,
        entropy: RandomSource | None = None,
        pacing_rng: RandomSource | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if send_timeout <= 0:
            raise ValueError("send_timeout must be positive")
        self.sender = sender
        self.topic = topic
        self.send_timeout = send_timeout
        self.entropy = entropy if entropy is not None else random.Random()
        self.pacing_rng = pacing_rng if pacing_rng is not None else self.entropy
        self._sleep = sleep

    def build_message(self, sequence: int, weight_table: PartitionWeightTable | None) -> Message:
        partition = None
        if weight_table is not None:
            partition = choose_partition(weight_table, self.entropy)
        return Message(topic=self.topic, payload=encode_payload(sequence), partition=partition)

    def run(
        self,
        count: int,
        start_offset: int = 0,
        pacing: PacingPolicy | None = None,
        weight_table: PartitionWeightTable | None = None,
    ) -> EmissionResult:
        """Send ``count`` messages numbered from ``start_offset``."""
        if count < 0:
            raise ValueError("count must be >= 0")
        if pacing is None:
            pacing = PacingPolicy()

        result = EmissionResult()
        start_time = time.time()

        for i in range(count):
            sequence = start_offset + i
            message = self.build_message(sequence, weight_table)
            outcome = self.sender.send(message, self.send_timeout)

            if outcome.success:
                result.messages_sent += 1
                partition = outcome.partition
                if partition is None:
                    partition = message.partition
                logger.info(
                    "produced message to topic %s partition %s: %s",
                    self.topic,
                    "auto" if partition is None else partition,
                    message.payload.decode(),
                )
            else:
                kind = outcome.error.value if outcome.error else "unknown"
                error = f"message {sequence}: {kind}: {outcome.detail}"
                logger.error("failed to produce %s", error)
                result.add_error(error)

            pacing.pause(self.pacing_rng, self._sleep)

        result.duration_seconds = time.time() - start_time
        logger.info(
            "Finished producing messages (sent=%d, failed=%d, %.2fs)",
            result.messages_sent,
            result.messages_failed,
            result.duration_seconds,
        )
        return result
