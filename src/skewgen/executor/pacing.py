from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from skewgen.generators.partition import RandomSource


@dataclass(frozen=True)
class PacingPolicy:
    """Pause between sends. A positive random bound wins over the fixed delay."""

    delay_ms: int = 0
    random_delay_ms: int = 0

    def __post_init__(self):
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if self.random_delay_ms < 0:
            raise ValueError("random_delay_ms must be >= 0")

    def next_pause(self, rng: RandomSource) -> float:
        """Seconds to wait before the next send."""
        if self.random_delay_ms > 0:
            return rng.randrange(self.random_delay_ms) / 1000
        if self.delay_ms > 0:
            return self.delay_ms / 1000
        return 0.0

    def pause(self, rng: RandomSource, sleep: Callable[[float], None] = time.sleep) -> float:
        seconds = self.next_pause(rng)
        if seconds > 0:
            sleep(seconds)
        return seconds
