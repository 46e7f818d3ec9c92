"""Emission result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class EmissionResult:
    """Result of one emission run."""

    messages_sent: int = 0
    messages_failed: int = 0
    duration_seconds: float = 0.0
    errors: list[str] = field(default_factory=list)

    @property
    def attempts(self) -> int:
        return self.messages_sent + self.messages_failed

    def add_error(self, error: str) -> None:
        """Record a failed send."""
        self.messages_failed += 1
        self.errors.append(error)
