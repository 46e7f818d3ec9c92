"""Weighted partition selection.

A weight table is an ordered set of half-open bands over [0, 100). Each band
is stored as ``(partition, threshold)`` where ``threshold`` is the exclusive
upper bound of the band; the first band starts at 0 and the last threshold is
100. A draw maps to the first band whose threshold exceeds it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

DRAW_RANGE = 100


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass(frozen=True)
class WeightBand:
    partition: int
    threshold: int


@dataclass(frozen=True)
class PartitionWeightTable:
    """Static mapping from a uniform draw in [0, 100) to a partition."""

    bands: tuple[WeightBand, ...]

    def __post_init__(self):
        if not self.bands:
            raise ValueError("weight table must have at least one band")
        previous = 0
        for band in self.bands:
            if band.partition < 0:
                raise ValueError(f"partition must be non-negative, got {band.partition}")
            if band.threshold <= previous:
                raise ValueError(
                    f"thresholds must be strictly increasing, got {band.threshold} "
                    f"after {previous}"
                )
            previous = band.threshold
        if previous != DRAW_RANGE:
            raise ValueError(f"last threshold must be {DRAW_RANGE}, got {previous}")

    @classmethod
    def from_weights(cls, weights: Iterable[tuple[int, int]]) -> PartitionWeightTable:
        """Build a table from ``(partition, weight)`` pairs in band order."""
        bands = []
        cumulative = 0
        for partition, weight in weights:
            cumulative += weight
            bands.append(WeightBand(partition=partition, threshold=cumulative))
        return cls(bands=tuple(bands))

    @property
    def max_partition(self) -> int:
        return max(band.partition for band in self.bands)

    def weights(self) -> dict[int, int]:
        """Percentage of traffic per partition."""
        result: dict[int, int] = {}
        lower = 0
        for band in self.bands:
            result[band.partition] = result.get(band.partition, 0) + band.threshold - lower
            lower = band.threshold
        return result


HOT_PARTITIONS = (0, 3, 6, 9)

# Four hot partitions take 15% each, the other eight 5% each.
DEFAULT_WEIGHT_TABLE = PartitionWeightTable.from_weights(
    [
        (0, 15),
        (3, 15),
        (4, 5),
        (5, 5),
        (6, 15),
        (9, 15),
        (1, 5),
        (2, 5),
        (7, 5),
        (8, 5),
        (10, 5),
        (11, 5),
    ]
)


def partition_for_draw(table: PartitionWeightTable, draw: int) -> int:
    if not 0 <= draw < DRAW_RANGE:
        raise ValueError(f"draw must be in [0, {DRAW_RANGE}), got {draw}")
    for band in table.bands:
        if draw < band.threshold:
            return band.partition
    # Unreachable: the last threshold is always DRAW_RANGE
    raise AssertionError("weight table does not cover the draw range")


def choose_partition(table: PartitionWeightTable, entropy: RandomSource) -> int:
    """Pick a partition for one message using a single draw from ``entropy``."""
    return partition_for_draw(table, entropy.randrange(DRAW_RANGE))
