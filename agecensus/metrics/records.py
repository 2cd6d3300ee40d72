"""Shared data records for age rankings."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import OUTPUT_FORMAT


@dataclass(frozen=True)
class RankedEntry:
    """Single row of a dense age ranking."""

    rank: int
    age: int
    count: int

    def format(self) -> str:
        """Render the entry as ``rank:age=count``."""
        return OUTPUT_FORMAT.format(rank=self.rank, age=self.age, count=self.count)
