"""Static defaults and runtime configuration for census queries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Number of distinct count levels kept by the ranker.
TOP_RANKS = 3

# Position:Age=Total
OUTPUT_FORMAT = "{rank}:{age}={count}"

# Default locations used by the Typer CLI; callers may override these.
DEFAULT_DATA_ROOT = Path("data/regions")
DEFAULT_SUFFIX = ".txt"


@dataclass
class CensusConfig:
    """Configuration for `Census`."""

    max_workers: Optional[int] = None
    thread_name_prefix: str = "census-region"

    def validate(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1 when provided.")
        if not self.thread_name_prefix:
            raise ValueError("thread_name_prefix cannot be empty.")


__all__ = [
    "CensusConfig",
    "DEFAULT_DATA_ROOT",
    "DEFAULT_SUFFIX",
    "OUTPUT_FORMAT",
    "TOP_RANKS",
]
