"""Result envelopes returned by per-region tasks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..errors import RegionError
from ..metrics.frequency import FrequencyTable
from ..metrics.ranking import format_ranking
from ..metrics.records import RankedEntry


@dataclass(frozen=True)
class RegionOutcome:
    """Either the table a region produced or the error that stopped it."""

    region: str
    table: Optional[FrequencyTable] = None
    error: Optional[RegionError] = None

    def __post_init__(self) -> None:
        if (self.table is None) == (self.error is None):
            raise ValueError("RegionOutcome requires exactly one of table or error.")

    @classmethod
    def success(cls, region: str, table: FrequencyTable) -> "RegionOutcome":
        return cls(region=region, table=table)

    @classmethod
    def failure(cls, region: str, error: RegionError) -> "RegionOutcome":
        return cls(region=region, error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SurveyReport:
    """Everything produced by one multi-region query."""

    outcomes: Tuple[RegionOutcome, ...]
    table: FrequencyTable
    ranking: Tuple[RankedEntry, ...]

    @property
    def failed(self) -> List[RegionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def succeeded_regions(self) -> List[str]:
        return [outcome.region for outcome in self.outcomes if outcome.succeeded]

    def formatted(self) -> List[str]:
        return format_ranking(self.ranking)


def successful_tables(outcomes: Sequence[RegionOutcome]) -> List[FrequencyTable]:
    """Tables of the regions that succeeded, in outcome order."""
    return [outcome.table for outcome in outcomes if outcome.table is not None]


__all__ = ["RegionOutcome", "SurveyReport", "successful_tables"]
