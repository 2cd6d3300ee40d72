"""High-level orchestration for single- and multi-region age rankings."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Sequence

from ..config import CensusConfig
from ..errors import RegionError
from ..metrics.frequency import FrequencyTable, accumulate, acquire
from ..metrics.merge import merge_tables
from ..metrics.ranking import format_ranking, rank_table
from ..metrics.records import RankedEntry
from ..sources.base import SourceFactory
from .outcomes import RegionOutcome, SurveyReport, successful_tables

logger = logging.getLogger(__name__)


class Census:
    """Computes the most common ages for one region or across many regions.

    The instance holds no per-query state, so a single Census can serve
    concurrent callers.
    """

    def __init__(self, source_factory: SourceFactory, config: Optional[CensusConfig] = None) -> None:
        self.source_factory = source_factory
        self.config = config or CensusConfig()
        self.config.validate()

    # ------------------------------------------------------------------
    # Single region

    def region_table(self, region: str) -> FrequencyTable:
        """Acquire, drain and release the region's source.

        Raises:
            SourceAcquisitionError, ObservationReadError, ReleaseError: carrying `region`.
        """
        source = acquire(self.source_factory, region)
        return accumulate(source, region)

    def rank_region(self, region: str) -> List[RankedEntry]:
        return rank_table(self.region_table(region))

    def top_ages(self, region: str) -> List[str]:
        """Return the formatted top-3 ranking for a single region."""
        return format_ranking(self.rank_region(region))

    # ------------------------------------------------------------------
    # Multiple regions

    def collect(self, regions: Sequence[str]) -> List[RegionOutcome]:
        """Aggregate every region concurrently and return one outcome per region.

        Outcomes follow the order of `regions`. Region failures are captured in
        their envelope rather than raised.
        """
        region_list = list(regions)
        if not region_list:
            return []

        with ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=self.config.thread_name_prefix,
        ) as executor:
            futures: List[Future[RegionOutcome]] = [
                executor.submit(self._region_outcome, region) for region in region_list
            ]
            return [future.result() for future in futures]

    def survey(self, regions: Sequence[str]) -> SurveyReport:
        """Aggregate, merge and rank across `regions`, isolating failing regions."""
        outcomes = self.collect(regions)
        for outcome in outcomes:
            if outcome.error is not None:
                logger.warning("Skipping region %s: %s", outcome.region, outcome.error)

        combined = merge_tables(successful_tables(outcomes))
        ranking = rank_table(combined)
        failed = sum(1 for outcome in outcomes if not outcome.succeeded)
        logger.info(
            "Ranked %d regions (%d failed): %d observations, %d distinct ages",
            len(outcomes),
            failed,
            combined.total,
            len(combined),
        )
        return SurveyReport(outcomes=tuple(outcomes), table=combined, ranking=tuple(ranking))

    def rank_across(self, regions: Sequence[str]) -> List[RankedEntry]:
        return list(self.survey(regions).ranking)

    def top_ages_across(self, regions: Sequence[str]) -> List[str]:
        """Return the formatted top-3 ranking over the combined data of `regions`."""
        return self.survey(regions).formatted()

    def _region_outcome(self, region: str) -> RegionOutcome:
        try:
            table = self.region_table(region)
        except RegionError as exc:
            return RegionOutcome.failure(region, exc)
        logger.debug("Region %s aggregated: %d distinct ages", region, len(table))
        return RegionOutcome.success(region, table)


__all__ = ["Census"]
