"""Top-3 age rankings over one or many regional observation streams."""

from .config import CensusConfig, OUTPUT_FORMAT, TOP_RANKS
from .errors import (
    CensusError,
    InvalidTableError,
    ObservationReadError,
    RegionError,
    ReleaseError,
    SourceAcquisitionError,
)
from .metrics import FrequencyTable, RankedEntry, accumulate, format_ranking, merge_tables, rank_table
from .pipelines import Census, RegionOutcome, SurveyReport
from .sources import AgeSource, DirectorySourceFactory, InMemorySource, InMemorySourceFactory, SourceFactory

__all__ = [
    "AgeSource",
    "Census",
    "CensusConfig",
    "CensusError",
    "DirectorySourceFactory",
    "FrequencyTable",
    "InMemorySource",
    "InMemorySourceFactory",
    "InvalidTableError",
    "OUTPUT_FORMAT",
    "ObservationReadError",
    "RankedEntry",
    "RegionError",
    "RegionOutcome",
    "ReleaseError",
    "SourceAcquisitionError",
    "SourceFactory",
    "SurveyReport",
    "TOP_RANKS",
    "accumulate",
    "format_ranking",
    "merge_tables",
    "rank_table",
]
