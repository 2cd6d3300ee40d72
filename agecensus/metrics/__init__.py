"""Frequency aggregation, merging, and ranking of age observations."""

from .frequency import FrequencyTable, accumulate, acquire
from .merge import merge_tables
from .ranking import format_ranking, rank_table
from .records import RankedEntry

__all__ = [
    "FrequencyTable",
    "RankedEntry",
    "accumulate",
    "acquire",
    "format_ranking",
    "merge_tables",
    "rank_table",
]
