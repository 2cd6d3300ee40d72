"""Dense top-3 ranking over frequency tables."""

from __future__ import annotations

from itertools import groupby
from operator import itemgetter
from typing import List, Mapping, Sequence, Tuple

from ..config import TOP_RANKS
from .records import RankedEntry


def rank_table(table: Mapping[int, int]) -> List[RankedEntry]:
    """Rank ages by count using a dense rank over distinct count values.

    Entries are ordered by descending count with ties broken by ascending age.
    Every age sharing a count level shares its rank, so a tie at the last rank
    can yield more than `TOP_RANKS` rows.

    Args:
        table: Mapping from age to occurrence count.

    Returns:
        RankedEntry rows for ranks 1..TOP_RANKS, or an empty list for an empty table.
    """
    ordered = _sort_entries(table)

    ranked: List[RankedEntry] = []
    for rank, (count, group) in enumerate(groupby(ordered, key=itemgetter(1)), start=1):
        if rank > TOP_RANKS:
            break
        ranked.extend(RankedEntry(rank=rank, age=age, count=count) for age, _ in group)
    return ranked


def format_ranking(entries: Sequence[RankedEntry]) -> List[str]:
    """Render ranked entries as ``rank:age=count`` strings."""
    return [entry.format() for entry in entries]


def _sort_entries(table: Mapping[int, int]) -> List[Tuple[int, int]]:
    return sorted(table.items(), key=lambda item: (-item[1], item[0]))


__all__ = ["format_ranking", "rank_table"]
