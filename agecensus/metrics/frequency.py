"""Age frequency tables and the per-source accumulation step."""

from __future__ import annotations

import logging
import operator
from collections.abc import Mapping
from typing import Dict, Iterator

from ..errors import InvalidTableError, ObservationReadError, ReleaseError, SourceAcquisitionError
from ..sources.base import AgeSource, SourceFactory

logger = logging.getLogger(__name__)


class FrequencyTable(Mapping[int, int]):
    """Mapping from age to the number of valid observations of that age.

    Tables only ever grow: `add` counts one observation and `update` folds in
    another table. Negative ages never become keys.
    """

    def __init__(self) -> None:
        self._counts: Dict[int, int] = {}

    @classmethod
    def from_counts(cls, counts: Mapping[int, int]) -> "FrequencyTable":
        """Build a table from precomputed counts, validating every entry."""
        table = cls()
        for raw_age, raw_count in counts.items():
            age = operator.index(raw_age)
            count = operator.index(raw_count)
            if age < 0:
                raise InvalidTableError(f"Ages must be non-negative, received {age}.")
            if count < 1:
                raise InvalidTableError(f"Counts must be at least 1, received {count} for age {age}.")
            table._counts[age] = table._counts.get(age, 0) + count
        return table

    def add(self, observation: int) -> bool:
        """Count one observation; return False when it was discarded as negative."""
        age = operator.index(observation)
        if age < 0:
            return False
        self._counts[age] = self._counts.get(age, 0) + 1
        return True

    def update(self, other: Mapping[int, int]) -> None:
        """Add every count from `other` into this table."""
        if not isinstance(other, FrequencyTable):
            other = FrequencyTable.from_counts(other)
        for age, count in other.items():
            self._counts[age] = self._counts.get(age, 0) + count

    def copy(self) -> "FrequencyTable":
        clone = FrequencyTable()
        clone._counts = dict(self._counts)
        return clone

    @property
    def total(self) -> int:
        """Number of valid observations represented by the table."""
        return sum(self._counts.values())

    def __getitem__(self, age: int) -> int:
        return self._counts[age]

    def __iter__(self) -> Iterator[int]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"FrequencyTable({dict(sorted(self._counts.items()))!r})"


def acquire(factory: SourceFactory, region: str) -> AgeSource:
    """Ask `factory` for the region's source, wrapping any failure with the region."""
    try:
        source = factory(region)
    except Exception as exc:
        raise SourceAcquisitionError(region, exc) from exc
    if source is None:
        raise SourceAcquisitionError(region)
    return source


def accumulate(source: AgeSource, region: str = "<unnamed>") -> FrequencyTable:
    """Drain `source` into a fresh FrequencyTable and release it exactly once.

    Negative observations are skipped. A failure while reading raises
    `ObservationReadError`; a failure while releasing raises `ReleaseError`.
    No partial table is returned in either case.
    """
    table = FrequencyTable()
    skipped = 0
    released = False
    try:
        try:
            for observation in source:
                if not table.add(observation):
                    skipped += 1
        except Exception as exc:
            released = True
            _release_after_failure(source, region)
            raise ObservationReadError(region, exc) from exc

        released = True
        try:
            source.close()
        except Exception as exc:
            raise ReleaseError(region, exc) from exc
    finally:
        # Interrupts and other BaseExceptions still release the source.
        if not released:
            source.close()

    if skipped:
        logger.debug("Region %s: discarded %d negative observations", region, skipped)
    return table


def _release_after_failure(source: AgeSource, region: str) -> None:
    # The read failure is the one reported; a release failure on top of it is only logged.
    try:
        source.close()
    except Exception as exc:
        logger.warning("Region %s: release after failed read also failed: %s", region, exc)


__all__ = ["FrequencyTable", "accumulate", "acquire"]
