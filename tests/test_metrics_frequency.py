"""Tests for frequency tables, source accumulation and merging."""

from __future__ import annotations

from itertools import permutations
import logging
from pathlib import Path
import sys
from typing import Iterator, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from agecensus.errors import (
    InvalidTableError,
    ObservationReadError,
    ReleaseError,
    SourceAcquisitionError,
)
from agecensus.metrics.frequency import FrequencyTable, accumulate, acquire
from agecensus.metrics.merge import merge_tables
from agecensus.sources.memory import InMemorySource


class ScriptedSource:
    """AgeSource test double that can fail while reading or releasing."""

    def __init__(
        self,
        values: List[object],
        fail_after: int | None = None,
        fail_on_close: bool = False,
    ) -> None:
        self.values = values
        self.fail_after = fail_after
        self.fail_on_close = fail_on_close
        self.close_calls = 0

    def __iter__(self) -> Iterator[int]:
        for idx, value in enumerate(self.values):
            if self.fail_after is not None and idx >= self.fail_after:
                raise OSError("connection reset")
            yield value  # type: ignore[misc]

    def close(self) -> None:
        self.close_calls += 1
        if self.fail_on_close:
            raise OSError("handle already gone")


# ---------------------------------------------------------------------------
# FrequencyTable tests


def test_add_counts_valid_ages_and_skips_negative() -> None:
    table = FrequencyTable()
    assert table.add(10) is True
    assert table.add(10) is True
    assert table.add(0) is True
    assert table.add(-1) is False
    assert dict(table) == {10: 2, 0: 1}
    assert -1 not in table
    assert table.total == 3


def test_add_rejects_non_integral_observation() -> None:
    table = FrequencyTable()
    with pytest.raises(TypeError):
        table.add("12")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        table.add(12.5)  # type: ignore[arg-type]
    assert len(table) == 0


def test_from_counts_validates_entries() -> None:
    table = FrequencyTable.from_counts({7: 3, 9: 5})
    assert table[7] == 3
    assert table[9] == 5
    with pytest.raises(InvalidTableError):
        FrequencyTable.from_counts({-2: 1})
    with pytest.raises(InvalidTableError):
        FrequencyTable.from_counts({4: 0})
    with pytest.raises(ValueError):
        FrequencyTable.from_counts({4: -3})


def test_counts_are_unbounded_integers() -> None:
    huge = 2**80
    table = FrequencyTable.from_counts({1: huge})
    table.update(FrequencyTable.from_counts({1: huge}))
    assert table[1] == 2 * huge


def test_copy_is_independent() -> None:
    table = FrequencyTable.from_counts({1: 1})
    clone = table.copy()
    clone.add(1)
    assert table[1] == 1
    assert clone[1] == 2


# ---------------------------------------------------------------------------
# accumulate / acquire tests


def test_accumulate_builds_table_and_releases_once() -> None:
    source = InMemorySource([10, 12, -5, 10, 0, -1])
    table = accumulate(source, "north")
    assert dict(table) == {10: 2, 12: 1, 0: 1}
    assert source.close_calls == 1


def test_accumulate_empty_source_returns_empty_table() -> None:
    source = InMemorySource([])
    table = accumulate(source, "empty")
    assert len(table) == 0
    assert source.close_calls == 1


def test_accumulate_only_negative_observations_returns_empty_table() -> None:
    table = accumulate(InMemorySource([-1, -2, -3]), "negatives")
    assert len(table) == 0


def test_accumulate_wraps_read_failure_with_region() -> None:
    source = ScriptedSource([1, 2, 3], fail_after=2)
    with pytest.raises(ObservationReadError) as excinfo:
        accumulate(source, "south")
    assert excinfo.value.region == "south"
    assert isinstance(excinfo.value.cause, OSError)
    assert "south" in str(excinfo.value)
    assert source.close_calls == 1


def test_accumulate_treats_non_integer_observation_as_read_failure() -> None:
    source = ScriptedSource([1, "two", 3])
    with pytest.raises(ObservationReadError):
        accumulate(source, "east")
    assert source.close_calls == 1


def test_accumulate_wraps_release_failure() -> None:
    source = ScriptedSource([1, 2], fail_on_close=True)
    with pytest.raises(ReleaseError) as excinfo:
        accumulate(source, "west")
    assert excinfo.value.region == "west"
    assert source.close_calls == 1


def test_read_failure_wins_over_release_failure(caplog: pytest.LogCaptureFixture) -> None:
    source = ScriptedSource([1, 2], fail_after=1, fail_on_close=True)
    with caplog.at_level(logging.WARNING, logger="agecensus"):
        with pytest.raises(ObservationReadError):
            accumulate(source, "lost")
    assert source.close_calls == 1
    assert "lost" in caplog.text


def test_acquire_wraps_factory_errors() -> None:
    def factory(region: str) -> InMemorySource:
        raise FileNotFoundError(region)

    with pytest.raises(SourceAcquisitionError) as excinfo:
        acquire(factory, "atlantis")
    assert excinfo.value.region == "atlantis"
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_acquire_rejects_missing_source() -> None:
    with pytest.raises(SourceAcquisitionError):
        acquire(lambda region: None, "void")  # type: ignore[arg-type,return-value]


# ---------------------------------------------------------------------------
# merge_tables tests


def test_merge_sums_counts_per_age() -> None:
    region_a = FrequencyTable.from_counts({7: 5})
    region_b = FrequencyTable.from_counts({7: 3, 9: 5})
    combined = merge_tables([region_a, region_b])
    assert dict(combined) == {7: 8, 9: 5}
    # Inputs are not mutated.
    assert dict(region_a) == {7: 5}


def test_merge_of_nothing_is_empty() -> None:
    assert len(merge_tables([])) == 0
    assert len(merge_tables([FrequencyTable(), FrequencyTable()])) == 0


def test_merge_is_order_independent() -> None:
    tables = [
        FrequencyTable.from_counts({1: 2, 2: 1}),
        FrequencyTable.from_counts({2: 4, 3: 1}),
        FrequencyTable.from_counts({1: 1, 4: 7}),
    ]
    expected = dict(merge_tables(tables))
    for ordering in permutations(tables):
        assert dict(merge_tables(ordering)) == expected

    nested = merge_tables([merge_tables(tables[:2]), tables[2]])
    assert dict(nested) == expected


# ---------------------------------------------------------------------------
# Release on interrupted iteration


class Interrupted(BaseException):
    """Stands in for KeyboardInterrupt without disturbing the test runner."""


class InterruptedSource:
    def __init__(self) -> None:
        self.close_calls = 0

    def __iter__(self) -> Iterator[int]:
        yield 1
        raise Interrupted()

    def close(self) -> None:
        self.close_calls += 1


def test_accumulate_releases_source_when_interrupted() -> None:
    source = InterruptedSource()
    with pytest.raises(Interrupted):
        accumulate(source, "r")
    assert source.close_calls == 1


def test_accumulate_does_not_wrap_interrupts() -> None:
    source = InterruptedSource()
    with pytest.raises(BaseException) as excinfo:
        accumulate(source, "r")
    assert not isinstance(excinfo.value, ObservationReadError)
