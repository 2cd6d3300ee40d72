"""In-memory sources backed by NumPy arrays, mainly for tests and notebooks."""

from __future__ import annotations

import operator
from typing import Dict, Iterator, Mapping, Sequence, Union

import numpy as np

AgeArrayLike = Union[np.ndarray, Sequence[int]]


def ensure_age_array(values: AgeArrayLike) -> np.ndarray:
    """Return `values` as a one-dimensional integer array.

    Ages beyond the fixed-width integer range come back as an object array of
    Python ints.
    """
    array = np.asarray(values)
    if array.size == 0:
        return np.zeros(0, dtype=np.int64)
    if array.ndim != 1:
        raise ValueError(f"Age observations must be one-dimensional, received shape {array.shape}.")
    if array.dtype == object:
        try:
            return np.array([operator.index(value) for value in array], dtype=object)
        except TypeError as exc:
            raise ValueError("Age observations must be integers, received non-integral objects.") from exc
    if not np.issubdtype(array.dtype, np.integer):
        raise ValueError(f"Age observations must be integers, received dtype {array.dtype}.")
    return array


class InMemorySource:
    """AgeSource over a fixed array of observations."""

    def __init__(self, values: AgeArrayLike) -> None:
        self._values = ensure_age_array(values)
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def __iter__(self) -> Iterator[int]:
        if self.closed:
            raise ValueError("Cannot iterate a closed source.")
        for value in self._values:
            yield int(value)

    def close(self) -> None:
        self.close_calls += 1


class InMemorySourceFactory:
    """SourceFactory serving fixed observation arrays keyed by region."""

    def __init__(self, regions: Mapping[str, AgeArrayLike]) -> None:
        self._regions: Dict[str, np.ndarray] = {name: ensure_age_array(values) for name, values in regions.items()}
        self.issued: list[InMemorySource] = []

    @property
    def regions(self) -> tuple[str, ...]:
        return tuple(sorted(self._regions))

    def __call__(self, region: str) -> InMemorySource:
        try:
            values = self._regions[region]
        except KeyError as exc:
            raise KeyError(f"Unknown region '{region}'. Available: {list(self.regions)}") from exc
        source = InMemorySource(values)
        self.issued.append(source)
        return source


__all__ = ["AgeArrayLike", "InMemorySource", "InMemorySourceFactory", "ensure_age_array"]
