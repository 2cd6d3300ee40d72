"""Source capability consumed by the census aggregator."""

from __future__ import annotations

from typing import Callable, Iterator, Protocol


class AgeSource(Protocol):
    """Finite, possibly lazy stream of integer ages that holds releasable resources.

    `close()` is called exactly once by the aggregator, including after an
    iteration that raised part-way through.
    """

    def __iter__(self) -> Iterator[int]: ...

    def close(self) -> None: ...


SourceFactory = Callable[[str], AgeSource]


__all__ = ["AgeSource", "SourceFactory"]
