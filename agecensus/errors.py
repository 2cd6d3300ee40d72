"""Exception hierarchy for census aggregation."""

from __future__ import annotations

from typing import Optional


class CensusError(RuntimeError):
    """Base class for every error raised by agecensus."""


class RegionError(CensusError):
    """Failure scoped to a single region's source."""

    kind = "region failure"

    def __init__(self, region: str, cause: Optional[BaseException] = None) -> None:
        self.region = region
        self.cause = cause
        detail = f"{type(cause).__name__}: {cause}" if cause is not None else self.kind
        super().__init__(f"Error while processing region '{region}': {detail}")


class SourceAcquisitionError(RegionError):
    """The source factory could not produce a source for the region."""

    kind = "source acquisition failed"


class ObservationReadError(RegionError):
    """Drawing the next observation from an acquired source failed."""

    kind = "observation read failed"


class ReleaseError(RegionError):
    """Releasing the source's resources failed."""

    kind = "source release failed"


class InvalidTableError(CensusError, ValueError):
    """Frequency counts violate the age >= 0 / count >= 1 invariant."""


__all__ = [
    "CensusError",
    "InvalidTableError",
    "ObservationReadError",
    "RegionError",
    "ReleaseError",
    "SourceAcquisitionError",
]
