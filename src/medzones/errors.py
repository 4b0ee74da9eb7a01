"""Exception types raised by the zone and proximity services."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """A single call was rejected because its arguments cannot be processed."""


class InvalidCoordinatesError(InvalidInputError):
    """Latitude/longitude are missing, non-finite or outside WGS84 ranges."""


class InvalidRadiusError(InvalidInputError):
    """Search radius is negative, non-finite or above the configured maximum."""


class InvalidZoneError(InvalidInputError):
    """Zone definition cannot be used for classification."""


class ZoneNotFoundError(KeyError):
    """Requested zone id is not present in the catalog."""

    def __str__(self) -> str:
        return f"Zone '{self.args[0]}' not found" if self.args else "Zone not found"


class BatchCommitError(RuntimeError):
    """The atomic commit of a zone assignment batch failed or timed out.

    Raised for the batch as a whole; per-record faults are reported inside
    ``BatchResult.errors`` instead.
    """
