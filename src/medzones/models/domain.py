"""Domain models for zones, doctor records and assignment results."""

from dataclasses import dataclass, field
from typing import Literal, NamedTuple, Optional

ZoneType = Literal["circle", "polygon"]
NeighborhoodLabel = str


class GeoPoint(NamedTuple):
    """WGS84 coordinate pair in degrees, unpackable as ``(lat, lng)``."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Zone:
    """Administrative area used to group doctors.

    Circle zones use ``center`` and ``radius_km``; polygon zones use the
    ordered ``coordinates`` vertices. ``color`` and ``description`` are display
    attributes only.
    """

    id: str
    name: str
    type: ZoneType
    center: Optional[GeoPoint] = None
    radius_km: Optional[float] = None
    coordinates: tuple[GeoPoint, ...] = ()
    color: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class AssignedZone:
    """Snapshot of the zone a record was classified into."""

    id: str
    name: str

    @classmethod
    def from_zone(cls, zone: Zone) -> "AssignedZone":
        return cls(id=zone.id, name=zone.name)


@dataclass(slots=True)
class LocatableRecord:
    """Doctor profile reduced to the fields used for geographic lookups."""

    id: Optional[str]
    point: Optional[GeoPoint] = None
    address: Optional[str] = None
    verified: bool = False
    assigned_zone: Optional[AssignedZone] = None
    name: Optional[str] = None
    raw: dict = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ProximityMatch:
    """Record found by a proximity search.

    ``distance_km`` is the exact value used for filtering and ordering;
    ``display_distance_km`` is rounded to two decimals.
    """

    record: LocatableRecord
    distance_km: float
    display_distance_km: float


@dataclass(frozen=True, slots=True)
class ZoneAssignmentUpdate:
    record_id: str
    assigned_zone: Optional[AssignedZone]


@dataclass(frozen=True, slots=True)
class RecordError:
    record_id: Optional[str]
    error_message: str


@dataclass(slots=True)
class BatchResult:
    """Outcome of a zone assignment run."""

    assigned_count: int = 0
    unassigned_count: int = 0
    errors: list[RecordError] = field(default_factory=list)
    updates: list[ZoneAssignmentUpdate] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
