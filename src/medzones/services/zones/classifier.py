"""Point-to-zone classification against an ordered zone snapshot."""

from __future__ import annotations

from typing import Optional, Sequence

from ...models.domain import GeoPoint, LocatableRecord, Zone
from ..geospatial import haversine_km, point_in_polygon

UNASSIGNED_BUCKET = "Sin zona asignada"


def zone_contains(zone: Zone, lat: float, lon: float) -> bool:
    """Return True if (lat, lon) lies inside the zone.

    Circle zones include their boundary. Zones missing the parameters for
    their type never match.
    """

    match zone.type:
        case "circle":
            if zone.center is None or zone.radius_km is None:
                return False
            distance = haversine_km(lat, lon, zone.center.latitude, zone.center.longitude)
            return distance <= zone.radius_km
        case "polygon":
            return point_in_polygon(lat, lon, zone.coordinates)
        case _:
            return False


def classify_point(point: Optional[GeoPoint], zones: Sequence[Zone]) -> Optional[Zone]:
    """Return the first zone in catalog order containing the point, if any."""

    if point is None:
        return None
    lat, lon = point
    for zone in zones:
        if zone_contains(zone, lat, lon):
            return zone
    return None


def group_records_by_zone(
    records: Sequence[LocatableRecord],
    zones: Sequence[Zone],
) -> dict[str, list[LocatableRecord]]:
    """Bucket records by the name of their zone.

    Records without coordinates or outside every zone land in
    ``UNASSIGNED_BUCKET``. Zones sharing a name share a bucket.
    """

    groups: dict[str, list[LocatableRecord]] = {UNASSIGNED_BUCKET: []}
    for zone in zones:
        groups.setdefault(zone.name, [])

    for record in records:
        zone = classify_point(record.point, zones)
        groups[zone.name if zone else UNASSIGNED_BUCKET].append(record)
    return groups


def count_records_per_zone(
    records: Sequence[LocatableRecord],
    zones: Sequence[Zone],
) -> list[tuple[Zone, int]]:
    """Count verified, located records inside each zone.

    Unlike classification this is not first-match: a record inside two
    overlapping zones counts towards both.
    """

    located = [record for record in records if record.verified and record.point is not None]
    counts: list[tuple[Zone, int]] = []
    for zone in zones:
        total = sum(1 for record in located if zone_contains(zone, *record.point))
        counts.append((zone, total))
    return counts
