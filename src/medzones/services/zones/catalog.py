"""In-memory zone catalog with an ordered, active-only view."""

from __future__ import annotations

import dataclasses
import logging
import math
import threading
import uuid
from typing import Any, Iterable, Iterator

from ...errors import InvalidZoneError, ZoneNotFoundError
from ...models.domain import Zone
from ..geospatial import build_polygon, validate_coordinates


def validate_zone(zone: Zone) -> Zone:
    """Check that a zone can be used for classification and return it unchanged."""

    if not zone.id:
        raise InvalidZoneError("Zone is missing an id")
    if not zone.name or not zone.name.strip():
        raise InvalidZoneError(f"Zone '{zone.id}' is missing a name")

    match zone.type:
        case "circle":
            if zone.center is None:
                raise InvalidZoneError(f"Circle zone '{zone.id}' is missing a center")
            validate_coordinates(zone.center.latitude, zone.center.longitude)
            if zone.radius_km is None or not math.isfinite(zone.radius_km) or zone.radius_km < 0:
                raise InvalidZoneError(
                    f"Circle zone '{zone.id}' needs a finite radius >= 0 km, got {zone.radius_km!r}"
                )
        case "polygon":
            build_polygon(zone.coordinates)
        case _:
            raise InvalidZoneError(f"Unknown zone type '{zone.type}' for zone '{zone.id}'")
    return zone


def new_zone_id() -> str:
    return uuid.uuid4().hex


class ZoneCatalog:
    """Holds zones in insertion order.

    Insertion order is the tie-break for overlapping zones, so ``update``
    keeps a zone in its original position. Readers get immutable tuple
    snapshots and never observe a catalog that changes underneath them.
    """

    def __init__(self, zones: Iterable[Zone] = ()) -> None:
        self._zones: dict[str, Zone] = {}
        self._lock = threading.Lock()
        for zone in zones:
            self.add(zone)

    def __len__(self) -> int:
        return len(self._zones)

    def __iter__(self) -> Iterator[Zone]:
        return iter(self.list_zones())

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._zones

    def list_zones(self) -> tuple[Zone, ...]:
        with self._lock:
            return tuple(self._zones.values())

    def list_active_zones(self) -> tuple[Zone, ...]:
        with self._lock:
            return tuple(zone for zone in self._zones.values() if zone.is_active)

    def get(self, zone_id: str) -> Zone:
        try:
            return self._zones[zone_id]
        except KeyError:
            raise ZoneNotFoundError(zone_id) from None

    def add(self, zone: Zone) -> Zone:
        validate_zone(zone)
        with self._lock:
            if zone.id in self._zones:
                raise InvalidZoneError(f"Zone id '{zone.id}' already exists")
            self._zones[zone.id] = zone
        logging.info(f"Added zone '{zone.name}' ({zone.type}, id={zone.id})")
        return zone

    def update(self, zone_id: str, **changes: Any) -> Zone:
        if "id" in changes and changes["id"] != zone_id:
            raise InvalidZoneError("Zone id cannot be changed")
        with self._lock:
            current = self._zones.get(zone_id)
            if current is None:
                raise ZoneNotFoundError(zone_id)
            updated = validate_zone(dataclasses.replace(current, **changes))
            self._zones[zone_id] = updated
        logging.info(f"Updated zone '{updated.name}' (id={zone_id}): {sorted(changes)}")
        return updated

    def remove(self, zone_id: str) -> Zone:
        with self._lock:
            removed = self._zones.pop(zone_id, None)
        if removed is None:
            raise ZoneNotFoundError(zone_id)
        logging.info(f"Removed zone '{removed.name}' (id={zone_id})")
        return removed
