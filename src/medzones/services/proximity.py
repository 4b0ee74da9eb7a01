"""Distance ranking of doctor records around a query point."""

from __future__ import annotations

import math
from typing import Sequence

from ..errors import InvalidRadiusError
from ..models.domain import GeoPoint, LocatableRecord, ProximityMatch
from .geospatial import haversine_km, validate_coordinates


def validate_radius(radius_km: float, max_radius_km: float | None = None) -> float:
    """Return the radius as float or raise InvalidRadiusError."""

    try:
        radius = float(radius_km)
    except (TypeError, ValueError) as exc:
        raise InvalidRadiusError(f"Radius must be numeric, got {radius_km!r}") from exc
    if not math.isfinite(radius) or radius < 0:
        raise InvalidRadiusError(f"Radius must be a finite value >= 0 km, got {radius}")
    if max_radius_km is not None and radius > max_radius_km:
        raise InvalidRadiusError(f"Radius {radius} km exceeds the {max_radius_km} km limit")
    return radius


def rank_by_proximity(
    origin: GeoPoint,
    records: Sequence[LocatableRecord],
    radius_km: float,
) -> list[ProximityMatch]:
    """Return verified, located records within ``radius_km`` of ``origin``, closest first.

    Filtering and ordering use the exact distance; the rounded value is only
    for display. Equal distances keep their input order.
    """

    validate_coordinates(origin.latitude, origin.longitude)
    radius = validate_radius(radius_km)

    matches: list[ProximityMatch] = []
    for record in records:
        if not record.verified or record.point is None:
            continue
        distance = haversine_km(
            origin.latitude,
            origin.longitude,
            record.point.latitude,
            record.point.longitude,
        )
        if distance <= radius:
            matches.append(
                ProximityMatch(
                    record=record,
                    distance_km=distance,
                    display_distance_km=round(distance, 2),
                )
            )

    matches.sort(key=lambda match: match.distance_km)
    return matches
