"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import Polygon

from ..errors import InvalidCoordinatesError, InvalidZoneError

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def point_in_polygon(lat: float, lon: float, polygon_coords: Sequence[tuple[float, float]]) -> bool:
    """Return True if the point is inside the polygon denoted by (lat, lon) pairs.

    Even-odd ray casting, so clockwise and counter-clockwise rings behave the
    same. Polygons with fewer than three vertices never contain a point.
    """

    inside = False
    count = len(polygon_coords)
    if count < 3:
        return inside

    j = count - 1
    for i in range(count):
        lat_i, lon_i = polygon_coords[i]
        lat_j, lon_j = polygon_coords[j]
        if (lon_i > lon) != (lon_j > lon):
            crossing_lat = (lat_j - lat_i) * (lon - lon_i) / (lon_j - lon_i) + lat_i
            if lat < crossing_lat:
                inside = not inside
        j = i
    return inside


def validate_coordinates(lat: float, lon: float) -> None:
    """Raise InvalidCoordinatesError unless (lat, lon) is a finite WGS84 position."""

    try:
        lat_value = float(lat)
        lon_value = float(lon)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinatesError(f"Coordinates must be numeric, got ({lat!r}, {lon!r})") from exc

    if not (math.isfinite(lat_value) and math.isfinite(lon_value)):
        raise InvalidCoordinatesError(f"Coordinates must be finite, got ({lat_value}, {lon_value})")
    if not -90.0 <= lat_value <= 90.0:
        raise InvalidCoordinatesError(f"Latitude {lat_value} is outside [-90, 90]")
    if not -180.0 <= lon_value <= 180.0:
        raise InvalidCoordinatesError(f"Longitude {lon_value} is outside [-180, 180]")


def build_polygon(polygon_coords: Sequence[tuple[float, float]]) -> Polygon:
    """Build a shapely polygon (x=lon, y=lat) after checking it encloses an area."""

    if len(polygon_coords) < 3:
        raise InvalidZoneError(f"Polygon must have at least 3 vertices, got {len(polygon_coords)}")
    for lat, lon in polygon_coords:
        validate_coordinates(lat, lon)

    polygon = Polygon([(lon, lat) for lat, lon in polygon_coords])
    if polygon.area == 0:
        raise InvalidZoneError("Polygon vertices are collinear and enclose no area")
    return polygon


def polygon_centroid(polygon_coords: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """Return the (lat, lon) centroid of a polygon."""

    centroid = build_polygon(polygon_coords).centroid
    return centroid.y, centroid.x
