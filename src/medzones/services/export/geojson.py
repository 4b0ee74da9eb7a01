"""GeoJSON export of the zone catalog for map clients."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from shapely.geometry import Point, mapping

from ...errors import InvalidInputError, InvalidZoneError
from ...models.domain import Zone
from ..geospatial import build_polygon


def generate_zone_color(index: int) -> str:
    """Generate distinct colors for zones."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
        "#e000a2", "#e000e0", "#09e0e0", "#e0002f", "#22e000",
        "#15dde0", "#e00017", "#08e000", "#3100e0", "#e0bb0b",
    ]
    return colors[index % len(colors)]


def zone_to_feature(zone: Zone, index: int = 0) -> Dict[str, Any]:
    """Convert a zone to a GeoJSON feature.

    Polygons become Polygon geometries in (lon, lat) order. Circles become a
    Point at the center with ``radius_km`` in the properties, since GeoJSON
    has no circle geometry.
    """

    properties: Dict[str, Any] = {
        "id": zone.id,
        "name": zone.name,
        "type": zone.type,
        "color": zone.color or generate_zone_color(index),
        "description": zone.description,
        "isActive": zone.is_active,
    }
    if zone.type == "circle":
        if zone.center is None:
            raise InvalidZoneError(f"Circle zone '{zone.id}' is missing a center")
        geometry = mapping(Point(zone.center.longitude, zone.center.latitude))
        properties["radius_km"] = zone.radius_km
    else:
        geometry = mapping(build_polygon(zone.coordinates))
    return {"type": "Feature", "id": zone.id, "geometry": geometry, "properties": properties}


def zones_to_feature_collection(zones: Sequence[Zone]) -> Dict[str, Any]:
    features: List[Dict[str, Any]] = []
    for idx, zone in enumerate(zones):
        try:
            features.append(zone_to_feature(zone, idx))
        except InvalidInputError as exc:
            logging.warning(f"Skipping zone {zone.id} in GeoJSON export: {exc}")
    return {"type": "FeatureCollection", "features": features}
