"""Export utilities for zone data."""

from .geojson import generate_zone_color, zone_to_feature, zones_to_feature_collection

__all__ = [
    "generate_zone_color",
    "zone_to_feature",
    "zones_to_feature_collection",
]
