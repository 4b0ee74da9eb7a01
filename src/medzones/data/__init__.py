"""Ingestion helpers for stored zone and doctor documents."""

from .mappers import load_zones_file, record_from_mapping, resolve_address, zone_from_mapping, zone_to_mapping

__all__ = [
    "load_zones_file",
    "record_from_mapping",
    "resolve_address",
    "zone_from_mapping",
    "zone_to_mapping",
]
