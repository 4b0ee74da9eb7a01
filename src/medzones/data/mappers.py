"""Conversion of raw zone and doctor documents into domain objects."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from ..models.domain import AssignedZone, GeoPoint, LocatableRecord, Zone


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    try:
        return float(str(value).replace(",", "."))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _coerce_point(raw: Any) -> Optional[GeoPoint]:
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        lat = _coerce_float(raw.get("lat", raw.get("latitude")))
        lng = _coerce_float(raw.get("lng", raw.get("longitude")))
    else:
        lat, lng = (_coerce_float(item) for item in raw)
    if lat is None or lng is None:
        return None
    return GeoPoint(lat, lng)


def _clean_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def zone_from_mapping(raw: Mapping[str, Any]) -> Zone:
    """Build a Zone from a stored document.

    Accepts ``center`` as ``{"lat", "lng"}`` and ``coordinates`` as a list of
    ``{"lat", "lng"}`` objects or ``[lat, lng]`` pairs. ``isActive`` defaults to
    True, matching how zones are created.
    """

    coordinates = tuple(
        point for point in (_coerce_point(item) for item in raw.get("coordinates") or ()) if point is not None
    )
    radius = raw.get("radius_km", raw.get("radius"))
    is_active = raw.get("isActive", raw.get("is_active", True))
    return Zone(
        id=str(raw.get("id") or ""),
        name=str(raw.get("name") or "").strip(),
        type=str(raw.get("type") or "").strip().lower(),
        center=_coerce_point(raw.get("center")),
        radius_km=_coerce_float(radius),
        coordinates=coordinates,
        color=_clean_str(raw.get("color")),
        description=_clean_str(raw.get("description")),
        is_active=is_active is not False,
    )


def zone_to_mapping(zone: Zone) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": zone.id,
        "name": zone.name,
        "type": zone.type,
        "color": zone.color,
        "description": zone.description,
        "isActive": zone.is_active,
    }
    if zone.type == "circle":
        payload["center"] = (
            {"lat": zone.center.latitude, "lng": zone.center.longitude} if zone.center else None
        )
        payload["radius"] = zone.radius_km
    else:
        payload["coordinates"] = [{"lat": lat, "lng": lng} for lat, lng in zone.coordinates]
    return payload


def resolve_address(raw: Mapping[str, Any]) -> Optional[str]:
    """Prefer the geocoded ``formattedAddress``; fall back to the legacy ``ubicacion`` text."""

    return _clean_str(raw.get("formattedAddress")) or _clean_str(raw.get("ubicacion"))


def record_from_mapping(raw: Mapping[str, Any]) -> LocatableRecord:
    """Build a LocatableRecord from a doctor document.

    Unparseable coordinates become NaN so the record is still listed and the
    fault surfaces where the coordinates are used.
    """

    record_id = _clean_str(raw.get("id"))
    try:
        lat = _coerce_float(raw.get("latitude"))
        lng = _coerce_float(raw.get("longitude"))
    except ValueError as exc:
        logging.warning(f"Doctor {record_id} has malformed coordinates: {exc}")
        lat = lng = float("nan")
    point = GeoPoint(lat, lng) if lat is not None and lng is not None else None

    assigned = raw.get("assignedZone")
    assigned_zone = None
    if isinstance(assigned, Mapping) and assigned.get("id"):
        assigned_zone = AssignedZone(id=str(assigned["id"]), name=str(assigned.get("name") or ""))

    return LocatableRecord(
        id=record_id,
        point=point,
        address=resolve_address(raw),
        verified=raw.get("verified") is True,
        assigned_zone=assigned_zone,
        name=_clean_str(raw.get("nombre") or raw.get("name")),
        raw=dict(raw),
    )


def load_zones_file(path: Path) -> list[Zone]:
    """Load zones from a JSON file holding a list or a ``{"zones": [...]}`` object."""

    if not path.exists():
        raise FileNotFoundError(f"Zones file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    items = payload.get("zones", []) if isinstance(payload, dict) else payload
    if not isinstance(items, list):
        raise ValueError(f"Zones file '{path}' must contain a list of zones.")
    return [zone_from_mapping(item) for item in items]
