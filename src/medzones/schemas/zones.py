"""Pydantic request/response models for zone endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ..errors import InvalidInputError
from ..models.domain import BatchResult, Zone
from ..services.geospatial import polygon_centroid


class PointModel(BaseModel):
    lat: float
    lng: float


class ZoneModel(BaseModel):
    id: str
    name: str
    type: Literal["circle", "polygon"]
    center: Optional[PointModel] = None
    radius_km: Optional[float] = None
    coordinates: list[PointModel] = Field(default_factory=list)
    centroid: Optional[PointModel] = Field(default=None, description="Label point for map display.")
    color: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_domain(cls, zone: Zone) -> "ZoneModel":
        center = PointModel(lat=zone.center.latitude, lng=zone.center.longitude) if zone.center else None
        centroid = center
        if zone.type == "polygon":
            try:
                lat, lng = polygon_centroid(zone.coordinates)
                centroid = PointModel(lat=lat, lng=lng)
            except InvalidInputError:
                centroid = None
        return cls(
            id=zone.id,
            name=zone.name,
            type=zone.type,
            center=center,
            radius_km=zone.radius_km,
            coordinates=[PointModel(lat=lat, lng=lng) for lat, lng in zone.coordinates],
            centroid=centroid,
            color=zone.color,
            description=zone.description,
            is_active=zone.is_active,
        )


class ZoneMatchResponse(BaseModel):
    lat: float
    lng: float
    matched: bool
    zone_id: Optional[str] = None
    zone_name: Optional[str] = None


class ZoneCountModel(BaseModel):
    zone: ZoneModel
    doctor_count: int


class ZoneGroupModel(BaseModel):
    zone_name: str
    count: int
    doctor_ids: list[Optional[str]]


class RecordErrorModel(BaseModel):
    record_id: Optional[str]
    error: str


class BatchResultResponse(BaseModel):
    assigned_count: int
    unassigned_count: int
    errors: list[RecordErrorModel]
    has_errors: bool

    @classmethod
    def from_domain(cls, result: BatchResult) -> "BatchResultResponse":
        return cls(
            assigned_count=result.assigned_count,
            unassigned_count=result.unassigned_count,
            errors=[RecordErrorModel(record_id=err.record_id, error=err.error_message) for err in result.errors],
            has_errors=result.has_errors,
        )
