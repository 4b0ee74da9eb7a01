"""Doctor search and neighborhood API schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import LocatableRecord, ProximityMatch


class NearbyDoctorModel(BaseModel):
    record_id: Optional[str]
    name: Optional[str] = None
    distance_km: float = Field(..., description="Distance rounded to two decimals.")
    latitude: float
    longitude: float
    address: Optional[str] = None

    @classmethod
    def from_match(cls, match: ProximityMatch) -> "NearbyDoctorModel":
        record = match.record
        return cls(
            record_id=record.id,
            name=record.name,
            distance_km=match.display_distance_km,
            latitude=record.point.latitude,
            longitude=record.point.longitude,
            address=record.address,
        )


class NearbyDoctorsResponse(BaseModel):
    lat: float
    lng: float
    radius_km: float
    count: int
    results: List[NearbyDoctorModel]


class DoctorSummaryModel(BaseModel):
    record_id: Optional[str]
    name: Optional[str] = None
    address: Optional[str] = None
    neighborhood: str

    @classmethod
    def from_record(cls, record: LocatableRecord, neighborhood: str) -> "DoctorSummaryModel":
        return cls(record_id=record.id, name=record.name, address=record.address, neighborhood=neighborhood)


class AddressClassifyRequest(BaseModel):
    address: Optional[str] = Field(default=None, description="Free-text address to classify.")


class AddressClassifyResponse(BaseModel):
    address: Optional[str]
    neighborhood: str


class NeighborhoodOptionModel(BaseModel):
    value: str
    label: str
    count: int
