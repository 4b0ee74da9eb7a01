"""Doctor search endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...errors import InvalidInputError
from ...schemas.doctors import DoctorSummaryModel, NearbyDoctorModel, NearbyDoctorsResponse
from ...services.addresses import classify_address
from ...services.locator import ZoneLocator
from ..dependencies import get_locator

router = APIRouter(prefix="/doctors", tags=["doctors"])


@router.get("/nearby", response_model=NearbyDoctorsResponse, status_code=status.HTTP_200_OK)
def find_nearby_doctors(
    lat: float = Query(..., description="Latitude in WGS84 degrees"),
    lng: float = Query(..., description="Longitude in WGS84 degrees"),
    radius_km: Optional[float] = Query(default=None, ge=0, description="Search radius in kilometers"),
    locator: ZoneLocator = Depends(get_locator),
) -> NearbyDoctorsResponse:
    effective_radius = locator.default_radius_km if radius_km is None else radius_km
    try:
        matches = locator.find_nearby(lat, lng, effective_radius)
    except InvalidInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Could not process location: {exc}",
        ) from exc
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    results = [NearbyDoctorModel.from_match(match) for match in matches]
    return NearbyDoctorsResponse(lat=lat, lng=lng, radius_km=effective_radius, count=len(results), results=results)


@router.get("/by-neighborhood", response_model=List[DoctorSummaryModel], status_code=status.HTTP_200_OK)
def doctors_by_neighborhood(
    barrio: Optional[str] = Query(default=None, description="Neighborhood label; empty returns every doctor"),
    locator: ZoneLocator = Depends(get_locator),
) -> List[DoctorSummaryModel]:
    try:
        records = locator.doctors_in_neighborhood(barrio)
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return [DoctorSummaryModel.from_record(record, classify_address(record.address)) for record in records]
