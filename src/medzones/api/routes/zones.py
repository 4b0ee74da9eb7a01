"""API routes for zone lookup and assignment."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...errors import BatchCommitError, InvalidInputError
from ...schemas.zones import BatchResultResponse, ZoneCountModel, ZoneGroupModel, ZoneMatchResponse, ZoneModel
from ...services.export import zones_to_feature_collection
from ...services.locator import ZoneLocator
from ..dependencies import get_locator

router = APIRouter(prefix="/zones", tags=["zones"])


def _unavailable(exc: ConnectionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


@router.get("", response_model=List[ZoneModel], status_code=status.HTTP_200_OK)
def list_zones(
    active_only: bool = Query(default=False, description="Only return zones used for classification"),
    locator: ZoneLocator = Depends(get_locator),
) -> List[ZoneModel]:
    try:
        zones = locator.zones.list_active_zones() if active_only else locator.zones.list_zones()
    except ConnectionError as exc:
        raise _unavailable(exc) from exc
    return [ZoneModel.from_domain(zone) for zone in zones]


@router.get("/geojson", status_code=status.HTTP_200_OK)
def export_zones_geojson(locator: ZoneLocator = Depends(get_locator)) -> dict:
    try:
        return zones_to_feature_collection(locator.zones.list_active_zones())
    except ConnectionError as exc:
        raise _unavailable(exc) from exc


@router.get("/classify", response_model=ZoneMatchResponse, status_code=status.HTTP_200_OK)
def classify_point(
    lat: float = Query(..., description="Latitude in WGS84 degrees"),
    lng: float = Query(..., description="Longitude in WGS84 degrees"),
    locator: ZoneLocator = Depends(get_locator),
) -> ZoneMatchResponse:
    try:
        zone = locator.classify_point(lat, lng)
    except InvalidInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Could not process location: {exc}",
        ) from exc
    except ConnectionError as exc:
        raise _unavailable(exc) from exc

    return ZoneMatchResponse(
        lat=lat,
        lng=lng,
        matched=zone is not None,
        zone_id=zone.id if zone else None,
        zone_name=zone.name if zone else None,
    )


@router.get("/counts", response_model=List[ZoneCountModel], status_code=status.HTTP_200_OK)
def zone_doctor_counts(locator: ZoneLocator = Depends(get_locator)) -> List[ZoneCountModel]:
    try:
        counts = locator.zone_doctor_counts()
    except ConnectionError as exc:
        raise _unavailable(exc) from exc
    return [ZoneCountModel(zone=ZoneModel.from_domain(zone), doctor_count=count) for zone, count in counts]


@router.get("/groups", response_model=List[ZoneGroupModel], status_code=status.HTTP_200_OK)
def doctors_by_zone(locator: ZoneLocator = Depends(get_locator)) -> List[ZoneGroupModel]:
    try:
        groups = locator.doctors_by_zone()
    except ConnectionError as exc:
        raise _unavailable(exc) from exc
    return [
        ZoneGroupModel(zone_name=name, count=len(records), doctor_ids=[record.id for record in records])
        for name, records in groups.items()
    ]


@router.post("/assignments", response_model=BatchResultResponse, status_code=status.HTTP_200_OK)
def run_zone_assignment(locator: ZoneLocator = Depends(get_locator)) -> BatchResultResponse:
    """Recompute every doctor's zone and commit the result as one unit.

    Per-doctor failures are listed in ``errors``; a failed commit returns 502
    and leaves previous assignments untouched.
    """
    try:
        result = locator.run_zone_assignment_batch()
    except BatchCommitError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ConnectionError as exc:
        raise _unavailable(exc) from exc

    if result.has_errors:
        logging.warning(f"Zone assignment completed with {len(result.errors)} record errors")
    return BatchResultResponse.from_domain(result)
