"""Address classification endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...schemas.doctors import AddressClassifyRequest, AddressClassifyResponse, NeighborhoodOptionModel
from ...services.locator import ZoneLocator
from ..dependencies import get_locator

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.post("/classify", response_model=AddressClassifyResponse, status_code=status.HTTP_200_OK)
def classify_address(
    payload: AddressClassifyRequest,
    locator: ZoneLocator = Depends(get_locator),
) -> AddressClassifyResponse:
    return AddressClassifyResponse(address=payload.address, neighborhood=locator.classify_address(payload.address))


@router.get("/neighborhoods", response_model=List[NeighborhoodOptionModel], status_code=status.HTTP_200_OK)
def neighborhood_options(locator: ZoneLocator = Depends(get_locator)) -> List[NeighborhoodOptionModel]:
    """Neighborhood filter options for verified doctors, most populated first."""
    try:
        options = locator.neighborhood_options()
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return [NeighborhoodOptionModel(**option) for option in options]
