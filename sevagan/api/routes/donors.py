"""Donor registration and search routes."""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from pydantic import ValidationError as PydanticValidationError

from sevagan.api.deps import get_services
from sevagan.core.errors import ValidationError
from sevagan.models.donor import Donor, DonorCreate, DonorSearchQuery, DonorSearchResponse
from sevagan.services.container import Services

router = APIRouter(prefix="/donors", tags=["donors"])


@router.post("", response_model=Donor, response_model_exclude_none=True)
async def create_donor(
    payload: DonorCreate = Body(...),
    services: Services = Depends(get_services),
):
    return services.donors.create(payload)


@router.get("", response_model=DonorSearchResponse, response_model_exclude_none=True)
async def search_donors(
    blood_group: Optional[str] = Query(None, alias="bloodGroup"),
    city: Optional[str] = None,
    pincode: Optional[str] = None,
    services: Services = Depends(get_services),
):
    """Exact-match filters; empty parameters are ignored."""
    try:
        query = DonorSearchQuery(
            blood_group=blood_group or None,
            city=city or None,
            pincode=pincode or None,
        )
    except PydanticValidationError as exc:
        raise ValidationError(f"Unknown blood group: {blood_group}") from exc
    results = services.donors.search(query)
    return DonorSearchResponse(results=results, total=len(results))
