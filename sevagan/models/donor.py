"""Pydantic models for donor registration and search."""
from typing import List, Optional

from pydantic import Field

from sevagan.models.base import BloodGroup, CamelModel, Gender


class DonorCreate(CamelModel):
    name: str
    age: int = Field(..., ge=0)
    gender: Gender
    blood_group: BloodGroup
    city: str
    pincode: str
    mobile: str
    email: Optional[str] = None
    account_id: Optional[str] = None


class Donor(DonorCreate):
    id: str
    created_at: int


class DonorSearchQuery(CamelModel):
    blood_group: Optional[BloodGroup] = None
    city: Optional[str] = None
    pincode: Optional[str] = None


class DonorSearchResponse(CamelModel):
    results: List[Donor]
    total: int
