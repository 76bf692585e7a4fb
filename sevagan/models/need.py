"""Pydantic models for blood-need requests and donor responses."""
from typing import List, Optional

from pydantic import Field, field_validator

from sevagan.models.base import BloodGroup, CamelModel, TimeOption
from sevagan.services.time_utils import parse_iso_timestamp


class BloodNeedCreate(CamelModel):
    blood_group: BloodGroup
    city: str
    pincode: str
    needed_at_iso: str = Field(..., alias="neededAtISO")
    notes: Optional[str] = None
    time_option: Optional[TimeOption] = None
    requester_account_id: Optional[str] = None
    requester_name: Optional[str] = None

    @field_validator("needed_at_iso")
    @classmethod
    def validate_needed_at(cls, v):
        # raises ValueError on anything that is not an ISO timestamp
        parse_iso_timestamp(v)
        return v


class BloodNeedRequest(BloodNeedCreate):
    id: str
    created_at: int


class NeedFeedItem(BloodNeedRequest):
    urgency: str


class NeedRespondBody(CamelModel):
    need_id: str
    contact: str = Field(..., min_length=1)
    message: Optional[str] = None
    donor_name: Optional[str] = None


class NeedResponseRecord(CamelModel):
    id: str
    need_id: str
    contact: str
    message: Optional[str] = None
    donor_name: Optional[str] = None
    created_at: int


class NeedRespondResult(CamelModel):
    ok: bool = True
    resp: NeedResponseRecord
    notify_to: List[str]
