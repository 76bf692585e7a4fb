"""Pydantic models for verified accounts and profile updates."""
from typing import Optional

from pydantic import EmailStr, field_validator

from sevagan.models.base import AccountType, CamelModel, blank_to_none
from sevagan.models.donor import Donor


class Account(CamelModel):
    id: str
    type: AccountType
    name: str
    mobile: Optional[str] = None
    email: Optional[str] = None
    created_at: int
    verified_at: Optional[int] = None
    avatar_base64: Optional[str] = None


class AccountUpdate(CamelModel):
    name: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[EmailStr] = None
    avatar_base64: Optional[str] = None

    @field_validator("mobile", "email", mode="before")
    @classmethod
    def blank_contact(cls, v):
        # "" means "not supplied", never "clear the field"
        return blank_to_none(v)


class MeResponse(CamelModel):
    account: Account
    donor: Optional[Donor] = None


class MeUpdateResponse(CamelModel):
    ok: bool = True
    account: Account
