"""Request/response bodies for the OTP login flow."""
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from sevagan.models.account import Account
from sevagan.models.base import AccountType, BloodGroup, CamelModel, Gender, blank_to_none


class SignupProfile(CamelModel):
    name: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    blood_group: Optional[BloodGroup] = None
    gender: Optional[Gender] = None
    dob: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_blank_fields(cls, data):
        if isinstance(data, dict):
            return {k: blank_to_none(v) for k, v in data.items()}
        return data


class OtpRequestBody(CamelModel):
    account_type: AccountType
    mobile: Optional[str] = None
    email: Optional[EmailStr] = None
    profile: Optional[SignupProfile] = None

    @field_validator("mobile", "email", mode="before")
    @classmethod
    def blank_contact(cls, v):
        return blank_to_none(v)


class OtpRequestResponse(CamelModel):
    request_id: str
    channels: List[str]
    dev_code: Optional[str] = None


class OtpVerifyBody(CamelModel):
    account_type: AccountType
    mobile: Optional[str] = None
    email: Optional[EmailStr] = None
    otp: str = Field(..., min_length=1)

    @field_validator("mobile", "email", mode="before")
    @classmethod
    def blank_contact(cls, v):
        return blank_to_none(v)


class OtpVerifyResponse(CamelModel):
    token: str
    account: Account


class AccountExistsResponse(CamelModel):
    exists: bool
    type: Optional[AccountType] = None
