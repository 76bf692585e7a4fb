"""Shared pydantic base and enumerations for the wire format."""
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

BloodGroup = Literal["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-", "Other"]
Gender = Literal["male", "female", "other"]
AccountType = Literal["individual", "hospital", "ngo"]
TimeOption = Literal["emergency", "within_1_hour", "within_5_hours", "today"]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def blank_to_none(v):
    """Web forms send "" for fields the user never filled in."""
    if isinstance(v, str) and not v.strip():
        return None
    return v
