"""Models for ad-hoc donor notifications and the delivery log."""
from pydantic import Field

from sevagan.models.base import CamelModel


class NotifyBody(CamelModel):
    mobile: str = Field(..., min_length=1)
    donor_id: str
    message: str


class NotificationRecord(NotifyBody):
    id: str
    created_at: int


class Delivery(CamelModel):
    identifier: str
    channel: str
    message: str
    created_at: int
