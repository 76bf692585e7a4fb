"""Ad-hoc notification of a donor."""
from fastapi import APIRouter, Body, Depends

from sevagan.api.deps import get_services
from sevagan.models.notification import NotifyBody
from sevagan.services.container import Services

router = APIRouter(prefix="/notify", tags=["notify"])


@router.post("")
async def notify_donor(
    payload: NotifyBody = Body(...),
    services: Services = Depends(get_services),
):
    services.relay.notify_donor(payload.mobile, payload.donor_id, payload.message)
    return {"ok": True}
