"""The caller's own account and linked donor profile."""
from fastapi import APIRouter, Body, Depends

from sevagan.api.deps import get_services, get_token
from sevagan.models.account import AccountUpdate, MeResponse, MeUpdateResponse
from sevagan.services.container import Services

router = APIRouter(prefix="/me", tags=["me"])


@router.get("", response_model=MeResponse, response_model_exclude_none=True)
async def get_me(token: str = Depends(get_token), services: Services = Depends(get_services)):
    account, donor = services.sessions.get_me(token)
    return MeResponse(account=account, donor=donor)


@router.post("", response_model=MeUpdateResponse, response_model_exclude_none=True)
async def update_me(
    payload: AccountUpdate = Body(...),
    token: str = Depends(get_token),
    services: Services = Depends(get_services),
):
    account = services.sessions.update_me(token, payload)
    return MeUpdateResponse(ok=True, account=account)
