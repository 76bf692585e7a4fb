from fastapi import APIRouter, Depends

from sevagan.api.deps import get_services
from sevagan.models.stats import StatsResponse
from sevagan.services.container import Services

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def stats(services: Services = Depends(get_services)):
    return StatsResponse(
        donors=services.donors.count(),
        requests=services.needs.count(),
        requests_today=services.needs.count_today(),
        accounts=services.accounts.count(),
        subscribers=services.broadcaster.count(),
    )
