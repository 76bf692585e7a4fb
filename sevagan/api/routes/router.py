from fastapi import APIRouter

from sevagan.api.routes.auth import router as auth_router
from sevagan.api.routes.donors import router as donors_router
from sevagan.api.routes.me import router as me_router
from sevagan.api.routes.needs import router as needs_router
from sevagan.api.routes.notify import router as notify_router
from sevagan.api.routes.stats import router as stats_router

api_router = APIRouter()

# Directory and live feed
api_router.include_router(donors_router)
api_router.include_router(needs_router)
api_router.include_router(notify_router)

# Login and profile
api_router.include_router(auth_router)
api_router.include_router(me_router)

api_router.include_router(stats_router)
