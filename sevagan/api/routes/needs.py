"""Blood-need routes, including the server-sent-events live feed.

New needs are pushed to every open /needs/stream connection. The stream
does not replay earlier needs; clients backfill with GET /needs first.
"""
import asyncio
from typing import List

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import StreamingResponse

from sevagan.api.deps import get_services
from sevagan.models.need import (
    BloodNeedCreate,
    BloodNeedRequest,
    NeedFeedItem,
    NeedRespondBody,
    NeedRespondResult,
)
from sevagan.services.broadcast import CLOSED, Broadcaster, Subscription
from sevagan.services.container import Services

router = APIRouter(prefix="/needs", tags=["needs"])


@router.post("", response_model=BloodNeedRequest, response_model_exclude_none=True)
async def create_need(
    payload: BloodNeedCreate = Body(...),
    services: Services = Depends(get_services),
):
    return services.needs.create(payload)


@router.get("", response_model=List[BloodNeedRequest], response_model_exclude_none=True)
async def list_needs(services: Services = Depends(get_services)):
    return services.needs.list()


@router.get("/feed", response_model=List[NeedFeedItem], response_model_exclude_none=True)
async def need_feed(
    limit: int = Query(20, ge=1, le=200),
    services: Services = Depends(get_services),
):
    """Latest needs with their derived urgency label."""
    return services.needs.feed(limit)


async def _event_stream(request: Request, broadcaster: Broadcaster,
                        sub: Subscription, keepalive: float):
    try:
        yield ": connected\n\n"
        while True:
            if await request.is_disconnected():
                break
            try:
                payload = await asyncio.wait_for(sub.get(), timeout=keepalive)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            if payload is CLOSED:
                break
            yield f"data: {payload}\n\n"
    finally:
        broadcaster.unsubscribe(sub)


@router.get("/stream")
async def stream_needs(request: Request, services: Services = Depends(get_services)):
    sub = services.broadcaster.subscribe()
    return StreamingResponse(
        _event_stream(
            request,
            services.broadcaster,
            sub,
            services.settings.STREAM_KEEPALIVE_SECONDS,
        ),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.post("/respond", response_model=NeedRespondResult, response_model_exclude_none=True)
async def respond_to_need(
    payload: NeedRespondBody = Body(...),
    services: Services = Depends(get_services),
):
    record, notify_to = services.relay.respond_to_need(
        payload.need_id, payload.contact, payload.message, payload.donor_name
    )
    return NeedRespondResult(ok=True, resp=record, notify_to=notify_to)


@router.get("/{need_id}", response_model=BloodNeedRequest, response_model_exclude_none=True)
async def get_need(need_id: str, services: Services = Depends(get_services)):
    return services.needs.get(need_id)
