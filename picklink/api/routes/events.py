"""Event feed API endpoints.

- GET /events - List upcoming events for a sport (all sports if omitted)
- POST /events/cache/clear - Drop cached feed results
"""

import asyncio

from fastapi import APIRouter, Depends, Query

from picklink.api.dependencies import get_linker
from picklink.api.models import EventListResponse, EventModel
from picklink.services import PickLinker

router = APIRouter(prefix="/events")


@router.get("")
async def list_events(
    sport: str | None = Query(None, description="Sport code, e.g. tennis"),
    mock: bool = Query(False, description="Serve mock events only"),
    linker: PickLinker = Depends(get_linker),
) -> EventListResponse:
    events = await asyncio.to_thread(linker.feed.get_events, sport, mock)
    return EventListResponse(
        sport=sport,
        count=len(events),
        events=[EventModel.from_event(e) for e in events],
    )


@router.post("/cache/clear")
def clear_event_cache(linker: PickLinker = Depends(get_linker)) -> dict:
    linker.feed.clear_cache()
    return {"status": "cleared"}
