"""Pick API endpoints.

- POST /picks/parse - Extract a structured pick from text
- POST /picks/resolve - Resolve a structured pick to an event
- POST /picks/link - Full pipeline: text in, deep link out
"""

import logging

from fastapi import APIRouter, Depends

from picklink.api.dependencies import get_linker
from picklink.api.models import (
    LinkResponse,
    MatchResponse,
    ParseResponse,
    PickModel,
    PickText,
    ResolveRequest,
)
from picklink.core import MatchResult
from picklink.services import LinkStatus, PickLinker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/picks")


@router.post("/parse")
async def parse_pick(body: PickText, linker: PickLinker = Depends(get_linker)) -> ParseResponse:
    """Extract a pick from text. pick is null when extraction failed."""
    pick = await linker.extract(body.text, simple=body.simple)
    return ParseResponse(pick=PickModel.from_pick(pick) if pick else None)


@router.post("/resolve")
async def resolve_pick(
    body: ResolveRequest, linker: PickLinker = Depends(get_linker)
) -> MatchResponse:
    """Resolve a structured pick.

    Uses the supplied events when given, otherwise the event feed.
    """
    pick = body.pick.to_pick()

    if body.events is not None:
        events = [e.to_event() for e in body.events]
        result = await linker.resolve(pick, events)
        url = linker.build_url(result.event) if result.event else None
        return MatchResponse.from_result(result, url=url)

    link = await linker.link_pick(pick, force_mock=body.mock)
    if link.match is None:
        return MatchResponse.from_result(MatchResult.no_match())
    return MatchResponse.from_result(link.match, url=link.url)


@router.post("/link")
async def link_pick(body: PickText, linker: PickLinker = Depends(get_linker)) -> LinkResponse:
    """Extract, resolve and link a pick from text."""
    result = await linker.link(body.text, simple=body.simple, force_mock=body.mock)
    if result.status != LinkStatus.LINKED:
        logger.info("[API] link '%s': %s", body.text[:60], result.status.value)

    return LinkResponse(
        status=result.status.value,
        pick=PickModel.from_pick(result.pick) if result.pick else None,
        match=MatchResponse.from_result(result.match, url=result.url) if result.match else None,
        url=result.url,
        events_considered=result.events_considered,
    )
