"""Pick linking pipeline.

Wires the collaborators together for one piece of text:
extract pick -> fetch events -> resolve -> build deep link.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from picklink.config import Settings, get_settings
from picklink.consumers.extraction import parse_pick_simple
from picklink.consumers.matching import ResolutionPolicy
from picklink.core import Event, MatchResult, Pick
from picklink.llm import LLMPickParser, create_llm_components
from picklink.providers import create_default_providers
from picklink.services.event_feed import EventFeedService
from picklink.utilities.url_builder import build_event_url

logger = logging.getLogger(__name__)


class LinkStatus(str, Enum):
    NOT_A_PICK = "not_a_pick"
    NO_EVENTS = "no_events"
    NO_MATCH = "no_match"
    LINKED = "linked"


@dataclass
class LinkResult:
    """Everything produced while linking one pick."""

    status: LinkStatus
    pick: Pick | None = None
    match: MatchResult | None = None
    url: str | None = None
    events_considered: int = 0


class PickLinker:
    """End-to-end pick linking.

    The LLM parser is optional; without it (or with simple=True) the
    pattern extractor is used.
    """

    def __init__(
        self,
        feed: EventFeedService,
        policy: ResolutionPolicy,
        parser: LLMPickParser | None = None,
        base_url: str | None = None,
    ):
        self._feed = feed
        self._policy = policy
        self._parser = parser
        self._base_url = base_url or get_settings().bovada_base_url

    @property
    def feed(self) -> EventFeedService:
        return self._feed

    async def extract(self, text: str, simple: bool = False) -> Pick | None:
        """Extract a pick, preferring the LLM parser when configured."""
        if self._parser and not simple:
            return await self._parser.parse(text)
        return parse_pick_simple(text)

    async def resolve(self, pick: Pick, events: list[Event]) -> MatchResult:
        """Resolve a pick against caller-supplied events."""
        return await self._policy.resolve(pick, events)

    def build_url(self, event: Event) -> str:
        return build_event_url(event, self._base_url)

    async def link(self, text: str, simple: bool = False, force_mock: bool = False) -> LinkResult:
        """Run the full pipeline for one piece of text."""
        pick = await self.extract(text, simple=simple)
        if not pick or not pick.is_valid_pick:
            logger.debug("[LINK] Not a pick: '%s'", text[:60])
            return LinkResult(status=LinkStatus.NOT_A_PICK, pick=pick)

        return await self.link_pick(pick, force_mock=force_mock)

    async def link_pick(self, pick: Pick, force_mock: bool = False) -> LinkResult:
        """Resolve an already-extracted pick and build its link."""
        # Providers use blocking HTTP
        events = await asyncio.to_thread(self._feed.get_events, pick.sport, force_mock)
        if not events:
            return LinkResult(status=LinkStatus.NO_EVENTS, pick=pick)

        match = await self._policy.resolve(pick, events)
        if not match.is_matched:
            return LinkResult(
                status=LinkStatus.NO_MATCH,
                pick=pick,
                match=match,
                events_considered=len(events),
            )

        url = self.build_url(match.event)
        logger.info(
            "[LINK] players=%s -> %s (%s, confidence=%.2f)",
            pick.players,
            url,
            match.method.value,
            match.confidence,
        )
        return LinkResult(
            status=LinkStatus.LINKED,
            pick=pick,
            match=match,
            url=url,
            events_considered=len(events),
        )


def create_pick_linker(settings: Settings | None = None, use_llm: bool = True) -> PickLinker:
    """Build a PickLinker from settings.

    Args:
        settings: Settings (default: from environment)
        use_llm: Allow LLM extraction and escalation when an API key exists
    """
    settings = settings or get_settings()

    parser, resolver = create_llm_components(settings) if use_llm else (None, None)

    feed = EventFeedService(
        create_default_providers(settings),
        cache_ttl=settings.event_cache_ttl,
    )
    policy = ResolutionPolicy(
        resolver=resolver,
        timeout=settings.escalation_timeout,
        max_escalation_events=settings.max_escalation_events,
    )
    return PickLinker(feed, policy, parser=parser, base_url=settings.bovada_base_url)
