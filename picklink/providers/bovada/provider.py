"""Bovada event provider.

Normalizes Bovada coupon payloads into Event dataclasses.

Payload shape (per sport): a list of groups, each with
- path: category breadcrumbs, e.g. [{type: "LEAGUE", description: "NBA"}, ...]
- events: [{id, description, link, startTime (epoch ms), live, competitors}]
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from typing import Any

from picklink.core import Event, EventProvider
from picklink.providers.bovada.client import SPORT_PATHS, BovadaClient

logger = logging.getLogger(__name__)


def parse_coupon_response(data: Any, sport: str) -> list[Event]:
    """Convert a coupon payload to events. Malformed groups are skipped."""
    events: list[Event] = []
    if not isinstance(data, list):
        return events

    for group in data:
        if not isinstance(group, dict) or not group.get("events"):
            continue

        path = group.get("path")
        if not isinstance(path, list):
            path = []
        path = [entry for entry in path if isinstance(entry, dict)]
        league = _league_from_path(path) or _text(group.get("description"))

        raw_events = group["events"]
        if not isinstance(raw_events, list):
            continue

        for raw in raw_events:
            event = _parse_event(raw, sport, league, path)
            if event:
                events.append(event)

    return events


def _league_from_path(path: list[dict]) -> str | None:
    """League description from the LEAGUE entry, else the TOUR entry."""
    for kind in ("LEAGUE", "TOUR"):
        for entry in path:
            if isinstance(entry, dict) and entry.get("type") == kind:
                return _text(entry.get("description"))
    return None


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _parse_event(raw: Any, sport: str, league: str | None, path: list[dict]) -> Event | None:
    if not isinstance(raw, dict):
        return None

    competitors = raw.get("competitors")
    if not isinstance(competitors, list):
        competitors = []
    names = [_text(c.get("name")) for c in competitors[:2] if isinstance(c, dict)]
    names += [None] * (2 - len(names))

    return Event(
        id=str(raw["id"]) if raw.get("id") is not None else None,
        sport=sport,
        league=league,
        description=_text(raw.get("description")),
        display_name=_text(raw.get("description")),
        participant1=names[0],
        participant2=names[1],
        start_time=_parse_start_time(raw.get("startTime")),
        link=_text(raw.get("link")),
        live=bool(raw.get("live", False)),
        raw=raw,
        path=path,
    )


def _parse_start_time(value: Any) -> datetime | None:
    """Bovada start times are epoch milliseconds."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return datetime.fromtimestamp(float(value) / 1000, tz=UTC)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


class BovadaProvider(EventProvider):
    """Events scraped from Bovada's coupon endpoint."""

    # Parallel sport fetches when no sport is given
    MAX_WORKERS = len(SPORT_PATHS)

    def __init__(self, client: BovadaClient | None = None):
        self._client = client or BovadaClient()

    @property
    def name(self) -> str:
        return "bovada"

    def supports_sport(self, sport: str | None) -> bool:
        return sport is None or self._client.supports_sport(sport)

    def get_events(self, sport: str | None) -> list[Event]:
        """Fetch events for a sport, or for every sport in parallel."""
        if sport is None:
            return self._get_all_events()

        if not self._client.supports_sport(sport):
            return []

        data = self._client.get_coupon(sport)
        if data is None:
            return []

        events = parse_coupon_response(data, sport.lower())
        logger.debug("[BOVADA] %d %s events", len(events), sport)
        return events

    def _get_all_events(self) -> list[Event]:
        sports = list(SPORT_PATHS)
        logger.info("[BOVADA] Fetching all sports (%d)", len(sports))

        # map() keeps sport order, so results are deterministic
        with ThreadPoolExecutor(max_workers=self.MAX_WORKERS) as executor:
            results = list(executor.map(self._get_sport_events, sports))

        return [event for events in results for event in events]

    def _get_sport_events(self, sport: str) -> list[Event]:
        """One sport of an all-sports fetch; a failure only loses that sport."""
        try:
            return self.get_events(sport)
        except Exception as e:
            logger.warning("[BOVADA] Failed to fetch %s: %s", sport, e)
            return []
