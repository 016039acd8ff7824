"""The Odds API event provider.

Normalizes Odds API events into Event dataclasses. The feed has no deep
links, so events carry no link and the URL builder constructs one.
"""

import logging
from datetime import datetime
from typing import Any

from picklink.core import Event, EventProvider
from picklink.providers.odds_api.client import OddsAPIClient

logger = logging.getLogger(__name__)


def parse_odds_response(data: Any, sport: str, bookmaker: str) -> list[Event]:
    """Convert an Odds API payload to events."""
    events: list[Event] = []
    if not isinstance(data, list):
        return events

    for raw in data:
        if not isinstance(raw, dict):
            continue

        home = raw.get("home_team") if isinstance(raw.get("home_team"), str) else None
        away = raw.get("away_team") if isinstance(raw.get("away_team"), str) else None
        name = f"{home} vs {away}" if home and away else None

        # Keep only the configured bookmaker's markets
        bookmakers = raw.get("bookmakers")
        if not isinstance(bookmakers, list):
            bookmakers = []
        markets = next(
            (
                b.get("markets") or []
                for b in bookmakers
                if isinstance(b, dict) and b.get("key") == bookmaker
            ),
            [],
        )

        events.append(
            Event(
                id=raw.get("id"),
                sport=sport,
                league=raw.get("sport_title") if isinstance(raw.get("sport_title"), str) else None,
                description=name,
                display_name=name,
                participant1=home,
                participant2=away,
                start_time=_parse_iso(raw.get("commence_time")),
                raw={**raw, "markets": markets},
            )
        )

    return events


def _parse_iso(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class OddsAPIProvider(EventProvider):
    """Events from The Odds API."""

    def __init__(self, client: OddsAPIClient):
        self._client = client

    @property
    def name(self) -> str:
        return "odds_api"

    def supports_sport(self, sport: str | None) -> bool:
        # The feed is keyed per sport; there is no "all sports" request
        return sport is not None and self._client.get_sport_key(sport) is not None

    def get_events(self, sport: str | None) -> list[Event]:
        if not self.supports_sport(sport):
            return []

        data = self._client.get_odds(sport)
        if data is None:
            return []

        events = parse_odds_response(data, sport.lower(), self._client.bookmaker)
        logger.debug("[ODDS_API] %d %s events", len(events), sport)
        return events
