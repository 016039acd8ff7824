"""The Odds API HTTP client.

Paid, documented odds feed. Requires ODDS_API_KEY.
"""

import logging

from picklink.providers.http import JSONHTTPClient

logger = logging.getLogger(__name__)

ODDS_API_BASE_URL = "https://api.the-odds-api.com/v4/sports"

# Canonical sport code -> Odds API sport key
# TODO: tennis keys are per-tournament; look up the active ones via /v4/sports
SPORT_KEYS: dict[str, str] = {
    "tennis": "tennis_atp_aus_open_singles",
    "basketball": "basketball_nba",
    "football": "americanfootball_nfl",
    "baseball": "baseball_mlb",
    "hockey": "icehockey_nhl",
    "soccer": "soccer_epl",
    "mma": "mma_mixed_martial_arts",
}

DEFAULT_MARKETS = "h2h,spreads,totals"
DEFAULT_BOOKMAKER = "bovada"


class OddsAPIClient(JSONHTTPClient):
    """Low-level Odds API client."""

    LOG_TAG = "ODDS_API"

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        retry_count: int = 2,
        bookmaker: str = DEFAULT_BOOKMAKER,
    ):
        super().__init__(timeout=timeout, retry_count=retry_count)
        self._api_key = api_key
        self._bookmaker = bookmaker

    @property
    def bookmaker(self) -> str:
        return self._bookmaker

    def get_sport_key(self, sport: str) -> str | None:
        return SPORT_KEYS.get(sport.lower())

    def get_odds(self, sport: str) -> list | None:
        """Fetch upcoming events with odds for a sport.

        Returns:
            Raw event list, or None on failure or unknown sport
        """
        sport_key = self.get_sport_key(sport)
        if not sport_key:
            logger.debug("[ODDS_API] Unknown sport: %s", sport)
            return None

        data = self._request(
            f"{ODDS_API_BASE_URL}/{sport_key}/odds/",
            params={
                "apiKey": self._api_key,
                "regions": "us",
                "markets": DEFAULT_MARKETS,
                "bookmakers": self._bookmaker,
            },
        )
        if data is not None and not isinstance(data, list):
            logger.warning("[ODDS_API] Unexpected payload type for %s: %s", sport, type(data))
            return None
        return data
