"""Bovada coupon endpoint HTTP client.

Bovada has no public API. Its site is powered by an undocumented JSON
coupon endpoint; this client fetches it and returns the raw payload.
It may break without notice.
"""

import logging

from picklink.config import DEFAULT_BOVADA_BASE_URL
from picklink.providers.http import JSONHTTPClient

logger = logging.getLogger(__name__)

# Canonical sport code -> coupon path
SPORT_PATHS: dict[str, str] = {
    "tennis": "/services/sports/event/coupon/events/A/description/tennis",
    "basketball": "/services/sports/event/coupon/events/A/description/basketball",
    "football": "/services/sports/event/coupon/events/A/description/football",
    "baseball": "/services/sports/event/coupon/events/A/description/baseball",
    "hockey": "/services/sports/event/coupon/events/A/description/hockey",
    "soccer": "/services/sports/event/coupon/events/A/description/soccer",
    "mma": "/services/sports/event/coupon/events/A/description/ufc-mma",
}

COUPON_PARAMS = {
    "marketFilterId": "def",
    "preMatchOnly": "true",
    "lang": "en",
}

# The endpoint rejects requests that do not look like a browser
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
}


class BovadaClient(JSONHTTPClient):
    """Low-level Bovada coupon client."""

    LOG_TAG = "BOVADA"

    def __init__(
        self,
        base_url: str = DEFAULT_BOVADA_BASE_URL,
        timeout: float = 10.0,
        retry_count: int = 2,
    ):
        self._base_url = base_url.rstrip("/")
        headers = {
            **BROWSER_HEADERS,
            "Origin": self._base_url,
            "Referer": f"{self._base_url}/sports",
        }
        super().__init__(timeout=timeout, retry_count=retry_count, headers=headers)

    def supports_sport(self, sport: str) -> bool:
        return sport.lower() in SPORT_PATHS

    def get_coupon(self, sport: str) -> list | None:
        """Fetch the coupon payload for one sport.

        Returns:
            List of event groups, or None on failure or unknown sport
        """
        path = SPORT_PATHS.get(sport.lower())
        if not path:
            logger.debug("[BOVADA] No coupon path for sport '%s'", sport)
            return None

        data = self._request(f"{self._base_url}{path}", params=COUPON_PARAMS)
        if data is not None and not isinstance(data, list):
            logger.warning("[BOVADA] Unexpected coupon payload type for %s: %s", sport, type(data))
            return None
        return data
