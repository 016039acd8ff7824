"""The Odds API provider."""

from picklink.providers.odds_api.client import OddsAPIClient
from picklink.providers.odds_api.provider import OddsAPIProvider, parse_odds_response

__all__ = ["OddsAPIClient", "OddsAPIProvider", "parse_odds_response"]
