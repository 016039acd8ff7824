"""Event providers.

Providers are tried in registration order; the first to return events
wins. The mock provider is always last so development works offline.
"""

from picklink.config import Settings, get_settings
from picklink.core import EventProvider
from picklink.providers.bovada import BovadaClient, BovadaProvider
from picklink.providers.mock import MockProvider, get_mock_events
from picklink.providers.odds_api import OddsAPIClient, OddsAPIProvider


def create_default_providers(settings: Settings | None = None) -> list[EventProvider]:
    """Build the provider chain: Odds API (if keyed), Bovada, mock."""
    settings = settings or get_settings()
    providers: list[EventProvider] = []

    if settings.odds_api_key:
        providers.append(
            OddsAPIProvider(OddsAPIClient(settings.odds_api_key, timeout=settings.http_timeout))
        )

    providers.append(
        BovadaProvider(
            BovadaClient(base_url=settings.bovada_base_url, timeout=settings.http_timeout)
        )
    )
    providers.append(MockProvider())
    return providers


__all__ = [
    "BovadaProvider",
    "MockProvider",
    "OddsAPIProvider",
    "create_default_providers",
    "get_mock_events",
]
