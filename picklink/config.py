"""Application settings.

Read once from environment variables (and a .env file in the working
directory, if present). Call reset_settings() to re-read, e.g. in tests.

Environment variables:
    OPENAI_API_KEY: Enables the LLM extractor and escalation resolver
    OPENAI_BASE_URL: Alternate OpenAI-compatible endpoint
    PICKLINK_LLM_MODEL: Model for LLM calls (default: gpt-4o-mini)
    PICKLINK_ESCALATION_TIMEOUT: Seconds to wait for escalation (default: 20)
    PICKLINK_MAX_ESCALATION_EVENTS: Events sent to escalation (default: 50)
    ODDS_API_KEY: Enables The Odds API provider
    PICKLINK_EVENT_CACHE_TTL: Event cache lifetime in seconds (default: 300)
    PICKLINK_HTTP_TIMEOUT: Provider request timeout in seconds (default: 10)
    PICKLINK_BOVADA_BASE_URL: Bovada host (default: https://www.bovada.lv)
    PICKLINK_LOG_LEVEL: Log level (default: INFO)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BOVADA_BASE_URL = "https://www.bovada.lv"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    openai_api_key: str | None = None
    openai_base_url: str | None = None
    llm_model: str = "gpt-4o-mini"
    escalation_timeout: float = 20.0
    max_escalation_events: int = 50
    odds_api_key: str | None = None
    event_cache_ttl: float = 300.0
    http_timeout: float = 10.0
    bovada_base_url: str = DEFAULT_BOVADA_BASE_URL
    log_level: str = "INFO"

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ
        return cls(
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            openai_base_url=env.get("OPENAI_BASE_URL") or None,
            llm_model=env.get("PICKLINK_LLM_MODEL", "gpt-4o-mini"),
            escalation_timeout=_float_env("PICKLINK_ESCALATION_TIMEOUT", 20.0),
            max_escalation_events=int(_float_env("PICKLINK_MAX_ESCALATION_EVENTS", 50)),
            odds_api_key=env.get("ODDS_API_KEY") or None,
            event_cache_ttl=_float_env("PICKLINK_EVENT_CACHE_TTL", 300.0),
            http_timeout=_float_env("PICKLINK_HTTP_TIMEOUT", 10.0),
            bovada_base_url=env.get(
                "PICKLINK_BOVADA_BASE_URL", DEFAULT_BOVADA_BASE_URL
            ).rstrip("/"),
            log_level=env.get("PICKLINK_LOG_LEVEL", "INFO").upper(),
        )


def _float_env(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("[CONFIG] Invalid %s=%r, using default %s", name, value, default)
        return default


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    global _settings

    if _settings is None:
        env_path = Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)
        _settings = Settings.from_env()

    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the env."""
    global _settings
    _settings = None
