"""LLM-backed collaborators: pick extraction and escalation.

Usage:
    from picklink.llm import create_llm_components

    parser, resolver = create_llm_components()
    if resolver:
        policy = ResolutionPolicy(resolver=resolver, timeout=20)
"""

from picklink.config import Settings, get_settings
from picklink.llm.client import JSONChat, create_client
from picklink.llm.escalation import LLMEscalationResolver
from picklink.llm.parser import LLMPickParser


def create_llm_components(
    settings: Settings | None = None,
) -> tuple[LLMPickParser | None, LLMEscalationResolver | None]:
    """Build the LLM parser and resolver, or (None, None) without an API key."""
    settings = settings or get_settings()
    client = create_client(settings)
    if client is None:
        return None, None

    return (
        LLMPickParser(JSONChat(client, settings.llm_model, max_tokens=500)),
        LLMEscalationResolver(JSONChat(client, settings.llm_model, max_tokens=200)),
    )


__all__ = [
    "JSONChat",
    "LLMEscalationResolver",
    "LLMPickParser",
    "create_client",
    "create_llm_components",
]
