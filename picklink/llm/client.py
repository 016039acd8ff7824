"""OpenAI client factory and JSON chat helper.

Both LLM collaborators (pick extraction and escalation) send one system
prompt plus one user prompt and expect a single JSON object back.
"""

import json
import logging
from typing import Any

from openai import AsyncOpenAI

from picklink.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_client(settings: Settings | None = None) -> AsyncOpenAI | None:
    """Build an async OpenAI client, or None when no API key is configured."""
    settings = settings or get_settings()
    if not settings.openai_api_key:
        return None

    kwargs: dict[str, Any] = {"api_key": settings.openai_api_key}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return AsyncOpenAI(**kwargs)


class JSONChat:
    """Sends a system/user prompt pair and parses the JSON reply."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        max_tokens: int = 300,
    ):
        self._client = client
        self._model = model
        self._max_tokens = max_tokens

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, system: str, user: str) -> dict[str, Any]:
        """Run one completion and return the parsed JSON object.

        Raises:
            ValueError: Reply was empty, not JSON, or not a JSON object
            openai.OpenAIError: Transport or API failure
        """
        response = await self._client.chat.completions.create(
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=0,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )

        if not response.choices:
            raise ValueError("LLM returned no choices")

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise ValueError("LLM returned empty content")

        data = json.loads(_strip_code_fence(content.strip()))
        if not isinstance(data, dict):
            raise ValueError(f"LLM returned {type(data).__name__}, expected object")
        return data


def _strip_code_fence(text: str) -> str:
    """Remove a ```json ... ``` wrapper some models add despite instructions."""
    if not text.startswith("```"):
        return text
    lines = text.splitlines()
    if lines and lines[0].startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()
