"""LLM-backed pick extraction.

Turns free-text wagers into a Pick, including the sport and league the
pattern extractor cannot infer.
"""

import logging

from openai import OpenAIError

from picklink.core.sports import normalize_sport
from picklink.core.types import Pick
from picklink.exceptions import ExtractionError
from picklink.llm.client import JSONChat

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a sports betting pick parser. Your job is to extract structured data from betting picks.

Given a betting pick message, extract:
1. isValidPick: boolean - Is this actually a betting pick? (not just casual conversation)
2. sport: string - The sport (e.g., "tennis", "basketball", "football", "baseball", "hockey", "soccer", "mma")
3. league: string | null - The league/tournament if identifiable (e.g., "ATP", "NFL", "NBA", "NHL", "MLB", "UFC")
4. players: string[] - Player or team names mentioned (even partial names like last names)
5. betType: string - Type of bet: "ML" (moneyline), "spread", "over", "under", "prop", or description
6. line: number | null - The line/spread number if applicable (e.g., -3.5, 23.5)
7. odds: string | null - The odds (e.g., "-110", "+150")
8. units: number | null - The unit size if mentioned
9. description: string - A clean description of the bet

Context clues for sport identification:
- Tennis: Player last names, "doubles", ATP/WTA, Grand Slam names
- Basketball: Team cities, NBA teams, "points", college team names
- Football: NFL teams, college teams, "spread"
- Baseball: MLB teams, "run line"
- Hockey: NHL teams, "puck line"
- Soccer: Club names, leagues like EPL, La Liga, Serie A
- MMA/UFC: Fighter names, "by KO", "by submission"

Respond with a single JSON object only. No markdown, no explanation."""


class LLMPickParser:
    """Extracts picks with a chat model."""

    def __init__(self, chat: JSONChat):
        self._chat = chat

    async def parse(self, text: str) -> Pick | None:
        """Extract a pick from text.

        Returns:
            Pick, or None if the model call or its reply was unusable
        """
        try:
            return await self._extract(text)
        except ExtractionError as e:
            logger.warning(
                "[LLM] %s could not extract pick from '%s': %s", self._chat.model, text[:60], e
            )
            return None

    async def _extract(self, text: str) -> Pick:
        user = f'Parse this betting pick:\n\n"{text}"\n\nRespond with JSON only:'
        try:
            data = await self._chat.complete(SYSTEM_PROMPT, user)
        except (OpenAIError, ValueError) as e:
            raise ExtractionError(str(e)) from e

        try:
            pick = Pick.from_dict(data)
            pick.sport = normalize_sport(pick.sport)
        except (TypeError, ValueError, AttributeError) as e:
            raise ExtractionError(f"Unexpected reply shape: {e}") from e

        logger.debug(
            "[LLM] Extracted '%s' -> valid=%s players=%s sport=%s",
            text[:60],
            pick.is_valid_pick,
            pick.players,
            pick.sport,
        )
        return pick
