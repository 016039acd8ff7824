"""LLM-backed escalation resolver.

Asks a chat model to pick the event a wager refers to when lexical
scoring is inconclusive. Any failure surfaces as EscalationError; the
resolution policy turns that into "no selection".
"""

import json
import logging
from collections.abc import Sequence
from typing import Any

from openai import OpenAIError

from picklink.core.types import EscalationOutcome, Event, Pick
from picklink.exceptions import EscalationError
from picklink.llm.client import JSONChat

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a sports betting event matcher. Given a betting pick and a list of events, find the best matching event.

Consider:
- Player/team name similarity (including partial matches, nicknames, last names)
- Sport and league context
- Timing (prefer upcoming events)

If no good match exists, respond with: {"matchIndex": null, "confidence": 0, "reasoning": "..."}
Otherwise respond with: {"matchIndex": <number>, "confidence": <0-1>, "reasoning": "..."}

Respond with valid JSON only."""


def summarize_events(events: Sequence[Event]) -> list[dict[str, Any]]:
    """Compact, index-addressed event summaries for the prompt."""
    return [
        {
            "index": index,
            "sport": event.sport,
            "league": event.league,
            "description": event.description or event.display_name,
            "participant1": event.participant1,
            "participant2": event.participant2,
            "startTime": event.start_time.isoformat() if event.start_time else None,
        }
        for index, event in enumerate(events)
    ]


def build_user_prompt(pick: Pick, events: Sequence[Event]) -> str:
    return (
        "Find the matching event for this pick:\n\n"
        f"Pick: {json.dumps(pick.to_dict(), indent=2, default=str)}\n\n"
        "Available events:\n"
        f"{json.dumps(summarize_events(events), indent=2)}\n\n"
        "Which event index best matches? JSON only:"
    )


def parse_outcome(data: dict[str, Any], event_count: int) -> EscalationOutcome:
    """Validate a decoded reply and convert it to an EscalationOutcome.

    Raises:
        EscalationError: Reply is missing fields or the index is unusable
    """
    if "matchIndex" not in data:
        raise EscalationError("Reply has no matchIndex")

    reasoning = data.get("reasoning")
    reasoning = reasoning if isinstance(reasoning, str) else ""

    confidence = data.get("confidence", 0)
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise EscalationError(f"Invalid confidence: {confidence!r}")

    index = data["matchIndex"]
    if index is None:
        return EscalationOutcome.no_match(reasoning)

    # JSON numbers like 2.0 are acceptable; 2.5 and "2" are not
    if isinstance(index, float) and index.is_integer():
        index = int(index)
    if isinstance(index, bool) or not isinstance(index, int):
        raise EscalationError(f"Invalid matchIndex: {index!r}")
    if not 0 <= index < event_count:
        raise EscalationError(f"matchIndex {index} out of range for {event_count} events")

    return EscalationOutcome(
        index=index,
        confidence=max(0.0, min(float(confidence), 1.0)),
        reasoning=reasoning,
    )


class LLMEscalationResolver:
    """EscalationResolver backed by a chat model."""

    def __init__(self, chat: JSONChat):
        self._chat = chat

    async def resolve(self, pick: Pick, events: Sequence[Event]) -> EscalationOutcome:
        if not events:
            return EscalationOutcome.no_match("No events supplied")

        try:
            data = await self._chat.complete(SYSTEM_PROMPT, build_user_prompt(pick, events))
        except (OpenAIError, ValueError) as e:
            logger.warning("[LLM] Escalation request to %s failed: %s", self._chat.model, e)
            raise EscalationError(str(e)) from e

        outcome = parse_outcome(data, len(events))
        logger.debug(
            "[LLM] Escalation players=%s -> index=%s (confidence=%.2f)",
            pick.players,
            outcome.index,
            outcome.confidence,
        )
        return outcome
