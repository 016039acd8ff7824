"""Resolution policy.

Decides the final answer for a pick from the lexical ranking, escalating
to a higher-cost resolver only when the lexical result is inconclusive.

Decision order:
1. No events or no players -> no match, no escalation
2. Lexical confidence >= 0.7 -> accept
3. Lexical confidence >= 0.5 and no resolver -> accept
4. Resolver available -> ask it; a selection is accepted at 0.9
5. Lexical confidence >= 0.3 -> accept as low-confidence fallback
6. Otherwise no match (candidates kept for diagnostics)

Resolver timeouts, exceptions and malformed answers all count as
"no selection". This module never raises because of the resolver.
"""

import asyncio
import logging
from collections.abc import Sequence

from picklink.consumers.matching.constants import (
    ACCEPT_THRESHOLD,
    ACCEPT_WITHOUT_ESCALATION_THRESHOLD,
    ESCALATION_CONFIDENCE,
    FALLBACK_THRESHOLD,
    MAX_ESCALATION_EVENTS,
)
from picklink.consumers.matching.scorer import score_pick
from picklink.core.interfaces import EscalationResolver
from picklink.core.types import (
    Candidate,
    EscalationOutcome,
    Event,
    MatchMethod,
    MatchResult,
    Pick,
)

logger = logging.getLogger(__name__)


class ResolutionPolicy:
    """Resolves picks to events with optional escalation.

    Holds no per-call state; one instance can serve concurrent resolutions.
    """

    def __init__(
        self,
        resolver: EscalationResolver | None = None,
        timeout: float | None = None,
        max_escalation_events: int = MAX_ESCALATION_EVENTS,
    ):
        """Initialize policy.

        Args:
            resolver: Escalation resolver, or None to stay lexical-only
            timeout: Seconds to wait for the resolver (None = no bound)
            max_escalation_events: Size of the event list sent to the resolver
        """
        self._resolver = resolver
        self._timeout = timeout
        self._max_escalation_events = max_escalation_events

    @property
    def can_escalate(self) -> bool:
        return self._resolver is not None

    async def resolve(self, pick: Pick, events: Sequence[Event]) -> MatchResult:
        """Resolve a pick against candidate events.

        Args:
            pick: Structured pick
            events: Candidate events in feed order

        Returns:
            MatchResult; confidence is the only failure channel
        """
        if not events or not pick.players:
            logger.debug(
                "[RESOLVE] players=%s: nothing to match (%d events)",
                pick.players,
                len(events) if events else 0,
            )
            return MatchResult.no_match()

        lexical = score_pick(pick, events)
        conf = lexical.confidence

        if conf >= ACCEPT_THRESHOLD or (
            conf >= ACCEPT_WITHOUT_ESCALATION_THRESHOLD and not self.can_escalate
        ):
            logger.debug("[RESOLVE] players=%s: lexical accept (%.2f)", pick.players, conf)
            return lexical

        if self.can_escalate:
            escalated = await self._escalate(pick, events, lexical.candidates)
            if escalated:
                return escalated

        if conf >= FALLBACK_THRESHOLD:
            logger.info(
                "[RESOLVE] players=%s: low-confidence fallback '%s' (%.2f)",
                pick.players,
                lexical.event.title if lexical.event else None,
                conf,
            )
            lexical.method = MatchMethod.FALLBACK
            return lexical

        logger.info(
            "[RESOLVE] players=%s: no match (best=%.2f, %d candidates)",
            pick.players,
            conf,
            len(lexical.candidates),
        )
        return MatchResult.no_match(lexical.candidates)

    async def _escalate(
        self,
        pick: Pick,
        events: Sequence[Event],
        candidates: list[Candidate],
    ) -> MatchResult | None:
        """Ask the escalation resolver. None means "no selection"."""
        bounded = list(events[: self._max_escalation_events])

        try:
            call = self._resolver.resolve(pick, bounded)
            if self._timeout is not None:
                outcome = await asyncio.wait_for(call, timeout=self._timeout)
            else:
                outcome = await call
        except asyncio.TimeoutError:
            logger.warning(
                "[ESCALATE] players=%s: resolver timed out after %.1fs",
                pick.players,
                self._timeout,
            )
            return None
        except Exception as e:
            logger.warning("[ESCALATE] players=%s: resolver failed: %s", pick.players, e)
            return None

        index = _validated_index(outcome, len(bounded))
        if index is None:
            logger.debug("[ESCALATE] players=%s: no selection", pick.players)
            return None

        event = bounded[index]
        logger.info(
            "[ESCALATE] players=%s -> '%s' (resolver confidence=%s): %s",
            pick.players,
            event.title,
            outcome.confidence,
            outcome.reasoning,
        )

        if not any(c.event is event for c in candidates):
            candidates = [Candidate(event=event, score=0.0), *candidates]

        return MatchResult(
            event=event,
            confidence=ESCALATION_CONFIDENCE,
            candidates=candidates,
            method=MatchMethod.ESCALATION,
            reasoning=outcome.reasoning or None,
        )


def _validated_index(outcome: object, size: int) -> int | None:
    """Selected index if the outcome is well-formed and in range."""
    if not isinstance(outcome, EscalationOutcome):
        if outcome is not None:
            logger.warning("[ESCALATE] Malformed resolver outcome: %r", outcome)
        return None

    index = outcome.index
    if index is None:
        return None

    # bool is an int subclass; True is not a position
    if isinstance(index, bool) or not isinstance(index, int):
        logger.warning("[ESCALATE] Non-integer selection index: %r", index)
        return None

    if not 0 <= index < size:
        logger.warning("[ESCALATE] Selection index %d outside 0..%d", index, size - 1)
        return None

    return index
