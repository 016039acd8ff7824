"""Lexical scorer.

Scores a pick against each candidate event using normalized names and
tiered substring/token rules, then ranks the candidates.

Scoring per event (additive):
- +0.2 sport matches (case-insensitive equality)
- +0.1 league hint is contained in the event league
- per pick player, the first rule that fires against the first participant
  that fires:
    exact normalized equality          +0.7
    player contained in participant    +0.6
    participant contained in player    +0.5
    a player token in a participant token  +0.4

A shared token never outscores a full-name match. Scoring is pure and
deterministic.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from picklink.consumers.matching.constants import (
    EXACT_MATCH_BONUS,
    LEAGUE_BONUS,
    MAX_CONFIDENCE,
    MIN_SUBSTRING_LENGTH,
    MIN_TOKEN_LENGTH,
    PARTICIPANT_IN_PLAYER_BONUS,
    PLAYER_IN_PARTICIPANT_BONUS,
    SCORE_PRECISION,
    SPORT_BONUS,
    TOKEN_MATCH_BONUS,
)
from picklink.consumers.matching.normalizer import normalize_name, tokenize
from picklink.core.types import Candidate, Event, MatchMethod, MatchResult, Pick

logger = logging.getLogger(__name__)


@dataclass
class _NormalizedParticipant:
    text: str
    tokens: list[str]


def participant_pool(event: Event) -> list[_NormalizedParticipant]:
    """Normalized participant texts for an event, in scan order.

    participant1, participant2, description, display_name. Values that are
    empty (before or after normalization) are skipped.
    """
    pool = []
    for value in (
        event.participant1,
        event.participant2,
        event.description,
        event.display_name,
    ):
        normalized = normalize_name(value)
        if normalized:
            pool.append(_NormalizedParticipant(normalized, tokenize(normalized)))
    return pool


def player_bonus(player: str, pool: Sequence[_NormalizedParticipant]) -> float:
    """Bonus for one normalized pick player against a participant pool.

    First participant that matches wins, not the best one.
    """
    if not player:
        return 0.0

    player_tokens = [t for t in tokenize(player) if len(t) > MIN_TOKEN_LENGTH]

    for participant in pool:
        text = participant.text

        if player == text:
            return EXACT_MATCH_BONUS

        if len(player) >= MIN_SUBSTRING_LENGTH and player in text:
            return PLAYER_IN_PARTICIPANT_BONUS

        if len(text) >= MIN_SUBSTRING_LENGTH and text in player:
            return PARTICIPANT_IN_PLAYER_BONUS

        # Last-name style partial match
        for token in player_tokens:
            if any(token in part for part in participant.tokens):
                return TOKEN_MATCH_BONUS

    return 0.0


def score_event(pick: Pick, event: Event) -> float:
    """Raw lexical score for one (pick, event) pair. Not clamped."""
    score = 0.0

    if pick.sport and event.sport:
        if pick.sport.lower() == event.sport.lower():
            score += SPORT_BONUS

    if pick.league and event.league:
        if pick.league.lower() in event.league.lower():
            score += LEAGUE_BONUS

    pool = participant_pool(event)
    for player in pick.players:
        score += player_bonus(normalize_name(player), pool)

    return round(score, SCORE_PRECISION)


def rank_candidates(pick: Pick, events: Sequence[Event]) -> list[Candidate]:
    """Score every event and return those above zero, best first.

    The sort is stable: equal scores keep their input order.
    """
    if not pick.players or not events:
        return []

    candidates = []
    for event in events:
        score = score_event(pick, event)
        if score > 0:
            candidates.append(Candidate(event=event, score=score))

    return sorted(candidates, key=lambda c: c.score, reverse=True)


def score_pick(pick: Pick, events: Sequence[Event]) -> MatchResult:
    """Lexical-only resolution.

    Returns the top candidate (earliest on ties) with confidence
    min(score, 1.0), or a no-match result with no candidates when nothing
    scores above zero.
    """
    candidates = rank_candidates(pick, events)
    if not candidates:
        logger.debug(
            "[SCORE] players=%s sport=%s: no candidates in %d events",
            pick.players,
            pick.sport,
            len(events),
        )
        return MatchResult.no_match()

    best = candidates[0]
    confidence = min(best.score, MAX_CONFIDENCE)

    logger.debug(
        "[SCORE] players=%s sport=%s -> '%s' (score=%.2f, %d candidates)",
        pick.players,
        pick.sport,
        best.event.title,
        best.score,
        len(candidates),
    )

    return MatchResult(
        event=best.event,
        confidence=confidence,
        candidates=candidates,
        method=MatchMethod.LEXICAL,
    )
