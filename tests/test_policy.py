"""Tests for the resolution policy.

Escalation resolvers are faked; the policy must accept, escalate or fall
back according to the lexical confidence band, and must never let a bad
resolver break a resolution.
"""

import asyncio
from dataclasses import dataclass, field

import pytest

from picklink.consumers.matching.policy import ResolutionPolicy
from picklink.core.interfaces import EscalationResolver
from picklink.core.types import EscalationOutcome, Event, MatchMethod, Pick
from picklink.exceptions import EscalationError


@dataclass
class FakeResolver:
    """Returns a fixed outcome and records what it was asked."""

    outcome: object = None
    calls: list[list[Event]] = field(default_factory=list)

    async def resolve(self, pick, events):
        self.calls.append(list(events))
        return self.outcome


@dataclass
class FailingResolver:
    error: Exception = field(default_factory=lambda: EscalationError("model unavailable"))
    calls: int = 0

    async def resolve(self, pick, events):
        self.calls += 1
        raise self.error


@dataclass
class SlowResolver:
    delay: float = 1.0

    async def resolve(self, pick, events):
        await asyncio.sleep(self.delay)
        return EscalationOutcome(index=0, confidence=1.0)


def resolve(policy, pick, events):
    return asyncio.run(policy.resolve(pick, events))


class TestResolverProtocol:
    def test_fakes_satisfy_protocol(self):
        assert isinstance(FakeResolver(), EscalationResolver)
        assert isinstance(FailingResolver(), EscalationResolver)


class TestLexicalAccept:
    """Confident lexical answers never reach the resolver."""

    def test_high_confidence_skips_resolver(self, tennis_events):
        resolver = FakeResolver(EscalationOutcome(index=2))
        result = resolve(
            ResolutionPolicy(resolver), Pick(players=["Galan"], sport="tennis"), tennis_events
        )

        assert result.event.id == "mock-tennis-1"
        assert result.confidence == pytest.approx(0.8)
        assert result.method == MatchMethod.LEXICAL
        assert resolver.calls == []

    def test_medium_confidence_accepted_without_resolver(self, mock_events):
        result = resolve(ResolutionPolicy(), Pick(players=["Galan"]), mock_events)

        assert result.event.id == "mock-tennis-1"
        assert result.confidence == pytest.approx(0.6)
        assert result.method == MatchMethod.LEXICAL
        assert not result.is_low_confidence


class TestEscalation:
    """Medium and low lexical confidence is escalated when possible."""

    def test_resolver_selection_wins(self, mock_events):
        resolver = FakeResolver(EscalationOutcome(index=0, confidence=0.95, reasoning="Galan"))
        result = resolve(ResolutionPolicy(resolver), Pick(players=["Galan"]), mock_events)

        assert len(resolver.calls) == 1
        assert result.event is mock_events[0]
        assert result.confidence == 0.9
        assert result.method == MatchMethod.ESCALATION
        assert result.reasoning == "Galan"

    def test_selection_outside_candidates_is_prepended(self, mock_events):
        """The chosen event leads the candidate list even with a zero score."""
        resolver = FakeResolver(EscalationOutcome(index=2, confidence=0.8))
        result = resolve(ResolutionPolicy(resolver), Pick(players=["Galan"]), mock_events)

        assert result.event is mock_events[2]
        assert result.candidates[0].event is mock_events[2]
        assert result.candidates[0].score == 0.0
        assert result.candidates[1].event is mock_events[0]

    def test_selection_already_in_candidates_keeps_order(self, mock_events):
        resolver = FakeResolver(EscalationOutcome(index=0))
        result = resolve(ResolutionPolicy(resolver), Pick(players=["Galan"]), mock_events)

        assert [c.event.id for c in result.candidates] == ["mock-tennis-1"]

    def test_resolver_sees_events_in_feed_order(self, mock_events):
        resolver = FakeResolver(EscalationOutcome.no_match())
        resolve(ResolutionPolicy(resolver), Pick(players=["Galan"]), mock_events)

        assert resolver.calls[0] == mock_events

    def test_resolver_input_is_bounded(self):
        events = [Event(sport="tennis", id=str(i), participant1=f"Player {i}") for i in range(60)]
        resolver = FakeResolver(EscalationOutcome.no_match())
        resolve(ResolutionPolicy(resolver), Pick(players=["Nobody"]), events)

        assert len(resolver.calls[0]) == 50
        assert resolver.calls[0][0].id == "0"
        assert resolver.calls[0][-1].id == "49"

    def test_custom_bound(self, mock_events):
        resolver = FakeResolver(EscalationOutcome.no_match())
        resolve(
            ResolutionPolicy(resolver, max_escalation_events=2),
            Pick(players=["Nobody"]),
            mock_events,
        )

        assert len(resolver.calls[0]) == 2


class TestNoSelection:
    """Every resolver failure mode degrades to the lexical fallback bands."""

    @pytest.mark.parametrize(
        "resolver",
        [
            FakeResolver(EscalationOutcome.no_match("none fit")),
            FakeResolver(EscalationOutcome(index=99)),
            FakeResolver(EscalationOutcome(index=-1)),
            FakeResolver(EscalationOutcome(index=True)),
            FakeResolver(EscalationOutcome(index="0")),
            FakeResolver({"matchIndex": 0}),
            FakeResolver(None),
            FailingResolver(),
            FailingResolver(RuntimeError("boom")),
        ],
        ids=[
            "no-match",
            "out-of-range",
            "negative",
            "bool-index",
            "string-index",
            "wrong-type",
            "none",
            "escalation-error",
            "unexpected-error",
        ],
    )
    def test_medium_confidence_falls_back(self, mock_events, resolver):
        result = resolve(ResolutionPolicy(resolver), Pick(players=["Galan"]), mock_events)

        assert result.event is mock_events[0]
        assert result.confidence == pytest.approx(0.6)
        assert result.method == MatchMethod.FALLBACK
        assert result.is_low_confidence

    def test_timeout_falls_back(self, mock_events):
        policy = ResolutionPolicy(SlowResolver(delay=1.0), timeout=0.01)
        result = resolve(policy, Pick(players=["Galan"]), mock_events)

        assert result.event is mock_events[0]
        assert result.method == MatchMethod.FALLBACK

    def test_low_band_fallback_without_resolver(self, mock_events):
        """A token-only match (0.4) is returned, flagged."""
        result = resolve(ResolutionPolicy(), Pick(players=["Coco Pegula"]), mock_events)

        assert result.event.id == "mock-tennis-2"
        assert result.confidence == pytest.approx(0.4)
        assert result.is_low_confidence

    def test_below_fallback_is_no_match(self, tennis_events):
        resolver = FailingResolver()
        result = resolve(
            ResolutionPolicy(resolver), Pick(players=["Djokovic"], sport="tennis"), tennis_events
        )

        assert resolver.calls == 1
        assert result.event is None
        assert result.confidence == 0.0
        assert result.method == MatchMethod.NONE
        # Candidates stay available for diagnostics
        assert [c.event.id for c in result.candidates] == [e.id for e in tennis_events]

    def test_below_fallback_without_resolver(self, tennis_events):
        result = resolve(
            ResolutionPolicy(), Pick(players=["Djokovic"], sport="tennis"), tennis_events
        )
        assert result.event is None
        assert len(result.candidates) == 4


class TestBandEdges:
    """Scores landing exactly on a threshold fall in the higher band."""

    LAKERS = Event(sport="basketball", id="nba", participant1="Lakers", participant2="Celtics")
    KORDA = Event(
        sport="tennis", id="atp", league="ATP Acapulco", participant1="Sebastian Korda"
    )
    PEGULA = Event(sport="tennis", id="wta", league="WTA Austin", participant1="Jessica Pegula")

    def test_exactly_accept_threshold(self):
        """Sport bonus plus participant-in-player is 0.7: no escalation."""
        resolver = FakeResolver(EscalationOutcome(index=0))
        result = resolve(
            ResolutionPolicy(resolver),
            Pick(players=["LA Lakers"], sport="basketball"),
            [self.KORDA, self.LAKERS],
        )

        assert result.event is self.LAKERS
        assert result.confidence == 0.7
        assert result.method == MatchMethod.LEXICAL
        assert resolver.calls == []

    def test_summed_bonuses_rounded_onto_threshold(self):
        """0.2 + 0.1 + 0.4 is 0.7000000000000001 in floats; it reports 0.7."""
        resolver = FakeResolver(EscalationOutcome(index=0))
        result = resolve(
            ResolutionPolicy(resolver),
            Pick(players=["Coco Pegula"], sport="tennis", league="WTA"),
            [self.PEGULA],
        )

        assert result.confidence == 0.7
        assert result.method == MatchMethod.LEXICAL
        assert resolver.calls == []

    def test_exactly_accept_without_escalation_threshold(self):
        result = resolve(ResolutionPolicy(), Pick(players=["LA Lakers"]), [self.LAKERS])

        assert result.event is self.LAKERS
        assert result.confidence == 0.5
        assert result.method == MatchMethod.LEXICAL
        assert not result.is_low_confidence

    def test_exactly_fallback_threshold(self):
        """Sport plus league bonus with no name match is 0.3."""
        resolver = FailingResolver()
        result = resolve(
            ResolutionPolicy(resolver),
            Pick(players=["Nobody"], sport="tennis", league="ATP"),
            [self.KORDA],
        )

        assert resolver.calls == 1
        assert result.event is self.KORDA
        assert result.confidence == 0.3
        assert result.method == MatchMethod.FALLBACK


class TestEmptyInputs:
    """Nothing to match means no escalation either."""

    def test_no_events(self):
        resolver = FakeResolver(EscalationOutcome(index=0))
        result = resolve(ResolutionPolicy(resolver), Pick(players=["Galan"]), [])

        assert result.event is None
        assert result.confidence == 0.0
        assert result.candidates == []
        assert resolver.calls == []

    def test_no_players(self, mock_events):
        resolver = FakeResolver(EscalationOutcome(index=0))
        result = resolve(ResolutionPolicy(resolver), Pick(players=[], sport="tennis"), mock_events)

        assert result.event is None
        assert result.candidates == []
        assert resolver.calls == []


class TestIdempotence:
    def test_repeat_resolution_is_identical(self, mock_events):
        policy = ResolutionPolicy()
        pick = Pick(players=["Escobar", "Hidalgo"], sport="tennis")

        first = resolve(policy, pick, mock_events)
        second = resolve(policy, pick, mock_events)

        assert first.event is second.event
        assert first.confidence == second.confidence
        assert first.method == second.method
        assert [(c.event.id, c.score) for c in first.candidates] == [
            (c.event.id, c.score) for c in second.candidates
        ]

    def test_inputs_not_mutated(self, mock_events):
        pick = Pick(players=["Galan"], sport="tennis")
        before = [(e.id, e.participant1) for e in mock_events]

        resolve(ResolutionPolicy(), pick, mock_events)

        assert pick.players == ["Galan"]
        assert [(e.id, e.participant1) for e in mock_events] == before
