"""Tests for the LLM collaborators.

The chat client is faked at the JSONChat seam; no network calls.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from picklink.api.models import PickModel
from picklink.config import Settings
from picklink.consumers.matching.policy import ResolutionPolicy
from picklink.core.types import EscalationOutcome, MatchMethod, Pick
from picklink.exceptions import EscalationError
from picklink.llm import create_llm_components
from picklink.llm.client import JSONChat, _strip_code_fence
from picklink.llm.escalation import (
    LLMEscalationResolver,
    build_user_prompt,
    parse_outcome,
    summarize_events,
)
from picklink.llm.parser import LLMPickParser


@dataclass
class FakeChat:
    """Returns a canned reply (or raises it) and records prompts."""

    reply: object = None
    prompts: list[tuple[str, str]] = field(default_factory=list)
    model: str = "test-model"

    async def complete(self, system, user):
        self.prompts.append((system, user))
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


def _completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _openai_client(content):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=_completion(content))
    return client


class TestParseOutcome:
    """Validation of decoded escalation replies."""

    def test_valid_selection(self):
        outcome = parse_outcome({"matchIndex": 1, "confidence": 0.8, "reasoning": "x"}, 3)
        assert outcome == EscalationOutcome(index=1, confidence=0.8, reasoning="x")

    def test_null_index_is_no_match(self):
        outcome = parse_outcome({"matchIndex": None, "confidence": 0, "reasoning": "none"}, 3)
        assert outcome.index is None
        assert outcome.reasoning == "none"

    def test_integral_float_index_accepted(self):
        assert parse_outcome({"matchIndex": 2.0, "confidence": 0.5}, 3).index == 2

    def test_confidence_clamped(self):
        assert parse_outcome({"matchIndex": 0, "confidence": 1.7}, 1).confidence == 1.0
        assert parse_outcome({"matchIndex": 0, "confidence": -1}, 1).confidence == 0.0

    def test_missing_confidence_defaults_to_zero(self):
        assert parse_outcome({"matchIndex": 0}, 1).confidence == 0.0

    def test_non_string_reasoning_dropped(self):
        assert parse_outcome({"matchIndex": 0, "reasoning": 42}, 1).reasoning == ""

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"matchIndex": 5, "confidence": 0.9},
            {"matchIndex": -1, "confidence": 0.9},
            {"matchIndex": "1", "confidence": 0.9},
            {"matchIndex": 1.5, "confidence": 0.9},
            {"matchIndex": True, "confidence": 0.9},
            {"matchIndex": 1, "confidence": "high"},
            {"matchIndex": 1, "confidence": True},
        ],
    )
    def test_invalid_replies_raise(self, data):
        with pytest.raises(EscalationError):
            parse_outcome(data, 3)


class TestPrompt:
    def test_events_are_index_addressed(self, tennis_events):
        summaries = summarize_events(tennis_events)
        assert [s["index"] for s in summaries] == [0, 1, 2, 3]
        assert summaries[0]["participant1"] == "Daniel Elahi Galan"
        assert summaries[0]["startTime"] == tennis_events[0].start_time.isoformat()

    def test_user_prompt_contains_pick_and_events(self, tennis_events):
        prompt = build_user_prompt(Pick(players=["Galan"], sport="tennis"), tennis_events)
        assert '"Galan"' in prompt
        assert "Lautaro Midon" in prompt
        # Event list must be valid JSON
        body = prompt.split("Available events:\n", 1)[1].rsplit("\n\n", 1)[0]
        assert len(json.loads(body)) == 4


class TestLLMEscalationResolver:
    def test_returns_outcome(self, tennis_events):
        chat = FakeChat({"matchIndex": 3, "confidence": 0.9, "reasoning": "doubles team"})
        outcome = asyncio.run(
            LLMEscalationResolver(chat).resolve(Pick(players=["Escobar"]), tennis_events)
        )
        assert outcome.index == 3
        assert outcome.reasoning == "doubles team"
        assert len(chat.prompts) == 1

    def test_no_events_skips_call(self):
        chat = FakeChat({"matchIndex": 0})
        outcome = asyncio.run(LLMEscalationResolver(chat).resolve(Pick(players=["x"]), []))
        assert outcome.index is None
        assert chat.prompts == []

    @pytest.mark.parametrize("error", [OpenAIError("rate limited"), ValueError("not json")])
    def test_chat_failure_raises_escalation_error(self, tennis_events, error):
        resolver = LLMEscalationResolver(FakeChat(error))
        with pytest.raises(EscalationError):
            asyncio.run(resolver.resolve(Pick(players=["Galan"]), tennis_events))

    def test_chat_failure_logs_model(self, tennis_events, caplog):
        resolver = LLMEscalationResolver(FakeChat(OpenAIError("rate limited")))
        with caplog.at_level(logging.WARNING, logger="picklink.llm.escalation"):
            with pytest.raises(EscalationError):
                asyncio.run(resolver.resolve(Pick(players=["Galan"]), tennis_events))
        assert "Escalation request to test-model failed: rate limited" in caplog.text

    def test_policy_falls_back_on_out_of_range_reply(self, mock_events):
        """A hallucinated index never becomes a match."""
        resolver = LLMEscalationResolver(FakeChat({"matchIndex": 42, "confidence": 1.0}))
        result = asyncio.run(
            ResolutionPolicy(resolver).resolve(Pick(players=["Galan"]), mock_events)
        )
        assert result.event is mock_events[0]
        assert result.method == MatchMethod.FALLBACK

    def test_policy_accepts_valid_reply(self, mock_events):
        resolver = LLMEscalationResolver(FakeChat({"matchIndex": 3, "confidence": 0.7}))
        result = asyncio.run(
            ResolutionPolicy(resolver).resolve(Pick(players=["Hidalgo"]), mock_events)
        )
        assert result.event is mock_events[3]
        assert result.method == MatchMethod.ESCALATION
        assert result.confidence == 0.9


class TestLLMPickParser:
    def test_parses_reply(self):
        chat = FakeChat(
            {
                "isValidPick": True,
                "sport": "Ice Hockey",
                "league": "NHL",
                "players": ["Rangers"],
                "betType": "ML",
                "line": None,
                "odds": -120,
                "units": 2,
                "description": "Rangers moneyline",
                "confidence": "high",
            }
        )
        pick = asyncio.run(LLMPickParser(chat).parse("Rangers ML -120 2u"))

        assert pick.is_valid_pick
        assert pick.sport == "hockey"
        assert pick.players == ["Rangers"]
        assert pick.bet_type == "ML"
        assert pick.odds == "-120"
        assert pick.extra == {"confidence": "high"}
        assert "Rangers ML -120 2u" in chat.prompts[0][1]

    def test_not_a_pick(self):
        chat = FakeChat({"isValidPick": False, "players": []})
        pick = asyncio.run(LLMPickParser(chat).parse("good morning everyone"))
        assert pick.is_valid_pick is False

    @pytest.mark.parametrize("error", [OpenAIError("down"), ValueError("empty")])
    def test_failure_returns_none(self, error):
        assert asyncio.run(LLMPickParser(FakeChat(error)).parse("Galan ML")) is None

    @pytest.mark.parametrize(
        "reply",
        [
            {"isValidPick": True, "players": ["Galan"], "sport": 5},
            {"isValidPick": True, "players": ["Galan"], "sport": ["tennis"]},
            {"isValidPick": True, "players": {"name": "Galan"}},
            {"isValidPick": "maybe", "players": ["Galan"]},
            {"isValidPick": True, "players": ["Galan"], "league": {"name": "ATP"}},
        ],
    )
    def test_malformed_reply_returns_none(self, reply):
        assert asyncio.run(LLMPickParser(FakeChat(reply)).parse("Galan ML")) is None

    def test_malformed_reply_logged_with_model(self, caplog):
        chat = FakeChat({"isValidPick": True, "players": ["Galan"], "sport": 5})
        with caplog.at_level(logging.WARNING, logger="picklink.llm.parser"):
            assert asyncio.run(LLMPickParser(chat).parse("Galan ML")) is None
        assert "test-model could not extract pick from 'Galan ML'" in caplog.text
        assert "Invalid sport" in caplog.text

    def test_non_numeric_line_dropped(self):
        """Pick'em lines ("PK") leave line unset; the pick survives."""
        chat = FakeChat(
            {"isValidPick": True, "players": ["Galan"], "line": "PK", "units": "1.5"}
        )
        pick = asyncio.run(LLMPickParser(chat).parse("Galan PK 1.5u"))

        assert pick.players == ["Galan"]
        assert pick.line is None
        assert pick.units == 1.5
        assert PickModel.from_pick(pick).line is None


class TestJSONChat:
    def test_decodes_object(self):
        client = _openai_client('{"matchIndex": 1}')
        data = asyncio.run(JSONChat(client, "gpt-4o-mini").complete("sys", "user"))

        assert data == {"matchIndex": 1}
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}

    def test_strips_code_fence(self):
        client = _openai_client('```json\n{"a": 1}\n```')
        assert asyncio.run(JSONChat(client, "m").complete("s", "u")) == {"a": 1}

    @pytest.mark.parametrize("content", [None, "  ", "not json", "[1, 2]"])
    def test_unusable_reply_raises(self, content):
        client = _openai_client(content)
        with pytest.raises(ValueError):
            asyncio.run(JSONChat(client, "m").complete("s", "u"))

    def test_no_choices_raises(self):
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=SimpleNamespace(choices=[]))
        with pytest.raises(ValueError):
            asyncio.run(JSONChat(client, "m").complete("s", "u"))

    def test_strip_code_fence_passthrough(self):
        assert _strip_code_fence('{"a": 1}') == '{"a": 1}'


class TestCreateComponents:
    def test_disabled_without_key(self):
        assert create_llm_components(Settings()) == (None, None)

    def test_enabled_with_key(self):
        parser, resolver = create_llm_components(Settings(openai_api_key="sk-test"))
        assert isinstance(parser, LLMPickParser)
        assert isinstance(resolver, LLMEscalationResolver)
