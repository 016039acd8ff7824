"""Core data types.

All types are plain dataclasses constructed per resolution call. Nothing
here is persisted; callers own every instance they receive.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


@dataclass
class Pick:
    """Structured wager request produced by an extractor.

    Only players, sport and league drive matching. The remaining fields are
    carried through untouched for downstream consumers (display, logging).
    """

    players: list[str] = field(default_factory=list)
    sport: str | None = None
    league: str | None = None

    # Pass-through fields (ignored by matching)
    is_valid_pick: bool = True
    bet_type: str | None = None
    line: float | None = None
    odds: str | None = None
    units: float | None = None
    description: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    # Extractor key -> field name. LLM extractors emit camelCase.
    _KEY_ALIASES = {
        "isValidPick": "is_valid_pick",
        "betType": "bet_type",
    }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pick":
        """Build a Pick from extractor output.

        Unknown keys are kept in `extra`. A bare string in `players`
        becomes a one-item list. Unparseable line/units become None.

        Raises:
            ValueError: A field has a type no extractor should produce
        """
        known = {
            "players",
            "sport",
            "league",
            "is_valid_pick",
            "bet_type",
            "line",
            "odds",
            "units",
            "description",
        }
        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}

        for key, value in data.items():
            name = cls._KEY_ALIASES.get(key, key)
            if name in known:
                values[name] = value
            else:
                extra[key] = value

        players = values.get("players") or []
        if isinstance(players, str):
            players = [players]
        if not isinstance(players, list):
            raise ValueError(f"players must be a list, got {type(players).__name__}")
        values["players"] = [str(p) for p in players if p]

        if values.get("is_valid_pick") is None:
            values.pop("is_valid_pick", None)
        elif not isinstance(values["is_valid_pick"], bool):
            raise ValueError(f"Invalid is_valid_pick: {values['is_valid_pick']!r}")

        for name in ("sport", "league", "bet_type", "description", "odds"):
            if name in values:
                values[name] = _optional_text(name, values[name])
        for name in ("line", "units"):
            if name in values:
                values[name] = _optional_number(values[name])

        return cls(**values, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict (snake_case keys, extras merged last)."""
        data = {
            "players": list(self.players),
            "sport": self.sport,
            "league": self.league,
            "is_valid_pick": self.is_valid_pick,
            "bet_type": self.bet_type,
            "line": self.line,
            "odds": self.odds,
            "units": self.units,
            "description": self.description,
        }
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data


def _optional_text(name: str, value: Any) -> str | None:
    """Text field from extractor output. Numbers are stringified (odds: -110)."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if name in ("odds", "description"):
            return str(value)
    raise ValueError(f"Invalid {name}: {value!r}")


def _optional_number(value: Any) -> float | None:
    """Numeric field from extractor output; unparseable text ("PK") becomes None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().lstrip("+"))
        except ValueError:
            return None
    return None


@dataclass
class Event:
    """A sporting event from a provider feed. Read-only to matching."""

    sport: str
    league: str | None = None
    participant1: str | None = None
    participant2: str | None = None
    description: str | None = None
    display_name: str | None = None

    id: str | None = None
    start_time: datetime | None = None
    link: str | None = None  # Provider-relative or absolute deep link
    live: bool = False
    raw: dict[str, Any] = field(default_factory=dict, repr=False)
    path: list[dict[str, Any]] = field(default_factory=list, repr=False)

    @property
    def title(self) -> str:
        """Best human-readable name for the event."""
        if self.display_name:
            return self.display_name
        if self.description:
            return self.description
        names = [p for p in (self.participant1, self.participant2) if p]
        return " vs ".join(names)


@dataclass
class Candidate:
    """An event paired with its lexical score against one pick."""

    event: Event
    score: float


class MatchMethod(str, Enum):
    """How a MatchResult was decided."""

    NONE = "none"
    LEXICAL = "lexical"
    ESCALATION = "escalation"
    FALLBACK = "fallback"  # Lexical result below the trusted band


@dataclass
class MatchResult:
    """Outcome of resolving one pick against a candidate set.

    candidates is sorted by descending score; equal scores keep input order.
    """

    event: Event | None
    confidence: float
    candidates: list[Candidate] = field(default_factory=list)
    method: MatchMethod = MatchMethod.NONE
    reasoning: str | None = None

    @classmethod
    def no_match(cls, candidates: list[Candidate] | None = None) -> "MatchResult":
        return cls(event=None, confidence=0.0, candidates=candidates or [])

    @property
    def is_matched(self) -> bool:
        return self.event is not None

    @property
    def is_low_confidence(self) -> bool:
        """True when the answer should be flagged rather than trusted."""
        return self.method == MatchMethod.FALLBACK


@dataclass
class EscalationOutcome:
    """Answer from an escalation resolver.

    index points into the bounded event list the resolver was given.
    None is the explicit no-match sentinel.
    """

    index: int | None
    confidence: float = 0.0
    reasoning: str = ""

    @classmethod
    def no_match(cls, reasoning: str = "") -> "EscalationOutcome":
        return cls(index=None, confidence=0.0, reasoning=reasoning)
