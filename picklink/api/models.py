"""Pydantic models for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from picklink.core import Candidate, Event, MatchResult, Pick

# =============================================================================
# Picks
# =============================================================================


class PickText(BaseModel):
    """Request body carrying raw pick text."""

    text: str = Field(min_length=1, max_length=2000)
    simple: bool = False  # Pattern extractor only
    mock: bool = False  # Mock events only


class PickModel(BaseModel):
    """A structured pick. Unknown fields are accepted and passed through."""

    model_config = ConfigDict(extra="allow")

    players: list[str] = []
    sport: str | None = None
    league: str | None = None
    is_valid_pick: bool = True
    bet_type: str | None = None
    line: float | None = None
    odds: str | None = None
    units: float | None = None
    description: str | None = None

    def to_pick(self) -> Pick:
        # Extra fields land in Pick.extra
        return Pick.from_dict(self.model_dump())

    @classmethod
    def from_pick(cls, pick: Pick) -> "PickModel":
        return cls(**pick.to_dict())


# =============================================================================
# Events
# =============================================================================


class EventModel(BaseModel):
    """An event, as returned by the API or supplied for resolution."""

    id: str | None = None
    sport: str
    league: str | None = None
    participant1: str | None = None
    participant2: str | None = None
    description: str | None = None
    display_name: str | None = None
    start_time: datetime | None = None
    link: str | None = None
    live: bool = False

    def to_event(self) -> Event:
        return Event(**self.model_dump())

    @classmethod
    def from_event(cls, event: Event) -> "EventModel":
        return cls(
            id=event.id,
            sport=event.sport,
            league=event.league,
            participant1=event.participant1,
            participant2=event.participant2,
            description=event.description,
            display_name=event.display_name,
            start_time=event.start_time,
            link=event.link,
            live=event.live,
        )


class EventListResponse(BaseModel):
    sport: str | None
    count: int
    events: list[EventModel]


# =============================================================================
# Resolution
# =============================================================================


class ResolveRequest(BaseModel):
    """Resolve a structured pick, against given events or the live feed."""

    pick: PickModel
    events: list[EventModel] | None = None
    mock: bool = False


class CandidateModel(BaseModel):
    event: EventModel
    score: float

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "CandidateModel":
        return cls(event=EventModel.from_event(candidate.event), score=candidate.score)


class MatchResponse(BaseModel):
    event: EventModel | None
    confidence: float
    method: str
    low_confidence: bool
    reasoning: str | None = None
    url: str | None = None
    candidates: list[CandidateModel] = []

    @classmethod
    def from_result(cls, result: MatchResult, url: str | None = None) -> "MatchResponse":
        return cls(
            event=EventModel.from_event(result.event) if result.event else None,
            confidence=result.confidence,
            method=result.method.value,
            low_confidence=result.is_low_confidence,
            reasoning=result.reasoning,
            url=url,
            candidates=[CandidateModel.from_candidate(c) for c in result.candidates],
        )


class LinkResponse(BaseModel):
    status: str
    pick: PickModel | None = None
    match: MatchResponse | None = None
    url: str | None = None
    events_considered: int = 0


class ParseResponse(BaseModel):
    pick: PickModel | None
