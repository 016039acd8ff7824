"""Core types and interfaces."""

from picklink.core.interfaces import EscalationResolver, EventProvider
from picklink.core.types import (
    Candidate,
    EscalationOutcome,
    Event,
    MatchMethod,
    MatchResult,
    Pick,
)

__all__ = [
    "Candidate",
    "EscalationOutcome",
    "EscalationResolver",
    "Event",
    "EventProvider",
    "MatchMethod",
    "MatchResult",
    "Pick",
]
