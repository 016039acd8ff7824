"""Interfaces for the collaborators around matching.

EventProvider is a base class: providers share the "name" and
"supports_sport" surface and are registered in an ordered chain.

EscalationResolver is a protocol: anything with an awaitable
resolve(pick, events) can be used, including test fakes.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from picklink.core.types import EscalationOutcome, Event, Pick


@runtime_checkable
class EscalationResolver(Protocol):
    """Higher-cost matcher consulted when lexical scoring is inconclusive.

    Implementations may raise on transport or parse failure; the resolution
    policy treats any exception the same as "no selection".
    """

    async def resolve(self, pick: Pick, events: Sequence[Event]) -> EscalationOutcome: ...


class EventProvider(ABC):
    """Source of upcoming events for a sport."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g. 'odds_api')."""

    @abstractmethod
    def supports_sport(self, sport: str | None) -> bool:
        """Whether this provider can serve the sport (None = all sports)."""

    @abstractmethod
    def get_events(self, sport: str | None) -> list[Event]:
        """Fetch events. Returns an empty list on failure, never raises."""
