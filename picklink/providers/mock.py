"""Mock event provider.

Fixed events for development and tests, used when no live provider
returns anything. Start times are relative to the time of the call.
"""

from datetime import UTC, datetime, timedelta

from picklink.core import Event, EventProvider

# (sport, id, league, participant1, participant2, description, display_name, hours_ahead, link)
_MOCK_EVENTS = [
    (
        "tennis",
        "mock-tennis-1",
        "ATP Buenos Aires",
        "Daniel Elahi Galan",
        "Lautaro Midon",
        "Daniel Elahi Galan vs Lautaro Midon",
        "Galan vs Midon",
        1,
        "/sports/tennis/atp/buenos-aires/daniel-elahi-galan-lautaro-midon-202602081100",
    ),
    (
        "tennis",
        "mock-tennis-2",
        "WTA Austin",
        "Jessica Pegula",
        "Rebecca Sramkova",
        "Jessica Pegula vs Rebecca Sramkova",
        "Pegula vs Sramkova",
        24,
        "/sports/tennis/wta/austin/jessica-pegula-rebecca-sramkova-202602241100",
    ),
    (
        "tennis",
        "mock-tennis-3",
        "ATP Acapulco",
        "Sebastian Korda",
        "Mattia Bellucci",
        "Sebastian Korda vs Mattia Bellucci",
        "Korda vs Bellucci",
        24,
        "/sports/tennis/atp/acapulco/sebastian-korda-mattia-bellucci-202602241100",
    ),
    (
        "tennis",
        "mock-tennis-4",
        "Davis Cup",
        "G. Escobar / D. Hidalgo",
        "Rinky Hijikata / Jordan Thompson",
        "Escobar/Hidalgo vs Hijikata/Thompson",
        "Escobar/Hidalgo vs Hijikata/Thompson",
        2,
        "/sports/tennis/davis-cup/davis-cup/g-escobar-d-hidalgo-rinky-hijikata-jordan-thompson-202602081100",
    ),
    (
        "basketball",
        "mock-nba-1",
        "NBA",
        "Los Angeles Lakers",
        "Boston Celtics",
        "Los Angeles Lakers vs Boston Celtics",
        "Lakers vs Celtics",
        24,
        "/sports/basketball/nba/los-angeles-lakers-boston-celtics-202602091900",
    ),
]


def get_mock_events(sport: str | None = None, now: datetime | None = None) -> list[Event]:
    """Mock events for a sport, or all of them for None/unknown sports."""
    now = now or datetime.now(UTC)
    events = [
        Event(
            sport=row[0],
            id=row[1],
            league=row[2],
            participant1=row[3],
            participant2=row[4],
            description=row[5],
            display_name=row[6],
            start_time=now + timedelta(hours=row[7]),
            link=row[8],
        )
        for row in _MOCK_EVENTS
    ]

    if sport:
        matching = [e for e in events if e.sport == sport.lower()]
        if matching:
            return matching

    return events


class MockProvider(EventProvider):
    """Serves the fixed mock events."""

    @property
    def name(self) -> str:
        return "mock"

    def supports_sport(self, sport: str | None) -> bool:
        return True

    def get_events(self, sport: str | None) -> list[Event]:
        return get_mock_events(sport)
