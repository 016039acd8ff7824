"""Sport normalization utilities.

Maps the sport names that extractors and providers use ("Ice Hockey",
"NBA", "UFC") to the canonical lowercase codes the feed is keyed on.
"""

# Canonical codes served by the event feed
SUPPORTED_SPORTS = (
    "tennis",
    "basketball",
    "football",
    "baseball",
    "hockey",
    "soccer",
    "mma",
)

SPORT_ALIASES: dict[str, str] = {
    # Provider formats
    "Basketball": "basketball",
    "Football": "football",
    "American Football": "football",
    "Baseball": "baseball",
    "Ice Hockey": "hockey",
    "Hockey": "hockey",
    "Soccer": "soccer",
    "Tennis": "tennis",
    "MMA": "mma",
    "Mixed Martial Arts": "mma",
    "UFC/MMA": "mma",
    # Common variations
    "ice hockey": "hockey",
    "american football": "football",
    "americanfootball": "football",
    "icehockey": "hockey",
    "ufc": "mma",
    "ufc-mma": "mma",
    "fútbol": "soccer",
    "futbol": "soccer",
}


def normalize_sport(sport: str | None) -> str | None:
    """Normalize a sport name to canonical lowercase code.

    Unknown sports are returned lowercased. None and blank strings stay None.

    Examples:
        >>> normalize_sport("Ice Hockey")
        'hockey'
        >>> normalize_sport("UFC")
        'mma'
        >>> normalize_sport("tennis")
        'tennis'
    """
    if not sport or not sport.strip():
        return None

    if sport in SPORT_ALIASES:
        return SPORT_ALIASES[sport]

    lower = sport.lower().strip()
    if lower in SPORT_ALIASES:
        return SPORT_ALIASES[lower]

    return lower
