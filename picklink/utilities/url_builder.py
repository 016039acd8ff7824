"""Bovada deep link construction.

URL structure:
    https://www.bovada.lv/sports/{sport}/{league}/{sub-category}/{event-slug}-{YYYYMMDDHHMM}

Example:
    https://www.bovada.lv/sports/tennis/atp/buenos-aires/daniel-elahi-galan-lautaro-midon-202602081100
"""

import re
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlparse

from unidecode import unidecode

from picklink.config import DEFAULT_BOVADA_BASE_URL
from picklink.core import Event

_TIMESTAMP_SUFFIX = re.compile(r"(\d{12})$")


@dataclass
class ParsedEventUrl:
    """Parts of a deep link."""

    sport: str
    league: str | None
    event_slug: str
    timestamp: str | None
    participants: list[str]


def slugify(text: str | None) -> str:
    """Convert text to a URL slug.

    Examples:
        >>> slugify("Daniel Elahi Galán")
        'daniel-elahi-galan'
        >>> slugify("G. Escobar / D. Hidalgo")
        'g-escobar-d-hidalgo'
    """
    if not text:
        return ""

    text = unidecode(text).lower()
    text = re.sub(r"[^a-z0-9\s-]", "", text)
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text.strip("-")


def format_timestamp(dt: datetime) -> str:
    """Format a datetime as the link timestamp (YYYYMMDDHHMM).

    Aware datetimes are converted to local time first, matching how the
    site renders its own links.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime("%Y%m%d%H%M")


def build_event_url(event: Event, base_url: str = DEFAULT_BOVADA_BASE_URL) -> str:
    """Build a deep link for an event.

    Order of preference:
    1. The provider's own link (absolute as-is, relative joined to base_url)
    2. Provider category path + event slug
    3. sport/league/participants-timestamp from event fields
    """
    base_url = base_url.rstrip("/")

    if event.link:
        if event.link.startswith("http"):
            return event.link
        return f"{base_url}{event.link if event.link.startswith('/') else '/' + event.link}"

    if event.raw and event.path:
        return _url_from_path(event, base_url)

    sport = slugify(event.sport) or "sports"
    league = slugify(event.league) or "events"
    return f"{base_url}/sports/{sport}/{league}/{create_event_slug(event)}"


def _url_from_path(event: Event, base_url: str) -> str:
    parts = [p.get("link") or slugify(p.get("description")) for p in event.path]
    parts = [p.strip("/") for p in parts if p]
    event_slug = event.raw.get("link") or create_event_slug(event)
    return f"{base_url}/sports/{'/'.join(parts)}/{event_slug.strip('/')}"


def create_event_slug(event: Event) -> str:
    """participant1-participant2 slug with the start timestamp appended."""
    participants = "-".join(
        slugify(p) for p in (event.participant1, event.participant2) if p
    )
    if event.start_time:
        return f"{participants}-{format_timestamp(event.start_time)}"
    return participants


def parse_event_url(url: str) -> ParsedEventUrl | None:
    """Split a deep link into its parts.

    Returns:
        ParsedEventUrl, or None if the URL is not a /sports/ link
    """
    try:
        path_parts = [p for p in urlparse(url).path.split("/") if p]
    except ValueError:
        return None

    if len(path_parts) < 3 or path_parts[0] != "sports":
        return None

    event_slug = path_parts[-1]
    match = _TIMESTAMP_SUFFIX.search(event_slug)
    timestamp = match.group(1) if match else None

    participants_part = event_slug[: -len(timestamp) - 1] if timestamp else event_slug

    return ParsedEventUrl(
        sport=path_parts[1],
        league=path_parts[2] if len(path_parts) > 3 else None,
        event_slug=event_slug,
        timestamp=timestamp,
        participants=[p for p in participants_part.split("-") if p],
    )
