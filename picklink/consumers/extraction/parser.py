"""Pattern-based pick extraction.

Pulls a Pick out of short wager text such as "Galan ML -110: 1 unit" or
"Lakers -7.5 -110 2u" without any network calls. Sport and league are
never guessed here; the LLM extractor fills those in when available.
"""

import logging
import re

from picklink.core.types import Pick

logger = logging.getLogger(__name__)

# Any of these marks the text as a wager
BET_PATTERNS = [
    re.compile(r"\b(?:ml|moneyline)\b", re.IGNORECASE),
    re.compile(r"[+-]\d+(?:\.\d+)?"),  # Odds or spreads
    re.compile(r"\b(?:over|under|o|u)\s*\d+", re.IGNORECASE),
    re.compile(r"\b\d+(?:\.\d+)?\s*(?:units?|u)\b", re.IGNORECASE),
]

ODDS_PATTERN = re.compile(r"([+-]\d{3,})")
LINE_PATTERN = re.compile(r"(?:over|under|o|u|[+-])\s*(\d+\.?\d*)", re.IGNORECASE)
UNITS_PATTERN = re.compile(r"(\d+\.?\d*)\s*(?:units?|u)\b", re.IGNORECASE)

OVER_PATTERN = re.compile(r"\b(?:over|o)\s*\d", re.IGNORECASE)
UNDER_PATTERN = re.compile(r"\b(?:under|u)\s*\d", re.IGNORECASE)
# Half-point spreads (-7.5) or a whole-number spread followed by odds (-7 -110).
# Three-digit signed numbers alone are odds, not spreads.
HALF_POINT_SPREAD = re.compile(r"[+-]\d+\.5\b")
WHOLE_SPREAD_WITH_ODDS = re.compile(r"[+-]\d{1,2}\s+[+-]\d{3}")

# Player/team text is everything before the first bet marker
NAME_PATTERN = re.compile(
    r"^([^+-]+?)(?:\s+(?:ml|moneyline|over|under|[+-]\d))",
    re.IGNORECASE,
)


def looks_like_pick(text: str) -> bool:
    """Check if text contains any wager marker."""
    return any(pattern.search(text) for pattern in BET_PATTERNS)


def parse_pick_simple(text: str) -> Pick:
    """Extract a pick from text using patterns only.

    Args:
        text: Raw pick text

    Returns:
        Pick; is_valid_pick is False (and players empty) when the text
        does not look like a wager
    """
    if not text or not looks_like_pick(text):
        return Pick(players=[], is_valid_pick=False)

    odds_match = ODDS_PATTERN.search(text)
    odds = odds_match.group(1) if odds_match else None

    line_match = LINE_PATTERN.search(text)
    line = float(line_match.group(1)) if line_match else None

    units_match = UNITS_PATTERN.search(text)
    units = float(units_match.group(1)) if units_match else None

    bet_type = "ML"
    if OVER_PATTERN.search(text):
        bet_type = "over"
    elif UNDER_PATTERN.search(text):
        bet_type = "under"
    elif HALF_POINT_SPREAD.search(text) or WHOLE_SPREAD_WITH_ODDS.search(text):
        bet_type = "spread"

    name_match = NAME_PATTERN.search(text)
    if name_match:
        players = [name_match.group(1).strip()]
    else:
        players = [text.split()[0]]

    pick = Pick(
        players=players,
        bet_type=bet_type,
        line=line,
        odds=odds,
        units=units,
        description=text.strip(),
    )
    logger.debug("[EXTRACT] '%s' -> players=%s bet=%s", text[:60], players, bet_type)
    return pick
