"""Constants for the matching module.

Score bonuses for the lexical scorer and the confidence bands the
resolution policy gates on.
"""

# =============================================================================
# LEXICAL SCORE BONUSES
# Accumulated per event. Player bonuses are added once per pick player.
# =============================================================================

SPORT_BONUS = 0.2
LEAGUE_BONUS = 0.1

# Player-vs-participant rules, highest precedence first
EXACT_MATCH_BONUS = 0.7
PLAYER_IN_PARTICIPANT_BONUS = 0.6
PARTICIPANT_IN_PLAYER_BONUS = 0.5
TOKEN_MATCH_BONUS = 0.4

# Minimum length for a name to take part in substring rules.
# Initials ("g", "d") only ever match exactly.
MIN_SUBSTRING_LENGTH = 3

# Tokens must be strictly longer than this for the token rule
MIN_TOKEN_LENGTH = 2

# Raw scores are rounded before clamping; 0.2 + 0.5 lands on 0.7
SCORE_PRECISION = 4

MAX_CONFIDENCE = 1.0

# =============================================================================
# CONFIDENCE THRESHOLDS
# =============================================================================

# Trust the lexical result without escalating
ACCEPT_THRESHOLD = 0.7

# Trust the lexical result when there is nothing smarter to ask
ACCEPT_WITHOUT_ESCALATION_THRESHOLD = 0.5

# Last-resort floor; results here are flagged low-confidence
FALLBACK_THRESHOLD = 0.3

# Confidence reported when the escalation resolver commits to an event
ESCALATION_CONFIDENCE = 0.9

# Events sent to the escalation resolver
MAX_ESCALATION_EVENTS = 50
