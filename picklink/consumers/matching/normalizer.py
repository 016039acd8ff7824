"""Name normalization for matching.

Every player name and event text is passed through normalize_name()
before comparison so that case, accents, punctuation and spacing never
decide a match.
"""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(text: str | None) -> str:
    """Normalize a name or text blob for comparison.

    - Lowercase
    - Remove accents (é -> e)
    - Drop everything except a-z, 0-9 and whitespace
    - Collapse whitespace, trim

    Idempotent: normalize_name(normalize_name(x)) == normalize_name(x).

    Examples:
        >>> normalize_name("José García")
        'jose garcia'
        >>> normalize_name("G. Escobar / D. Hidalgo")
        'g escobar d hidalgo'
    """
    if not text:
        return ""

    text = text.lower()

    # Remove accents
    text = unicodedata.normalize("NFD", text)
    text = "".join(c for c in text if unicodedata.category(c) != "Mn")

    text = _NON_ALNUM.sub("", text)
    text = _WHITESPACE.sub(" ", text)

    return text.strip()


def tokenize(normalized: str) -> list[str]:
    """Split an already-normalized string into whitespace tokens."""
    return normalized.split()
