"""Normalize free text into comparable tokens (lowercase, split, stopword-filtered)."""
import re

STOPWORDS = frozenset(
    {
        "the", "a", "an", "to", "and", "or", "for", "into", "with", "when",
        "of", "use", "be", "is", "are", "on", "in", "at", "this", "that",
    }
)

# \w without the underscore: letters and digits only
_SEPARATOR_RE = re.compile(r"[\W_]+")


def tokenize(text: str | None) -> list[str]:
    """Lowercase text and split on any run of non-alphanumeric characters.
    Order and duplicates are kept; empty fragments and stopwords are dropped.
    """
    words = _SEPARATOR_RE.split((text or "").lower())
    return [w for w in words if w and w not in STOPWORDS]
