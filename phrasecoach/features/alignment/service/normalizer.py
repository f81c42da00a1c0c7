"""Text normalization shared by the aligner and the assessment merger."""
import re
from typing import List

from ..domain.models import AlignmentError

# Formatting noise dropped before comparison.
# Apostrophes and hyphens stay part of the word ("l'addition", "est-ce").
PUNCTUATION_PATTERN = re.compile(r"[.,/#!$%^&*;:{}=\\?_`~()]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Strips punctuation, collapses whitespace runs, lower-cases and trims.

    Example: "Où est la carte des boissons ?" -> "où est la carte des boissons"
    """
    if not isinstance(text, str):
        raise AlignmentError(f"Expected text to be a string, got {type(text).__name__}")

    text = PUNCTUATION_PATTERN.sub("", text)
    text = WHITESPACE_PATTERN.sub(" ", text)
    return text.lower().strip()


def split_words(text: str) -> List[str]:
    """Normalized word list. An empty phrase has no words (not one empty word)."""
    normalized = normalize(text)
    if not normalized:
        return []
    return normalized.split(" ")
