"""Positional word alignment between an expected phrase and a transcript."""
import logging
from typing import List

from ..domain.models import VerdictStatus, WordVerdict
from .normalizer import split_words

logger = logging.getLogger(__name__)


def align(expected: str, candidate: str) -> List[WordVerdict]:
    """
    Compares the two phrases word by word, position by position.

    A word missing on either side counts as the empty string, so the result
    covers max(len(expected), len(candidate)) positions. Positions past the end
    of the expected phrase carry an empty expected_word.

    There is no resynchronisation: one omitted word near the start shifts every
    following word and they all report MISMATCH.
    """
    expected_words = split_words(expected)
    candidate_words = split_words(candidate)
    length = max(len(expected_words), len(candidate_words))

    verdicts: List[WordVerdict] = []
    for i in range(length):
        expected_word = expected_words[i] if i < len(expected_words) else ""
        candidate_word = candidate_words[i] if i < len(candidate_words) else ""
        status = VerdictStatus.MATCH if expected_word == candidate_word else VerdictStatus.MISMATCH
        verdicts.append(WordVerdict(index=i, expected_word=expected_word, status=status))

    logger.debug(f"Aligned {len(expected_words)} expected against {len(candidate_words)} spoken words")
    return verdicts


def unknown_verdicts(expected: str) -> List[WordVerdict]:
    """Verdicts for a phrase nothing has been compared against yet."""
    return [
        WordVerdict(index=i, expected_word=word, status=VerdictStatus.UNKNOWN)
        for i, word in enumerate(split_words(expected))
    ]
