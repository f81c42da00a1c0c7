"""Reconciles a provider assessment with the positional verdicts."""
import logging
from dataclasses import replace
from typing import List, Optional, Set

from phrasecoach.features.alignment.domain.models import VerdictStatus, WordVerdict
from phrasecoach.features.alignment.service.normalizer import normalize
from ..domain.models import ErrorType, PronunciationAssessment

logger = logging.getLogger(__name__)


def _resolve_index(word: str, position: int, expected: List[str], claimed: Set[int]) -> Optional[int]:
    """
    Finds the expected word an assessed word belongs to.

    Same position first; otherwise the nearest unclaimed expected word with the
    same text (lower index wins a tie). Returns None for words the phrase does
    not contain.
    """
    if position < len(expected) and position not in claimed and expected[position] == word:
        return position

    best = None
    for i, candidate in enumerate(expected):
        if i in claimed or candidate != word:
            continue
        if best is None or abs(i - position) < abs(best - position):
            best = i
    return best


def merge(
    positional: List[WordVerdict],
    assessment: Optional[PronunciationAssessment] = None,
) -> List[WordVerdict]:
    """
    Lets the assessment overrule the positional comparison word by word.

    Without an assessment the verdicts pass through untouched. With one, each
    resolved expected word becomes MISMATCH if the provider flagged any error
    for it and MATCH otherwise, with the WordAssessment attached as detail.
    """
    if assessment is None:
        return positional

    expected = [v.expected_word for v in positional if not v.is_overflow]
    merged = list(positional)
    claimed: Set[int] = set()
    unresolved = 0
    position = 0

    for word_assessment in assessment.words:
        # Inserted words are not part of the phrase and do not advance through it
        if word_assessment.error_type == ErrorType.INSERTION:
            unresolved += 1
            continue

        index = _resolve_index(normalize(word_assessment.word), position, expected, claimed)
        position += 1
        if index is None:
            unresolved += 1
            continue

        claimed.add(index)
        status = VerdictStatus.MISMATCH if word_assessment.is_error else VerdictStatus.MATCH
        merged[index] = replace(merged[index], status=status, detail=word_assessment)

    if unresolved:
        logger.debug(f"{unresolved} assessed word(s) had no counterpart in the expected phrase")
    return merged
