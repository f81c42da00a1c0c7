from typing import List, Optional

from phrasecoach.features.alignment.domain.models import VerdictStatus, WordVerdict
from ..domain.models import Emphasis, FeedbackRecord, WordFeedback


def project(verdicts: List[WordVerdict], pronunciation_score: Optional[float] = None) -> FeedbackRecord:
    """
    Maps verdicts to per-word emphasis.

    - Nothing compared yet (all UNKNOWN): every word NEUTRAL.
    - At least one MISMATCH: mismatched words INCORRECT, the rest NEUTRAL.
    - Otherwise, with at least one MATCH: every word CORRECT.

    Overflow positions (transcript longer than the phrase) have no word to show
    but still count as a mismatch.
    """
    words = [v for v in verdicts if not v.is_overflow]
    has_mismatch = any(v.status == VerdictStatus.MISMATCH for v in verdicts)
    has_match = any(v.status == VerdictStatus.MATCH for v in verdicts)

    if has_mismatch:
        feedback = [
            WordFeedback(
                word=v.expected_word,
                emphasis=Emphasis.INCORRECT if v.status == VerdictStatus.MISMATCH else Emphasis.NEUTRAL,
            )
            for v in words
        ]
        return FeedbackRecord(words=feedback, is_correct=False, pronunciation_score=pronunciation_score)

    if has_match:
        feedback = [WordFeedback(word=v.expected_word, emphasis=Emphasis.CORRECT) for v in words]
        return FeedbackRecord(words=feedback, is_correct=True, pronunciation_score=pronunciation_score)

    feedback = [WordFeedback(word=v.expected_word) for v in words]
    return FeedbackRecord(words=feedback, is_correct=False, pronunciation_score=pronunciation_score)
