# File: phrasecoach/features/alignment/domain/models.py
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Optional


class AlignmentError(ValueError):
    """
    Raised when the comparison pipeline receives structurally invalid input
    (non-string text, malformed assessment payloads).
    """


@unique
class VerdictStatus(str, Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TranscriptResult:
    """
    Raw output of the speech recognition service for one utterance.
    Interim results arrive with is_final=False while the user is still speaking.
    """
    text: str
    is_final: bool = True


@dataclass(frozen=True)
class WordVerdict:
    """
    Correctness classification of a single expected word.

    `detail` holds the provider's WordAssessment when a structured
    assessment was merged for this position.
    """
    index: int
    expected_word: str
    status: VerdictStatus = VerdictStatus.UNKNOWN
    detail: Optional[Any] = None

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Verdict index cannot be negative: {self.index}")

    @property
    def is_overflow(self) -> bool:
        """True for padding positions where the transcript ran past the expected phrase."""
        return self.expected_word == ""
