# File: phrasecoach/features/assessment/domain/models.py
from dataclasses import dataclass, field
from enum import Enum, unique
from typing import List


def _check_score(name: str, value: float):
    if not 0.0 <= value <= 100.0:
        raise ValueError(f"{name} must be within [0, 100], got {value}")


@unique
class ErrorType(str, Enum):
    NONE = "None"
    OMISSION = "Omission"
    INSERTION = "Insertion"
    MISPRONUNCIATION = "Mispronunciation"


@dataclass(frozen=True)
class SubWordAssessment:
    """
    Score of one syllable or phoneme inside a word.
    Offsets and durations are in seconds, relative to the start of the utterance.
    """
    unit: str
    offset: float
    duration: float
    accuracy_score: float

    def __post_init__(self):
        if not isinstance(self.unit, str):
            raise TypeError(f"Unit label must be a string, got {type(self.unit).__name__}")
        if self.offset < 0 or self.duration < 0:
            raise ValueError(f"Offset/duration cannot be negative for '{self.unit}'.")
        _check_score("accuracy_score", self.accuracy_score)

    @property
    def end(self) -> float:
        return self.offset + self.duration


class SyllableAssessment(SubWordAssessment):
    pass


class PhonemeAssessment(SubWordAssessment):
    pass


@dataclass(frozen=True)
class WordAssessment:
    word: str
    accuracy_score: float
    error_type: ErrorType = ErrorType.NONE
    syllables: List[SyllableAssessment] = field(default_factory=list)
    phonemes: List[PhonemeAssessment] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.word, str):
            raise TypeError(f"Assessed word must be a string, got {type(self.word).__name__}")
        _check_score("accuracy_score", self.accuracy_score)

    @property
    def is_error(self) -> bool:
        return self.error_type != ErrorType.NONE

    def weakest_phoneme(self):
        """The lowest scoring phoneme, or None when the provider sent no phoneme detail."""
        if not self.phonemes:
            return None
        return min(self.phonemes, key=lambda p: p.accuracy_score)


@dataclass(frozen=True)
class PronunciationAssessment:
    """
    Structured scoring of one utterance from the external assessment provider.
    `words` follows the provider's order and may contain insertions and
    omissions, so its length can differ from the expected phrase.
    """
    accuracy_score: float
    pronunciation_score: float
    completeness_score: float
    fluency_score: float
    prosody_score: float
    words: List[WordAssessment] = field(default_factory=list)

    def __post_init__(self):
        _check_score("accuracy_score", self.accuracy_score)
        _check_score("pronunciation_score", self.pronunciation_score)
        _check_score("completeness_score", self.completeness_score)
        _check_score("fluency_score", self.fluency_score)
        _check_score("prosody_score", self.prosody_score)

    @property
    def error_count(self) -> int:
        return sum(1 for w in self.words if w.is_error)
