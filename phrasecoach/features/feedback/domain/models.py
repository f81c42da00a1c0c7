# File: phrasecoach/features/feedback/domain/models.py
from dataclasses import dataclass, field
from enum import Enum, unique
from typing import List, Optional


@unique
class Emphasis(str, Enum):
    NEUTRAL = "neutral"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class WordFeedback:
    word: str
    emphasis: Emphasis = Emphasis.NEUTRAL


@dataclass(frozen=True)
class FeedbackRecord:
    """
    Presentation-neutral feedback for one phrase, one entry per expected word.
    The UI decides what colour each emphasis maps to.
    """
    words: List[WordFeedback] = field(default_factory=list)
    is_correct: bool = False
    pronunciation_score: Optional[float] = None

    @property
    def incorrect_words(self) -> List[str]:
        return [w.word for w in self.words if w.emphasis == Emphasis.INCORRECT]
