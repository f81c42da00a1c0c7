# File: phrasecoach/features/session/domain/models.py
from dataclasses import dataclass
from typing import Any, Optional

from phrasecoach.core.common.enums import Level
from phrasecoach.features.media.domain.models import ActivityToken


@dataclass
class Phrase:
    """
    One practice unit: the sentence to say, its translation and reference audio.
    Only `completed` (and the best score alongside it) changes after creation.
    """
    id: int
    expected_text: str
    native_text: str
    audio_ref: Any
    completed: bool = False
    level: Level = Level.BEGINNING
    pronunciation_score: Optional[float] = None

    def mark_completed(self, score: Optional[float] = None):
        self.completed = True
        if score is not None and (self.pronunciation_score is None or score > self.pronunciation_score):
            self.pronunciation_score = score


@dataclass(frozen=True)
class SessionCursor:
    phrase_index: int
    phrase_count: int

    def __post_init__(self):
        if self.phrase_count <= 0:
            raise ValueError("A practice session needs at least one phrase.")
        if not 0 <= self.phrase_index < self.phrase_count:
            raise IndexError(f"Phrase index {self.phrase_index} outside [0, {self.phrase_count})")

    @property
    def is_first(self) -> bool:
        return self.phrase_index == 0

    @property
    def is_last(self) -> bool:
        return self.phrase_index == self.phrase_count - 1

    @property
    def page_label(self) -> str:
        """1-based position as shown under the cards, e.g. '3/10'."""
        return f"{self.phrase_index + 1}/{self.phrase_count}"


@dataclass(frozen=True)
class PhraseChanged:
    """Emitted after every successful navigation so the audio collaborator can load the new phrase."""
    previous_index: int
    index: int
    phrase: Phrase
    token: ActivityToken
