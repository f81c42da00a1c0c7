# File: phrasecoach/features/courses/domain/models.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from phrasecoach.core.common.enums import Level


@dataclass(frozen=True)
class PhraseDraft:
    """A phrase about to be stored. `audio_ref` is an asset path or URI understood by the player."""
    expected_text: str
    native_text: str
    audio_ref: str
    level: Level = Level.BEGINNING

    def __post_init__(self):
        if not self.expected_text.strip():
            raise ValueError("Phrase text cannot be empty.")


@dataclass(frozen=True)
class CourseRequest:
    """
    Request object for creating a course (a scenario practised in one language).
    """
    title: str
    language_name: str
    language_code: str
    scenario_description: str = ""
    current_level: Level = Level.BEGINNING
    phrases: List[PhraseDraft] = field(default_factory=list)

    def __post_init__(self):
        if not self.title.strip():
            raise ValueError("Course title cannot be empty.")
        if not self.language_code.strip():
            raise ValueError("Course language code cannot be empty (e.g. 'fr-FR').")


@dataclass
class Course:
    id: int
    title: str
    language_name: str
    language_code: str
    scenario_description: str
    current_level: Level
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CourseProgress:
    completed: int
    total: int

    @property
    def ratio(self) -> float:
        return self.completed / self.total if self.total else 0.0

    @property
    def summary(self) -> str:
        return f"{self.completed}/{self.total} completed"
