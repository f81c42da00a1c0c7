from abc import ABC, abstractmethod
from typing import List, Optional

from phrasecoach.core.common.enums import Level
from phrasecoach.features.session.domain.models import Phrase
from .models import Course, CourseProgress, CourseRequest


class IPhraseSource(ABC):
    """
    Contract for whatever stores courses and their ordered phrases.
    """
    @abstractmethod
    def create_course(self, request: CourseRequest) -> int:
        """Stores the course and its phrases in the given order. Returns the new course ID."""
        pass

    @abstractmethod
    def get_course(self, course_id: int) -> Optional[Course]:
        pass

    @abstractmethod
    def list_phrases(self, course_id: int, level: Optional[Level] = None) -> List[Phrase]:
        """Phrases of a course in practice order, optionally restricted to one level."""
        pass

    @abstractmethod
    def mark_completed(self, phrase_id: int, score: Optional[float] = None) -> None:
        """Flags the phrase as completed, keeping the best pronunciation score seen."""
        pass

    @abstractmethod
    def progress(self, course_id: int) -> CourseProgress:
        pass
