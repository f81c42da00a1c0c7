import logging
from typing import List, Optional

from phrasecoach.core.common.enums import Level
from phrasecoach.features.feedback.domain.models import FeedbackRecord
from phrasecoach.features.media.domain.interfaces import IAudioPlayer, ISpeechRecognizer
from phrasecoach.features.session.domain.models import Phrase
from phrasecoach.features.session.service.practice_session import PracticeSession
from ..data.repository import SqlPhraseSource
from ..domain.interfaces import IPhraseSource
from ..domain.models import Course, CourseProgress, CourseRequest

logger = logging.getLogger(__name__)


class CourseService:
    """
    Facade for the Courses Feature.
    Reads stored courses, opens practice sessions over them and records results.
    """
    def __init__(self, source: Optional[IPhraseSource] = None):
        self.source = source or SqlPhraseSource()

    def create_course(self, request: CourseRequest) -> int:
        return self.source.create_course(request)

    def get_course(self, course_id: int) -> Optional[Course]:
        return self.source.get_course(course_id)

    def list_phrases(self, course_id: int, level: Optional[Level] = None) -> List[Phrase]:
        return self.source.list_phrases(course_id, level)

    def progress(self, course_id: int) -> CourseProgress:
        return self.source.progress(course_id)

    def record_result(self, phrase: Phrase, feedback: FeedbackRecord) -> None:
        """Persists a phrase the learner got right. Incorrect attempts are not stored."""
        if not feedback.is_correct:
            return
        self.source.mark_completed(phrase.id, feedback.pronunciation_score)

    def open_session(
        self,
        course_id: int,
        player: IAudioPlayer,
        recognizer: ISpeechRecognizer,
        level: Optional[Level] = None,
        autoplay: Optional[bool] = None,
    ) -> PracticeSession:
        """
        Builds a practice session over the stored phrases of a course.
        Capture uses the course's language code; completions are written back.
        """
        course = self.source.get_course(course_id)
        if not course:
            raise ValueError(f"Course {course_id} not found.")

        phrases = self.source.list_phrases(course_id, level)
        if not phrases:
            scope = f"level {level.value}" if level else "any level"
            raise ValueError(f"Course {course_id} has no phrases at {scope}.")

        logger.info(f"Opening session for course {course_id} ({course.language_code}), {len(phrases)} phrases")
        return PracticeSession(
            phrases,
            player,
            recognizer,
            locale=course.language_code,
            autoplay=autoplay,
            on_completed=self.record_result,
        )
