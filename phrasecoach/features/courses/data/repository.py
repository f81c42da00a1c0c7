import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func

from phrasecoach.core.common.enums import Level
from phrasecoach.core.database.connection import SessionLocal
from phrasecoach.features.session.domain.models import Phrase
from .sql_models import CourseModel, PhraseModel
from ..domain.interfaces import IPhraseSource
from ..domain.models import Course, CourseProgress, CourseRequest

logger = logging.getLogger(__name__)


def _to_phrase(row: PhraseModel) -> Phrase:
    return Phrase(
        id=row.id,
        expected_text=row.expected_text,
        native_text=row.native_text,
        audio_ref=row.audio_ref,
        completed=row.completed,
        level=row.level,
        pronunciation_score=row.pronunciation_score,
    )


class SqlPhraseSource(IPhraseSource):
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def create_course(self, request: CourseRequest) -> int:
        """
        Transactional logic:
        1. Insert the Course.
        2. Insert its phrases with their list position as practice order.
        """
        with self.session_factory() as db:
            try:
                course = CourseModel(
                    title=request.title,
                    language_name=request.language_name,
                    language_code=request.language_code,
                    scenario_description=request.scenario_description,
                    current_level=request.current_level,
                )
                db.add(course)
                db.flush()  # Flush to generate ID

                for position, draft in enumerate(request.phrases):
                    db.add(PhraseModel(
                        course_id=course.id,
                        position=position,
                        level=draft.level,
                        expected_text=draft.expected_text,
                        native_text=draft.native_text,
                        audio_ref=draft.audio_ref,
                    ))

                db.commit()
                logger.info(f"Course created: {course.id} '{request.title}' ({len(request.phrases)} phrases)")
                return course.id
            except Exception:
                db.rollback()
                raise

    def get_course(self, course_id: int) -> Optional[Course]:
        with self.session_factory() as db:
            row = db.get(CourseModel, course_id)
            if not row:
                return None
            return Course(
                id=row.id,
                title=row.title,
                language_name=row.language_name,
                language_code=row.language_code,
                scenario_description=row.scenario_description or "",
                current_level=row.current_level,
                created_at=row.created_at,
            )

    def list_phrases(self, course_id: int, level: Optional[Level] = None) -> List[Phrase]:
        with self.session_factory() as db:
            query = db.query(PhraseModel).filter(PhraseModel.course_id == course_id)
            if level is not None:
                query = query.filter(PhraseModel.level == level)
            return [_to_phrase(row) for row in query.order_by(PhraseModel.position).all()]

    def mark_completed(self, phrase_id: int, score: Optional[float] = None) -> None:
        with self.session_factory() as db:
            try:
                row = db.get(PhraseModel, phrase_id)
                if not row:
                    raise ValueError(f"Phrase {phrase_id} not found.")

                if not row.completed:
                    row.completed = True
                    row.completed_at = datetime.now(timezone.utc)
                if score is not None and (row.pronunciation_score is None or score > row.pronunciation_score):
                    row.pronunciation_score = score

                db.commit()
            except Exception:
                db.rollback()
                raise

    def progress(self, course_id: int) -> CourseProgress:
        with self.session_factory() as db:
            total = db.query(func.count(PhraseModel.id)).filter(PhraseModel.course_id == course_id).scalar()
            completed = (
                db.query(func.count(PhraseModel.id))
                .filter(PhraseModel.course_id == course_id, PhraseModel.completed.is_(True))
                .scalar()
            )
            return CourseProgress(completed=completed or 0, total=total or 0)
