from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Float, Boolean, Text, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from phrasecoach.core.database.base import Base
from phrasecoach.core.common.enums import Level

def utc_now():
    return datetime.now(timezone.utc)

class CourseModel(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    language_name = Column(String, nullable=False)
    language_code = Column(String, nullable=False)  # BCP-47, passed to the recognizer
    scenario_description = Column(Text, default="")
    current_level = Column(SQLEnum(Level), default=Level.BEGINNING, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    phrases = relationship(
        "PhraseModel",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="PhraseModel.position"
    )

class PhraseModel(Base):
    __tablename__ = "phrases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # Practice order inside the course
    level = Column(SQLEnum(Level), default=Level.BEGINNING, nullable=False)

    expected_text = Column(Text, nullable=False)  # What the learner says (target language)
    native_text = Column(Text, nullable=False)    # Translation shown underneath
    audio_ref = Column(String, nullable=False)

    completed = Column(Boolean, default=False, nullable=False)
    pronunciation_score = Column(Float, nullable=True)  # Best score reported by the assessment provider
    completed_at = Column(DateTime(timezone=True), nullable=True)

    course = relationship("CourseModel", back_populates="phrases")
