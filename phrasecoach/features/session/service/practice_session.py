# File: phrasecoach/features/session/service/practice_session.py
import logging
from typing import Any, Callable, Dict, Optional, Sequence, Union

from phrasecoach.core.config.settings import settings
from phrasecoach.features.alignment.domain.models import TranscriptResult
from phrasecoach.features.alignment.service.api import compare
from phrasecoach.features.assessment.data.provider_payload import parse_assessment
from phrasecoach.features.assessment.domain.models import PronunciationAssessment
from phrasecoach.features.feedback.domain.models import FeedbackRecord
from phrasecoach.features.feedback.service.projector import project
from phrasecoach.features.media.domain.interfaces import IAudioPlayer, ISpeechRecognizer
from phrasecoach.features.media.domain.models import ActivityToken, CaptureError, CoordinatorResult, MediaState
from phrasecoach.features.media.service.coordinator import MediaCoordinator
from ..domain.models import Phrase, PhraseChanged
from .paginator import SessionPaginator

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[Phrase, FeedbackRecord], None]


class PracticeSession:
    """
    Facade for one practice run over an ordered list of phrases.
    Wires the paginator and the media coordinator to the comparison pipeline
    and reports phrases the learner got right.
    """

    def __init__(
        self,
        phrases: Sequence[Phrase],
        player: IAudioPlayer,
        recognizer: ISpeechRecognizer,
        locale: Optional[str] = None,
        autoplay: Optional[bool] = None,
        on_completed: Optional[CompletionCallback] = None,
        session_id: Optional[str] = None,
    ):
        self.coordinator = MediaCoordinator(
            player, recognizer, locale or settings.CAPTURE_LOCALE, session_id=session_id
        )
        self.paginator = SessionPaginator(phrases, self.coordinator)
        self.autoplay = settings.AUTOPLAY_ON_PHRASE_CHANGE if autoplay is None else autoplay
        self.on_completed = on_completed
        self.is_ready = False
        self._score: Optional[float] = None

        self.paginator.subscribe(self._on_phrase_changed)

    # --- Lifecycle ---

    def start(self) -> CoordinatorResult:
        """The learner pressed Start: the current phrase's audio plays if autoplay is on."""
        self.is_ready = True
        logger.info(
            f"Practice session {self.coordinator.phrase_token.session_id} started "
            f"with {self.paginator.cursor.phrase_count} phrases"
        )
        if self.autoplay:
            return self.coordinator.start_playback()
        return CoordinatorResult(ok=True, state=self.state)

    def close(self) -> CoordinatorResult:
        self.is_ready = False
        result = self.coordinator.stop_all()
        logger.info(f"Practice session {self.coordinator.phrase_token.session_id} closed")
        return result

    # --- Read model ---

    @property
    def state(self) -> MediaState:
        return self.coordinator.state

    @property
    def current_index(self) -> int:
        return self.paginator.current_index

    @property
    def current_phrase(self) -> Phrase:
        return self.paginator.current_phrase

    @property
    def feedback(self) -> FeedbackRecord:
        return project(self.paginator.verdicts, pronunciation_score=self._score)

    # --- Navigation ---

    def next(self) -> bool:
        return self.paginator.next()

    def previous(self) -> bool:
        return self.paginator.previous()

    def jump_to(self, index: int) -> bool:
        return self.paginator.jump_to(index)

    def _on_phrase_changed(self, event: PhraseChanged):
        self._score = None
        if self.is_ready and self.autoplay:
            self.coordinator.start_playback()

    # --- Media controls ---

    def start_playback(self) -> CoordinatorResult:
        return self.coordinator.start_playback()

    def stop_playback(self) -> CoordinatorResult:
        return self.coordinator.stop_playback()

    def toggle_playback(self) -> CoordinatorResult:
        return self.coordinator.toggle_playback()

    def start_capture(self) -> CoordinatorResult:
        return self.coordinator.start_capture()

    def stop_capture(self) -> CoordinatorResult:
        return self.coordinator.stop_capture()

    def toggle_capture(self) -> CoordinatorResult:
        return self.coordinator.toggle_capture()

    # --- Service completions ---

    def on_playback_finished(self, token: ActivityToken) -> bool:
        return self.coordinator.on_playback_finished(token)

    def on_capture_error(self, token: ActivityToken, error: CaptureError) -> CoordinatorResult:
        return self.coordinator.on_capture_error(token, error)

    def on_capture_result(
        self,
        token: ActivityToken,
        transcript: Union[str, TranscriptResult],
        assessment: Optional[Union[PronunciationAssessment, Dict[str, Any]]] = None,
    ) -> bool:
        """
        Entry point for the recognizer's asynchronous results.

        Returns False when the result belonged to a superseded attempt; such
        results are dropped without looking at their payload. For the live
        attempt, a raw provider payload is parsed under the coordinator lock.
        A malformed one raises AlignmentError after capture has been put back
        to IDLE, so the learner can simply record again.
        """
        if isinstance(transcript, str):
            transcript = TranscriptResult(text=transcript)

        return self.coordinator.on_capture_result(token, transcript, assessment, handler=self._apply_result)

    def _apply_result(
        self,
        token: ActivityToken,
        transcript: TranscriptResult,
        assessment: Optional[Union[PronunciationAssessment, Dict[str, Any]]],
    ):
        phrase = self.paginator.current_phrase
        if isinstance(assessment, dict):
            assessment = parse_assessment(assessment)
        verdicts = compare(phrase.expected_text, transcript, assessment)

        if not self.paginator.update_verdicts(token, verdicts):
            return

        self._score = assessment.pronunciation_score if assessment else None
        feedback = self.feedback
        logger.debug(f"Phrase {phrase.id}: heard '{transcript.text}', incorrect={feedback.incorrect_words}")

        if transcript.is_final and feedback.is_correct:
            phrase.mark_completed(self._score)
            logger.info(f"✅ Phrase {phrase.id} completed")
            if self.on_completed:
                self.on_completed(phrase, feedback)
