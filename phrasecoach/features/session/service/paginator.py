# File: phrasecoach/features/session/service/paginator.py
import logging
from typing import Callable, List, Sequence

from phrasecoach.features.alignment.domain.models import WordVerdict
from phrasecoach.features.alignment.service.aligner import unknown_verdicts
from phrasecoach.features.media.domain.models import ActivityToken
from phrasecoach.features.media.service.coordinator import MediaCoordinator
from ..domain.models import Phrase, PhraseChanged, SessionCursor

logger = logging.getLogger(__name__)

PhraseListener = Callable[[PhraseChanged], None]


class SessionPaginator:
    """
    Tracks the active phrase of a practice session.

    Navigation clamps at both ends. Every real change tears down playback and
    capture, binds the new phrase to the coordinator under a fresh generation,
    resets the verdicts to UNKNOWN and notifies subscribers.
    """

    def __init__(self, phrases: Sequence[Phrase], coordinator: MediaCoordinator):
        if not phrases:
            raise ValueError("A practice session needs at least one phrase.")

        self.phrases: List[Phrase] = list(phrases)
        self.coordinator = coordinator
        self.cursor = SessionCursor(phrase_index=0, phrase_count=len(self.phrases))
        self._generation = 0
        self._listeners: List[PhraseListener] = []
        self.verdicts: List[WordVerdict] = unknown_verdicts(self.current_phrase.expected_text)

        self.coordinator.load(self.current_phrase.audio_ref, self.token)

    @property
    def current_index(self) -> int:
        return self.cursor.phrase_index

    @property
    def current_phrase(self) -> Phrase:
        return self.phrases[self.cursor.phrase_index]

    @property
    def token(self) -> ActivityToken:
        return ActivityToken(session_id=self.coordinator.phrase_token.session_id, generation=self._generation)

    def subscribe(self, listener: PhraseListener):
        self._listeners.append(listener)

    # --- Navigation ---

    def next(self) -> bool:
        if self.cursor.is_last:
            return False
        return self._change_to(self.cursor.phrase_index + 1)

    def previous(self) -> bool:
        if self.cursor.is_first:
            return False
        return self._change_to(self.cursor.phrase_index - 1)

    def jump_to(self, index: int) -> bool:
        if not 0 <= index < self.cursor.phrase_count:
            raise IndexError(f"Phrase index {index} outside [0, {self.cursor.phrase_count})")
        if index == self.cursor.phrase_index:
            return False
        return self._change_to(index)

    def _change_to(self, index: int) -> bool:
        previous_index = self.cursor.phrase_index

        # 1. Tear down anything tied to the old phrase
        self.coordinator.stop_playback()
        self.coordinator.stop_capture()

        # 2. Move the cursor and open a new generation
        self.cursor = SessionCursor(phrase_index=index, phrase_count=self.cursor.phrase_count)
        self._generation += 1
        phrase = self.current_phrase
        self.coordinator.load(phrase.audio_ref, self.token)

        # 3. Forget the previous comparison
        self.verdicts = unknown_verdicts(phrase.expected_text)

        logger.info(f"Phrase changed {previous_index + 1} -> {self.cursor.page_label} (id={phrase.id})")

        event = PhraseChanged(previous_index=previous_index, index=index, phrase=phrase, token=self.token)
        for listener in self._listeners:
            listener(event)
        return True

    # --- Verdicts ---

    def is_current(self, token: ActivityToken) -> bool:
        current = self.token
        return token.session_id == current.session_id and token.generation == current.generation

    def update_verdicts(self, token: ActivityToken, verdicts: List[WordVerdict]) -> bool:
        """Stores verdicts produced for `token`; results for a superseded phrase are dropped."""
        if not self.is_current(token):
            logger.warning(f"Dropping verdicts for superseded phrase generation {token.generation}")
            return False
        self.verdicts = verdicts
        return True
