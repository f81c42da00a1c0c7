# File: phrasecoach/features/media/service/coordinator.py
import logging
import uuid
from dataclasses import replace
from threading import RLock
from typing import Any, Callable, Optional

from phrasecoach.features.alignment.domain.models import TranscriptResult
from ..domain.interfaces import IAudioPlayer, ISpeechRecognizer
from ..domain.models import (
    ActivityToken,
    CaptureError,
    CaptureState,
    CoordinatorResult,
    MediaState,
    PlaybackError,
    PlaybackFailure,
    PlaybackState,
)

logger = logging.getLogger(__name__)

ResultHandler = Callable[[ActivityToken, TranscriptResult, Optional[Any]], None]


class MediaCoordinator:
    """
    Keeps audio playback and voice capture mutually exclusive.

    Every transition happens under one re-entrant lock, so completions arriving
    on service threads are serialised with user actions. Service failures never
    escape: the affected axis is put back to IDLE and the error is returned in
    the CoordinatorResult.
    """

    def __init__(
        self,
        player: IAudioPlayer,
        recognizer: ISpeechRecognizer,
        locale: str,
        session_id: Optional[str] = None,
    ):
        self.player = player
        self.recognizer = recognizer
        self.locale = locale

        self._lock = RLock()
        self._playback = PlaybackState.IDLE
        self._capture = CaptureState.IDLE
        self._phrase_token = ActivityToken(session_id=session_id or uuid.uuid4().hex)
        self._audio_ref: Optional[Any] = None
        self._attempts = 0
        self._playback_token: Optional[ActivityToken] = None
        self._capture_token: Optional[ActivityToken] = None

    # --- State ---

    @property
    def state(self) -> MediaState:
        with self._lock:
            return MediaState(playback=self._playback, capture=self._capture)

    @property
    def phrase_token(self) -> ActivityToken:
        return self._phrase_token

    @property
    def capture_token(self) -> Optional[ActivityToken]:
        return self._capture_token

    def _result(self, ok: bool, error=None, token: Optional[ActivityToken] = None) -> CoordinatorResult:
        return CoordinatorResult(ok=ok, state=self.state, error=error, token=token)

    def _next_token(self) -> ActivityToken:
        self._attempts += 1
        return replace(self._phrase_token, attempt=self._attempts)

    # --- Phrase binding ---

    def load(self, audio_ref: Any, token: ActivityToken) -> CoordinatorResult:
        """
        Binds a new phrase context. Anything still running for the previous
        phrase is stopped first, so its late completions become stale.
        """
        with self._lock:
            self.stop_playback()
            self.stop_capture()
            self._audio_ref = audio_ref
            self._phrase_token = token
            logger.debug(f"Loaded audio for generation {token.generation}")
            return self._result(True)

    # --- Playback ---

    def start_playback(self) -> CoordinatorResult:
        with self._lock:
            if self._capture != CaptureState.IDLE:
                logger.info("Playback request ignored: capture in progress.")
                return self._result(False)

            if self._audio_ref is None:
                return self._result(False, PlaybackError(PlaybackFailure.ASSET_MISSING, "No audio loaded."))

            if self._playback == PlaybackState.PLAYING:
                self.stop_playback()

            # State flips before dispatch so a synchronous completion sees the live token
            token = self._next_token()
            self._playback = PlaybackState.PLAYING
            self._playback_token = token
            try:
                self.player.play(self._audio_ref)
            except PlaybackError as e:
                self._playback = PlaybackState.IDLE
                self._playback_token = None
                logger.warning(f"Playback failed to start: {e}")
                return self._result(False, e)

            return self._result(True, token=token)

    def stop_playback(self) -> CoordinatorResult:
        with self._lock:
            if self._playback == PlaybackState.IDLE:
                return self._result(True)

            self._playback = PlaybackState.IDLE
            self._playback_token = None
            try:
                self.player.stop()
            except PlaybackError as e:
                logger.warning(f"Player reported an error while stopping: {e}")
                return self._result(False, e)
            return self._result(True)

    def toggle_playback(self) -> CoordinatorResult:
        with self._lock:
            if self._capture != CaptureState.IDLE:
                return self._result(False)
            if self._playback == PlaybackState.PLAYING:
                return self.stop_playback()
            return self.start_playback()

    def on_playback_finished(self, token: ActivityToken) -> bool:
        """Playback-finished event from the player. Returns False if the event was stale."""
        with self._lock:
            if self._playback != PlaybackState.PLAYING or token != self._playback_token:
                logger.debug(f"Discarding stale playback completion {token}")
                return False
            self._playback = PlaybackState.IDLE
            self._playback_token = None
            return True

    # --- Capture ---

    def start_capture(self) -> CoordinatorResult:
        with self._lock:
            if self._capture != CaptureState.IDLE:
                return self._result(True, token=self._capture_token)

            # Playback must be fully stopped before the microphone opens
            if self._playback == PlaybackState.PLAYING:
                self.stop_playback()

            token = self._next_token()
            self._capture = CaptureState.LISTENING
            self._capture_token = token
            try:
                self.recognizer.start(self.locale)
            except CaptureError as e:
                self._capture = CaptureState.IDLE
                self._capture_token = None
                logger.warning(f"Capture failed to start ({e.reason.value}): {e}")
                return self._result(False, e)

            logger.info(f"Listening ({self.locale}) for generation {token.generation}, attempt {token.attempt}")
            return self._result(True, token=token)

    def stop_capture(self) -> CoordinatorResult:
        with self._lock:
            if self._capture == CaptureState.IDLE:
                return self._result(True)

            self._capture = CaptureState.IDLE
            self._capture_token = None
            try:
                self.recognizer.stop()
            except CaptureError as e:
                logger.warning(f"Recognizer reported an error while stopping: {e}")
                return self._result(False, e)
            return self._result(True)

    def toggle_capture(self) -> CoordinatorResult:
        with self._lock:
            if self._capture != CaptureState.IDLE:
                return self.stop_capture()
            return self.start_capture()

    def _is_current_capture(self, token: ActivityToken) -> bool:
        return self._capture != CaptureState.IDLE and token == self._capture_token

    def on_capture_result(
        self,
        token: ActivityToken,
        transcript: TranscriptResult,
        assessment: Optional[Any] = None,
        handler: Optional[ResultHandler] = None,
    ) -> bool:
        """
        Delivers a recognition result.

        Interim transcripts are handed to `handler` while capture stays LISTENING.
        A final transcript moves LISTENING -> PROCESSING, runs `handler`, then
        returns to IDLE. Results for any other token are dropped before the
        handler sees them. If the handler raises, capture is back at IDLE
        before the exception propagates.
        """
        with self._lock:
            if not self._is_current_capture(token):
                logger.warning(f"Discarding stale capture result for {token}")
                return False

            if not transcript.is_final:
                if handler:
                    try:
                        handler(token, transcript, assessment)
                    except Exception as e:
                        logger.warning(f"Interim result rejected, stopping capture: {e}")
                        self.stop_capture()
                        raise
                return True

            self._capture = CaptureState.PROCESSING
            try:
                if handler:
                    handler(token, transcript, assessment)
            except Exception as e:
                logger.warning(f"Final result rejected: {e}")
                raise
            finally:
                if self._capture == CaptureState.PROCESSING and self._capture_token == token:
                    self._capture = CaptureState.IDLE
                    self._capture_token = None
            return True

    def on_capture_error(self, token: ActivityToken, error: CaptureError) -> CoordinatorResult:
        """Asynchronous recognizer failure, e.g. no speech detected before timeout."""
        with self._lock:
            if not self._is_current_capture(token):
                logger.debug(f"Ignoring stale capture error for {token}: {error}")
                return self._result(False)

            self._capture = CaptureState.IDLE
            self._capture_token = None
            logger.warning(f"Capture ended with error ({error.reason.value}): {error}")
            return self._result(False, error)

    # --- Teardown ---

    def stop_all(self) -> CoordinatorResult:
        with self._lock:
            if not self.state.is_busy:
                return self._result(True)

            logger.debug(f"Stopping active media: {self.state}")
            playback = self.stop_playback()
            capture = self.stop_capture()
            return self._result(playback.ok and capture.ok, playback.error or capture.error)
