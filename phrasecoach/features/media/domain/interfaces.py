from abc import ABC, abstractmethod
from typing import Any


class IAudioPlayer(ABC):
    """
    Contract for the device audio playback service.
    Completion is reported back asynchronously (see MediaCoordinator.on_playback_finished).
    """
    @abstractmethod
    def play(self, audio_ref: Any) -> None:
        """
        Starts playing the referenced asset and returns immediately.

        Raises:
            PlaybackError: if the asset is missing or the device is busy.
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stops playback. Must be safe to call when nothing is playing."""
        pass


class ISpeechRecognizer(ABC):
    """
    Contract for the speech-to-text service.
    Transcripts (and optional assessments) are delivered asynchronously.
    """
    @abstractmethod
    def start(self, locale: str) -> None:
        """
        Starts listening in the given locale (e.g. 'fr-FR') and returns immediately.

        Raises:
            CaptureError: on permission denial or when the microphone is unavailable.
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stops listening. Must be safe to call when not listening."""
        pass
