# File: phrasecoach/features/media/domain/models.py
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Union


@unique
class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"


@unique
class CaptureState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    PROCESSING = "processing"


@unique
class CaptureFailure(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    DEVICE_UNAVAILABLE = "device_unavailable"
    NO_SPEECH = "no_speech"


@unique
class PlaybackFailure(str, Enum):
    ASSET_MISSING = "asset_missing"
    DEVICE_BUSY = "device_busy"


class CaptureError(Exception):
    def __init__(self, reason: CaptureFailure, message: str = ""):
        self.reason = reason
        super().__init__(message or reason.value)


class PlaybackError(Exception):
    def __init__(self, reason: PlaybackFailure, message: str = ""):
        self.reason = reason
        super().__init__(message or reason.value)


MediaError = Union[CaptureError, PlaybackError]


@dataclass(frozen=True)
class MediaState:
    playback: PlaybackState = PlaybackState.IDLE
    capture: CaptureState = CaptureState.IDLE

    @property
    def is_busy(self) -> bool:
        return self.playback != PlaybackState.IDLE or self.capture != CaptureState.IDLE


@dataclass(frozen=True)
class ActivityToken:
    """
    Identifies who an asynchronous completion belongs to.

    `generation` changes every time the active phrase changes; `attempt`
    changes every time capture or playback is (re)started for that phrase.
    A completion is honoured only if its token equals the one currently active.
    """
    session_id: str
    generation: int = 0
    attempt: int = 0


@dataclass(frozen=True)
class CoordinatorResult:
    """Outcome of a coordinator operation together with the state it left behind."""
    ok: bool
    state: MediaState
    error: Optional[MediaError] = None
    token: Optional[ActivityToken] = None
