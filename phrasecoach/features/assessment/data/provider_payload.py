# File: phrasecoach/features/assessment/data/provider_payload.py
import logging
from typing import Any, Dict, List

from phrasecoach.features.alignment.domain.models import AlignmentError
from ..domain.models import (
    ErrorType,
    PhonemeAssessment,
    PronunciationAssessment,
    SyllableAssessment,
    WordAssessment,
)

logger = logging.getLogger(__name__)

# The provider reports offsets and durations in 100-nanosecond ticks
TICKS_PER_SECOND = 10_000_000


def _ticks_to_seconds(ticks: Any) -> float:
    return float(ticks) / TICKS_PER_SECOND


def _seconds_to_ticks(seconds: float) -> int:
    return int(round(seconds * TICKS_PER_SECOND))


def _parse_syllable(raw: Dict[str, Any]) -> SyllableAssessment:
    return SyllableAssessment(
        unit=raw["syllable"],
        offset=_ticks_to_seconds(raw["offset"]),
        duration=_ticks_to_seconds(raw["duration"]),
        accuracy_score=float(raw["accuracyScore"]),
    )


def _parse_phoneme(raw: Dict[str, Any]) -> PhonemeAssessment:
    return PhonemeAssessment(
        unit=raw["phoneme"],
        offset=_ticks_to_seconds(raw["offset"]),
        duration=_ticks_to_seconds(raw["duration"]),
        accuracy_score=float(raw["accuracyScore"]),
    )


def _parse_word(raw: Dict[str, Any]) -> WordAssessment:
    return WordAssessment(
        word=raw["word"],
        accuracy_score=float(raw["accuracyScore"]),
        error_type=ErrorType(raw.get("errorType", ErrorType.NONE.value)),
        syllables=[_parse_syllable(s) for s in raw.get("syllables") or []],
        phonemes=[_parse_phoneme(p) for p in raw.get("phonemes") or []],
    )


def parse_assessment(payload: Dict[str, Any]) -> PronunciationAssessment:
    """
    Converts a provider payload (camelCase JSON object) into domain objects.

    Raises:
        AlignmentError: if a field is missing, has the wrong type, an errorType
        is unknown, or a score/offset is out of range.
    """
    if not isinstance(payload, dict):
        raise AlignmentError(f"Assessment payload must be an object, got {type(payload).__name__}")

    try:
        assessment = PronunciationAssessment(
            accuracy_score=float(payload["accuracyScore"]),
            pronunciation_score=float(payload["pronunciationScore"]),
            completeness_score=float(payload["completenessScore"]),
            fluency_score=float(payload["fluencyScore"]),
            prosody_score=float(payload["prosodyScore"]),
            words=[_parse_word(w) for w in payload.get("words") or []],
        )
    except KeyError as e:
        raise AlignmentError(f"Assessment payload is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise AlignmentError(f"Malformed assessment payload: {e}") from e

    logger.debug(f"Parsed assessment: {len(assessment.words)} words, {assessment.error_count} flagged")
    return assessment


def dump_assessment(assessment: PronunciationAssessment) -> Dict[str, Any]:
    """Serializes back to the provider's field names and tick units."""
    def dump_units(units: List[Any], key: str, extra: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [
            {
                key: u.unit,
                **extra,
                "offset": _seconds_to_ticks(u.offset),
                "duration": _seconds_to_ticks(u.duration),
                "accuracyScore": u.accuracy_score,
            }
            for u in units
        ]

    return {
        "accuracyScore": assessment.accuracy_score,
        "pronunciationScore": assessment.pronunciation_score,
        "completenessScore": assessment.completeness_score,
        "fluencyScore": assessment.fluency_score,
        "prosodyScore": assessment.prosody_score,
        "words": [
            {
                "word": w.word,
                "accuracyScore": w.accuracy_score,
                "errorType": w.error_type.value,
                "syllables": dump_units(w.syllables, "syllable", {"grapheme": None}),
                "phonemes": dump_units(w.phonemes, "phoneme", {"nBestPhonemes": None}),
            }
            for w in assessment.words
        ],
    }
