import pytest

from phrasecoach.features.alignment.domain.models import AlignmentError, VerdictStatus
from phrasecoach.features.alignment.service.aligner import align, unknown_verdicts
from phrasecoach.features.assessment.data.provider_payload import dump_assessment, parse_assessment
from phrasecoach.features.assessment.domain.models import (
    ErrorType,
    PronunciationAssessment,
    WordAssessment,
)
from phrasecoach.features.assessment.service.merger import merge

MATCH = VerdictStatus.MATCH
MISMATCH = VerdictStatus.MISMATCH
UNKNOWN = VerdictStatus.UNKNOWN


def word_payload(word, error_type="None", score=95.0):
    return {
        "word": word,
        "accuracyScore": score,
        "errorType": error_type,
        "syllables": [
            {"syllable": word, "grapheme": None, "offset": 1_000_000, "duration": 2_500_000, "accuracyScore": score},
        ],
        "phonemes": [
            {"phoneme": word[0], "offset": 1_000_000, "duration": 500_000, "accuracyScore": score, "nBestPhonemes": None},
            {"phoneme": word[-1], "offset": 1_500_000, "duration": 500_000, "accuracyScore": score - 10, "nBestPhonemes": None},
        ],
    }


def payload(*words):
    return {
        "accuracyScore": 88.0,
        "pronunciationScore": 84.5,
        "completenessScore": 100.0,
        "fluencyScore": 91.0,
        "prosodyScore": 77.0,
        "words": list(words),
    }


def assessment(*words):
    return PronunciationAssessment(
        accuracy_score=80.0,
        pronunciation_score=80.0,
        completeness_score=80.0,
        fluency_score=80.0,
        prosody_score=80.0,
        words=[WordAssessment(word=w, accuracy_score=90.0, error_type=e) for w, e in words],
    )


# --- Provider payload ---

def test_parse_assessment_converts_fields_and_ticks():
    result = parse_assessment(payload(word_payload("bière", "Mispronunciation", 40.0)))

    assert result.pronunciation_score == 84.5
    assert result.prosody_score == 77.0
    word = result.words[0]
    assert word.word == "bière"
    assert word.error_type == ErrorType.MISPRONUNCIATION
    assert word.syllables[0].offset == pytest.approx(0.1)
    assert word.syllables[0].duration == pytest.approx(0.25)
    assert word.weakest_phoneme().unit == "e"
    assert result.error_count == 1


def test_dump_assessment_preserves_provider_field_names():
    original = payload(word_payload("une"), word_payload("bière", "Omission", 10.0))
    dumped = dump_assessment(parse_assessment(original))
    assert dumped == original


@pytest.mark.parametrize("broken", [
    {"accuracyScore": 90},
    payload(word_payload("vin", "Stutter")),
    payload({"word": "vin", "accuracyScore": 150.0}),
    payload({**word_payload("vin"), "syllables": [{"syllable": "vin", "offset": -1, "duration": 5, "accuracyScore": 50}]}),
    ["not", "an", "object"],
    payload({"word": None, "accuracyScore": 90.0, "errorType": "None"}),
    payload({"word": 5, "accuracyScore": 90.0, "errorType": "None"}),
    payload({**word_payload("vin"), "phonemes": [{"phoneme": None, "offset": 0, "duration": 5, "accuracyScore": 50}]}),
])
def test_parse_assessment_rejects_malformed_payloads(broken):
    with pytest.raises(AlignmentError):
        parse_assessment(broken)


def test_missing_error_type_defaults_to_none():
    raw = word_payload("vin")
    del raw["errorType"]
    assert parse_assessment(payload(raw)).words[0].error_type == ErrorType.NONE


# --- Merger ---

def test_merge_without_assessment_passes_through():
    positional = align("a b c", "a x c")
    assert merge(positional, None) is positional


def test_error_type_overrides_positional_match():
    positional = align("une bière locale", "une bière locale")
    merged = merge(positional, assessment(
        ("une", ErrorType.NONE), ("bière", ErrorType.MISPRONUNCIATION), ("locale", ErrorType.NONE),
    ))
    assert [v.status for v in merged] == [MATCH, MISMATCH, MATCH]
    assert merged[1].detail.error_type == ErrorType.MISPRONUNCIATION


def test_no_error_overrides_positional_mismatch():
    # Recognizer heard "bières" but the assessor scored the expected word as fine
    positional = align("une bière", "une bières")
    merged = merge(positional, assessment(("une", ErrorType.NONE), ("bière", ErrorType.NONE)))
    assert [v.status for v in merged] == [MATCH, MATCH]


def test_insertion_skew_resolves_to_nearest_expected_word():
    positional = unknown_verdicts("je voudrais une bière")
    merged = merge(positional, assessment(
        ("je", ErrorType.NONE),
        ("euh", ErrorType.INSERTION),
        ("voudrais", ErrorType.NONE),
        ("une", ErrorType.NONE),
        ("bière", ErrorType.MISPRONUNCIATION),
    ))
    assert [v.status for v in merged] == [MATCH, MATCH, MATCH, MISMATCH]


def test_inserted_repeat_does_not_claim_a_correct_word():
    positional = unknown_verdicts("the cat the dog")
    merged = merge(positional, assessment(
        ("the", ErrorType.NONE),
        ("cat", ErrorType.NONE),
        ("the", ErrorType.INSERTION),
        ("the", ErrorType.NONE),
        ("dog", ErrorType.NONE),
    ))
    assert [v.status for v in merged] == [MATCH, MATCH, MATCH, MATCH]
    assert all(v.detail.error_type == ErrorType.NONE for v in merged)


def test_omission_marks_expected_word_and_unassessed_words_keep_positional_verdict():
    positional = unknown_verdicts("le vin rouge")
    merged = merge(positional, assessment(("vin", ErrorType.OMISSION)))
    assert [v.status for v in merged] == [UNKNOWN, MISMATCH, UNKNOWN]


def test_repeated_words_are_claimed_once():
    positional = unknown_verdicts("a a b")
    merged = merge(positional, assessment(("a", ErrorType.NONE), ("a", ErrorType.MISPRONUNCIATION)))
    assert [v.status for v in merged] == [MATCH, MISMATCH, UNKNOWN]


def test_merge_keeps_overflow_positions():
    positional = align("a b", "a b c")
    merged = merge(positional, assessment(("a", ErrorType.NONE), ("b", ErrorType.NONE)))
    assert len(merged) == 3
    assert merged[2].is_overflow and merged[2].status == MISMATCH
