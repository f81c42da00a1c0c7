import pytest

from phrasecoach.features.alignment.domain.models import AlignmentError, TranscriptResult, VerdictStatus
from phrasecoach.features.alignment.service.aligner import align, unknown_verdicts
from phrasecoach.features.alignment.service.api import compare
from phrasecoach.features.alignment.service.normalizer import normalize, split_words

MATCH = VerdictStatus.MATCH
MISMATCH = VerdictStatus.MISMATCH


def statuses(verdicts):
    return [v.status for v in verdicts]


# --- Normalizer ---

@pytest.mark.parametrize("raw, expected", [
    ("Where is the drink menu?", "where is the drink menu"),
    ("  I would   like\ta beer,\nplease. ", "i would like a beer please"),
    ("Je vais payer l'addition.", "je vais payer l'addition"),
    ("Où est la carte des boissons ?", "où est la carte des boissons"),
    ("{a}=b\\c/d#e!f$g%h^i&j*k;l:m_n`o~p(q)", "abcdefghijklmnopq"),
    ("", ""),
    ("?!.", ""),
])
def test_normalize(raw, expected):
    assert normalize(raw) == expected


@pytest.mark.parametrize("raw", [
    "Pourriez-vous recommander une bière locale ?",
    "  MIXED   case ,, and . punctuation  ",
    "C'est l'heure de fermeture.",
    "",
])
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once


def test_normalize_rejects_non_string():
    with pytest.raises(AlignmentError):
        normalize(None)


def test_split_words_of_empty_phrase_is_empty():
    assert split_words("") == []
    assert split_words(" ... ") == []
    assert split_words("Est-ce que vous servez des snacks ici ?") == [
        "est-ce", "que", "vous", "servez", "des", "snacks", "ici"
    ]


# --- Aligner ---

def test_identical_words_all_match():
    verdicts = align("I will pay the bill", "I will pay the bill")
    assert statuses(verdicts) == [MATCH] * 5


def test_punctuation_and_case_are_ignored():
    verdicts = align("Where is the drink menu?", "where is the drink menu")
    assert len(verdicts) == 5
    assert statuses(verdicts) == [MATCH] * 5


def test_single_substitution_is_flagged_at_its_index():
    verdicts = align("I would like a beer, please.", "I would like a wine please")
    assert [v.index for v in verdicts if v.status == MISMATCH] == [3]
    assert verdicts[3].expected_word == "beer"


def test_shorter_candidate_pads_with_empty_words():
    verdicts = align("a b c", "a b")
    assert statuses(verdicts) == [MATCH, MATCH, MISMATCH]
    assert verdicts[2].expected_word == "c"


def test_longer_candidate_adds_overflow_positions():
    verdicts = align("a b", "a b c")
    assert statuses(verdicts) == [MATCH, MATCH, MISMATCH]
    assert verdicts[2].is_overflow


def test_omission_cascades_without_resynchronisation():
    # "would" is missing, so every later word is shifted by one
    verdicts = align("I would like a beer", "I like a beer")
    assert statuses(verdicts) == [MATCH, MISMATCH, MISMATCH, MISMATCH, MISMATCH]


def test_empty_candidate_mismatches_everything():
    verdicts = align("a b c", "")
    assert statuses(verdicts) == [MISMATCH] * 3


def test_both_empty_yields_no_verdicts():
    assert align("", "") == []


def test_unknown_verdicts_cover_every_expected_word():
    verdicts = unknown_verdicts("Où est la carte des boissons ?")
    assert [v.expected_word for v in verdicts] == ["où", "est", "la", "carte", "des", "boissons"]
    assert all(v.status == VerdictStatus.UNKNOWN for v in verdicts)


# --- Pipeline ---

def test_compare_accepts_transcript_result():
    verdicts = compare("Je vais payer l'addition.", TranscriptResult(text="je vais payer l'addition"))
    assert statuses(verdicts) == [MATCH] * 4


def test_compare_rejects_unparsed_assessment():
    with pytest.raises(AlignmentError):
        compare("a b", "a b", assessment={"accuracyScore": 90})
