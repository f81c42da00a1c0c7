from typing import List, Optional, Union

from phrasecoach.features.assessment.domain.models import PronunciationAssessment
from phrasecoach.features.assessment.service.merger import merge
from ..domain.models import AlignmentError, TranscriptResult, WordVerdict
from .aligner import align


def compare(
    expected_phrase: str,
    transcript: Union[str, TranscriptResult],
    assessment: Optional[PronunciationAssessment] = None,
) -> List[WordVerdict]:
    """
    Standalone API for the full comparison pipeline:
    normalize -> positional alignment -> assessment merge.
    """
    if isinstance(transcript, TranscriptResult):
        transcript = transcript.text
    if assessment is not None and not isinstance(assessment, PronunciationAssessment):
        raise AlignmentError(
            f"Assessment must be parsed before comparison, got {type(assessment).__name__}"
        )

    return merge(align(expected_phrase, transcript), assessment)
