"""
Per-answer behavioral inconsistency score.

Formula (all four signals present):
    score = 0.35 * face + 0.35 * voice + 0.20 * nlp + 0.10 * reaction_delay
with every 0-10 signal rescaled to 0-100 first.

Missing signals are dropped and the remaining weights renormalized, so an
answer with only a face score of 10 scores exactly 100. An answer with no
signal at all is unscorable (individual_score=None), which is a valid
result, not an error.

Score interpretation (0-100, higher = more inconsistency/stress indicators).
This is a heuristic indicator and not a deception verdict.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

from fusion.weighted_fusion import fuse_scores
from utils.config_loader import get_nested_config
from utils.validation import ensure_finite

from .reaction_delay import compute_reaction_delay_score

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS = {
    'face': 0.35,
    'voice': 0.35,
    'nlp': 0.20,
    'reaction_delay': 0.10,
}


@dataclass(frozen=True)
class RawAnswerSignals:
    """
    Raw per-answer signals, each optional.

    Attributes:
        face_score: Facial stress proxy (0-10)
        voice_score: Vocal stress proxy (0-10)
        nlp_score: Text consistency score (0-10)
        reaction_delay: Seconds before the answer started (>= 0)
    """
    face_score: Optional[float] = None
    voice_score: Optional[float] = None
    nlp_score: Optional[float] = None
    reaction_delay: Optional[float] = None


@dataclass(frozen=True)
class AnswerScore:
    """
    Scored answer with identity pass-through fields.

    Attributes:
        answer_id, question_id, question_number, question_text, category:
            Opaque identity supplied by the caller
        face_score, voice_score, nlp_score, reaction_delay: Raw signals
        reaction_delay_score: Bucketed delay (0-10) or None
        individual_score: Fused score (0-100), None if no signal present
    """
    answer_id: str
    question_id: str
    question_number: Union[int, float]
    question_text: str
    category: str
    face_score: Optional[float]
    voice_score: Optional[float]
    nlp_score: Optional[float]
    reaction_delay: Optional[float]
    reaction_delay_score: Optional[float]
    individual_score: Optional[float]

    @property
    def is_scored(self) -> bool:
        return self.individual_score is not None

    def to_dict(self) -> Dict:
        return {
            'answerId': self.answer_id,
            'questionId': self.question_id,
            'questionNumber': self.question_number,
            'questionText': self.question_text,
            'category': self.category,
            'faceScore': self.face_score,
            'voiceScore': self.voice_score,
            'nlpScore': self.nlp_score,
            'reactionDelay': self.reaction_delay,
            'reactionDelayScore': self.reaction_delay_score,
            'individualScore': self.individual_score,
        }


def score_answer(
    answer_id: str,
    question_id: str,
    question_number: Union[int, float],
    question_text: str,
    category: str,
    face_score: Optional[float] = None,
    voice_score: Optional[float] = None,
    nlp_score: Optional[float] = None,
    reaction_delay: Optional[float] = None,
    config: Optional[Dict] = None
) -> AnswerScore:
    """
    Fuse the available signals of one answer into a 0-100 score.

    Args:
        answer_id, question_id, question_number, question_text, category:
            Identity fields, passed through unchanged
        face_score: Facial stress proxy (0-10) or None
        voice_score: Vocal stress proxy (0-10) or None
        nlp_score: Text consistency score (0-10) or None
        reaction_delay: Seconds before answering, or None
        config: Configuration dict (reads scoring.weights, scoring.reaction_delay)

    Returns:
        AnswerScore

    Raises:
        ValueError: If a signal is NaN/infinite or the weights are invalid
    """
    face_score = ensure_finite(face_score, 'face_score')
    voice_score = ensure_finite(voice_score, 'voice_score')
    nlp_score = ensure_finite(nlp_score, 'nlp_score')
    reaction_delay = ensure_finite(reaction_delay, 'reaction_delay')

    reaction_delay_score = compute_reaction_delay_score(reaction_delay, config)

    weights = {**DEFAULT_WEIGHTS, **(get_nested_config(config, 'scoring.weights', default={}) or {})}

    individual_score = fuse_scores(
        {
            'face': face_score,
            'voice': voice_score,
            'nlp': nlp_score,
            'reaction_delay': reaction_delay_score,
        },
        weights
    )

    if individual_score is None:
        logger.debug(f"Answer {answer_id}: no signals available, left unscored")
    else:
        logger.debug(f"Answer {answer_id}: individual score {individual_score:.2f}")

    return AnswerScore(
        answer_id=answer_id,
        question_id=question_id,
        question_number=question_number,
        question_text=question_text,
        category=category,
        face_score=face_score,
        voice_score=voice_score,
        nlp_score=nlp_score,
        reaction_delay=reaction_delay,
        reaction_delay_score=reaction_delay_score,
        individual_score=individual_score,
    )


def score_answer_signals(
    answer_id: str,
    question_id: str,
    question_number: Union[int, float],
    question_text: str,
    category: str,
    signals: RawAnswerSignals,
    config: Optional[Dict] = None
) -> AnswerScore:
    """Convenience wrapper around score_answer taking a RawAnswerSignals bundle."""
    return score_answer(
        answer_id,
        question_id,
        question_number,
        question_text,
        category,
        face_score=signals.face_score,
        voice_score=signals.voice_score,
        nlp_score=signals.nlp_score,
        reaction_delay=signals.reaction_delay,
        config=config
    )
