"""
Session-level behavioral inconsistency score.

Aggregates per-answer scores:
- final_score: mean individual score over scored answers (0 if none)
- Per-metric averages: each over the answers where THAT raw signal exists,
  independently of whether the answer could be fused
- Category breakdown: scored answers only, grouped by question category

Score interpretation (final_score, 0-100):
- 75-100: High inconsistency indicators
- 50-74: Elevated inconsistency indicators
- 25-49: Mild inconsistency indicators
- 0-24: Low inconsistency indicators

Scores are heuristic observations of stress and answer style. They are not
evidence of deception and must not be presented as such.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from utils.rounding import round_half_up

from .answer_score import AnswerScore

logger = logging.getLogger(__name__)

HEURISTIC_DISCLAIMER = (
    "These scores are heuristic indicators derived from stress proxies and "
    "answer wording; they are not a forensic assessment of truthfulness."
)


@dataclass(frozen=True)
class CategoryBreakdown:
    """Scored answer count and mean individual score for one category."""
    count: int
    average_score: float

    def to_dict(self) -> Dict:
        return {'count': self.count, 'averageScore': self.average_score}


@dataclass(frozen=True)
class SessionScoreResult:
    """
    Aggregated session score.

    Attributes:
        final_score: Mean individual score (0-100, 0 when nothing scored)
        total_questions: Number of answers supplied
        answered_questions: Answers with a non-null individual score
        answer_scores: Per-answer scores, in input order
        average_face_score: Mean face score over answers that have one
        average_voice_score: Mean voice score over answers that have one
        average_nlp_score: Mean NLP score over answers that have one
        average_reaction_delay: Mean raw delay (seconds) over answers that have one
        category_breakdown: Category → CategoryBreakdown (scored answers only)
        session_id: Attached by the caller after aggregation
    """
    final_score: float
    total_questions: int
    answered_questions: int
    answer_scores: Tuple[AnswerScore, ...] = ()
    average_face_score: Optional[float] = None
    average_voice_score: Optional[float] = None
    average_nlp_score: Optional[float] = None
    average_reaction_delay: Optional[float] = None
    category_breakdown: Mapping[str, CategoryBreakdown] = field(default_factory=dict)
    session_id: str = ''

    def __post_init__(self):
        # Copy containers so neither the caller nor a consumer can change them later
        object.__setattr__(self, 'answer_scores', tuple(self.answer_scores))
        object.__setattr__(
            self, 'category_breakdown', MappingProxyType(dict(self.category_breakdown))
        )

    def with_session_id(self, session_id: str) -> 'SessionScoreResult':
        return replace(self, session_id=session_id)

    def to_dict(self) -> Dict:
        return {
            'sessionId': self.session_id,
            'finalScore': self.final_score,
            'totalQuestions': self.total_questions,
            'answeredQuestions': self.answered_questions,
            'answerScores': [score.to_dict() for score in self.answer_scores],
            'averageFaceScore': self.average_face_score,
            'averageVoiceScore': self.average_voice_score,
            'averageNlpScore': self.average_nlp_score,
            'averageReactionDelay': self.average_reaction_delay,
            'categoryBreakdown': {
                category: breakdown.to_dict()
                for category, breakdown in self.category_breakdown.items()
            },
        }


def aggregate_session(answer_scores: Sequence[AnswerScore]) -> SessionScoreResult:
    """
    Aggregate answer scores into a session result.

    Args:
        answer_scores: AnswerScore objects for one session

    Returns:
        SessionScoreResult (session_id left empty for the caller)
    """
    answer_scores = list(answer_scores)

    if not answer_scores:
        logger.warning("No answer scores supplied; returning empty session result")
        return SessionScoreResult(final_score=0.0, total_questions=0, answered_questions=0)

    scored = [a for a in answer_scores if a.individual_score is not None]

    final_score = _mean_or_none([a.individual_score for a in scored])
    if final_score is None:
        logger.warning(f"None of {len(answer_scores)} answers could be scored")
        final_score = 0.0

    result = SessionScoreResult(
        final_score=final_score,
        total_questions=len(answer_scores),
        answered_questions=len(scored),
        answer_scores=answer_scores,
        average_face_score=_mean_or_none([a.face_score for a in answer_scores]),
        average_voice_score=_mean_or_none([a.voice_score for a in answer_scores]),
        average_nlp_score=_mean_or_none([a.nlp_score for a in answer_scores]),
        average_reaction_delay=_mean_or_none([a.reaction_delay for a in answer_scores]),
        category_breakdown=_compute_category_breakdown(scored),
    )

    logger.info(
        f"Session score: {result.final_score:.2f}/100 "
        f"({result.answered_questions}/{result.total_questions} answers scored)"
    )

    return result


def _mean_or_none(values: List[Optional[float]]) -> Optional[float]:
    """Mean of the non-None values rounded to 2 decimals, None if there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return _rounded_mean(present)


def _rounded_mean(values: List[float]) -> float:
    """Left-to-right sum divided by count, rounded half up to 2 decimals."""
    return round_half_up(sum(values) / len(values))


def _compute_category_breakdown(scored: List[AnswerScore]) -> Dict[str, CategoryBreakdown]:
    """Group scored answers by category, preserving first-appearance order."""
    grouped: Dict[str, List[float]] = {}
    for answer in scored:
        grouped.setdefault(answer.category, []).append(answer.individual_score)

    return {
        category: CategoryBreakdown(
            count=len(scores),
            average_score=_rounded_mean(scores)
        )
        for category, scores in grouped.items()
    }


def interpret_session_score(result: SessionScoreResult) -> str:
    """Generate human-readable explanation of a session score."""
    if result.answered_questions == 0:
        return (
            "No answer had any usable signal, so no inconsistency score could be "
            "computed. " + HEURISTIC_DISCLAIMER
        )

    score = result.final_score
    if score >= 75:
        level = "high inconsistency indicators"
    elif score >= 50:
        level = "elevated inconsistency indicators"
    elif score >= 25:
        level = "mild inconsistency indicators"
    else:
        level = "low inconsistency indicators"

    explanation = (
        f"Session shows {level} (score: {score:.1f}/100, "
        f"{result.answered_questions} of {result.total_questions} answers scored). "
    )

    if result.category_breakdown:
        top_category, top = max(
            result.category_breakdown.items(),
            key=lambda item: item[1].average_score
        )
        explanation += (
            f"Highest category: '{top_category}' "
            f"(average {top.average_score:.1f} over {top.count} answer(s)). "
        )

    missing = []
    if result.average_face_score is None:
        missing.append("facial")
    if result.average_voice_score is None:
        missing.append("vocal")
    if result.average_nlp_score is None:
        missing.append("text")
    if missing:
        explanation += f"No {'/'.join(missing)} signal was captured in this session. "

    return explanation + HEURISTIC_DISCLAIMER
