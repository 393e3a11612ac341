"""
Cross-answer consistency analysis.

Compares several answers given to the same question (repeated within a
session, or collected from several respondents):
- Shared vocabulary: words present in every answer vs. all words used
- Length stability: mean absolute deviation of answer lengths
- Sentiment contradictions: one answer positive, another negative

Score interpretation (consistency_score, 0-10):
- 8-10: Answers agree in wording and tone
- 4-7: Partial agreement
- 0-3: Divergent answers or sentiment contradictions

A single answer cannot be judged inconsistent, so fewer than two answers
yield the fully consistent sentinel result instead of a computed one.
"""

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from utils.rounding import round_half_up
from utils.validation import ensure_text_argument

from .lexicons import DEFAULT_LEXICONS, Lexicons
from .normalization import contains_any, normalize_text, tokenize

logger = logging.getLogger(__name__)

OVERLAP_WEIGHT = 0.7
LENGTH_WEIGHT = 0.3
LENGTH_DIFF_SATURATION = 20.0
CONTRADICTION_PENALTY = 2.0


@dataclass(frozen=True)
class ConsistencyAnalysisResult:
    """
    Agreement between answers to one question.

    Attributes:
        consistency_score: Overall consistency (0-10, higher = more consistent)
        similarity: Combined overlap/length similarity (0-1)
        contradiction_count: Answer pairs with opposite sentiment
        answer_count: Number of answers compared
        avg_length_diff: Mean absolute deviation of token counts
        semantic_overlap: Shared words / all words (0-1)
    """
    consistency_score: float
    similarity: float
    contradiction_count: int
    answer_count: int
    avg_length_diff: float
    semantic_overlap: float

    def to_dict(self) -> Dict:
        return {
            'consistencyScore': self.consistency_score,
            'similarity': self.similarity,
            'contradictionCount': self.contradiction_count,
            'details': {
                'answerCount': self.answer_count,
                'avgLengthDiff': self.avg_length_diff,
                'semanticOverlap': self.semantic_overlap,
            },
        }


def analyze_across_answers(
    question_text: str,
    answers: Sequence[str],
    lexicons: Optional[Lexicons] = None
) -> ConsistencyAnalysisResult:
    """
    Compute consistency between answers to the same question.

    Formula:
        similarity = 0.7 * overlap + 0.3 * (1 - min(avg_length_diff / 20, 1))
        consistency = clip(10 * similarity - 2 * contradictions, 0, 10)

    Args:
        question_text: The shared question (used for logging only)
        answers: Answer texts for that question
        lexicons: Phrase lists (defaults to DEFAULT_LEXICONS)

    Returns:
        ConsistencyAnalysisResult

    Raises:
        TypeError: If the question or any answer is not a string
    """
    ensure_text_argument(question_text, 'question_text')
    for index, answer in enumerate(answers):
        ensure_text_argument(answer, f'answers[{index}]')

    lexicons = lexicons or DEFAULT_LEXICONS

    if len(answers) < 2:
        logger.debug(
            f"Only {len(answers)} answer(s) for question '{question_text[:40]}'; "
            f"returning consistent sentinel"
        )
        return ConsistencyAnalysisResult(
            consistency_score=10.0,
            similarity=1.0,
            contradiction_count=0,
            answer_count=len(answers),
            avg_length_diff=0.0,
            semantic_overlap=1.0,
        )

    normalized = [normalize_text(answer) for answer in answers]
    token_sets = [set(tokenize(text)) for text in normalized]
    token_counts = np.array([len(tokenize(text)) for text in normalized], dtype=float)

    semantic_overlap = _compute_semantic_overlap(token_sets)
    avg_length_diff = float(np.mean(np.abs(token_counts - token_counts.mean())))

    contradiction_count = len(_contradicting_pairs(normalized, lexicons))

    length_similarity = 1.0 - min(avg_length_diff / LENGTH_DIFF_SATURATION, 1.0)
    similarity = OVERLAP_WEIGHT * semantic_overlap + LENGTH_WEIGHT * length_similarity

    consistency_score = float(np.clip(
        similarity * 10.0 - contradiction_count * CONTRADICTION_PENALTY,
        0.0,
        10.0
    ))

    logger.info(
        f"Cross-answer consistency over {len(answers)} answers: "
        f"score={consistency_score:.2f}, overlap={semantic_overlap:.2f}, "
        f"contradictions={contradiction_count}"
    )

    return ConsistencyAnalysisResult(
        consistency_score=round_half_up(consistency_score),
        similarity=round_half_up(float(similarity), 4),
        contradiction_count=contradiction_count,
        answer_count=len(answers),
        avg_length_diff=round_half_up(avg_length_diff),
        semantic_overlap=round_half_up(semantic_overlap),
    )


def find_contradicting_pairs(
    answers: Sequence[str],
    lexicons: Optional[Lexicons] = None
) -> List[Tuple[int, int]]:
    """
    Return index pairs (i, j), i < j, of answers with opposite sentiment.

    A pair contradicts when one answer contains a positive lexicon word and
    the other a negative one.
    """
    normalized = [normalize_text(answer) for answer in answers]
    return _contradicting_pairs(normalized, lexicons or DEFAULT_LEXICONS)


def _contradicting_pairs(
    normalized_answers: Sequence[str],
    lexicons: Lexicons
) -> List[Tuple[int, int]]:
    polarity = [
        (contains_any(text, lexicons.positive), contains_any(text, lexicons.negative))
        for text in normalized_answers
    ]

    pairs = []
    for i, j in combinations(range(len(normalized_answers)), 2):
        pos_i, neg_i = polarity[i]
        pos_j, neg_j = polarity[j]
        if (pos_i and neg_j) or (neg_i and pos_j):
            pairs.append((i, j))

    return pairs


def _compute_semantic_overlap(token_sets: List[set]) -> float:
    """Words shared by every answer divided by all words used (0-1)."""
    all_words = set().union(*token_sets)
    if not all_words:
        return 0.0

    common_words = set.intersection(*token_sets)
    return len(common_words) / len(all_words)
