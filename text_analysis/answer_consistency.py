"""
Answer consistency (NLP) score.

Scores a single free-text answer against the question it responds to:
- Semantic overlap: how many question words resurface in the answer
- Length: whether the answer is adequately elaborated
- Uncertainty: hedging phrases ("bilmiyorum", "galiba", "belki")
- Evasiveness: phrases declining to answer

Score interpretation (nlp_score, 0-10):
- 7-10: On-topic, elaborated, direct answer
- 4-6: Partially on-topic or short
- 0-3: Off-topic, very short, hedged or evasive

Engineering approach:
- Lexicon and word-overlap heuristics, no trained language model
- Substring matching on normalized text, so inflected forms
  ("yaptın" / "yaptım") still partially match
- Total over any two strings: empty answers score low, never raise

These are heuristic indicators only. They do not establish whether an
answer is truthful.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from utils.config_loader import get_nested_config
from utils.rounding import round_half_up
from utils.validation import ensure_text_argument

from .lexicons import DEFAULT_LEXICONS, Lexicons
from .normalization import count_phrase_hits, normalize_text, tokenize

logger = logging.getLogger(__name__)

DEFAULT_LENGTH_BANDS: List[Tuple[int, float]] = [(3, 2.0), (8, 5.0), (25, 8.0)]
DEFAULT_LENGTH_OVERFLOW_SCORE = 6.0
DEFAULT_MAX_QUESTION_TOKENS = 10
DEFAULT_NLP_WEIGHTS = {
    'semantic': 0.45,
    'length': 0.25,
    'certainty': 0.15,
    'directness': 0.15,
}


@dataclass(frozen=True)
class NlpAnalysisResult:
    """
    Text analysis of one answer.

    Attributes:
        nlp_score: Combined score (0-10, higher = more consistent/direct)
        semantic_score: Question-word overlap (0-10)
        uncertainty_score: Hedging level (0-10, higher = more uncertain)
        evasiveness_score: Evasion level (0-10, higher = more evasive)
        length_score: Elaboration band score (0-10)
        uncertainty_count: Uncertainty phrases found
        evasive_count: Evasion phrases found
        answer_length: Answer token count
    """
    nlp_score: float
    semantic_score: float
    uncertainty_score: float
    evasiveness_score: float
    length_score: float
    uncertainty_count: int
    evasive_count: int
    answer_length: int

    def to_dict(self) -> Dict:
        return {
            'nlpScore': self.nlp_score,
            'semanticScore': self.semantic_score,
            'uncertaintyScore': self.uncertainty_score,
            'evasivenessScore': self.evasiveness_score,
            'lengthScore': self.length_score,
            'details': {
                'uncertaintyCount': self.uncertainty_count,
                'evasiveCount': self.evasive_count,
                'answerLength': self.answer_length,
            },
        }


def analyze_answer_consistency(
    question_text: str,
    answer_text: str,
    lexicons: Optional[Lexicons] = None,
    config: Optional[Dict] = None
) -> NlpAnalysisResult:
    """
    Compute the NLP consistency score of an answer.

    Formula:
        nlp = 0.45 * semantic + 0.25 * length
              + 0.15 * (10 - uncertainty) + 0.15 * (10 - evasiveness)

    Args:
        question_text: Question shown to the subject
        answer_text: Subject's free-text answer (may be empty)
        lexicons: Phrase lists (defaults to DEFAULT_LEXICONS)
        config: Configuration dict (reads text_analysis.*)

    Returns:
        NlpAnalysisResult with all sub-scores rounded to 2 decimals

    Raises:
        TypeError: If either text argument is not a string
    """
    ensure_text_argument(question_text, 'question_text')
    ensure_text_argument(answer_text, 'answer_text')

    lexicons = lexicons or DEFAULT_LEXICONS
    ta_config = get_nested_config(config, 'text_analysis', default={}) or {}

    question = normalize_text(question_text)
    answer = normalize_text(answer_text)

    answer_tokens = tokenize(answer)
    answer_length = len(answer_tokens)
    length_score = compute_length_score(
        answer_length,
        bands=ta_config.get('length_bands', DEFAULT_LENGTH_BANDS),
        overflow_score=ta_config.get('length_overflow_score', DEFAULT_LENGTH_OVERFLOW_SCORE)
    )

    uncertainty_count = count_phrase_hits(answer, lexicons.uncertainty)
    evasive_count = count_phrase_hits(answer, lexicons.evasion)

    uncertainty_score = min(10.0, uncertainty_count * ta_config.get('uncertainty_points_per_hit', 3))
    evasiveness_score = min(10.0, evasive_count * ta_config.get('evasion_points_per_hit', 4))

    semantic_score = compute_semantic_score(
        question,
        answer,
        max_question_tokens=ta_config.get('max_question_tokens', DEFAULT_MAX_QUESTION_TOKENS)
    )

    weights = {**DEFAULT_NLP_WEIGHTS, **(ta_config.get('nlp_weights') or {})}
    raw_score = (
        weights['semantic'] * semantic_score +
        weights['length'] * length_score +
        weights['certainty'] * (10.0 - uncertainty_score) +
        weights['directness'] * (10.0 - evasiveness_score)
    )
    nlp_score = float(np.clip(raw_score, 0.0, 10.0))

    logger.debug(
        f"NLP analysis: tokens={answer_length}, semantic={semantic_score:.2f}, "
        f"uncertainty_hits={uncertainty_count}, evasion_hits={evasive_count}, "
        f"nlp={nlp_score:.2f}"
    )

    return NlpAnalysisResult(
        nlp_score=round_half_up(nlp_score),
        semantic_score=round_half_up(semantic_score),
        uncertainty_score=round_half_up(float(uncertainty_score)),
        evasiveness_score=round_half_up(float(evasiveness_score)),
        length_score=round_half_up(float(length_score)),
        uncertainty_count=uncertainty_count,
        evasive_count=evasive_count,
        answer_length=answer_length,
    )


def compute_length_score(
    token_count: int,
    bands: Sequence[Sequence[float]] = DEFAULT_LENGTH_BANDS,
    overflow_score: float = DEFAULT_LENGTH_OVERFLOW_SCORE
) -> float:
    """
    Map answer length to an elaboration score.

    Bands are (upper_edge_exclusive, score) pairs in ascending order.
    Very short answers are uninformative; very long ones are mildly
    penalized as over-explanation.
    """
    for upper_edge, score in bands:
        if token_count < upper_edge:
            return float(score)
    return float(overflow_score)


def compute_semantic_score(
    normalized_question: str,
    normalized_answer: str,
    max_question_tokens: int = DEFAULT_MAX_QUESTION_TOKENS
) -> float:
    """
    Question-word overlap on a 0-10 scale.

    Only the first max_question_tokens question words are considered. A word
    counts as covered when it occurs anywhere in the answer as a substring.
    """
    question_tokens = tokenize(normalized_question)[:max_question_tokens]
    if not question_tokens:
        return 0.0

    covered = sum(1 for token in question_tokens if token in normalized_answer)
    overlap_ratio = covered / len(question_tokens)

    return float(np.clip(overlap_ratio * 10.0, 0.0, 10.0))
