"""
Session scoring pipeline.

Runs the analyzers in data-flow order for one session:
1. Text consistency per answer → nlp_score
2. Emotion-content consistency per answer (needs text and a face score)
3. Answer scoring (fusion of face, voice, nlp, reaction delay)
4. Cross-answer consistency per question answered more than once
5. Session aggregation and interpretation

The caller supplies plain records and receives plain results; storage and
transport stay outside.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Union

from text_analysis import (
    ConsistencyAnalysisResult,
    EmotionConsistencyResult,
    Lexicons,
    NlpAnalysisResult,
    analyze_across_answers,
    analyze_answer_consistency,
    analyze_emotion_content
)
from utils.validation import require_text, require_unique

from .answer_score import score_answer
from .session_score import SessionScoreResult, aggregate_session, interpret_session_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerRecord:
    """
    One answer as delivered by the request/persistence layer.

    Attributes:
        answer_id, question_id, question_number, question_text, category:
            Identity fields
        answer_text: Free-text answer (None or blank = no text signal)
        face_score: Facial stress proxy (0-10) or None
        voice_score: Vocal stress proxy (0-10) or None
        reaction_delay: Seconds before answering, or None
    """
    answer_id: str
    question_id: str
    question_number: Union[int, float]
    question_text: str
    category: str
    answer_text: Optional[str] = None
    face_score: Optional[float] = None
    voice_score: Optional[float] = None
    reaction_delay: Optional[float] = None

    @property
    def has_text(self) -> bool:
        return bool(self.answer_text and self.answer_text.strip())


@dataclass(frozen=True)
class SessionAnalysis:
    """
    Everything computed for one session.

    Attributes:
        session: Aggregated session score
        text_analyses: answer_id → NlpAnalysisResult
        emotion_analyses: answer_id → EmotionConsistencyResult
        cross_answer: question_id → ConsistencyAnalysisResult
        interpretation: Human-readable summary with heuristic disclaimer
    """
    session: SessionScoreResult
    text_analyses: Mapping[str, NlpAnalysisResult] = field(default_factory=dict)
    emotion_analyses: Mapping[str, EmotionConsistencyResult] = field(default_factory=dict)
    cross_answer: Mapping[str, ConsistencyAnalysisResult] = field(default_factory=dict)
    interpretation: str = ""

    def __post_init__(self):
        for name in ('text_analyses', 'emotion_analyses', 'cross_answer'):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def to_dict(self) -> Dict:
        return {
            'session': self.session.to_dict(),
            'textAnalyses': {k: v.to_dict() for k, v in self.text_analyses.items()},
            'emotionAnalyses': {k: v.to_dict() for k, v in self.emotion_analyses.items()},
            'crossAnswer': {k: v.to_dict() for k, v in self.cross_answer.items()},
            'interpretation': self.interpretation,
        }


def score_session(
    records: Sequence[AnswerRecord],
    config: Optional[Dict] = None,
    lexicons: Optional[Lexicons] = None,
    session_id: str = ''
) -> SessionAnalysis:
    """
    Score every answer of a session and aggregate the results.

    Args:
        records: AnswerRecord objects in presentation order
        config: Configuration dict
        lexicons: Phrase lists (defaults to config overrides on DEFAULT_LEXICONS)
        session_id: Identity attached to the session result

    Returns:
        SessionAnalysis

    Raises:
        ValueError: If a record has no question text or two records share
            an answer_id
    """
    for record in records:
        require_text(record.question_text, f'question_text ({record.answer_id})')
    require_unique((record.answer_id for record in records), 'answer_id')

    if lexicons is None:
        lexicons = Lexicons.from_config(config)

    logger.info(f"Scoring session {session_id or '<unnamed>'} with {len(records)} answers")

    text_analyses: Dict[str, NlpAnalysisResult] = {}
    emotion_analyses: Dict[str, EmotionConsistencyResult] = {}
    answer_scores = []

    for record in records:
        nlp_score = None
        if record.has_text:
            analysis = analyze_answer_consistency(
                record.question_text, record.answer_text, lexicons=lexicons, config=config
            )
            text_analyses[record.answer_id] = analysis
            nlp_score = analysis.nlp_score

            if record.face_score is not None:
                emotion_analyses[record.answer_id] = analyze_emotion_content(
                    record.answer_text, record.face_score, lexicons=lexicons, config=config
                )

        answer_scores.append(score_answer(
            record.answer_id,
            record.question_id,
            record.question_number,
            record.question_text,
            record.category,
            face_score=record.face_score,
            voice_score=record.voice_score,
            nlp_score=nlp_score,
            reaction_delay=record.reaction_delay,
            config=config
        ))

    cross_answer = _analyze_repeated_questions(records, lexicons)

    session = aggregate_session(answer_scores).with_session_id(session_id)
    interpretation = interpret_session_score(session)

    logger.info(
        f"Session {session_id or '<unnamed>'}: {len(text_analyses)} text analyses, "
        f"{len(emotion_analyses)} emotion checks, {len(cross_answer)} repeated questions"
    )

    return SessionAnalysis(
        session=session,
        text_analyses=text_analyses,
        emotion_analyses=emotion_analyses,
        cross_answer=cross_answer,
        interpretation=interpretation,
    )


def _analyze_repeated_questions(
    records: Sequence[AnswerRecord],
    lexicons: Lexicons
) -> Dict[str, ConsistencyAnalysisResult]:
    """Cross-answer consistency for every question with 2+ text answers."""
    grouped: Dict[str, List[AnswerRecord]] = OrderedDict()
    for record in records:
        if record.has_text:
            grouped.setdefault(record.question_id, []).append(record)

    return {
        question_id: analyze_across_answers(
            group[0].question_text,
            [record.answer_text for record in group],
            lexicons=lexicons
        )
        for question_id, group in grouped.items()
        if len(group) >= 2
    }
