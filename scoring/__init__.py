"""
Behavioral inconsistency scoring module.

This package turns per-answer signals into interpretable scores:
1. Reaction Delay Score (0-10): bucketed answer latency
2. Individual Answer Score (0-100): weighted fusion of face, voice,
   text and reaction delay, renormalized over the signals present
3. Session Score (0-100): mean answer score with per-metric and
   per-category breakdowns

All scores are:
- Interpretable (0-100 scale, higher = more inconsistency indicators)
- Explainable (based on transparent calculations)
- Non-forensic (behavioral observation, not deception detection)
"""

from .reaction_delay import compute_reaction_delay_score
from .answer_score import (
    AnswerScore,
    RawAnswerSignals,
    score_answer,
    score_answer_signals
)
from .session_score import (
    CategoryBreakdown,
    SessionScoreResult,
    aggregate_session,
    interpret_session_score
)
from .pipeline import AnswerRecord, SessionAnalysis, score_session

__all__ = [
    'compute_reaction_delay_score',
    'AnswerScore',
    'RawAnswerSignals',
    'score_answer',
    'score_answer_signals',
    'CategoryBreakdown',
    'SessionScoreResult',
    'aggregate_session',
    'interpret_session_score',
    'AnswerRecord',
    'SessionAnalysis',
    'score_session',
]
