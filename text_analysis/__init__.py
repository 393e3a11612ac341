"""
Heuristic text analysis module.

This package scores free-text answers with transparent, lexicon-based rules:
1. Answer consistency (0-10): topic overlap, elaboration, hedging, evasion
2. Cross-answer consistency (0-10): agreement between answers to one question
3. Emotion-content consistency (0-10): facial stress vs. answer sentiment

All scores are:
- Heuristic (word lists and word overlap, no language model)
- Explainable (raw hit counts are returned with every score)
- Non-forensic (indicators of inconsistency, not evidence of deception)
"""

from .lexicons import Lexicons, DEFAULT_LEXICONS
from .normalization import normalize_text, tokenize
from .answer_consistency import analyze_answer_consistency, NlpAnalysisResult
from .cross_answer import (
    analyze_across_answers,
    find_contradicting_pairs,
    ConsistencyAnalysisResult
)
from .emotion_content import (
    analyze_emotion_content,
    classify_emotion_tone,
    EmotionConsistencyResult,
    EmotionTone
)

__all__ = [
    'Lexicons',
    'DEFAULT_LEXICONS',
    'normalize_text',
    'tokenize',
    'analyze_answer_consistency',
    'NlpAnalysisResult',
    'analyze_across_answers',
    'find_contradicting_pairs',
    'ConsistencyAnalysisResult',
    'analyze_emotion_content',
    'classify_emotion_tone',
    'EmotionConsistencyResult',
    'EmotionTone',
]
