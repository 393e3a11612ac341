"""
Emotion-content consistency.

Checks whether the facial stress proxy agrees with the sentiment of the
words the subject used. A calm face while describing an upsetting event, or
a stressed face while describing a happy one, lowers the score.

The text emotion level reuses the stress scale (0-10, 5 = neutral): positive
words pull it down towards 0, negative words push it up towards 10. As a
consequence a LOW level maps to the 'positive' tone and a HIGH level to the
'negative' tone.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import numpy as np

from utils.config_loader import get_nested_config
from utils.rounding import round_half_up
from utils.validation import ensure_finite, ensure_text_argument

from .lexicons import DEFAULT_LEXICONS, Lexicons
from .normalization import count_phrase_hits, normalize_text

logger = logging.getLogger(__name__)


class EmotionTone(Enum):
    """Sentiment tone inferred from answer wording."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class EmotionConsistencyResult:
    """
    Agreement between facial stress and answer sentiment.

    Attributes:
        consistency_score: Agreement (0-10, higher = face and words agree)
        emotion_tone: Tone inferred from the text
        face_stress_level: Facial stress proxy as supplied (0-10)
        text_emotion_level: Stress level implied by the text (0-10)
        mismatch: True when the two levels differ by more than the threshold
        positive_word_count: Positive lexicon hits
        negative_word_count: Negative lexicon hits
        stress_mismatch: Absolute difference between the two levels
    """
    consistency_score: float
    emotion_tone: EmotionTone
    face_stress_level: float
    text_emotion_level: float
    mismatch: bool
    positive_word_count: int
    negative_word_count: int
    stress_mismatch: float

    def to_dict(self) -> Dict:
        return {
            'consistencyScore': self.consistency_score,
            'emotionTone': self.emotion_tone.value,
            'faceStressLevel': self.face_stress_level,
            'textEmotionLevel': self.text_emotion_level,
            'mismatch': self.mismatch,
            'details': {
                'positiveWordCount': self.positive_word_count,
                'negativeWordCount': self.negative_word_count,
                'stressMismatch': self.stress_mismatch,
            },
        }


def analyze_emotion_content(
    answer_text: str,
    face_stress_score: float,
    lexicons: Optional[Lexicons] = None,
    config: Optional[Dict] = None
) -> EmotionConsistencyResult:
    """
    Compare facial stress with the emotional content of an answer.

    Args:
        answer_text: Subject's free-text answer
        face_stress_score: Facial stress proxy (0-10) from the capture pipeline
        lexicons: Phrase lists (defaults to DEFAULT_LEXICONS)
        config: Configuration dict (reads emotion.*)

    Returns:
        EmotionConsistencyResult

    Raises:
        TypeError: If answer_text is not a string
        ValueError: If face_stress_score is missing, NaN or infinite
    """
    ensure_text_argument(answer_text, 'answer_text')
    face_stress = ensure_finite(face_stress_score, 'face_stress_score')
    if face_stress is None:
        raise ValueError("'face_stress_score' is required for emotion-content analysis")

    lexicons = lexicons or DEFAULT_LEXICONS
    emotion_config = get_nested_config(config, 'emotion', default={}) or {}
    neutral_level = emotion_config.get('neutral_level', 5.0)
    step = emotion_config.get('step_per_hit', 1.5)
    mismatch_threshold = emotion_config.get('mismatch_threshold', 4.0)
    mismatch_penalty = emotion_config.get('mismatch_penalty', 1.2)

    answer = normalize_text(answer_text)
    positive_count = count_phrase_hits(answer, lexicons.positive)
    negative_count = count_phrase_hits(answer, lexicons.negative)

    text_emotion_level = neutral_level
    if positive_count > negative_count:
        text_emotion_level = max(0.0, neutral_level - step * positive_count)
    elif negative_count > positive_count:
        text_emotion_level = min(10.0, neutral_level + step * negative_count)

    emotion_tone = classify_emotion_tone(
        text_emotion_level,
        positive_below=emotion_config.get('positive_tone_below', 3.0),
        negative_above=emotion_config.get('negative_tone_above', 7.0)
    )

    stress_mismatch = abs(face_stress - text_emotion_level)
    mismatch = stress_mismatch > mismatch_threshold
    consistency_score = float(np.clip(10.0 - stress_mismatch * mismatch_penalty, 0.0, 10.0))

    if mismatch:
        logger.debug(
            f"Face/text mismatch: face={face_stress:.1f}, "
            f"text={text_emotion_level:.1f} ({emotion_tone.value})"
        )

    return EmotionConsistencyResult(
        consistency_score=round_half_up(consistency_score),
        emotion_tone=emotion_tone,
        face_stress_level=face_stress,
        text_emotion_level=round_half_up(float(text_emotion_level)),
        mismatch=mismatch,
        positive_word_count=positive_count,
        negative_word_count=negative_count,
        stress_mismatch=round_half_up(float(stress_mismatch)),
    )


def classify_emotion_tone(
    text_emotion_level: float,
    positive_below: float = 3.0,
    negative_above: float = 7.0
) -> EmotionTone:
    """Map a text emotion level to a tone (low level = positive)."""
    if text_emotion_level < positive_below:
        return EmotionTone.POSITIVE
    if text_emotion_level > negative_above:
        return EmotionTone.NEGATIVE
    return EmotionTone.NEUTRAL
