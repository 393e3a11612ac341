"""
Unit tests for cross-answer consistency analysis.

Tests cover:
- Single-answer sentinel
- Vocabulary overlap and length deviation
- Sentiment contradiction counting
- Edge cases (empty answers)
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from text_analysis import (
    Lexicons,
    analyze_across_answers,
    find_contradicting_pairs
)

QUESTION = "Son 24 saatte seni en çok mutlu eden şey neydi?"


class TestSentinel:
    """Fewer than two answers cannot be inconsistent."""

    def test_single_answer(self):
        result = analyze_across_answers(QUESTION, ["Arkadaşlarımla buluşmak çok kötüydü"])

        assert result.consistency_score == 10
        assert result.similarity == 1
        assert result.contradiction_count == 0
        assert result.answer_count == 1

    def test_no_answers(self):
        result = analyze_across_answers(QUESTION, [])

        assert result.consistency_score == 10
        assert result.similarity == 1
        assert result.contradiction_count == 0
        assert result.answer_count == 0


class TestSimilarity:
    """Test overlap and length components."""

    def test_identical_answers(self):
        result = analyze_across_answers(QUESTION, ["Kahve içmek", "kahve içmek!"])

        assert result.semantic_overlap == 1.0
        assert result.avg_length_diff == 0.0
        assert result.similarity == pytest.approx(1.0)
        assert result.consistency_score == pytest.approx(10.0)

    def test_partial_overlap(self):
        result = analyze_across_answers(QUESTION, ["çok mutluyum", "çok keyifliyim"])

        # common {çok} / all {çok, mutluyum, keyifliyim}
        assert result.semantic_overlap == pytest.approx(0.33)
        assert result.similarity == pytest.approx(0.7 / 3 + 0.3, abs=1e-4)
        assert result.consistency_score == pytest.approx(5.33)

    def test_length_deviation(self):
        long_answer = "evet " + " ".join(f"kelime{i}" for i in range(40))
        result = analyze_across_answers(QUESTION, ["evet", long_answer])

        # token counts 1 and 41, mean 21
        assert result.avg_length_diff == pytest.approx(20.0)

    def test_empty_answers(self):
        result = analyze_across_answers(QUESTION, ["", "..."])

        assert result.semantic_overlap == 0.0
        assert result.similarity == pytest.approx(0.3)
        assert result.consistency_score == pytest.approx(3.0)


class TestContradictions:
    """Test sentiment contradiction detection."""

    def test_positive_vs_negative(self):
        contradictory = analyze_across_answers(QUESTION, ["çok mutluyum", "çok üzgünüm"])
        agreeing = analyze_across_answers(QUESTION, ["çok mutluyum", "çok keyifliyim"])

        assert contradictory.contradiction_count >= 1
        assert contradictory.contradiction_count == 1
        assert contradictory.consistency_score == pytest.approx(3.33)
        assert contradictory.consistency_score < agreeing.consistency_score

    def test_counted_per_pair(self):
        answers = ["mutluyum", "üzgünüm", "kötü hissediyorum"]
        result = analyze_across_answers(QUESTION, answers)

        assert find_contradicting_pairs(answers) == [(0, 1), (0, 2)]
        assert result.contradiction_count == 2

    def test_same_sentiment_not_contradiction(self):
        assert find_contradicting_pairs(["üzgünüm", "gerginim", "kırgınım"]) == []

    def test_score_floor(self):
        answers = ["harika", "kötü", "güzel", "gergin"]
        result = analyze_across_answers(QUESTION, answers)

        assert result.contradiction_count == 4
        assert result.consistency_score == 0.0

    def test_custom_lexicons(self):
        lexicons = Lexicons(uncertainty=(), evasion=(), positive=("happy",), negative=("sad",))
        result = analyze_across_answers("How was it?", ["I was happy", "I was sad"], lexicons=lexicons)

        assert result.contradiction_count == 1


class TestInput:
    """Test contract checks."""

    def test_non_string_answer_rejected(self):
        with pytest.raises(TypeError):
            analyze_across_answers(QUESTION, ["geçerli", None])

    def test_to_dict(self):
        payload = analyze_across_answers(QUESTION, ["a", "b"]).to_dict()

        assert set(payload) == {'consistencyScore', 'similarity', 'contradictionCount', 'details'}
        assert payload['details']['answerCount'] == 2
