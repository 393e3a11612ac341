"""
Unit tests for the answer consistency (NLP) analyzer.

Tests cover:
- Text normalization (Turkish letters, punctuation)
- Lexicon configuration
- Length bands and question-word overlap
- Uncertainty and evasion scoring
- Edge cases (empty answers, non-string input)
"""

import dataclasses
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from text_analysis import (
    DEFAULT_LEXICONS,
    Lexicons,
    analyze_answer_consistency,
    normalize_text,
    tokenize
)
from text_analysis.answer_consistency import compute_length_score, compute_semantic_score


class TestNormalization:
    """Test text normalization."""

    def test_punctuation_removed(self):
        assert normalize_text("Bilmem, galiba öyle, sanırım!") == "bilmem galiba öyle sanırım"

    def test_turkish_letters_kept(self):
        assert normalize_text("ÇOK Güzel Şeyler Öğrendim") == "çok güzel şeyler öğrendim"

    def test_dotted_capital_i(self):
        """Dotted capital I lowercases to a plain i, not i + combining dot."""
        assert normalize_text("İSTANBUL'da") == "istanbul da"

    def test_decomposed_letters_composed(self):
        """'u' + combining diaeresis matches a typed 'ü'."""
        assert normalize_text("U\u0308zgu\u0308n") == "\u00fczg\u00fcn"
        assert normalize_text("I\u0307STANBUL") == "istanbul"

    def test_whitespace_collapsed(self):
        assert normalize_text("  bir\t\niki   üç  ") == "bir iki üç"

    def test_digits_kept(self):
        assert tokenize(normalize_text("Son 24 saatte")) == ["son", "24", "saatte"]

    def test_empty(self):
        assert normalize_text("") == ""
        assert tokenize("") == []


class TestLexicons:
    """Test lexicon configuration."""

    def test_defaults_contain_core_phrases(self):
        assert "bilmiyorum" in DEFAULT_LEXICONS.uncertainty
        assert "konuşmak istemiyorum" in DEFAULT_LEXICONS.evasion

    def test_entries_normalized(self):
        lexicons = Lexicons(uncertainty=["Not Sure!"], evasion=[], positive=[], negative=[])
        assert lexicons.uncertainty == ("not sure",)

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_LEXICONS.positive = ("x",)

    def test_from_config_partial_override(self):
        config = {'text_analysis': {'lexicons': {'positive': ['Happy', 'glad']}}}
        lexicons = Lexicons.from_config(config)

        assert lexicons.positive == ("happy", "glad")
        assert lexicons.uncertainty == DEFAULT_LEXICONS.uncertainty
        assert lexicons.negative == DEFAULT_LEXICONS.negative

    def test_from_config_none(self):
        assert Lexicons.from_config(None) == DEFAULT_LEXICONS


class TestLengthScore:
    """Test elaboration bands."""

    @pytest.mark.parametrize("tokens,expected", [
        (0, 2.0), (2, 2.0), (3, 5.0), (7, 5.0), (8, 8.0), (24, 8.0), (25, 6.0), (100, 6.0),
    ])
    def test_bands(self, tokens, expected):
        assert compute_length_score(tokens) == expected


class TestSemanticScore:
    """Test question-word overlap."""

    def test_full_overlap(self):
        score = compute_semantic_score("bugün ne yaptın", "bugün ne yaptın diye sorarsan işe gittim")
        assert score == 10.0

    def test_substring_match(self):
        """Inflected forms still count through substring matching."""
        assert compute_semantic_score("partnerin", "partnerinle konuştum") == 10.0

    def test_only_first_ten_question_words(self):
        question = "bir iki üç dört beş altı yedi sekiz dokuz on zebra kaplan"
        assert compute_semantic_score(question, "zebra kaplan") == 0.0

        question = "zebra kaplan bir iki üç dört beş altı yedi sekiz dokuz on"
        assert compute_semantic_score(question, "zebra kaplan") == pytest.approx(2.0)

    def test_empty_question(self):
        assert compute_semantic_score("", "herhangi bir cevap") == 0.0


class TestAnswerConsistency:
    """Test the combined NLP score."""

    def test_uncertain_answer(self):
        """Three hedges score 9 and lower the NLP score."""
        hedged = analyze_answer_consistency("Bugün ne yaptın?", "Bilmem, galiba öyle, sanırım")
        plain = analyze_answer_consistency("Bugün ne yaptın?", "öyle")

        assert hedged.uncertainty_count == 3
        assert hedged.uncertainty_score >= 9
        assert hedged.uncertainty_score == 9.0
        assert hedged.nlp_score == pytest.approx(2.9)
        assert plain.nlp_score == pytest.approx(3.5)
        assert hedged.nlp_score < plain.nlp_score

    def test_uncertainty_capped(self):
        result = analyze_answer_consistency(
            "Ne oldu?",
            "Bilmiyorum, galiba, sanırım, belki, emin değilim"
        )
        assert result.uncertainty_count == 5
        assert result.uncertainty_score == 10.0

    def test_evasive_answer(self):
        result = analyze_answer_consistency(
            "Partnerine en son ne zaman yalan söyledin?",
            "Bunu cevaplamak istemiyorum, boşver"
        )
        assert result.evasive_count == 2
        assert result.evasiveness_score == 8.0

    def test_repeated_phrase_counts_once(self):
        result = analyze_answer_consistency("Ne oldu?", "belki belki belki")
        assert result.uncertainty_count == 1
        assert result.uncertainty_score == 3.0

    def test_direct_elaborated_answer(self):
        result = analyze_answer_consistency(
            "Bugün ne yaptın?",
            "Bugün sabah işe gittim, öğlen ne yiyeceğimi düşündüm, akşam da yaptın mı diye soran annemi aradım"
        )
        assert result.semantic_score == 10.0
        assert result.length_score == 8.0
        assert result.uncertainty_score == 0.0
        assert result.evasiveness_score == 0.0
        # 0.45*10 + 0.25*8 + 0.15*10 + 0.15*10
        assert result.nlp_score == pytest.approx(9.5)

    def test_empty_answer_is_valid(self):
        result = analyze_answer_consistency("Bugün ne yaptın?", "   ")

        assert result.answer_length == 0
        assert result.length_score == 2.0
        assert result.semantic_score == 0.0
        assert result.nlp_score == pytest.approx(3.5)

    @pytest.mark.parametrize("question,answer", [
        ("", ""),
        ("Bugün ne yaptın?", "Bilmiyorum galiba belki sanırım boşver konuşmak istemiyorum"),
        ("Kısa", " ".join(["kelime"] * 200)),
        ("!!!", "???"),
        ("Son 24 saatte seni en çok mutlu eden şey neydi?", "Son 24 saatte seni en çok mutlu eden şey neydi"),
    ])
    def test_scores_in_range(self, question, answer):
        result = analyze_answer_consistency(question, answer)
        for value in (
            result.nlp_score,
            result.semantic_score,
            result.uncertainty_score,
            result.evasiveness_score,
            result.length_score,
        ):
            assert 0.0 <= value <= 10.0

    def test_custom_lexicons(self):
        lexicons = Lexicons(uncertainty=("maybe",), evasion=("no comment",), positive=(), negative=())
        result = analyze_answer_consistency("What did you do?", "Maybe. No comment.", lexicons=lexicons)

        assert result.uncertainty_count == 1
        assert result.evasive_count == 1

    def test_config_override_weights(self):
        config = {'text_analysis': {'nlp_weights': {
            'semantic': 1.0, 'length': 0.0, 'certainty': 0.0, 'directness': 0.0
        }}}
        result = analyze_answer_consistency("bugün ne yaptın", "bugün ne yaptın", config=config)
        assert result.nlp_score == 10.0

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            analyze_answer_consistency("Soru?", None)

    def test_to_dict(self):
        payload = analyze_answer_consistency("Soru?", "belki").to_dict()

        assert set(payload) == {
            'nlpScore', 'semanticScore', 'uncertaintyScore',
            'evasivenessScore', 'lengthScore', 'details'
        }
        assert payload['details'] == {'uncertaintyCount': 1, 'evasiveCount': 0, 'answerLength': 1}
