"""Tests for the numeric kernel and text token extraction."""

import pytest

from taskrank.utils.math_utils import (
    clamp,
    exponential_decay,
    gaussian_score,
    hyperbolic_growth,
    jaccard,
    overlaps,
    sigmoid_decay,
)
from taskrank.utils.text import extract_salient_tokens


class TestCurves:
    """Test the decay and growth curves."""

    def test_sigmoid_is_half_at_midpoint(self):
        assert sigmoid_decay(3, midpoint=3, steepness=0.8) == pytest.approx(0.5)

    def test_sigmoid_falls_with_x(self):
        assert sigmoid_decay(0, 3, 0.8) > sigmoid_decay(3, 3, 0.8) > sigmoid_decay(10, 3, 0.8)

    def test_inverted_sigmoid_is_complement(self):
        for x in (-5, 0, 2.5, 14, 40):
            total = sigmoid_decay(x, 14, 0.15) + sigmoid_decay(x, 14, 0.15, inverted=True)
            assert total == pytest.approx(1.0)

    def test_sigmoid_does_not_overflow(self):
        assert sigmoid_decay(1e6, 0, 10) == 0.0
        assert sigmoid_decay(-1e6, 0, 10) == 1.0

    def test_exponential_decay_half_life(self):
        assert exponential_decay(0, 7) == 1.0
        assert exponential_decay(7, 7) == pytest.approx(0.5)
        assert exponential_decay(14, 7) == pytest.approx(0.25)

    def test_hyperbolic_growth_is_bounded(self):
        assert hyperbolic_growth(0, 0.3, 0.5) == 0.0
        assert hyperbolic_growth(0.3, 0.3, 0.5) == pytest.approx(0.25)
        assert hyperbolic_growth(1e9, 0.3, 0.5) < 0.5

    def test_gaussian_peak(self):
        assert gaussian_score(0, 1.5) == 1.0
        assert gaussian_score(1, 1.5) == pytest.approx(gaussian_score(-1, 1.5))
        assert gaussian_score(3, 1.5) < gaussian_score(1, 1.5)

    def test_clamp(self):
        assert clamp(7, 1, 5) == 5
        assert clamp(-1, 1, 5) == 1
        assert clamp(3.5, 1, 5) == 3.5


class TestSetOverlap:
    """Test case-insensitive set helpers."""

    def test_jaccard_ignores_case(self):
        assert jaccard(['API', 'docs'], ['api', 'bug']) == pytest.approx(1 / 3)

    def test_jaccard_of_empty_sets_is_zero(self):
        assert jaccard([], []) == 0.0

    def test_identical_sets(self):
        assert jaccard({'a', 'b'}, {'B', 'A'}) == 1.0

    def test_overlaps(self):
        assert overlaps(['@Office'], ['@office', '@home'])
        assert not overlaps(['@office'], [])


class TestSalientTokens:
    """Test text token extraction used by task similarity."""

    def test_blank_text(self):
        assert extract_salient_tokens('') == frozenset()
        assert extract_salient_tokens('   ') == frozenset()
        assert extract_salient_tokens(None) == frozenset()

    def test_acronyms_skip_common_words(self):
        tokens = extract_salient_tokens('Prepare THE QBR deck')
        assert 'qbr' in tokens
        assert 'the' not in tokens

    def test_hashtags(self):
        assert 'launch' in extract_salient_tokens('Ship it #launch')

    def test_names_after_first_word(self):
        assert 'john smith' in extract_salient_tokens('Call with John Smith today')

    def test_repeated_terms(self):
        tokens = extract_salient_tokens('budget draft then budget sign-off')
        assert 'budget' in tokens
        assert 'draft' not in tokens
