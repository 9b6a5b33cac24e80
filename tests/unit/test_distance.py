"""
Unit tests for Unicode-safe Levenshtein distance.
"""

import itertools

import pytest
from morphsearch.search.distance import levenshtein

WORDS = ["привет", "провет", "пирвет", "", "kitten", "sitting", "ёж", "еж"]


class TestLevenshtein:

    def test_single_substitution(self):
        assert levenshtein("привет", "провет") == 1

    def test_classic_example(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_empty(self):
        assert levenshtein("", "абв") == 3
        assert levenshtein("абв", "") == 3

    def test_codepoints_not_bytes(self):
        # "ё" is two bytes in UTF-8 but one edit
        assert levenshtein("ёж", "еж") == 1

    def test_bytes_input(self):
        assert levenshtein("привет".encode("utf-8"), "привет") == 0

    def test_invalid_bytes_are_dropped(self):
        assert levenshtein(b"\xff\xfeab", "ab") == 0

    @pytest.mark.parametrize("word", WORDS)
    def test_identity(self, word):
        assert levenshtein(word, word) == 0

    @pytest.mark.parametrize("a,b", list(itertools.combinations(WORDS, 2)))
    def test_symmetric(self, a, b):
        assert levenshtein(a, b) == levenshtein(b, a)

    @pytest.mark.parametrize("a,b,c", list(itertools.permutations(WORDS[:5], 3)))
    def test_triangle_inequality(self, a, b, c):
        assert levenshtein(a, b) <= levenshtein(a, c) + levenshtein(c, b)
