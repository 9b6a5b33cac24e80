"""
Unit tests for query normalization: tokenization, stop-words, keyboard layout.
"""

import pytest
from morphsearch.search.query_processor import (
    QueryProcessor,
    tokenize,
    strip_stop_words,
    correct_keyboard_layout,
    stem_join,
    EN_TO_RU,
    RU_TO_EN,
)


class TestTokenize:

    def test_splits_on_punctuation(self):
        assert tokenize("Документы, по расходам!") == ["документы", "по", "расходам"]

    def test_drops_single_characters(self):
        assert tokenize("я и ты") == ["ты"]

    def test_keeps_order_and_duplicates(self):
        assert tokenize("отчет план отчет") == ["отчет", "план", "отчет"]

    def test_digits_are_kept(self):
        assert tokenize("отчет-2024") == ["отчет", "2024"]

    def test_empty(self):
        assert tokenize("   ...  ") == []


class TestStopWords:

    def test_removes_stop_words(self):
        assert strip_stop_words("Документы по расходам") == "документы расходам"

    def test_only_stop_words(self):
        assert strip_stop_words(" а  и в ") == ""

    def test_whole_words_only(self):
        # "по" inside "поход" is not a stop word
        assert strip_stop_words("поход в горы") == "поход горы"

    def test_collapses_whitespace(self):
        assert strip_stop_words("  отчет   за   год  ") == "отчет год"

    def test_custom_stop_words(self):
        processor = QueryProcessor(stopwords={"документы"})
        assert processor.strip_stop_words("документы по расходам") == "по расходам"


class TestKeyboardLayout:

    def test_latin_to_cyrillic(self):
        assert correct_keyboard_layout("ghbdtn") == "привет"

    def test_uppercase_latin(self):
        assert correct_keyboard_layout("GHBDTN") == "привет"

    def test_cyrillic_to_latin(self):
        assert correct_keyboard_layout("руддщ") == "hello"

    def test_punctuation_keys(self):
        assert correct_keyboard_layout("[jhjij") == "хорошо"
        assert correct_keyboard_layout("'nj") == "это"

    def test_direction_is_detected_not_tracked(self):
        once = correct_keyboard_layout("ghbdtn мир")
        assert once == "привет мир"
        assert correct_keyboard_layout(once) != "ghbdtn мир"

    def test_tables_are_inverse(self):
        assert len(EN_TO_RU) == len(RU_TO_EN)
        for latin, cyrillic in EN_TO_RU.items():
            assert RU_TO_EN[cyrillic] == latin

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            EN_TO_RU["q"] = "x"


class TestStemJoin:

    def test_stems_query(self):
        assert stem_join("документы по расходам") == "документ по расход"

    def test_deduplicates_stems(self):
        assert stem_join("документы документов") == "документ"

    def test_empty(self):
        assert stem_join("") == ""


class TestProcess:

    def test_process(self):
        query = QueryProcessor().process("Документы по расходам")

        assert query.raw_query == "Документы по расходам"
        assert query.normalized_query == "документы расходам"
        assert query.tokens == ["документы", "расходам"]
        assert query.stemmed_query == "документ расход"
        assert query.layout_variant is not None
        assert query.layout_variant != query.normalized_query
