"""
Search модуль - морфологический поиск
"""
from .stemmer import RussianStemmer, stem
from .query_processor import (
    QueryProcessor,
    tokenize,
    strip_stop_words,
    correct_keyboard_layout,
    stem_join,
)
from .distance import levenshtein
from .scorer import RelevanceScorer, REJECTED
from .highlighter import Highlighter, collect_terms, highlight, build_snippets
from .engine import SearchEngine
from .cache import RedisSearchCache

__all__ = [
    "RussianStemmer",
    "stem",
    "QueryProcessor",
    "tokenize",
    "strip_stop_words",
    "correct_keyboard_layout",
    "stem_join",
    "levenshtein",
    "RelevanceScorer",
    "REJECTED",
    "Highlighter",
    "collect_terms",
    "highlight",
    "build_snippets",
    "SearchEngine",
    "RedisSearchCache",
]
