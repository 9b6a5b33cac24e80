"""
morphsearch - морфологический поиск по русскому тексту
"""
from .core import Document, ScoredDocument, SearchResult, Term, TermClass
from .search import (
    RussianStemmer,
    QueryProcessor,
    RelevanceScorer,
    Highlighter,
    SearchEngine,
    levenshtein,
)

__version__ = "0.1.0"

__all__ = [
    "Document",
    "ScoredDocument",
    "SearchResult",
    "Term",
    "TermClass",
    "RussianStemmer",
    "QueryProcessor",
    "RelevanceScorer",
    "Highlighter",
    "SearchEngine",
    "levenshtein",
]
