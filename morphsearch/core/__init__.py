"""
Core модуль - модели, интерфейсы, конфигурация
"""
from .models import (
    TermClass,
    Term,
    Document,
    ScoredDocument,
    SearchQuery,
    SearchResult,
)

from .interfaces import (
    IDocumentIndex,
    IDocumentRepository,
    IAccessPolicy,
    ICache,
    ISearchLog,
)

from .errors import SearchError, IndexUnavailableError

from .config import (
    Config,
    SearchConfig,
    ScoringWeights,
    HighlightConfig,
    RedisConfig,
    config,
)

__all__ = [
    # Models
    "TermClass",
    "Term",
    "Document",
    "ScoredDocument",
    "SearchQuery",
    "SearchResult",

    # Interfaces
    "IDocumentIndex",
    "IDocumentRepository",
    "IAccessPolicy",
    "ICache",
    "ISearchLog",

    # Errors
    "SearchError",
    "IndexUnavailableError",

    # Config
    "Config",
    "SearchConfig",
    "ScoringWeights",
    "HighlightConfig",
    "RedisConfig",
    "config",
]
