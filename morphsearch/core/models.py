"""
Модели данных для морфологического поиска
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum


class TermClass(Enum):
    """Происхождение термина (определяет стиль подсветки)"""
    CURRENT = "new-term"    # текущий (исправленный) запрос
    PREVIOUS = "old-term"   # исходный запрос, если отличается


@dataclass(frozen=True)
class Term:
    """Термин для подсветки"""
    text: str
    term_class: TermClass = TermClass.CURRENT


@dataclass
class Document:
    """Документ, полученный от внешнего хранилища"""
    id: str
    title: str
    body: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ScoredDocument:
    """Документ с оценкой релевантности и подсветкой"""
    document: Document
    score: int
    title_highlighted: str = ""
    snippets: List[str] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.document.id


@dataclass
class SearchQuery:
    """Обработанный поисковый запрос"""
    raw_query: str
    normalized_query: str = ""
    tokens: List[str] = field(default_factory=list)
    layout_variant: Optional[str] = None  # запрос в другой раскладке
    stemmed_query: str = ""


@dataclass
class SearchResult:
    """Результат поиска"""
    query: str
    total: int
    items: List[ScoredDocument] = field(default_factory=list)
    corrected_query: Optional[str] = None
    took_ms: int = 0

    @property
    def query_corrected(self) -> bool:
        return self.corrected_query is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "total": self.total,
            "corrected_query": self.corrected_query,
            "took_ms": self.took_ms,
            "items": [
                {
                    "id": item.document.id,
                    "title": item.document.title,
                    "body": item.document.body,
                    "metadata": item.document.metadata,
                    "score": item.score,
                    "title_highlighted": item.title_highlighted,
                    "snippets": item.snippets,
                }
                for item in self.items
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        items = [
            ScoredDocument(
                document=Document(
                    id=item["id"],
                    title=item["title"],
                    body=item["body"],
                    metadata=item.get("metadata") or {},
                ),
                score=item["score"],
                title_highlighted=item.get("title_highlighted", ""),
                snippets=item.get("snippets") or [],
            )
            for item in data.get("items", [])
        ]
        return cls(
            query=data["query"],
            total=data.get("total", len(items)),
            items=items,
            corrected_query=data.get("corrected_query"),
            took_ms=data.get("took_ms", 0),
        )
