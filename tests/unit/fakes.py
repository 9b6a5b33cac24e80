"""In-memory collaborators for search engine tests"""

from typing import Dict, List, Optional, Any

from morphsearch.core.interfaces import (
    IAccessPolicy,
    ICache,
    IDocumentIndex,
    IDocumentRepository,
    ISearchLog,
)
from morphsearch.core.models import Document, SearchResult


class InMemoryIndex(IDocumentIndex):
    """Documents match when every query token is a substring of title + body"""

    def __init__(self, documents: List[Document]):
        self.documents = documents
        self.calls: List[str] = []
        self.fuzzy_calls: List[str] = []

    def _text(self, doc: Document) -> str:
        return f"{doc.title} {doc.body}".lower()

    async def search(self, query: str, limit: int = 3000) -> List[str]:
        self.calls.append(query)
        tokens = query.split()
        return [
            doc.id for doc in self.documents
            if tokens and all(t in self._text(doc) for t in tokens)
        ][:limit]

    async def fuzzy_search(self, query: str, distance: int = 3, prefix_length: int = 2) -> List[str]:
        self.fuzzy_calls.append(query)
        tokens = query.split()
        return [
            doc.id for doc in self.documents
            if any(t in self._text(doc) for t in tokens)
        ]


class BrokenIndex(IDocumentIndex):

    async def search(self, query: str, limit: int = 3000) -> List[str]:
        raise RuntimeError("connection refused")

    async def fuzzy_search(self, query: str, distance: int = 3, prefix_length: int = 2) -> List[str]:
        raise RuntimeError("connection refused")


class InMemoryRepository(IDocumentRepository):

    def __init__(self, documents: List[Document]):
        self.documents = {doc.id: doc for doc in documents}

    async def get_many(
        self,
        document_ids: List[str],
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Document]:
        docs = [self.documents[i] for i in document_ids if i in self.documents]
        if filters and "category" in filters:
            docs = [d for d in docs if d.metadata.get("category") == filters["category"]]
        # Storage order differs from index order on purpose
        return sorted(docs, key=lambda d: d.id, reverse=True)


class HiddenIdsPolicy(IAccessPolicy):

    def __init__(self, hidden: set):
        self.hidden = hidden

    async def is_visible(self, document: Document) -> bool:
        return document.id not in self.hidden

    def cache_scope(self):
        return sorted(self.hidden)


class DictCache(ICache):

    def __init__(self):
        self.data: Dict[str, SearchResult] = {}

    async def get_search_result(self, key: str) -> Optional[SearchResult]:
        return self.data.get(key)

    async def set_search_result(self, key: str, result: SearchResult, ttl: int = 600) -> None:
        self.data[key] = result

    async def invalidate(self) -> int:
        count = len(self.data)
        self.data.clear()
        return count


class RecordingSearchLog(ISearchLog):

    def __init__(self, fail: bool = False):
        self.records = []
        self.fail = fail

    async def track_search(self, query, corrected_query, results_count, duration_ms) -> None:
        if self.fail:
            raise RuntimeError("log storage is down")
        self.records.append((query, corrected_query, results_count))


