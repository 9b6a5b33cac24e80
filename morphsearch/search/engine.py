"""
Поисковый движок

Связывает ядро (стеммер, оценка, подсветка) с внешними участниками:
полнотекстовым индексом, хранилищем документов, политикой доступа,
кэшем и журналом запросов.
"""
import hashlib
import json
import logging
import time
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import SearchConfig
from ..core.errors import IndexUnavailableError
from ..core.interfaces import (
    IAccessPolicy,
    ICache,
    IDocumentIndex,
    IDocumentRepository,
    ISearchLog,
)
from ..core.models import Document, ScoredDocument, SearchResult
from .highlighter import Highlighter, collect_terms
from .query_processor import QueryProcessor
from .scorer import REJECTED, RelevanceScorer

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Поисковый движок

    Логика поиска:
    1. Удаляем стоп-слова из запроса.
    2. Формируем варианты: исходный и с исправленной раскладкой.
    3. Ищем каждый вариант в индексе, видимый документ закрепляется
       за первым вариантом, который его нашёл.
    4. Если видимых совпадений нет - нечёткий поиск по запросу из стемов.
    5. Самый частый вариант становится "исправленным запросом".
    6. Для каждого документа считаем оценку и подсветку,
       отклонённые (-1) убираем, сортируем по убыванию оценки.
    """

    def __init__(
        self,
        index: IDocumentIndex,
        repository: IDocumentRepository,
        access_policy: Optional[IAccessPolicy] = None,
        cache: Optional[ICache] = None,
        search_log: Optional[ISearchLog] = None,
        config: Optional[SearchConfig] = None,
        query_processor: Optional[QueryProcessor] = None,
    ):
        self.index = index
        self.repository = repository
        self.access_policy = access_policy
        self.cache = cache
        self.search_log = search_log
        self.config = config or SearchConfig()
        self.query_processor = query_processor or QueryProcessor(
            min_term_length=self.config.min_term_length
        )
        self.scorer = RelevanceScorer(self.config.scoring)
        self.highlighter = Highlighter(self.config.highlight, self.query_processor.stemmer)
        self.corrected_query: Optional[str] = None

    async def search(
        self,
        query: str,
        ignore_fix: bool = False,
        filters: Optional[Dict[str, Any]] = None,
    ) -> SearchResult:
        """
        Выполнить поиск

        Args:
            query: Поисковый запрос
            ignore_fix: Не исправлять раскладку клавиатуры
            filters: Ограничения для хранилища документов (категории, атрибуты)
        """
        self.corrected_query = None
        query = self.query_processor.strip_stop_words(query)
        if not query:
            return SearchResult(query=query, total=0)

        cache_key = self._make_cache_key(query, ignore_fix, filters, self._cache_scope())
        if self.cache:
            cached = await self.cache.get_search_result(cache_key)
            if cached:
                logger.debug(f"[Search] Cache hit for '{query}'")
                self.corrected_query = cached.corrected_query
                return cached

        start_time = time.time()

        found = await self._find_candidates(query, ignore_fix)
        if not found:
            logger.info(f"[Search] Nothing found for '{query}'")
            result = SearchResult(query=query, total=0, took_ms=self._took_ms(start_time))
            await self._store(cache_key, result)
            return result

        documents = await self._load_documents(found, filters)

        # Основной вариант запроса - тот, что нашёл больше всего документов
        owners = {doc.id: found[doc.id] for doc in documents}
        if owners:
            used_variant = Counter(owners.values()).most_common(1)[0][0]
            self.corrected_query = used_variant if used_variant != query else None

        duration_ms = (time.time() - start_time) * 1000
        await self._log_search(query, len(documents), duration_ms)

        items = []
        for document in documents:
            variant = found[document.id]
            words, stems = self._split_variant(variant)

            score = self.scorer.score(document, variant, words, stems)
            if score == REJECTED:
                continue

            title, snippets = self.decorate_document(document, variant, query)
            items.append(ScoredDocument(
                document=document,
                score=score,
                title_highlighted=title,
                snippets=snippets,
            ))

        items.sort(key=lambda item: item.score, reverse=True)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"[Search] '{query}' -> {len(items)} results "
            f"(corrected: {self.corrected_query!r}, {duration_ms:.1f} ms)"
        )

        result = SearchResult(
            query=query,
            total=len(items),
            items=items,
            corrected_query=self.corrected_query,
            took_ms=int(duration_ms),
        )
        await self._store(cache_key, result)
        return result

    def decorate_document(
        self,
        document: Document,
        current_search: Optional[str] = None,
        original_search: Optional[str] = None,
    ) -> Tuple[str, List[str]]:
        """
        Подсветка заголовка и сниппеты текста

        Термины текущего запроса получают класс new-term,
        термины исходного (если отличается) - old-term.

        Returns:
            (заголовок с подсветкой, список сниппетов)
        """
        terms = collect_terms(current_search, original_search, self.query_processor)

        title = self.highlighter.highlight(document.title, terms)
        snippets = [
            self.config.highlight.snippet_template.format(snippet)
            for snippet in self.highlighter.build_snippets(document.body, terms)
        ]
        return title, snippets

    def get_corrected_query(self) -> Optional[str]:
        """Исправленный запрос последнего поиска (None, если исправлений не было)"""
        return self.corrected_query

    async def _find_candidates(self, query: str, ignore_fix: bool) -> Dict[str, str]:
        """
        Кандидаты из индекса, только видимые

        Невидимый документ не закрепляется за вариантом запроса,
        поэтому нечёткий поиск запускается, если видимых совпадений нет.

        Returns:
            {id документа: вариант запроса, который его нашёл}
        """
        variants = [query]
        if not ignore_fix:
            fixed = self.query_processor.correct_keyboard_layout(query)
            if fixed not in variants:
                variants.append(fixed)

        found: Dict[str, str] = {}
        for variant in variants:
            ids = await self._query_index(
                self.index.search, variant, limit=self.config.candidate_limit
            )
            logger.debug(f"[Search] Variant '{variant}' -> {len(ids)} hits")
            for doc_id in await self._visible_ids(ids, found):
                found[doc_id] = variant

        if not found:
            stemmed_query = self.query_processor.stem_join(query)
            if stemmed_query:
                ids = await self._query_index(
                    self.index.fuzzy_search,
                    stemmed_query,
                    distance=self.config.fuzzy_distance,
                    prefix_length=self.config.fuzzy_prefix_length,
                )
                logger.info(f"[Search] Fuzzy fallback '{stemmed_query}' -> {len(ids)} hits")
                for doc_id in await self._visible_ids(ids, found):
                    found[doc_id] = stemmed_query

        return found

    async def _query_index(self, method, query: str, **kwargs) -> List[str]:
        try:
            return await method(query, **kwargs)
        except Exception as e:
            raise IndexUnavailableError(f"Index search failed for '{query}': {e}") from e

    async def _visible_ids(self, ids: List[str], found: Dict[str, str]) -> List[str]:
        """Новые id из выдачи индекса, которые разрешены политикой доступа"""
        new_ids = []
        seen = set(found)
        for doc_id in ids:
            if doc_id not in seen:
                seen.add(doc_id)
                new_ids.append(doc_id)

        if not self.access_policy or not new_ids:
            return new_ids

        visible = set()
        for document in await self.repository.get_many(new_ids):
            if await self.access_policy.is_visible(document):
                visible.add(document.id)
        return [doc_id for doc_id in new_ids if doc_id in visible]

    async def _load_documents(
        self,
        found: Dict[str, str],
        filters: Optional[Dict[str, Any]],
    ) -> List[Document]:
        """Загрузить документы в порядке выдачи индекса"""
        order = {doc_id: i for i, doc_id in enumerate(found)}
        documents = await self.repository.get_many(list(found), filters)

        loaded = [document for document in documents if document.id in order]
        loaded.sort(key=lambda doc: order[doc.id])
        return loaded

    def _split_variant(self, variant: str) -> Tuple[List[str], List[str]]:
        """Слова варианта запроса и их стемы (индексы совпадают)"""
        words = [
            w for w in variant.lower().split(" ")
            if len(w) >= self.config.min_term_length
        ]
        stems = self.query_processor.stemmer.stem_tokens(words)
        return words, stems

    async def _log_search(self, query: str, count: int, duration_ms: float) -> None:
        if not self.search_log:
            return
        try:
            await self.search_log.track_search(
                query,
                self.corrected_query,
                count,
                round(duration_ms, 2),
            )
        except Exception as e:
            logger.warning(f"[Search] Failed to log search '{query}': {e}")

    async def _store(self, cache_key: str, result: SearchResult) -> None:
        if self.cache:
            await self.cache.set_search_result(cache_key, result, ttl=self.config.cache_ttl)

    def _cache_scope(self) -> Any:
        if not self.access_policy:
            return None
        return self.access_policy.cache_scope()

    @staticmethod
    def _took_ms(start_time: float) -> int:
        return int((time.time() - start_time) * 1000)

    @staticmethod
    def _make_cache_key(
        query: str,
        ignore_fix: bool,
        filters: Optional[Dict[str, Any]],
        scope: Any = None,
    ) -> str:
        """
        Создание ключа кэша

        Результат закэширован уже после проверки доступа,
        поэтому область видимости входит в ключ.
        """
        key_str = json.dumps(
            {"q": query, "ignore_fix": ignore_fix, "filters": filters, "scope": scope},
            sort_keys=True,
            ensure_ascii=False,
            default=str,
        )
        return hashlib.md5(key_str.encode()).hexdigest()
