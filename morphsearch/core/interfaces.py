"""
Интерфейсы (абстрактные классы) внешних участников поиска
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any
from .models import Document, SearchResult


class IDocumentIndex(ABC):
    """Интерфейс полнотекстового индекса"""

    @abstractmethod
    async def search(self, query: str, limit: int = 3000) -> List[str]:
        """
        Найти кандидатов по строке запроса

        Returns:
            ID документов в порядке, в котором их вернул индекс
        """
        pass

    @abstractmethod
    async def fuzzy_search(
        self,
        query: str,
        distance: int = 3,
        prefix_length: int = 2
    ) -> List[str]:
        """
        Нечёткий поиск (используется, когда точный ничего не нашёл)

        Args:
            query: Запрос (обычно из стемов)
            distance: Максимальное расстояние редактирования
            prefix_length: Длина префикса, который должен совпасть точно
        """
        pass


class IDocumentRepository(ABC):
    """Интерфейс хранилища документов"""

    @abstractmethod
    async def get_many(
        self,
        document_ids: List[str],
        filters: Optional[Dict[str, Any]] = None
    ) -> List[Document]:
        """
        Загрузить документы по ID

        Args:
            document_ids: ID документов
            filters: Дополнительные ограничения (категории, атрибуты)
        """
        pass


class IAccessPolicy(ABC):
    """Интерфейс проверки видимости документа"""

    @abstractmethod
    async def is_visible(self, document: Document) -> bool:
        pass

    @abstractmethod
    def cache_scope(self) -> Any:
        """
        Область видимости для ключа кэша

        Значение должно сериализоваться в JSON и совпадать у политик,
        которые видят одни и те же документы.
        """
        pass


class ICache(ABC):
    """Интерфейс кэша"""

    @abstractmethod
    async def get_search_result(self, key: str) -> Optional[SearchResult]:
        """Получить закэшированный результат поиска"""
        pass

    @abstractmethod
    async def set_search_result(
        self,
        key: str,
        result: SearchResult,
        ttl: int = 600
    ) -> None:
        """Сохранить результат поиска в кэш"""
        pass

    @abstractmethod
    async def invalidate(self) -> int:
        """
        Очистить кэш поиска

        Returns:
            Количество удалённых записей
        """
        pass


class ISearchLog(ABC):
    """Интерфейс журнала поисковых запросов"""

    @abstractmethod
    async def track_search(
        self,
        query: str,
        corrected_query: Optional[str],
        results_count: int,
        duration_ms: float
    ) -> None:
        """Записать поисковый запрос"""
        pass
