"""
Кэш результатов поиска в Redis
"""
import json
import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..core.config import RedisConfig
from ..core.interfaces import ICache
from ..core.models import SearchResult

logger = logging.getLogger(__name__)


class RedisSearchCache(ICache):
    """
    Кэш результатов поиска

    Результат хранится как JSON под ключом "<prefix><hash запроса>".
    Ошибки Redis не прерывают поиск: пишем предупреждение и считаем промахом.
    """

    def __init__(self, redis_client, prefix: str = "search:", ttl: int = 600):
        self.redis = redis_client
        self.prefix = prefix
        self.ttl = ttl

    @classmethod
    def from_config(cls, redis_config: RedisConfig, ttl: int = 600) -> "RedisSearchCache":
        """Создать кэш с клиентом по настройкам"""
        client = redis.from_url(redis_config.url, encoding="utf-8", decode_responses=True)
        return cls(client, prefix=redis_config.search_cache_prefix, ttl=ttl)

    async def get_search_result(self, key: str) -> Optional[SearchResult]:
        try:
            data = await self.redis.get(self.prefix + key)
        except RedisError as e:
            logger.warning(f"[Cache] Failed to read '{key}': {e}")
            return None

        if not data:
            return None

        if isinstance(data, bytes):
            data = data.decode()
        try:
            return SearchResult.from_dict(json.loads(data))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"[Cache] Broken entry '{key}': {e}")
            return None

    async def set_search_result(
        self,
        key: str,
        result: SearchResult,
        ttl: Optional[int] = None
    ) -> None:
        payload = json.dumps(result.to_dict(), ensure_ascii=False)
        try:
            await self.redis.set(self.prefix + key, payload, ex=ttl or self.ttl)
        except RedisError as e:
            logger.warning(f"[Cache] Failed to write '{key}': {e}")

    async def invalidate(self) -> int:
        """Удалить все ключи кэша поиска"""
        deleted = 0
        cursor = 0
        try:
            while True:
                cursor, keys = await self.redis.scan(cursor, match=f"{self.prefix}*", count=100)
                if keys:
                    deleted += await self.redis.delete(*keys)
                if cursor == 0:
                    break
        except RedisError as e:
            logger.warning(f"[Cache] Failed to invalidate: {e}")
        logger.info(f"[Cache] Invalidated {deleted} entries")
        return deleted
