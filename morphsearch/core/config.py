"""
Конфигурация поиска
"""
from dataclasses import dataclass, field
from typing import Optional
import os


@dataclass
class RedisConfig:
    """Настройки Redis"""
    host: str = "localhost"
    port: int = 6379
    password: Optional[str] = None
    db: int = 0

    # Префикс ключей кэша поиска
    search_cache_prefix: str = "search:"

    @property
    def url(self) -> str:
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass
class ScoringWeights:
    """Веса оценки релевантности"""
    # Полный запрос целиком
    exact_title: int = 400
    exact_body: int = 200

    # Отдельные слова
    word_in_title: int = 100
    word_occurrence: int = 10
    word_body_cap: int = 100

    # Бонусы
    all_words_in_title: int = 50
    proximity: int = 20
    proximity_window: int = 20  # символов между словами
    position_max: int = 20
    position_step: int = 100  # бонус уменьшается каждые N символов


@dataclass
class HighlightConfig:
    """Настройки подсветки и сниппетов"""
    # Приближённая подсветка
    fuzzy_max_distance: int = 2
    fuzzy_min_length: int = 4  # термин должен быть длиннее

    max_snippets: int = 5
    default_class: str = "highlight"
    snippet_template: str = '<p class="my-2 text-break">{}</p>'


@dataclass
class SearchConfig:
    """Настройки поиска"""
    # Минимальная длина термина
    min_term_length: int = 2

    # Кандидаты из индекса
    candidate_limit: int = 3000

    # Нечёткий поиск по стемам
    fuzzy_distance: int = 3
    fuzzy_prefix_length: int = 2

    # TTL кэша (секунды)
    cache_ttl: int = 600

    scoring: ScoringWeights = field(default_factory=ScoringWeights)
    highlight: HighlightConfig = field(default_factory=HighlightConfig)


@dataclass
class Config:
    """Главная конфигурация"""
    env: str = "development"
    debug: bool = True

    redis: RedisConfig = field(default_factory=RedisConfig)
    search: SearchConfig = field(default_factory=SearchConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Загрузить конфигурацию из переменных окружения"""
        return cls(
            env=os.getenv("ENV", "development"),
            debug=os.getenv("DEBUG", "true").lower() == "true",

            redis=RedisConfig(
                host=os.getenv("REDIS_HOST", "localhost"),
                port=int(os.getenv("REDIS_PORT", "6379")),
                password=os.getenv("REDIS_PASSWORD"),
            ),

            search=SearchConfig(
                candidate_limit=int(os.getenv("SEARCH_CANDIDATE_LIMIT", "3000")),
                cache_ttl=int(os.getenv("SEARCH_CACHE_TTL", "600")),
            ),
        )


# Глобальный экземпляр конфигурации
config = Config.from_env()
