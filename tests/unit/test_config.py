"""
Unit tests for configuration loading.
"""

from morphsearch.core.config import Config, RedisConfig, SearchConfig


class TestConfig:

    def test_defaults(self):
        search = SearchConfig()
        assert search.candidate_limit == 3000
        assert search.cache_ttl == 600
        assert search.highlight.fuzzy_max_distance == 2
        assert search.highlight.fuzzy_min_length == 4
        assert search.highlight.max_snippets == 5
        assert search.scoring.exact_title == 400
        assert search.scoring.exact_body == 200

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        monkeypatch.setenv("DEBUG", "false")
        monkeypatch.setenv("REDIS_HOST", "cache.local")
        monkeypatch.setenv("REDIS_PORT", "6380")
        monkeypatch.setenv("SEARCH_CACHE_TTL", "60")

        cfg = Config.from_env()

        assert cfg.env == "production"
        assert cfg.debug is False
        assert cfg.redis.url == "redis://cache.local:6380/0"
        assert cfg.search.cache_ttl == 60

    def test_redis_url_with_password(self):
        assert RedisConfig(password="secret").url == "redis://:secret@localhost:6379/0"
