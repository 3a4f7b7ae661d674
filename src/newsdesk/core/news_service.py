import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ..config import PLACEHOLDER_API_KEY, Settings
from ..logging_config import get_logger
from ..models.news import CacheStats
from ..tools import newsapi_tool
from ..tools.cache import TTLCache
from ..tools.newsapi_tool import NewsApiError
from ..tools.sample_data import load_sample_articles


logger = get_logger("core.news_service")

SEARCH_KEY_PREFIX = "search_"

ArticleList = List[Dict[str, Any]]


def make_cache_key(params: Mapping[str, Any]) -> str:
    """Serialize a parameter mapping into a cache key.

    ``None`` values are dropped; insertion order is kept, so the same
    parameters given in a different order produce a different key.
    """
    return json.dumps(
        {k: v for k, v in params.items() if v is not None},
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def make_search_cache_key(query: str, params: Mapping[str, Any]) -> str:
    return f"{SEARCH_KEY_PREFIX}{query}_{make_cache_key(params)}"


class NewsService:
    """Cache-backed access to the NewsAPI top-headlines and search endpoints.

    Neither operation raises: top headlines fall back to a stale cache entry
    and then to the bundled sample articles, while search falls back to an
    empty list.
    """

    def __init__(
        self,
        api_key: Optional[str],
        cache: TTLCache,
        base_url: str = newsapi_tool.DEFAULT_BASE_URL,
        timeout: float = newsapi_tool.DEFAULT_TIMEOUT,
        sample_path: str | Path | None = None,
    ) -> None:
        self.api_key = api_key if api_key != PLACEHOLDER_API_KEY else None
        self.cache = cache
        self.base_url = base_url
        self.timeout = timeout
        self.sample_path = sample_path

    @classmethod
    def from_settings(cls, settings: Settings, cache: Optional[TTLCache] = None) -> "NewsService":
        return cls(
            api_key=settings.news_api_key,
            cache=cache or TTLCache(ttl_seconds=settings.news_cache_ttl_seconds),
            base_url=settings.news_api_base_url,
            timeout=settings.news_request_timeout,
            sample_path=settings.news_sample_data_path,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def fetch_top_headlines(self, params: Optional[Mapping[str, Any]] = None) -> ArticleList:
        params = dict(params or {})
        cache_key = make_cache_key(params)

        if not self.has_api_key:
            logger.info("top_headlines_no_api_key", cache_key=cache_key)
            return self.get_sample_data()

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("top_headlines_cache_hit", cache_key=cache_key, results=len(cached))
            return cached

        try:
            articles = newsapi_tool.fetch_top_headlines(
                params,
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
            )
        except (httpx.HTTPError, NewsApiError) as exc:
            logger.warning("top_headlines_error", cache_key=cache_key, error=str(exc))
            stale = self.cache.get_stale(cache_key)
            if stale is not None:
                logger.info("top_headlines_stale_cache", cache_key=cache_key, results=len(stale))
                return stale
            return self.get_sample_data()

        self.cache.set(cache_key, articles)
        logger.info("top_headlines_fetched", cache_key=cache_key, results=len(articles))
        return articles

    def search_news(self, query: str, params: Optional[Mapping[str, Any]] = None) -> ArticleList:
        params = dict(params or {})
        params.setdefault("sortBy", "publishedAt")
        cache_key = make_search_cache_key(query, params)

        if not self.has_api_key:
            logger.info("search_no_api_key", query=query)
            return []

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("search_cache_hit", cache_key=cache_key, results=len(cached))
            return cached

        try:
            articles = newsapi_tool.fetch_everything(
                query,
                params,
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
            )
        except (httpx.HTTPError, NewsApiError) as exc:
            # No stale or sample fallback for search.
            logger.warning("search_error", query=query, error=str(exc))
            return []

        # Expired search entries are never read again.
        self.cache.evict_expired(prefix=SEARCH_KEY_PREFIX)
        self.cache.set(cache_key, articles)
        logger.info("search_fetched", query=query, results=len(articles))
        return articles

    def get_sample_data(self) -> ArticleList:
        return load_sample_articles(self.sample_path)

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("cache_cleared")

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()
