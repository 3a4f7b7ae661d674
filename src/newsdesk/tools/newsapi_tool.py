from typing import Any, Dict, List, Mapping

import httpx


DEFAULT_BASE_URL = "https://newsapi.org/v2"
DEFAULT_TIMEOUT = 10.0


class NewsApiError(RuntimeError):
    """Raised when NewsAPI answers with a payload we cannot use."""


def strip_empty(params: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None and v != ""}


def _get_articles(
    endpoint: str,
    params: Mapping[str, Any],
    base_url: str,
    timeout: float,
) -> List[Dict[str, Any]]:
    url = f"{base_url.rstrip('/')}/{endpoint}"
    response = httpx.get(url, params=strip_empty(params), timeout=timeout)
    response.raise_for_status()

    try:
        data = response.json()
    except ValueError as exc:
        raise NewsApiError(f"Invalid JSON from {endpoint}: {exc}") from exc

    if not isinstance(data, dict):
        raise NewsApiError(f"Unexpected payload type from {endpoint}")
    if data.get("status") != "ok":
        raise NewsApiError(data.get("message") or "API Error")

    articles = data.get("articles")
    if articles is None:
        return []
    if not isinstance(articles, list):
        raise NewsApiError(f"Unexpected articles payload from {endpoint}")
    return articles


def fetch_top_headlines(
    params: Mapping[str, Any],
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Dict[str, Any]]:
    """Call ``/top-headlines`` once and return the raw article dicts.

    Raises ``httpx.HTTPError`` on transport failures and HTTP error statuses,
    and ``NewsApiError`` when the body is not an ``ok`` envelope.
    """

    query = {"apiKey": api_key, **params}
    return _get_articles("top-headlines", query, base_url, timeout)


def fetch_everything(
    query: str,
    params: Mapping[str, Any],
    api_key: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[Dict[str, Any]]:
    """Call ``/everything`` for a free-text query."""

    search = {"q": query, "apiKey": api_key, **params}
    if not search.get("sortBy"):
        search["sortBy"] = "publishedAt"
    return _get_articles("everything", search, base_url, timeout)
