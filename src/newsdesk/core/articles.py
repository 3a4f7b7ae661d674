import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional


WORDS_PER_MINUTE = 200
PLACEHOLDER_IMAGE = "/images/placeholder.jpg"


def calculate_reading_time(content: Optional[str]) -> int:
    """Estimated reading time in whole minutes, never less than one."""
    words = len((content or "").split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def find_article(articles: Iterable[Dict[str, Any]], url: str) -> Optional[Dict[str, Any]]:
    return next((a for a in articles if a.get("url") == url), None)


def not_found_article(url: str) -> Dict[str, Any]:
    return {
        "title": "Article Not Found",
        "description": "The requested article could not be found.",
        "url": url,
        "urlToImage": PLACEHOLDER_IMAGE,
        "source": {"name": "Unknown"},
        "publishedAt": datetime.now(timezone.utc).isoformat(),
        "content": "Content not available.",
    }
