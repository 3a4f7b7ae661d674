from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ArticleSource(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: Optional[str] = None


class Article(BaseModel):
    """A NewsAPI article as received from clients.

    Field names follow the upstream camelCase payload so that articles can be
    echoed back unchanged; unknown keys are kept.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    url_to_image: Optional[str] = Field(default=None, alias="urlToImage")
    published_at: Optional[str] = Field(default=None, alias="publishedAt")
    source: ArticleSource = Field(default_factory=ArticleSource)


class Bookmark(Article):
    bookmarked_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="bookmarkedAt",
    )


class CacheStats(BaseModel):
    hits: int = 0
    misses: int = 0
    keys: int = 0
