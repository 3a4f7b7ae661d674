from .news import Article, ArticleSource, Bookmark, CacheStats  # noqa: F401
