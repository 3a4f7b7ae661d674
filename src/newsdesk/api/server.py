from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel

from ..config import settings
from ..core.articles import calculate_reading_time, find_article, not_found_article
from ..core.bookmarks import BookmarkStore
from ..core.categories import CATEGORIES, category_title, is_valid_category
from ..core.news_service import NewsService
from ..core.search_history import SearchHistory
from ..logging_config import get_logger
from ..models.news import Article


logger = get_logger("api.server")

ANONYMOUS_USER = "anonymous"
RELATED_ARTICLES = 4
CATEGORY_PREVIEW_SIZE = 3

router = APIRouter()


class BookmarkAddRequest(BaseModel):
    article: Optional[Article] = None


class BookmarkRemoveRequest(BaseModel):
    url: Optional[str] = None


def default_preferences() -> dict:
    return {
        "theme": "light",
        "defaultCategory": settings.default_category,
        "defaultCountry": settings.default_country,
    }


def create_app(
    news_service: Optional[NewsService] = None,
    bookmarks: Optional[BookmarkStore] = None,
    search_history: Optional[SearchHistory] = None,
) -> FastAPI:
    """Build the API; collaborators are created at startup unless injected."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.news_service = news_service or NewsService.from_settings(settings)
        app.state.bookmarks = bookmarks or BookmarkStore()
        app.state.search_history = search_history or SearchHistory()
        logger.info(
            "app_startup",
            api_key_configured=app.state.news_service.has_api_key,
            cache_ttl_seconds=app.state.news_service.cache.ttl_seconds,
        )
        yield
        app.state.news_service.clear_cache()

    app = FastAPI(
        title="Newsdesk API",
        description="Cached NewsAPI headlines, search and bookmarks",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


def get_news_service(request: Request) -> NewsService:
    return request.app.state.news_service


def get_bookmarks(request: Request) -> BookmarkStore:
    return request.app.state.bookmarks


def get_search_history(request: Request) -> SearchHistory:
    return request.app.state.search_history


def get_user_id(request: Request) -> str:
    # No sessions; the client address stands in for a user id.
    return request.client.host if request.client else ANONYMOUS_USER


# ============================================================================
# Health and Cache Endpoints
# ============================================================================


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/api/cache/stats")
def cache_stats(service: NewsService = Depends(get_news_service)) -> dict:
    return {"cache": service.cache_stats().model_dump(), "status": "ok"}


@router.delete("/api/cache")
def clear_cache(service: NewsService = Depends(get_news_service)) -> dict:
    service.clear_cache()
    return {"status": "cleared"}


# ============================================================================
# News Endpoints
# ============================================================================


@router.get("/api/news")
def home(
    category: str = settings.default_category,
    country: str = settings.default_country,
    service: NewsService = Depends(get_news_service),
) -> dict:
    articles = service.fetch_top_headlines(
        {"category": category, "country": country, "pageSize": settings.page_size}
    )
    logger.info("home_request", category=category, country=country, results=len(articles))
    return {
        "title": "Latest News - Stay Informed",
        "featured_article": articles[0] if articles else None,
        "articles": articles[1:],
        "current_category": category,
        "current_country": country,
        "user_preferences": default_preferences(),
    }


@router.get("/api/news/load-more")
def load_more(
    category: str = settings.default_category,
    country: str = settings.default_country,
    page: int = Query(1, ge=1),
    service: NewsService = Depends(get_news_service),
) -> dict:
    page_size = settings.load_more_page_size
    articles = service.fetch_top_headlines(
        {"category": category, "country": country, "page": page, "pageSize": page_size}
    )
    return {
        "success": True,
        "articles": articles,
        "has_more": len(articles) == page_size,
    }


@router.get("/api/categories")
def list_categories(service: NewsService = Depends(get_news_service)) -> dict:
    categories = [
        {
            **category,
            "articles": service.fetch_top_headlines(
                {"category": category["name"], "pageSize": CATEGORY_PREVIEW_SIZE}
            ),
        }
        for category in CATEGORIES
    ]
    return {
        "title": "News Categories",
        "categories": categories,
        "user_preferences": default_preferences(),
    }


@router.get("/api/categories/{category}")
def show_category(
    category: str,
    country: str = settings.default_country,
    page: int = Query(1, ge=1),
    service: NewsService = Depends(get_news_service),
) -> dict:
    if not is_valid_category(category):
        logger.info("category_not_found", category=category)
        raise HTTPException(status_code=404, detail=f'Category "{category}" does not exist.')

    articles = service.fetch_top_headlines(
        {"category": category, "country": country, "page": page, "pageSize": settings.page_size}
    )
    return {
        "title": category_title(category),
        "category": category,
        "articles": articles,
        "current_country": country,
        "user_preferences": default_preferences(),
    }


@router.get("/api/article")
def show_article(
    url: Optional[str] = None,
    service: NewsService = Depends(get_news_service),
) -> dict:
    if not url:
        raise HTTPException(status_code=400, detail="Article URL is required")

    candidates = service.fetch_top_headlines({"q": url, "pageSize": 1})
    article = find_article(candidates, url) or not_found_article(url)
    related = service.fetch_top_headlines(
        {"category": settings.default_category, "pageSize": RELATED_ARTICLES}
    )
    return {
        "title": article.get("title"),
        "article": article,
        "reading_time": calculate_reading_time(article.get("content") or article.get("description")),
        "related_articles": related,
        "user_preferences": default_preferences(),
    }


# ============================================================================
# Search Endpoints
# ============================================================================


@router.get("/api/search")
def search(
    q: Optional[str] = None,
    sort_by: str = Query("publishedAt", alias="sortBy"),
    page: int = Query(1, ge=1),
    service: NewsService = Depends(get_news_service),
    history: SearchHistory = Depends(get_search_history),
    user_id: str = Depends(get_user_id),
) -> dict:
    query = (q or "").strip()
    if not query:
        return {"query": "", "articles": [], "sort_by": sort_by, "total_results": 0}

    articles = service.search_news(
        query, {"sortBy": sort_by, "page": page, "pageSize": settings.page_size}
    )
    history.save(user_id, query)
    logger.info("search_request", query=query, sort_by=sort_by, page=page, results=len(articles))
    return {
        "query": query,
        "articles": articles,
        "sort_by": sort_by,
        "total_results": len(articles),
    }


@router.get("/api/search/suggestions")
def search_suggestions(
    q: Optional[str] = None,
    history: SearchHistory = Depends(get_search_history),
    user_id: str = Depends(get_user_id),
) -> dict:
    return {"suggestions": history.suggestions(user_id, q or "")}


# ============================================================================
# Bookmark Endpoints
# ============================================================================


@router.get("/api/bookmarks")
def list_bookmarks(
    bookmarks: BookmarkStore = Depends(get_bookmarks),
    user_id: str = Depends(get_user_id),
) -> dict:
    return {
        "title": "My Bookmarks",
        "bookmarks": [b.model_dump(by_alias=True) for b in bookmarks.list(user_id)],
        "user_preferences": default_preferences(),
    }


@router.post("/api/bookmarks/add")
def add_bookmark(
    req: BookmarkAddRequest,
    bookmarks: BookmarkStore = Depends(get_bookmarks),
    user_id: str = Depends(get_user_id),
) -> dict:
    if req.article is None:
        raise HTTPException(status_code=400, detail="Article data is required")

    if not bookmarks.add(user_id, req.article):
        return {"success": False, "message": "Article already bookmarked"}

    logger.info("bookmark_added", user_id=user_id, url=req.article.url)
    return {
        "success": True,
        "message": "Article bookmarked successfully",
        "bookmarks_count": bookmarks.count(user_id),
    }


@router.post("/api/bookmarks/remove")
def remove_bookmark(
    req: BookmarkRemoveRequest,
    bookmarks: BookmarkStore = Depends(get_bookmarks),
    user_id: str = Depends(get_user_id),
) -> dict:
    remaining = bookmarks.remove(user_id, req.url or "")
    return {
        "success": True,
        "message": "Bookmark removed successfully",
        "bookmarks_count": remaining,
    }


@router.get("/api/bookmarks/check")
def check_bookmark(
    url: Optional[str] = None,
    bookmarks: BookmarkStore = Depends(get_bookmarks),
    user_id: str = Depends(get_user_id),
) -> dict:
    return {"success": True, "is_bookmarked": bookmarks.contains(user_id, url or "")}


app = create_app()
