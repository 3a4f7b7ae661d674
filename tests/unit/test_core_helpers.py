import pytest

from newsdesk.core.articles import calculate_reading_time, find_article, not_found_article
from newsdesk.core.bookmarks import BookmarkStore
from newsdesk.core.categories import CATEGORIES, category_title, is_valid_category
from newsdesk.core.search_history import DEFAULT_HISTORY, SearchHistory
from newsdesk.models.news import Article


@pytest.fixture
def article():
    return Article.model_validate(
        {
            "source": {"id": None, "name": "Example"},
            "title": "Title",
            "url": "https://example.com/a",
            "urlToImage": "https://example.com/a.jpg",
            "publishedAt": "2024-01-01T00:00:00Z",
            "extraField": "kept",
        }
    )


# ============================================================================
# Articles
# ============================================================================


@pytest.mark.parametrize(
    "content, minutes",
    [
        ("", 1),
        (None, 1),
        ("word " * 200, 1),
        ("word " * 201, 2),
        ("word " * 1000, 5),
    ],
)
def test_calculate_reading_time(content, minutes) -> None:
    assert calculate_reading_time(content) == minutes


def test_find_article_matches_on_url() -> None:
    articles = [{"url": "https://a"}, {"url": "https://b", "title": "B"}]

    assert find_article(articles, "https://b") == {"url": "https://b", "title": "B"}
    assert find_article(articles, "https://c") is None


def test_not_found_article_keeps_requested_url() -> None:
    placeholder = not_found_article("https://missing")

    assert placeholder["url"] == "https://missing"
    assert placeholder["title"] == "Article Not Found"
    assert placeholder["source"] == {"name": "Unknown"}


# ============================================================================
# Categories
# ============================================================================


def test_categories_catalogue() -> None:
    names = [c["name"] for c in CATEGORIES]
    assert names == ["business", "entertainment", "general", "health", "science", "sports", "technology"]
    assert is_valid_category("technology")
    assert not is_valid_category("weather")
    assert category_title("technology") == "Technology News"


# ============================================================================
# Bookmarks
# ============================================================================


def test_bookmark_add_check_remove_cycle(article) -> None:
    store = BookmarkStore()

    assert store.add("1.2.3.4", article) is True
    assert store.add("1.2.3.4", article) is False
    assert store.contains("1.2.3.4", article.url)
    assert not store.contains("5.6.7.8", article.url)
    assert store.count("1.2.3.4") == 1

    assert store.remove("1.2.3.4", article.url) == 0
    assert not store.contains("1.2.3.4", article.url)


def test_bookmark_payload_round_trips_upstream_names(article) -> None:
    store = BookmarkStore()
    store.add("u", article)

    payload = store.list("u")[0].model_dump(by_alias=True)
    assert payload["urlToImage"] == "https://example.com/a.jpg"
    assert payload["publishedAt"] == "2024-01-01T00:00:00Z"
    assert payload["extraField"] == "kept"
    assert payload["source"]["name"] == "Example"
    assert payload["bookmarkedAt"]


def test_remove_unknown_user_is_harmless() -> None:
    assert BookmarkStore().remove("nobody", "https://x") == 0


# ============================================================================
# Search history
# ============================================================================


def test_history_is_seeded_with_defaults() -> None:
    assert SearchHistory().get("u") == list(DEFAULT_HISTORY)


def test_suggestions_require_two_characters() -> None:
    history = SearchHistory()

    assert history.suggestions("u", "") == []
    assert history.suggestions("u", "e") == []


def test_suggestions_match_case_insensitively() -> None:
    history = SearchHistory()

    assert history.suggestions("u", "EL") == ["Election"]
    assert history.suggestions("u", "o") == []
    assert history.suggestions("u", "or") == ["Sports"]


def test_saved_searches_come_first_without_duplicates() -> None:
    history = SearchHistory()
    history.save("u", "Elections 2024")
    history.save("u", "election")

    assert history.get("u")[:2] == ["election", "Elections 2024"]
    assert "Election" not in history.get("u")
    assert history.get("other") == list(DEFAULT_HISTORY)


def test_suggestions_are_capped_at_five() -> None:
    history = SearchHistory(defaults=[f"topic {i}" for i in range(10)])

    assert len(history.suggestions("u", "topic")) == 5
