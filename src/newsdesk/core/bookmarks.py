import threading
from typing import Dict, List

from ..models.news import Article, Bookmark


class BookmarkStore:
    """In-memory bookmarks keyed by client id.

    Bookmarks live only as long as the process and are not shared between
    workers.
    """

    def __init__(self) -> None:
        self._bookmarks: Dict[str, List[Bookmark]] = {}
        self._lock = threading.Lock()

    def list(self, user_id: str) -> List[Bookmark]:
        with self._lock:
            return list(self._bookmarks.get(user_id, []))

    def add(self, user_id: str, article: Article) -> bool:
        """Store ``article`` for ``user_id``; False if its url is already saved."""
        with self._lock:
            bookmarks = self._bookmarks.setdefault(user_id, [])
            if any(b.url == article.url for b in bookmarks):
                return False
            bookmarks.append(Bookmark(**article.model_dump(by_alias=True)))
            return True

    def remove(self, user_id: str, url: str) -> int:
        """Drop bookmarks matching ``url`` and return how many remain."""
        with self._lock:
            remaining = [b for b in self._bookmarks.get(user_id, []) if b.url != url]
            self._bookmarks[user_id] = remaining
            return len(remaining)

    def contains(self, user_id: str, url: str) -> bool:
        with self._lock:
            return any(b.url == url for b in self._bookmarks.get(user_id, []))

    def count(self, user_id: str) -> int:
        with self._lock:
            return len(self._bookmarks.get(user_id, []))
