import threading
from typing import Dict, List, Sequence

from ..logging_config import get_logger


logger = get_logger("core.search_history")

DEFAULT_HISTORY: Sequence[str] = ("COVID-19", "Election", "Technology", "Sports", "Weather")
MIN_SUGGESTION_LENGTH = 2
MAX_SUGGESTIONS = 5


class SearchHistory:
    """Per-client search history, most recent first, seeded with defaults."""

    def __init__(self, defaults: Sequence[str] = DEFAULT_HISTORY, max_entries: int = 50) -> None:
        self._defaults = list(defaults)
        self._max_entries = max_entries
        self._history: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> List[str]:
        with self._lock:
            return list(self._history.get(user_id, self._defaults))

    def save(self, user_id: str, query: str) -> None:
        query = query.strip()
        if not query:
            return
        with self._lock:
            entries = [q for q in self._history.get(user_id, self._defaults) if q.lower() != query.lower()]
            self._history[user_id] = [query, *entries][: self._max_entries]
        logger.info("search_saved", user_id=user_id, query=query)

    def suggestions(self, user_id: str, query: str) -> List[str]:
        if not query or len(query) < MIN_SUGGESTION_LENGTH:
            return []
        needle = query.lower()
        return [item for item in self.get(user_id) if needle in item.lower()][:MAX_SUGGESTIONS]
