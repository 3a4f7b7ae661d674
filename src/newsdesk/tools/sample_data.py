import json
from pathlib import Path
from typing import Any, Dict, List

from ..logging_config import get_logger


logger = get_logger("tools.sample_data")

SAMPLE_DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "sample.json"


def load_sample_articles(path: str | Path | None = None) -> List[Dict[str, Any]]:
    """Read the bundled placeholder articles.

    The file is read on every call. A missing or malformed file yields an
    empty list rather than an error.
    """

    sample_path = Path(path) if path else SAMPLE_DATA_PATH
    try:
        data = json.loads(sample_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("sample_data_load_error", path=str(sample_path), error=str(exc))
        return []

    articles = data.get("articles") if isinstance(data, dict) else None
    if not isinstance(articles, list):
        logger.error("sample_data_malformed", path=str(sample_path))
        return []
    return articles
