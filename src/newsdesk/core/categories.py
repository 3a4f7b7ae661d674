from typing import Dict, List

CATEGORIES: List[Dict[str, str]] = [
    {"name": "business", "display_name": "Business", "icon": "💼"},
    {"name": "entertainment", "display_name": "Entertainment", "icon": "🎬"},
    {"name": "general", "display_name": "General", "icon": "📰"},
    {"name": "health", "display_name": "Health", "icon": "🏥"},
    {"name": "science", "display_name": "Science", "icon": "🔬"},
    {"name": "sports", "display_name": "Sports", "icon": "⚽"},
    {"name": "technology", "display_name": "Technology", "icon": "💻"},
]

VALID_CATEGORIES = frozenset(c["name"] for c in CATEGORIES)


def is_valid_category(category: str) -> bool:
    return category in VALID_CATEGORIES


def category_title(category: str) -> str:
    """Page title for a category, e.g. ``"Technology News"``."""
    return f"{category[:1].upper()}{category[1:]} News"
