from __future__ import annotations

"""Category index loader.

The index lists which question sets can be requested; the cache itself only
needs a (category, subcategory) key.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

from ..models import QuizCategory
from ..util.explain import warn


def load_categories(path: str | Path) -> List[QuizCategory]:
    """Read {"categories": [...]} from path. Unreadable index -> empty list."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return [QuizCategory.from_json(c) for c in data.get("categories", [])]
    except (OSError, ValueError, KeyError, AttributeError, TypeError) as e:
        warn(f"Error loading categories from {p}: {e}")
        return []


def find_category(categories: Sequence[QuizCategory], category_id: str) -> Optional[QuizCategory]:
    for c in categories:
        if c.id == category_id:
            return c
    return None
