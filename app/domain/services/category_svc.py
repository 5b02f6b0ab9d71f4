import re
from typing import List, Optional, Pattern, Tuple

from app.domain.models.product import Category
from app.domain.services.constants import CATEGORY_KEYWORDS, DEFAULT_CATEGORY


def _compile_rules() -> List[Tuple[Pattern[str], Category]]:
    """
    Build the ordered decision list of (pattern, category).
    Keywords are plain substrings (no word boundaries), so "top" also matches "laptop".
    """
    return [
        (re.compile("|".join(re.escape(k) for k in keywords)), category)
        for category, keywords in CATEGORY_KEYWORDS
    ]


CATEGORY_RULES = _compile_rules()


def classify(name: Optional[str]) -> Category:
    """Map a product display name to a shop category. Empty/None -> other."""
    n = (name or "").lower()
    if not n:
        return DEFAULT_CATEGORY
    for pattern, category in CATEGORY_RULES:
        if pattern.search(n):
            return category
    return DEFAULT_CATEGORY
