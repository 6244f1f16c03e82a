"""
Deterministic grocery-category assignment.

Overrides are checked first, then the frozen rule, then the keyword sets in
store order. Keywords match as whole words with an optional plural suffix so
that short keywords ("gin", "ham", "rum") never fire inside longer words.
"""

import re
from functools import lru_cache
from typing import Optional

from ..models.recipe import GroceryCategory
from .tables import CATEGORY_OVERRIDES, CATEGORY_KEYWORDS, FROZEN_EXCEPTION_HINTS


@lru_cache(maxsize=1024)
def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(rf"(?<![a-z]){re.escape(keyword)}(?:s|es)?(?![a-z])")


def contains_keyword(text: str, keyword: str) -> bool:
    """Whole-word keyword match allowing a plural suffix"""
    return _keyword_pattern(keyword).search(text) is not None


def _match_override(lowered: str) -> Optional[GroceryCategory]:
    for keyword, category in CATEGORY_OVERRIDES:
        if contains_keyword(lowered, keyword):
            return category
    return None


def _is_frozen(lowered: str) -> bool:
    if not contains_keyword(lowered, "frozen"):
        return False
    return not any(hint in lowered for hint in FROZEN_EXCEPTION_HINTS)


def _match_keywords(lowered: str) -> Optional[GroceryCategory]:
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(contains_keyword(lowered, keyword) for keyword in keywords):
            return category
    return None


def categorize(name: str) -> GroceryCategory:
    """Assign a grocery category to an ingredient name; Pantry when nothing matches"""
    lowered = (name or "").lower()

    override = _match_override(lowered)
    if override is not None:
        return override

    if _is_frozen(lowered):
        return GroceryCategory.frozen

    return _match_keywords(lowered) or GroceryCategory.pantry


def adjust_category(name: str, current: GroceryCategory) -> GroceryCategory:
    """
    Correct an externally supplied category.

    Same rules as categorize, except that when no rule matches the supplied
    category is kept instead of falling back to Pantry.
    """
    lowered = (name or "").lower()

    override = _match_override(lowered)
    if override is not None:
        return override

    if _is_frozen(lowered):
        return GroceryCategory.frozen

    return _match_keywords(lowered) or current
