"""
Final list sanitization applied to every successful result.
"""

import re
from typing import List

from ..core.amounts import convert_to_standard_units, standardize_unit
from ..models.recipe import SENTINEL_UNITS, TO_TASTE, GroceryCategory, Ingredient

LEADING_ADVERB = re.compile(r"^\s*(?:very\s+thinly|thinly|finely|roughly|coarsely)\b\s+", re.IGNORECASE)


def _dedupe_key(ingredient: Ingredient) -> str:
    name = LEADING_ADVERB.sub("", ingredient.name.replace("’", "'").strip()).lower()
    unit = re.sub(r"[\s,_;:–\-]+", "", ingredient.unit.lower())
    return f"{name}|{unit}|{ingredient.amount:.4f}"


def is_salt_and_pepper(name: str) -> bool:
    lowered = name.lower()
    return "salt" in lowered and "pepper" in lowered and " and " in lowered


def sanitize_ingredient(ingredient: Ingredient) -> Ingredient:
    """Tidy one ingredient: name whitespace, metric upscaling, amount-0 units"""
    name = re.sub(r"\s{2,}", " ", LEADING_ADVERB.sub("", ingredient.name)).strip() or ingredient.name
    amount, unit = ingredient.amount, ingredient.unit.strip()

    if unit not in SENTINEL_UNITS:
        scaled_amount, scaled_unit = convert_to_standard_units(amount, unit)
        if scaled_unit != unit:
            amount, unit = scaled_amount, standardize_unit(scaled_unit, scaled_amount)

    if amount == 0 and unit not in SENTINEL_UNITS:
        unit = ""

    return Ingredient(name=name, amount=amount, unit=unit, category=ingredient.category)


def sanitize_ingredients(ingredients: List[Ingredient]) -> List[Ingredient]:
    """
    Sanitize, dedupe and split combined seasonings.

    "Salt and pepper" style entries become separate salt and black pepper
    items measured to taste, each added once.
    """
    result: List[Ingredient] = []
    seen = set()
    for ingredient in ingredients:
        sanitized = sanitize_ingredient(ingredient)
        key = _dedupe_key(sanitized)
        if key in seen:
            continue
        seen.add(key)

        if is_salt_and_pepper(sanitized.name):
            for name in ("salt", "black pepper"):
                if not any(existing.name.lower() == name for existing in result):
                    result.append(Ingredient(name=name, amount=0.0, unit=TO_TASTE, category=GroceryCategory.pantry))
            continue

        result.append(sanitized)
    return result
