"""
Ingredient section extraction and the deterministic multi-line parsers.

extract_ingredient_section turns a page into plain text lines between the
ingredients heading and the directions heading. The quick path parses the
classified candidate lines one by one; parse_ingredients_with_regex is an
independent pattern pass over the whole section used when the quick path
falls short.
"""

import logging
import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from ..core.amounts import AMOUNT_PATTERN, combine_plus_measurement, parse_amount, standardize_unit
from ..core.categorizer import categorize
from ..core.line_classifier import is_ingredient_candidate
from ..core.name_normalizer import normalize_name, split_leading_container
from ..core.tables import NON_INGREDIENT_NAME_WORDS, NUMBER_WORDS
from ..models.recipe import GroceryCategory, Ingredient
from .ingredient_line_parser import (
    CONTAINER_SIZE_WORDS,
    SHELF_STABLE_CONTAINERS,
    clean_line,
    parse_ingredient_from_string,
    parse_special_line,
    round_produce_amount,
)

logger = logging.getLogger(__name__)

STRIPPED_TAGS = ["script", "style", "head", "noscript", "meta", "link", "template", "svg"]

INGREDIENTS_HEADING = re.compile(
    r"^(?:the\s+)?(?:ingredients?|ingredient\s+list|what\s+you(?:'|’)?ll\s+need|you(?:'|’)?ll\s+need|"
    r"what\s+you\s+need)\b[\s:]*$",
    re.IGNORECASE
)
DIRECTIONS_HEADING = re.compile(
    r"^(?:directions?|instructions?|method|preparation|steps|how\s+to\s+make(?:\s+it)?|"
    r"nutrition(?:\s+facts)?)\b[\s:]*$",
    re.IGNORECASE
)
SUB_SECTION_PATTERN = re.compile(r"\bfor\s+the\b", re.IGNORECASE)
SUB_HEADING_LINE = re.compile(r"^for\s+the\s+[^,]{1,40}:?$", re.IGNORECASE)
PLUS_CONTINUATION = re.compile(r"^(?:\+|plus)\s+\d", re.IGNORECASE)

# Regex section pass
REGEX_UNITS = (
    r"cups?|tablespoons?|tbsps?|tbs|teaspoons?|tsps?|fluid\s+ounces?|fl\s+oz|ounces?|oz|pounds?|lbs?|"
    r"grams?|g|kilograms?|kg|milliliters?|ml|liters?|l|pints?|quarts?|gallons?|"
    r"extra[\s-]large|small|medium|large|xl|cloves?|sprigs?|bunch(?:es)?|heads?|leaves|leaf|"
    r"pieces?|slices?|stalks?|sticks?|cans?|jars?|bottles?|containers?|packages?|bags?"
)
MEASURED_LINE = re.compile(
    rf"^({AMOUNT_PATTERN})\s*(?:\(([^)]*)\)\s*)?({REGEX_UNITS})\.?(?![a-z])\s+(?:of\s+)?([^,]+?)(?:\s*,.*)?\.?$",
    re.IGNORECASE
)
COUNT_LINE = re.compile(
    rf"^((?:{'|'.join(NUMBER_WORDS)})\b|{AMOUNT_PATTERN})\s+([^,]+?)(?:\s*\([^)]*\))?(?:\s*,.*)?\.?$",
    re.IGNORECASE
)
LEADING_SIZE = re.compile(r"^\(([^)]*)\)\s*(.+)$")
SIZE_TEXT = re.compile(
    r"(\d+(?:\.\d+)?)\s*-?\s*(oz|ounces?|g|grams?|ml|milliliters?|lbs?|pounds?|inch(?:es)?)\b",
    re.IGNORECASE
)

# Words that mark a regex match as a direction, a timing note or page furniture
NON_INGREDIENT_KEYWORDS = [
    "minute", "minutes", "second", "seconds", "hour", "hours",
    "cooking", "heat", "heated", "simmer", "boil", "fry", "bake", "roast", "grill",
    "stir", "mix", "blend", "whisk", "until", "over medium", "over high", "over low",
    "in a", "in the", "on a", "on the", "carefully", "gently", "slowly", "quickly",
    "immediately", "transfer", "serve", "very thinly", "thinly", "finely", "roughly", "coarsely",
] + NON_INGREDIENT_NAME_WORDS
NON_INGREDIENT_NAME = re.compile(
    r"\b(?:" + "|".join(re.escape(word).replace(r"\ ", r"\s+") for word in NON_INGREDIENT_KEYWORDS) + r")\b",
    re.IGNORECASE
)
MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 50


def extract_ingredient_section(html: str) -> str:
    """
    Plain-text ingredient section of a page.

    Script, style, head and noscript blocks are removed before the text is
    taken. When an ingredients heading exists the result runs from it to the
    next directions heading; otherwise the whole page text is returned.
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(STRIPPED_TAGS):
        tag.decompose()

    lines = [re.sub(r"\s+", " ", line).strip() for line in soup.get_text("\n").splitlines()]
    lines = [line for line in lines if line]

    start = next((i for i, line in enumerate(lines) if INGREDIENTS_HEADING.match(line)), None)
    if start is None:
        return "\n".join(lines)

    end = next(
        (i for i in range(start + 1, len(lines)) if DIRECTIONS_HEADING.match(lines[i])),
        len(lines)
    )
    return "\n".join(lines[start + 1:end])


def has_sub_sections(section: str) -> bool:
    """Multi-component recipes use 'For the sauce' style sub-headings"""
    return SUB_SECTION_PATTERN.search(section or "") is not None


def _join_plus_continuations(lines: Iterable[str]) -> List[str]:
    joined: List[str] = []
    for line in lines:
        if joined and PLUS_CONTINUATION.match(line):
            joined[-1] = f"{joined[-1]} {line}"
        else:
            joined.append(line)
    return joined


def quick_candidate_lines(section: str) -> List[str]:
    """Section lines that the line classifier accepts as ingredient candidates"""
    lines = [line.strip() for line in (section or "").splitlines()]
    lines = [line for line in lines if line and not SUB_HEADING_LINE.match(line)]
    return [line for line in _join_plus_continuations(lines) if is_ingredient_candidate(line)]


def parse_lines(lines: Iterable[str]) -> List[Ingredient]:
    ingredients = []
    for line in lines:
        ingredient = parse_ingredient_from_string(line)
        if ingredient is not None:
            ingredients.append(ingredient)
    return ingredients


def ingredient_key(ingredient: Ingredient) -> str:
    return f"{ingredient.name.lower()}|{ingredient.unit.lower()}|{ingredient.amount:.4f}"


def merge_name(name: str) -> str:
    """Name form used when deciding whether two parses describe the same item"""
    return re.sub(r"\bgarlic\s+cloves?\b", "garlic", name.lower().strip())


def merge_ingredients(primary: List[Ingredient], extra: Optional[List[Ingredient]]) -> List[Ingredient]:
    """
    Add items from extra that primary does not already cover.

    An extra item is skipped when its merge name or its name|unit|amount key
    is already present in primary.
    """
    merged = list(primary)
    if not extra:
        return merged
    names = {merge_name(ingredient.name) for ingredient in merged}
    keys = {ingredient_key(ingredient) for ingredient in merged}
    for ingredient in extra:
        if merge_name(ingredient.name) in names or ingredient_key(ingredient) in keys:
            continue
        merged.append(ingredient)
        names.add(merge_name(ingredient.name))
        keys.add(ingredient_key(ingredient))
    return merged


def measured_count(ingredients: List[Ingredient]) -> int:
    return sum(1 for ingredient in ingredients if ingredient.unit or ingredient.amount > 0)


def _size_prefix(text: str) -> str:
    """'14.5 oz' -> '14.5-ounce'; empty when the text carries no size"""
    match = SIZE_TEXT.search(text or "")
    if not match:
        return ""
    word = match.group(2).lower()
    word = "inch" if word.startswith("inch") else CONTAINER_SIZE_WORDS[word]
    return f"{match.group(1)}-{word}"


def _shopping_name(raw_name: str) -> Optional[str]:
    """Normalized name, or None when the text reads as a direction or page furniture"""
    if NON_INGREDIENT_NAME.search(raw_name):
        return None
    name = normalize_name(raw_name)
    if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH or NON_INGREDIENT_NAME.search(name):
        return None
    return name


def _category_for(name: str, unit: str) -> GroceryCategory:
    container = unit.split(" ")[-1] if unit else ""
    if re.sub(r"s$", "", container) in SHELF_STABLE_CONTAINERS:
        return GroceryCategory.pantry
    return categorize(name)


def _parse_measured_line(match: re.Match) -> Optional[Ingredient]:
    amount = parse_amount(match.group(1))
    unit = standardize_unit(match.group(3), amount)
    amount, unit, remainder = combine_plus_measurement(amount, unit, match.group(4))
    name = _shopping_name(remainder)
    if name is None:
        return None
    size = _size_prefix(match.group(2))
    if size:
        unit = f"{size} {unit}"
    return Ingredient(name=name, amount=amount, unit=unit, category=_category_for(name, unit))


def _parse_count_line(match: re.Match) -> Optional[Ingredient]:
    amount = parse_amount(match.group(1))
    remainder = match.group(2)
    size = ""
    sized = LEADING_SIZE.match(remainder)
    if sized:
        size, remainder = _size_prefix(sized.group(1)), sized.group(2)

    unit = ""
    container, rest = split_leading_container(remainder)
    if container:
        unit = standardize_unit(container, amount)
        remainder = rest
        if size:
            unit = f"{size} {unit}"

    name = _shopping_name(remainder)
    if name is None:
        return None
    return Ingredient(name=name, amount=amount, unit=unit, category=_category_for(name, unit))


def parse_ingredients_with_regex(text: str) -> Optional[List[Ingredient]]:
    """
    Pattern-based pass over a whole ingredient section.

    Each line is tried against citrus and herb forms, then a measured
    pattern (amount, optional size, unit, name) and finally a count pattern
    (amount, name). Lines are kept or dropped on their name alone, so a
    trailing note such as "soaked for 30 minutes" does not cost an
    ingredient. Exact duplicates are dropped. Returns None when nothing
    parses.
    """
    ingredients: List[Ingredient] = []
    seen = set()
    for raw_line in (text or "").splitlines():
        line = clean_line(raw_line)
        if not line:
            continue

        ingredient = parse_special_line(line)
        if ingredient is None:
            measured = MEASURED_LINE.match(line)
            if measured:
                ingredient = _parse_measured_line(measured)
            else:
                counted = COUNT_LINE.match(line)
                ingredient = _parse_count_line(counted) if counted else None
        if ingredient is None:
            continue

        ingredient = round_produce_amount(ingredient)
        key = ingredient_key(ingredient)
        if key in seen:
            continue
        seen.add(key)
        ingredients.append(ingredient)

    if not ingredients:
        logger.debug("Regex section parse found no ingredients")
        return None
    logger.info(f"Regex section parse found {len(ingredients)} ingredients")
    return ingredients
