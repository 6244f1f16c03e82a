"""
Single ingredient line parser.

parse_ingredient_from_string walks an ordered list of rules and returns the
first one that recognises the line. Special cases (citrus, herbs, garlic,
sized containers, pinches, sized pieces) come before the generic measurement
and count rules; a line nothing recognises becomes a bare name.
"""

import logging
import re
from typing import Callable, List, Optional

from ..core.amounts import (
    AMOUNT_PATTERN,
    combine_plus_measurement,
    normalize_fractions,
    parse_amount,
    standardize_unit,
)
from ..core.categorizer import categorize
from ..core.line_classifier import is_instruction
from ..core.name_normalizer import normalize_name, split_leading_container
from ..core.tables import (
    CITRUS_FRUITS,
    COUNT_LIKE_UNITS,
    HERBS,
    NUMBER_WORDS,
    SEASONING_NAMES,
    UNIT_WORDS,
)
from ..models.recipe import FOR_SERVING, TO_TASTE, GroceryCategory, Ingredient

logger = logging.getLogger(__name__)

COUNT_WORDS = "|".join(word for word in NUMBER_WORDS)
AMOUNT = rf"(?:{AMOUNT_PATTERN}|(?:{COUNT_WORDS})\b)"
FRUIT = rf"(?:{'|'.join(CITRUS_FRUITS)})"
HERB = rf"(?:{'|'.join(HERBS)})"
SIZE = r"(?:extra[\s-]large|small|medium|large|xl)"
VOLUME_UNIT = r"(?:tablespoons?|tbsps?|tbs|teaspoons?|tsps?|cups?|ounces?|oz|milliliters?|ml|liters?|l)"
_UNIT_ALT = "|".join(re.escape(unit).replace(r"\ ", r"\s+") for unit in UNIT_WORDS)

JUICE_FROM_FRUIT = re.compile(
    rf"^({AMOUNT})\s*({VOLUME_UNIT})\.?\s+(?:fresh(?:ly)?\s+)?(?:squeezed\s+)?juice\s+from\s+"
    rf"(?:(?:about\s+)?{AMOUNT}\s+)?(?:whole\s+)?(?:{SIZE}\s+)?({FRUIT})",
    re.IGNORECASE
)
MEASURED_JUICE = re.compile(
    rf"^({AMOUNT})\s*({VOLUME_UNIT})\.?\s+(?:fresh(?:ly)?\s+)?(?:squeezed\s+)?({FRUIT})\s+juice\b",
    re.IGNORECASE
)
JUICE_OF_FRUIT = re.compile(
    rf"^(?:the\s+)?(?:fresh\s+)?juice\s+(?:of|from)\s+({AMOUNT})\s+(?:whole\s+)?(?:{SIZE}\s+)?({FRUIT})",
    re.IGNORECASE
)
MEASURED_ZEST = re.compile(
    rf"^({AMOUNT})\s*({VOLUME_UNIT})\.?\s+(?:(?:finely\s+)?grated\s+)?(?:fresh\s+)?({FRUIT})\s+zest\b",
    re.IGNORECASE
)
ZEST_OF_FRUIT = re.compile(
    rf"^(?:(?:finely|freshly)\s+)?(?:grated\s+)?zest\s+(?:of|from)\s+({AMOUNT})\s+(?:whole\s+)?(?:{SIZE}\s+)?({FRUIT})",
    re.IGNORECASE
)
BARE_ZEST = re.compile(rf"^(?:(?:finely\s+)?grated\s+)?({FRUIT})\s+zest\b", re.IGNORECASE)

HERB_COUNT_PATTERNS = [
    re.compile(
        rf"^(?:fresh\s+)?({AMOUNT})\s+(?:fresh\s+)?(?:{SIZE}\s+)?({HERB})\s+(leaves?|leaf|sprigs?)\b\s*(?:,.*)?$",
        re.IGNORECASE
    ),
    re.compile(
        rf"^(?:fresh\s+)?({AMOUNT})\s+(?:{SIZE}\s+)?(leaves?|leaf|sprigs?)\s+(?:of\s+)?(?:fresh\s+)?({HERB})\b\s*(?:,.*)?$",
        re.IGNORECASE
    ),
]

GARLIC_PATTERN = re.compile(
    rf"^({AMOUNT})\s+(?:({SIZE})\s+)?(?:fresh\s+)?"
    rf"(?:garlic\s+(?:({SIZE})\s+)?cloves?|cloves?\s+(?:of\s+)?(?:fresh\s+)?garlic)\b",
    re.IGNORECASE
)

SIZED_CONTAINER_PATTERN = re.compile(
    rf"^({AMOUNT})?\s*\(\s*(\d+(?:\.\d+)?)\s*-?\s*(oz|ounces?|g|grams?|ml|milliliters?|lbs?|pounds?)\.?\s*\)\s*"
    r"(cans?|jars?|bottles?|packages?|containers?|bags?|box(?:es)?|cartons?)\s+(?:of\s+)?(.+)$",
    re.IGNORECASE
)
CONTAINER_SIZE_WORDS = {
    "oz": "ounce", "ounce": "ounce", "ounces": "ounce",
    "g": "gram", "gram": "gram", "grams": "gram",
    "ml": "milliliter", "milliliter": "milliliter", "milliliters": "milliliter",
    "lb": "pound", "lbs": "pound", "pound": "pound", "pounds": "pound",
}
SHELF_STABLE_CONTAINERS = {"can", "jar", "bottle", "box", "carton"}
CONTAINER_PLURALS = {"box": "boxes"}

PINCH_PATTERN = re.compile(
    rf"^(?:({AMOUNT})\s+)?(?:{SIZE}\s+)?(pinch(?:es)?|dash(?:es)?)\s+(?:of\s+)?(.+)$",
    re.IGNORECASE
)

SIZED_PIECE_PATTERN = re.compile(
    rf"^(?:({AMOUNT})\s*)?\(?\s*(\d+(?:[/.]\d+)?)\s*-?\s*inch(?:es)?\s*\)?\s+(pieces?|knobs?|chunks?)\s+(?:of\s+)?(.+)$",
    re.IGNORECASE
)

MEASUREMENT_RULE_PATTERN = re.compile(
    rf"^({AMOUNT})\s*(?:\([^)]*\)\s*)?({_UNIT_ALT})\.?(?![a-z])\s*(?:\([^)]*\)\s*)?(?:of\s+)?(.*)$",
    re.IGNORECASE
)

COUNT_RULE_PATTERN = re.compile(rf"^({AMOUNT})\s+(.+)$", re.IGNORECASE)

LEADING_ENUMERATOR = re.compile(
    r"^\d+\s+(?=(?:thinly|finely|roughly|coarsely|fresh(?:ly)?|minced|sliced|chopped|diced|"
    r"grated|shaved|torn|rinsed|drained|peeled|zested)\b)",
    re.IGNORECASE
)

BULLET_PREFIX = re.compile(r"^[\s•▢◦▪●·*\-–]+")


def _fruit_name(fruit: str, suffix: str) -> str:
    return f"{fruit.lower().capitalize()} {suffix}"


def _fruit_unit(fruit: str, amount: float) -> str:
    fruit = fruit.lower()
    return fruit if amount == 1 else f"{fruit}s"


def _citrus_rule(text: str) -> Optional[Ingredient]:
    for pattern in (JUICE_FROM_FRUIT, MEASURED_JUICE):
        match = pattern.match(text)
        if match:
            amount = parse_amount(match.group(1))
            return Ingredient(
                name=_fruit_name(match.group(3), "Juice"),
                amount=amount,
                unit=standardize_unit(match.group(2), amount),
                category=GroceryCategory.produce
            )

    match = JUICE_OF_FRUIT.match(text)
    if match:
        amount = parse_amount(match.group(1))
        return Ingredient(
            name=_fruit_name(match.group(2), "Juice"),
            amount=amount,
            unit=_fruit_unit(match.group(2), amount),
            category=GroceryCategory.produce
        )

    match = MEASURED_ZEST.match(text)
    if match:
        amount = parse_amount(match.group(1))
        return Ingredient(
            name=_fruit_name(match.group(3), "Zest"),
            amount=amount,
            unit=standardize_unit(match.group(2), amount),
            category=GroceryCategory.produce
        )

    match = ZEST_OF_FRUIT.match(text)
    if match:
        amount = parse_amount(match.group(1))
        return Ingredient(
            name=_fruit_name(match.group(2), "Zest"),
            amount=amount,
            unit=_fruit_unit(match.group(2), amount),
            category=GroceryCategory.produce
        )

    match = BARE_ZEST.match(text)
    if match:
        return Ingredient(
            name=_fruit_name(match.group(1), "Zest"),
            amount=0.0,
            unit="",
            category=GroceryCategory.produce
        )
    return None


def _herb_rule(text: str) -> Optional[Ingredient]:
    first, second = HERB_COUNT_PATTERNS
    match = first.match(text)
    if match:
        amount_text, herb, part = match.group(1), match.group(2), match.group(3)
    else:
        match = second.match(text)
        if not match:
            return None
        amount_text, part, herb = match.group(1), match.group(2), match.group(3)

    amount = parse_amount(amount_text, default=0.0)
    if amount <= 0:
        return None
    unit = "sprigs" if part.lower().startswith("sprig") else "leaves"
    return Ingredient(
        name=herb.lower(),
        amount=amount,
        unit=standardize_unit(unit, amount),
        category=GroceryCategory.produce
    )


def _garlic_rule(text: str) -> Optional[Ingredient]:
    match = GARLIC_PATTERN.match(text)
    if not match:
        return None
    amount = parse_amount(match.group(1))
    size = (match.group(2) or match.group(3) or "").lower()
    if size:
        size = standardize_unit(size, amount)
    cloves = standardize_unit("cloves", amount)
    return Ingredient(
        name="garlic",
        amount=amount,
        unit=f"{size} {cloves}" if size else cloves,
        category=GroceryCategory.produce
    )


def _sized_container_rule(text: str) -> Optional[Ingredient]:
    match = SIZED_CONTAINER_PATTERN.match(text)
    if not match:
        return None
    amount = parse_amount(match.group(1)) if match.group(1) else 1.0
    size_unit = CONTAINER_SIZE_WORDS[match.group(3).lower()]
    container = match.group(4).lower()
    singular = "box" if container == "boxes" else re.sub(r"s$", "", container)
    container_word = singular if amount == 1 else CONTAINER_PLURALS.get(singular, f"{singular}s")
    name = normalize_name(match.group(5))
    category = GroceryCategory.pantry if singular in SHELF_STABLE_CONTAINERS else categorize(name)
    return Ingredient(
        name=name,
        amount=amount,
        unit=f"{match.group(2)}-{size_unit} {container_word}",
        category=category
    )


def _pinch_rule(text: str) -> Optional[Ingredient]:
    match = PINCH_PATTERN.match(text)
    if not match:
        return None
    amount = parse_amount(match.group(1)) if match.group(1) else 1.0
    name = normalize_name(match.group(3))
    return Ingredient(
        name=name,
        amount=amount,
        unit=standardize_unit(match.group(2), amount),
        category=categorize(name)
    )


def _sized_piece_rule(text: str) -> Optional[Ingredient]:
    match = SIZED_PIECE_PATTERN.match(text)
    if not match:
        return None
    amount = parse_amount(match.group(1)) if match.group(1) else 1.0
    piece = "pieces" if amount > 1 else "piece"
    name = normalize_name(match.group(4))
    return Ingredient(
        name=name,
        amount=amount,
        unit=f"{match.group(2)}-inch {piece}",
        category=categorize(name)
    )


def _measurement_rule(text: str) -> Optional[Ingredient]:
    match = MEASUREMENT_RULE_PATTERN.match(text)
    if not match:
        return None
    amount = parse_amount(match.group(1))
    unit = standardize_unit(match.group(2), amount)
    remainder = match.group(3)
    amount, unit, remainder = combine_plus_measurement(amount, unit, remainder)
    name = normalize_name(remainder)
    if not re.search(r"[a-zA-Z]", name):
        return None
    return Ingredient(name=name, amount=amount, unit=unit, category=categorize(name))


def _count_rule(text: str) -> Optional[Ingredient]:
    match = COUNT_RULE_PATTERN.match(text)
    if not match:
        return None
    amount = parse_amount(match.group(1))
    remainder = match.group(2)
    unit = ""
    container, rest = split_leading_container(remainder)
    if container:
        unit = standardize_unit(container, amount)
        remainder = rest
    name = normalize_name(remainder)
    if not re.search(r"[a-zA-Z]", name):
        return None
    return Ingredient(name=name, amount=amount, unit=unit, category=categorize(name))


def _bare_name_rule(text: str) -> Optional[Ingredient]:
    name = normalize_name(text)
    if not re.search(r"[a-zA-Z]", name):
        return None
    lowered = text.lower()
    if name.lower() in SEASONING_NAMES or "to taste" in lowered:
        return Ingredient(name=name, amount=0.0, unit=TO_TASTE, category=categorize(name))
    if re.search(r"\bfor\s+(?:serving|garnish)\b", lowered):
        return Ingredient(name=name, amount=0.0, unit=FOR_SERVING, category=categorize(name))
    return Ingredient(name=name, amount=1.0, unit="", category=categorize(name))


def parse_special_line(text: str) -> Optional[Ingredient]:
    """Citrus juice/zest and herb-count lines, which generic patterns misread"""
    return _citrus_rule(text) or _herb_rule(text)


LINE_RULES: List[Callable[[str], Optional[Ingredient]]] = [
    _citrus_rule,
    _herb_rule,
    _garlic_rule,
    _sized_container_rule,
    _pinch_rule,
    _sized_piece_rule,
    _measurement_rule,
    _count_rule,
    _bare_name_rule,
]


def round_produce_amount(ingredient: Ingredient) -> Ingredient:
    """Fractional counts of produce round up to one whole item"""
    if (
        ingredient.category == GroceryCategory.produce
        and ingredient.unit.lower() in COUNT_LIKE_UNITS
        and 0 < ingredient.amount < 1
    ):
        return ingredient.model_copy(update={"amount": 1.0, "unit": standardize_unit(ingredient.unit, 1.0)})
    return ingredient


def clean_line(line: str) -> str:
    text = normalize_fractions(line or "")
    text = re.sub(r"\s+", " ", text)
    text = BULLET_PREFIX.sub("", text).strip()
    if not re.search(rf"\b(?:{_UNIT_ALT})\b", text, flags=re.IGNORECASE):
        text = LEADING_ENUMERATOR.sub("", text)
    return text


def parse_ingredient_from_string(line: str) -> Optional[Ingredient]:
    """
    Parse one ingredient line into an Ingredient.

    Returns None for empty lines and for lines that read as cooking
    instructions or timing notes.
    """
    text = clean_line(line)
    if not text or is_instruction(text):
        return None

    for rule in LINE_RULES:
        ingredient = rule(text)
        if ingredient is not None:
            return round_produce_amount(ingredient)

    logger.debug(f"No rule matched ingredient line: {line}")
    return None
