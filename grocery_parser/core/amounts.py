"""
Amount and unit helpers shared by every parsing strategy.
"""

import re
from typing import Tuple

from .tables import UNIT_SYNONYMS, SINGULAR_UNITS, UNICODE_FRACTIONS, NUMBER_WORDS

# Amount token: "2", "2.5", "1/2", "1 1/2", optionally a range "2-3" / "2 to 3"
AMOUNT_PATTERN = r"\d+(?:\.\d+)?(?:\s+\d+/\d+|/\d+)?(?:\s*(?:-|–|to)\s*\d+(?:\.\d+)?(?:/\d+)?)?"

_GLYPH_CLASS = "".join(UNICODE_FRACTIONS.keys())


def normalize_fractions(text: str) -> str:
    """Replace unicode vulgar fractions with ASCII n/d, splitting glyphs glued to digits"""
    if not text:
        return text
    text = text.replace("⁄", "/")  # fraction slash
    # "1½" -> "1 ½"
    text = re.sub(rf"(\d)([{_GLYPH_CLASS}])", r"\1 \2", text)
    for glyph, ascii_fraction in UNICODE_FRACTIONS.items():
        text = text.replace(glyph, ascii_fraction)
    return text


def parse_amount(text: str, default: float = 1.0) -> float:
    """
    Parse an amount token into a float.

    Order: exact "a/b", mixed "a b/c", plain number, lower bound of a range,
    spelled-out count. Anything else returns the default.
    """
    if text is None:
        return default
    value = normalize_fractions(str(text)).strip().lower()
    if not value:
        return default

    fraction = re.fullmatch(r"(\d+)\s*/\s*(\d+)", value)
    if fraction:
        numerator, denominator = int(fraction.group(1)), int(fraction.group(2))
        return numerator / denominator if denominator else default

    mixed = re.fullmatch(r"(\d+)\s+(\d+)\s*/\s*(\d+)", value)
    if mixed:
        whole, numerator, denominator = (int(g) for g in mixed.groups())
        return whole + numerator / denominator if denominator else float(whole)

    try:
        return float(value)
    except ValueError:
        pass

    range_match = re.fullmatch(r"(.+?)\s*(?:-|–|to)\s*[\d./ ]+", value)
    if range_match and range_match.group(1) != value:
        return parse_amount(range_match.group(1), default)

    if value in NUMBER_WORDS:
        return float(NUMBER_WORDS[value])

    return default


def standardize_unit(unit: str, amount: float) -> str:
    """Map a unit synonym to its canonical form, singular when amount == 1"""
    if not unit:
        return ""
    key = re.sub(r"\s+", " ", unit.strip().lower().rstrip("."))
    canonical = UNIT_SYNONYMS.get(key, key)
    if amount == 1:
        canonical = SINGULAR_UNITS.get(canonical, canonical)
    return canonical


def convert_to_standard_units(amount: float, unit: str) -> Tuple[float, str]:
    """Scale large metric quantities up (grams -> kilograms, milliliters -> liters)"""
    lowered = unit.lower()
    if lowered in ("grams", "gram", "g") and amount >= 1000:
        return round(amount / 1000, 3), "kilograms"
    if lowered in ("milliliters", "milliliter", "ml") and amount >= 1000:
        return round(amount / 1000, 3), "liters"
    return amount, unit


TEASPOONS_PER_UNIT = {
    "teaspoons": 1.0, "teaspoon": 1.0,
    "tablespoons": 3.0, "tablespoon": 3.0,
    "cups": 48.0, "cup": 48.0,
}

PLUS_PATTERN = re.compile(
    rf"^(?:\+|plus)\s*({AMOUNT_PATTERN})\s*(cups?|tablespoons?|tbsps?|tbs|teaspoons?|tsps?)\.?(?![a-z])\s*",
    re.IGNORECASE
)


def combine_plus_measurement(amount: float, unit: str, remainder: str) -> Tuple[float, str, str]:
    """
    Fold "1/4 cup plus 2 tablespoons sugar" into a single measurement.

    remainder is the text after the first unit. Both parts are converted to
    teaspoons and the total is expressed in cups (>= 12 tsp), tablespoons
    (whole multiples of 3) or teaspoons.
    """
    match = PLUS_PATTERN.match(remainder.strip())
    if not match or unit not in TEASPOONS_PER_UNIT:
        return amount, unit, remainder

    extra_unit = standardize_unit(match.group(2), 2)
    total = amount * TEASPOONS_PER_UNIT[unit] + parse_amount(match.group(1)) * TEASPOONS_PER_UNIT[extra_unit]
    rest = remainder.strip()[match.end():]

    if total >= 12:
        combined, combined_unit = round(total / 48.0, 3), "cups"
    elif abs(total - round(total)) < 1e-6 and int(round(total)) % 3 == 0:
        combined, combined_unit = round(total / 3.0, 3), "tablespoons"
    else:
        combined, combined_unit = round(total, 3), "teaspoons"
    return combined, standardize_unit(combined_unit, combined), rest


def format_amount(amount: float) -> str:
    """Render an amount the way it would appear in recipe text"""
    if amount == int(amount):
        return str(int(amount))
    return f"{amount:g}"
