"""
Line classification: decides whether a raw text line is worth handing to the
ingredient parser. Every function here is pure.
"""

import re

from .tables import UNICODE_FRACTIONS

_GLYPHS = "".join(UNICODE_FRACTIONS.keys())

CSS_JS_TOKENS = [
    "display:", "position:", "width:", "height:", "margin:", "padding:", "border:",
    "background:", "color:", "font:", "font-size:", "text-align:", "overflow:",
    "z-index:", "opacity:", "visibility:", "transform:", "transition:", "animation:",
    "var(--", "!important", "@media", "@keyframes", "@import", "@font-face",
    "function(", "function ", "var(", "=>", "document.", "window.", "console.",
    "addeventlistener", "queryselector", "settimeout", "onetrust", "data-", "aria-",
    "gtag(", "{", "}",
]

NAVIGATION_PHRASES = [
    "jump to recipe", "print recipe", "save recipe", "rate this recipe", "pin it",
    "subscribe", "sign in", "sign up", "log in", "newsletter", "privacy policy",
    "cookie policy", "cookie settings", "cookie preferences", "accept cookies", "we use cookies",
    "advertisement", "skip to content", "all rights reserved",
    "share on", "follow us", "read more", "leave a comment", "terms of use",
]

INSTRUCTION_PHRASES = [
    "set aside", "until ", "over medium", "over high", "over low", "; cook",
    "; stir", "preheat", "bring to a boil", "reduce heat", "let stand", "let rest",
    "serve immediately",
]

IMPERATIVE_VERB_PATTERN = re.compile(
    r"^(?:add|cook|stir|simmer|boil|bake|roast|grill|melt|transfer|return|"
    r"combine|whisk|mix|pour|place|heat|remove|season|serve|spread|fold|"
    r"arrange|bring|cover|drain|toss|sprinkle|top\s+(?:with|the|each|it|them|off)|repeat|let)\b",
    re.IGNORECASE
)

TIMING_PATTERN = re.compile(r"\b(?:about\s+)?\d+\s+(?:minutes?|seconds?|hours?|mins?)\b", re.IGNORECASE)

CSS_SIZE_PATTERN = re.compile(r"\d+(?:px|rem|em|vh|vw)\b", re.IGNORECASE)

MEASUREMENT_PATTERN = re.compile(
    r"(?:\d+(?:[./]\d+)?|[" + _GLYPHS + r"])\s*(?:\([^)]*\)\s*)?(?:-\s*)?"
    r"(?:cups?|tablespoons?|tbsps?|tbs|teaspoons?|tsps?|ounces?|oz|pounds?|lbs?|"
    r"grams?|g|kilograms?|kg|milliliters?|ml|liters?|l|pints?|quarts?|gallons?|"
    r"cloves?|slices?|pieces?|cans?|jars?|packages?|bunch(?:es)?|heads?|sprigs?|"
    r"stalks?|sticks?|pinch(?:es)?|dash(?:es)?|small|medium|large)(?![a-z])",
    re.IGNORECASE
)

LEADING_COUNT_PATTERN = re.compile(
    r"^\s*(?:one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve|a|an|\d|[" + _GLYPHS + r"])(?![a-z])",
    re.IGNORECASE
)

INGREDIENT_NOUNS = [
    "flour", "pasta", "rice", "bread", "milk", "cream", "butter", "cheese", "yogurt",
    "egg", "chicken", "beef", "pork", "fish", "salmon", "shrimp", "bacon", "sausage",
    "onion", "garlic", "tomato", "pepper", "carrot", "celery", "potato", "spinach",
    "lemon", "lime", "orange", "apple", "basil", "parsley", "cilantro", "thyme",
    "salt", "sugar", "honey", "oil", "vinegar", "water", "broth", "stock", "sauce",
    "ginger", "cumin", "paprika", "cinnamon", "scallion", "shallot", "mushroom",
]


def is_noise(line: str) -> bool:
    """Markup, script/style fragments and navigation boilerplate"""
    lowered = line.lower()
    if "<" in lowered or ">" in lowered or "http" in lowered or "www." in lowered:
        return True
    if any(token in lowered for token in CSS_JS_TOKENS):
        return True
    if CSS_SIZE_PATTERN.search(lowered):
        return True
    return any(phrase in lowered for phrase in NAVIGATION_PHRASES)


def is_instruction(line: str) -> bool:
    """Cooking directions and timing phrases"""
    stripped = line.strip()
    lowered = stripped.lower()
    if IMPERATIVE_VERB_PATTERN.match(stripped):
        return True
    if any(phrase in lowered for phrase in INSTRUCTION_PHRASES):
        return True
    if TIMING_PATTERN.search(lowered):
        return True
    # Prose paragraphs are directions or commentary, not ingredient lines
    return len(stripped) > 160 or stripped.count(". ") >= 2


def has_measurement(line: str) -> bool:
    return MEASUREMENT_PATTERN.search(line) is not None


def has_leading_count(line: str) -> bool:
    return LEADING_COUNT_PATTERN.match(line) is not None


def is_likely_ingredient(line: str) -> bool:
    """Curated ingredient noun together with a number"""
    lowered = line.lower()
    if not re.search(r"\d|[" + _GLYPHS + r"]", lowered):
        return False
    return any(re.search(rf"\b{noun}", lowered) for noun in INGREDIENT_NOUNS)


def is_ingredient_candidate(line: str) -> bool:
    """Accept a raw line as an ingredient candidate"""
    if not line or not line.strip():
        return False
    if is_noise(line) or is_instruction(line):
        return False
    return has_measurement(line) or has_leading_count(line) or is_likely_ingredient(line)
