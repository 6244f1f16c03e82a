"""
Ingredient name normalization.

normalize_name runs a raw name through NAME_TRANSFORMS, an ordered tuple of
small pure str -> str functions. Each transform can be tested on its own and
the order is part of the behavior: canonical specials short-circuit to a
fixed value that the later transforms leave untouched.
"""

import html
import re
from typing import Tuple

from ..models.recipe import GroceryCategory
from .categorizer import categorize
from .tables import (
    BRAND_PATTERNS,
    BARE_DESCRIPTORS,
    CITRUS_FRUITS,
    EDGE_DESCRIPTOR_WORDS,
    INTERIOR_LOWERCASE_WORDS,
    PREPARATION_ADVERBS,
    PREPARATION_VERBS,
    PRESERVED_WORDS,
    PURE_NOTE_PATTERN,
)

PEPPER_SYNONYMS = {
    "pepper",
    "ground pepper",
    "freshly ground pepper",
    "black pepper",
    "ground black pepper",
    "freshly ground black pepper",
    "cracked black pepper",
    "freshly cracked black pepper",
}

SALT_PATTERN = re.compile(
    r"^(?:(?:fine|coarse|iodized|non-iodized|flaky|flake|maldon|fleur\s+de\s+sel|"
    r"sea|kosher|table|pink|himalayan)\s+)*salt$"
)

NDUJA_PATTERN = re.compile(r"^'?\s*nduja\b", re.IGNORECASE)

GARLIC_CLOVES_PATTERN = re.compile(
    r"\b(?:garlic\s+cloves?|cloves?\s+(?:of\s+)?garlic)\b", re.IGNORECASE
)

BONE_SKIN = r"(?:boneless|bone-in|skinless|skin-on)"

HERB_ALTERNATIVES = (
    r"(?:flat-leaf\s+parsley|basil|parsley|cilantro|coriander|mint|sage|thyme|rosemary|"
    r"dill|tarragon|oregano|chives|scallions?|green\s+onions?)"
)

CONTAINER_PREFIX = (
    r"(?:knob|knobs|piece|pieces|slice|slices|clove|cloves|head|heads|can|cans|jar|jars|"
    r"bottle|bottles|package|packages|bag|bags|bunch|bunches|container|containers)"
)

LEADING_CONTAINER_PATTERN = re.compile(
    rf"^\s*(?:(?:a|an|one)\s+)?({CONTAINER_PREFIX})\s+(?:of\s+)?(.+)$", re.IGNORECASE
)

_PREP_VERB_ALT = "|".join(re.escape(verb).replace(r"\ ", r"\s+") for verb in PREPARATION_VERBS)
_PREP_ADVERB_ALT = "|".join(re.escape(adverb).replace(r"\ ", r"\s+") for adverb in PREPARATION_ADVERBS)

PREPARATION_PATTERN = re.compile(
    rf"\b(?:(?:{_PREP_ADVERB_ALT})\s+)?({_PREP_VERB_ALT})\b", re.IGNORECASE
)

CITRUS_SOURCE_NOTE = re.compile(
    r"^from\s+(?:about\s+)?\d+(?:[/.\s]\d+)?\s+(?:(?:small|medium|large|extra\s*large)\s+)?"
    rf"(?:{'|'.join(CITRUS_FRUITS)})s?\b",
    re.IGNORECASE
)


def _tidy(name: str) -> str:
    name = re.sub(r"\s{2,}", " ", name)
    return re.sub(r"^[\s,;:–-]+|[\s,;:–-]+$", "", name).strip()


def first_top_level_comma(text: str) -> int:
    """Index of the first comma outside parentheses, or -1"""
    depth = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        elif char == "," and depth == 0:
            return index
    return -1


def decode_entities(name: str) -> str:
    """HTML entities, curly quotes and non-breaking spaces"""
    name = html.unescape(name).replace("\xa0", " ")
    return name.replace("’", "'").replace("‘", "'").replace("“", '"').replace("”", '"').strip()


def canonicalize_specials(name: str) -> str:
    if NDUJA_PATTERN.match(name):
        return "'Nduja"
    if "crushed red pepper" in name.lower():
        return "red pepper flakes"
    return GARLIC_CLOVES_PATTERN.sub("garlic", name)


def strip_brands(name: str) -> str:
    for pattern in BRAND_PATTERNS:
        name = re.sub(pattern, "", name, flags=re.IGNORECASE)
    return _tidy(name)


def canonicalize_pepper_and_salt(name: str) -> str:
    """Pepper synonyms become black pepper; salt varieties collapse to salt"""
    lowered = re.sub(r"\s*;.*$", "", name.lower())
    head = lowered.split(",")[0].strip()
    if head in PEPPER_SYNONYMS:
        return "black pepper"
    head = re.sub(r"\s*\([^)]*\)", "", strip_brands(head)).strip()
    if SALT_PATTERN.match(head) and "pepper" not in lowered:
        return "salt"
    return name


def order_bone_skin(name: str) -> str:
    """Keep boneless/skinless descriptors together and in front of the noun"""
    name = re.sub(r"\bbone\s+in\b", "bone-in", name, flags=re.IGNORECASE)
    name = re.sub(r"\bskin\s+on\b", "skin-on", name, flags=re.IGNORECASE)
    name = re.sub(
        rf"\b({BONE_SKIN})\s*,\s*(?={BONE_SKIN}\b)", r"\1 ", name, flags=re.IGNORECASE
    )
    moved = re.match(
        rf"^\s*([^,]+?)\s*,\s*({BONE_SKIN}(?:\s+{BONE_SKIN})?)\s*$", name, flags=re.IGNORECASE
    )
    if moved:
        name = f"{moved.group(2)} {moved.group(1)}"
    return name


def strip_parentheticals(name: str) -> str:
    name = re.sub(r"\s*\([^)]*\)", " ", name)
    name = re.sub(r"\s*\([^)]*$", " ", name)
    return _tidy(name)


def resolve_examples(name: str) -> str:
    """'cheese, such as cheddar' names what to buy: cheddar"""
    example = re.search(r"\b(?:such\s+as\b|like\b|e\.g\.)\s*([^,;]+)", name, flags=re.IGNORECASE)
    if not example:
        return name
    chosen = re.sub(r"^(?:a|an)\s+", "", example.group(1).strip(), flags=re.IGNORECASE)
    return chosen or name


def _is_note_clause(clause: str) -> bool:
    lowered = clause.lower().strip()
    if not lowered:
        return True
    if re.match(PURE_NOTE_PATTERN, lowered):
        return True
    if CITRUS_SOURCE_NOTE.match(lowered):
        return True
    first_word = lowered.split()[0]
    if first_word in PREPARATION_ADVERBS or PREPARATION_PATTERN.match(lowered):
        return True
    return first_word in ("cut", "torn", "at", "see", "about", "preferably", "plus", "if")


def resolve_comma_clause(name: str) -> str:
    """Pick the clause that names the product when a name carries a comma"""
    for _ in range(3):
        index = first_top_level_comma(name)
        if index < 0:
            return name
        before = name[:index].strip()
        after = name[index + 1:].strip()

        if _is_note_clause(after) or not before:
            chosen = before or after
        elif before.lower() in BARE_DESCRIPTORS:
            chosen = after
        elif after.lower() in BARE_DESCRIPTORS:
            chosen = before
        else:
            before_category = categorize(before)
            after_category = categorize(after)
            prefers_after = (
                (after_category != GroceryCategory.pantry and before_category == GroceryCategory.pantry)
                or (after_category == GroceryCategory.produce and before_category != GroceryCategory.produce)
            )
            chosen = after if prefers_after else before
        name = chosen
    return name


def strip_preparation(name: str) -> str:
    """Preparation verbs (with their adverbs) go wherever they appear"""
    def _drop(match: re.Match) -> str:
        return match.group(0) if match.group(1).lower() in PRESERVED_WORDS else " "

    name = PREPARATION_PATTERN.sub(_drop, name)
    name = re.sub(rf"^\s*(?:{_PREP_ADVERB_ALT})\b\s*", "", name, flags=re.IGNORECASE)
    name = re.sub(r"^(?:and|or|then)\s+|\s+(?:and|or|then)$", "", _tidy(name), flags=re.IGNORECASE)
    return _tidy(name)


def strip_cut_tails(name: str) -> str:
    name = re.sub(
        r"\b(?:(?:torn|cut|sliced)\s+)?into\s+[^,;]*?(?:pieces|strips|cubes|chunks|wedges|rounds|slices|halves)\b",
        "", name, flags=re.IGNORECASE
    )
    name = re.sub(r"\bhorizontally\s+to\s+create\s+\d+\s+pieces\b", "", name, flags=re.IGNORECASE)
    return _tidy(name)


def drop_quantity_alternatives(name: str) -> str:
    """'chicken breasts or 8 cutlets' drops the quantified alternative"""
    return _tidy(re.sub(
        r"\s+or\s+(?:about\s+)?(?:\d+(?:[/.\s]\d+)?|\d+\s*-\s*\d+|one|two|three|four|five|six|"
        r"seven|eight|nine|ten|a|an)\b.*$",
        "", name, flags=re.IGNORECASE
    ))


def strip_container_words(name: str) -> str:
    _, remainder = split_leading_container(name)
    return remainder


def normalize_herb_parts(name: str) -> str:
    """parsley leaves and tender stems -> parsley"""
    name = re.sub(r"\bflat[ -]leaf\s+parsley\s+leaves?\b", "flat-leaf parsley", name, flags=re.IGNORECASE)
    name = re.sub(rf"\b({HERB_ALTERNATIVES})\s+leaves?\s+and\s+(?:tender\s+)?stems\b", r"\1", name, flags=re.IGNORECASE)
    name = re.sub(rf"\b({HERB_ALTERNATIVES})\s+and\s+(?:tender\s+)?stems\b", r"\1", name, flags=re.IGNORECASE)
    name = re.sub(rf"\b({HERB_ALTERNATIVES})\s+(?:leaves?|sprigs?|tops)\b", r"\1", name, flags=re.IGNORECASE)
    return _tidy(name)


def front_fresh_frozen(name: str) -> str:
    """'basil fresh' and 'fresh fresh basil' both become 'fresh basil'"""
    for word in ("fresh", "frozen"):
        if re.search(rf"\b{word}\b", name, flags=re.IGNORECASE):
            rest = _tidy(re.sub(rf"\b{word}\b", "", name, flags=re.IGNORECASE))
            name = f"{word} {rest}" if rest else word
    return name


def strip_quality_descriptors(name: str) -> str:
    return _tidy(re.sub(
        r"\b(?:best[-\s]*quality|high[-\s]*quality|good[-\s]*quality|peak[-\s]*season|"
        r"in[-\s]*season|summer|ripe|(?:loosely|lightly|tightly|firmly)\s+packed)\b",
        "", name, flags=re.IGNORECASE
    ))


def strip_trailing_notes(name: str) -> str:
    name = re.sub(
        r"\s*[,;:]\s*(?:divided|for\s+serving|for\s+garnish|for\s+the\s+.+|to\s+taste|as\s+needed|"
        r"plus\s+more.*|plus\s+extra.*|or\s+.+|optional)\s*$",
        "", name, flags=re.IGNORECASE
    )
    name = re.sub(r"\s+(?:to\s+taste|for\s+serving|for\s+garnish|as\s+needed|optional)\s*$", "", name, flags=re.IGNORECASE)
    return _tidy(name)


def strip_edge_descriptors(name: str) -> str:
    """Descriptor words at either end of the name, repeated until stable"""
    name = re.sub(r"^[a-z]\s+(?=[a-z])", "", name, flags=re.IGNORECASE)
    changed = True
    while changed and name:
        changed = False
        words = name.split()
        if len(words) > 1 and words[0].lower() in EDGE_DESCRIPTOR_WORDS:
            name = " ".join(words[1:])
            changed = True
            continue
        if len(words) > 1 and words[-1].lower() in EDGE_DESCRIPTOR_WORDS:
            name = " ".join(words[:-1])
            changed = True
    name = re.sub(r"\s+\b(?:thin|thick|fine|coarse|finely|coarsely|roughly)\s*$", "", name, flags=re.IGNORECASE)
    return _tidy(name)


def lowercase_conjunctions(name: str) -> str:
    words = name.split(" ")
    return " ".join(
        word.lower() if index > 0 and word.lower() in INTERIOR_LOWERCASE_WORDS else word
        for index, word in enumerate(words)
    )


NAME_TRANSFORMS = (
    decode_entities,
    canonicalize_specials,
    canonicalize_pepper_and_salt,
    order_bone_skin,
    strip_parentheticals,
    strip_brands,
    resolve_examples,
    resolve_comma_clause,
    strip_preparation,
    strip_cut_tails,
    drop_quantity_alternatives,
    strip_container_words,
    normalize_herb_parts,
    front_fresh_frozen,
    strip_quality_descriptors,
    strip_trailing_notes,
    strip_edge_descriptors,
    lowercase_conjunctions,
)


def _fallback_token(raw: str) -> str:
    tokens = re.findall(r"[A-Za-z][A-Za-z\-]*", raw or "")
    if tokens and tokens[-1].lower() not in PREPARATION_VERBS:
        return tokens[-1]
    return ""


def normalize_name(raw: str) -> str:
    """Reduce a raw ingredient name to the noun phrase a shopper buys"""
    if not raw:
        return ""
    name = raw
    for transform in NAME_TRANSFORMS:
        name = _tidy(transform(name))
        if not name:
            break
    if not name:
        name = _fallback_token(decode_entities(raw)) or raw.strip()
    return name


def split_leading_container(name: str) -> Tuple[str, str]:
    """
    Separate a leading container word from a name.

    "can of chickpeas" -> ("can", "chickpeas"); names without a container
    come back unchanged with an empty container.
    """
    match = LEADING_CONTAINER_PATTERN.match(name or "")
    if not match:
        return "", name
    return match.group(1).lower(), _tidy(match.group(2))
