"""
Confidence scoring and content verification for LLM-derived ingredient lists.

Confidence is a heuristic over the list shape. Verification checks that each
ingredient can actually be found in the text the model was given, which is
how generated (rather than extracted) ingredients get caught.
"""

import re
from dataclasses import dataclass, field
from typing import List

from ..core.amounts import format_amount
from ..core.tables import COMMON_STAPLES
from ..models.recipe import Ingredient


def calculate_confidence(ingredients: List[Ingredient], validation_errors: List[str]) -> int:
    """
    Score an LLM result from 0 to 100.

    Args:
        ingredients: Ingredients that passed validation
        validation_errors: Messages for the ingredients that did not

    Returns:
        Confidence percentage
    """
    score = 100
    score -= 10 * len(validation_errors)

    count = len(ingredients)
    if count < 3:
        score -= 20
    if count > 50:
        score -= 30
    if 5 <= count <= 20:
        score += 10

    names = [ingredient.name.lower() for ingredient in ingredients]
    staples = sum(1 for staple in COMMON_STAPLES if any(staple in name for name in names))
    if staples >= 2:
        score += 5

    return max(0, min(100, score))


@dataclass
class VerificationReport:
    verified: List[str] = field(default_factory=list)
    unverified: List[str] = field(default_factory=list)
    score: int = 0
    notes: List[str] = field(default_factory=list)


def _significant_words(name: str) -> List[str]:
    return [word for word in re.findall(r"[a-z]+", name.lower()) if len(word) > 2]


def _exact_phrases(ingredient: Ingredient) -> List[str]:
    name = ingredient.name.lower()
    unit = ingredient.unit.lower()
    amount = format_amount(ingredient.amount)
    whole = str(int(ingredient.amount))
    phrases = [f"{name}, chopped", f"{name}, minced", f"{name}, diced"]
    if unit:
        phrases += [f"{whole} {unit} {name}", f"{amount} {unit} {name}"]
    phrases += [f"{whole} {name}", f"{amount} {name}"]
    return phrases


def _partial_match(ingredient: Ingredient, content: str) -> bool:
    if ingredient.name.lower() not in content:
        return False
    for word in _significant_words(ingredient.name):
        if re.search(rf"\b\d+\s*{re.escape(word)}\b", content):
            return True
    return False


def _fuzzy_match(ingredient: Ingredient, content: str) -> bool:
    words = _significant_words(ingredient.name)
    if not words:
        return False
    found = sum(1 for word in words if word in content)
    return found / len(words) >= 0.5


def verify_against_content(ingredients: List[Ingredient], content: str) -> VerificationReport:
    """
    Check every ingredient against the source text.

    An ingredient counts as verified on an exact phrase match, on a partial
    match (its name appears and one of its words directly follows a number),
    or when at least half of its significant words appear.
    """
    report = VerificationReport()
    if not ingredients:
        report.notes.append("No ingredients to verify")
        return report

    text = (content or "").lower()
    for ingredient in ingredients:
        if any(phrase in text for phrase in _exact_phrases(ingredient)):
            report.verified.append(ingredient.name)
        elif _partial_match(ingredient, text):
            report.verified.append(ingredient.name)
            report.notes.append(f"Partial match: {ingredient.name}")
        elif _fuzzy_match(ingredient, text):
            report.verified.append(ingredient.name)
            report.notes.append(f"Fuzzy match: {ingredient.name}")
        else:
            report.unverified.append(ingredient.name)
            report.notes.append(f"Not found in content: {ingredient.name}")

    report.score = len(report.verified) * 100 // len(ingredients)
    return report
