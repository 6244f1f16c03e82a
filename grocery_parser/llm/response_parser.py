"""
Decoding and validation of LLM completions.

The model is asked for strict JSON, but completions still arrive wrapped in
code fences, double-escaped, or with bare fractions as amounts. The raw text
is repaired first, then every ingredient goes through the typed payload
schema and the domain rules below. Ingredients that fail are dropped and the
reason is kept as a validation error, which lowers the confidence score.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pydantic import ValidationError

from ..core.amounts import parse_amount, standardize_unit
from ..core.categorizer import adjust_category, contains_keyword
from ..core.tables import NON_INGREDIENT_NAME_WORDS, VALID_LLM_UNITS
from ..exceptions import LLMParsingError
from ..models.llm_models import LLMIngredientPayload, LLMRecipePayload
from ..models.recipe import FOR_SERVING, SENTINEL_UNITS, TO_TASTE, Ingredient
from ..parsers.sanitizer import sanitize_ingredients
from .scoring import VerificationReport, calculate_confidence, verify_against_content

logger = logging.getLogger(__name__)

MAX_AMOUNT = 1000
LOW_COUNT_THRESHOLD = 8

CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
BARE_FRACTION_AMOUNT = re.compile(r'("amount"\s*:\s*)(\d+\s+\d+/\d+|\d+/\d+)(?=\s*[,}])')


@dataclass
class LLMParseOutcome:
    recipe_name: Optional[str]
    ingredients: List[Ingredient] = field(default_factory=list)
    validation_errors: List[str] = field(default_factory=list)
    confidence: int = 0
    verification: VerificationReport = field(default_factory=VerificationReport)


def convert_fractions_to_decimals(text: str) -> str:
    """Rewrite `"amount": 1/2` and `"amount": 1 1/2` as JSON numbers"""
    return BARE_FRACTION_AMOUNT.sub(
        lambda match: f"{match.group(1)}{parse_amount(match.group(2), default=0.0):g}",
        text
    )


def clean_completion(content: str) -> str:
    """Strip fences and escaping around the JSON object in a completion"""
    text = CODE_FENCE.sub("", content or "").strip()

    start, end = text.find("{"), text.rfind("}")
    if start < 0 or end <= start:
        raise LLMParsingError("No JSON object found in completion")
    text = text[start:end + 1]

    text = text.replace("\\n", " ").replace("\\t", " ")
    if text.startswith('{\\"'):
        # Whole object arrived as an escaped string
        text = text.replace('\\"', '"')

    return convert_fractions_to_decimals(text)


def _sentinel_for(unit: str) -> Optional[str]:
    lowered = unit.strip().lower()
    if lowered == TO_TASTE.lower():
        return TO_TASTE
    if lowered == FOR_SERVING.lower():
        return FOR_SERVING
    return None


def _is_valid_unit(unit: str) -> bool:
    if unit in VALID_LLM_UNITS:
        return True
    # Size-qualified units such as "large cloves"
    return unit.split()[-1] in VALID_LLM_UNITS


def validate_llm_ingredient(payload: LLMIngredientPayload) -> Tuple[Optional[Ingredient], Optional[str]]:
    """
    Apply the domain rules to one decoded ingredient.

    Returns:
        (ingredient, None) when valid, otherwise (None, reason)
    """
    name = re.sub(r"\s+", " ", payload.name).strip()
    if len(name) < 2:
        return None, f"Ingredient name too short: '{name}'"
    lowered = name.lower()
    for word in NON_INGREDIENT_NAME_WORDS:
        if contains_keyword(lowered, word):
            return None, f"Not an ingredient: '{name}'"

    raw_unit = (payload.unit or "").strip()
    sentinel = _sentinel_for(raw_unit)
    if sentinel:
        amount, unit = 0.0, sentinel
    else:
        if payload.amount is None:
            amount = 1.0
        elif isinstance(payload.amount, str):
            amount = parse_amount(payload.amount, default=0.0)
        else:
            amount = float(payload.amount)

        if amount <= 0:
            if raw_unit:
                return None, f"Invalid amount {amount:g} for '{name}'"
            amount, unit = 0.0, ""
        else:
            unit = standardize_unit(raw_unit or "piece", amount)

    if amount > MAX_AMOUNT:
        return None, f"Amount {amount:g} for '{name}' exceeds {MAX_AMOUNT}"
    if unit not in SENTINEL_UNITS and unit and not _is_valid_unit(unit):
        return None, f"Unknown unit '{unit}' for '{name}'"

    category = adjust_category(name, payload.category)
    return Ingredient(name=name, amount=amount, unit=unit, category=category), None


def parse_llm_response(content: str, source_text: str) -> LLMParseOutcome:
    """
    Turn a completion into validated ingredients with quality scores.

    Args:
        content: Raw completion text
        source_text: Text the model was asked to parse, used for verification

    Returns:
        LLMParseOutcome with ingredients, validation errors, confidence and verification

    Raises:
        LLMParsingError: Completion holds no decodable JSON object
    """
    text = clean_completion(content)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LLMParsingError(f"Invalid JSON in completion: {e.msg} at position {e.pos}") from e
    if not isinstance(data, dict):
        raise LLMParsingError("Completion JSON is not an object")

    try:
        recipe = LLMRecipePayload.model_validate(data)
    except ValidationError as e:
        raise LLMParsingError(f"Unexpected completion shape: {e.error_count()} validation error(s)") from e

    ingredients: List[Ingredient] = []
    errors: List[str] = []
    for index, raw in enumerate(recipe.ingredients):
        try:
            payload = LLMIngredientPayload.model_validate(raw)
        except ValidationError as e:
            first = e.errors()[0]
            field_name = ".".join(str(part) for part in first["loc"]) or "ingredient"
            errors.append(f"Ingredient {index + 1}: {field_name} {first['msg']}")
            continue

        ingredient, error = validate_llm_ingredient(payload)
        if error:
            errors.append(f"Ingredient {index + 1}: {error}")
        else:
            ingredients.append(ingredient)

    ingredients = sanitize_ingredients(ingredients)
    if len(ingredients) < LOW_COUNT_THRESHOLD:
        errors.append(f"Suspiciously low ingredient count ({len(ingredients)})")

    if errors:
        logger.warning(f"LLM output had {len(errors)} validation issue(s): {errors[:3]}")

    return LLMParseOutcome(
        recipe_name=recipe.recipe_name,
        ingredients=ingredients,
        validation_errors=errors,
        confidence=calculate_confidence(ingredients, errors),
        verification=verify_against_content(ingredients, source_text)
    )
