"""
Structured data extraction from recipe pages.

Most recipe sites embed a schema.org Recipe object in a JSON-LD script tag.
When it carries enough ingredients this is the fastest and most reliable
path, so the pipeline tries it before any text parsing.
"""

import html as html_lib
import json
import logging
from typing import Any, List, Optional

from bs4 import BeautifulSoup

from ..models.recipe import Recipe
from .ingredient_line_parser import parse_ingredient_from_string

logger = logging.getLogger(__name__)

INGREDIENT_KEYS = ("recipeIngredient", "ingredients", "ingredient")
MAX_TITLE_LENGTH = 100


def _is_recipe_type(item: dict) -> bool:
    item_type = item.get("@type")
    if isinstance(item_type, list):
        return "Recipe" in item_type
    return item_type == "Recipe"


def find_recipe_object(data: Any) -> Optional[dict]:
    """
    Locate the Recipe object inside decoded JSON-LD.

    Args:
        data: Decoded JSON: a single object, a list of objects, or an object
            with an @graph array

    Returns:
        The first Recipe-typed object (or object carrying an ingredient
        field), or None
    """
    if isinstance(data, list):
        for item in data:
            found = find_recipe_object(item)
            if found is not None:
                return found
        return None

    if not isinstance(data, dict):
        return None

    if _is_recipe_type(data) or any(key in data for key in INGREDIENT_KEYS):
        return data

    graph = data.get("@graph")
    if graph is not None:
        return find_recipe_object(graph)
    return None


def extract_structured_data(html: str) -> Optional[str]:
    """Return the text of the first JSON-LD block that holds a recipe"""
    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")

    for script in soup.find_all("script", type="application/ld+json"):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.debug("Skipping malformed JSON-LD block")
            continue
        if find_recipe_object(data) is not None:
            return raw.strip()
    return None


def _ingredient_texts(recipe_object: dict) -> List[str]:
    for key in INGREDIENT_KEYS:
        if key not in recipe_object:
            continue
        raw = recipe_object[key]
        if isinstance(raw, (str, dict)):
            raw = [raw]
        texts = []
        for entry in raw or []:
            if isinstance(entry, str):
                texts.append(entry)
            elif isinstance(entry, dict):
                value = entry.get("name") or entry.get("text")
                if isinstance(value, str):
                    texts.append(value)
        return texts
    return []


def parse_structured_data(json_text: str, url: str, min_ingredients: int = 3) -> Optional[Recipe]:
    """
    Build a Recipe from a JSON-LD block.

    Entries the line parser cannot handle are skipped. Too few parsed
    ingredients means the structured data is not usable and None is
    returned; that is an expected outcome, not an error.
    """
    try:
        data = json.loads(json_text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.debug(f"Structured data is not valid JSON for {url}: {e}")
        return None

    recipe_object = find_recipe_object(data)
    if recipe_object is None:
        return None

    ingredients = []
    for text in _ingredient_texts(recipe_object):
        ingredient = parse_ingredient_from_string(html_lib.unescape(text))
        if ingredient is not None:
            ingredients.append(ingredient)

    if len(ingredients) < min_ingredients:
        logger.info(f"Structured data for {url} yielded {len(ingredients)} ingredients, need {min_ingredients}")
        return None

    name = recipe_object.get("name")
    return Recipe(
        url=url,
        name=html_lib.unescape(name).strip() if isinstance(name, str) else None,
        ingredients=ingredients,
        is_parsed=True
    )


def extract_recipe_title(html: str) -> Optional[str]:
    """Recipe title from JSON-LD name, then <title>, then the first <h1>"""
    if not html:
        return None

    structured = extract_structured_data(html)
    if structured:
        recipe_object = find_recipe_object(json.loads(structured))
        name = recipe_object.get("name") if recipe_object else None
        if isinstance(name, str) and 0 < len(name.strip()) < MAX_TITLE_LENGTH:
            return html_lib.unescape(name).strip()

    soup = BeautifulSoup(html, "html.parser")
    for tag_name in ("title", "h1"):
        tag = soup.find(tag_name)
        if tag is None:
            continue
        text = " ".join(tag.get_text(" ", strip=True).split())
        if 0 < len(text) < MAX_TITLE_LENGTH:
            return text
    return None
