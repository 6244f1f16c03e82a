"""
Ingredient extraction strategies
"""

from .ingredient_line_parser import parse_ingredient_from_string
from .structured_data import parse_structured_data, extract_structured_data, extract_recipe_title
from .html_list_extractor import extract_ingredient_list_items
from .section_parser import extract_ingredient_section, parse_ingredients_with_regex
from .sanitizer import sanitize_ingredients

__all__ = [
    'parse_ingredient_from_string',
    'parse_structured_data',
    'extract_structured_data',
    'extract_recipe_title',
    'extract_ingredient_list_items',
    'extract_ingredient_section',
    'parse_ingredients_with_regex',
    'sanitize_ingredients'
]
