"""
Core parsing helpers: tables, amounts, line classification, names and categories
"""

from .amounts import parse_amount, standardize_unit, normalize_fractions
from .categorizer import categorize, adjust_category
from .line_classifier import is_ingredient_candidate, is_noise, is_instruction
from .name_normalizer import normalize_name

__all__ = [
    'parse_amount',
    'standardize_unit',
    'normalize_fractions',
    'categorize',
    'adjust_category',
    'is_ingredient_candidate',
    'is_noise',
    'is_instruction',
    'normalize_name'
]
