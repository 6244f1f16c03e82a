"""
Grocery Parser - recipe pages to categorized grocery ingredient lists
"""

from .pipeline import PipelineContext, RecipeParsingPipeline, build_pipeline
from .parsers.ingredient_line_parser import parse_ingredient_from_string
from .parsers.section_parser import parse_ingredients_with_regex
from .parsers.structured_data import parse_structured_data

__all__ = [
    'PipelineContext',
    'RecipeParsingPipeline',
    'build_pipeline',
    'parse_ingredient_from_string',
    'parse_ingredients_with_regex',
    'parse_structured_data'
]
