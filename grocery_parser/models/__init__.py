from .recipe import (
    GroceryCategory,
    Ingredient,
    Recipe,
    RecipeParsingResult,
    TO_TASTE,
    FOR_SERVING,
    SENTINEL_UNITS
)
from .llm_models import RelayEnvelope, LLMIngredientPayload, LLMRecipePayload

__all__ = [
    'GroceryCategory',
    'Ingredient',
    'Recipe',
    'RecipeParsingResult',
    'TO_TASTE',
    'FOR_SERVING',
    'SENTINEL_UNITS',
    'RelayEnvelope',
    'LLMIngredientPayload',
    'LLMRecipePayload'
]
