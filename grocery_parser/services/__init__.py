"""
External service clients
"""

from .page_fetcher import PageFetcher
from .image_resolver import IngredientImageResolver

__all__ = [
    'PageFetcher',
    'IngredientImageResolver'
]
