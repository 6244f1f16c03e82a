"""
Recipe page classification
"""

from .recipe_page import GateDecision, RecipePageClassifier, SignalResult, default_signals

__all__ = [
    'GateDecision',
    'RecipePageClassifier',
    'SignalResult',
    'default_signals'
]
