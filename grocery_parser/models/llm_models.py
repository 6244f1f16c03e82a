"""
Typed schemas for the LLM relay envelope and the JSON content it returns.

Decoding goes through these models so that a malformed field produces an
explicit validation error instead of silently disappearing.
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator

from .recipe import GroceryCategory


class RelayEnvelope(BaseModel):
    """Response body of the completion relay"""
    success: bool
    content: Optional[str] = None
    error: Optional[str] = None
    metrics: Optional[Dict[str, Any]] = None


class LLMIngredientPayload(BaseModel):
    """One ingredient as emitted by the LLM"""
    name: str = Field(..., min_length=1)
    amount: Optional[Union[float, str]] = None
    unit: Optional[str] = None
    category: GroceryCategory

    model_config = {
        "extra": "ignore"
    }

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class LLMRecipePayload(BaseModel):
    """Top-level JSON object requested from the LLM"""
    recipe_name: Optional[str] = Field(None, alias="recipeName")
    ingredients: List[Dict[str, Any]] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True,
        "extra": "ignore"
    }
