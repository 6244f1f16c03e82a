from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

# Units that encode "no numeric quantity"
TO_TASTE = "To taste"
FOR_SERVING = "For serving"
SENTINEL_UNITS = (TO_TASTE, FOR_SERVING)


class GroceryCategory(str, Enum):
    """Grocery store sections used to group the shopping list"""
    produce = "Produce"
    meat_and_seafood = "Meat & Seafood"
    deli = "Deli"
    bakery = "Bakery"
    frozen = "Frozen"
    pantry = "Pantry"
    dairy = "Dairy"
    beverages = "Beverages"


class Ingredient(BaseModel):
    """A single purchasable ingredient line"""
    name: str = Field(..., description="Canonical purchasable noun phrase")
    amount: float = Field(0.0, ge=0, description="Quantity; 0 when unknown")
    unit: str = Field("", description="Canonical unit, empty, or a sentinel such as 'To taste'")
    category: GroceryCategory = Field(GroceryCategory.pantry, description="Grocery store section")

    model_config = {
        "validate_assignment": True,
        "json_schema_extra": {
            "example": {
                "name": "fresh basil",
                "amount": 2.5,
                "unit": "tablespoons",
                "category": "Produce"
            }
        }
    }

    @model_validator(mode="after")
    def zero_amount_has_no_measure(self) -> 'Ingredient':
        # amount == 0 never carries a positive-quantity unit
        if self.amount == 0 and self.unit and self.unit not in SENTINEL_UNITS:
            object.__setattr__(self, "unit", "")
        return self


class Recipe(BaseModel):
    """Recipe built fresh per request and filled by whichever strategy succeeds"""
    url: str
    name: Optional[str] = None
    ingredients: List[Ingredient] = Field(default_factory=list)
    is_parsed: bool = Field(False, alias="isParsed")

    model_config = {
        "populate_by_name": True
    }


class RecipeParsingResult(BaseModel):
    """Unit of work returned to the caller and stored in the cache"""
    recipe: Recipe
    success: bool
    error: Optional[str] = None
    strategy: Optional[str] = Field(None, description="Extraction strategy that produced this result")
