"""
Recipe and shopping-list models for the sniper system.

This module defines two groups of Pydantic models:

- Internal models passed between the scraper, the extractor and the merge
  logic (ScrapeResult, ParsedIngredient, ItemDraft).
- Public models returned by the services and serialized by the API
  (RecipeSummary, RecipeDetail, ShoppingListSummary, ShoppingListDetail, ...).

# NOTE: Public models serialize with camelCase aliases (ingredientCount, rawText,
    createdAt, recipeCount, itemCount). The Streamlit client reads those keys,
    so field names here and the aliases must stay in sync with
    streamlit_app/utils/api_client.py.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ScrapeResult(BaseModel):
    """Outcome of fetching one recipe page."""
    title: str = Field(..., description="Page title (falls back to the URL when the page has none)")
    html: str = Field(..., description="Raw HTML body as fetched")
    saved_file: str = Field(..., description="Path of the archived copy on disk")


class ParsedIngredient(BaseModel):
    """One ingredient line split into name, quantity and unit."""
    name: str = Field(..., description="Ingredient name (e.g. 'all-purpose flour')")
    quantity: Optional[str] = Field(None, description="Quantity as written (e.g. '2', '1 1/2', '0.5')")
    unit: Optional[str] = Field(None, description="Unit as written (e.g. 'cups', 'tbsp')")
    raw_text: str = Field(..., description="Original unparsed line")


class ItemDraft(BaseModel):
    """
    A shopping-list line before it is persisted.

    merge_into() updates the accumulated draft in place, so this model is
    not frozen.
    """
    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None


class CamelModel(BaseModel):
    """Base for public models: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngredientOut(CamelModel):
    """Ingredient as exposed by the API."""
    id: int
    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None
    raw_text: str


class RecipeSummary(CamelModel):
    """Recipe row for list views."""
    id: int
    url: str
    title: str
    ingredient_count: int = Field(..., description="Number of parsed ingredient lines")
    created_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "url": "https://example.com/pancakes",
                "title": "Fluffy Pancakes",
                "ingredientCount": 7,
                "createdAt": "2024-03-01T12:00:00",
            }
        }
    )


class RecipeDetail(CamelModel):
    """Recipe with its full ordered ingredient list."""
    id: int
    url: str
    title: str
    created_at: datetime
    ingredients: List[IngredientOut] = Field(default_factory=list)


class ShoppingListItemOut(CamelModel):
    """Shopping-list line item as exposed by the API."""
    id: int
    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None


class ShoppingListSummary(CamelModel):
    """Shopping list row for list views."""
    id: int
    name: str
    recipe_count: int
    item_count: int
    created_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 3,
                "name": "Weekend",
                "recipeCount": 2,
                "itemCount": 11,
                "createdAt": "2024-03-02T09:30:00",
            }
        }
    )


class ShoppingListDetail(CamelModel):
    """Shopping list with contributing recipes and its items."""
    id: int
    name: str
    created_at: datetime
    recipes: List[RecipeSummary] = Field(default_factory=list)
    items: List[ShoppingListItemOut] = Field(default_factory=list)
