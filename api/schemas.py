"""
Pydantic schemas for FastAPI request and response models.

This module defines the request bodies accepted by the API and re-exports the
response models from sniper.models, so routers import everything from one place.

The schemas include:
- AddRecipeRequest: body of POST /api/recipes
- CreateShoppingListRequest: body of POST /api/shopping-lists
- UpdateShoppingListRequest / ShoppingListItemInput: body of PUT /api/shopping-lists/{id}
- AddRecipesRequest: body of POST /api/shopping-lists/{id}/recipes
- ErrorResponse: {"error": "..."} body returned for every non-2xx status

# NOTE: All request bodies use camelCase on the wire (recipeIds). Python code
    uses the snake_case attribute names.
"""

from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from sniper.models import (
    CamelModel,
    IngredientOut,
    RecipeDetail,
    RecipeSummary,
    ShoppingListDetail,
    ShoppingListItemOut,
    ShoppingListSummary,
)

__all__ = [
    "AddRecipeRequest",
    "CreateShoppingListRequest",
    "ShoppingListItemInput",
    "UpdateShoppingListRequest",
    "AddRecipesRequest",
    "ErrorResponse",
    "IngredientOut",
    "RecipeDetail",
    "RecipeSummary",
    "ShoppingListDetail",
    "ShoppingListItemOut",
    "ShoppingListSummary",
]


def _not_blank(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be blank")
    return value.strip()


class AddRecipeRequest(CamelModel):
    """Input model for scraping and storing a recipe."""
    url: str = Field(..., description="Recipe page URL (http or https)")

    @field_validator("url")
    @classmethod
    def url_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"url": "https://example.com/recipes/pancakes"}
        }
    )


class CreateShoppingListRequest(CamelModel):
    """Input model for building a shopping list from recipes."""
    name: str = Field(..., description="List name")
    recipe_ids: List[int] = Field(..., min_length=1, description="Recipes to draw ingredients from")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Weekend", "recipeIds": [1, 2]}
        }
    )


class ShoppingListItemInput(CamelModel):
    """
    One row of an edited shopping list.

    id is None for rows added in the editor; existing rows carry their id so
    they keep it after the update.
    """
    id: Optional[int] = Field(None, description="Existing item id, or null for a new row")
    name: str = Field(..., description="Item name")
    quantity: Optional[str] = Field(None, description="Free-text quantity")
    unit: Optional[str] = Field(None, description="Free-text unit")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class UpdateShoppingListRequest(CamelModel):
    """Input model for renaming a list and replacing all its items."""
    name: str = Field(..., description="New list name")
    items: List[ShoppingListItemInput] = Field(..., description="Complete item collection (may be empty, not omitted)")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Weekend",
                "items": [
                    {"id": 10, "name": "flour", "quantity": "5", "unit": "cups"},
                    {"id": None, "name": "lemons", "quantity": "2", "unit": None},
                ],
            }
        }
    )


class AddRecipesRequest(CamelModel):
    """Input model for appending recipes to a list."""
    recipe_ids: List[int] = Field(..., min_length=1, description="Recipes to add")


class ErrorResponse(CamelModel):
    """Body of every error response."""
    error: str = Field(..., description="Human-readable error message")
