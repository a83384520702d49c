"""
Recipes router.

Endpoints:
- POST /api/recipes - Scrape a recipe page and store it
- GET /api/recipes - List recipes, optionally filtered by title (?search=)
- GET /api/recipes/{recipe_id} - Get one recipe with its ingredients
- DELETE /api/recipes/{recipe_id} - Delete a recipe

Domain errors are mapped to HTTPException here; api.main turns every
HTTPException into an {"error": ...} body.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from api.schemas import AddRecipeRequest, ErrorResponse, RecipeDetail, RecipeSummary
from sniper import recipes as recipe_service
from sniper.errors import NotFoundError, ScrapeError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/recipes",
    tags=["recipes"],
    responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
)


@router.post(
    "",
    response_model=RecipeDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recipe from a URL",
    description="Fetch the page, archive it, extract the ingredients and store the recipe.",
    responses={502: {"model": ErrorResponse}},
)
def add_recipe(request: AddRecipeRequest) -> RecipeDetail:
    """
    Scrape and store a recipe.

    Args:
        request: Body with the recipe page URL

    Returns:
        RecipeDetail including parsed ingredients

    Raises:
        HTTPException 400: If the URL is blank or malformed
        HTTPException 502: If the page could not be fetched (network error or HTTP >= 400)

    Example:
        POST /api/recipes {"url": "https://example.com/pancakes"}
    """
    try:
        return recipe_service.add_recipe(request.url)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except ScrapeError as e:
        logger.warning(f"Scrape failed for {request.url}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch recipe: {e}",
        ) from e


@router.get(
    "",
    response_model=List[RecipeSummary],
    summary="List recipes",
    description="Return every recipe, or only those whose title contains `search` (case-insensitive).",
)
def get_recipes(
    search: Optional[str] = Query(None, description="Case-insensitive title substring"),
) -> List[RecipeSummary]:
    """
    List or search recipes.

    Args:
        search: Optional title substring. Blank means no filter.

    Returns:
        List of RecipeSummary in insertion order
    """
    return recipe_service.search_recipes(search)


@router.get(
    "/{recipe_id}",
    response_model=RecipeDetail,
    summary="Get a recipe",
)
def get_recipe(recipe_id: int) -> RecipeDetail:
    """
    Get one recipe.

    Raises:
        HTTPException 404: If the recipe does not exist
    """
    try:
        return recipe_service.get_recipe(recipe_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a recipe",
)
def delete_recipe(recipe_id: int) -> Response:
    """
    Delete a recipe. Shopping lists built from it keep their items.

    Raises:
        HTTPException 404: If the recipe does not exist
    """
    try:
        recipe_service.delete_recipe(recipe_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
