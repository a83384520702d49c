"""
Shopping lists router.

Endpoints:
- POST /api/shopping-lists - Create a list from recipes
- GET /api/shopping-lists - List summaries
- GET /api/shopping-lists/{list_id} - Get one list with recipes and items
- PUT /api/shopping-lists/{list_id} - Rename and replace all items
- POST /api/shopping-lists/{list_id}/recipes - Append recipes and merge their ingredients
- DELETE /api/shopping-lists/{list_id} - Delete a list
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from api.schemas import (
    AddRecipesRequest,
    CreateShoppingListRequest,
    ErrorResponse,
    ShoppingListDetail,
    ShoppingListSummary,
    UpdateShoppingListRequest,
)
from sniper import shopping_lists as list_service
from sniper.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/shopping-lists",
    tags=["shopping-lists"],
    responses={404: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
)


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "",
    response_model=ShoppingListDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create a shopping list",
    description="Combine the ingredients of the given recipes into a new named list.",
)
def create_shopping_list(request: CreateShoppingListRequest) -> ShoppingListDetail:
    """
    Create a shopping list.

    Args:
        request: Body with name and recipeIds (at least one)

    Returns:
        ShoppingListDetail of the new list

    Raises:
        HTTPException 400: If name is blank or recipeIds is empty
        HTTPException 404: If none of the recipe ids exist
    """
    try:
        return list_service.create_shopping_list(request.name, request.recipe_ids)
    except NotFoundError as e:
        raise _not_found(e) from e


@router.get(
    "",
    response_model=List[ShoppingListSummary],
    summary="List shopping lists",
)
def get_shopping_lists() -> List[ShoppingListSummary]:
    """
    List every shopping list.

    Returns:
        Summaries with recipeCount and itemCount
    """
    return list_service.list_shopping_lists()


@router.get(
    "/{list_id}",
    response_model=ShoppingListDetail,
    summary="Get a shopping list",
)
def get_shopping_list(list_id: int) -> ShoppingListDetail:
    """
    Get one shopping list.

    Raises:
        HTTPException 404: If the list does not exist
    """
    try:
        return list_service.get_shopping_list(list_id)
    except NotFoundError as e:
        raise _not_found(e) from e


@router.put(
    "/{list_id}",
    response_model=ShoppingListDetail,
    summary="Update a shopping list",
    description=(
        "Rename the list and replace its items with the given collection. "
        "Items with an id keep it; items with a null id are created."
    ),
)
def update_shopping_list(list_id: int, request: UpdateShoppingListRequest) -> ShoppingListDetail:
    """
    Replace a list's name and items.

    Args:
        list_id: Shopping list id
        request: Body with name and the complete item collection

    Returns:
        Updated ShoppingListDetail

    Raises:
        HTTPException 400: If name or any item name is blank
        HTTPException 404: If the list does not exist
    """
    try:
        return list_service.update_shopping_list(
            list_id,
            request.name,
            [item.model_dump() for item in request.items],
        )
    except NotFoundError as e:
        raise _not_found(e) from e


@router.post(
    "/{list_id}/recipes",
    response_model=ShoppingListDetail,
    summary="Add recipes to a shopping list",
)
def add_recipes(list_id: int, request: AddRecipesRequest) -> ShoppingListDetail:
    """
    Append recipes and merge their ingredients into the existing items.

    Raises:
        HTTPException 400: If recipeIds is empty
        HTTPException 404: If the list does not exist or none of the recipe ids exist
    """
    try:
        return list_service.add_recipes_to_shopping_list(list_id, request.recipe_ids)
    except NotFoundError as e:
        raise _not_found(e) from e


@router.delete(
    "/{list_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a shopping list",
)
def delete_shopping_list(list_id: int) -> Response:
    """
    Delete a shopping list. Its recipes are not affected.

    Raises:
        HTTPException 404: If the list does not exist
    """
    try:
        list_service.delete_shopping_list(list_id)
    except NotFoundError as e:
        raise _not_found(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
