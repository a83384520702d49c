"""
Shopping-list service.

A shopping list is built from one or more recipes: every ingredient line of
every recipe is folded through sniper.merge.combine_items(). After that the
items belong to the list and can be edited freely; the list keeps a link to
its contributing recipes for display only.

Operations:
- create_shopping_list(name, recipe_ids)
- list_shopping_lists()
- get_shopping_list(list_id)
- update_shopping_list(list_id, name, items): rename + replace all items
- add_recipes_to_shopping_list(list_id, recipe_ids)
- delete_shopping_list(list_id)
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sniper.db import RecipeRow, ShoppingListItemRow, ShoppingListRow, get_db_session
from sniper.errors import NotFoundError
from sniper.events import (
    log_recipes_added_to_list,
    log_shopping_list_created,
    log_shopping_list_deleted,
    log_shopping_list_updated,
)
from sniper.merge import combine_items
from sniper.models import (
    ItemDraft,
    ShoppingListDetail,
    ShoppingListItemOut,
    ShoppingListSummary,
)
from sniper.recipes import to_summary

logger = logging.getLogger(__name__)


def to_list_summary(shopping_list: ShoppingListRow) -> ShoppingListSummary:
    """Map an ORM shopping list to its list-view shape."""
    return ShoppingListSummary(
        id=shopping_list.id,
        name=shopping_list.name,
        recipe_count=len(shopping_list.recipes),
        item_count=len(shopping_list.items),
        created_at=shopping_list.created_at,
    )


def to_list_detail(shopping_list: ShoppingListRow) -> ShoppingListDetail:
    """Map an ORM shopping list to its detail shape."""
    return ShoppingListDetail(
        id=shopping_list.id,
        name=shopping_list.name,
        created_at=shopping_list.created_at,
        recipes=[to_summary(recipe) for recipe in shopping_list.recipes],
        items=[
            ShoppingListItemOut(id=item.id, name=item.name, quantity=item.quantity, unit=item.unit)
            for item in shopping_list.items
        ],
    )


def _ingredient_drafts(recipes: Iterable[RecipeRow]) -> List[ItemDraft]:
    return [
        ItemDraft(name=ingredient.name, quantity=ingredient.quantity, unit=ingredient.unit)
        for recipe in recipes
        for ingredient in recipe.ingredients
    ]


def _find_recipes(db, recipe_ids: Sequence[int]) -> List[RecipeRow]:
    if not recipe_ids:
        return []
    return (
        db.query(RecipeRow)
        .filter(RecipeRow.id.in_(set(recipe_ids)))
        .order_by(RecipeRow.id)
        .all()
    )


def _load_list(db, list_id: int) -> ShoppingListRow:
    shopping_list = db.get(ShoppingListRow, list_id)
    if shopping_list is None:
        raise NotFoundError(f"Shopping list not found: {list_id}")
    return shopping_list


def _replace_items(shopping_list: ShoppingListRow, drafts: Iterable[ItemDraft]) -> None:
    shopping_list.items.clear()
    for position, draft in enumerate(drafts):
        shopping_list.items.append(ShoppingListItemRow(
            position=position,
            name=draft.name,
            quantity=draft.quantity,
            unit=draft.unit,
        ))


def create_shopping_list(name: str, recipe_ids: Sequence[int]) -> ShoppingListDetail:
    """
    Create a shopping list from recipes.

    Args:
        name: List name
        recipe_ids: Recipes to draw ingredients from. Unknown ids are skipped.

    Returns:
        ShoppingListDetail of the new list

    Raises:
        NotFoundError: If none of the ids match a recipe
    """
    db = get_db_session()
    try:
        recipes = _find_recipes(db, recipe_ids)
        if not recipes:
            raise NotFoundError(f"No valid recipes found for IDs: {list(recipe_ids)}")

        if len(recipes) < len(set(recipe_ids)):
            found = {recipe.id for recipe in recipes}
            missing = sorted(set(recipe_ids) - found)
            logger.warning(f"Some recipes not found while creating list '{name}': {missing}")

        shopping_list = ShoppingListRow(name=name)
        shopping_list.recipes.extend(recipes)
        _replace_items(shopping_list, combine_items(_ingredient_drafts(recipes)))

        db.add(shopping_list)
        db.commit()
        db.refresh(shopping_list)

        detail = to_list_detail(shopping_list)
    except NotFoundError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating shopping list '{name}': {e}")
        raise
    finally:
        db.close()

    logger.info(f"Created shopping list {detail.id} '{detail.name}' with {len(detail.items)} items")
    log_shopping_list_created(detail.id, [recipe.id for recipe in detail.recipes], len(detail.items))
    return detail


def list_shopping_lists() -> List[ShoppingListSummary]:
    """
    Get all shopping lists.

    Returns:
        Summaries in insertion order
    """
    db = get_db_session()
    try:
        lists = db.query(ShoppingListRow).order_by(ShoppingListRow.id).all()
        return [to_list_summary(shopping_list) for shopping_list in lists]
    finally:
        db.close()


def get_shopping_list(list_id: int) -> ShoppingListDetail:
    """
    Get one shopping list with recipes and items.

    Raises:
        NotFoundError: If no list has this id
    """
    db = get_db_session()
    try:
        return to_list_detail(_load_list(db, list_id))
    finally:
        db.close()


def update_shopping_list(list_id: int, name: str, items: Sequence[Dict[str, Any]]) -> ShoppingListDetail:
    """
    Rename a list and replace its items wholesale.

    Rows are written in request order. A row whose "id" belongs to this list
    keeps that id; rows with id None (or a foreign id) become new items.
    Existing items missing from the request are deleted.

    Args:
        list_id: Shopping list id
        name: New name
        items: Dicts with keys id (Optional[int]), name, quantity, unit

    Returns:
        Updated ShoppingListDetail

    Raises:
        NotFoundError: If no list has this id
    """
    db = get_db_session()
    try:
        shopping_list = _load_list(db, list_id)
        shopping_list.name = name

        current = {item.id: item for item in shopping_list.items}
        kept: List[ShoppingListItemRow] = []
        for position, data in enumerate(items):
            item_id: Optional[int] = data.get("id")
            row = current.pop(item_id, None) if item_id is not None else None
            if row is None:
                row = ShoppingListItemRow()
            row.position = position
            row.name = data["name"]
            row.quantity = data.get("quantity")
            row.unit = data.get("unit")
            kept.append(row)

        # delete-orphan removes whatever is left in `current`
        shopping_list.items = kept

        db.commit()
        db.refresh(shopping_list)
        detail = to_list_detail(shopping_list)
    except NotFoundError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating shopping list {list_id}: {e}")
        raise
    finally:
        db.close()

    logger.info(f"Updated shopping list {list_id}: {len(detail.items)} items")
    log_shopping_list_updated(list_id, len(detail.items))
    return detail


def add_recipes_to_shopping_list(list_id: int, recipe_ids: Sequence[int]) -> ShoppingListDetail:
    """
    Append recipes to an existing list and merge their ingredients in.

    Recipes already linked are not linked twice, but their ingredients are
    still merged again (adding a recipe twice doubles its quantities).

    Args:
        list_id: Shopping list id
        recipe_ids: Recipes to add. Unknown ids are skipped.

    Returns:
        Updated ShoppingListDetail

    Raises:
        NotFoundError: If no list has this id, or none of the ids match a recipe
    """
    db = get_db_session()
    try:
        shopping_list = _load_list(db, list_id)
        recipes = _find_recipes(db, recipe_ids)
        if not recipes:
            raise NotFoundError(f"No valid recipes found for IDs: {list(recipe_ids)}")
        found_ids = [recipe.id for recipe in recipes]

        linked = {recipe.id for recipe in shopping_list.recipes}
        for recipe in recipes:
            if recipe.id not in linked:
                shopping_list.recipes.append(recipe)

        existing = [
            ItemDraft(name=item.name, quantity=item.quantity, unit=item.unit)
            for item in shopping_list.items
        ]
        _replace_items(shopping_list, combine_items(existing + _ingredient_drafts(recipes)))

        db.commit()
        db.refresh(shopping_list)
        detail = to_list_detail(shopping_list)
    except NotFoundError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error adding recipes to shopping list {list_id}: {e}")
        raise
    finally:
        db.close()

    logger.info(f"Added recipes {list(recipe_ids)} to shopping list {list_id}")
    log_recipes_added_to_list(list_id, found_ids, len(detail.items))
    return detail


def delete_shopping_list(list_id: int) -> None:
    """
    Delete a shopping list and its items. Recipes are left untouched.

    Raises:
        NotFoundError: If no list has this id
    """
    db = get_db_session()
    try:
        db.delete(_load_list(db, list_id))
        db.commit()
    except NotFoundError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting shopping list {list_id}: {e}")
        raise
    finally:
        db.close()

    logger.info(f"Deleted shopping list {list_id}")
    log_shopping_list_deleted(list_id)
