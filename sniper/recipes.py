"""
Recipe service: add, list, search, get and delete recipes.

Adding a recipe scrapes the page (sniper.scraper), parses its ingredients
(sniper.extraction) and stores both in one transaction.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from sniper.db import RecipeIngredientRow, RecipeRow, get_db_session
from sniper.errors import NotFoundError
from sniper.events import log_recipe_added, log_recipe_deleted
from sniper.extraction import extract_ingredients
from sniper.models import IngredientOut, RecipeDetail, RecipeSummary
from sniper.scraper import scrape

logger = logging.getLogger(__name__)


def to_summary(recipe: RecipeRow) -> RecipeSummary:
    """Map an ORM recipe to its list-view shape (session must still be open)."""
    return RecipeSummary(
        id=recipe.id,
        url=recipe.url,
        title=recipe.title,
        ingredient_count=len(recipe.ingredients),
        created_at=recipe.created_at,
    )


def to_detail(recipe: RecipeRow) -> RecipeDetail:
    """Map an ORM recipe to its detail shape (session must still be open)."""
    return RecipeDetail(
        id=recipe.id,
        url=recipe.url,
        title=recipe.title,
        created_at=recipe.created_at,
        ingredients=[
            IngredientOut(
                id=ingredient.id,
                name=ingredient.name,
                quantity=ingredient.quantity,
                unit=ingredient.unit,
                raw_text=ingredient.raw_text,
            )
            for ingredient in recipe.ingredients
        ],
    )


def add_recipe(url: str, storage_dir: Optional[Union[str, Path]] = None) -> RecipeDetail:
    """
    Scrape a recipe page and store it.

    Args:
        url: Recipe page URL
        storage_dir: Optional directory for the archived HTML

    Returns:
        RecipeDetail of the stored recipe

    Raises:
        ValueError: If url is blank or malformed
        ScrapeError: If the page cannot be fetched
    """
    result = scrape(url, storage_dir=storage_dir)
    parsed = extract_ingredients(result.html)

    db = get_db_session()
    try:
        recipe = RecipeRow(url=url.strip(), title=result.title, raw_html=result.html)
        for position, ingredient in enumerate(parsed):
            recipe.ingredients.append(RecipeIngredientRow(
                position=position,
                name=ingredient.name,
                quantity=ingredient.quantity,
                unit=ingredient.unit,
                raw_text=ingredient.raw_text,
            ))
        db.add(recipe)
        db.commit()
        db.refresh(recipe)

        detail = to_detail(recipe)
    except Exception as e:
        db.rollback()
        logger.error(f"Error saving recipe {url}: {e}")
        raise
    finally:
        db.close()

    logger.info(f"Added recipe {detail.id} '{detail.title}' with {len(detail.ingredients)} ingredients")
    log_recipe_added(detail.id, detail.url, len(detail.ingredients))
    return detail


def list_recipes() -> List[RecipeSummary]:
    """
    Get all recipes.

    Returns:
        Summaries in insertion order
    """
    db = get_db_session()
    try:
        recipes = db.query(RecipeRow).order_by(RecipeRow.id).all()
        return [to_summary(recipe) for recipe in recipes]
    finally:
        db.close()


def search_recipes(query: Optional[str]) -> List[RecipeSummary]:
    """
    Find recipes whose title contains query (case-insensitive).

    Args:
        query: Substring to look for. Blank or None returns every recipe.

    Returns:
        Matching summaries in insertion order
    """
    if query is None or not query.strip():
        return list_recipes()

    escaped = (
        query.strip()
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )

    db = get_db_session()
    try:
        recipes = (
            db.query(RecipeRow)
            .filter(RecipeRow.title.ilike(f"%{escaped}%", escape="\\"))
            .order_by(RecipeRow.id)
            .all()
        )
        return [to_summary(recipe) for recipe in recipes]
    finally:
        db.close()


def get_recipe(recipe_id: int) -> RecipeDetail:
    """
    Get one recipe with its ingredients.

    Raises:
        NotFoundError: If no recipe has this id
    """
    db = get_db_session()
    try:
        recipe = db.get(RecipeRow, recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe not found: {recipe_id}")
        return to_detail(recipe)
    finally:
        db.close()


def delete_recipe(recipe_id: int) -> None:
    """
    Delete a recipe and its ingredients.

    Shopping lists that used the recipe keep their items; only the link is removed.

    Raises:
        NotFoundError: If no recipe has this id
    """
    db = get_db_session()
    try:
        recipe = db.get(RecipeRow, recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe not found: {recipe_id}")
        db.delete(recipe)
        db.commit()
    except NotFoundError:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting recipe {recipe_id}: {e}")
        raise
    finally:
        db.close()

    logger.info(f"Deleted recipe {recipe_id}")
    log_recipe_deleted(recipe_id)
