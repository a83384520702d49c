"""
Ingredient extraction from recipe HTML.

Two strategies, tried in order:
1. JSON-LD: schema.org Recipe objects embedded in <script type="application/ld+json">.
   Most recipe sites (WordPress recipe plugins, large publishers) ship these.
2. HTML selectors: common ingredient list markup (WP Recipe Maker, generic
   "ingredients" lists, microdata itemprop).

Each raw line is then split into quantity / unit / name by parse_ingredient_line().
"""

import json
import logging
import re
from typing import Any, List, Optional

from bs4 import BeautifulSoup

from sniper.models import ParsedIngredient

logger = logging.getLogger(__name__)

# Leading quantity: mixed fraction, fraction, decimal or integer
QUANTITY_PATTERN = re.compile(r"^(\d+\s+\d+/\d+|\d+/\d+|\d+\.\d+|\d+)\s*(.*)$")

UNITS = frozenset({
    "cup", "cups", "tablespoon", "tablespoons", "tbsp", "teaspoon", "teaspoons", "tsp",
    "ounce", "ounces", "oz", "pound", "pounds", "lb", "lbs",
    "gram", "grams", "g", "kilogram", "kilograms", "kg",
    "milliliter", "milliliters", "ml", "liter", "liters", "l",
    "pinch", "dash", "clove", "cloves", "slice", "slices", "piece", "pieces",
    "can", "cans", "package", "packages", "bunch", "bunches", "stick", "sticks",
    "quart", "quarts", "pint", "pints", "gallon", "gallons",
})

# First selector that matches anything wins
INGREDIENT_SELECTORS = (
    ".wprm-recipe-ingredients li",
    ".recipe-ingredients li",
    ".ingredients li",
    "[class*=ingredient] li",
    "[itemprop=recipeIngredient]",
)


def extract_ingredients(html: str) -> List[ParsedIngredient]:
    """
    Extract and parse ingredient lines from a recipe page.

    Args:
        html: Raw page HTML

    Returns:
        Parsed ingredients in page order. Empty list if nothing was found or
        extraction failed.
    """
    try:
        soup = BeautifulSoup(html, "html.parser")

        lines = _from_json_ld(soup)
        if lines:
            logger.debug(f"Found {len(lines)} ingredients in JSON-LD")
        else:
            lines = _from_html(soup)
            logger.debug(f"Found {len(lines)} ingredients via HTML selectors")

        return [parse_ingredient_line(line) for line in lines]
    except Exception as e:
        logger.exception(f"Ingredient extraction failed: {e}")
        return []


def parse_ingredient_line(raw: str) -> ParsedIngredient:
    """
    Split one ingredient line into name, quantity and unit.

    Args:
        raw: Ingredient line as found on the page

    Returns:
        ParsedIngredient. Lines without a leading number keep the whole text as name.

    Examples:
        >>> parse_ingredient_line("2 cups all-purpose flour").unit
        'cups'
        >>> parse_ingredient_line("1 1/2 cups sugar").quantity
        '1 1/2'
        >>> parse_ingredient_line("3 eggs").unit is None
        True
        >>> parse_ingredient_line("Salt to taste").quantity is None
        True
    """
    text = raw.strip()
    match = QUANTITY_PATTERN.fullmatch(text)

    if match is None:
        return ParsedIngredient(name=text, raw_text=raw)

    quantity = match.group(1)
    rest = match.group(2).strip()
    words = rest.split(None, 1)

    if len(words) == 2 and words[0].lower() in UNITS:
        unit, name = words[0], words[1].strip()
    else:
        unit, name = None, rest

    return ParsedIngredient(name=name or text, quantity=quantity, unit=unit, raw_text=raw)


def _from_json_ld(soup: BeautifulSoup) -> List[str]:
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        content = script.string or script.get_text()
        if not content or not content.strip():
            continue
        try:
            data = json.loads(content)
        except ValueError:
            logger.debug("Skipping unparseable JSON-LD block")
            continue

        ingredients = _find_recipe_ingredients(data)
        if ingredients:
            return ingredients
    return []


def _find_recipe_ingredients(node: Any) -> List[str]:
    if isinstance(node, dict):
        if _is_recipe(node):
            return _ingredient_strings(node)
        graph = node.get("@graph")
        if isinstance(graph, list):
            recipe = _first_recipe(graph)
            if recipe is not None:
                return _ingredient_strings(recipe)
    elif isinstance(node, list):
        recipe = _first_recipe(node)
        if recipe is not None:
            return _ingredient_strings(recipe)
    return []


def _first_recipe(nodes: List[Any]) -> Optional[dict]:
    for candidate in nodes:
        if isinstance(candidate, dict) and _is_recipe(candidate):
            return candidate
    return None


def _is_recipe(node: dict) -> bool:
    node_type = node.get("@type")
    if isinstance(node_type, str):
        return node_type == "Recipe"
    if isinstance(node_type, list):
        return "Recipe" in node_type
    return False


def _ingredient_strings(recipe: dict) -> List[str]:
    values = recipe.get("recipeIngredient")
    if not isinstance(values, list):
        return []
    lines = []
    for value in values:
        if isinstance(value, str) and value.strip():
            lines.append(value.strip())
    return lines


def _from_html(soup: BeautifulSoup) -> List[str]:
    for selector in INGREDIENT_SELECTORS:
        elements = soup.select(selector)
        if not elements:
            continue
        lines = []
        for element in elements:
            text = " ".join(element.get_text(" ").split())
            if text:
                lines.append(text)
        return lines
    return []
