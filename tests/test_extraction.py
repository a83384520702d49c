"""
Tests for ingredient extraction (sniper.extraction).

Covers JSON-LD discovery (root object, @graph, root array, list-valued @type),
the HTML selector fallback and the quantity/unit/name line parser.
"""

import json

import pytest

from sniper.extraction import extract_ingredients, parse_ingredient_line


def _ld(data):
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


class TestParseIngredientLine:
    """Test cases for parse_ingredient_line."""

    def test_quantity_unit_and_name(self):
        parsed = parse_ingredient_line("2 cups all-purpose flour")
        assert parsed.quantity == "2"
        assert parsed.unit == "cups"
        assert parsed.name == "all-purpose flour"
        assert parsed.raw_text == "2 cups all-purpose flour"

    def test_mixed_fraction(self):
        parsed = parse_ingredient_line("1 1/2 cups sugar")
        assert parsed.quantity == "1 1/2"
        assert parsed.unit == "cups"
        assert parsed.name == "sugar"

    def test_fraction_and_decimal(self):
        assert parse_ingredient_line("1/4 tsp salt").quantity == "1/4"
        assert parse_ingredient_line("0.5 kg potatoes").quantity == "0.5"

    def test_unit_is_case_insensitive_but_kept_as_written(self):
        parsed = parse_ingredient_line("3 Tbsp butter")
        assert parsed.unit == "Tbsp"
        assert parsed.name == "butter"

    def test_no_unit(self):
        parsed = parse_ingredient_line("3 eggs")
        assert parsed.quantity == "3"
        assert parsed.unit is None
        assert parsed.name == "eggs"

    def test_unknown_first_word_is_part_of_name(self):
        parsed = parse_ingredient_line("2 large onions, diced")
        assert parsed.unit is None
        assert parsed.name == "large onions, diced"

    def test_unit_word_alone_is_the_name(self):
        parsed = parse_ingredient_line("2 cloves")
        assert parsed.unit is None
        assert parsed.name == "cloves"

    def test_no_quantity(self):
        parsed = parse_ingredient_line("Salt to taste")
        assert parsed.quantity is None
        assert parsed.unit is None
        assert parsed.name == "Salt to taste"

    def test_surrounding_whitespace_is_stripped(self):
        parsed = parse_ingredient_line("  1 can tomatoes  ")
        assert parsed.quantity == "1"
        assert parsed.unit == "can"
        assert parsed.name == "tomatoes"


class TestExtractIngredients:
    """Test cases for extract_ingredients."""

    def test_root_recipe_object(self):
        html = "<html><head>" + _ld({
            "@type": "Recipe",
            "recipeIngredient": ["2 cups flour", "  ", "1 tsp salt"],
        }) + "</head></html>"

        ingredients = extract_ingredients(html)

        assert [i.name for i in ingredients] == ["flour", "salt"]

    def test_recipe_inside_graph(self):
        html = _ld({
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "WebSite", "name": "Food blog"},
                {"@type": "Recipe", "recipeIngredient": ["3 eggs"]},
            ],
        })

        ingredients = extract_ingredients(html)

        assert len(ingredients) == 1
        assert ingredients[0].quantity == "3"

    def test_root_array_and_list_type(self):
        html = _ld([
            {"@type": "BreadcrumbList"},
            {"@type": ["Recipe", "NewsArticle"], "recipeIngredient": ["1 lb beef"]},
        ])

        ingredients = extract_ingredients(html)

        assert [(i.quantity, i.unit, i.name) for i in ingredients] == [("1", "lb", "beef")]

    def test_skips_invalid_json_and_non_recipe_blocks(self):
        html = (
            '<script type="application/ld+json">{not json</script>'
            + _ld({"@type": "Organization"})
            + _ld({"@type": "Recipe", "recipeIngredient": ["1 cup milk"]})
        )

        ingredients = extract_ingredients(html)

        assert [i.name for i in ingredients] == ["milk"]

    def test_html_fallback_when_no_json_ld(self):
        html = """
        <div class="wprm-recipe-ingredients">
          <ul>
            <li>2  cups
                flour</li>
            <li>1 <b>tbsp</b> sugar</li>
          </ul>
        </div>
        """

        ingredients = extract_ingredients(html)

        assert [i.raw_text for i in ingredients] == ["2 cups flour", "1 tbsp sugar"]
        assert ingredients[1].unit == "tbsp"

    def test_html_fallback_first_matching_selector_wins(self):
        html = """
        <ul class="ingredients"><li>1 cup rice</li></ul>
        <span itemprop="recipeIngredient">2 cups water</span>
        """

        ingredients = extract_ingredients(html)

        assert [i.name for i in ingredients] == ["rice"]

    def test_itemprop_fallback(self):
        html = '<p itemprop="recipeIngredient">4 slices bread</p>'

        ingredients = extract_ingredients(html)

        assert ingredients[0].unit == "slices"
        assert ingredients[0].name == "bread"

    @pytest.mark.parametrize("html", ["", "<html><body><p>No recipe here</p></body></html>"])
    def test_nothing_found(self, html):
        assert extract_ingredients(html) == []

    def test_empty_json_ld_ingredients_fall_back_to_html(self):
        html = _ld({"@type": "Recipe", "recipeIngredient": []}) + '<ul class="recipe-ingredients"><li>5 g yeast</li></ul>'

        ingredients = extract_ingredients(html)

        assert ingredients[0].unit == "g"
