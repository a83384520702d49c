"""
Tests for the shopping-list service (sniper.shopping_lists).
"""

import pytest

from sniper import recipes as recipe_service
from sniper import shopping_lists as list_service
from sniper.errors import NotFoundError


@pytest.fixture
def recipe_ids(fake_pages):
    """Two stored recipes that share flour."""
    fake_pages["https://example.com/pancakes"] = ("Pancakes", ["2 cups flour", "1 tbsp sugar", "Salt"])
    fake_pages["https://example.com/bread"] = ("Bread", ["3 cups flour", "2 tsp yeast", "Salt"])
    pancakes = recipe_service.add_recipe("https://example.com/pancakes")
    bread = recipe_service.add_recipe("https://example.com/bread")
    return pancakes.id, bread.id


def _items(detail):
    return [(item.name, item.quantity, item.unit) for item in detail.items]


class TestCreateShoppingList:
    """Test cases for create_shopping_list."""

    def test_combines_ingredients_across_recipes(self, recipe_ids):
        detail = list_service.create_shopping_list("Weekend", list(recipe_ids))

        assert detail.name == "Weekend"
        assert [recipe.id for recipe in detail.recipes] == sorted(recipe_ids)
        assert _items(detail) == [
            ("flour", "5", "cups"),
            ("sugar", "1", "tbsp"),
            ("Salt", None, None),
            ("yeast", "2", "tsp"),
        ]
        assert all(item.id is not None for item in detail.items)

    def test_unknown_ids_are_skipped(self, recipe_ids):
        pancakes_id, _ = recipe_ids

        detail = list_service.create_shopping_list("Brunch", [pancakes_id, 999])

        assert [recipe.id for recipe in detail.recipes] == [pancakes_id]
        assert len(detail.items) == 3

    def test_no_valid_recipes(self, recipe_ids):
        with pytest.raises(NotFoundError, match=r"No valid recipes found for IDs: \[998, 999\]"):
            list_service.create_shopping_list("Nothing", [998, 999])

        assert list_service.list_shopping_lists() == []

    def test_duplicate_ids_link_once(self, recipe_ids):
        pancakes_id, _ = recipe_ids

        detail = list_service.create_shopping_list("Twice", [pancakes_id, pancakes_id])

        assert len(detail.recipes) == 1
        assert ("flour", "2", "cups") in _items(detail)


class TestReadShoppingLists:
    def test_summaries(self, recipe_ids):
        first = list_service.create_shopping_list("A", [recipe_ids[0]])
        second = list_service.create_shopping_list("B", list(recipe_ids))

        summaries = list_service.list_shopping_lists()

        assert [(s.id, s.name, s.recipe_count, s.item_count) for s in summaries] == [
            (first.id, "A", 1, 3),
            (second.id, "B", 2, 4),
        ]

    def test_get_missing_list(self):
        with pytest.raises(NotFoundError, match="Shopping list not found: 42"):
            list_service.get_shopping_list(42)


class TestUpdateShoppingList:
    """Test cases for update_shopping_list (rename + replace all items)."""

    def test_keeps_ids_adds_new_rows_and_drops_missing(self, recipe_ids):
        created = list_service.create_shopping_list("Brunch", [recipe_ids[0]])
        flour, sugar, salt = created.items

        updated = list_service.update_shopping_list(created.id, "Brunch for 4", [
            {"id": salt.id, "name": "Sea salt", "quantity": None, "unit": None},
            {"id": None, "name": "Maple syrup", "quantity": "1", "unit": "bottle"},
            {"id": flour.id, "name": "flour", "quantity": "4", "unit": "cups"},
        ])

        assert updated.name == "Brunch for 4"
        assert _items(updated) == [
            ("Sea salt", None, None),
            ("Maple syrup", "1", "bottle"),
            ("flour", "4", "cups"),
        ]
        assert updated.items[0].id == salt.id
        assert updated.items[2].id == flour.id
        assert updated.items[1].id not in {flour.id, sugar.id, salt.id}

        assert list_service.get_shopping_list(created.id) == updated

    def test_foreign_item_id_becomes_new_row(self, recipe_ids):
        first = list_service.create_shopping_list("A", [recipe_ids[0]])
        second = list_service.create_shopping_list("B", [recipe_ids[1]])
        foreign = second.items[0]

        updated = list_service.update_shopping_list(first.id, "A", [
            {"id": foreign.id, "name": "borrowed", "quantity": None, "unit": None},
        ])

        assert updated.items[0].id != foreign.id
        assert list_service.get_shopping_list(second.id).items[0] == foreign

    def test_empty_items_clears_list_but_keeps_recipes(self, recipe_ids):
        created = list_service.create_shopping_list("A", list(recipe_ids))

        updated = list_service.update_shopping_list(created.id, "A", [])

        assert updated.items == []
        assert len(updated.recipes) == 2

    def test_missing_list(self):
        with pytest.raises(NotFoundError):
            list_service.update_shopping_list(7, "x", [])


class TestAddRecipesToShoppingList:
    """Test cases for add_recipes_to_shopping_list."""

    def test_merges_new_recipe_into_existing_items(self, recipe_ids):
        pancakes_id, bread_id = recipe_ids
        created = list_service.create_shopping_list("Bake day", [pancakes_id])

        updated = list_service.add_recipes_to_shopping_list(created.id, [bread_id])

        assert [recipe.id for recipe in updated.recipes] == [pancakes_id, bread_id]
        assert _items(updated) == [
            ("flour", "5", "cups"),
            ("sugar", "1", "tbsp"),
            ("Salt", None, None),
            ("yeast", "2", "tsp"),
        ]

    def test_same_recipe_again_doubles_without_second_link(self, recipe_ids):
        pancakes_id, _ = recipe_ids
        created = list_service.create_shopping_list("Brunch", [pancakes_id])

        updated = list_service.add_recipes_to_shopping_list(created.id, [pancakes_id])

        assert len(updated.recipes) == 1
        assert ("flour", "4", "cups") in _items(updated)
        assert len(updated.items) == 3

    def test_edited_items_are_kept_when_merging(self, recipe_ids):
        pancakes_id, bread_id = recipe_ids
        created = list_service.create_shopping_list("Brunch", [pancakes_id])
        list_service.update_shopping_list(created.id, "Brunch", [
            {"id": None, "name": "coffee", "quantity": "1", "unit": "bag"},
        ])

        updated = list_service.add_recipes_to_shopping_list(created.id, [bread_id])

        assert _items(updated)[0] == ("coffee", "1", "bag")
        assert ("flour", "3", "cups") in _items(updated)

    def test_missing_list(self, recipe_ids):
        with pytest.raises(NotFoundError, match="Shopping list not found: 77"):
            list_service.add_recipes_to_shopping_list(77, [recipe_ids[0]])

    def test_no_valid_recipes_leaves_list_untouched(self, recipe_ids):
        created = list_service.create_shopping_list("Brunch", [recipe_ids[0]])

        with pytest.raises(NotFoundError, match=r"No valid recipes found for IDs: \[9999\]"):
            list_service.add_recipes_to_shopping_list(created.id, [9999])

        assert list_service.get_shopping_list(created.id) == created


class TestDeleteShoppingList:
    def test_delete_leaves_recipes(self, recipe_ids):
        created = list_service.create_shopping_list("A", list(recipe_ids))

        list_service.delete_shopping_list(created.id)

        assert list_service.list_shopping_lists() == []
        assert len(recipe_service.list_recipes()) == 2
        with pytest.raises(NotFoundError):
            list_service.get_shopping_list(created.id)

    def test_delete_missing_list(self):
        with pytest.raises(NotFoundError):
            list_service.delete_shopping_list(3)
