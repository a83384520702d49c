"""
Tests for combining ingredient lines into shopping-list items (sniper.merge).
"""

import pytest

from sniper.merge import combine_items, format_amount, sum_quantities
from sniper.models import ItemDraft


def draft(name, quantity=None, unit=None):
    return ItemDraft(name=name, quantity=quantity, unit=unit)


class TestSumQuantities:
    """Test cases for sum_quantities."""

    @pytest.mark.parametrize(
        "q1, q2, expected",
        [
            ("2", "3", "5"),
            ("1.5", "1", "2.5"),
            ("0.5", "0.5", "1"),
            ("1/2", "1", "1/2 + 1"),
            ("1 1/2", "2", "1 1/2 + 2"),
            (None, "2", "2"),
            ("2", None, "2"),
            ("  ", "4", "4"),
            (None, None, None),
        ],
    )
    def test_sum(self, q1, q2, expected):
        assert sum_quantities(q1, q2) == expected


class TestFormatAmount:
    def test_skips_absent_parts(self):
        assert format_amount("2", "tbsp") == "2 tbsp"
        assert format_amount(None, "cup") == "cup"
        assert format_amount("3", None) == "3"
        assert format_amount(None, None) == ""


class TestCombineItems:
    """Test cases for combine_items."""

    def test_same_unit_is_summed(self):
        result = combine_items([draft("flour", "2", "cups"), draft("flour", "3", "cups")])

        assert result == [draft("flour", "5", "cups")]

    def test_names_and_units_compare_case_insensitively(self):
        result = combine_items([draft("Flour", "2", "Cups"), draft("flour", "1", "cups")])

        assert len(result) == 1
        assert result[0].name == "Flour"
        assert result[0].quantity == "3"
        assert result[0].unit == "Cups"

    def test_different_units_are_kept_side_by_side(self):
        result = combine_items([draft("butter", "2", "tbsp"), draft("butter", "1", "cup")])

        assert result == [draft("butter", "2 tbsp + 1 cup", None)]

    def test_missing_unit_adopts_the_other(self):
        result = combine_items([draft("olive oil", "1/4", "cup"), draft("olive oil")])

        assert result == [draft("olive oil", "1/4", "cup")]

    def test_missing_unit_on_existing_side(self):
        result = combine_items([draft("eggs", "2"), draft("eggs", "1", "dozen")])

        assert result == [draft("eggs", "3", "dozen")]

    def test_both_without_unit(self):
        result = combine_items([draft("eggs", "2"), draft("eggs", "3")])

        assert result == [draft("eggs", "5")]

    def test_keeps_first_seen_order(self):
        result = combine_items([
            draft("salt"),
            draft("flour", "1", "cup"),
            draft("salt"),
            draft("sugar", "2", "tbsp"),
        ])

        assert [item.name for item in result] == ["salt", "flour", "sugar"]

    def test_inputs_are_not_modified(self):
        first = draft("flour", "2", "cups")
        combine_items([first, draft("flour", "3", "cups")])

        assert first.quantity == "2"

    def test_empty_input(self):
        assert combine_items([]) == []
