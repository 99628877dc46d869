"""
Tests for ingredient slot extraction and projection.

These tests verify that:
- Only slots with a non-empty ingredient name are projected
- Slot order is preserved exactly, without deduplication
- Measures are trimmed and never leave a leading space
- Malformed slots contribute nothing instead of raising
"""

import pytest

from compass.utils.ingredients import (
    INGREDIENT_SLOT_COUNT,
    format_ingredient,
    project_ingredients,
    slots_from_api,
)


class TestProjectIngredients:
    """Tests for project_ingredients."""

    def test_formats_measure_and_ingredient(self):
        slots = [("Tequila", "1 1/2 oz "), ("Triple sec", "1/2 oz "), ("Lime juice", "1 oz ")]
        assert project_ingredients(slots) == ["1 1/2 oz Tequila", "1/2 oz Triple sec", "1 oz Lime juice"]

    @pytest.mark.parametrize("measure", ["", "   ", "\n", None])
    def test_blank_measure_yields_bare_ingredient(self, measure):
        """A blank or missing measure must not leave a leading space."""
        assert project_ingredients([("Salt", measure)]) == ["Salt"]

    @pytest.mark.parametrize("ingredient", ["", None])
    def test_skips_slots_without_ingredient(self, ingredient):
        slots = [(ingredient, "1 dash"), ("Bitters", "2 dashes")]
        assert project_ingredients(slots) == ["2 dashes Bitters"]

    def test_output_length_matches_non_empty_names(self):
        slots = [(None, None)] * INGREDIENT_SLOT_COUNT
        slots[0] = ("Gin", "2 oz")
        slots[6] = ("Tonic", None)
        slots[14] = ("Lime", "1 wedge")
        result = project_ingredients(slots)
        assert len(result) == 3
        assert len(result) <= INGREDIENT_SLOT_COUNT

    def test_preserves_slot_order_and_duplicates(self):
        slots = [("Sugar", "1 tsp"), ("Water", None), ("Sugar", "1 cube")]
        assert project_ingredients(slots) == ["1 tsp Sugar", "Water", "1 cube Sugar"]

    def test_projection_is_idempotent(self):
        slots = [("Rum", "2 oz"), (None, "1 oz"), ("Mint", "")]
        assert project_ingredients(slots) == project_ingredients(slots)

    def test_malformed_slots_are_ignored(self):
        slots = [None, ("Vodka",), ("Vodka", "1 oz"), (42, "1 oz"), ("Ice", 3)]
        assert project_ingredients(slots) == ["1 oz Vodka", "Ice"]

    def test_empty_input(self):
        assert project_ingredients([]) == []


class TestSlotsFromApi:
    """Tests for slots_from_api."""

    def test_always_returns_fifteen_slots(self, margarita_raw):
        slots = slots_from_api(margarita_raw)
        assert len(slots) == INGREDIENT_SLOT_COUNT
        assert slots[0] == ("Tequila", "1 1/2 oz ")
        assert slots[3] == (None, None)

    def test_missing_keys_become_none(self, gin_fizz_raw):
        assert slots_from_api(gin_fizz_raw) == [(None, None)] * INGREDIENT_SLOT_COUNT

    def test_non_string_values_become_none(self):
        slots = slots_from_api({"strIngredient1": 7, "strMeasure1": ["1 oz"]})
        assert slots[0] == (None, None)


def test_format_ingredient_trims_measure():
    assert format_ingredient("Lime juice", "  1 oz \t") == "1 oz Lime juice"
