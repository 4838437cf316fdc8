"""Tests for merging variant overrides into recipes."""

from proofed_engine.merger import merge_ingredients, merge_recipe_variant, unmatched_overrides
from proofed_engine.models import Ingredient


class TestMergeIngredients:
    """Tests for merge_ingredients function."""

    def test_override_replaces_in_place(self, sponge_recipe):
        overrides = [Ingredient(name="Sugar", quantity=150, unit="g")]

        merged = merge_ingredients(sponge_recipe.ingredients, overrides)

        assert [(i.name, i.quantity) for i in merged] == [
            ("Flour", 600),
            ("Sugar", 150),
            ("Butter", 200),
        ]

    def test_override_can_change_unit(self, sponge_recipe):
        overrides = [Ingredient(name="Butter", quantity=1, unit="cup")]

        merged = merge_ingredients(sponge_recipe.ingredients, overrides)

        assert merged[2] == Ingredient(name="Butter", quantity=1, unit="cup")

    def test_unmatched_overrides_appended_in_order(self, sponge_recipe):
        overrides = [
            Ingredient(name="Vanilla", quantity=1, unit="tsp"),
            Ingredient(name="Sugar", quantity=150, unit="g"),
            Ingredient(name="Lemon zest", quantity=5, unit="g"),
        ]

        merged = merge_ingredients(sponge_recipe.ingredients, overrides)

        assert [i.name for i in merged] == ["Flour", "Sugar", "Butter", "Vanilla", "Lemon zest"]

    def test_match_is_case_sensitive(self, sponge_recipe):
        overrides = [Ingredient(name="sugar", quantity=150, unit="g")]

        merged = merge_ingredients(sponge_recipe.ingredients, overrides)

        assert len(merged) == 4
        assert merged[1].quantity == 200
        assert merged[3].name == "sugar"

    def test_later_duplicate_override_wins(self, sponge_recipe):
        overrides = [
            Ingredient(name="Sugar", quantity=150, unit="g"),
            Ingredient(name="Sugar", quantity=100, unit="g"),
        ]

        merged = merge_ingredients(sponge_recipe.ingredients, overrides)

        assert len(merged) == 3
        assert merged[1].quantity == 100

    def test_no_overrides_is_a_copy(self, sponge_recipe):
        merged = merge_ingredients(sponge_recipe.ingredients, [])

        assert merged == sponge_recipe.ingredients
        assert merged[0] is not sponge_recipe.ingredients[0]

    def test_inputs_not_modified(self, sponge_recipe):
        overrides = [Ingredient(name="Sugar", quantity=150, unit="g")]

        merged = merge_ingredients(sponge_recipe.ingredients, overrides)
        merged[1].quantity = 999

        assert sponge_recipe.ingredients[1].quantity == 200
        assert overrides[0].quantity == 150


class TestMergeRecipeVariant:
    """Tests for merge_recipe_variant function."""

    def test_with_variant(self, sponge_recipe, less_sugar_variant):
        merged = merge_recipe_variant(sponge_recipe, less_sugar_variant)
        assert merged[1].quantity == 150

    def test_without_variant(self, sponge_recipe):
        merged = merge_recipe_variant(sponge_recipe)
        assert merged == sponge_recipe.ingredients


class TestUnmatchedOverrides:
    """Tests for unmatched_overrides function."""

    def test_only_additions(self, sponge_recipe):
        overrides = [
            Ingredient(name="Sugar", quantity=150, unit="g"),
            Ingredient(name="Vanilla", quantity=1, unit="tsp"),
        ]

        assert unmatched_overrides(sponge_recipe.ingredients, overrides) == [overrides[1]]
