"""Tests for record shapes and their validation."""

import pytest

from proofed_engine.models import (
    ContainerInfo,
    Ingredient,
    ItemUsage,
    NutritionInfo,
    ParsedIngredient,
    Recipe,
    ValidationError,
    Variant,
)


class TestIngredient:
    """Tests for the Ingredient record."""

    def test_str(self):
        assert str(Ingredient(name="Flour", quantity=600, unit="g")) == "600 g Flour"
        assert str(Ingredient(name="milk", quantity=1.5, unit="cup")) == "1.5 cup milk"
        assert str(Ingredient(name="eggs", quantity=2, unit="unit")) == "2 eggs"
        assert str(Ingredient(name="salt")) == "salt"

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            Ingredient(name="Flour", quantity=-1, unit="g")

    def test_from_dict(self):
        ingredient = Ingredient.from_dict({"name": "Sugar", "quantity": "150", "unit": "g"})
        assert ingredient == Ingredient(name="Sugar", quantity=150.0, unit="g")

    def test_from_dict_defaults(self):
        assert Ingredient.from_dict({"name": "salt"}) == Ingredient(name="salt")

    def test_from_dict_missing_name(self):
        with pytest.raises(ValidationError, match="missing required field 'name'"):
            Ingredient.from_dict({"quantity": 1})

    @pytest.mark.parametrize("quantity", ["lots", True, [1]])
    def test_from_dict_bad_quantity(self, quantity):
        with pytest.raises(ValidationError, match="must be a number"):
            Ingredient.from_dict({"name": "Sugar", "quantity": quantity})

    @pytest.mark.parametrize("quantity", ["nan", "inf", "-inf", float("nan")])
    def test_from_dict_non_finite_quantity(self, quantity):
        with pytest.raises(ValidationError, match="finite"):
            Ingredient.from_dict({"name": "Sugar", "quantity": quantity})

    @pytest.mark.parametrize("quantity", [float("nan"), float("inf")])
    def test_non_finite_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError, match="non-finite"):
            Ingredient(name="Flour", quantity=quantity, unit="g")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            Ingredient.from_dict("not an object")


class TestParsedIngredient:
    """Tests for the ParsedIngredient record."""

    def test_to_dict_includes_original_line(self):
        parsed = ParsedIngredient(name="sugar", quantity=1, unit="cup", original_line="1 cup sugar")
        assert parsed.to_dict() == {
            "name": "sugar",
            "quantity": 1,
            "unit": "cup",
            "originalLine": "1 cup sugar",
        }


class TestContainerInfo:
    """Tests for the ContainerInfo record."""

    def test_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            ContainerInfo(type="loaf_tin", count=0)

    def test_from_dict(self):
        container = ContainerInfo.from_dict(
            {"type": "muffin_tin", "count": 2, "cupSize": "mini", "cupsPerTray": 24}
        )

        assert container.count == 2
        assert container.cup_size == "mini"
        assert container.cups_per_tray == 24

    def test_to_dict_omits_unset(self):
        assert ContainerInfo(type="round_cake_tin", size=8).to_dict() == {
            "type": "round_cake_tin",
            "count": 1,
            "size": 8,
        }


class TestRecipe:
    """Tests for the Recipe record."""

    def test_round_trip(self, sponge_recipe):
        assert Recipe.from_dict(sponge_recipe.to_dict()) == sponge_recipe

    def test_store_bought_round_trip(self, store_bought_jam):
        data = store_bought_jam.to_dict()

        assert data["isStoreBought"] is True
        assert data["energyKcal100g"] == 250
        assert Recipe.from_dict(data) == store_bought_jam

    def test_invalid_container_is_dropped(self, sponge_recipe):
        data = sponge_recipe.to_dict()
        data["container"] = {"type": "round_cake_tin", "size": 8, "count": 0}

        assert Recipe.from_dict(data).container is None

    def test_non_numeric_container_size_is_dropped(self, sponge_recipe):
        data = sponge_recipe.to_dict()
        data["container"] = {"type": "round_cake_tin", "size": "large"}

        assert Recipe.from_dict(data).container is None

    def test_container_without_type_rejected(self, sponge_recipe):
        data = sponge_recipe.to_dict()
        data["container"] = {"size": 8}

        with pytest.raises(ValidationError, match="missing required field 'type'"):
            Recipe.from_dict(data)

    def test_ingredients_must_be_list(self):
        with pytest.raises(ValidationError, match="must be a list"):
            Recipe.from_dict({"name": "Bad", "ingredients": {"name": "flour"}})


class TestVariant:
    """Tests for the Variant record."""

    def test_round_trip(self, less_sugar_variant):
        data = less_sugar_variant.to_dict()

        assert data["ingredientOverrides"][0]["quantity"] == 150
        assert Variant.from_dict(data) == less_sugar_variant


class TestItemUsage:
    """Tests for the ItemUsage record."""

    @pytest.mark.parametrize("scale", [0, -2, float("nan"), float("inf")])
    def test_scale_must_be_positive_and_finite(self, sponge_recipe, scale):
        with pytest.raises(ValidationError):
            ItemUsage(recipe=sponge_recipe, scale_factor=scale)

    def test_from_dict(self, sponge_recipe, less_sugar_variant):
        usage = ItemUsage.from_dict(
            {
                "recipe": sponge_recipe.to_dict(),
                "variant": less_sugar_variant.to_dict(),
                "scaleFactor": 2,
            }
        )

        assert usage.recipe == sponge_recipe
        assert usage.variant == less_sugar_variant
        assert usage.scale_factor == 2.0

    def test_from_dict_defaults(self, sponge_recipe):
        usage = ItemUsage.from_dict({"recipe": sponge_recipe.to_dict()})

        assert usage.variant is None
        assert usage.scale_factor == 1.0

    def test_from_dict_missing_recipe(self):
        with pytest.raises(ValidationError, match="recipe"):
            ItemUsage.from_dict({"scaleFactor": 1})


class TestNutritionInfo:
    """Tests for the NutritionInfo record."""

    def test_to_dict(self):
        info = NutritionInfo(
            total_calories=8400,
            total_sugar=300.0,
            total_servings=24,
            calories_per_serving=350,
            sugar_per_serving=12.5,
        )

        assert info.to_dict() == {
            "totalCalories": 8400,
            "totalSugar": 300.0,
            "totalServings": 24,
            "caloriesPerServing": 350,
            "sugarPerServing": 12.5,
        }
