"""Bake nutrition: combine the items used in one bake into a single estimate."""

import logging
from dataclasses import dataclass

from .merger import merge_recipe_variant
from .models import Ingredient, ItemUsage, NutritionInfo
from .nutrition import (
    build_nutrition_info,
    estimate_product_nutrition,
    estimate_total_calories,
    estimate_total_calories_from_usages,
    extract_total_sugar,
    extract_total_sugar_from_usages,
)
from .scaler import round_half_up, scale_ingredients
from .servings import ServingsAggregationPolicy, estimate_total_servings, max_servings

logger = logging.getLogger(__name__)


@dataclass
class UsageEstimate:
    """Calories and sugar contributed by one item usage."""

    name: str
    calories: int
    sugar: float
    scale_factor: float
    store_bought: bool = False


def effective_ingredients(usage: ItemUsage) -> list[Ingredient]:
    """Recipe ingredients with the variant applied, scaled to the usage."""
    merged = merge_recipe_variant(usage.recipe, usage.variant)
    return scale_ingredients(merged, usage.scale_factor)


def _product_amount(usage: ItemUsage) -> tuple[float, str | None] | None:
    if usage.usage_quantity is None or usage.usage_quantity <= 0:
        return None
    return usage.usage_quantity * usage.scale_factor, usage.usage_unit


def estimate_usage(usage: ItemUsage) -> UsageEstimate:
    """
    Estimate calories and sugar for one item usage.

    Homemade items are estimated from their merged, scaled ingredients.
    Store-bought items use the product's per-100 g figures for the usage
    quantity multiplied by the usage's scale factor. Without a usage
    quantity they contribute nothing.

    Args:
        usage: The item usage

    Returns:
        UsageEstimate for the item
    """
    recipe = usage.recipe

    if recipe.store_bought:
        amount = _product_amount(usage)
        if amount is None:
            logger.debug("No usage quantity for store-bought %r, counting nothing", recipe.name)
            calories, sugar = 0, 0.0
        else:
            quantity, unit = amount
            calories, sugar = estimate_product_nutrition(
                quantity, unit, recipe.energy_kcal_100g, recipe.sugars_100g
            )
    else:
        scaled = effective_ingredients(usage)
        calories = estimate_total_calories(scaled)
        sugar = extract_total_sugar(scaled)

    return UsageEstimate(
        name=recipe.name,
        calories=calories,
        sugar=sugar,
        scale_factor=usage.scale_factor,
        store_bought=recipe.store_bought,
    )


def estimate_bake_servings(
    usages: list[ItemUsage],
    policy: ServingsAggregationPolicy = max_servings,
) -> int:
    """Serving count from the containers of the usages that have one."""
    containers = [
        (usage.recipe.container, usage.scale_factor)
        for usage in usages
        if usage.recipe.container is not None
    ]
    return estimate_total_servings(containers, policy)


def estimate_bake_nutrition(
    usages: list[ItemUsage],
    servings: int | None = None,
    policy: ServingsAggregationPolicy = max_servings,
) -> NutritionInfo:
    """
    Estimate nutrition for a bake combining several items.

    Homemade items are folded by their merged, scaled ingredient lists;
    store-bought items add their product estimates on top.

    Args:
        usages: Items used in the bake
        servings: User-entered slice count; estimated from containers if None
        policy: How per-item serving estimates combine

    Returns:
        NutritionInfo with totals and per-serving figures
    """
    homemade = [
        (effective_ingredients(usage), 1.0) for usage in usages if not usage.recipe.store_bought
    ]
    store_bought = [estimate_usage(usage) for usage in usages if usage.recipe.store_bought]

    total_calories = estimate_total_calories_from_usages(homemade) + sum(
        estimate.calories for estimate in store_bought
    )
    total_sugar = round_half_up(
        extract_total_sugar_from_usages(homemade)
        + sum(estimate.sugar for estimate in store_bought),
        1,
    )

    if servings is None:
        servings = estimate_bake_servings(usages, policy)

    logger.debug(
        "Bake of %d item(s): %s kcal, %s g sugar, %s servings",
        len(usages),
        total_calories,
        total_sugar,
        servings,
    )

    return build_nutrition_info(total_calories, total_sugar, servings)
