"""Proofed Engine - Recipe scaling and nutrition estimation for baking experiments."""

__version__ = "1.0.0"

from .bake import estimate_bake_nutrition
from .ingredient_parser import parse_ingredients
from .merger import merge_ingredients, merge_recipe_variant
from .models import (
    ContainerInfo,
    Ingredient,
    ItemUsage,
    NutritionInfo,
    ParsedIngredient,
    Recipe,
    ValidationError,
    Variant,
)
from .nutrition import (
    build_nutrition_info,
    estimate_product_nutrition,
    estimate_total_calories,
    extract_total_sugar,
)
from .products import ProductLookup, ProductLookupError
from .scaler import (
    calculate_scale_from_ingredient,
    get_scale_options,
    overrides_for_display,
    overrides_for_storage,
    scale_ingredients,
)
from .servings import estimate_servings, estimate_total_servings

__all__ = [
    "ContainerInfo",
    "Ingredient",
    "ItemUsage",
    "NutritionInfo",
    "ParsedIngredient",
    "Recipe",
    "ValidationError",
    "Variant",
    "parse_ingredients",
    "merge_ingredients",
    "merge_recipe_variant",
    "scale_ingredients",
    "calculate_scale_from_ingredient",
    "get_scale_options",
    "overrides_for_display",
    "overrides_for_storage",
    "estimate_total_calories",
    "extract_total_sugar",
    "estimate_product_nutrition",
    "build_nutrition_info",
    "estimate_servings",
    "estimate_total_servings",
    "estimate_bake_nutrition",
    "ProductLookup",
    "ProductLookupError",
]
