"""Resolve a variant's ingredient overrides against its base recipe."""

from .models import Ingredient, Recipe, Variant


def merge_ingredients(base: list[Ingredient], overrides: list[Ingredient]) -> list[Ingredient]:
    """
    Apply variant overrides to a base ingredient list.

    An override replaces the base ingredient with exactly the same name
    (case-sensitive) in place. Overrides that match nothing are appended
    after all base ingredients, in their original order. Neither input
    list is modified.

    Args:
        base: The recipe's ingredients
        overrides: The variant's overrides (stored at 1x scale)

    Returns:
        New merged ingredient list
    """
    # Later duplicates win but keep the first one's position
    pending: dict[str, Ingredient] = {}
    for override in overrides:
        pending[override.name] = override

    merged: list[Ingredient] = []
    for ingredient in base:
        override = pending.pop(ingredient.name, None)
        if override is not None:
            merged.append(
                Ingredient(name=ingredient.name, quantity=override.quantity, unit=override.unit)
            )
        else:
            merged.append(
                Ingredient(name=ingredient.name, quantity=ingredient.quantity, unit=ingredient.unit)
            )

    for override in pending.values():
        merged.append(Ingredient(name=override.name, quantity=override.quantity, unit=override.unit))

    return merged


def merge_recipe_variant(recipe: Recipe, variant: Variant | None = None) -> list[Ingredient]:
    """Effective 1x ingredient list for a recipe, with an optional variant applied."""
    if variant is None:
        return merge_ingredients(recipe.ingredients, [])
    return merge_ingredients(recipe.ingredients, variant.ingredient_overrides)


def unmatched_overrides(base: list[Ingredient], overrides: list[Ingredient]) -> list[Ingredient]:
    """Overrides that add ingredients not present in the base list."""
    base_names = {ingredient.name for ingredient in base}
    return [override for override in overrides if override.name not in base_names]
