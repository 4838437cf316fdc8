"""Recipe scaling and quantity math logic."""

import math
from dataclasses import dataclass
from typing import Literal

from .models import Ingredient, ValidationError, Variant

TinShape = Literal["round", "square"]

SCALE_PRESETS: tuple[float, ...] = (0.5, 0.75, 1.0, 1.5, 2.0)


@dataclass(frozen=True)
class ScaleOption:
    """A selectable scale factor with its display label."""

    value: float
    label: str


def round_half_up(value: float, places: int = 0) -> float:
    """
    Round to ``places`` decimals, with halves rounded up.

    Python's built-in round() rounds halves to even; quantities shown to
    the user are rounded the way the app always has (2.5 -> 3).
    """
    factor = 10**places
    return math.floor(value * factor + 0.5) / factor


def validate_scale_factor(scale_factor: float) -> float:
    """Return the scale factor, raising ValidationError unless it is positive and finite."""
    if not math.isfinite(scale_factor) or scale_factor <= 0:
        raise ValidationError(f"Scale factor must be positive, got {scale_factor}")
    return scale_factor


def scale_quantity(quantity: float, scale_factor: float) -> float:
    """
    Scale a quantity by the given factor.

    Args:
        quantity: Original quantity
        scale_factor: Factor to multiply by

    Returns:
        Scaled quantity rounded to 2 decimal places
    """
    return round_half_up(quantity * scale_factor, 2)


def de_scale_quantity(quantity: float, scale_factor: float) -> float:
    """Undo scale_quantity: a displayed quantity back to its 1x value (2 decimals)."""
    validate_scale_factor(scale_factor)
    return round_half_up(quantity / scale_factor, 2)


def scale_ingredients(ingredients: list[Ingredient], scale_factor: float) -> list[Ingredient]:
    """
    Scale all ingredient quantities.

    Args:
        ingredients: Ingredients at 1x
        scale_factor: Factor to multiply quantities by

    Returns:
        New list of scaled ingredients
    """
    validate_scale_factor(scale_factor)
    return [
        Ingredient(
            name=ingredient.name,
            quantity=scale_quantity(ingredient.quantity, scale_factor),
            unit=ingredient.unit,
        )
        for ingredient in ingredients
    ]


def calculate_scale_from_ingredient(base_amount: float, target_amount: float) -> float:
    """
    Scale factor from "I have N of this ingredient".

    Args:
        base_amount: Amount the recipe calls for (e.g., 800 g)
        target_amount: Amount available (e.g., 678 g)

    Returns:
        Scale factor rounded to 4 decimal places, or 1 if base_amount <= 0
    """
    if base_amount <= 0:
        return 1.0
    return round_half_up(target_amount / base_amount, 4)


def scale_from_ingredient(
    ingredients: list[Ingredient], name: str, target_amount: float
) -> float:
    """
    Scale factor from the available amount of a named recipe ingredient.

    Raises:
        ValidationError: If no ingredient has exactly that name
    """
    for ingredient in ingredients:
        if ingredient.name == name:
            return calculate_scale_from_ingredient(ingredient.quantity, target_amount)
    raise ValidationError(f"Recipe has no ingredient named '{name}'")


def calculate_scale_factor(
    multiplier: float | None = None,
    base_amount: float | None = None,
    target_amount: float | None = None,
) -> float:
    """
    Resolve the scale factor for a bake.

    Args:
        multiplier: A preset or custom scale (e.g., 2.0 for double)
        base_amount: Recipe amount of the ingredient the user measured
        target_amount: Amount of that ingredient the user has

    Returns:
        Scale factor to multiply quantities by

    Raises:
        ValidationError: If the multiplier is not positive, or only one of
                         base_amount/target_amount is given
    """
    if multiplier is not None:
        return validate_scale_factor(multiplier)

    if base_amount is not None or target_amount is not None:
        if base_amount is None or target_amount is None:
            raise ValidationError(
                "Scaling from an ingredient needs both the recipe amount and the amount you have"
            )
        return calculate_scale_from_ingredient(base_amount, target_amount)

    # Default: no scaling
    return 1.0


def _format_number(value: float) -> str:
    return f"{value:g}"


def format_scale_factor(scale_factor: float) -> str:
    """
    Format a scale factor for display.

    Examples:
        1 -> "1×", 0.5 -> "÷2", 0.75 -> "×0.75", 2 -> "×2"
    """
    if scale_factor == 1:
        return "1×"
    if scale_factor < 1:
        divisor = 1 / scale_factor
        if divisor.is_integer():
            return f"÷{int(divisor)}"
    return f"×{_format_number(scale_factor)}"


def get_scale_options(custom_scales: list[float] | None = None) -> list[ScaleOption]:
    """
    Preset scale factors combined with a recipe's custom ones.

    Duplicates are dropped by value and the result is sorted ascending.
    """
    values = set(SCALE_PRESETS)
    for scale in custom_scales or []:
        if scale > 0:
            values.add(float(scale))

    return [ScaleOption(value=value, label=format_scale_factor(value)) for value in sorted(values)]


def custom_scales_for_storage(custom_scales: list[float]) -> list[float]:
    """
    Clean up custom scales before saving a recipe.

    Drops 1 (the unscaled recipe), non-positive values and duplicates,
    keeping the first occurrence order.
    """
    cleaned: list[float] = []
    for scale in custom_scales:
        if scale <= 0 or scale == 1 or scale in cleaned:
            continue
        cleaned.append(float(scale))
    return cleaned


# ============================================================================
# Variant override load/save boundary
#
# Overrides are stored at 1x. Every path that shows overrides for editing
# goes through overrides_for_display, and every path that saves them goes
# through overrides_for_storage.
# ============================================================================


def overrides_for_display(overrides: list[Ingredient], scale_factor: float) -> list[Ingredient]:
    """Stored (1x) overrides scaled for editing at the current scale factor."""
    validate_scale_factor(scale_factor)
    return scale_ingredients(overrides, scale_factor)


def overrides_for_storage(overrides: list[Ingredient], scale_factor: float) -> list[Ingredient]:
    """
    Edited overrides converted back to 1x for saving.

    Rows with a blank name are dropped.
    """
    validate_scale_factor(scale_factor)
    return [
        Ingredient(
            name=override.name.strip(),
            quantity=de_scale_quantity(override.quantity, scale_factor),
            unit=override.unit,
        )
        for override in overrides
        if override.name.strip()
    ]


def load_variant_for_editing(variant: Variant, scale_factor: float) -> list[Ingredient]:
    """Overrides of a stored variant, as shown in an editor at ``scale_factor``."""
    return overrides_for_display(variant.ingredient_overrides, scale_factor)


def save_variant(name: str, edited_overrides: list[Ingredient], scale_factor: float) -> Variant:
    """Build the variant record to store from overrides edited at ``scale_factor``."""
    return Variant(name=name, ingredient_overrides=overrides_for_storage(edited_overrides, scale_factor))


# ============================================================================
# Tin size conversion
# ============================================================================


def tin_area(size: float, shape: TinShape) -> float:
    """Base area of a tin; ``size`` is the diameter (round) or side (square)."""
    if shape == "round":
        return math.pi * (size / 2) ** 2
    return size * size


def calculate_scale_from_container(
    from_size: float,
    to_size: float,
    from_shape: TinShape = "round",
    to_shape: TinShape = "round",
) -> float:
    """
    Scale factor for moving a recipe between tins, by base area.

    Example:
        6" round -> 8" round = (8/6)² ≈ 1.78

    Returns:
        Area ratio rounded to 2 decimal places

    Raises:
        ValidationError: If either size is not positive
    """
    if from_size <= 0 or to_size <= 0:
        raise ValidationError("Tin sizes must be positive")
    return round_half_up(tin_area(to_size, to_shape) / tin_area(from_size, from_shape), 2)
