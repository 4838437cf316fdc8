"""Calorie and sugar estimates from ingredient lists and product data.

The figures come from static per-100 g tables and are rough estimates for
home baking, not a validated nutrition database.
"""

import logging
from collections.abc import Iterable

from .models import Ingredient, NutritionInfo
from .scaler import round_half_up
from .units import calorie_grams, sugar_grams, weight_grams

logger = logging.getLogger(__name__)

DEFAULT_KCAL_PER_100G = 200

# kcal per 100 g. Lookup takes the first entry whose key is contained in the
# ingredient name (or contains it), so a key must come before any more
# general key it contains ("brown sugar" before "sugar").
CALORIE_DENSITIES: tuple[tuple[str, float], ...] = (
    ("water", 0),
    # Flours, starches and raising agents
    ("self raising flour", 350),
    ("self-raising flour", 350),
    ("plain flour", 364),
    ("all-purpose flour", 364),
    ("bread flour", 361),
    ("wholemeal flour", 340),
    ("whole wheat flour", 340),
    ("almond flour", 571),
    ("ground almonds", 579),
    ("coconut flour", 400),
    ("rice flour", 366),
    ("cornflour", 381),
    ("cornstarch", 381),
    ("flour", 364),
    ("semolina", 360),
    ("oats", 389),
    ("cocoa powder", 228),
    ("cocoa", 228),
    ("baking powder", 53),
    ("baking soda", 0),
    ("bicarbonate of soda", 0),
    ("yeast", 325),
    ("gelatine", 335),
    # Sugars and syrups
    ("icing sugar", 389),
    ("powdered sugar", 389),
    ("brown sugar", 380),
    ("caster sugar", 387),
    ("granulated sugar", 387),
    ("muscovado", 380),
    ("demerara", 380),
    ("sugar", 387),
    ("honey", 304),
    ("maple syrup", 260),
    ("golden syrup", 325),
    ("corn syrup", 286),
    ("syrup", 300),
    ("black treacle", 290),
    ("treacle", 290),
    ("molasses", 290),
    ("agave", 310),
    ("condensed milk", 321),
    ("evaporated milk", 134),
    ("jam", 250),
    # Chocolate
    ("chocolate chips", 479),
    ("dark chocolate", 598),
    ("milk chocolate", 535),
    ("white chocolate", 539),
    ("chocolate", 546),
    # Fats
    ("peanut butter", 588),
    ("buttermilk", 40),
    ("butter", 717),
    ("margarine", 717),
    ("coconut oil", 862),
    ("oil", 884),
    ("shortening", 884),
    ("lard", 902),
    # Nuts, seeds and coconut
    ("almond milk", 17),
    ("coconut milk", 230),
    ("desiccated coconut", 660),
    ("coconut", 354),
    ("almonds", 579),
    ("walnuts", 654),
    ("pecans", 691),
    ("hazelnuts", 628),
    ("peanuts", 567),
    ("pistachios", 560),
    # Dairy and eggs
    ("ice cream", 207),
    ("cream cheese", 342),
    ("sour cream", 198),
    ("double cream", 449),
    ("heavy cream", 340),
    ("whipping cream", 340),
    ("single cream", 193),
    ("cream", 340),
    ("mascarpone", 429),
    ("ricotta", 174),
    ("cheese", 402),
    ("greek yogurt", 97),
    ("yogurt", 61),
    ("yoghurt", 61),
    ("milk", 42),
    ("egg white", 52),
    ("egg yolk", 322),
    ("egg", 155),
    # Fruit and vegetables
    ("lemon juice", 22),
    ("lemon zest", 47),
    ("lemon", 29),
    ("orange juice", 45),
    ("orange zest", 97),
    ("orange", 47),
    ("banana", 89),
    ("apple", 52),
    ("blueberries", 57),
    ("raspberries", 52),
    ("strawberries", 32),
    ("raisins", 299),
    ("sultanas", 299),
    ("dates", 282),
    ("carrot", 41),
    ("pumpkin", 26),
    ("zucchini", 17),
    ("courgette", 17),
    # Flavourings
    ("vanilla extract", 288),
    ("vanilla", 288),
    ("cinnamon", 247),
    ("nutmeg", 525),
    ("ginger", 80),
    ("espresso", 9),
    ("coffee", 2),
    ("salt", 0),
)

_CALORIE_INDEX: dict[str, float] = dict(CALORIE_DENSITIES)

# Pure sugars: all of their weight counts as sugar
SUGAR_KEYWORDS: tuple[str, ...] = (
    "sugar",
    "caster sugar",
    "granulated sugar",
    "brown sugar",
    "light brown sugar",
    "dark brown sugar",
    "icing sugar",
    "powdered sugar",
    "confectioners sugar",
    "muscovado",
    "demerara",
    "turbinado",
)

# Liquid sugars: fraction of their weight that is sugar. Checked in order.
LIQUID_SUGARS: tuple[tuple[str, float], ...] = (
    ("honey", 0.82),
    ("maple syrup", 0.67),
    ("golden syrup", 0.73),
    ("black treacle", 0.65),
    ("treacle", 0.73),
    ("molasses", 0.75),
    ("corn syrup", 0.78),
    ("agave syrup", 0.76),
    ("agave nectar", 0.76),
    ("agave", 0.76),
)


def normalize_ingredient_name(name: str) -> str:
    """Normalize an ingredient name for table lookups."""
    return name.lower().strip()


# ============================================================================
# Calories
# ============================================================================


def lookup_calorie_density(name: str) -> float:
    """
    Kilocalories per 100 g for an ingredient name.

    Tries an exact match, then the first table entry that contains or is
    contained in the name, then falls back to DEFAULT_KCAL_PER_100G.
    """
    normalized = normalize_ingredient_name(name)

    if normalized in _CALORIE_INDEX:
        return _CALORIE_INDEX[normalized]

    if normalized:
        for key, kcal in CALORIE_DENSITIES:
            if key in normalized or normalized in key:
                return kcal

    logger.debug("No calorie density for %r, assuming %s kcal/100g", name, DEFAULT_KCAL_PER_100G)
    return DEFAULT_KCAL_PER_100G


def ingredient_calories(ingredient: Ingredient, scale_factor: float = 1.0) -> float:
    """Unrounded calories for one ingredient at the given scale."""
    grams = calorie_grams(ingredient.name, ingredient.quantity * scale_factor, ingredient.unit)
    return grams / 100 * lookup_calorie_density(ingredient.name)


def estimate_total_calories(ingredients: list[Ingredient], scale_factor: float = 1.0) -> int:
    """
    Estimate total calories for a list of ingredients.

    Args:
        ingredients: Ingredients at 1x (or already scaled, with scale_factor 1)
        scale_factor: Scale factor to apply

    Returns:
        Total kilocalories rounded to the nearest 10
    """
    total = sum(ingredient_calories(ingredient, scale_factor) for ingredient in ingredients)
    return int(round_half_up(total / 10) * 10)


def estimate_total_calories_from_usages(
    usages: Iterable[tuple[list[Ingredient], float]],
) -> int:
    """Sum of estimate_total_calories over (ingredients, scale_factor) pairs."""
    return sum(estimate_total_calories(ingredients, scale) for ingredients, scale in usages)


# ============================================================================
# Sugar
# ============================================================================


def is_pure_sugar(name: str) -> bool:
    """Check if an ingredient is a pure sugar."""
    normalized = normalize_ingredient_name(name)
    return any(keyword in normalized for keyword in SUGAR_KEYWORDS)


def liquid_sugar_ratio(name: str) -> float | None:
    """Sugar fraction of a liquid sugar, or None if the ingredient is not one."""
    normalized = normalize_ingredient_name(name)
    for keyword, ratio in LIQUID_SUGARS:
        if keyword in normalized:
            return ratio
    return None


def sugar_ratio(name: str) -> float:
    """Fraction of an ingredient's weight that counts as sugar (0 for non-sugars)."""
    if is_pure_sugar(name):
        return 1.0
    ratio = liquid_sugar_ratio(name)
    return ratio if ratio is not None else 0.0


def ingredient_sugar(ingredient: Ingredient, scale_factor: float = 1.0) -> float:
    """Unrounded sugar grams for one ingredient at the given scale."""
    ratio = sugar_ratio(ingredient.name)
    if ratio == 0:
        return 0.0
    return sugar_grams(ingredient.quantity * scale_factor, ingredient.unit) * ratio


def extract_total_sugar(ingredients: list[Ingredient], scale_factor: float = 1.0) -> float:
    """
    Extract total sugar content in grams from a list of ingredients.

    Args:
        ingredients: Ingredients at 1x (or already scaled, with scale_factor 1)
        scale_factor: Scale factor to apply

    Returns:
        Total sugar in grams, rounded to 1 decimal place
    """
    total = sum(ingredient_sugar(ingredient, scale_factor) for ingredient in ingredients)
    return round_half_up(total, 1)


def extract_total_sugar_from_usages(usages: Iterable[tuple[list[Ingredient], float]]) -> float:
    """Sum of extract_total_sugar over (ingredients, scale_factor) pairs."""
    total = sum(extract_total_sugar(ingredients, scale) for ingredients, scale in usages)
    return round_half_up(total, 1)


# ============================================================================
# Store-bought products
# ============================================================================


def estimate_product_nutrition(
    quantity: float,
    unit: str | None,
    energy_kcal_100g: float | None,
    sugars_100g: float | None,
) -> tuple[int, float]:
    """
    Calories and sugar for an amount of a purchased product.

    Args:
        quantity: Amount used
        unit: Unit of the amount (weight/volume table; unknown units are grams)
        energy_kcal_100g: Product energy per 100 g, if known
        sugars_100g: Product sugars per 100 g, if known

    Returns:
        Tuple of (calories, sugar_grams); a missing figure contributes 0
    """
    grams = weight_grams(quantity, unit)

    calories = 0
    if energy_kcal_100g is not None:
        calories = int(round_half_up(grams / 100 * energy_kcal_100g))

    sugar = 0.0
    if sugars_100g is not None:
        sugar = round_half_up(grams / 100 * sugars_100g, 1)

    return calories, sugar


# ============================================================================
# Per serving
# ============================================================================


def build_nutrition_info(total_calories: int, total_sugar: float, servings: int) -> NutritionInfo:
    """
    Combine totals and a serving count into per-serving figures.

    The serving count is floored at 1.
    """
    servings = max(1, int(servings))
    return NutritionInfo(
        total_calories=total_calories,
        total_sugar=total_sugar,
        total_servings=servings,
        calories_per_serving=int(round_half_up(total_calories / servings)),
        sugar_per_serving=round_half_up(total_sugar / servings, 1),
    )
