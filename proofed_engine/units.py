"""Unit normalization and gram conversion tables for nutrition estimates."""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitTable:
    """A unit -> grams table with its own policy for unknown units.

    Unknown tokens listed in ``zero_units`` resolve to 0 grams; any other
    unknown token passes the quantity through unchanged (assume grams).
    """

    name: str
    grams: dict[str, float]
    zero_units: frozenset[str] = frozenset()

    def factor(self, unit: str | None) -> float | None:
        """Grams per unit, or None if the unit is not in the table."""
        return self.grams.get(normalize_unit(unit))

    def to_grams(self, quantity: float, unit: str | None) -> float:
        """
        Convert a quantity to grams using this table.

        Args:
            quantity: Amount in ``unit``
            unit: Free-form unit token (case and surrounding space ignored)

        Returns:
            Gram equivalent
        """
        token = normalize_unit(unit)
        factor = self.grams.get(token)
        if factor is not None:
            return quantity * factor

        if token in self.zero_units:
            return 0.0

        logger.debug("%s table: unknown unit %r, assuming grams", self.name, token)
        return quantity


# Weight and volume conversions shared by all tables (1 ml treated as 1 g)
_WEIGHT_GRAMS: dict[str, float] = {
    "g": 1.0,
    "gram": 1.0,
    "grams": 1.0,
    "kg": 1000.0,
    "kilogram": 1000.0,
    "oz": 28.35,
    "ounce": 28.35,
    "lb": 453.6,
    "pound": 453.6,
    "ml": 1.0,
    "l": 1000.0,
}

# Volume measures approximated for granulated sugar
SUGAR_UNITS = UnitTable(
    name="sugar",
    grams={
        **_WEIGHT_GRAMS,
        "cup": 200.0,
        "cups": 200.0,
        "tbsp": 12.5,
        "tablespoon": 12.5,
        "tsp": 4.0,
        "teaspoon": 4.0,
    },
    # A bare count ("2 eggs") carries no sugar mass
    zero_units=frozenset({"", "unit"}),
)

# Volume measures approximated for general ingredients (water density)
CALORIE_UNITS = UnitTable(
    name="calorie",
    grams={
        **_WEIGHT_GRAMS,
        "cup": 240.0,
        "cups": 240.0,
        "tbsp": 15.0,
        "tablespoon": 15.0,
        "tsp": 5.0,
        "teaspoon": 5.0,
    },
)

# Plain weight table for purchased products
WEIGHT_UNITS = UnitTable(name="weight", grams=dict(_WEIGHT_GRAMS))

EGG_GRAMS = 50.0
EGG_COUNT_UNITS = frozenset({"", "unit", "large", "medium"})


def normalize_unit(unit: str | None) -> str:
    """Canonical form of a unit token: lower-cased and trimmed."""
    if unit is None:
        return ""
    return unit.lower().strip()


def is_egg(name: str) -> bool:
    """Whether an ingredient name refers to whole eggs counted by the piece."""
    lowered = name.lower()
    return "egg" in lowered and "eggnog" not in lowered


def calorie_grams(name: str, quantity: float, unit: str | None) -> float:
    """
    Convert an ingredient quantity to grams for calorie estimation.

    Eggs counted by the piece (no unit, "unit", "large" or "medium") weigh
    50 g each regardless of the table.

    Args:
        name: Ingredient name
        quantity: Amount in ``unit``
        unit: Unit token

    Returns:
        Gram equivalent
    """
    if is_egg(name) and normalize_unit(unit) in EGG_COUNT_UNITS:
        return EGG_GRAMS * quantity
    return CALORIE_UNITS.to_grams(quantity, unit)


def sugar_grams(quantity: float, unit: str | None) -> float:
    """Convert an ingredient quantity to grams for sugar estimation."""
    return SUGAR_UNITS.to_grams(quantity, unit)


def weight_grams(quantity: float, unit: str | None) -> float:
    """Convert a purchased-product usage quantity to grams."""
    return WEIGHT_UNITS.to_grams(quantity, unit)


def parse_package_size(package_size: str | None) -> tuple[float, str] | None:
    """
    Parse a product package size string.

    Examples:
        "397 g" -> (397.0, "g")
        "1.5kg" -> (1.5, "kg")
        "1,5 l" -> (1.5, "l")
        "ca. 400g" -> (400.0, "g")

    Returns:
        Tuple of (value, unit) or None if parsing fails
    """
    if not package_size:
        return None

    text = package_size.strip().lower()

    # Remove common prefixes
    text = re.sub(r"^(ca\.?|cirka|approximately|approx\.?|~)\s*", "", text)

    match = re.search(r"(\d+(?:[.,]\d+)?)\s*([a-z]+)", text)
    if not match:
        return None

    try:
        value = float(match.group(1).replace(",", "."))
    except ValueError:
        return None

    return value, match.group(2)
