"""Parse pasted ingredient lists into draft ingredients for review."""

import logging
import re

from .models import Ingredient, ParsedIngredient

logger = logging.getLogger(__name__)

# Unit tokens recognised after a quantity, mapped to their canonical form
UNIT_ALIASES: dict[str, str] = {
    # Weight
    "g": "g",
    "gram": "g",
    "grams": "g",
    "kg": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "lb": "lb",
    "lbs": "lb",
    "pound": "lb",
    "pounds": "lb",
    # Volume
    "ml": "ml",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "l": "L",
    "liter": "L",
    "liters": "L",
    "litre": "L",
    "litres": "L",
    "tsp": "tsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tbsp": "tbsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "cup": "cup",
    "cups": "cup",
    "fl oz": "fl oz",
    "fluid ounce": "fl oz",
    "fluid ounces": "fl oz",
    # Count
    "unit": "unit",
    "piece": "piece",
    "pieces": "piece",
    # Other
    "pinch": "pinch",
}

# Size words that act as units for whole items ("2 large eggs")
SIZE_UNITS = {"large", "medium", "small", "extra-large", "xl"}

# Fraction to decimal mapping
UNICODE_FRACTIONS: dict[str, float] = {
    "½": 1 / 2,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 1 / 4,
    "¾": 3 / 4,
    "⅕": 1 / 5,
    "⅖": 2 / 5,
    "⅗": 3 / 5,
    "⅘": 4 / 5,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
}

# "2,000" is a thousands separator, "1,5" a decimal comma
_THOUSANDS = r"\d{1,3}(?:,\d{3})+"
_NUMBER = rf"(?:{_THOUSANDS}(?!\d)|\d+(?:\.\d+|,\d{{1,2}}(?!\d))?)"


def _to_number(text: str) -> float:
    if re.fullmatch(_THOUSANDS, text):
        return float(text.replace(",", ""))
    return float(text.replace(",", "."))


def _fraction(numerator: str, denominator: str) -> float | None:
    denominator_value = int(denominator)
    if denominator_value == 0:
        return None
    return int(numerator) / denominator_value


def parse_quantity(text: str) -> tuple[float | None, str]:
    """
    Parse quantity from the beginning of an ingredient string.

    Handles decimals ("1.5", "1,5"), fractions ("1/4"), mixed numbers
    ("1 1/2"), unicode fractions ("½", "1½") and ranges ("2-3", which
    takes the higher value). A number stuck to its unit ("600g") is split.

    Returns:
        Tuple of (quantity, remaining_text); quantity is None if the text
        does not start with a number.
    """
    text = text.strip()

    if text and text[0] in UNICODE_FRACTIONS:
        return UNICODE_FRACTIONS[text[0]], text[1:].strip()

    # Mixed number: "1 1/2"
    match = re.match(r"^(\d+)\s+(\d+)/(\d+)(?!\d)", text)
    if match:
        fraction = _fraction(match.group(2), match.group(3))
        if fraction is not None:
            return int(match.group(1)) + fraction, text[match.end() :].strip()

    # Simple fraction: "1/4"
    match = re.match(r"^(\d+)/(\d+)", text)
    if match:
        fraction = _fraction(match.group(1), match.group(2))
        if fraction is None:
            return None, text
        return fraction, text[match.end() :].strip()

    # Range: "2-3" (take the higher value)
    match = re.match(rf"^({_NUMBER})\s*[-–]\s*({_NUMBER})", text)
    if match:
        return _to_number(match.group(2)), text[match.end() :].strip()

    match = re.match(rf"^({_NUMBER})", text)
    if match:
        value = _to_number(match.group(1))
        remaining = text[match.end() :]

        # Whole number followed by a unicode fraction: "1½"
        if remaining and remaining[0] in UNICODE_FRACTIONS:
            return value + UNICODE_FRACTIONS[remaining[0]], remaining[1:].strip()

        return value, remaining.strip()

    return None, text


def parse_unit(text: str) -> tuple[str | None, str]:
    """
    Parse a unit from the beginning of text.

    A unit is only taken when a name follows it, so "2 cups" keeps "cups"
    as the name.

    Returns:
        Tuple of (canonical_unit, remaining_text)
    """
    text = text.strip()
    words = text.split()

    if len(words) < 2:
        return None, text

    # Check for two-word units first (e.g., "fl oz", "fluid ounce")
    if len(words) >= 3:
        two_word = f"{words[0]} {words[1]}".lower()
        if two_word in UNIT_ALIASES:
            return UNIT_ALIASES[two_word], " ".join(words[2:])

    first_word = words[0].lower().rstrip(",.")
    if first_word in UNIT_ALIASES:
        return UNIT_ALIASES[first_word], " ".join(words[1:])
    if first_word in SIZE_UNITS:
        return first_word, " ".join(words[1:])

    return None, text


def _capitalize_words(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))


def parse_ingredient_line(line: str, capitalize: bool = False) -> ParsedIngredient | None:
    """
    Parse a single pasted line into a draft ingredient.

    Never raises on odd input: a line without a recognisable quantity becomes
    a zero-quantity ingredient named after the whole line, for the user to fix
    during review.

    Args:
        line: Raw ingredient text (e.g., "600g self raising flour")
        capitalize: Title-case each word of the name

    Returns:
        ParsedIngredient, or None for blank or number-only lines
    """
    original = line.strip()
    if not original:
        return None

    # Strip list bullets
    text = re.sub(r"^[\-\*•]\s+", "", original)

    quantity, remaining = parse_quantity(text)

    if quantity is None:
        name = text
        quantity = 0.0
        unit = ""
        logger.debug("No quantity found in %r", original)
    else:
        if not remaining:
            return None
        parsed_unit, name = parse_unit(remaining)
        unit = parsed_unit or ("unit" if quantity > 0 else "")

    name = re.sub(r"\s+", " ", name).strip()
    if capitalize:
        name = _capitalize_words(name)

    return ParsedIngredient(
        name=name,
        quantity=quantity,
        unit=unit,
        original_line=original,
    )


def parse_ingredients(text: str, capitalize: bool = False) -> list[ParsedIngredient]:
    """
    Parse multiple ingredients from pasted text (one per line).

    Args:
        text: Multi-line text with ingredients
        capitalize: Title-case each ingredient name

    Returns:
        List of ParsedIngredient objects, in line order
    """
    ingredients = []

    for line in text.splitlines():
        parsed = parse_ingredient_line(line, capitalize=capitalize)
        if parsed is not None and parsed.name:
            ingredients.append(parsed)

    return ingredients


def accept_parsed(parsed: list[ParsedIngredient]) -> list[Ingredient]:
    """Turn reviewed parse results into plain ingredients for storage."""
    return [item.to_ingredient() for item in parsed]
