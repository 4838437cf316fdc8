"""Record shapes shared by the scaling and nutrition engine."""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Literal

logger = logging.getLogger(__name__)

ContainerType = Literal[
    "round_cake_tin",
    "square_cake_tin",
    "loaf_tin",
    "bundt_tin",
    "sheet_pan",
    "muffin_tin",
    "other",
]

CONTAINER_TYPES: tuple[str, ...] = (
    "round_cake_tin",
    "square_cake_tin",
    "loaf_tin",
    "bundt_tin",
    "sheet_pan",
    "muffin_tin",
    "other",
)


class ValidationError(ValueError):
    """Raised when a record is structurally malformed (missing or invalid fields)."""

    pass


def _require(data: dict[str, Any], key: str, record: str) -> Any:
    if not isinstance(data, dict):
        raise ValidationError(f"{record} must be an object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise ValidationError(f"{record} is missing required field '{key}'")
    return data[key]


def _to_float(value: Any, what: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{what} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{what} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValidationError(f"{what} must be a finite number, got {value!r}")
    return number


def _optional_float(data: dict[str, Any], key: str, what: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    return _to_float(value, what)


@dataclass
class Ingredient:
    """A single recipe ingredient."""

    name: str
    quantity: float = 0.0
    unit: str = ""

    def __post_init__(self) -> None:
        if not math.isfinite(self.quantity):
            raise ValidationError(
                f"Ingredient '{self.name}' has non-finite quantity {self.quantity}"
            )
        if self.quantity < 0:
            raise ValidationError(
                f"Ingredient '{self.name}' has negative quantity {self.quantity}"
            )

    def __str__(self) -> str:
        parts = []
        if self.quantity:
            qty = self.quantity
            if qty == int(qty):
                parts.append(str(int(qty)))
            else:
                parts.append(f"{qty:.2f}".rstrip("0").rstrip("."))
        if self.unit and self.unit != "unit":
            parts.append(self.unit)
        parts.append(self.name)
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ingredient":
        name = _require(data, "name", "Ingredient")
        quantity = _to_float(data.get("quantity", 0), f"Quantity of '{name}'")
        return cls(name=str(name), quantity=quantity, unit=str(data.get("unit") or ""))


@dataclass
class ParsedIngredient(Ingredient):
    """An ingredient parsed from pasted text, with the line it came from."""

    original_line: str = ""

    def to_ingredient(self) -> Ingredient:
        """Drop the provenance once the user has accepted the parse."""
        return Ingredient(name=self.name, quantity=self.quantity, unit=self.unit)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "originalLine": self.original_line}


@dataclass
class ContainerInfo:
    """Bakeware used for a recipe. Which optional fields matter depends on ``type``."""

    type: str
    count: int = 1
    size: float | None = None  # diameter or side, inches
    length: float | None = None
    width: float | None = None
    capacity: float | None = None  # cups
    cup_size: str | None = None  # e.g. "standard", "mini", "jumbo"
    cups_per_tray: int | None = None

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValidationError(f"Container count must be at least 1, got {self.count}")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "count": self.count}
        optional = {
            "size": self.size,
            "length": self.length,
            "width": self.width,
            "capacity": self.capacity,
            "cupSize": self.cup_size,
            "cupsPerTray": self.cups_per_tray,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContainerInfo":
        container_type = _require(data, "type", "Container")
        count = data.get("count")
        cups_per_tray = data.get("cupsPerTray")
        return cls(
            type=str(container_type),
            count=1 if count is None else int(_to_float(count, "Container count")),
            size=_optional_float(data, "size", "Container size"),
            length=_optional_float(data, "length", "Container length"),
            width=_optional_float(data, "width", "Container width"),
            capacity=_optional_float(data, "capacity", "Container capacity"),
            cup_size=data.get("cupSize"),
            cups_per_tray=(
                None
                if cups_per_tray is None
                else int(_to_float(cups_per_tray, "Cups per tray"))
            ),
        )


def _container_or_none(data: Any, recipe_name: str) -> ContainerInfo | None:
    """Read a recipe's container, dropping it if its measurements are unusable.

    A container without a ``type`` is malformed and raises. Bad counts or sizes only
    cost the recipe its container, so servings fall back to the default.
    """
    if not data:
        return None
    _require(data, "type", "Container")
    try:
        return ContainerInfo.from_dict(data)
    except ValidationError as e:
        logger.debug("Ignoring invalid container for recipe %r: %s", recipe_name, e)
        return None


@dataclass
class Recipe:
    """A base recipe, either homemade (ingredients) or store-bought (product figures)."""

    name: str
    ingredients: list[Ingredient] = field(default_factory=list)
    custom_scales: list[float] = field(default_factory=list)
    container: ContainerInfo | None = None
    store_bought: bool = False
    brand: str | None = None
    purchase_quantity: float | None = None
    purchase_unit: str | None = None
    energy_kcal_100g: float | None = None
    sugars_100g: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
        }
        if self.custom_scales:
            data["customScales"] = list(self.custom_scales)
        if self.container is not None:
            data["container"] = self.container.to_dict()
        if self.store_bought:
            data["isStoreBought"] = True
            data["brand"] = self.brand
            data["purchaseQuantity"] = self.purchase_quantity
            data["purchaseUnit"] = self.purchase_unit
            data["energyKcal100g"] = self.energy_kcal_100g
            data["sugars100g"] = self.sugars_100g
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        name = _require(data, "name", "Recipe")
        raw_ingredients = data.get("ingredients") or []
        if not isinstance(raw_ingredients, list):
            raise ValidationError(f"Recipe '{name}' ingredients must be a list")
        container = data.get("container")
        return cls(
            name=str(name),
            ingredients=[Ingredient.from_dict(ing) for ing in raw_ingredients],
            custom_scales=[
                _to_float(s, "Custom scale") for s in data.get("customScales") or []
            ],
            container=_container_or_none(container, str(name)),
            store_bought=bool(data.get("isStoreBought", False)),
            brand=data.get("brand"),
            purchase_quantity=_optional_float(data, "purchaseQuantity", "Purchase quantity"),
            purchase_unit=data.get("purchaseUnit"),
            energy_kcal_100g=_optional_float(data, "energyKcal100g", "Energy per 100g"),
            sugars_100g=_optional_float(data, "sugars100g", "Sugars per 100g"),
        )


@dataclass
class Variant:
    """Ingredient overrides layered on a recipe. Overrides are stored at 1x scale."""

    name: str
    ingredient_overrides: list[Ingredient] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "ingredientOverrides": [ing.to_dict() for ing in self.ingredient_overrides],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Variant":
        name = _require(data, "name", "Variant")
        overrides = data.get("ingredientOverrides") or []
        if not isinstance(overrides, list):
            raise ValidationError(f"Variant '{name}' ingredientOverrides must be a list")
        return cls(
            name=str(name),
            ingredient_overrides=[Ingredient.from_dict(ing) for ing in overrides],
        )


@dataclass
class ItemUsage:
    """One item used in a bake, at its own scale factor."""

    recipe: Recipe
    variant: Variant | None = None
    scale_factor: float = 1.0
    usage_quantity: float | None = None
    usage_unit: str | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.scale_factor) or self.scale_factor <= 0:
            raise ValidationError(f"Scale factor must be positive, got {self.scale_factor}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ItemUsage":
        recipe = Recipe.from_dict(_require(data, "recipe", "Item usage"))
        variant = data.get("variant")
        scale_factor = data.get("scaleFactor")
        return cls(
            recipe=recipe,
            variant=Variant.from_dict(variant) if variant else None,
            scale_factor=1.0 if scale_factor is None else _to_float(scale_factor, "Scale factor"),
            usage_quantity=_optional_float(data, "usageQuantity", "Usage quantity"),
            usage_unit=data.get("usageUnit"),
        )


@dataclass
class NutritionInfo:
    """Estimated nutrition for a bake. Always derived, never stored on its own."""

    total_calories: int
    total_sugar: float
    total_servings: int
    calories_per_serving: int
    sugar_per_serving: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCalories": self.total_calories,
            "totalSugar": self.total_sugar,
            "totalServings": self.total_servings,
            "caloriesPerServing": self.calories_per_serving,
            "sugarPerServing": self.sugar_per_serving,
        }
