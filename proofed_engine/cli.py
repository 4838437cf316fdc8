"""CLI entry point for Proofed Engine."""

import json
import logging
import sys
from typing import Any

import click

from . import __version__
from .bake import effective_ingredients, estimate_bake_nutrition, estimate_usage
from .config import configure_logging
from .ingredient_parser import parse_ingredients
from .models import (
    CONTAINER_TYPES,
    ContainerInfo,
    Ingredient,
    ItemUsage,
    NutritionInfo,
    Recipe,
    ValidationError,
    Variant,
)
from .products import ProductLookup, ProductLookupError
from .scaler import (
    calculate_scale_factor,
    calculate_scale_from_container,
    format_scale_factor,
    get_scale_options,
    scale_from_ingredient,
)
from .servings import POLICIES, estimate_servings, format_container_description


def _load_json(path: str) -> Any:
    """Load a JSON document, exiting with an error message if it is unreadable."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        click.echo(f"✗ Could not read {path}: {e}", err=True)
        raise SystemExit(1) from None


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def display_ingredients(title: str, ingredients: list[Ingredient]) -> None:
    """Display an ingredient list under a heading."""
    click.echo()
    click.echo("=" * 60)
    click.echo(title)
    click.echo("=" * 60)

    for i, ingredient in enumerate(ingredients, 1):
        click.echo(f"  {i}. {ingredient}")

    click.echo()


def display_nutrition(nutrition: NutritionInfo) -> None:
    """Display a nutrition estimate."""
    click.echo()
    click.echo("=" * 60)
    click.echo("NUTRITION ESTIMATE")
    click.echo("=" * 60)
    click.echo(f"Total: {nutrition.total_calories:,} calories, {nutrition.total_sugar:g} g sugar")
    click.echo(f"Servings: {nutrition.total_servings}")
    click.echo(
        f"Per serving: {nutrition.calories_per_serving} calories, "
        f"{nutrition.sugar_per_serving:g} g sugar"
    )
    click.echo("-" * 60)
    click.echo("Estimates only, based on typical values per 100 g.")


# ============================================================================
# Main CLI Group
# ============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="proofed")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Proofed recipe scaling and nutrition estimation.

    Parse pasted ingredient lists, scale recipes and variants, and estimate
    calories, sugar and servings for a bake.
    """
    configure_logging(logging.DEBUG if verbose else None)


# ============================================================================
# Ingredient Commands
# ============================================================================


@cli.command("parse")
@click.argument("file_path", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
@click.option("--capitalize", is_flag=True, help="Title-case ingredient names")
def parse_cmd(file_path: str | None, as_json: bool, capitalize: bool):
    """Parse a pasted ingredient list (from FILE or stdin).

    Examples:

    \b
        proofed parse ingredients.txt
        pbpaste | proofed parse --json
    """
    if file_path:
        with open(file_path, encoding="utf-8") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    parsed = parse_ingredients(text, capitalize=capitalize)

    if as_json:
        _echo_json([item.to_dict() for item in parsed])
        return

    if not parsed:
        click.echo("No ingredients found.")
        return

    click.echo(f"\nParsed {len(parsed)} ingredients:\n")
    for i, item in enumerate(parsed, 1):
        marker = "⚠️ " if item.quantity == 0 else ""
        click.echo(f"{i}. {marker}{item}")
        click.echo(f"   from: {item.original_line}")

    needs_review = sum(1 for item in parsed if item.quantity == 0)
    if needs_review:
        click.echo(f"\n⚠️  {needs_review} line(s) had no quantity - please review")


@cli.command("scale")
@click.argument("recipe_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--variant", "variant_path", type=click.Path(exists=True, dir_okay=False),
              help="Variant JSON to apply")
@click.option("--scale", "-s", type=float, help="Scale by multiplier (e.g., 2 for double)")
@click.option("--have", nargs=2, type=(str, float), default=None,
              help="Scale from an ingredient you have: NAME AMOUNT")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
def scale_cmd(
    recipe_path: str,
    variant_path: str | None,
    scale: float | None,
    have: tuple[str, float] | None,
    as_json: bool,
):
    """Show a recipe's ingredients, with a variant applied, at a scale.

    Examples:

    \b
        proofed scale sponge.json --scale 2
        proofed scale sponge.json --variant less-sugar.json --scale 1.5
        proofed scale sponge.json --have "Butter" 150
    """
    if scale is not None and have is not None:
        click.echo("✗ Use either --scale or --have, not both.", err=True)
        raise SystemExit(1)

    try:
        recipe = Recipe.from_dict(_load_json(recipe_path))
        variant = Variant.from_dict(_load_json(variant_path)) if variant_path else None

        if have is not None:
            factor = scale_from_ingredient(recipe.ingredients, have[0], have[1])
        else:
            factor = calculate_scale_factor(multiplier=scale)

        usage = ItemUsage(recipe=recipe, variant=variant, scale_factor=factor)
        ingredients = effective_ingredients(usage)
    except ValidationError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    if as_json:
        _echo_json(
            {
                "scaleFactor": factor,
                "ingredients": [ingredient.to_dict() for ingredient in ingredients],
            }
        )
        return

    title = f"RECIPE: {recipe.name}"
    if variant:
        title += f" ({variant.name})"
    display_ingredients(f"{title} - {format_scale_factor(factor)}", ingredients)


@cli.command("scales")
@click.argument("recipe_path", type=click.Path(exists=True, dir_okay=False))
def scales_cmd(recipe_path: str):
    """List the scale options for a recipe (presets plus custom scales)."""
    try:
        recipe = Recipe.from_dict(_load_json(recipe_path))
    except ValidationError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    for option in get_scale_options(recipe.custom_scales):
        click.echo(f"{option.label:>8}  ({option.value:g})")


# ============================================================================
# Servings & Nutrition Commands
# ============================================================================


@cli.command("servings")
@click.option("--type", "container_type", type=click.Choice(list(CONTAINER_TYPES)),
              required=True, help="Container type")
@click.option("--size", type=float, help="Tin diameter or side (inches)")
@click.option("--length", type=float, help="Sheet pan length (inches)")
@click.option("--width", type=float, help="Sheet pan width (inches)")
@click.option("--capacity", type=float, help="Bundt capacity (cups)")
@click.option("--cups-per-tray", type=int, help="Muffin cups per tray")
@click.option("--count", "-n", type=int, default=1, help="Number of containers")
@click.option("--scale", "-s", type=float, default=1.0, help="Batch scale factor")
def servings_cmd(
    container_type: str,
    size: float | None,
    length: float | None,
    width: float | None,
    capacity: float | None,
    cups_per_tray: int | None,
    count: int,
    scale: float,
):
    """Estimate servings for a container."""
    try:
        container = ContainerInfo(
            type=container_type,
            count=count,
            size=size,
            length=length,
            width=width,
            capacity=capacity,
            cups_per_tray=cups_per_tray,
        )
        calculate_scale_factor(multiplier=scale)
    except ValidationError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    servings = estimate_servings(container, scale)
    click.echo(f"{format_container_description(container)} → {servings} servings")


@cli.command("nutrition")
@click.argument("bake_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--slices", type=int, help="Number of slices you will cut (overrides estimate)")
@click.option("--policy", type=click.Choice(sorted(POLICIES)), default="max",
              help="How servings combine across items")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
def nutrition_cmd(bake_path: str, slices: int | None, policy: str, as_json: bool):
    """Estimate calories and sugar per serving for a bake.

    BAKE_PATH is a JSON file: {"usages": [{"recipe": {...}, "variant": {...},
    "scaleFactor": 2}]}.
    """
    data = _load_json(bake_path)

    try:
        raw_usages = data.get("usages") if isinstance(data, dict) else None
        if not isinstance(raw_usages, list) or not raw_usages:
            raise ValidationError("Bake must contain a non-empty 'usages' list")
        usages = [ItemUsage.from_dict(raw) for raw in raw_usages]
    except ValidationError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    nutrition = estimate_bake_nutrition(usages, servings=slices, policy=POLICIES[policy])

    if as_json:
        _echo_json(nutrition.to_dict())
        return

    click.echo("\nItems:")
    for usage in usages:
        estimate = estimate_usage(usage)
        kind = "store-bought" if estimate.store_bought else format_scale_factor(usage.scale_factor)
        click.echo(f"  • {estimate.name} ({kind}): {estimate.calories} kcal, {estimate.sugar:g} g sugar")

    display_nutrition(nutrition)


@cli.command("container-scale")
@click.argument("from_size", type=float)
@click.argument("to_size", type=float)
@click.option("--from-shape", type=click.Choice(["round", "square"]), default="round")
@click.option("--to-shape", type=click.Choice(["round", "square"]), default="round")
def container_scale_cmd(from_size: float, to_size: float, from_shape: str, to_shape: str):
    """Scale factor for baking a recipe in a different tin size."""
    try:
        factor = calculate_scale_from_container(from_size, to_size, from_shape, to_shape)
    except ValidationError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    click.echo(f'{from_size:g}" {from_shape} → {to_size:g}" {to_shape}: scale ×{factor:g}')


# ============================================================================
# Product Commands
# ============================================================================


@cli.command("product")
@click.argument("barcode")
@click.option("--json", "as_json", is_flag=True, help="Output JSON")
def product_cmd(barcode: str, as_json: bool):
    """Look up a store-bought product's nutrition by barcode."""
    try:
        with ProductLookup() as lookup:
            product = lookup.get_product(barcode)
    except ProductLookupError as e:
        click.echo(f"✗ {e}", err=True)
        raise SystemExit(1) from None

    if product is None:
        click.echo(f"✗ No product found for barcode {barcode}", err=True)
        raise SystemExit(1)

    if as_json:
        _echo_json(
            {
                "barcode": product.barcode,
                "productName": product.product_name,
                "brand": product.brand,
                "purchaseQuantity": product.quantity,
                "purchaseUnit": product.unit,
                "energyKcal100g": product.energy_kcal_100g,
                "sugars100g": product.sugars_100g,
            }
        )
        return

    def figure(value: float | None, unit: str) -> str:
        return f"{value:g} {unit}" if value is not None else "N/A"

    click.echo(f"{product.product_name}" + (f" ({product.brand})" if product.brand else ""))
    if product.quantity is not None:
        click.echo(f"   Package: {product.quantity:g} {product.unit}")
    click.echo(f"   Energy: {figure(product.energy_kcal_100g, 'kcal')} per 100 g")
    click.echo(f"   Sugars: {figure(product.sugars_100g, 'g')} per 100 g")


if __name__ == "__main__":
    cli()
