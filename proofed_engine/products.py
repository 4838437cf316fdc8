"""Product lookup client for store-bought item nutrition (Open Food Facts API)."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from . import __version__
from .config import APP_NAME, get_http_timeout, get_product_api_url
from .models import Recipe
from .units import parse_package_size

logger = logging.getLogger(__name__)


class ProductLookupError(Exception):
    """Exception raised for product lookup errors."""

    pass


@dataclass
class ProductNutrition:
    """Per-100 g nutrition figures of a purchased product."""

    barcode: str
    product_name: str
    brand: str | None = None
    quantity: float | None = None
    unit: str | None = None
    energy_kcal_100g: float | None = None
    sugars_100g: float | None = None


def _number(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def product_from_payload(payload: dict[str, Any], barcode: str = "") -> ProductNutrition:
    """
    Map an Open Food Facts product document to ProductNutrition.

    Args:
        payload: The "product" object of an API response
        barcode: Barcode used for the lookup, if the payload has no code

    Returns:
        ProductNutrition; figures the product lacks are None
    """
    nutriments = payload.get("nutriments") or {}

    # Older products only carry energy in kJ
    energy = _number(nutriments.get("energy-kcal_100g"))
    if energy is None:
        energy_kj = _number(nutriments.get("energy_100g"))
        if energy_kj is not None:
            energy = round(energy_kj / 4.184, 1)

    brands = payload.get("brands") or ""
    brand = brands.split(",")[0].strip() or None

    package = parse_package_size(payload.get("quantity"))

    return ProductNutrition(
        barcode=str(payload.get("code") or barcode),
        product_name=payload.get("product_name") or "Unknown product",
        brand=brand,
        quantity=package[0] if package else None,
        unit=package[1] if package else None,
        energy_kcal_100g=energy,
        sugars_100g=_number(nutriments.get("sugars_100g")),
    )


def apply_to_recipe(product: ProductNutrition, recipe: Recipe) -> Recipe:
    """Copy a product's brand, package size and figures onto a store-bought recipe."""
    recipe.store_bought = True
    recipe.brand = product.brand
    recipe.purchase_quantity = product.quantity
    recipe.purchase_unit = product.unit
    recipe.energy_kcal_100g = product.energy_kcal_100g
    recipe.sugars_100g = product.sugars_100g
    return recipe


class ProductLookup:
    """Client for fetching product nutrition by barcode."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        self.base_url = (base_url or get_product_api_url()).rstrip("/")
        self.client = client or httpx.Client(
            timeout=timeout if timeout is not None else get_http_timeout(),
            headers={
                "Accept": "application/json",
                "User-Agent": f"{APP_NAME}/{__version__}",
            },
        )

    def get_product(self, barcode: str) -> ProductNutrition | None:
        """
        Look up a product by barcode.

        Args:
            barcode: EAN/UPC barcode

        Returns:
            ProductNutrition, or None if the product is unknown

        Raises:
            ProductLookupError: If the request fails
        """
        barcode = barcode.strip()
        if not barcode:
            raise ProductLookupError("Barcode must not be empty")

        url = f"{self.base_url}/product/{barcode}.json"
        logger.info("Looking up product %s", barcode)

        try:
            response = self.client.get(url)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProductLookupError(
                f"Product lookup failed: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProductLookupError(f"Product lookup failed: {e}") from e
        except ValueError as e:
            raise ProductLookupError(f"Product lookup returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or data.get("status") == 0 or not data.get("product"):
            return None

        return product_from_payload(data["product"], barcode)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "ProductLookup":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
