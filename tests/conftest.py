"""Shared fixtures for proofed-engine tests."""

import pytest
import respx

from proofed_engine.models import ContainerInfo, Ingredient, Recipe, Variant
from proofed_engine.products import ProductLookup

PRODUCT_API_URL = "https://products.test/api/v2"


@pytest.fixture
def mock_httpx():
    """Activate respx mock for HTTP requests."""
    with respx.mock(assert_all_called=False) as respx_mock:
        yield respx_mock


@pytest.fixture
def product_lookup():
    """Create a product lookup client pointed at the test API."""
    lookup = ProductLookup(base_url=PRODUCT_API_URL, timeout=5.0)
    yield lookup
    lookup.close()


@pytest.fixture
def sponge_recipe():
    """A simple sponge: flour, sugar and butter in an 8-inch round tin."""
    return Recipe(
        name="Victoria Sponge",
        ingredients=[
            Ingredient(name="Flour", quantity=600, unit="g"),
            Ingredient(name="Sugar", quantity=200, unit="g"),
            Ingredient(name="Butter", quantity=200, unit="g"),
        ],
        custom_scales=[1.25],
        container=ContainerInfo(type="round_cake_tin", size=8),
    )


@pytest.fixture
def less_sugar_variant():
    """Variant that cuts the sponge's sugar to 150 g (stored at 1x)."""
    return Variant(
        name="Less sugar",
        ingredient_overrides=[Ingredient(name="Sugar", quantity=150, unit="g")],
    )


@pytest.fixture
def store_bought_jam():
    """A store-bought jar of jam with per-100 g figures."""
    return Recipe(
        name="Strawberry Jam",
        store_bought=True,
        brand="Bonne Maman",
        purchase_quantity=370,
        purchase_unit="g",
        energy_kcal_100g=250,
        sugars_100g=60,
    )


@pytest.fixture
def off_product_payload():
    """Open Food Facts style product lookup response."""
    return {
        "code": "3045320094084",
        "status": 1,
        "product": {
            "code": "3045320094084",
            "product_name": "Strawberry Preserve",
            "brands": "Bonne Maman, Andros",
            "quantity": "370 g",
            "nutriments": {
                "energy-kcal_100g": 242,
                "sugars_100g": 59,
            },
        },
    }
