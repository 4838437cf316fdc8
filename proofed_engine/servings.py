"""Estimate serving counts from container geometry."""

import logging
from collections.abc import Callable, Sequence

from .models import ContainerInfo
from .scaler import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_SERVINGS = 12

# Round cake tin servings based on diameter (inches)
ROUND_CAKE_SERVINGS: dict[int, int] = {
    4: 4,
    5: 6,
    6: 8,
    7: 10,
    8: 12,
    9: 14,
    10: 16,
    11: 18,
    12: 20,
}

# Square cake tin servings based on side length (inches)
SQUARE_CAKE_SERVINGS: dict[int, int] = {
    4: 6,
    5: 8,
    6: 12,
    7: 14,
    8: 16,
    9: 20,
    10: 24,
    11: 28,
    12: 32,
}

DEFAULT_TIN_SIZE = 8
DEFAULT_LOAF_SERVINGS = 10
BUNDT_SERVINGS_PER_CUP = 2
DEFAULT_BUNDT_CAPACITY = 10
DEFAULT_CUPS_PER_TRAY = 12

ServingsAggregationPolicy = Callable[[Sequence[int]], int]


def _closest_size(table: dict[int, int], size: float) -> int:
    # Ties go to the smaller size
    return min(table, key=lambda key: (abs(key - size), key))


def _tin_servings(table: dict[int, int], size: float | None) -> int:
    return table[_closest_size(table, size or DEFAULT_TIN_SIZE)]


def sheet_pan_servings(length: float | None, width: float | None) -> int:
    """Servings for a sheet pan, bucketed by area (quarter, half, full sheet)."""
    if not length or not width:
        return 24  # half sheet

    area = length * width
    if area < 150:
        return 12
    if area < 300:
        return 24
    return 48


def estimate_servings(container: ContainerInfo | None, scale_factor: float = 1.0) -> int:
    """
    Estimate the number of servings from container info.

    Args:
        container: Container the recipe is baked in
        scale_factor: Batch scale (2x batch = 2x servings)

    Returns:
        Estimated number of servings; DEFAULT_SERVINGS without a container
    """
    if container is None:
        return DEFAULT_SERVINGS

    count = container.count

    if container.type == "round_cake_tin":
        base = _tin_servings(ROUND_CAKE_SERVINGS, container.size) * count
    elif container.type == "square_cake_tin":
        base = _tin_servings(SQUARE_CAKE_SERVINGS, container.size) * count
    elif container.type == "loaf_tin":
        base = DEFAULT_LOAF_SERVINGS * count
    elif container.type == "bundt_tin":
        capacity = container.capacity or DEFAULT_BUNDT_CAPACITY
        base = int(round_half_up(capacity * BUNDT_SERVINGS_PER_CUP)) * count
    elif container.type == "sheet_pan":
        base = sheet_pan_servings(container.length, container.width) * count
    elif container.type == "muffin_tin":
        cups_per_tray = container.cups_per_tray or DEFAULT_CUPS_PER_TRAY
        base = cups_per_tray * count
    else:
        if container.type != "other":
            logger.debug(
                "Unknown container type %r, assuming %s servings",
                container.type,
                DEFAULT_SERVINGS,
            )
        base = DEFAULT_SERVINGS * count

    return int(round_half_up(base * scale_factor))


# ============================================================================
# Aggregation across the items of one bake
# ============================================================================


def max_servings(servings: Sequence[int]) -> int:
    """Combined items are portioned by the largest one (cake + frosting = cake)."""
    return max(servings)


def sum_servings(servings: Sequence[int]) -> int:
    """Items are portioned separately."""
    return sum(servings)


def mean_servings(servings: Sequence[int]) -> int:
    """Average of the per-item estimates."""
    return int(round_half_up(sum(servings) / len(servings)))


POLICIES: dict[str, ServingsAggregationPolicy] = {
    "max": max_servings,
    "sum": sum_servings,
    "mean": mean_servings,
}


def estimate_total_servings(
    containers: Sequence[tuple[ContainerInfo, float]],
    policy: ServingsAggregationPolicy = max_servings,
) -> int:
    """
    Estimate servings for a bake combining several items.

    Args:
        containers: (container, scale_factor) for each item that has one
        policy: How per-item estimates combine; the maximum by default

    Returns:
        Estimated total servings; DEFAULT_SERVINGS if no item has a container
    """
    if not containers:
        return DEFAULT_SERVINGS

    return policy([estimate_servings(container, scale) for container, scale in containers])


def format_container_description(container: ContainerInfo) -> str:
    """
    Get a human-readable description of a container.

    Examples:
        '8" round tin', '2× loaf tin', '12-cup standard muffin tin'
    """
    count_prefix = f"{container.count}× " if container.count > 1 else ""

    def size_str(value: float | None, default: float) -> str:
        return f"{value or default:g}"

    if container.type == "round_cake_tin":
        return f'{count_prefix}{size_str(container.size, DEFAULT_TIN_SIZE)}" round tin'
    if container.type == "square_cake_tin":
        return f'{count_prefix}{size_str(container.size, DEFAULT_TIN_SIZE)}" square tin'
    if container.type == "loaf_tin":
        return f"{count_prefix}loaf tin"
    if container.type == "bundt_tin":
        return f"{count_prefix}{size_str(container.capacity, DEFAULT_BUNDT_CAPACITY)}-cup bundt"
    if container.type == "sheet_pan":
        if container.length and container.width:
            return f'{count_prefix}{container.length:g}×{container.width:g}" sheet pan'
        return f"{count_prefix}sheet pan"
    if container.type == "muffin_tin":
        cup_size = container.cup_size or "standard"
        cups_per_tray = container.cups_per_tray or DEFAULT_CUPS_PER_TRAY
        return f"{count_prefix}{cups_per_tray}-cup {cup_size} muffin tin"
    return f"{count_prefix}container"
