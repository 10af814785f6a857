"""Shopping list aggregation and presentation helpers."""

from collections.abc import Iterable
from uuid import UUID

from diet_planner.domain.foods import CatalogSnapshot, FoodCategory
from diet_planner.domain.plans import MealItem, ShoppingListItem

GRAMS_PER_KG = 1000


def aggregate_shopping_list(
    plan_id: UUID, items: Iterable[MealItem], catalog: CatalogSnapshot
) -> list[ShoppingListItem]:
    """Sum grams per distinct food across a plan's items."""
    foods = catalog.food_by_id()
    totals: dict[UUID, float] = {}
    for item in items:
        if item.food_id not in foods:
            continue
        totals[item.food_id] = totals.get(item.food_id, 0.0) + item.grams
    return [
        ShoppingListItem(
            plan_id=plan_id,
            food_id=food_id,
            total_grams=total,
            category=foods[food_id].category,
            food=foods[food_id],
        )
        for food_id, total in totals.items()
    ]


def group_by_category(
    items: Iterable[ShoppingListItem],
) -> dict[FoodCategory, list[ShoppingListItem]]:
    """Group shopping items by category, omitting empty categories."""
    grouped: dict[FoodCategory, list[ShoppingListItem]] = {
        category: [] for category in FoodCategory
    }
    for item in items:
        grouped[item.category].append(item)
    return {category: entries for category, entries in grouped.items() if entries}


def estimate_total_price(items: Iterable[ShoppingListItem]) -> float:
    """Estimate the cost of a shopping list from per-kg prices."""
    total = 0.0
    for item in items:
        price = item.food.price_per_kg if item.food else None
        total += (price or 0.0) * item.total_grams / GRAMS_PER_KG
    return total


def format_quantity(grams: float) -> str:
    """Format a quantity in grams or kilograms."""
    if grams >= GRAMS_PER_KG:
        return f"{grams / GRAMS_PER_KG:.1f} kg"
    return f"{grams:g} g"
