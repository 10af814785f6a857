"""Supabase implementation for the food catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_planner.domain.foods import FoodCategory, FoodItem, MealSlot, MealTemplate
from diet_planner.services.catalog import CatalogRepository

_MEAL_SLOT_VALUES = frozenset(slot.value for slot in MealSlot)


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed repository for reference foods and meal templates."""

    client: Client

    def list_foods(self) -> list[FoodItem]:
        """Return every food ordered by name."""
        response = self.client.table("foods").select("*").order("name").execute()
        return [parse_food(row) for row in response.data or []]

    def list_meal_templates(self) -> list[MealTemplate]:
        """Return every meal template."""
        response = self.client.table("meal_templates").select("*").execute()
        return [_parse_template(row) for row in response.data or []]


def parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a foods row into a domain model."""
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        category=FoodCategory(row["category"]),
        sub_category=row.get("sub_category"),
        kcal_100g=float(row.get("kcal_100g") or 0.0),
        protein_100g=float(row.get("protein_100g") or 0.0),
        carbs_100g=float(row.get("carbs_100g") or 0.0),
        fat_100g=float(row.get("fat_100g") or 0.0),
        fiber_100g=float(row.get("fiber_100g") or 0.0),
        glycemic_index=_optional_float(row.get("glycemic_index")),
        inflammatory_score=float(row.get("inflammatory_score") or 0.0),
        price_per_kg=_optional_float(row.get("price_per_kg")),
        allergens=tuple(row.get("allergens") or ()),
        diets=tuple(row.get("diets") or ()),
        meal_slots=tuple(
            MealSlot(slot)
            for slot in row.get("meal_slots") or ()
            if slot in _MEAL_SLOT_VALUES
        ),
    )


def _parse_template(row: dict[str, object]) -> MealTemplate:
    raw = row.get("required_categories") or {}
    return MealTemplate(
        slot=MealSlot(row["slot"]),
        name=str(row.get("name", "")),
        required_categories={str(key): int(value) for key, value in raw.items()},
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None
