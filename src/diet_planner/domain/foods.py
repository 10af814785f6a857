"""Domain models for the food catalog."""

from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID


class FoodCategory(StrEnum):
    """Main food category driving quantity allocation."""

    PROTEIN = "protein"
    CARB = "carb"
    VEGETABLE = "vegetable"
    FAT = "fat"


class MealSlot(StrEnum):
    """Time-of-day meal slot."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodItem:
    """Catalog food with nutritional density per 100 g."""

    id: UUID
    name: str
    category: FoodCategory
    sub_category: str | None
    kcal_100g: float
    protein_100g: float
    carbs_100g: float
    fat_100g: float
    fiber_100g: float = 0.0
    glycemic_index: float | None = None
    inflammatory_score: float = 0.0
    price_per_kg: float | None = None
    allergens: tuple[str, ...] = ()
    diets: tuple[str, ...] = ()
    meal_slots: tuple[MealSlot, ...] = ()


@dataclass(frozen=True)
class MealTemplate:
    """Required sub-categories for a meal slot."""

    slot: MealSlot
    name: str
    required_categories: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable view of the catalog used by one generation run."""

    foods: tuple[FoodItem, ...]
    templates: tuple[MealTemplate, ...] = ()

    def food_by_id(self) -> dict[UUID, FoodItem]:
        """Index foods by id."""
        return {food.id: food for food in self.foods}
