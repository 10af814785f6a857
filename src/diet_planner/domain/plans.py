"""Domain models for generated meal plans."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from diet_planner.domain.foods import FoodCategory, FoodItem, MealSlot
from diet_planner.domain.nutrition import MacroTargets, NutritionTargets


class PlanStatus(StrEnum):
    """Lifecycle status of a meal plan."""

    ACTIVE = "active"
    FINISHED = "finished"
    SUSPENDED = "suspended"


@dataclass(frozen=True)
class MealItem:
    """Food portion within a meal."""

    id: UUID
    meal_id: UUID
    food_id: UUID
    grams: float
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    food: FoodItem | None = None


@dataclass(frozen=True)
class Meal:
    """Meal for a given day and slot of a plan."""

    id: UUID
    plan_id: UUID
    day: int
    slot: MealSlot
    targets: MacroTargets
    snack_index: int | None = None
    items: list[MealItem] = field(default_factory=list)


@dataclass(frozen=True)
class MealPlan:
    """Seven-day plan with its daily targets."""

    id: UUID
    profile_id: UUID
    start_date: date
    targets: NutritionTargets
    status: PlanStatus
    created_at: datetime | None = None
    meals: list[Meal] = field(default_factory=list)


@dataclass(frozen=True)
class ShoppingListItem:
    """Total quantity of one food across a plan."""

    plan_id: UUID
    food_id: UUID
    total_grams: float
    category: FoodCategory
    food: FoodItem | None = None
