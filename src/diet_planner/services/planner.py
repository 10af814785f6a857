"""Seven-day meal plan generation."""

import logging
import random
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from diet_planner.domain.foods import CatalogSnapshot, FoodItem, MealSlot, MealTemplate
from diet_planner.domain.history import HistoryStatus
from diet_planner.domain.nutrition import MacroTargets, NutritionTargets
from diet_planner.domain.plans import (
    Meal,
    MealItem,
    MealPlan,
    PlanStatus,
    ShoppingListItem,
)
from diet_planner.domain.profiles import PhysicalSnapshot, Profile
from diet_planner.services.allocation import (
    AllocatedFood,
    allocate_quantities,
    macros_for_quantity,
)
from diet_planner.services.catalog import CatalogService
from diet_planner.services.distribution import (
    distribution,
    meal_slots_for,
    meal_targets,
)
from diet_planner.services.history import HistoryRepository
from diet_planner.services.selection import (
    FALLBACK_GRAMS,
    fallback_foods,
    select_foods,
)
from diet_planner.services.shopping import aggregate_shopping_list
from diet_planner.services.targets import compute_targets

PLAN_DAYS = 7
DEFAULT_REQUIRED_CATEGORIES = {
    "red meat": 1,
    "whole grains": 1,
    "leafy greens": 1,
    "vegetable oils": 1,
}

_logger = logging.getLogger(__name__)


class PlanGenerationError(RuntimeError):
    """Raised when a generation run fails."""


class PlanRepository(Protocol):
    """Persistence interface for meal plans."""

    def create_plan(
        self, profile_id: UUID, start_date: date, targets: NutritionTargets
    ) -> UUID:
        """Create an active plan row and return its id."""

    def deactivate_active_plans(
        self, profile_id: UUID, keep_plan_id: UUID
    ) -> list[UUID]:
        """Finish the profile's other active plans and return their ids."""

    def set_plan_status(self, plan_ids: list[UUID], status: PlanStatus) -> None:
        """Set the status of several plans."""

    def create_meals(self, meals: list[Meal]) -> None:
        """Insert meal rows in one batch."""

    def create_meal_items(self, items: list[MealItem]) -> None:
        """Insert meal item rows in one batch."""

    def create_shopping_list(self, items: list[ShoppingListItem]) -> None:
        """Insert shopping list rows in one batch."""

    def get_plan(self, plan_id: UUID) -> MealPlan | None:
        """Return a plan joined with its meals, items and foods."""

    def get_active_plan(self, profile_id: UUID) -> MealPlan | None:
        """Return the newest active plan of a profile, joined."""

    def list_shopping_list(self, plan_id: UUID) -> list[ShoppingListItem]:
        """Return a plan's shopping list joined with foods."""

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan and its dependent rows."""


@dataclass
class MealPlanService:
    """Orchestrates plan generation and persistence."""

    catalog_service: CatalogService
    repository: PlanRepository
    history_repository: HistoryRepository
    rng: random.Random

    def generate_plan(
        self,
        profile: Profile,
        snapshot: PhysicalSnapshot,
        start_date: date | None = None,
    ) -> MealPlan:
        """Generate, persist and return a new active plan for a profile.

        On failure the new plan is deleted and the plans it superseded are
        reactivated before PlanGenerationError is raised.
        """
        targets = compute_targets(profile, snapshot)
        start = start_date or datetime.now(tz=UTC).date()
        plan_id: UUID | None = None
        deactivated: list[UUID] = []
        try:
            catalog = self.catalog_service.get_snapshot()
            plan_id = self.repository.create_plan(profile.id, start, targets)
            _logger.info("Plan created: profile=%s plan=%s", profile.id, plan_id)
            deactivated = self.repository.deactivate_active_plans(
                profile.id, keep_plan_id=plan_id
            )
            meals, items = build_meals(plan_id, profile, targets, catalog, self.rng)
            self.repository.create_meals(meals)
            self.repository.create_meal_items(items)
            _logger.info(
                "Meals stored: plan=%s meals=%s items=%s",
                plan_id,
                len(meals),
                len(items),
            )
            shopping_list = aggregate_shopping_list(plan_id, items, catalog)
            self.repository.create_shopping_list(shopping_list)
            self.history_repository.create_entry(
                profile_id=profile.id,
                plan_id=plan_id,
                program_name=program_name(snapshot, start),
                status=HistoryStatus.ACTIVE,
            )
            plan = self.repository.get_plan(plan_id)
            if plan is None:
                raise RuntimeError(f"Failed to reload meal plan {plan_id}")
        except Exception as exc:
            _logger.warning("Plan generation failed: profile=%s: %s", profile.id, exc)
            self._compensate(plan_id, deactivated)
            raise PlanGenerationError("generation failed") from exc
        return plan

    def get_active_plan(self, profile_id: UUID) -> MealPlan | None:
        """Return the profile's active plan."""
        return self.repository.get_active_plan(profile_id)

    def get_shopping_list(self, profile_id: UUID) -> list[ShoppingListItem] | None:
        """Return the shopping list of the profile's active plan."""
        plan = self.repository.get_active_plan(profile_id)
        if plan is None:
            return None
        return self.repository.list_shopping_list(plan.id)

    def _compensate(self, plan_id: UUID | None, deactivated: list[UUID]) -> None:
        """Undo the writes of a failed run."""
        if plan_id is None:
            return
        try:
            self.repository.delete_plan(plan_id)
        except Exception:
            _logger.exception("Failed to delete plan %s during rollback", plan_id)
        if not deactivated:
            return
        try:
            self.repository.set_plan_status(deactivated, PlanStatus.ACTIVE)
        except Exception:
            _logger.exception("Failed to reactivate plans %s", deactivated)


def build_meals(
    plan_id: UUID,
    profile: Profile,
    targets: NutritionTargets,
    catalog: CatalogSnapshot,
    rng: random.Random,
) -> tuple[list[Meal], list[MealItem]]:
    """Build every meal and item of a plan in memory."""
    slots = meal_slots_for(profile.meals_per_day)
    shares = distribution(profile.meals_per_day)
    meals: list[Meal] = []
    items: list[MealItem] = []
    for day in range(1, PLAN_DAYS + 1):
        snack_count = 0
        for slot in slots:
            snack_index = None
            if slot is MealSlot.SNACK:
                snack_count += 1
                snack_index = snack_count
            meal_id = uuid4()
            slot_targets = meal_targets(targets, shares[slot])
            meal_items = _build_items(meal_id, profile, slot, slot_targets, catalog, rng)
            meals.append(
                Meal(
                    id=meal_id,
                    plan_id=plan_id,
                    day=day,
                    slot=slot,
                    targets=slot_targets,
                    snack_index=snack_index,
                    items=meal_items,
                )
            )
            items.extend(meal_items)
    return meals, items


def required_categories_for(
    slot: MealSlot, templates: tuple[MealTemplate, ...]
) -> dict[str, int]:
    """Return the slot's template requirements, falling back to lunch, then a default."""
    by_slot: dict[MealSlot, MealTemplate] = {}
    for template in templates:
        by_slot.setdefault(template.slot, template)
    template = by_slot.get(slot) or by_slot.get(MealSlot.LUNCH)
    if template is None or not template.required_categories:
        return dict(DEFAULT_REQUIRED_CATEGORIES)
    return dict(template.required_categories)


def program_name(snapshot: PhysicalSnapshot, start: date) -> str:
    """Return the display name of a generated program."""
    return f"Program {snapshot.objective} - {start.isoformat()}"


def _build_items(  # noqa: PLR0913
    meal_id: UUID,
    profile: Profile,
    slot: MealSlot,
    targets: MacroTargets,
    catalog: CatalogSnapshot,
    rng: random.Random,
) -> list[MealItem]:
    required = required_categories_for(slot, catalog.templates)
    selected = select_foods(catalog.foods, profile, slot, required, rng)
    if selected:
        allocated = allocate_quantities(selected, targets, rng)
    else:
        basics = fallback_foods(catalog.foods)
        _logger.warning(
            "No compatible food for %s, using basics: %s",
            slot,
            [food.name for food in basics],
        )
        allocated = [AllocatedFood(food=food, grams=FALLBACK_GRAMS) for food in basics]
    return [_to_item(meal_id, entry.food, entry.grams) for entry in allocated]


def _to_item(meal_id: UUID, food: FoodItem, grams: int) -> MealItem:
    macros = macros_for_quantity(food, grams)
    return MealItem(
        id=uuid4(),
        meal_id=meal_id,
        food_id=food.id,
        grams=grams,
        calories=macros.calories,
        protein_g=macros.protein_g,
        carbs_g=macros.carbs_g,
        fat_g=macros.fat_g,
        food=food,
    )
