"""Supabase repository for meal plans."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from diet_planner.adapters.supabase_catalog_repository import parse_food
from diet_planner.domain.foods import FoodCategory, MealSlot
from diet_planner.domain.nutrition import MacroTargets, NutritionTargets
from diet_planner.domain.plans import (
    Meal,
    MealItem,
    MealPlan,
    PlanStatus,
    ShoppingListItem,
)
from diet_planner.services.planner import PlanRepository

_PLAN_SELECT = "*, meals(*, meal_items(*, food:foods(*)))"


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase implementation for plans, meals and shopping lists."""

    client: Client

    def create_plan(
        self, profile_id: UUID, start_date: date, targets: NutritionTargets
    ) -> UUID:
        """Create an active plan row and return its id."""
        response = (
            self.client.table("meal_plans")
            .insert(
                {
                    "profile_id": str(profile_id),
                    "start_date": start_date.isoformat(),
                    "kcal_target": targets.calories,
                    "protein_target": targets.protein_g,
                    "carbs_target": targets.carbs_g,
                    "fat_target": targets.fat_g,
                    "status": PlanStatus.ACTIVE.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        return UUID(response.data[0]["id"])

    def deactivate_active_plans(
        self, profile_id: UUID, keep_plan_id: UUID
    ) -> list[UUID]:
        """Finish other active plans of a profile and return their ids."""
        response = (
            self.client.table("meal_plans")
            .select("id")
            .eq("profile_id", str(profile_id))
            .eq("status", PlanStatus.ACTIVE.value)
            .neq("id", str(keep_plan_id))
            .execute()
        )
        plan_ids = [UUID(row["id"]) for row in response.data or []]
        self.set_plan_status(plan_ids, PlanStatus.FINISHED)
        return plan_ids

    def set_plan_status(self, plan_ids: list[UUID], status: PlanStatus) -> None:
        """Update the status of several plans."""
        if not plan_ids:
            return
        self.client.table("meal_plans").update({"status": status.value}).in_(
            "id", [str(plan_id) for plan_id in plan_ids]
        ).execute()

    def create_meals(self, meals: list[Meal]) -> None:
        """Insert meal rows."""
        payload = [
            {
                "id": str(meal.id),
                "plan_id": str(meal.plan_id),
                "day": meal.day,
                "slot": meal.slot.value,
                "snack_index": meal.snack_index,
                "kcal_target": meal.targets.calories,
                "protein_target": meal.targets.protein_g,
                "carbs_target": meal.targets.carbs_g,
                "fat_target": meal.targets.fat_g,
            }
            for meal in meals
        ]
        if payload:
            self.client.table("meals").insert(payload).execute()

    def create_meal_items(self, items: list[MealItem]) -> None:
        """Insert meal item rows."""
        payload = [
            {
                "id": str(item.id),
                "meal_id": str(item.meal_id),
                "food_id": str(item.food_id),
                "grams": item.grams,
                "kcal": item.calories,
                "protein_g": item.protein_g,
                "carbs_g": item.carbs_g,
                "fat_g": item.fat_g,
            }
            for item in items
        ]
        if payload:
            self.client.table("meal_items").insert(payload).execute()

    def create_shopping_list(self, items: list[ShoppingListItem]) -> None:
        """Insert shopping list rows."""
        payload = [
            {
                "plan_id": str(item.plan_id),
                "food_id": str(item.food_id),
                "total_grams": round(item.total_grams),
                "category": item.category.value,
            }
            for item in items
        ]
        if payload:
            self.client.table("shopping_lists").insert(payload).execute()

    def get_plan(self, plan_id: UUID) -> MealPlan | None:
        """Return a plan joined with meals, items and foods."""
        response = (
            self.client.table("meal_plans")
            .select(_PLAN_SELECT)
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def get_active_plan(self, profile_id: UUID) -> MealPlan | None:
        """Return the newest active plan for a profile."""
        response = (
            self.client.table("meal_plans")
            .select(_PLAN_SELECT)
            .eq("profile_id", str(profile_id))
            .eq("status", PlanStatus.ACTIVE.value)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_shopping_list(self, plan_id: UUID) -> list[ShoppingListItem]:
        """Return the shopping list of a plan ordered by category."""
        response = (
            self.client.table("shopping_lists")
            .select("*, food:foods(*)")
            .eq("plan_id", str(plan_id))
            .order("category")
            .execute()
        )
        return [
            ShoppingListItem(
                plan_id=UUID(row["plan_id"]),
                food_id=UUID(row["food_id"]),
                total_grams=float(row.get("total_grams", 0.0)),
                category=FoodCategory(row["category"]),
                food=parse_food(row["food"]) if row.get("food") else None,
            )
            for row in response.data or []
        ]

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan and every row that references it."""
        meals_response = (
            self.client.table("meals")
            .select("id")
            .eq("plan_id", str(plan_id))
            .execute()
        )
        meal_ids = [row["id"] for row in meals_response.data or []]
        if meal_ids:
            self.client.table("meal_items").delete().in_("meal_id", meal_ids).execute()
        self.client.table("meals").delete().eq("plan_id", str(plan_id)).execute()
        self.client.table("shopping_lists").delete().eq(
            "plan_id", str(plan_id)
        ).execute()
        self.client.table("meal_plan_history").delete().eq(
            "plan_id", str(plan_id)
        ).execute()
        self.client.table("meal_plans").delete().eq("id", str(plan_id)).execute()


def _parse_plan(row: dict[str, object]) -> MealPlan:
    created_raw = row.get("created_at")
    return MealPlan(
        id=UUID(row["id"]),
        profile_id=UUID(row["profile_id"]),
        start_date=date.fromisoformat(str(row["start_date"])[:10]),
        targets=NutritionTargets(
            calories=int(row.get("kcal_target", 0)),
            protein_g=int(row.get("protein_target", 0)),
            carbs_g=int(row.get("carbs_target", 0)),
            fat_g=int(row.get("fat_target", 0)),
        ),
        status=PlanStatus(row.get("status", PlanStatus.ACTIVE)),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
        meals=[_parse_meal(meal) for meal in row.get("meals") or []],
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=UUID(row["id"]),
        plan_id=UUID(row["plan_id"]),
        day=int(row["day"]),
        slot=MealSlot(row["slot"]),
        snack_index=row.get("snack_index"),
        targets=MacroTargets(
            calories=float(row.get("kcal_target", 0.0)),
            protein_g=float(row.get("protein_target", 0.0)),
            carbs_g=float(row.get("carbs_target", 0.0)),
            fat_g=float(row.get("fat_target", 0.0)),
        ),
        items=[_parse_item(item) for item in row.get("meal_items") or []],
    )


def _parse_item(row: dict[str, object]) -> MealItem:
    return MealItem(
        id=UUID(row["id"]),
        meal_id=UUID(row["meal_id"]),
        food_id=UUID(row["food_id"]),
        grams=float(row.get("grams", 0.0)),
        calories=float(row.get("kcal", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        food=parse_food(row["food"]) if row.get("food") else None,
    )
