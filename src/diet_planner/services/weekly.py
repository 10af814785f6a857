"""Per-day views over a generated plan."""

from diet_planner.domain.nutrition import MacroTargets
from diet_planner.domain.plans import Meal, MealPlan
from diet_planner.services.distribution import meal_sort_key


def meals_for_day(plan: MealPlan, day: int) -> list[Meal]:
    """Return a day's meals in serving order."""
    meals = [meal for meal in plan.meals if meal.day == day]
    return sorted(meals, key=lambda meal: meal_sort_key(meal.slot, meal.snack_index))


def day_totals(plan: MealPlan, day: int) -> MacroTargets:
    """Sum the macros of every item planned for a day."""
    calories = protein = carbs = fat = 0.0
    for meal in meals_for_day(plan, day):
        for item in meal.items:
            calories += item.calories
            protein += item.protein_g
            carbs += item.carbs_g
            fat += item.fat_g
    return MacroTargets(
        calories=round(calories, 1),
        protein_g=round(protein, 1),
        carbs_g=round(carbs, 1),
        fat_g=round(fat, 1),
    )
