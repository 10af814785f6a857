"""Split daily targets across the meals of a day."""

from diet_planner.domain.foods import MealSlot
from diet_planner.domain.nutrition import MacroTargets, NutritionTargets

BASE_SHARES = {
    MealSlot.BREAKFAST: 0.30,
    MealSlot.LUNCH: 0.35,
    MealSlot.DINNER: 0.25,
    MealSlot.SNACK: 0.10,
}

_SLOT_SEQUENCES = {
    3: (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER),
    4: (MealSlot.BREAKFAST, MealSlot.SNACK, MealSlot.LUNCH, MealSlot.DINNER),
    5: (
        MealSlot.BREAKFAST,
        MealSlot.SNACK,
        MealSlot.LUNCH,
        MealSlot.SNACK,
        MealSlot.DINNER,
    ),
    6: (
        MealSlot.BREAKFAST,
        MealSlot.SNACK,
        MealSlot.LUNCH,
        MealSlot.SNACK,
        MealSlot.DINNER,
        MealSlot.SNACK,
    ),
}

# Shares are per occurrence: with several snacks each one gets the listed value.
# Three meals keep the base shares without renormalizing, so they add up to 0.90.
_DISTRIBUTIONS = {
    3: {
        MealSlot.BREAKFAST: BASE_SHARES[MealSlot.BREAKFAST],
        MealSlot.LUNCH: BASE_SHARES[MealSlot.LUNCH],
        MealSlot.DINNER: BASE_SHARES[MealSlot.DINNER],
    },
    4: dict(BASE_SHARES),
    5: {
        MealSlot.BREAKFAST: 0.25,
        MealSlot.LUNCH: 0.35,
        MealSlot.DINNER: 0.25,
        MealSlot.SNACK: 0.15 / 2,
    },
    6: {
        MealSlot.BREAKFAST: 0.20,
        MealSlot.LUNCH: 0.30,
        MealSlot.DINNER: 0.25,
        MealSlot.SNACK: 0.25 / 3,
    },
}

_SORT_ORDER = {
    MealSlot.BREAKFAST: 0,
    MealSlot.SNACK: 1,
    MealSlot.LUNCH: 2,
    MealSlot.DINNER: 4,
}

SUPPORTED_MEAL_COUNTS = tuple(sorted(_SLOT_SEQUENCES))


def _unsupported(meals_per_day: int) -> ValueError:
    return ValueError(
        f"Unsupported meals per day: {meals_per_day} "
        f"(expected one of {SUPPORTED_MEAL_COUNTS})"
    )


def meal_slots_for(meals_per_day: int) -> tuple[MealSlot, ...]:
    """Return the ordered slots of a day, snacks interleaved."""
    if meals_per_day not in _SLOT_SEQUENCES:
        raise _unsupported(meals_per_day)
    return _SLOT_SEQUENCES[meals_per_day]


def distribution(meals_per_day: int) -> dict[MealSlot, float]:
    """Return the share of the daily target for one occurrence of each slot."""
    if meals_per_day not in _DISTRIBUTIONS:
        raise _unsupported(meals_per_day)
    return dict(_DISTRIBUTIONS[meals_per_day])


def day_share(meals_per_day: int) -> float:
    """Return the fraction of the daily target covered by a whole day."""
    shares = distribution(meals_per_day)
    return sum(shares[slot] for slot in meal_slots_for(meals_per_day))


def meal_targets(daily: NutritionTargets, fraction: float) -> MacroTargets:
    """Scale each daily target by a slot fraction."""
    return MacroTargets(
        calories=daily.calories * fraction,
        protein_g=daily.protein_g * fraction,
        carbs_g=daily.carbs_g * fraction,
        fat_g=daily.fat_g * fraction,
    )


def meal_sort_key(slot: MealSlot, snack_index: int | None = None) -> tuple[int, int]:
    """Sort key placing breakfast, snacks, lunch, then dinner."""
    return _SORT_ORDER[slot], snack_index or 0
