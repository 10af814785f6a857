"""Tests for the meal distribution table."""

import pytest

from diet_planner.domain.foods import MealSlot
from diet_planner.domain.nutrition import NutritionTargets
from diet_planner.services.distribution import (
    day_share,
    distribution,
    meal_slots_for,
    meal_sort_key,
    meal_targets,
)


@pytest.mark.parametrize("meals_per_day", [4, 5, 6])
def test_day_shares_sum_to_one(meals_per_day: int) -> None:
    assert day_share(meals_per_day) == pytest.approx(1.0)


def test_three_meals_keep_base_shares() -> None:
    shares = distribution(3)

    assert set(shares) == {MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER}
    assert day_share(3) == pytest.approx(0.90)


def test_snacks_are_interleaved() -> None:
    assert meal_slots_for(5) == (
        MealSlot.BREAKFAST,
        MealSlot.SNACK,
        MealSlot.LUNCH,
        MealSlot.SNACK,
        MealSlot.DINNER,
    )
    assert meal_slots_for(6).count(MealSlot.SNACK) == 3
    assert len(meal_slots_for(4)) == 4


def test_snack_share_is_split_evenly() -> None:
    assert distribution(5)[MealSlot.SNACK] == pytest.approx(0.075)
    assert distribution(6)[MealSlot.SNACK] == pytest.approx(0.25 / 3)


@pytest.mark.parametrize("meals_per_day", [0, 2, 7])
def test_unsupported_meal_count(meals_per_day: int) -> None:
    with pytest.raises(ValueError, match="Unsupported meals per day"):
        meal_slots_for(meals_per_day)
    with pytest.raises(ValueError, match="Unsupported meals per day"):
        distribution(meals_per_day)


def test_meal_targets_scale_each_macro() -> None:
    daily = NutritionTargets(calories=2000, protein_g=150, carbs_g=200, fat_g=70)

    targets = meal_targets(daily, 0.35)

    assert targets.calories == pytest.approx(700)
    assert targets.protein_g == pytest.approx(52.5)
    assert targets.carbs_g == pytest.approx(70)
    assert targets.fat_g == pytest.approx(24.5)


def test_meal_sort_key_orders_slots() -> None:
    entries = [
        (MealSlot.DINNER, None),
        (MealSlot.SNACK, 2),
        (MealSlot.LUNCH, None),
        (MealSlot.SNACK, 1),
        (MealSlot.BREAKFAST, None),
    ]

    ordered = sorted(entries, key=lambda entry: meal_sort_key(*entry))

    assert ordered == [
        (MealSlot.BREAKFAST, None),
        (MealSlot.SNACK, 1),
        (MealSlot.SNACK, 2),
        (MealSlot.LUNCH, None),
        (MealSlot.DINNER, None),
    ]
