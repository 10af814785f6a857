"""Greedy gram allocation towards per-meal macro targets."""

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

from diet_planner.domain.foods import FoodCategory, FoodItem
from diet_planner.domain.nutrition import MacroTargets
from diet_planner.services.targets import round_half_up

PROTEIN_MAX_G = 300
PROTEIN_MIN_G = 10
CARB_MAX_G = 200
CARB_MIN_G = 10
VEGETABLE_MIN_G = 50
VEGETABLE_MAX_G = 150
FAT_MAX_G = 30
FAT_MIN_G = 5


@dataclass(frozen=True)
class AllocatedFood:
    """A food with its assigned quantity in grams."""

    food: FoodItem
    grams: int


@dataclass
class _Remaining:
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


def macros_for_quantity(food: FoodItem, grams: float) -> MacroTargets:
    """Return the macros of a portion, rounded to one decimal."""
    factor = grams / 100
    return MacroTargets(
        calories=_round_one_decimal(food.kcal_100g * factor),
        protein_g=_round_one_decimal(food.protein_100g * factor),
        carbs_g=_round_one_decimal(food.carbs_100g * factor),
        fat_g=_round_one_decimal(food.fat_100g * factor),
    )


def allocate_quantities(
    foods: Sequence[FoodItem],
    targets: MacroTargets,
    rng: random.Random,
) -> list[AllocatedFood]:
    """Assign grams category by category: protein, carb, vegetable, then fat."""
    remaining = _Remaining(
        calories=targets.calories,
        protein_g=targets.protein_g,
        carbs_g=targets.carbs_g,
        fat_g=targets.fat_g,
    )
    by_category: dict[FoodCategory, list[FoodItem]] = {
        category: [] for category in FoodCategory
    }
    for food in foods:
        by_category[food.category].append(food)

    result: list[AllocatedFood] = []
    for category in (
        FoodCategory.PROTEIN,
        FoodCategory.CARB,
        FoodCategory.VEGETABLE,
        FoodCategory.FAT,
    ):
        for food in by_category[category]:
            grams = _quantity_for(category, food, remaining, rng)
            if grams is None:
                continue
            _deduct(category, food, grams, remaining)
            result.append(AllocatedFood(food=food, grams=round_half_up(grams)))
    return result


def _quantity_for(
    category: FoodCategory,
    food: FoodItem,
    remaining: _Remaining,
    rng: random.Random,
) -> float | None:
    if category is FoodCategory.PROTEIN:
        if food.protein_100g <= 0:
            return None
        target = min(remaining.protein_g * 0.8, food.protein_100g * 3)
        grams = min(PROTEIN_MAX_G, target / food.protein_100g * 100)
        return grams if grams >= PROTEIN_MIN_G else None
    if category is FoodCategory.CARB:
        if food.carbs_100g <= 0:
            return None
        target = min(remaining.carbs_g * 0.7, food.carbs_100g * 2)
        grams = min(CARB_MAX_G, target / food.carbs_100g * 100)
        return grams if grams >= CARB_MIN_G else None
    if category is FoodCategory.VEGETABLE:
        return float(rng.randrange(VEGETABLE_MIN_G, VEGETABLE_MAX_G))
    if category is FoodCategory.FAT:
        if food.fat_100g <= 0:
            return None
        target = min(remaining.fat_g * 0.5, food.fat_100g * 0.3)
        grams = min(FAT_MAX_G, target / food.fat_100g * 100)
        return grams if grams >= FAT_MIN_G else None
    raise ValueError(f"Unknown food category: {category}")


def _deduct(
    category: FoodCategory, food: FoodItem, grams: float, remaining: _Remaining
) -> None:
    factor = grams / 100
    if category is FoodCategory.PROTEIN:
        remaining.calories -= food.kcal_100g * factor
        remaining.protein_g -= food.protein_100g * factor
        remaining.carbs_g -= food.carbs_100g * factor
        remaining.fat_g -= food.fat_100g * factor
    elif category is FoodCategory.CARB:
        remaining.calories -= food.kcal_100g * factor
        remaining.carbs_g -= food.carbs_100g * factor
        remaining.fat_g -= food.fat_100g * factor
    elif category is FoodCategory.VEGETABLE:
        remaining.calories -= food.kcal_100g * factor
        remaining.carbs_g -= food.carbs_100g * factor


def _round_one_decimal(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10
