"""Food eligibility, scoring and ranked selection."""

import logging
import random
from collections.abc import Iterable, Mapping

from diet_planner.domain.foods import FoodCategory, FoodItem, MealSlot
from diet_planner.domain.profiles import Profile

DEFAULT_GLYCEMIC_INDEX = 50.0
DEFAULT_PRICE_PER_KG = 10.0
SAMPLING_WINDOW = 3
FALLBACK_FOOD_COUNT = 3
FALLBACK_GRAMS = 100

_FALLBACK_CATEGORIES = frozenset(
    {FoodCategory.PROTEIN, FoodCategory.CARB, FoodCategory.VEGETABLE}
)

_logger = logging.getLogger(__name__)


def is_compatible_food(food: FoodItem, profile: Profile) -> bool:
    """Return whether a food respects the profile's allergies, diets and dislikes."""
    if profile.allergies.intersection(food.allergens):
        return False
    if profile.diets and not profile.diets.intersection(food.diets):
        return False
    return food.name not in profile.disliked_foods


def is_food_compatible_with_slot(food: FoodItem, slot: MealSlot) -> bool:
    """Return whether a food may be served in a meal slot."""
    if not food.meal_slots:
        return True
    return slot in food.meal_slots


def food_score(food: FoodItem) -> float:
    """Return the nutritional score used to rank candidates."""
    protein_density = food.protein_100g / food.kcal_100g if food.kcal_100g else 0.0
    fiber_density = food.fiber_100g / 100
    glycemic_index = food.glycemic_index or DEFAULT_GLYCEMIC_INDEX
    price = food.price_per_kg or DEFAULT_PRICE_PER_KG
    return (
        0.45 * protein_density * 100
        + 0.25 * fiber_density * 100
        - 0.15 * (glycemic_index / 100) * 100
        - 0.10 * food.inflammatory_score * 10
        - 0.05 * (price / 20) * 100
    )


def select_foods(
    catalog: Iterable[FoodItem],
    profile: Profile,
    slot: MealSlot,
    required_categories: Mapping[str, int],
    rng: random.Random,
) -> list[FoodItem]:
    """Pick foods for each required sub-category.

    Candidates are ranked by score; every pick is drawn from the best three
    remaining candidates. Sub-categories without candidates are skipped.
    """
    foods = tuple(catalog)
    selected: list[FoodItem] = []
    for sub_category, count in required_categories.items():
        candidates = sorted(
            (
                food
                for food in foods
                if food.sub_category == sub_category
                and is_compatible_food(food, profile)
                and is_food_compatible_with_slot(food, slot)
            ),
            key=food_score,
            reverse=True,
        )
        if not candidates:
            _logger.debug(
                "No candidates: slot=%s sub_category=%s", slot, sub_category
            )
            continue
        for _ in range(min(count, len(candidates))):
            window = min(SAMPLING_WINDOW, len(candidates))
            selected.append(candidates.pop(rng.randrange(window)))
    return selected


def fallback_foods(catalog: Iterable[FoodItem]) -> list[FoodItem]:
    """Return the basic foods used when no food could be selected."""
    basics = [food for food in catalog if food.category in _FALLBACK_CATEGORIES]
    return basics[:FALLBACK_FOOD_COUNT]
