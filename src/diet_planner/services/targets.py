"""Daily energy and macronutrient target calculation."""

import math

from diet_planner.domain.nutrition import NutritionTargets
from diet_planner.domain.profiles import Objective, PhysicalSnapshot, Profile, Sex

YOUNG_ADULT_MAX_AGE = 30
ADULT_MAX_AGE = 60
MIN_ADULT_AGE = 18
DEFAULT_LEAN_MASS_RATIO = 0.85
PROTEIN_PER_LEAN_KG = 1.9
FAT_PER_KG = 0.95
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

_OBJECTIVE_FACTORS = {
    Objective.LOSE: 0.85,
    Objective.MAINTAIN: 1.0,
    Objective.GAIN: 1.10,
}

# (slope, intercept) per sex for the 18-30, 31-60 and remaining age bands.
_BMR_COEFFICIENTS = {
    Sex.MALE: ((15.3, 679.0), (11.6, 879.0), (13.5, 487.0)),
    Sex.FEMALE: ((14.7, 496.0), (8.7, 829.0), (10.5, 596.0)),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def compute_bmr(profile: Profile, snapshot: PhysicalSnapshot) -> float:
    """Return the basal metabolic rate in kcal/day."""
    young, adult, other = _BMR_COEFFICIENTS[profile.sex]
    if MIN_ADULT_AGE <= profile.age <= YOUNG_ADULT_MAX_AGE:
        slope, intercept = young
    elif YOUNG_ADULT_MAX_AGE < profile.age <= ADULT_MAX_AGE:
        slope, intercept = adult
    else:
        slope, intercept = other
    return slope * snapshot.weight_kg + intercept


def compute_tdee(profile: Profile, snapshot: PhysicalSnapshot) -> float:
    """Return total daily energy expenditure."""
    return compute_bmr(profile, snapshot) * snapshot.activity


def compute_calorie_target(profile: Profile, snapshot: PhysicalSnapshot) -> float:
    """Return the unrounded calorie target for the snapshot's objective."""
    return compute_tdee(profile, snapshot) * _OBJECTIVE_FACTORS[snapshot.objective]


def lean_body_mass(snapshot: PhysicalSnapshot) -> float:
    """Return measured lean mass, or an estimate assuming 15% body fat."""
    if snapshot.lean_body_mass_kg:
        return snapshot.lean_body_mass_kg
    return snapshot.weight_kg * DEFAULT_LEAN_MASS_RATIO


def compute_targets(profile: Profile, snapshot: PhysicalSnapshot) -> NutritionTargets:
    """Compute rounded daily calorie, protein, carb and fat targets."""
    calories = round_half_up(compute_calorie_target(profile, snapshot))
    protein = round_half_up(lean_body_mass(snapshot) * PROTEIN_PER_LEAN_KG)
    fat = round_half_up(snapshot.weight_kg * FAT_PER_KG)
    remaining = calories - protein * KCAL_PER_G_PROTEIN - fat * KCAL_PER_G_FAT
    carbs = round_half_up(max(0.0, remaining / KCAL_PER_G_CARBS))
    return NutritionTargets(
        calories=calories,
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
    )
