"""Nutrition target models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionTargets:
    """Daily energy and macronutrient targets, rounded to whole units."""

    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int


@dataclass(frozen=True)
class MacroTargets:
    """Energy and macronutrient amounts for a single meal or item."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
