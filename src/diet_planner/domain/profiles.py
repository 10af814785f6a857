"""Domain models for profiles and physical measurements."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from uuid import UUID


class Sex(StrEnum):
    """Biological sex used by the metabolic equations."""

    MALE = "M"
    FEMALE = "F"


class Objective(StrEnum):
    """Body composition objective."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


@dataclass(frozen=True)
class Profile:
    """Read-only profile snapshot used for plan generation."""

    id: UUID
    user_id: UUID | None
    name: str
    sex: Sex
    age: int
    height_cm: float
    meals_per_day: int
    allergies: frozenset[str] = field(default_factory=frozenset)
    diets: frozenset[str] = field(default_factory=frozenset)
    pathologies: frozenset[str] = field(default_factory=frozenset)
    liked_foods: frozenset[str] = field(default_factory=frozenset)
    disliked_foods: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class PhysicalSnapshot:
    """Single entry of a profile's append-only measurement history."""

    id: UUID
    profile_id: UUID
    weight_kg: float
    activity: float
    objective: Objective
    measured_on: date
    body_fat_pct: float | None = None
    lean_body_mass_kg: float | None = None
