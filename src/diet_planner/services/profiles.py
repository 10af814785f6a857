"""Profile lookups for plan generation."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_planner.domain.nutrition import NutritionTargets
from diet_planner.domain.profiles import PhysicalSnapshot, Profile
from diet_planner.services.targets import compute_targets


class ProfileRepository(Protocol):
    """Read interface for profiles and their measurement history."""

    def get_profile(self, profile_id: UUID) -> Profile | None:
        """Return a profile by id, if present."""

    def get_current_snapshot(self, profile_id: UUID) -> PhysicalSnapshot | None:
        """Return the most recent physical snapshot of a profile."""


@dataclass
class ProfileService:
    """Application service for profile reads."""

    repository: ProfileRepository

    def get_profile_with_snapshot(
        self, profile_id: UUID
    ) -> tuple[Profile, PhysicalSnapshot] | None:
        """Return the profile and its current snapshot, or None if either is missing."""
        profile = self.repository.get_profile(profile_id)
        if profile is None:
            return None
        snapshot = self.repository.get_current_snapshot(profile_id)
        if snapshot is None:
            return None
        return profile, snapshot

    def get_targets(self, profile_id: UUID) -> NutritionTargets | None:
        """Return the current daily targets of a profile."""
        resolved = self.get_profile_with_snapshot(profile_id)
        if resolved is None:
            return None
        return compute_targets(*resolved)
