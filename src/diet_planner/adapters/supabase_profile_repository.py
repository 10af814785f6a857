"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from diet_planner.domain.profiles import Objective, PhysicalSnapshot, Profile, Sex
from diet_planner.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile reads."""

    client: Client

    def get_profile(self, profile_id: UUID) -> Profile | None:
        """Return the profile row, if present."""
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", str(profile_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Profile(
            id=UUID(row["id"]),
            user_id=UUID(row["user_id"]) if row.get("user_id") else None,
            name=str(row.get("name", "")),
            sex=Sex(row["sex"]),
            age=int(row["age"]),
            height_cm=float(row.get("height_cm") or 0.0),
            meals_per_day=int(row.get("meals_per_day") or 4),
            allergies=frozenset(row.get("allergies") or ()),
            diets=frozenset(row.get("diets") or ()),
            pathologies=frozenset(row.get("pathologies") or ()),
            liked_foods=frozenset(row.get("liked_foods") or ()),
            disliked_foods=frozenset(row.get("disliked_foods") or ()),
        )

    def get_current_snapshot(self, profile_id: UUID) -> PhysicalSnapshot | None:
        """Return the latest measurement for a profile."""
        response = (
            self.client.table("profile_physical_history")
            .select("*")
            .eq("profile_id", str(profile_id))
            .order("measured_on", desc=True)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return PhysicalSnapshot(
            id=UUID(row["id"]),
            profile_id=UUID(row["profile_id"]),
            weight_kg=float(row["weight_kg"]),
            activity=float(row.get("activity") or 1.2),
            objective=Objective(row.get("objective") or Objective.MAINTAIN),
            measured_on=date.fromisoformat(str(row["measured_on"])[:10]),
            body_fat_pct=_optional_float(row.get("body_fat_pct")),
            lean_body_mass_kg=_optional_float(row.get("lean_body_mass_kg")),
        )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None
