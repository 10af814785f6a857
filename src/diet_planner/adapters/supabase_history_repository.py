"""Supabase repository for program history."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from diet_planner.domain.history import HistoryStatus, PlanHistoryEntry
from diet_planner.services.history import HistoryRepository


@dataclass
class SupabaseHistoryRepository(HistoryRepository):
    """Supabase-backed program history repository."""

    client: Client

    def create_entry(
        self,
        profile_id: UUID,
        plan_id: UUID,
        program_name: str,
        status: HistoryStatus,
    ) -> PlanHistoryEntry:
        """Create a history row and return it."""
        response = (
            self.client.table("meal_plan_history")
            .insert(
                {
                    "profile_id": str(profile_id),
                    "plan_id": str(plan_id),
                    "program_name": program_name,
                    "status": status.value,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create history entry")
        return _parse_entry(response.data[0])

    def list_entries(self, profile_id: UUID) -> list[PlanHistoryEntry]:
        """Return a profile's history, newest first."""
        response = (
            self.client.table("meal_plan_history")
            .select("*")
            .eq("profile_id", str(profile_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def get_entry(self, entry_id: UUID) -> PlanHistoryEntry | None:
        """Return a history row by id."""
        response = (
            self.client.table("meal_plan_history")
            .select("*")
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def update_status(self, entry_id: UUID, status: HistoryStatus) -> None:
        """Set the status of a history row."""
        self.client.table("meal_plan_history").update({"status": status.value}).eq(
            "id", str(entry_id)
        ).execute()

    def archive_others(self, profile_id: UUID, keep_entry_id: UUID) -> None:
        """Archive the profile's other history rows."""
        self.client.table("meal_plan_history").update(
            {"status": HistoryStatus.ARCHIVED.value}
        ).eq("profile_id", str(profile_id)).neq("id", str(keep_entry_id)).execute()

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a history row."""
        self.client.table("meal_plan_history").delete().eq(
            "id", str(entry_id)
        ).execute()


def _parse_entry(row: dict[str, object]) -> PlanHistoryEntry:
    created_raw = row.get("created_at")
    return PlanHistoryEntry(
        id=UUID(row["id"]),
        profile_id=UUID(row["profile_id"]),
        plan_id=UUID(row["plan_id"]),
        program_name=str(row.get("program_name", "")),
        status=HistoryStatus(row.get("status", HistoryStatus.ARCHIVED)),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
        notes=row.get("notes"),
    )
