"""Program history management."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_planner.domain.history import HistoryStatus, PlanHistoryEntry

_logger = logging.getLogger(__name__)


class HistoryRepository(Protocol):
    """Persistence interface for program history entries."""

    def create_entry(
        self,
        profile_id: UUID,
        plan_id: UUID,
        program_name: str,
        status: HistoryStatus,
    ) -> PlanHistoryEntry:
        """Create a history entry and return it."""

    def list_entries(self, profile_id: UUID) -> list[PlanHistoryEntry]:
        """Return a profile's entries, newest first."""

    def get_entry(self, entry_id: UUID) -> PlanHistoryEntry | None:
        """Return an entry by id."""

    def update_status(self, entry_id: UUID, status: HistoryStatus) -> None:
        """Set the status of an entry."""

    def archive_others(self, profile_id: UUID, keep_entry_id: UUID) -> None:
        """Archive every entry of a profile except one."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""


class PlanDeleter(Protocol):
    """Deletes a plan and its dependent rows."""

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan."""


@dataclass
class HistoryService:
    """Service for browsing and curating generated programs."""

    repository: HistoryRepository
    plans: PlanDeleter

    def list_history(self, profile_id: UUID) -> list[PlanHistoryEntry]:
        """Return the program history of a profile."""
        return self.repository.list_entries(profile_id)

    def update_status(
        self, entry_id: UUID, status: HistoryStatus
    ) -> PlanHistoryEntry | None:
        """Change an entry's status; activating one archives the others."""
        entry = self.repository.get_entry(entry_id)
        if entry is None:
            return None
        self.repository.update_status(entry_id, status)
        if status is HistoryStatus.ACTIVE:
            self.repository.archive_others(entry.profile_id, keep_entry_id=entry_id)
        return self.repository.get_entry(entry_id)

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry together with its plan."""
        entry = self.repository.get_entry(entry_id)
        if entry is None:
            return False
        self.repository.delete_entry(entry_id)
        self.plans.delete_plan(entry.plan_id)
        _logger.info("Program deleted: entry=%s plan=%s", entry_id, entry.plan_id)
        return True
