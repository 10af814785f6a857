"""Program history domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class HistoryStatus(StrEnum):
    """Status of a program history entry."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    FAVORITE = "favorite"


@dataclass(frozen=True)
class PlanHistoryEntry:
    """Program history entry pointing at a generated plan."""

    id: UUID
    profile_id: UUID
    plan_id: UUID
    program_name: str
    status: HistoryStatus
    created_at: datetime | None = None
    notes: str | None = None
