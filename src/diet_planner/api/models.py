"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import BaseModel

from diet_planner.domain.history import HistoryStatus


class HistoryStatusUpdate(BaseModel):
    """Requested status for a program history entry."""

    status: HistoryStatus


class GeneratePlanRequest(BaseModel):
    """Optional parameters for plan generation."""

    start_date: date | None = None
