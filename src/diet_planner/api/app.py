"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Path, Request, status

from diet_planner.api.admin import router as admin_router
from diet_planner.api.models import GeneratePlanRequest, HistoryStatusUpdate
from diet_planner.app_logging import configure_logging
from diet_planner.containers import AppContainer
from diet_planner.domain.plans import MealPlan, ShoppingListItem
from diet_planner.services.planner import PLAN_DAYS, PlanGenerationError
from diet_planner.services.shopping import (
    estimate_total_price,
    format_quantity,
    group_by_category,
)
from diet_planner.services.weekly import day_totals, meals_for_day


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.settings.preload_catalog:
            try:
                state_container.catalog_service.get_snapshot()
            except Exception:
                logger.exception("Failed to preload food catalog")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/profiles/{profile_id}/targets")
    async def profile_targets(profile_id: UUID, request: Request) -> dict[str, object]:
        """Return the daily targets computed from the current measurements."""
        state_container: AppContainer = request.app.state.container
        targets = state_container.profile_service.get_targets(profile_id)
        if targets is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Profile or physical data not found",
            )
        return {"targets": targets}

    @app.post("/profiles/{profile_id}/plans", status_code=status.HTTP_201_CREATED)
    async def generate_plan(
        profile_id: UUID,
        request: Request,
        payload: GeneratePlanRequest | None = None,
    ) -> dict[str, object]:
        """Generate a new seven-day plan and make it the active one."""
        state_container: AppContainer = request.app.state.container
        resolved = state_container.profile_service.get_profile_with_snapshot(
            profile_id
        )
        if resolved is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Profile or physical data not found",
            )
        profile, snapshot = resolved
        start_date = payload.start_date if payload else None
        try:
            plan = state_container.meal_plan_service.generate_plan(
                profile, snapshot, start_date=start_date
            )
        except PlanGenerationError as exc:
            logger.exception("Plan generation failed", extra={"profile_id": profile_id})
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)
            ) from exc
        return {"plan": plan}

    @app.get("/profiles/{profile_id}/plans/active")
    async def active_plan(profile_id: UUID, request: Request) -> dict[str, object]:
        """Return the active plan of a profile."""
        state_container: AppContainer = request.app.state.container
        plan = _require_active_plan(state_container, profile_id)
        return {"plan": plan}

    @app.get("/profiles/{profile_id}/plans/active/days/{day}")
    async def active_plan_day(
        profile_id: UUID,
        request: Request,
        day: int = Path(ge=1, le=PLAN_DAYS),
    ) -> dict[str, object]:
        """Return one day of the active plan with its totals."""
        state_container: AppContainer = request.app.state.container
        plan = _require_active_plan(state_container, profile_id)
        return {
            "day": day,
            "targets": plan.targets,
            "meals": meals_for_day(plan, day),
            "totals": day_totals(plan, day),
        }

    @app.get("/profiles/{profile_id}/shopping-list")
    async def shopping_list(profile_id: UUID, request: Request) -> dict[str, object]:
        """Return the active plan's shopping list grouped by category."""
        state_container: AppContainer = request.app.state.container
        items = state_container.meal_plan_service.get_shopping_list(profile_id)
        if items is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No active plan"
            )
        return _format_shopping_list(items)

    @app.get("/profiles/{profile_id}/history")
    async def history(profile_id: UUID, request: Request) -> dict[str, object]:
        """Return the program history of a profile."""
        state_container: AppContainer = request.app.state.container
        return {"history": state_container.history_service.list_history(profile_id)}

    @app.patch("/history/{entry_id}")
    async def update_history(
        entry_id: UUID, update: HistoryStatusUpdate, request: Request
    ) -> dict[str, object]:
        """Change the status of a program history entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.history_service.update_status(entry_id, update.status)
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"entry": entry}

    @app.delete("/history/{entry_id}")
    async def delete_history(entry_id: UUID, request: Request) -> dict[str, str]:
        """Delete a program and its plan."""
        state_container: AppContainer = request.app.state.container
        if not state_container.history_service.delete_entry(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "deleted"}

    return app


def _require_active_plan(container: AppContainer, profile_id: UUID) -> MealPlan:
    plan = container.meal_plan_service.get_active_plan(profile_id)
    if plan is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No active plan"
        )
    return plan


def _format_shopping_list(items: list[ShoppingListItem]) -> dict[str, object]:
    categories = [
        {
            "category": category.value,
            "items": [
                {
                    "food_id": str(item.food_id),
                    "name": item.food.name if item.food else None,
                    "total_grams": item.total_grams,
                    "quantity": format_quantity(item.total_grams),
                }
                for item in entries
            ],
        }
        for category, entries in group_by_category(items).items()
    ]
    return {
        "categories": categories,
        "item_count": len(items),
        "estimated_total_price": round(estimate_total_price(items), 2),
    }
