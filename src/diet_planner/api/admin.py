"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from diet_planner.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/catalog", dependencies=[Depends(require_admin)])
async def catalog_summary(request: Request) -> dict[str, object]:
    """Return catalog size and food counts per sub-category."""
    container: AppContainer = request.app.state.container
    snapshot = container.catalog_service.get_snapshot()
    return {
        "foods": len(snapshot.foods),
        "templates": len(snapshot.templates),
        "sub_categories": container.catalog_service.sub_category_counts(),
    }


@router.post("/catalog/refresh", dependencies=[Depends(require_admin)])
async def refresh_catalog(request: Request) -> dict[str, object]:
    """Reload the cached catalog snapshot."""
    container: AppContainer = request.app.state.container
    snapshot = container.catalog_service.refresh()
    return {"foods": len(snapshot.foods), "templates": len(snapshot.templates)}
