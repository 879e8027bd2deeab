"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from carbon_footprint.containers import AppContainer

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
async def admin_health(request: Request) -> dict[str, object]:
    """Admin health check with runtime configuration details."""
    container: AppContainer = request.app.state.container
    return {
        "status": "ok",
        "environment": container.settings.environment,
        "factorsVersion": container.factor_table.version,
        "advisoryConfigured": container.advisory_service.client is not None,
    }


@router.get("/factors", dependencies=[Depends(require_admin)])
async def factors(request: Request) -> dict[str, object]:
    """Return the emission factor table in use."""
    container: AppContainer = request.app.state.container
    return container.factor_table.as_dict()
