"""Root API router with health endpoints and module mounting."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from rolegate.api.dependencies import Access
from rolegate.modules.tasks.routes import router as tasks_router


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str


# Create root API router
api_router = APIRouter()

# Health check endpoints (no /api/v1 prefix)
health_router = APIRouter(tags=["health"])


@health_router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns 200 if the process is running.",
)
async def liveness() -> HealthResponse:
    """Liveness probe endpoint."""
    return HealthResponse(status="alive")


@health_router.get(
    "/info",
    summary="Engine info",
    description="Returns role graph and permission index sizes.",
)
async def info(access: Access) -> dict[str, Any]:
    """Engine info endpoint."""
    return {
        "roles": len(access.graph),
        "grants": len(access.index),
        "max_hierarchy_depth": access.graph.max_depth,
    }


# Create versioned API router
v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(tasks_router)

# Include routers in main api_router
api_router.include_router(health_router)
api_router.include_router(v1_router)
