"""Health check routes."""

from datetime import datetime, timezone
from typing import Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from pydantic import BaseModel

from portal.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    cleanup_scheduler: Literal["running", "stopped", "disabled"]


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, settings: FromDishka[Settings]) -> HealthResponse:
    """Report liveness and whether the expired-invite cleanup job is scheduled."""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        cleanup_scheduler = "disabled"
    elif scheduler.running:
        cleanup_scheduler = "running"
    else:
        cleanup_scheduler = "stopped"

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
        git_sha=settings.git_sha,
        cleanup_scheduler=cleanup_scheduler,
    )
