"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/optimizer", status_code=status.HTTP_200_OK)
def health_optimizer(request: Request) -> dict:
    """Report which optimizer endpoint submissions go to."""
    settings = request.app.state.settings
    endpoint = settings.optimizer_endpoint
    return {
        "service": "optimizer",
        "mode": settings.deployment_mode,
        "configured": bool(endpoint),
        "endpoint": endpoint,
    }
