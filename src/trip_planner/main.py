"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, planner
from .config import PlannerConfig, Settings, settings as default_settings
from .services.session import PlannerSession
from .services.submission.client import OptimizerClient

logger = logging.getLogger(__name__)


def _build_client(settings: Settings) -> OptimizerClient | None:
    try:
        return OptimizerClient(
            settings.optimizer_endpoint,
            timeout=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
            backoff_seconds=settings.backoff_seconds,
        )
    except ValueError as e:
        logger.warning(f"Optimizer client not configured for {settings.deployment_mode} mode: {e}")
        return None


def create_app(settings: Settings | None = None, client: OptimizerClient | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title=settings.app_name)
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.settings = settings
    app.state.planner_session = PlannerSession(
        client or _build_client(settings),
        PlannerConfig.from_settings(settings),
    )

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(planner.router, prefix=settings.api_prefix)
    return app


app = create_app()
