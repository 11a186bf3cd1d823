"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, routes
from .config import settings


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name)
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
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
    app.include_router(routes.router, prefix=settings.api_prefix)
    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn; PORT and HOST are read from the environment."""
    import os

    import uvicorn

    port = os.environ.get("PORT", "8000")
    try:
        port_int = int(port)
    except ValueError:
        logging.warning(f"Invalid PORT value '{port}', using default 8000")
        port_int = 8000
    uvicorn.run(
        "savings_router.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=port_int,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
