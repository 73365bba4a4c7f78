"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rebar_designer.api.routes import router

API_VERSION = "0.1.0"


def create_app(allowed_origins: list[str] | None = None) -> FastAPI:
    """Build the design API; every route lives under /api."""
    app = FastAPI(
        title="Rebar Designer",
        description="Ranks longitudinal and transverse reinforcement arrangements for concrete beams",
        version=API_VERSION,
    )

    # Browsers reject credentials with a wildcard origin
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api", tags=["design"])

    return app


app = create_app()
