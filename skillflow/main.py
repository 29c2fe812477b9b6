"""FastAPI application factory and global exception handling."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from skillflow import __version__ as app_version
from skillflow.api.insights import router as insights_router
from skillflow.api.routes import router
from skillflow.config import get_settings
from skillflow.store.loader import get_topic_registry, reload_topics


def create_application() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    registry = get_topic_registry()
    if not registry.is_loaded():
        reload_topics(settings.profiles_dir)

    app = FastAPI(
        title=settings.app_name,
        description="Skill and location analytics over demo talent profiles.",
        version=app_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        detail = exc.detail
        if isinstance(detail, dict) and "error" in detail:
            payload = detail
        elif detail == "There was an error parsing the body":
            payload = {"error": "invalid_json", "details": detail}
        else:
            payload = {"error": "http_error", "details": detail}
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.get("/healthz", tags=["health"])
    async def healthz() -> dict[str, Any]:
        return {
            "status": "ok",
            "version": app_version,
            "topics": registry.get_available_topics(),
        }

    app.include_router(router)
    app.include_router(insights_router)
    return app


app = create_application()
