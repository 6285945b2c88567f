"""FastAPI application factory for the HTTP front end."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pastepouch.core.config import Settings, get_settings
from pastepouch.db import create_all, get_engine
from pastepouch.repositories.paste_repository import PasteRepository
from pastepouch.routers import pastes as pastes_router
from pastepouch.services.operations import PasteService

logger = logging.getLogger(__name__)


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    locations = {str(err.get("loc", ("",))[0]) for err in exc.errors()}
    message = "Invalid request body" if "body" in locations else "Invalid request parameters"
    logger.info("%s %s rejected: %s", request.method, request.url.path, message)
    return JSONResponse({"error": message}, status_code=400)


def create_app(service: PasteService, settings: Optional[Settings] = None) -> FastAPI:
    """Build the app around an already-connected ``service``."""
    settings = settings or get_settings()
    app = FastAPI(title="PastePouch API")
    app.state.paste_service = service

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Origin", "Content-Type", "Authorization"],
            expose_headers=["Content-Length"],
            max_age=12 * 60 * 60,
        )
    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.include_router(pastes_router.router)
    return app


def create_default_app() -> FastAPI:
    """Factory for ``uvicorn --factory`` against the local DATABASE_URL."""
    engine = get_engine()
    create_all(engine)
    return create_app(PasteService(PasteRepository(engine)))


def serve(app: FastAPI, settings: Optional[Settings] = None) -> None:
    import uvicorn

    settings = settings or get_settings()
    logger.info("Serving HTTP on %s:%s", settings.http_host, settings.http_port)
    uvicorn.run(app, host=settings.http_host, port=settings.http_port, log_level=settings.log_level.lower())
