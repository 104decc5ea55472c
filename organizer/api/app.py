"""
Relationship Organizer FastAPI application.

Run with:
    python -m organizer.main

The app is built by create_app(); all services are wired in the lifespan
and stored on app.state.services. The Telegram scheduler is armed on startup
when notifications are enabled and stopped on shutdown.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from aiogram import Bot
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from organizer.api.routers import ALL_ROUTERS
from organizer.bootstrap import build_services
from organizer.config import Settings, load_settings
from organizer.constants import HERO_IMAGE_NAME
from organizer.domain.common.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(settings: Optional[Settings] = None, bot: Optional[Bot] = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        services = await build_services(settings, bot=bot)
        app.state.services = services
        if services.scheduler.enabled:
            services.scheduler.start()
        else:
            logger.info("Telegram notifications disabled")
        logger.info("Relationship Organizer started")

        yield

        logger.info("Shutting down...")
        await services.aclose()

    app = FastAPI(title="Relationship Organizer API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in ALL_ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    # StaticFiles checks the directory at mount time
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(settings.uploads_dir)), name="uploads")

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": "Invalid request data."})

    @app.get(f"{API_PREFIX}/health")
    async def health_check():
        return {"status": "OK", "message": "Relationship Organizer API is running"}

    @app.get(f"/{HERO_IMAGE_NAME}", include_in_schema=False)
    async def hero_image():
        path = settings.public_dir / HERO_IMAGE_NAME
        if not path.exists():
            raise HTTPException(status_code=404, detail="No hero image uploaded")
        return FileResponse(path)

    return app
