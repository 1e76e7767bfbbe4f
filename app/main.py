"""FastAPI application factory."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.core.errors import AppError
from app.db import engine
from app.infra.logging_config import LoggingConfig, get_logger
from app.infra.request_logging import RequestLoggingMiddleware
from app.routers import (
    contact_router,
    password_router,
    snippets_router,
    system,
    tags_router,
    tasks_router,
    weather_router,
)

logger = get_logger("main")

API_PREFIX = "/api"


def wait_for_database(retries: int, delay: float) -> None:
    """Block until the database answers, retrying a fixed number of times."""
    for attempt in range(1, retries + 1):
        try:
            logger.info("Attempting database connection (%d/%d)", attempt, retries)
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection successful")
            return
        except SQLAlchemyError as e:
            if attempt == retries:
                raise
            logger.warning(
                "Database connection failed, retrying in %ss: %s", delay, e
            )
            time.sleep(delay)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Starting %s (%s)", settings.app_name, settings.environment)
    if not app.state.testing:
        wait_for_database(
            settings.db_connect_retries, settings.db_connect_retry_delay_seconds
        )
    yield
    if not app.state.testing:
        engine.dispose()
    logger.info("Shutting down %s", settings.app_name)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation failed",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(testing: bool = False) -> FastAPI:
    LoggingConfig()
    settings = get_settings()

    app = FastAPI(
        title="Portfolio API",
        description="Contact form, weather, snippets, tasks and password tools",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.testing = testing

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(system.router, prefix=API_PREFIX)
    app.include_router(contact_router.router, prefix=API_PREFIX)
    app.include_router(weather_router.router, prefix=API_PREFIX)
    app.include_router(snippets_router.router, prefix=API_PREFIX)
    app.include_router(tags_router.router, prefix=API_PREFIX)
    app.include_router(tasks_router.router, prefix=API_PREFIX)
    app.include_router(password_router.router, prefix=API_PREFIX)

    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
