# src/rps_arena/main.py
"""Main entry point for the RPS Arena application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rps_arena.api import auth_router, game_router, system_router
from rps_arena.core.errors import AppError
from rps_arena.core.logging_config import configure_logging
from rps_arena.core.settings import settings
from rps_arena.db.session import create_tables

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="OTP login and stone/paper/scissor with persisted scores",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routers
app.include_router(auth_router)
app.include_router(game_router)
app.include_router(system_router)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected body for %s: %s", request.url.path, exc.errors())
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request body")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Configuration loaded for %s %s", settings.app_name, settings.app_version)
    if settings.auto_create_tables:
        create_tables()
        logger.info("Database tables ensured")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("rps_arena.main:app", host="0.0.0.0", port=3000, reload=settings.debug)
