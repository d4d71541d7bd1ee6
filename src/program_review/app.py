"""Web entry point — FastAPI app factory and lifespan wiring."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from azure.cosmos.exceptions import CosmosHttpResponseError
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.sessions import SessionMiddleware

from program_review.config import load_settings
from program_review.database.client import CosmosClient
from program_review.errors import ProgramReviewError
from program_review.logging import configure_logging
from program_review.ratelimit import limiter
from program_review.routes import ROUTERS
from program_review.storage.files import RevisionFileStore

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from starlette.responses import Response

    from program_review.config import Settings

logger = logging.getLogger(__name__)

_DEV_SECRET_KEY = "development-only-secret"


async def init_database(settings: Settings) -> CosmosClient:
    cosmos = CosmosClient(settings.cosmos)
    await cosmos.initialize()
    return cosmos


async def init_storage(settings: Settings) -> RevisionFileStore:
    files = RevisionFileStore(settings.storage)
    await files.initialize()
    return files


def _error_response(status_code: int, detail: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


async def _domain_error(request: Request, exc: ProgramReviewError) -> JSONResponse:
    logger.info("%s %s rejected — %s", request.method, request.url.path, exc.detail)
    return _error_response(exc.status_code, exc.detail)


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s invalid request", request.method, request.url.path)
    return _error_response(status.HTTP_400_BAD_REQUEST, jsonable_encoder(exc.errors()))


async def _model_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("%s %s invalid record", request.method, request.url.path)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        exc.errors(include_url=False, include_context=False),
    )


async def _storage_error(request: Request, exc: CosmosHttpResponseError) -> JSONResponse:
    logger.error(
        "%s %s failed — Cosmos DB status=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc_info=exc,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage error")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = load_settings()
    configure_logging(settings.app.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Web app starting — env=%s", settings.app.env)
        cosmos = await init_database(settings)
        files = await init_storage(settings)
        app.state.settings = settings
        app.state.cosmos = cosmos
        app.state.files = files
        app.state.start_time = time.time()
        try:
            yield
        finally:
            logger.info("Web app shutting down")
            await files.close()
            await cosmos.close()

    app = FastAPI(title="Program Review", lifespan=lifespan)
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    secret_key = settings.app.secret_key
    if not secret_key:
        if not settings.app.is_development:
            raise RuntimeError("APP_SECRET_KEY must be set outside development")
        logger.warning("APP_SECRET_KEY is not set — using the development session key")
        secret_key = _DEV_SECRET_KEY
    app.add_middleware(
        SessionMiddleware,
        secret_key=secret_key,
        https_only=not settings.app.is_development,
    )

    slow_request_ms = settings.app.slow_request_ms

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started_at = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - started_at) * 1000
        log = logger.warning if duration_ms > slow_request_ms else logger.debug
        log(
            "%s %s — status=%d duration_ms=%.0f",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    app.add_exception_handler(ProgramReviewError, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ValidationError, _model_validation_error)
    app.add_exception_handler(CosmosHttpResponseError, _storage_error)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    for router in ROUTERS:
        app.include_router(router)

    return app


def main() -> None:
    """Serve the app with uvicorn."""
    import uvicorn  # noqa: PLC0415

    uvicorn.run("program_review.app:create_app", factory=True, host="0.0.0.0", port=8000)  # noqa: S104


if __name__ == "__main__":
    main()
