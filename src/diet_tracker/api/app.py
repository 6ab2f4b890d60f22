"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from diet_tracker.api.food_items import router as food_items_router
from diet_tracker.api.meals import router as meals_router
from diet_tracker.api.user import router as user_router
from diet_tracker.app_logging import configure_logging
from diet_tracker.config import parse_cors_origins
from diet_tracker.containers import AppContainer
from diet_tracker.domain.errors import DietTrackerError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Using data file %s", app.state.container.settings.data_file)
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Diet Tracker", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meals_router)
    app.include_router(food_items_router)
    app.include_router(user_router)

    @app.exception_handler(DietTrackerError)
    async def handle_domain_error(
        request: Request, exc: DietTrackerError
    ) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"error": _format_validation_errors(exc.errors())}
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _format_validation_errors(errors: Sequence[dict[str, object]]) -> str:
    """Turn pydantic errors into one short message."""
    messages: list[str] = []
    for error in errors:
        location = [
            str(part) for part in error.get("loc", ()) if part not in {"body", "path"}
        ]
        field = ".".join(location) or "body"
        if error.get("type") == "missing":
            messages.append(f"{field} is required")
        else:
            messages.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(messages) or "Invalid request"
