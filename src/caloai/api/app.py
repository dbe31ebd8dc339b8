"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from caloai.api.analysis import router as analysis_router
from caloai.api.calories import router as calories_router
from caloai.api.meal_plans import router as meal_plans_router
from caloai.api.profile import router as profile_router
from caloai.api.rewards import router as rewards_router
from caloai.app_logging import configure_logging
from caloai.containers import AppContainer
from caloai.domain.errors import CaloAIError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(profile_router)
    app.include_router(calories_router)
    app.include_router(meal_plans_router)
    app.include_router(rewards_router)
    app.include_router(analysis_router)

    @app.exception_handler(CaloAIError)
    async def handle_app_error(request: Request, exc: CaloAIError) -> JSONResponse:
        if exc.status_code >= 500:  # noqa: PLR2004
            logger.error(
                "Request failed: %s",
                exc.message,
                extra={"path": request.url.path, "details": exc.details},
            )
        else:
            logger.warning(
                "Request rejected: %s", exc.message, extra={"path": request.url.path}
            )
        content: dict[str, object] = {"error": exc.message}
        if exc.details:
            content["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        if any(error.get("type") == "json_invalid" for error in errors):
            message = "Invalid request body format. Expected JSON."
        else:
            message = "Invalid request data."
        details = "; ".join(_describe_error(error) for error in errors)
        logger.warning(
            "Request rejected: %s", details, extra={"path": request.url.path}
        )
        return JSONResponse(
            status_code=400, content={"error": message, "details": details}
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _describe_error(error: dict[str, object]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg')}"
