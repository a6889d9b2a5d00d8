"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from food_analyzer.api.models import (
    AnalyzeFoodRequest,
    FixFoodRequest,
    NutritionRequest,
)
from food_analyzer.app_logging import configure_logging
from food_analyzer.containers import AppContainer
from food_analyzer.domain.meals import CanonicalMealRecord
from food_analyzer.services.chat import UpstreamError
from food_analyzer.services.payloads import to_payload

SERVICE_NAME = "Food Analyzer API Server"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/")
    async def root() -> dict[str, str]:
        """Service status endpoint."""
        return {"message": SERVICE_NAME, "status": "operational"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/analyze-food")
    async def analyze_food(payload: AnalyzeFoodRequest, request: Request):
        """Analyze a food image and return the normalized nutrition record."""
        state_container: AppContainer = request.app.state.container
        if not payload.image:
            logger.warning("No image provided in request")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"success": False, "error": "Image data is required"},
            )
        return await _respond(
            state_container,
            state_container.analysis_service.analyze(payload.image),
            logger,
        )

    @app.post("/api/fix-food")
    async def fix_food(payload: FixFoodRequest, request: Request):
        """Revise a food following the given instructions."""
        state_container: AppContainer = request.app.state.container
        return await _respond(
            state_container,
            state_container.revision_service.fix_food(
                food_data=payload.food_data,
                instructions=payload.instructions,
                operation_type=payload.operation_type,
                query=payload.query,
            ),
            logger,
        )

    @app.post("/api/nutrition")
    async def nutrition(payload: NutritionRequest, request: Request):
        """Calculate nutrition values for a food."""
        state_container: AppContainer = request.app.state.container
        return await _respond(
            state_container,
            state_container.revision_service.calculate(
                food_name=payload.food_name,
                serving_size=payload.serving_size,
                query=payload.query,
                current_data=payload.current_data,
                operation_type=payload.operation_type,
                instructions=payload.instructions,
            ),
            logger,
        )

    return app


async def _respond(
    container: AppContainer,
    pending: Awaitable[CanonicalMealRecord],
    logger: logging.Logger,
) -> JSONResponse:
    """Await a record and wrap it, or the failure, in the response envelope."""
    try:
        record = await pending
        data = to_payload(record, container.settings.output_format)
        return JSONResponse(content={"success": True, "data": data})
    except UpstreamError as exc:
        logger.error("Upstream model call failed: %s", exc)
        return _error_response(container, exc.status_code, str(exc), exc)
    except Exception as exc:
        logger.exception("Failed to process request")
        return _error_response(
            container,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server error processing request",
            exc,
        )


def _error_response(
    container: AppContainer, status_code: int, message: str, exc: Exception
) -> JSONResponse:
    content: dict[str, object] = {"success": False, "error": message}
    if container.settings.is_local:
        content["details"] = repr(exc)
    return JSONResponse(status_code=status_code, content=content)
