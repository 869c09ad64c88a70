"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ecoconnect.api.models import AnswersRequest, FeedbackRequest, LocationRequest
from ecoconnect.app_logging import configure_logging
from ecoconnect.config import Settings
from ecoconnect.containers import AppContainer
from ecoconnect.domain.errors import (
    InvalidInputError,
    NotFoundError,
    UpstreamFailureError,
)
from ecoconnect.domain.items import ItemRecord
from ecoconnect.domain.questions import QUESTIONS_PER_ITEM
from ecoconnect.services.items import RejectedItem

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp"}


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
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins(container.settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidInputError)
    async def invalid_input(_: Request, exc: InvalidInputError) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found(_: Request, exc: NotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(UpstreamFailureError)
    async def upstream_failure(
        request: Request, exc: UpstreamFailureError
    ) -> JSONResponse:
        logger.warning(
            "Upstream failure: %s",
            exc.__cause__ or exc,
            extra={"path": request.url.path},
        )
        return _error(502, str(exc))

    @app.exception_handler(Exception)
    async def unexpected_failure(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return _error(500, "Internal server error")

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/items", response_model=None)
    async def upload_item(
        request: Request, image: UploadFile = File(...)
    ) -> dict[str, object] | JSONResponse:
        """Classify an uploaded photo and return its follow-up questions."""
        state_container: AppContainer = request.app.state.container
        content_type = (image.content_type or "").lower()
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise InvalidInputError(
                "Only image files are allowed (jpeg, jpg, png, webp)"
            )
        image_bytes = await image.read()
        if not image_bytes:
            raise InvalidInputError("Please upload an image file")
        if len(image_bytes) > state_container.settings.max_upload_bytes:
            raise InvalidInputError("Image file is too large")

        outcome = await state_container.item_service.submit_image(
            image_bytes, content_type
        )
        if isinstance(outcome, RejectedItem):
            return JSONResponse(
                status_code=400,
                content={
                    "success": False,
                    "is_valid_item": False,
                    "error": outcome.reason,
                    "confidence": outcome.confidence,
                },
            )
        return {"success": True, "data": asdict(outcome)}

    @app.get("/api/items/{item_id}")
    async def get_item(item_id: str, request: Request) -> dict[str, object]:
        """Return a stored item with everything derived so far."""
        state_container: AppContainer = request.app.state.container
        record = state_container.item_service.get_item(item_id)
        return {"success": True, "data": _item_payload(record)}

    @app.post("/api/items/{item_id}/answers")
    async def submit_answers(
        item_id: str, payload: AnswersRequest, request: Request
    ) -> dict[str, object]:
        """Store answers and return the recommendation."""
        state_container: AppContainer = request.app.state.container
        if len(payload.answers) != QUESTIONS_PER_ITEM:
            raise InvalidInputError(
                f"Please answer all {QUESTIONS_PER_ITEM} questions"
            )
        recommendation = state_container.item_service.submit_answers(
            item_id, payload.answers
        )
        return {
            "success": True,
            "data": {"item_id": item_id, "recommendation": asdict(recommendation)},
        }

    @app.post("/api/items/{item_id}/locations")
    async def resolve_locations(
        item_id: str, payload: LocationRequest, request: Request
    ) -> dict[str, object]:
        """Find facilities near the user for this item."""
        state_container: AppContainer = request.app.state.container
        facilities = await state_container.item_service.resolve_location(
            item_id, payload.latitude, payload.longitude
        )
        return {
            "success": True,
            "data": {
                "item_id": item_id,
                "user_location": {
                    "latitude": payload.latitude,
                    "longitude": payload.longitude,
                },
                "locations": [asdict(facility) for facility in facilities],
            },
        }

    @app.post("/api/feedback")
    async def submit_feedback(
        payload: FeedbackRequest, request: Request
    ) -> dict[str, object]:
        """Record feedback on a recommendation."""
        state_container: AppContainer = request.app.state.container
        state_container.feedback_service.submit(
            item_id=payload.item_id,
            rating=payload.rating,
            comment=payload.comment,
            was_helpful=payload.was_helpful,
        )
        return {"success": True, "message": "Thank you for your feedback!"}

    return app


def allowed_origins(settings: Settings) -> list[str]:
    """Return the browser origins allowed to call the API."""
    origins = list(settings.cors_origins)
    if settings.frontend_url and settings.frontend_url not in origins:
        origins.append(settings.frontend_url)
    return origins


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


def _item_payload(record: ItemRecord) -> dict[str, object]:
    payload = asdict(record)
    payload["created_at"] = record.created_at.isoformat()
    payload["stage"] = str(record.stage)
    return payload
