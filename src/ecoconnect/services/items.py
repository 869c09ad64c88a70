"""Item lifecycle: classify an image, collect answers, resolve facilities."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from ecoconnect.domain.categories import Category, categorize
from ecoconnect.domain.errors import InvalidInputError, NotFoundError
from ecoconnect.domain.items import (
    Facility,
    ItemRecord,
    Recommendation,
    is_valid_item_id,
    new_item_id,
)
from ecoconnect.domain.questions import Question, questions_for
from ecoconnect.services.classification import ClassifierService
from ecoconnect.services.facilities import DEFAULT_RADIUS_M, FacilityResolver
from ecoconnect.services.recommendations import RecommendationEngine

_logger = logging.getLogger(__name__)


class ItemRepository(Protocol):
    """Persistence interface for item records."""

    def create_item(self, record: ItemRecord) -> str:
        """Persist a new item record and return its id."""

    def get_item(self, item_id: str) -> ItemRecord | None:
        """Return an item by id, if present."""

    def update_item(self, record: ItemRecord) -> None:
        """Replace the stored record with the same id."""


class ImageStore(Protocol):
    """Storage interface for uploaded image bytes."""

    def save_image(self, image_bytes: bytes, content_type: str) -> str:
        """Store image bytes and return an opaque reference."""

    def delete_image(self, image_ref: str) -> None:
        """Delete a stored image."""


@dataclass(frozen=True)
class ClassifiedItem:
    """Outcome of an accepted image submission."""

    item_id: str
    material: str
    item_name: str
    description: str
    category: Category
    condition_estimate: str
    confidence: str
    questions: list[Question]


@dataclass(frozen=True)
class RejectedItem:
    """Outcome of an image that does not show a waste item."""

    reason: str
    confidence: str


@dataclass
class ItemLifecycleService:
    """Drives an item from image submission to facility lookup."""

    image_store: ImageStore
    classifier: ClassifierService
    repository: ItemRepository
    recommendation_engine: RecommendationEngine
    facility_resolver: FacilityResolver
    radius_m: int = DEFAULT_RADIUS_M

    async def submit_image(
        self, image_bytes: bytes, content_type: str = "image/jpeg"
    ) -> ClassifiedItem | RejectedItem:
        """Classify an uploaded image and create an item record for it."""
        image_ref = self.image_store.save_image(image_bytes, content_type)
        try:
            classification = await self.classifier.classify(image_bytes)
        except Exception:
            self.image_store.delete_image(image_ref)
            raise

        if not classification.is_valid_item:
            self.image_store.delete_image(image_ref)
            _logger.info(
                "Image rejected by classifier",
                extra={"confidence": classification.confidence},
            )
            return RejectedItem(
                reason=classification.rejection_reason or "",
                confidence=classification.confidence,
            )

        material = classification.material or ""
        category = categorize(material)
        record = ItemRecord(
            id=new_item_id(),
            image_ref=image_ref,
            material=material,
            item_name=classification.item_name or "",
            description=classification.description or "",
            condition_estimate=classification.condition_estimate or "",
            confidence=classification.confidence,
            category=category,
            questions=questions_for(category),
            created_at=datetime.now(tz=UTC),
        )
        try:
            item_id = self.repository.create_item(record)
        except Exception:
            self.image_store.delete_image(image_ref)
            raise
        _logger.info(
            "Item classified",
            extra={"item_id": item_id, "category": str(category)},
        )
        return ClassifiedItem(
            item_id=item_id,
            material=record.material,
            item_name=record.item_name,
            description=record.description,
            category=category,
            condition_estimate=record.condition_estimate,
            confidence=record.confidence,
            questions=record.questions,
        )

    def get_item(self, item_id: str) -> ItemRecord:
        """Return the item record or raise when it does not exist."""
        _require_item_id(item_id)
        record = self.repository.get_item(item_id)
        if record is None:
            raise NotFoundError("Item not found")
        return record

    def submit_answers(
        self, item_id: str, answers: Mapping[str, object]
    ) -> Recommendation:
        """Store the user's answers together with the derived recommendation."""
        if not answers:
            raise InvalidInputError("Please provide answers to the questions")
        record = self.get_item(item_id)
        if record.user_answers is not None:
            raise InvalidInputError("Answers were already submitted for this item")

        recommendation = self.recommendation_engine.recommend(
            record.category,
            record.item_name,
            answers,
            {
                "material": record.material,
                "description": record.description,
                "condition_estimate": record.condition_estimate,
            },
        )
        self.repository.update_item(
            replace(
                record,
                user_answers={key: str(value) for key, value in answers.items()},
                recommendation=recommendation,
            )
        )
        _logger.info(
            "Recommendation stored",
            extra={"item_id": item_id, "action": recommendation.action},
        )
        return recommendation

    async def resolve_location(
        self, item_id: str, latitude: float | None, longitude: float | None
    ) -> list[Facility]:
        """Find facilities near the user and store them on the item."""
        lat = _parse_coordinate(latitude)
        lng = _parse_coordinate(longitude)
        if lat is None or lng is None:
            raise InvalidInputError("Please provide latitude and longitude")
        record = self.get_item(item_id)

        facilities = await self.facility_resolver.resolve(
            lat, lng, record.category, self.radius_m
        )
        # Answers may have been stored while the lookup was running.
        latest = self.repository.get_item(item_id) or record
        self.repository.update_item(replace(latest, nearby_facilities=facilities))
        return facilities


def _require_item_id(item_id: str) -> None:
    if not is_valid_item_id(item_id):
        raise InvalidInputError("Invalid item ID format")


def _parse_coordinate(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None
