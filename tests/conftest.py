"""Shared test fixtures."""

import random
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from ecoconnect.config import Settings
from ecoconnect.containers import AppContainer
from ecoconnect.domain.feedback import FeedbackRecord
from ecoconnect.domain.items import ItemRecord
from ecoconnect.services.classification import ClassifierClient, ClassifierService
from ecoconnect.services.facilities import FacilityResolver, GeodataClient
from ecoconnect.services.feedback import FeedbackRepository, FeedbackService
from ecoconnect.services.items import ImageStore, ItemLifecycleService, ItemRepository
from ecoconnect.services.recommendations import RecommendationEngine

LAPTOP_CLASSIFICATION: dict[str, object] = {
    "is_valid_item": True,
    "rejection_reason": None,
    "material": "Electronic device",
    "item_name": "Laptop",
    "description": "An old silver laptop",
    "condition_estimate": "Used, screen intact",
    "confidence": "high",
}

REJECTED_CLASSIFICATION: dict[str, object] = {
    "is_valid_item": False,
    "rejection_reason": "The image shows a person, not a waste item.",
    "material": None,
    "item_name": None,
    "description": None,
    "condition_estimate": None,
    "confidence": "high",
}


@dataclass
class InMemoryItemRepository(ItemRepository):
    """In-memory item repository for tests."""

    items: dict[str, ItemRecord] = field(default_factory=dict)
    updates: list[str] = field(default_factory=list)

    def create_item(self, record: ItemRecord) -> str:
        self.items[record.id] = record
        return record.id

    def get_item(self, item_id: str) -> ItemRecord | None:
        return self.items.get(item_id)

    def update_item(self, record: ItemRecord) -> None:
        self.items[record.id] = record
        self.updates.append(record.id)


@dataclass
class InMemoryImageStore(ImageStore):
    """In-memory image store for tests."""

    images: dict[str, bytes] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)

    def save_image(self, image_bytes: bytes, content_type: str) -> str:
        image_ref = f"images/{uuid4().hex}"
        self.images[image_ref] = image_bytes
        return image_ref

    def delete_image(self, image_ref: str) -> None:
        self.images.pop(image_ref, None)
        self.deleted.append(image_ref)


@dataclass
class FakeClassifierClient(ClassifierClient):
    """Fake classifier client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: dict(LAPTOP_CLASSIFICATION)
    )
    error: Exception | None = None
    calls: int = 0

    async def classify(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeGeodataClient(GeodataClient):
    """Fake geodata client with canned elements or a failure."""

    elements: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None
    calls: list[tuple[float, float, int, list[str]]] = field(default_factory=list)

    async def search(
        self, lat: float, lng: float, radius_m: int, filters: list[str]
    ) -> list[dict[str, object]]:
        self.calls.append((lat, lng, radius_m, filters))
        if self.error is not None:
            raise self.error
        return self.elements


@dataclass
class InMemoryFeedbackRepository(FeedbackRepository):
    """In-memory feedback repository for tests."""

    entries: list[FeedbackRecord] = field(default_factory=list)

    def create_feedback(
        self,
        item_id: str,
        rating: int,
        comment: str | None,
        was_helpful: bool | None,
    ) -> FeedbackRecord:
        record = FeedbackRecord(
            id=uuid4(),
            item_id=item_id,
            rating=rating,
            comment=comment,
            was_helpful=was_helpful,
            created_at=datetime.now(tz=UTC),
        )
        self.entries.append(record)
        return record


def recycling_element(  # noqa: PLR0913
    name: str,
    lat: float,
    lon: float,
    element_id: int = 1,
    element_type: str = "node",
    **extra_tags: str,
) -> dict[str, object]:
    """Build an Overpass element for a recycling amenity."""
    return {
        "type": element_type,
        "id": element_id,
        "lat": lat,
        "lon": lon,
        "tags": {"amenity": "recycling", "name": name, **extra_tags},
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def item_repository() -> InMemoryItemRepository:
    return InMemoryItemRepository()


@pytest.fixture
def image_store() -> InMemoryImageStore:
    return InMemoryImageStore()


@pytest.fixture
def classifier_client() -> FakeClassifierClient:
    return FakeClassifierClient()


@pytest.fixture
def geodata_client() -> FakeGeodataClient:
    return FakeGeodataClient()


@pytest.fixture
def feedback_repository() -> InMemoryFeedbackRepository:
    return InMemoryFeedbackRepository()


@pytest.fixture
def item_service(
    settings: Settings,
    item_repository: InMemoryItemRepository,
    image_store: InMemoryImageStore,
    classifier_client: FakeClassifierClient,
    geodata_client: FakeGeodataClient,
) -> ItemLifecycleService:
    return ItemLifecycleService(
        image_store=image_store,
        classifier=ClassifierService(
            client=classifier_client,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        repository=item_repository,
        recommendation_engine=RecommendationEngine(),
        facility_resolver=FacilityResolver(
            client=geodata_client, rng=random.Random(42)
        ),
    )


@pytest.fixture
def container(
    settings: Settings,
    item_service: ItemLifecycleService,
    feedback_repository: InMemoryFeedbackRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        item_service=item_service,
        feedback_service=FeedbackService(feedback_repository),
        close_resources=close_resources,
    )
