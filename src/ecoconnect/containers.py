"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from ecoconnect.adapters.openai_classifier_client import OpenAIClassifierClient
from ecoconnect.adapters.overpass_client import HttpxOverpassClient
from ecoconnect.adapters.supabase_feedback_repository import (
    SupabaseFeedbackRepository,
)
from ecoconnect.adapters.supabase_image_store import SupabaseImageStore
from ecoconnect.adapters.supabase_item_repository import SupabaseItemRepository
from ecoconnect.config import Settings
from ecoconnect.services.classification import ClassifierService
from ecoconnect.services.facilities import FacilityResolver
from ecoconnect.services.feedback import FeedbackService
from ecoconnect.services.items import ItemLifecycleService
from ecoconnect.services.recommendations import RecommendationEngine


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    item_service: ItemLifecycleService
    feedback_service: FeedbackService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    item_repository = SupabaseItemRepository(
        supabase_client, table=resolved_settings.supabase_items_table
    )
    feedback_repository = SupabaseFeedbackRepository(
        supabase_client, table=resolved_settings.supabase_feedback_table
    )
    image_store = SupabaseImageStore(
        supabase_client, bucket=resolved_settings.supabase_images_bucket
    )
    openai_client = OpenAIClassifierClient.create(resolved_settings.openai_api_key)
    classifier = ClassifierService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    overpass_client = HttpxOverpassClient.create(
        base_url=resolved_settings.overpass_url,
        timeout_seconds=resolved_settings.overpass_timeout_seconds,
    )
    item_service = ItemLifecycleService(
        image_store=image_store,
        classifier=classifier,
        repository=item_repository,
        recommendation_engine=RecommendationEngine(
            marketplace_url_template=resolved_settings.marketplace_url_template
        ),
        facility_resolver=FacilityResolver(client=overpass_client),
        radius_m=resolved_settings.facility_radius_m,
    )
    feedback_service = FeedbackService(feedback_repository)

    async def close_resources() -> None:
        await overpass_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        item_service=item_service,
        feedback_service=feedback_service,
        close_resources=close_resources,
    )
