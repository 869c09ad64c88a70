"""Tests for container wiring."""

import asyncio

from ecoconnect.adapters.overpass_client import HttpxOverpassClient
from ecoconnect.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.item_service is not None
    assert container.feedback_service is not None
    assert container.item_service.radius_m == settings.facility_radius_m
    assert isinstance(
        container.item_service.facility_resolver.client, HttpxOverpassClient
    )
    asyncio.run(container.close_resources())
