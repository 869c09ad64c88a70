"""Tests for the facility resolver."""

import asyncio
import random

import httpx
import pytest

from ecoconnect.domain.categories import Category
from ecoconnect.domain.items import PHONE_UNAVAILABLE
from ecoconnect.services.facilities import (
    ADDRESS_UNAVAILABLE,
    FacilityResolver,
    build_address,
    facility_type,
    filters_for,
    haversine_km,
)
from tests.conftest import FakeGeodataClient, recycling_element

ORIGIN = (22.7196, 75.8577)


def _resolver(client: FakeGeodataClient) -> FacilityResolver:
    return FacilityResolver(client=client, rng=random.Random(7))


def test_haversine_small_latitude_step_at_equator() -> None:
    assert haversine_km(0.0, 0.0, 0.01, 0.0) == 1.1


def test_haversine_same_point_is_zero() -> None:
    assert haversine_km(*ORIGIN, *ORIGIN) == 0.0


def test_resolve_ranks_and_caps_upstream_results() -> None:
    lat, lng = ORIGIN
    elements = [
        recycling_element(f"Center {index}", lat + 0.005 * index, lng, element_id=index)
        for index in range(12, 0, -1)
    ]
    client = FakeGeodataClient(elements=elements)

    resolution = asyncio.run(
        _resolver(client).resolve_with_diagnostics(lat, lng, Category.PLASTIC)
    )

    assert resolution.source == "geodata"
    assert resolution.fallback_reason is None
    facilities = resolution.facilities
    assert len(facilities) == 8
    distances = [facility.distance for facility in facilities]
    assert distances == sorted(distances)
    assert facilities[0].name == "Center 1"
    assert facilities[0].source_id == "node/1"
    assert facilities[0].is_open is True


def test_resolve_skips_unnamed_and_unlocated_elements() -> None:
    lat, lng = ORIGIN
    elements = [
        {
            "type": "node",
            "id": 1,
            "lat": lat,
            "lon": lng,
            "tags": {"amenity": "recycling"},
        },
        {"type": "node", "id": 2, "tags": {"amenity": "recycling", "name": "Nowhere"}},
        {
            "type": "way",
            "id": 3,
            "center": {"lat": lat + 0.01, "lon": lng},
            "tags": {
                "amenity": "recycling",
                "name": "Ward Yard",
                "phone": "+91 731 000000",
                "addr:street": "MG Road",
                "addr:city": "Indore",
            },
        },
    ]
    client = FakeGeodataClient(elements=elements)

    facilities = asyncio.run(_resolver(client).resolve(lat, lng, Category.METAL))

    assert [facility.name for facility in facilities] == ["Ward Yard"]
    assert facilities[0].address == "MG Road, Indore"
    assert facilities[0].phone == "+91 731 000000"
    assert facilities[0].distance == 1.1
    assert facilities[0].source_id == "way/3"


def test_resolve_passes_category_filters_and_radius() -> None:
    client = FakeGeodataClient(elements=[recycling_element("Hub", *ORIGIN)])

    asyncio.run(_resolver(client).resolve(*ORIGIN, Category.EWASTE, radius_m=2500))

    _, _, radius_m, filters = client.calls[0]
    assert radius_m == 2500
    assert filters[0] == '["amenity"="recycling"]["recycling:electronics"="yes"]'
    assert filters[-1] == '["amenity"="recycling"]'


def test_resolve_falls_back_when_upstream_fails() -> None:
    client = FakeGeodataClient(error=httpx.ConnectTimeout("timed out"))

    resolution = asyncio.run(
        _resolver(client).resolve_with_diagnostics(*ORIGIN, Category.EWASTE)
    )

    assert resolution.source == "synthetic"
    assert "ConnectTimeout" in (resolution.fallback_reason or "")
    assert [facility.name for facility in resolution.facilities] == [
        "E-Waste Collection Center",
        "Tech Recycle India",
        "Green Electronics Disposal",
        "Digital Waste Management",
        "Eco Tech Recyclers",
    ]


def test_resolve_falls_back_on_empty_result() -> None:
    client = FakeGeodataClient(elements=[])

    resolution = asyncio.run(
        _resolver(client).resolve_with_diagnostics(*ORIGIN, Category.GLASS)
    )

    assert resolution.source == "synthetic"
    assert resolution.fallback_reason == "empty result"
    assert len(resolution.facilities) == 5


def test_synthetic_facilities_are_stable_apart_from_random_fields() -> None:
    resolver = _resolver(FakeGeodataClient())
    lat, lng = ORIGIN

    first = resolver.synthetic_facilities(lat, lng, Category.FABRIC)
    second = resolver.synthetic_facilities(lat, lng, Category.FABRIC)

    assert [(f.name, f.type, f.distance) for f in first] == [
        (f.name, f.type, f.distance) for f in second
    ]
    distances = [facility.distance for facility in first]
    assert distances == sorted(distances)
    for index, facility in enumerate(first):
        assert abs(facility.lat - lat) <= 0.05
        assert abs(facility.lng - lng) <= 0.05
        assert facility.phone.startswith("+91 ")
        assert facility.address.startswith(f"{index + 1}, ")


@pytest.mark.parametrize("category", [Category.ORGANIC, Category.OTHER, "unknown"])
def test_synthetic_default_table(category: str) -> None:
    resolver = _resolver(FakeGeodataClient())

    facilities = resolver.synthetic_facilities(*ORIGIN, category)

    assert facilities[0].name == "City Recycling Center"
    assert len(facilities) == 5


def test_facility_type_precedence() -> None:
    assert facility_type({"shop": "charity", "recycling:clothes": "yes"}) == (
        "NGO / Charity"
    )
    textiles_and_computers = {
        "amenity": "recycling",
        "recycling:textiles": "yes",
        "recycling:computers": "yes",
    }
    assert facility_type(textiles_and_computers) == "Textile Recycler"
    assert facility_type(
        {"amenity": "recycling", "recycling:electronics": "yes"}
    ) == "E-waste Recycler"
    assert facility_type({"shop": "scrap_yard"}) == "Scrap Dealer"
    assert facility_type({"amenity": "recycling"}) == "Recycling Center"
    assert facility_type({"amenity": "waste_disposal"}) == "Waste Management"


def test_build_address_skips_missing_parts() -> None:
    assert build_address({"addr:housenumber": "12", "addr:state": "MP"}) == "12, MP"
    assert build_address({}) == ADDRESS_UNAVAILABLE


def test_missing_phone_uses_marker() -> None:
    client = FakeGeodataClient(elements=[recycling_element("Hub", *ORIGIN)])

    facilities = asyncio.run(_resolver(client).resolve(*ORIGIN, Category.PAPER))

    assert facilities[0].phone == PHONE_UNAVAILABLE


def test_filters_for_unknown_category_uses_generic_filters() -> None:
    assert filters_for("furniture") == (
        '["amenity"="recycling"]',
        '["amenity"="waste_disposal"]',
    )


def test_haversine_handles_antipodal_points() -> None:
    rng = random.Random(3)
    for _ in range(2000):
        lat = rng.uniform(-90, 90)
        lng = rng.uniform(-180, 180)
        assert 0 <= haversine_km(lat, lng, -lat, lng + 180) <= 20_016


def test_resolve_skips_malformed_elements() -> None:
    elements: list[object] = [None, "node/1", recycling_element("Hub", *ORIGIN)]
    client = FakeGeodataClient(elements=elements)  # type: ignore[arg-type]

    resolution = asyncio.run(
        _resolver(client).resolve_with_diagnostics(*ORIGIN, Category.PLASTIC)
    )

    assert resolution.source == "geodata"
    assert [facility.name for facility in resolution.facilities] == ["Hub"]


def test_resolve_falls_back_when_payload_cannot_be_mapped() -> None:
    client = FakeGeodataClient(elements=None)  # type: ignore[arg-type]

    resolution = asyncio.run(
        _resolver(client).resolve_with_diagnostics(*ORIGIN, Category.METAL)
    )

    assert resolution.source == "synthetic"
    assert (resolution.fallback_reason or "").startswith("TypeError")
    assert resolution.facilities[0].name == "Shri Ram Scrap Dealers"
