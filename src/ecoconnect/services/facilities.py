"""Nearby facility lookup with a synthetic fallback."""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Protocol

from ecoconnect.domain.categories import Category, coerce_category
from ecoconnect.domain.items import PHONE_UNAVAILABLE, Facility

EARTH_RADIUS_KM = 6371
MAX_FACILITIES = 8
DEFAULT_RADIUS_M = 5000

ADDRESS_UNAVAILABLE = "Address not available"

_logger = logging.getLogger(__name__)

_GENERIC_RECYCLING = '["amenity"="recycling"]'
_WASTE_DISPOSAL = '["amenity"="waste_disposal"]'

_CATEGORY_FILTERS: dict[Category, tuple[str, ...]] = {
    Category.EWASTE: (
        '["amenity"="recycling"]["recycling:electronics"="yes"]',
        '["amenity"="recycling"]["recycling:computers"="yes"]',
        '["shop"="computer"]',
        _GENERIC_RECYCLING,
    ),
    Category.PLASTIC: (
        '["amenity"="recycling"]["recycling:plastic"="yes"]',
        '["amenity"="recycling"]["recycling:plastic_bottles"="yes"]',
        _GENERIC_RECYCLING,
    ),
    Category.METAL: (
        '["amenity"="recycling"]["recycling:scrap_metal"="yes"]',
        '["amenity"="recycling"]["recycling:metal"="yes"]',
        '["shop"="scrap_yard"]',
        _GENERIC_RECYCLING,
    ),
    Category.FABRIC: (
        '["amenity"="recycling"]["recycling:clothes"="yes"]',
        '["amenity"="charity"]',
        '["shop"="charity"]',
        '["amenity"="recycling"]["recycling:textiles"="yes"]',
    ),
    Category.GLASS: (
        '["amenity"="recycling"]["recycling:glass"="yes"]',
        '["amenity"="recycling"]["recycling:glass_bottles"="yes"]',
        _GENERIC_RECYCLING,
    ),
    Category.PAPER: (
        '["amenity"="recycling"]["recycling:paper"="yes"]',
        '["amenity"="recycling"]["recycling:cardboard"="yes"]',
        _GENERIC_RECYCLING,
    ),
    Category.ORGANIC: (
        '["amenity"="recycling"]["recycling:organic"="yes"]',
        '["amenity"="recycling"]["recycling:green_waste"="yes"]',
    ),
    Category.HAZARDOUS: (
        '["amenity"="recycling"]["recycling:hazardous_waste"="yes"]',
        _WASTE_DISPOSAL,
    ),
}
_DEFAULT_FILTERS = (_GENERIC_RECYCLING, _WASTE_DISPOSAL)

_ADDRESS_KEYS = (
    "addr:housenumber",
    "addr:street",
    "addr:suburb",
    "addr:city",
    "addr:state",
)

# (name, type, baseline distance in km), nearest first.
_SYNTHETIC_FACILITIES: dict[Category, tuple[tuple[str, str, float], ...]] = {
    Category.EWASTE: (
        ("E-Waste Collection Center", "E-waste Recycler", 2.5),
        ("Tech Recycle India", "E-waste Recycler", 4.2),
        ("Green Electronics Disposal", "E-waste Recycler", 6.8),
        ("Digital Waste Management", "E-waste Recycler", 8.1),
        ("Eco Tech Recyclers", "E-waste Recycler", 10.5),
    ),
    Category.PLASTIC: (
        ("Plastic Recycling Hub", "Recycling Center", 1.8),
        ("Green Plastic Solutions", "Recycling Center", 3.5),
        ("EcoPlast Recyclers", "Recycling Center", 5.2),
        ("Municipal Waste Center", "Waste Management", 7.0),
        ("Clean City Recyclers", "Recycling Center", 9.3),
    ),
    Category.METAL: (
        ("Shri Ram Scrap Dealers", "Scrap Dealer", 1.2),
        ("Metal Recycling Co.", "Scrap Dealer", 3.0),
        ("Iron & Steel Scrap", "Scrap Dealer", 4.5),
        ("Universal Scrap Traders", "Scrap Dealer", 6.8),
        ("Metro Metal Recyclers", "Scrap Dealer", 8.9),
    ),
    Category.FABRIC: (
        ("Cloth Bank NGO", "NGO", 2.0),
        ("Goonj - Clothing Donation", "NGO", 4.3),
        ("Textile Recycling Center", "Recycling Center", 5.8),
        ("Helping Hands Foundation", "NGO", 7.2),
        ("Second Life Textiles", "Recycling Center", 9.5),
    ),
    Category.GLASS: (
        ("Glass Recycling Plant", "Recycling Center", 3.2),
        ("City Waste Management", "Waste Management", 5.0),
        ("Green Glass Recyclers", "Recycling Center", 7.4),
        ("Municipal Collection Point", "Waste Management", 8.8),
        ("Eco Glass Solutions", "Recycling Center", 11.2),
    ),
    Category.PAPER: (
        ("Paper Recycling Hub", "Scrap Dealer", 1.5),
        ("Raddi Wala Paper Scrap", "Scrap Dealer", 2.8),
        ("Book Donation Center", "NGO", 4.6),
        ("Cardboard Recyclers", "Recycling Center", 6.3),
        ("Waste Paper Collection", "Scrap Dealer", 8.7),
    ),
}
_DEFAULT_SYNTHETIC_FACILITIES = (
    ("City Recycling Center", "Recycling Center", 2.5),
    ("Municipal Waste Facility", "Waste Management", 4.0),
    ("Green Earth NGO", "NGO", 6.5),
    ("Eco Solutions Hub", "Recycling Center", 8.0),
    ("Waste Management Authority", "Waste Management", 10.0),
)

_SYNTHETIC_AREAS = (
    "MG Road",
    "Park Street",
    "Gandhi Nagar",
    "Residency Road",
    "Nehru Place",
    "Sector 15",
    "Industrial Area",
    "Market Road",
)
_SYNTHETIC_CITY = "Indore, Madhya Pradesh"
_JITTER_DEGREES = 0.1
_OPEN_PROBABILITY = 0.7


class GeodataClient(Protocol):
    """Interface for a tagged map-feature search."""

    async def search(
        self, lat: float, lng: float, radius_m: int, filters: list[str]
    ) -> list[dict[str, object]]:
        """Return raw tagged elements matching any filter within the radius."""


@dataclass(frozen=True)
class FacilityResolution:
    """Facilities along with where they came from."""

    facilities: list[Facility]
    source: str
    fallback_reason: str | None = None


@dataclass
class FacilityResolver:
    """Resolve nearby facilities for a category, never failing outward."""

    client: GeodataClient
    rng: random.Random = field(default_factory=random.Random)
    max_results: int = MAX_FACILITIES

    async def resolve(
        self,
        lat: float,
        lng: float,
        category: Category | str,
        radius_m: int = DEFAULT_RADIUS_M,
    ) -> list[Facility]:
        """Return up to eight facilities sorted by distance."""
        resolution = await self.resolve_with_diagnostics(lat, lng, category, radius_m)
        return resolution.facilities

    async def resolve_with_diagnostics(
        self,
        lat: float,
        lng: float,
        category: Category | str,
        radius_m: int = DEFAULT_RADIUS_M,
    ) -> FacilityResolution:
        """Resolve facilities and report whether the fallback was used."""
        resolved_category = coerce_category(category)
        filters = list(filters_for(resolved_category))
        try:
            elements = await self.client.search(lat, lng, radius_m, filters)
            facilities = self._rank(lat, lng, elements)
        except Exception as exc:
            reason = f"{type(exc).__name__}: {exc}"
            _logger.warning(
                "Geodata lookup failed, using synthetic facilities",
                extra={"category": str(resolved_category), "reason": reason},
            )
            return self._fallback(lat, lng, resolved_category, reason)

        if not facilities:
            _logger.info(
                "Geodata lookup returned no facilities, using synthetic facilities",
                extra={"category": str(resolved_category), "elements": len(elements)},
            )
            return self._fallback(lat, lng, resolved_category, "empty result")

        _logger.info(
            "Geodata lookup found facilities",
            extra={"category": str(resolved_category), "count": len(facilities)},
        )
        return FacilityResolution(facilities=facilities, source="geodata")

    def synthetic_facilities(
        self, lat: float, lng: float, category: Category | str
    ) -> list[Facility]:
        """Generate placeholder facilities around the given point."""
        table = _SYNTHETIC_FACILITIES.get(
            coerce_category(category), _DEFAULT_SYNTHETIC_FACILITIES
        )
        return [
            Facility(
                name=name,
                type=facility_type,
                address=_synthetic_address(index),
                distance=distance,
                lat=self._jitter(lat),
                lng=self._jitter(lng),
                phone=f"+91 {self.rng.randint(7_000_000_000, 9_999_999_999)}",
                is_open=self.rng.random() < _OPEN_PROBABILITY,
            )
            for index, (name, facility_type, distance) in enumerate(table)
        ]

    def _fallback(
        self, lat: float, lng: float, category: Category, reason: str
    ) -> FacilityResolution:
        return FacilityResolution(
            facilities=self.synthetic_facilities(lat, lng, category),
            source="synthetic",
            fallback_reason=reason,
        )

    def _rank(
        self, lat: float, lng: float, elements: list[dict[str, object]]
    ) -> list[Facility]:
        facilities = [
            facility
            for element in elements
            if (facility := _to_facility(lat, lng, element)) is not None
        ]
        facilities.sort(key=lambda facility: facility.distance)
        return facilities[: self.max_results]

    def _jitter(self, value: float) -> float:
        return round(value + (self.rng.random() - 0.5) * _JITTER_DEGREES, 6)


def filters_for(category: Category | str) -> tuple[str, ...]:
    """Return the ordered geodata tag filters for a category."""
    return _CATEGORY_FILTERS.get(coerce_category(category), _DEFAULT_FILTERS)


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres, rounded to one decimal."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_KM * c, 1)


def facility_type(tags: dict[str, object]) -> str:
    """Classify a facility from its map tags."""
    amenity = tags.get("amenity")
    if tags.get("shop") == "charity" or amenity == "charity":
        return "NGO / Charity"
    if (
        tags.get("recycling:clothes") == "yes"
        or tags.get("recycling:textiles") == "yes"
    ):
        return "Textile Recycler"
    if (
        tags.get("recycling:electronics") == "yes"
        or tags.get("recycling:computers") == "yes"
    ):
        return "E-waste Recycler"
    if tags.get("recycling:scrap_metal") == "yes" or tags.get("shop") == "scrap_yard":
        return "Scrap Dealer"
    if amenity == "recycling":
        return "Recycling Center"
    if amenity == "waste_disposal":
        return "Waste Management"
    return "Recycling Center"


def build_address(tags: dict[str, object]) -> str:
    """Join the address parts present in the tags."""
    parts = [str(tags[key]) for key in _ADDRESS_KEYS if tags.get(key)]
    return ", ".join(parts) if parts else ADDRESS_UNAVAILABLE


def _to_facility(
    origin_lat: float, origin_lng: float, element: dict[str, object]
) -> Facility | None:
    if not isinstance(element, dict):
        return None
    tags = element.get("tags")
    if not isinstance(tags, dict) or not tags.get("name"):
        return None
    center = element.get("center")
    center = center if isinstance(center, dict) else {}
    lat = element.get("lat", center.get("lat"))
    lng = element.get("lon", center.get("lon"))
    if not isinstance(lat, int | float) or not isinstance(lng, int | float):
        return None
    source_id = None
    if element.get("type") and element.get("id") is not None:
        source_id = f"{element['type']}/{element['id']}"
    return Facility(
        name=str(tags["name"]),
        type=facility_type(tags),
        address=build_address(tags),
        distance=haversine_km(origin_lat, origin_lng, float(lat), float(lng)),
        lat=float(lat),
        lng=float(lng),
        phone=str(tags.get("phone") or tags.get("contact:phone") or PHONE_UNAVAILABLE),
        is_open=True,
        source_id=source_id,
        website=tags.get("website") or tags.get("contact:website"),
    )


def _synthetic_address(index: int) -> str:
    area = _SYNTHETIC_AREAS[index % len(_SYNTHETIC_AREAS)]
    return f"{index + 1}, {area}, {_SYNTHETIC_CITY}"
