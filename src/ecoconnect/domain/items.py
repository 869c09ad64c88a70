"""Domain models for submitted items."""

import re
import secrets
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ecoconnect.domain.categories import Category
from ecoconnect.domain.questions import Question

PHONE_UNAVAILABLE = "Not available"

_ITEM_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def new_item_id() -> str:
    """Generate a 24-character hexadecimal item id."""
    return secrets.token_hex(12)


def is_valid_item_id(value: str | None) -> bool:
    """Return true when the value is a well-formed item id."""
    return value is not None and _ITEM_ID_PATTERN.match(value) is not None


class ItemStage(StrEnum):
    """Lifecycle stages of a stored item.

    Rejected images never get a record, so they have no stage here.
    """

    CLASSIFIED = "classified"
    LOCATED = "located"
    ANSWERED = "answered"
    RECOMMENDED = "recommended"


@dataclass(frozen=True)
class Recommendation:
    """Suggested action for an item with rationale and optional valuation."""

    action: str
    reasoning: str
    estimated_value: int | None
    marketplace_search_url: str | None
    tips: list[str]


@dataclass(frozen=True)
class Facility:
    """A place that accepts items for recycling, donation or resale."""

    name: str
    type: str
    address: str
    distance: float
    lat: float
    lng: float
    phone: str
    is_open: bool
    rating: float | None = None
    source_id: str | None = None
    website: str | None = None


@dataclass(frozen=True)
class ItemRecord:
    """A classified item and everything derived from it."""

    id: str
    image_ref: str
    material: str
    item_name: str
    description: str
    condition_estimate: str
    confidence: str
    category: Category
    questions: list[Question]
    created_at: datetime
    user_answers: dict[str, str] | None = None
    recommendation: Recommendation | None = None
    nearby_facilities: list[Facility] | None = None

    @property
    def stage(self) -> ItemStage:
        """Derive the lifecycle stage from the fields that are present."""
        if self.recommendation is None:
            if self.nearby_facilities is not None:
                return ItemStage.LOCATED
            return ItemStage.CLASSIFIED
        if self.nearby_facilities is None:
            return ItemStage.ANSWERED
        return ItemStage.RECOMMENDED
