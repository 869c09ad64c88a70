"""Feedback collection for recommendations."""

from dataclasses import dataclass
from typing import Protocol

from ecoconnect.domain.errors import InvalidInputError
from ecoconnect.domain.feedback import FeedbackRecord
from ecoconnect.domain.items import is_valid_item_id

MIN_RATING = 1
MAX_RATING = 5


class FeedbackRepository(Protocol):
    """Persistence interface for feedback."""

    def create_feedback(
        self,
        item_id: str,
        rating: int,
        comment: str | None,
        was_helpful: bool | None,
    ) -> FeedbackRecord:
        """Create a feedback row and return it."""


@dataclass
class FeedbackService:
    """Application service for recording feedback."""

    repository: FeedbackRepository

    def submit(
        self,
        item_id: str,
        rating: int,
        comment: str | None = None,
        was_helpful: bool | None = None,
    ) -> FeedbackRecord:
        """Validate and persist a feedback entry."""
        if not is_valid_item_id(item_id):
            raise InvalidInputError("Invalid item ID format")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise InvalidInputError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}"
            )
        cleaned = comment.strip() if comment else None
        return self.repository.create_feedback(
            item_id=item_id,
            rating=rating,
            comment=cleaned or None,
            was_helpful=was_helpful,
        )
