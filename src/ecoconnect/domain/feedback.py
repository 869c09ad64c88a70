"""Domain models for user feedback."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FeedbackRecord:
    """Feedback left on a recommendation."""

    id: UUID
    item_id: str
    rating: int
    comment: str | None
    was_helpful: bool | None
    created_at: datetime
