"""Pydantic models for HTTP request payloads."""

from pydantic import BaseModel, Field


class AnswersRequest(BaseModel):
    """Answers to an item's follow-up questions, keyed by question id."""

    answers: dict[str, str] = Field(default_factory=dict)


class LocationRequest(BaseModel):
    """User location for the facility lookup."""

    latitude: float | None = None
    longitude: float | None = None


class FeedbackRequest(BaseModel):
    """Feedback on a recommendation."""

    item_id: str
    rating: int
    comment: str | None = None
    was_helpful: bool | None = None
