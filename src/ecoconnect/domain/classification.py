"""Models for image classification results."""

from typing import Literal

from pydantic import BaseModel

DEFAULT_REJECTION_REASON = (
    "This image does not appear to contain a recyclable or disposable item. "
    "Please upload an image of waste, old items, or recyclables."
)


class Classification(BaseModel):
    """Structured output of the image classifier."""

    is_valid_item: bool
    rejection_reason: str | None = None
    material: str | None = None
    item_name: str | None = None
    description: str | None = None
    condition_estimate: str | None = None
    confidence: Literal["high", "medium", "low"]
