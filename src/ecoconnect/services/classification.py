"""Image classification service using LLMs."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from ecoconnect.domain.classification import DEFAULT_REJECTION_REASON, Classification
from ecoconnect.domain.errors import UpstreamFailureError

_logger = logging.getLogger(__name__)

_NULLABLE_STRING = {"anyOf": [{"type": "string"}, {"type": "null"}]}

CLASSIFICATION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "is_valid_item": {"type": "boolean"},
        "rejection_reason": _NULLABLE_STRING,
        "material": _NULLABLE_STRING,
        "item_name": _NULLABLE_STRING,
        "description": _NULLABLE_STRING,
        "condition_estimate": _NULLABLE_STRING,
        "confidence": {"type": "string", "enum": ["high", "medium", "low"]},
    },
    "required": [
        "is_valid_item",
        "rejection_reason",
        "material",
        "item_name",
        "description",
        "condition_estimate",
        "confidence",
    ],
    "additionalProperties": False,
}

CLASSIFICATION_PROMPT = """\
You are an expert waste management AI. Analyze this image and determine if it \
shows a RECYCLABLE, DISPOSABLE, or REUSABLE ITEM.

Only accept images that show:
- Electronic waste (phones, computers, batteries, etc.)
- Plastic items (bottles, containers, bags, etc.)
- Metal items (cans, tools, scrap metal, etc.)
- Fabric/Clothing (old clothes, textiles, bags, etc.)
- Glass items (bottles, jars, etc.)
- Paper/Cardboard (newspapers, boxes, books, etc.)
- Organic waste (food waste, garden waste, etc.)
- Hazardous waste (paint cans, chemicals, etc.)

Reject images that show:
- People, selfies, portraits
- Landscapes, scenery, nature photos
- Prepared food, meals, dishes
- Pets, animals
- Buildings, architecture
- Vehicles (unless clearly scrap/waste)
- Random objects not related to waste/recycling
- Unclear or blurry images

For a rejected image set is_valid_item to false and explain why in \
rejection_reason. For an accepted image set is_valid_item to true and fill in \
the primary material, a specific item name, a brief description and an \
estimated condition. Always report your confidence as high, medium or low.

Be strict: only accept genuine waste or recyclable items."""


class ClassifierClient(Protocol):
    """Interface for LLM image classification."""

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
        """Return structured classification data."""


@dataclass
class ClassifierService:
    """Service that prepares classification prompts and validates results."""

    client: ClassifierClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def classify(self, image_bytes: bytes) -> Classification:
        """Classify the item in an image via the configured client."""
        data_url = _to_data_url(image_bytes)
        try:
            raw = await self.client.classify(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                image_data_url=data_url,
                schema=CLASSIFICATION_SCHEMA,
                prompt=CLASSIFICATION_PROMPT,
            )
            result = Classification.model_validate(raw)
        except Exception as exc:
            _logger.warning("Image classification failed: %s", exc)
            raise UpstreamFailureError("Failed to analyze image") from exc
        if not result.is_valid_item and not result.rejection_reason:
            result = result.model_copy(
                update={"rejection_reason": DEFAULT_REJECTION_REASON}
            )
        return result


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
