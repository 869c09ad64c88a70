"""OpenAI Responses API client for waste-item classification."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from ecoconnect.services.classification import ClassifierClient

_SCHEMA_NAME = "waste_item_classification"


class ClassificationResponseError(RuntimeError):
    """The model produced no usable classification."""


@dataclass
class OpenAIClassifierClient(ClassifierClient):
    """Classifier client backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIClassifierClient":
        """Create a classifier client with its own OpenAI session."""
        return cls(client=AsyncOpenAI(api_key=api_key))

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
        """Send one image with the prompt and decode the structured verdict.

        Refusals, truncated responses and non-JSON output raise
        ``ClassificationResponseError``; the service reports them as a failed
        analysis.
        """
        response = await self.client.responses.create(
            **build_request(
                model=model,
                reasoning_effort=reasoning_effort,
                store=store,
                image_data_url=image_data_url,
                schema=schema,
                prompt=prompt,
            )
        )
        status = getattr(response, "status", None)
        if status == "incomplete":
            details = getattr(response, "incomplete_details", None)
            reason = getattr(details, "reason", None) or "unknown"
            raise ClassificationResponseError(f"Classification incomplete: {reason}")
        refusal = _refusal_text(response)
        if refusal:
            raise ClassificationResponseError(f"Classification refused: {refusal}")
        return decode_verdict(response.output_text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def build_request(  # noqa: PLR0913
    *,
    model: str,
    reasoning_effort: str | None,
    store: bool,
    image_data_url: str,
    schema: dict[str, object],
    prompt: str,
) -> dict[str, object]:
    """Build a Responses API payload with a strict JSON schema format."""
    payload: dict[str, object] = {
        "model": model,
        "input": [
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": prompt},
                    {"type": "input_image", "image_url": image_data_url},
                ],
            }
        ],
        "text": {
            "format": {
                "type": "json_schema",
                "name": _SCHEMA_NAME,
                "strict": True,
                "schema": schema,
            }
        },
        "store": store,
    }
    if reasoning_effort:
        payload["reasoning"] = {"effort": reasoning_effort}
    return payload


def decode_verdict(output_text: str | None) -> dict[str, object]:
    """Parse the model's JSON output into a mapping."""
    if not output_text:
        raise ClassificationResponseError("OpenAI returned an empty response")
    try:
        verdict = json.loads(output_text)
    except json.JSONDecodeError as exc:
        raise ClassificationResponseError("OpenAI returned malformed JSON") from exc
    if not isinstance(verdict, dict):
        raise ClassificationResponseError("OpenAI returned a non-object verdict")
    return verdict


def _refusal_text(response: object) -> str | None:
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            if getattr(part, "type", None) == "refusal":
                return getattr(part, "refusal", None) or "no reason given"
    return None
