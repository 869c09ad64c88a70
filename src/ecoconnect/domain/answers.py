"""Typed answer shapes for each category's follow-up questions."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Self


@dataclass(frozen=True)
class _Answers:
    """Base for answer shapes; unknown keys are ignored, missing keys are None."""

    @classmethod
    def from_mapping(cls, answers: Mapping[str, object]) -> Self:
        values = {}
        for field in fields(cls):
            raw = answers.get(field.name)
            values[field.name] = str(raw) if raw is not None else None
        return cls(**values)


@dataclass(frozen=True)
class EwasteAnswers(_Answers):
    functionality: str | None = None
    age: str | None = None
    data: str | None = None
    intent: str | None = None


@dataclass(frozen=True)
class PlasticAnswers(_Answers):
    condition: str | None = None
    size: str | None = None
    cleanliness: str | None = None
    intent: str | None = None


@dataclass(frozen=True)
class MetalAnswers(_Answers):
    condition: str | None = None
    weight: str | None = None
    type: str | None = None
    intent: str | None = None


@dataclass(frozen=True)
class FabricAnswers(_Answers):
    condition: str | None = None
    quantity: str | None = None
    type: str | None = None
    intent: str | None = None


@dataclass(frozen=True)
class GlassAnswers(_Answers):
    condition: str | None = None
    type: str | None = None
    cleanliness: str | None = None
    intent: str | None = None


@dataclass(frozen=True)
class PaperAnswers(_Answers):
    type: str | None = None
    quantity: str | None = None
    condition: str | None = None
    intent: str | None = None


@dataclass(frozen=True)
class GeneralAnswers(_Answers):
    condition: str | None = None
    age: str | None = None
    usability: str | None = None
    intent: str | None = None
