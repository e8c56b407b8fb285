"""Pydantic models describing the public API surface."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "DEMO_MESSAGES",
    "FormatRequest",
    "MessageDescriptor",
    "RenderedMessage",
    "format_validation_error",
]


class MessageDescriptor(BaseModel):
    """A message display site: id, authored default and substitution values."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    default_message: str | None = Field(default=None, alias="defaultMessage")
    description: str | None = None
    values: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("values", mode="before")
    @classmethod
    def _coerce_values(cls, value: Any) -> Mapping[str, Any]:
        if value is None:
            return {}
        return value


class FormatRequest(BaseModel):
    """Batch of descriptors rendered for one locale."""

    model_config = ConfigDict(extra="forbid")

    locale: str | None = None
    messages: list[MessageDescriptor] = Field(default_factory=list)


class RenderedMessage(BaseModel):
    id: str
    text: str


def format_validation_error(error: ValidationError) -> str:
    """Collapse pydantic errors into a single readable sentence."""

    parts = []
    for entry in error.errors():
        location = ".".join(str(part) for part in entry.get("loc", ()))
        parts.append(f"{location}: {entry.get('msg')}" if location else str(entry.get("msg")))
    return "; ".join(parts)


DEMO_MESSAGES: tuple[MessageDescriptor, ...] = (
    MessageDescriptor(
        id="user.userName",
        description="User name",
        default_message="My name is {name}",
        values={"name": "Akash"},
    ),
    MessageDescriptor(
        id="user.designation",
        description="Designation",
        default_message="My designation is {designation}",
        values={"designation": "Software Developer"},
    ),
    MessageDescriptor(
        id="user.location",
        description="Location",
        default_message="My location is {place}",
        values={"place": "India"},
    ),
)
