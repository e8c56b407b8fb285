"""Request/response models shared by the message rendering routes."""

from .api import (
    DEMO_MESSAGES,
    FormatRequest,
    MessageDescriptor,
    RenderedMessage,
    format_validation_error,
)

__all__ = [
    "DEMO_MESSAGES",
    "FormatRequest",
    "MessageDescriptor",
    "RenderedMessage",
    "format_validation_error",
]
