"""Exception hierarchy shared by the catalogue compiler and locale loader."""

from __future__ import annotations

from pathlib import Path


class CatalogError(Exception):
    """Base class for catalogue compilation and loading failures."""


class CatalogDirectoryError(CatalogError):
    """Raised when the source catalogue directory cannot be listed."""

    def __init__(self, directory: Path, reason: str) -> None:
        super().__init__(f"Unable to scan directory {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class CatalogNotFoundError(CatalogError):
    """Raised when a compiled catalogue for a resolved locale is missing."""

    def __init__(self, locale: str, path: Path) -> None:
        super().__init__(f"Compiled catalogue for locale '{locale}' not found: {path}")
        self.locale = locale
        self.path = path


class CatalogParseError(CatalogError):
    """Raised when a catalogue file is not a valid message mapping."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Malformed catalogue {path}: {reason}")
        self.path = path
        self.reason = reason


class CatalogReadError(CatalogError):
    """Raised when a catalogue file exists but cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to read catalogue {path}: {reason}")
        self.path = path
        self.reason = reason


class MessageSyntaxError(CatalogError):
    """Raised when a message template cannot be parsed."""

    def __init__(self, template: str, reason: str, *, message_id: str | None = None) -> None:
        scope = f"{message_id}: " if message_id else ""
        super().__init__(f"{scope}{reason} in {template!r}")
        self.template = template
        self.reason = reason
        self.message_id = message_id


class MessageFormatError(CatalogError):
    """Raised when a parsed message cannot be rendered with the given values."""


class LoadSupersededError(CatalogError):
    """Raised to callers whose locale load was replaced by a newer request."""

    def __init__(self, locale: str) -> None:
        super().__init__(f"Load for locale '{locale}' superseded by a newer request")
        self.locale = locale


__all__ = [
    "CatalogDirectoryError",
    "CatalogError",
    "CatalogNotFoundError",
    "CatalogParseError",
    "CatalogReadError",
    "LoadSupersededError",
    "MessageFormatError",
    "MessageSyntaxError",
]
