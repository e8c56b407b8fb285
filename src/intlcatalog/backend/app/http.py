"""Problem payloads returned by the catalogue API blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from flask import jsonify

from intlcatalog.backend.errors import (
    CatalogError,
    CatalogNotFoundError,
    CatalogParseError,
    CatalogReadError,
)

# Most specific first; anything else is a generic catalogue failure.
_CATALOG_PROBLEMS: tuple[tuple[type[CatalogError], str, int], ...] = (
    (CatalogNotFoundError, "catalog_not_found", 404),
    (CatalogParseError, "catalog_invalid", 500),
    (CatalogReadError, "catalog_unreadable", 500),
)


@dataclass(frozen=True)
class ProblemResponse:
    """Error body served as ``{"error": code, "message": ..., **extra}``."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the JSON body, omitting an empty message."""

        body: dict[str, Any] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        body.update(self.extra or {})
        return body

    def to_response(self) -> tuple[Any, int]:
        """Return the ``(response, status)`` pair a Flask view can hand back."""

        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse`, keeping keyword extras in the body."""

    return ProblemResponse(error=error, status=status, message=message, extra=extra or None)


def problem_from_catalog_error(error: CatalogError) -> ProblemResponse:
    """Translate a catalogue failure into its problem code and status."""

    extra: dict[str, Any] = {}
    locale = getattr(error, "locale", None)
    if locale:
        extra["locale"] = locale

    for error_type, code, status in _CATALOG_PROBLEMS:
        if isinstance(error, error_type):
            return problem_response(code, status=status, message=str(error), **extra)
    return problem_response("catalog_error", status=500, message=str(error), **extra)


__all__ = ["ProblemResponse", "problem_from_catalog_error", "problem_response"]
