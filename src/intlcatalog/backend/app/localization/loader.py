"""Resolve locale codes and load the matching compiled catalogue."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any

from intlcatalog.backend.config.schema import Settings
from intlcatalog.backend.config.settings import load_settings
from intlcatalog.backend.errors import (
    CatalogNotFoundError,
    CatalogParseError,
    CatalogReadError,
)

logger = logging.getLogger(__name__)

_LOCALE_DELIMITER = re.compile(r"[-_]")


def normalise_locale(tag: str | None) -> str:
    """Truncate a locale tag at the first ``-`` or ``_`` delimiter."""

    if not tag:
        return ""
    return _LOCALE_DELIMITER.split(str(tag).strip(), maxsplit=1)[0].lower()


def resolve_locale(locale: str | None, settings: Settings | None = None) -> str:
    """Return the locale whose catalogue serves ``locale``.

    Only locales registered in the loader table are served directly; every
    other value, including empty or malformed ones, resolves to the default.
    """

    settings = settings or load_settings()
    code = normalise_locale(locale)
    if code in settings.locales.loaders:
        return code
    return settings.locales.default_locale


def read_compiled_catalogue(locale: str, path: Path) -> dict[str, Any]:
    """Read a compiled catalogue file into a message mapping."""

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise CatalogNotFoundError(locale, path) from exc
    except UnicodeDecodeError as exc:
        raise CatalogParseError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise CatalogReadError(path, exc.strerror or str(exc)) from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogParseError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(payload, dict):
        raise CatalogParseError(path, "compiled catalogue must be a mapping of message ids")
    return payload


async def load_locale_data(
    locale: str | None,
    *,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Asynchronously load the compiled catalogue resolved for ``locale``."""

    settings = settings or load_settings()
    resolved = resolve_locale(locale, settings)
    path = settings.catalogue_path(resolved)
    logger.debug("Loading catalogue for %r from %s", resolved, path)
    return await asyncio.to_thread(read_compiled_catalogue, resolved, path)


__all__ = [
    "load_locale_data",
    "normalise_locale",
    "read_compiled_catalogue",
    "resolve_locale",
]
