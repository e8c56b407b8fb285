"""Expose compiled catalogues to front-end consumers."""

from __future__ import annotations

import asyncio
from typing import Any

from flask import Blueprint, jsonify, request

from intlcatalog.backend.app.http import problem_from_catalog_error
from intlcatalog.backend.app.localization import (
    load_locale_data,
    normalise_locale,
    resolve_locale,
)
from intlcatalog.backend.config.settings import load_settings
from intlcatalog.backend.errors import CatalogError

blueprint = Blueprint("translations", __name__, url_prefix="/api/v1/translations")


def _catalogue_payload(locale_hint: str | None) -> tuple[Any, int]:
    settings = load_settings()
    requested = normalise_locale(locale_hint)
    try:
        messages = asyncio.run(load_locale_data(requested, settings=settings))
    except CatalogError as error:
        return problem_from_catalog_error(error).to_response()

    payload = {
        "locale": resolve_locale(requested, settings),
        "requested": requested,
        "messages": messages,
    }
    return jsonify(payload), 200


@blueprint.get("/")
def get_default_translations():
    """Return the catalogue for the query or Accept-Language locale."""

    locale_hint = request.args.get("locale") or request.accept_languages.best
    return _catalogue_payload(locale_hint)


@blueprint.get("/<locale>")
def get_locale_translations(locale: str):
    """Return the catalogue for a specific locale slug."""

    return _catalogue_payload(locale)
