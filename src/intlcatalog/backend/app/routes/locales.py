"""Expose the supported locale set used to populate the selector."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from intlcatalog.backend.config.settings import load_settings

blueprint = Blueprint("locales", __name__, url_prefix="/api/v1/locales")


def get_locale_metadata() -> dict[str, Any]:
    """Describe selector entries, loadable catalogues and the default locale."""

    locales = load_settings().locales
    return {
        "default_locale": locales.default_locale,
        "supported": [
            {"locale": entry.code, "name": entry.name} for entry in locales.supported
        ],
        "loaders": list(locales.loader_locales),
    }


@blueprint.get("/")
def list_locales() -> tuple[Any, int]:
    return jsonify(get_locale_metadata()), 200
