"""Render message descriptors against the compiled catalogues."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from intlcatalog.backend.app.http import problem_from_catalog_error, problem_response
from intlcatalog.backend.app.localization import IntlContext
from intlcatalog.backend.app.models import (
    DEMO_MESSAGES,
    FormatRequest,
    MessageDescriptor,
    RenderedMessage,
    format_validation_error,
)
from intlcatalog.backend.errors import CatalogError

blueprint = Blueprint("messages", __name__, url_prefix="/api/v1/messages")


def _render(locale_hint: str | None, descriptors: Sequence[MessageDescriptor]) -> tuple[Any, int]:
    context = IntlContext()
    try:
        bundle = asyncio.run(context.set_locale(locale_hint))
    except CatalogError as error:
        return problem_from_catalog_error(error).to_response()

    rendered = [
        RenderedMessage(
            id=descriptor.id,
            text=context.format_message(
                descriptor.id,
                default_message=descriptor.default_message,
                description=descriptor.description,
                values=descriptor.values,
            ),
        ).model_dump()
        for descriptor in descriptors
    ]
    payload = {"locale": bundle.locale, "requested": bundle.requested, "messages": rendered}
    return jsonify(payload), 200


@blueprint.get("/demo")
def render_demo_messages():
    """Render the sample messages shown by the demo page."""

    locale_hint = request.args.get("locale") or request.accept_languages.best
    return _render(locale_hint, DEMO_MESSAGES)


@blueprint.post("/format")
def format_messages():
    """Render caller-supplied descriptors for the requested locale."""

    try:
        payload = FormatRequest.model_validate(request.get_json(force=True))
    except ValidationError as error:
        return problem_response(
            "validation_error", status=400, message=format_validation_error(error)
        ).to_response()

    locale_hint = payload.locale or request.accept_languages.best
    return _render(locale_hint, payload.messages)
