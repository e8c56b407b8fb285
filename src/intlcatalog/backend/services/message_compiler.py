"""Compile a single source catalogue into its runtime representation.

This is the per-file tool the batch compiler shells out to. It accepts the same
options as ``formatjs compile`` (``<input> [--ast] --out-file <output>``) so the
two can be swapped in the build settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from intlcatalog.backend.config.schema import MessageDefinition
from intlcatalog.backend.errors import CatalogParseError, CatalogReadError, MessageSyntaxError

from .messageformat import parse_message

logger = logging.getLogger(__name__)


def load_source_catalogue(path: Path) -> dict[str, MessageDefinition]:
    """Read and validate a source catalogue file."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise CatalogParseError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    except UnicodeDecodeError as exc:
        raise CatalogParseError(path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise CatalogReadError(path, exc.strerror or str(exc)) from exc

    if not isinstance(payload, dict):
        raise CatalogParseError(path, "top level must be a mapping of message ids")

    definitions: dict[str, MessageDefinition] = {}
    for message_id, entry in payload.items():
        if not isinstance(entry, Mapping):
            raise CatalogParseError(path, f"entry '{message_id}' must be a mapping")
        try:
            definitions[str(message_id)] = MessageDefinition.model_validate(entry)
        except ValidationError as error:
            raise CatalogParseError(path, f"entry '{message_id}' is invalid: {error}") from error
    return definitions


def compile_catalogue(
    definitions: Mapping[str, MessageDefinition],
    *,
    ast: bool = True,
) -> dict[str, Any]:
    """Return the compiled mapping of message id to template or AST nodes."""

    compiled: dict[str, Any] = {}
    for message_id, definition in definitions.items():
        template = definition.default_message
        if not ast:
            compiled[message_id] = template
            continue
        try:
            compiled[message_id] = parse_message(template)
        except MessageSyntaxError as exc:
            raise MessageSyntaxError(template, exc.reason, message_id=message_id) from exc
    return compiled


def serialise_catalogue(payload: Mapping[str, Any]) -> str:
    """Serialise a compiled catalogue with a stable key order."""

    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def compile_file(source: Path, destination: Path, *, ast: bool = True) -> dict[str, Any]:
    """Compile ``source`` and write the result to ``destination``."""

    definitions = load_source_catalogue(source)
    compiled = compile_catalogue(definitions, ast=ast)

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(serialise_catalogue(compiled), encoding="utf-8")
    logger.debug("Compiled %d messages from %s to %s", len(compiled), source, destination)
    return compiled


__all__ = [
    "compile_catalogue",
    "compile_file",
    "load_source_catalogue",
    "serialise_catalogue",
]
