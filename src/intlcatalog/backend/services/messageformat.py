"""Parse, print and render brace-delimited message templates.

Templates follow the subset of ICU MessageFormat needed by the catalogues:
plain literals, ``{name}`` arguments and ``{name, number|date|time[, style]}``
formatted arguments. Apostrophes quote literal braces (``'{'``) and a doubled
apostrophe yields a single one. The parsed form uses the same numbered node
types as the formatjs AST so compiled catalogues remain interchangeable.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from enum import IntEnum
from typing import Any, Mapping, Sequence

from babel.dates import format_date, format_datetime, format_time
from babel.numbers import format_decimal, format_percent

from intlcatalog.backend.errors import MessageFormatError, MessageSyntaxError


class NodeType(IntEnum):
    """Numbered node kinds shared with the formatjs AST."""

    LITERAL = 0
    ARGUMENT = 1
    NUMBER = 2
    DATE = 3
    TIME = 4


MessageNode = dict[str, Any]

_ARGUMENT_NAME = re.compile(r"^[\w.-]+$")
_FORMATTED_TYPES = {
    "number": NodeType.NUMBER,
    "date": NodeType.DATE,
    "time": NodeType.TIME,
}
_UNSUPPORTED_TYPES = frozenset({"plural", "select", "selectordinal"})
_SYNTAX_CHARACTERS = "{}"


def _argument_node(body: str, template: str) -> MessageNode:
    parts = [part.strip() for part in body.split(",")]
    name = parts[0]
    if not name or not _ARGUMENT_NAME.match(name):
        raise MessageSyntaxError(template, f"invalid argument name {name!r}")

    if len(parts) == 1:
        return {"type": int(NodeType.ARGUMENT), "value": name}

    kind = parts[1]
    if kind in _UNSUPPORTED_TYPES:
        raise MessageSyntaxError(template, f"'{kind}' arguments are not supported")
    if kind not in _FORMATTED_TYPES:
        raise MessageSyntaxError(template, f"unknown argument type {kind!r}")
    if len(parts) > 3:
        raise MessageSyntaxError(template, f"too many segments in argument {name!r}")

    style: str | None = None
    if len(parts) == 3:
        style = parts[2]
        if not style:
            raise MessageSyntaxError(template, f"empty style for argument {name!r}")

    return {"type": int(_FORMATTED_TYPES[kind]), "value": name, "style": style}


def _read_quoted(template: str, start: int, buffer: list[str]) -> int:
    """Consume quoted text after an opening apostrophe, returning the next index."""

    index = start
    length = len(template)
    while index < length:
        char = template[index]
        if char == "'":
            if index + 1 < length and template[index + 1] == "'":
                buffer.append("'")
                index += 2
                continue
            return index + 1
        buffer.append(char)
        index += 1
    return index


def parse_message(template: str) -> list[MessageNode]:
    """Parse a template string into a list of AST nodes."""

    nodes: list[MessageNode] = []
    buffer: list[str] = []

    def flush() -> None:
        if buffer:
            nodes.append({"type": int(NodeType.LITERAL), "value": "".join(buffer)})
            buffer.clear()

    index = 0
    length = len(template)
    while index < length:
        char = template[index]

        if char == "'":
            following = template[index + 1] if index + 1 < length else ""
            if following == "'":
                buffer.append("'")
                index += 2
            elif following and following in _SYNTAX_CHARACTERS:
                index = _read_quoted(template, index + 1, buffer)
            else:
                buffer.append(char)
                index += 1
            continue

        if char == "{":
            close = template.find("}", index + 1)
            if close == -1:
                raise MessageSyntaxError(template, "unclosed argument brace")
            body = template[index + 1 : close]
            if "{" in body:
                raise MessageSyntaxError(template, "nested arguments are not supported")
            flush()
            nodes.append(_argument_node(body, template))
            index = close + 1
            continue

        if char == "}":
            raise MessageSyntaxError(template, "unmatched closing brace")

        buffer.append(char)
        index += 1

    flush()
    return nodes


def _quote_literal(value: str) -> str:
    escaped = value.replace("'", "''")
    return re.sub(r"[{}]+", lambda match: f"'{match.group(0)}'", escaped)


def print_message(nodes: Sequence[Mapping[str, Any]]) -> str:
    """Render AST nodes back into an equivalent template string."""

    pieces: list[str] = []
    for node in nodes:
        node_type = NodeType(node["type"])
        if node_type is NodeType.LITERAL:
            pieces.append(_quote_literal(str(node["value"])))
        elif node_type is NodeType.ARGUMENT:
            pieces.append(f"{{{node['value']}}}")
        else:
            keyword = node_type.name.lower()
            style = node.get("style")
            suffix = f", {style}" if style else ""
            pieces.append(f"{{{node['value']}, {keyword}{suffix}}}")
    return "".join(pieces)


def argument_names(message: str | Sequence[Mapping[str, Any]]) -> set[str]:
    """Return the placeholder names referenced by a template or node list."""

    nodes = parse_message(message) if isinstance(message, str) else message
    return {
        str(node["value"])
        for node in nodes
        if NodeType(node["type"]) is not NodeType.LITERAL
    }


def _format_number(value: Any, style: str | None, locale: str) -> str:
    if style == "percent":
        return format_percent(value, locale=locale)
    if style == "integer":
        return format_decimal(round(value), locale=locale)
    return format_decimal(value, format=style, locale=locale)


def _format_date(value: Any, style: str | None, locale: str) -> str:
    if isinstance(value, datetime):
        return format_datetime(value, format=style or "medium", locale=locale)
    if isinstance(value, date):
        return format_date(value, format=style or "medium", locale=locale)
    raise MessageFormatError(f"Expected a date value, got {type(value).__name__}")


def _format_time(value: Any, style: str | None, locale: str) -> str:
    if not isinstance(value, (datetime, time)):
        raise MessageFormatError(f"Expected a time value, got {type(value).__name__}")
    return format_time(value, format=style or "medium", locale=locale)


_FORMATTERS = {
    NodeType.NUMBER: _format_number,
    NodeType.DATE: _format_date,
    NodeType.TIME: _format_time,
}


def format_message(
    message: str | Sequence[Mapping[str, Any]],
    values: Mapping[str, Any] | None = None,
    *,
    locale: str = "en",
) -> str:
    """Substitute ``values`` into a template or pre-parsed node list."""

    nodes = parse_message(message) if isinstance(message, str) else message
    values = values or {}

    pieces: list[str] = []
    for node in nodes:
        node_type = NodeType(node["type"])
        if node_type is NodeType.LITERAL:
            pieces.append(str(node["value"]))
            continue

        name = str(node["value"])
        if name not in values:
            raise MessageFormatError(f"Missing value for placeholder '{name}'")
        value = values[name]
        style = node.get("style")

        if node_type is NodeType.ARGUMENT:
            pieces.append(str(value))
            continue

        formatter = _FORMATTERS[node_type]
        try:
            pieces.append(formatter(value, style, locale))
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise MessageFormatError(
                f"Cannot format {value!r} for placeholder '{name}' as {node_type.name.lower()}: {exc}"
            ) from exc

    return "".join(pieces)


__all__ = [
    "MessageNode",
    "NodeType",
    "argument_names",
    "format_message",
    "parse_message",
    "print_message",
]
