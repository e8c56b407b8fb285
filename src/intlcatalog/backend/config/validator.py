"""Utilities for validating source catalogues and surfacing issues."""

from __future__ import annotations

import argparse
from collections import defaultdict
from pathlib import Path
from typing import Mapping, Sequence

from intlcatalog.backend.errors import CatalogError, MessageSyntaxError
from intlcatalog.backend.services.message_compiler import load_source_catalogue
from intlcatalog.backend.services.messageformat import argument_names

from .schema import MessageDefinition
from .settings import load_settings

Catalogues = Mapping[str, Mapping[str, MessageDefinition]]


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def load_catalogues(directory: Path) -> tuple[dict[str, dict[str, MessageDefinition]], list[str]]:
    """Load every ``*.json`` source catalogue, collecting load failures."""

    catalogues: dict[str, dict[str, MessageDefinition]] = {}
    errors: list[str] = []

    if not directory.is_dir():
        return catalogues, [f"missing source directory: {directory}"]

    for path in sorted(directory.glob("*.json")):
        try:
            catalogues[path.stem] = load_source_catalogue(path)
        except CatalogError as error:
            errors.append(_format_scope(path.stem, str(error)))

    if not catalogues and not errors:
        errors.append(f"no source catalogues discovered in {directory}")
    return catalogues, errors


def _syntax_errors(catalogues: Catalogues) -> list[str]:
    errors: list[str] = []
    for locale, definitions in sorted(catalogues.items()):
        for message_id, definition in sorted(definitions.items()):
            try:
                argument_names(definition.default_message)
            except MessageSyntaxError as error:
                errors.append(_format_scope(f"{locale}:{message_id}", error.reason))
    return errors


def _missing_keys(catalogues: Catalogues, base_locale: str) -> list[str]:
    base = catalogues.get(base_locale)
    if base is None:
        return [f"base locale '{base_locale}' has no source catalogue"]

    issues: list[str] = []
    expected = set(base)
    for locale, definitions in sorted(catalogues.items()):
        missing = expected - set(definitions)
        if missing:
            issues.append(
                _format_scope(
                    locale,
                    f"missing {len(missing)} message(s): {', '.join(sorted(missing))}",
                )
            )
        extra = set(definitions) - expected
        if extra:
            issues.append(
                _format_scope(
                    locale,
                    f"{len(extra)} message(s) absent from '{base_locale}': "
                    f"{', '.join(sorted(extra))}",
                )
            )
    return issues


def _placeholder_inconsistencies(catalogues: Catalogues) -> list[str]:
    by_message: dict[str, dict[str, frozenset[str]]] = defaultdict(dict)
    for locale, definitions in catalogues.items():
        for message_id, definition in definitions.items():
            try:
                names = argument_names(definition.default_message)
            except MessageSyntaxError:
                continue
            by_message[message_id][locale] = frozenset(names)

    issues: list[str] = []
    for message_id, locale_map in sorted(by_message.items()):
        if len(set(locale_map.values())) <= 1:
            continue
        details = ", ".join(
            f"{locale}={{{', '.join(sorted(names))}}}"
            for locale, names in sorted(locale_map.items())
        )
        issues.append(_format_scope(message_id, f"placeholders differ: {details}"))
    return issues


def validate_catalogues(catalogues: Catalogues, base_locale: str) -> list[str]:
    """Return every issue found across the loaded catalogues."""

    return [
        *_syntax_errors(catalogues),
        *_missing_keys(catalogues, base_locale),
        *_placeholder_inconsistencies(catalogues),
    ]


def validate_directory(directory: Path, base_locale: str) -> list[str]:
    catalogues, errors = load_catalogues(directory)
    if errors and not catalogues:
        return errors
    return [*errors, *validate_catalogues(catalogues, base_locale)]


def build_argument_parser(parser: argparse.ArgumentParser | None = None) -> argparse.ArgumentParser:
    parser = parser or argparse.ArgumentParser(
        description="Validate source message catalogues before compiling them.",
    )
    parser.add_argument(
        "--source-dir",
        type=Path,
        default=None,
        help="Directory of source catalogues (defaults to the configured source_dir)",
    )
    parser.add_argument(
        "--base-locale",
        default=None,
        help="Locale other catalogues are compared against (defaults to the default locale)",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    settings = load_settings()
    directory = args.source_dir or settings.source_dir
    base_locale = args.base_locale or settings.locales.default_locale

    issues = validate_directory(directory, base_locale)
    if issues:
        print(f"{len(issues)} issue(s) detected in {directory}:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(f"{directory}: OK")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = build_argument_parser()
    return run(parser.parse_args(argv))


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
