"""Unit coverage for locale resolution and compiled catalogue loading."""

from __future__ import annotations

import asyncio
import json
import shutil
from pathlib import Path

import pytest

from intlcatalog.backend.app.localization import (
    load_locale_data,
    normalise_locale,
    resolve_locale,
)
from intlcatalog.backend.errors import CatalogNotFoundError, CatalogParseError, CatalogReadError

SOURCE_ROOT = Path(__file__).resolve().parents[2] / "src" / "intlcatalog"


def _heading(messages: dict) -> str:
    return messages["app.heading"][0]["value"]


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("fr-CA", "fr"),
        ("de_DE", "de"),
        ("en", "en"),
        ("EN-us", "en"),
        ("", ""),
        (None, ""),
        ("zh-Hant-TW", "zh"),
    ],
)
def test_normalise_locale_truncates_at_first_delimiter(tag: str | None, expected: str) -> None:
    assert normalise_locale(tag) == expected


def test_recognised_locale_resolves_to_its_own_catalogue() -> None:
    assert resolve_locale("fr") == "fr"
    assert resolve_locale("fr-CA") == "fr"


@pytest.mark.parametrize("code", ["de", "", "xx-YY", "??", "english", None])
def test_unrecognised_locales_resolve_to_the_default(code: str | None) -> None:
    assert resolve_locale(code) == "en"
    assert resolve_locale(code) == resolve_locale(code)


def test_ambient_fr_ca_loads_the_french_catalogue() -> None:
    messages = asyncio.run(load_locale_data(normalise_locale("fr-CA")))

    assert _heading(messages) == "Choisir la langue"


def test_ambient_de_de_loads_the_default_catalogue() -> None:
    messages = asyncio.run(load_locale_data(normalise_locale("de-DE")))

    assert _heading(messages) == "Select language"


def test_new_locale_is_a_configuration_change(workspace: Path, make_settings) -> None:
    settings = make_settings()
    shutil.copy(SOURCE_ROOT / "compiled_lang" / "en.json", workspace / "compiled_lang" / "en.json")
    (workspace / "compiled_lang" / "es.json").write_text(
        json.dumps({"app.heading": [{"type": 0, "value": "Elegir idioma"}]}),
        encoding="utf-8",
    )

    assert _heading(asyncio.run(load_locale_data("es", settings=settings))) == "Select language"

    extended = settings.model_copy(
        update={
            "locales": settings.locales.model_copy(
                update={"loaders": {**settings.locales.loaders, "es": "compiled_lang/es.json"}}
            )
        }
    )
    assert _heading(asyncio.run(load_locale_data("es", settings=extended))) == "Elegir idioma"


def test_missing_compiled_catalogue_rejects(workspace: Path, make_settings) -> None:
    settings = make_settings()

    with pytest.raises(CatalogNotFoundError) as excinfo:
        asyncio.run(load_locale_data("fr", settings=settings))

    assert excinfo.value.locale == "fr"


def test_missing_resolved_catalogue_has_no_secondary_fallback(
    workspace: Path, make_settings
) -> None:
    shutil.copy(SOURCE_ROOT / "compiled_lang" / "fr.json", workspace / "compiled_lang" / "fr.json")

    with pytest.raises(CatalogNotFoundError):
        asyncio.run(load_locale_data("de", settings=make_settings()))


@pytest.mark.parametrize("content", ["{corrupted", "[1, 2, 3]"])
def test_corrupted_compiled_catalogue_rejects(
    workspace: Path, make_settings, content: str
) -> None:
    (workspace / "compiled_lang" / "en.json").write_text(content, encoding="utf-8")

    with pytest.raises(CatalogParseError):
        asyncio.run(load_locale_data("en", settings=make_settings()))


def test_non_utf8_compiled_catalogue_rejects(workspace: Path, make_settings) -> None:
    (workspace / "compiled_lang" / "en.json").write_bytes(b'{"a": "\xff\xfe"}')

    with pytest.raises(CatalogParseError, match="UTF-8"):
        asyncio.run(load_locale_data("en", settings=make_settings()))


def test_unreadable_compiled_catalogue_rejects(workspace: Path, make_settings) -> None:
    (workspace / "compiled_lang" / "en.json").mkdir()

    with pytest.raises(CatalogReadError):
        asyncio.run(load_locale_data("en", settings=make_settings()))
