"""Unit coverage for catalogue problem payloads."""

from __future__ import annotations

from pathlib import Path

import pytest

from intlcatalog.backend.app.http import problem_from_catalog_error
from intlcatalog.backend.errors import (
    CatalogNotFoundError,
    CatalogParseError,
    CatalogReadError,
    LoadSupersededError,
)

CATALOGUE = Path("compiled_lang/en.json")


@pytest.mark.parametrize(
    ("error", "code", "status"),
    [
        (CatalogNotFoundError("en", CATALOGUE), "catalog_not_found", 404),
        (CatalogParseError(CATALOGUE, "not valid UTF-8"), "catalog_invalid", 500),
        (CatalogReadError(CATALOGUE, "Is a directory"), "catalog_unreadable", 500),
        (LoadSupersededError("fr"), "catalog_error", 500),
    ],
)
def test_catalog_errors_map_to_problem_codes(error, code: str, status: int) -> None:
    problem = problem_from_catalog_error(error)

    assert problem.status == status
    assert problem.as_dict()["error"] == code
    assert problem.as_dict()["message"] == str(error)


def test_locale_is_included_when_the_error_carries_one() -> None:
    assert problem_from_catalog_error(CatalogNotFoundError("fr", CATALOGUE)).as_dict()[
        "locale"
    ] == "fr"
    assert "locale" not in problem_from_catalog_error(
        CatalogParseError(CATALOGUE, "bad")
    ).as_dict()
