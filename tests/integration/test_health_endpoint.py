"""Integration tests for application endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from intlcatalog.backend.config.settings import load_settings
from intlcatalog.backend.version import get_project_version


def test_health_endpoint(client: FlaskClient) -> None:
    """Ensure the health endpoint returns a successful status payload."""
    response = client.get("/health")
    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["version"] == get_project_version()
    assert payload["default_locale"] == load_settings().locales.default_locale
    assert payload["locales"] == ["en", "fr"]
    assert response.mimetype == "application/json"


def test_locales_endpoint_lists_selector_entries(client: FlaskClient) -> None:
    response = client.get("/api/v1/locales/")
    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()

    assert payload["default_locale"] == "en"
    assert payload["supported"] == [
        {"locale": "en", "name": "English"},
        {"locale": "fr", "name": "French"},
    ]
    assert payload["loaders"] == ["en", "fr"]
