"""Test configuration utilities and shared fixtures."""

import os
import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from intlcatalog.backend.app import create_app  # noqa: E402
from intlcatalog.backend.config.schema import Settings  # noqa: E402
from intlcatalog.backend.config.settings import (  # noqa: E402
    clear_settings_cache,
    parse_settings,
)

BUNDLED_COMPILER = [
    "{python}",
    "-m",
    "intlcatalog",
    "compile",
    "{source}",
    "--ast",
    "--out-file",
    "{destination}",
]


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def subprocess_pythonpath(monkeypatch: pytest.MonkeyPatch) -> None:
    """Let compiler subprocesses import ``intlcatalog`` from the checkout."""

    existing = os.environ.get("PYTHONPATH")
    value = str(SRC) if not existing else os.pathsep.join([str(SRC), existing])
    monkeypatch.setenv("PYTHONPATH", value)


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    """A project root with ``lang`` and ``compiled_lang`` directories."""

    (tmp_path / "lang").mkdir()
    (tmp_path / "compiled_lang").mkdir()
    return tmp_path


@pytest.fixture()
def make_settings(workspace: Path):
    """Build settings rooted at the temporary workspace."""

    def factory(**compiler_overrides) -> Settings:
        compiler = {
            "source_dir": "lang",
            "destination_dir": "compiled_lang",
            "command": BUNDLED_COMPILER,
        }
        compiler.update(compiler_overrides)
        raw = {
            "compiler": compiler,
            "locales": {
                "default_locale": "en",
                "supported": [
                    {"locale": "en", "name": "English"},
                    {"locale": "fr", "name": "French"},
                ],
                "loaders": {
                    "en": "compiled_lang/en.json",
                    "fr": "compiled_lang/fr.json",
                },
            },
        }
        return parse_settings(raw, base=workspace)

    return factory
