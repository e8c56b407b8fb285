"""Settings loader wrapping the shared schema models."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    CompilerSettings,
    ConfigurationError,
    LocaleSettings,
    MessageDefinition,
    Settings,
    SupportedLocale,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
SETTINGS_FILE = CONFIG_DIRECTORY / "settings.yaml"
PACKAGE_ROOT = Path(__file__).resolve().parents[2]
SETTINGS_ENV = "INTLCATALOG_SETTINGS"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must define a mapping at the top level")
    return data


def settings_path() -> Path:
    """Return the active settings file, honouring the environment override."""

    override = os.getenv(SETTINGS_ENV)
    if override:
        return Path(override).expanduser()
    return SETTINGS_FILE


def parse_settings(raw: dict[str, Any], *, base: Path = PACKAGE_ROOT) -> Settings:
    """Validate a raw settings mapping, anchoring relative paths at ``base``."""

    prepared = dict(raw)
    root = prepared.get("root")
    prepared["root"] = (base / root).resolve() if root else base

    try:
        return Settings.model_validate(prepared)
    except ValidationError as error:
        raise ConfigurationError(f"Settings validation failed: {error}") from error


@lru_cache(maxsize=4)
def _load_settings_file(path: Path) -> Settings:
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    raw = _load_yaml(path)
    base = PACKAGE_ROOT if path == SETTINGS_FILE else path.resolve().parent
    return parse_settings(raw, base=base)


def load_settings(path: Path | None = None) -> Settings:
    """Load and cache the settings document."""

    return _load_settings_file(path or settings_path())


def clear_settings_cache() -> None:
    _load_settings_file.cache_clear()


__all__ = [
    "CONFIG_DIRECTORY",
    "CompilerSettings",
    "ConfigurationError",
    "LocaleSettings",
    "MessageDefinition",
    "PACKAGE_ROOT",
    "SETTINGS_ENV",
    "SETTINGS_FILE",
    "Settings",
    "SupportedLocale",
    "clear_settings_cache",
    "load_settings",
    "parse_settings",
    "settings_path",
]
