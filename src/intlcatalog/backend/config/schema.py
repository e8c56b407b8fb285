"""Pydantic models describing the catalogue build and locale settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self

SOURCE_PLACEHOLDER = "{source}"
DESTINATION_PLACEHOLDER = "{destination}"
PYTHON_PLACEHOLDER = "{python}"


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class MessageDefinition(BaseModel):
    """Authored message entry as it appears in a source catalogue."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    default_message: str = Field(alias="defaultMessage")
    description: str | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, str):
            return value
        raise ConfigurationError("Message descriptions must be strings")


class SupportedLocale(ImmutableModel):
    """Entry offered by the locale selector."""

    code: str = Field(alias="locale")
    name: str

    @field_validator("code", mode="before")
    @classmethod
    def _normalise_code(cls, value: Any) -> str:
        return str(value).strip().lower()


class CompilerSettings(ImmutableModel):
    """Build-time settings for the batch catalogue compiler."""

    source_dir: str
    destination_dir: str
    command: Sequence[str]
    max_concurrency: int | None = None
    prune_orphans: bool = False

    @field_validator("command", mode="before")
    @classmethod
    def _coerce_command(cls, value: Any) -> Sequence[str]:
        if isinstance(value, str):
            return tuple(value.split())
        if isinstance(value, Sequence):
            return tuple(str(part) for part in value)
        raise ConfigurationError("Compiler command must be a string or a list of arguments")

    @model_validator(mode="after")
    def _validate_command(self) -> Self:
        if not self.command:
            raise ConfigurationError("Compiler command must not be empty")
        joined = " ".join(self.command)
        for placeholder in (SOURCE_PLACEHOLDER, DESTINATION_PLACEHOLDER):
            if placeholder not in joined:
                raise ConfigurationError(
                    f"Compiler command must reference the {placeholder} placeholder"
                )
        if self.max_concurrency is not None and self.max_concurrency <= 0:
            raise ConfigurationError("'max_concurrency' must be a positive integer")
        return self


class LocaleSettings(ImmutableModel):
    """Runtime locale table: selector entries and compiled catalogue loaders."""

    default_locale: str
    supported: Sequence[SupportedLocale] = Field(default_factory=tuple)
    loaders: Mapping[str, str]

    @field_validator("default_locale", mode="before")
    @classmethod
    def _normalise_default(cls, value: Any) -> str:
        return str(value).strip().lower()

    @field_validator("loaders", mode="before")
    @classmethod
    def _coerce_loaders(cls, value: Any) -> Mapping[str, str]:
        if not isinstance(value, Mapping):
            raise ConfigurationError("Locale loaders must be a mapping of locale to catalogue")
        return {str(key).strip().lower(): str(path) for key, path in value.items()}

    @model_validator(mode="after")
    def _validate_table(self) -> Self:
        if not self.default_locale:
            raise ConfigurationError("A default locale is required")
        if self.default_locale not in self.loaders:
            raise ConfigurationError(
                f"Default locale '{self.default_locale}' has no catalogue loader"
            )
        if any(not code for code in self.loaders):
            raise ConfigurationError("Locale loader keys must be non-empty")

        seen: set[str] = set()
        for entry in self.supported:
            if entry.code in seen:
                raise ConfigurationError(f"Duplicate supported locale '{entry.code}'")
            seen.add(entry.code)
        return self

    @computed_field
    @property
    def loader_locales(self) -> tuple[str, ...]:
        return tuple(sorted(self.loaders))


class Settings(ImmutableModel):
    """Top-level settings document."""

    root: Path
    compiler: CompilerSettings
    locales: LocaleSettings

    def resolve(self, value: str | Path) -> Path:
        """Resolve a configured path against the settings root."""

        path = Path(value)
        return path if path.is_absolute() else self.root / path

    @property
    def source_dir(self) -> Path:
        return self.resolve(self.compiler.source_dir)

    @property
    def destination_dir(self) -> Path:
        return self.resolve(self.compiler.destination_dir)

    def catalogue_path(self, locale: str) -> Path:
        """Return the compiled catalogue path registered for ``locale``."""

        return self.resolve(self.locales.loaders[locale])


__all__ = [
    "CompilerSettings",
    "ConfigurationError",
    "DESTINATION_PLACEHOLDER",
    "ImmutableModel",
    "LocaleSettings",
    "MessageDefinition",
    "PYTHON_PLACEHOLDER",
    "SOURCE_PLACEHOLDER",
    "Settings",
    "SupportedLocale",
]
