"""Runtime locale resolution, catalogue loading and the application context."""

from .context import IntlContext, LoadState, LocaleBundle, detect_ambient_locale
from .loader import load_locale_data, normalise_locale, read_compiled_catalogue, resolve_locale

__all__ = [
    "IntlContext",
    "LoadState",
    "LocaleBundle",
    "detect_ambient_locale",
    "load_locale_data",
    "normalise_locale",
    "read_compiled_catalogue",
    "resolve_locale",
]
