"""Application context owning the active locale and its message mapping."""

from __future__ import annotations

import asyncio
import locale as _platform_locale
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Sequence

from intlcatalog.backend.config.schema import Settings, SupportedLocale
from intlcatalog.backend.config.settings import load_settings
from intlcatalog.backend.errors import (
    LoadSupersededError,
    MessageFormatError,
    MessageSyntaxError,
)
from intlcatalog.backend.services.messageformat import format_message as render_message

from .loader import load_locale_data, normalise_locale, resolve_locale

logger = logging.getLogger(__name__)

_AMBIENT_ENV_KEYS = ("LC_ALL", "LC_MESSAGES", "LANG", "LANGUAGE")

Loader = Callable[..., Awaitable[Mapping[str, Any]]]


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LocaleBundle:
    """What the rendering layer receives after a successful load."""

    locale: str
    requested: str
    messages: Mapping[str, Any]


Subscriber = Callable[[LocaleBundle], None]


def detect_ambient_locale() -> str:
    """Return the platform's preferred locale tag, or an empty string."""

    for key in _AMBIENT_ENV_KEYS:
        raw = (os.environ.get(key) or "").strip()
        if not raw:
            continue
        # LANGUAGE holds a colon-separated preference list; LANG carries an encoding suffix.
        candidate = raw.split(":", 1)[0].split(".", 1)[0]
        if candidate and candidate not in {"C", "POSIX"}:
            return candidate

    platform_tag, _ = _platform_locale.getlocale()
    return platform_tag or ""


class IntlContext:
    """Holds the current locale and mapping and performs locale transitions.

    Each :meth:`set_locale` call supersedes any load still in flight: the
    earlier load is cancelled and its caller receives
    :class:`LoadSupersededError`, so the last *requested* locale always wins.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        loader: Loader = load_locale_data,
    ) -> None:
        self._settings = settings or load_settings()
        self._loader = loader
        self._state = LoadState.IDLE
        self._bundle: LocaleBundle | None = None
        self._error: BaseException | None = None
        self._pending: asyncio.Future[Mapping[str, Any]] | None = None
        self._subscribers: list[Subscriber] = []

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def bundle(self) -> LocaleBundle | None:
        return self._bundle

    @property
    def locale(self) -> str:
        if self._bundle is None:
            return self.default_locale
        return self._bundle.locale

    @property
    def messages(self) -> Mapping[str, Any]:
        if self._bundle is None:
            return {}
        return self._bundle.messages

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def default_locale(self) -> str:
        return self._settings.locales.default_locale

    @property
    def supported_locales(self) -> Sequence[SupportedLocale]:
        return self._settings.locales.supported

    def subscribe(self, callback: Subscriber) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        self._subscribers = [cb for cb in self._subscribers if cb is not callback]

    def _notify(self, bundle: LocaleBundle) -> None:
        for callback in list(self._subscribers):
            try:
                callback(bundle)
            except Exception:
                logger.exception("Locale subscriber %r failed", callback)

    def _settled_state(self) -> LoadState:
        if self._error is not None:
            return LoadState.FAILED
        return LoadState.READY if self._bundle else LoadState.IDLE

    async def bootstrap(self, ambient: str | None = None) -> LocaleBundle:
        """Load the catalogue for the ambient platform locale."""

        tag = detect_ambient_locale() if ambient is None else ambient
        logger.debug("Bootstrapping with ambient locale %r", tag)
        return await self.set_locale(tag)

    async def set_locale(self, tag: str | None) -> LocaleBundle:
        """Load and apply the catalogue for ``tag``."""

        requested = normalise_locale(tag)
        previous = self._pending
        if previous is not None and not previous.done():
            logger.debug("Cancelling superseded catalogue load")
            previous.cancel()

        task = asyncio.ensure_future(self._loader(requested, settings=self._settings))
        self._pending = task
        self._state = LoadState.LOADING

        try:
            messages = await task
        except asyncio.CancelledError:
            if self._pending is not task:
                raise LoadSupersededError(requested) from None
            # The caller itself was cancelled.
            self._pending = None
            self._state = self._settled_state()
            raise
        except Exception as exc:
            if self._pending is task:
                self._pending = None
                self._state = LoadState.FAILED
                self._error = exc
            raise

        if self._pending is not task:
            raise LoadSupersededError(requested)

        bundle = LocaleBundle(
            locale=resolve_locale(requested, self._settings),
            requested=requested,
            messages=messages,
        )
        self._pending = None
        self._bundle = bundle
        self._error = None
        self._state = LoadState.READY
        self._notify(bundle)
        return bundle

    def format_message(
        self,
        message_id: str,
        default_message: str | None = None,
        description: str | None = None,
        values: Mapping[str, Any] | None = None,
    ) -> str:
        """Render a message for the active locale, substituting ``values``.

        Falls back to ``default_message`` (rendered with the default locale)
        and finally to the id itself when the catalogue lacks the message.
        """

        message = self.messages.get(message_id)
        locale = self.locale
        if message is None:
            if default_message is None:
                logger.warning("Missing message %r for locale %r", message_id, locale)
                return message_id
            message = default_message
            locale = self.default_locale

        try:
            return render_message(message, values, locale=locale)
        except (MessageFormatError, MessageSyntaxError) as exc:
            logger.error("Unable to format message %r (%s): %s", message_id, description, exc)
            return default_message or message_id


__all__ = [
    "IntlContext",
    "LoadState",
    "LocaleBundle",
    "detect_ambient_locale",
]
