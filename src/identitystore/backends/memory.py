"""In-process cookie jar and structured store."""

from __future__ import annotations

import copy
import json
import time
from dataclasses import dataclass
from typing import Any, Callable

from identitystore.conf.defaults import COOKIE_DEFAULTS
from identitystore.exceptions import BackendUnavailableError


@dataclass(frozen=True, slots=True)
class _Cookie:
    value: str
    path: str | None
    domain: str | None
    expires_at: float | None

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class MemoryCookieJar:
    """
    Cookie jar kept in process memory.

    Values are stored as strings; anything else is JSON-encoded on ``set``,
    the way browser cookie helpers serialize objects. Setting ``None`` removes
    the cookie.

    Cookie attributes (``maxage`` in milliseconds, ``path``, ``domain``) come
    from :meth:`options` and may be overridden per ``set`` call. Expired
    cookies read as absent. The jar models a single origin: ``path`` and
    ``domain`` are recorded for :meth:`attributes` but do not take part in
    lookups.
    """

    name = "memory-cookie"

    def __init__(self, *, clock: Callable[[], float] = time.time, **opts: Any) -> None:
        self._clock = clock
        self._cookies: dict[str, _Cookie] = {}
        self._options: dict[str, Any] = dict(COOKIE_DEFAULTS)
        self.enabled = True
        if opts:
            self.options(opts)

    def options(self, opts: dict[str, Any] | None = None) -> dict[str, Any]:
        if opts is None:
            return self._options
        self._options = {**COOKIE_DEFAULTS, **opts}
        return self._options

    def _check(self) -> None:
        if not self.enabled:
            raise BackendUnavailableError("cookies are disabled")

    def get(self, key: str) -> str | None:
        self._check()
        cookie = self._cookies.get(key)
        if cookie is None:
            return None
        if cookie.expired(self._clock()):
            del self._cookies[key]
            return None
        return cookie.value

    def set(self, key: str, value: Any, **opts: Any) -> None:
        self._check()
        if value is None:
            self._cookies.pop(key, None)
            return

        attrs = {**self._options, **opts}
        maxage = attrs.get("maxage")
        expires_at = self._clock() + maxage / 1000 if maxage is not None else None
        if not isinstance(value, str):
            try:
                value = json.dumps(value)
            except (TypeError, ValueError) as exc:
                raise BackendUnavailableError(f"cannot encode cookie {key!r}: {exc}") from exc

        self._cookies[key] = _Cookie(
            value=value,
            path=attrs.get("path"),
            domain=attrs.get("domain"),
            expires_at=expires_at,
        )

    def remove(self, key: str) -> None:
        self._check()
        self._cookies.pop(key, None)

    def attributes(self, key: str) -> dict[str, Any] | None:
        """Return ``path``/``domain``/``expires_at`` of a stored cookie."""
        cookie = self._cookies.get(key)
        if cookie is None:
            return None
        return {"path": cookie.path, "domain": cookie.domain, "expires_at": cookie.expires_at}

    def clear(self) -> None:
        self._cookies.clear()


class MemoryStore:
    """Structured key/value store kept in process memory.

    Values are deep-copied on the way in and out so callers never share
    references with the store.
    """

    name = "memory-local"

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self.enabled = True

    def _check(self) -> None:
        if not self.enabled:
            raise BackendUnavailableError("local storage is disabled")

    def get(self, key: str) -> Any | None:
        self._check()
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._check()
        if value is None:
            self._data.pop(key, None)
            return
        self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._check()
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


__all__ = ["MemoryCookieJar", "MemoryStore"]
