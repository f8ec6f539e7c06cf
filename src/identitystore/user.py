# identitystore/user.py
"""
The identity store: a user id plus a trait mapping, persisted across page
loads through a cookie backend (id) and a local backend (traits).

With ``persist`` enabled the backends are the source of truth and every read
goes to them. With ``persist`` disabled the id and traits live only on the
instance (``_id``/``_traits``). Only :meth:`User.load` reads the backends in
that mode, and :meth:`User.logout` always clears everything.

Storage failures never escape: a backend that raises
:class:`~identitystore.exceptions.BackendUnavailableError` reads as empty and
drops writes.
"""
from __future__ import annotations

import copy
import json
import logging
from typing import Any, Mapping

from .backends import CookieBackend, LocalBackend, MemoryCookieJar, MemoryStore
from .conf import UserOptions, options_from_env, resolve_options
from .exceptions import BackendUnavailableError, MalformedLegacyDataError, OptionsError

logger = logging.getLogger(__name__)

__all__ = ["User", "parse_legacy_cookie"]

_UNSET: Any = object()


def parse_legacy_cookie(raw: Any) -> tuple[str | None, dict[str, Any]]:
    """Decode the legacy combined cookie into ``(id, traits)``.

    The legacy record is ``{"id": ..., "traits": {...}}``, stored as JSON text
    (some jars hand it back already decoded).

    :raises MalformedLegacyDataError: if the value is not such a record.
    """
    data = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedLegacyDataError(f"legacy cookie is not JSON: {raw!r}") from exc

    if not isinstance(data, Mapping):
        raise MalformedLegacyDataError(f"legacy cookie is not an object: {data!r}")

    user_id = data.get("id")
    if user_id is not None and not isinstance(user_id, str):
        raise MalformedLegacyDataError(f"legacy cookie id must be a string (got {type(user_id)!r})")

    traits = data.get("traits") or {}
    if not isinstance(traits, Mapping):
        raise MalformedLegacyDataError(f"legacy cookie traits must be an object (got {type(traits)!r})")

    return user_id, dict(traits)


class User:
    """
    Persistent user identity.

    Usage:
        user = User(cookie=MemoryCookieJar(), local=MemoryStore())
        user.identify("user-1", {"plan": "pro"})
        user.id()      # "user-1"
        user.traits()  # {"plan": "pro"}
    """

    def __init__(
        self,
        options: Mapping[str, Any] | UserOptions | None = None,
        *,
        cookie: CookieBackend | None = None,
        local: LocalBackend | None = None,
    ) -> None:
        self.cookie: CookieBackend = cookie if cookie is not None else MemoryCookieJar()
        self.local: LocalBackend = local if local is not None else MemoryStore()
        self._options: UserOptions = self._resolve(options, fallback=resolve_options())
        self._id: str | None = None
        self._traits: dict[str, Any] = {}

    @classmethod
    def from_env(
        cls,
        namespace: str = "IDENTITYSTORE",
        *,
        cookie: CookieBackend | None = None,
        local: LocalBackend | None = None,
    ) -> "User":
        """Build a fresh user configured from ``{namespace}_*`` environment variables."""
        return cls(options_from_env(namespace), cookie=cookie, local=local)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"User(id={self.id()!r}, persist={self._options.persist})"

    # ------------------- Backend access -------------------
    def _read(self, backend: Any, key: str) -> Any | None:
        try:
            return backend.get(key)
        except BackendUnavailableError as exc:
            logger.warning("Reading %r failed; treating as absent: %s", key, exc)
            return None

    def _write(self, backend: Any, key: str, value: Any) -> None:
        try:
            if value is None:
                backend.remove(key)
            else:
                backend.set(key, value)
        except BackendUnavailableError as exc:
            logger.warning("Writing %r failed; dropping value: %s", key, exc)

    @staticmethod
    def _normalize_traits(traits: Any) -> dict[str, Any]:
        if traits is None:
            return {}
        if not isinstance(traits, Mapping):
            logger.warning("Ignoring non-mapping traits of type %s", type(traits).__name__)
            return {}
        return copy.deepcopy(dict(traits))

    @staticmethod
    def _resolve(opts: Any, *, fallback: UserOptions) -> UserOptions:
        try:
            return resolve_options(opts)
        except OptionsError as exc:
            logger.warning("Ignoring invalid options; keeping previous ones: %s", exc)
            return fallback

    # ------------------- Configuration -------------------
    def options(self, opts: Mapping[str, Any] | UserOptions | None = None) -> UserOptions:
        """Get the current options, or replace them with ``opts`` merged over the defaults.

        Options that fail validation are logged and ignored.
        """
        if opts is None:
            return self._options
        self._options = self._resolve(opts, fallback=self._options)
        return self._options

    # ------------------- Identity -------------------
    def id(self, new_id: str | None = _UNSET) -> str | None:
        """Get the user id, or set it when ``new_id`` is passed (``None`` clears it)."""
        persist = self._options.persist
        key = self._options.cookie.key

        if new_id is _UNSET:
            return self._read(self.cookie, key) if persist else self._id

        if persist:
            self._write(self.cookie, key, new_id)
        else:
            self._id = new_id
        return new_id

    def traits(self, new_traits: Mapping[str, Any] | None = _UNSET) -> dict[str, Any]:
        """Get a copy of the traits, or replace them when ``new_traits`` is passed."""
        persist = self._options.persist
        key = self._options.local_storage.key

        if new_traits is _UNSET:
            if not persist:
                return copy.deepcopy(self._traits)
            stored = self._read(self.local, key)
            if not isinstance(stored, Mapping):
                return {}
            return copy.deepcopy(dict(stored))

        traits = self._normalize_traits(new_traits)
        if persist:
            self._write(self.local, key, traits)
        else:
            self._traits = traits
        return copy.deepcopy(traits)

    def identify(self, new_id: str | None = None, new_traits: Mapping[str, Any] | None = None) -> None:
        """
        Update the id and traits together.

        Traits are merged into the existing ones (new keys win) unless a
        different id replaces a known one, in which case the new traits
        replace the old profile entirely. An anonymous user (no id yet) keeps
        their traits when identified.
        """
        traits = self._normalize_traits(new_traits)
        current = self.id()

        if new_id is None or current is None or current == new_id:
            traits = {**self.traits(), **traits}

        if new_id is not None:
            self.id(new_id)

        logger.debug("identify %r, %r", new_id, traits)
        self.traits(traits)
        self.save()

    # ------------------- Persistence -------------------
    def save(self) -> bool:
        """Flush the id and traits to the backends. Returns False when not persisting."""
        if not self._options.persist:
            return False
        self._write(self.cookie, self._options.cookie.key, self.id())
        self._write(self.local, self._options.local_storage.key, self.traits())
        return True

    def _read_legacy(self) -> tuple[str | None, dict[str, Any]] | None:
        old_key = self._options.cookie.old_key
        raw = self._read(self.cookie, old_key)
        if raw is None:
            return None
        try:
            return parse_legacy_cookie(raw)
        except MalformedLegacyDataError as exc:
            logger.warning("Skipping legacy cookie %r: %s", old_key, exc)
            return None

    def load(self) -> None:
        """Pull durable state into the active representation.

        When the id cookie is missing, the legacy combined cookie is migrated
        (and left in place). Otherwise, with ``persist`` enabled the backends
        already are the active state; without it, the cookie and local values
        are copied into memory.
        """
        user_id = self._read(self.cookie, self._options.cookie.key)

        if user_id is None:
            legacy = self._read_legacy()
            if legacy is not None:
                logger.debug("load legacy cookie %r: %r", self._options.cookie.old_key, legacy)
                self.id(legacy[0])
                self.traits(legacy[1])
                return

        if self._options.persist:
            return

        stored = self._read(self.local, self._options.local_storage.key)
        self.id(user_id)
        self.traits(stored if isinstance(stored, Mapping) else None)

    def logout(self) -> None:
        """Forget the user everywhere, whatever the ``persist`` setting."""
        self._id = None
        self._traits = {}
        self._write(self.cookie, self._options.cookie.key, None)
        self._write(self.local, self._options.local_storage.key, None)
        logger.debug("logout")

    def reset(self) -> None:
        """Restore default options and clear in-memory state. Backends are not touched."""
        self._options = resolve_options()
        self._id = None
        self._traits = {}
