"""Storage backend protocols consumed by :class:`identitystore.user.User`."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CookieBackend(Protocol):
    """Cookie-like string storage.

    Implementations raise :class:`~identitystore.exceptions.BackendUnavailableError`
    when the underlying jar cannot be used.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: Any, **opts: Any) -> None: ...

    def remove(self, key: str) -> None: ...


@runtime_checkable
class LocalBackend(Protocol):
    """Structured (JSON-like) key/value storage."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


__all__ = ["CookieBackend", "LocalBackend"]
