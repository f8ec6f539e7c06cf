"""
identitystore — persistent user identity for analytics clients.

Keeps a user id and a trait mapping stable across page loads using two
storage backends: a cookie jar for the id and a structured local store for the
traits.

Import Guidelines:
------------------
- Use `identitystore.User` for identity operations; `User.from_env()` builds a
  fresh instance configured from `IDENTITYSTORE_*` variables.
- Use `identitystore.backends` for the built-in cookie/local backends or to implement your own.
- Use `identitystore.conf` for option defaults and environment loading.
- Use `identitystore.exceptions` for standardized error handling.
"""

from importlib.metadata import PackageNotFoundError, version

from .backends import CookieBackend, JSONFileStore, LocalBackend, MemoryCookieJar, MemoryStore
from .conf import UserOptions, options_from_env
from .user import User

try:
    __version__ = version("identitystore")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"

__all__ = [
    "CookieBackend",
    "JSONFileStore",
    "LocalBackend",
    "MemoryCookieJar",
    "MemoryStore",
    "User",
    "UserOptions",
    "options_from_env",
]
