"""Built-in storage backends."""

from .base import CookieBackend, LocalBackend
from .file import JSONFileStore
from .memory import MemoryCookieJar, MemoryStore

__all__ = [
    "CookieBackend",
    "JSONFileStore",
    "LocalBackend",
    "MemoryCookieJar",
    "MemoryStore",
]
