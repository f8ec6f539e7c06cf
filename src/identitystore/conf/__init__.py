from .defaults import COOKIE_DEFAULTS, DEFAULTS
from .loader import options_from_env, resolve_options
from .models import CookieOptions, LocalStorageOptions, UserOptions

__all__ = [
    "COOKIE_DEFAULTS",
    "CookieOptions",
    "DEFAULTS",
    "LocalStorageOptions",
    "UserOptions",
    "options_from_env",
    "resolve_options",
]
