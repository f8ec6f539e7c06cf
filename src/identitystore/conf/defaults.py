"""Default configuration values for identitystore."""

DEFAULTS: dict[str, object] = {
    "persist": True,
    "cookie": {
        "key": "ajs_user_id",
        "oldKey": "ajs_user",
    },
    "localStorage": {
        "key": "ajs_user_traits",
    },
}

# Cookie attributes applied by MemoryCookieJar when the caller passes none.
COOKIE_DEFAULTS: dict[str, object] = {
    "maxage": 31_536_000_000,  # one year, in milliseconds
    "path": "/",
    "domain": None,
}
