# identitystore/exceptions.py
"""Exception hierarchy for identitystore.

Storage failures are absorbed by :class:`identitystore.user.User` so that the
tracking pipeline keeps running; configuration errors propagate.
"""


class IdentityStoreError(Exception):
    """Base for all identitystore exceptions."""


# ----------------------------------------------------------------------------
# Storage errors
# ----------------------------------------------------------------------------
class BackendUnavailableError(IdentityStoreError):
    """Raised when a cookie or local backend cannot be accessed."""


class MalformedLegacyDataError(IdentityStoreError):
    """Raised when the legacy combined cookie cannot be parsed."""


# ----------------------------------------------------------------------------
# Configuration errors
# ----------------------------------------------------------------------------
class OptionsError(IdentityStoreError, ValueError):
    """Raised when user options fail validation."""
