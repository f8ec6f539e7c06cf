# identitystore/conf/loader.py

import copy
import logging
import os
from typing import Any, Mapping

from pydantic import ValidationError

from identitystore.exceptions import OptionsError

from .defaults import DEFAULTS
from .models import UserOptions

logger = logging.getLogger(__name__)

# python name -> wire alias, per nesting level
_TOP_LEVEL_ALIASES = {"local_storage": "localStorage"}
_NESTED_ALIASES = {"cookie": {"old_key": "oldKey"}}

# env suffix -> (section, key)
_ENV_KEYS: dict[str, tuple[str | None, str]] = {
    "PERSIST": (None, "persist"),
    "COOKIE_KEY": ("cookie", "key"),
    "COOKIE_OLD_KEY": ("cookie", "oldKey"),
    "LOCAL_STORAGE_KEY": ("localStorage", "key"),
}


def _deep_merge(a: dict[str, Any], b: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge b into a (recursive for dicts). Returns a (mutated).
    """
    for k, v in b.items():
        if isinstance(v, Mapping) and isinstance(a.get(k), dict):
            _deep_merge(a[k], v)
        else:
            a[k] = v
    return a


def _normalize_aliases(opts: Mapping[str, Any]) -> dict[str, Any]:
    """Rename python-style keys to their alias so the merge lines them up with DEFAULTS."""
    out: dict[str, Any] = {}
    for key, value in opts.items():
        key = _TOP_LEVEL_ALIASES.get(key, key)
        nested = _NESTED_ALIASES.get(key)
        if nested and isinstance(value, Mapping):
            value = {nested.get(k, k): v for k, v in value.items()}
        out[key] = value
    return out


def resolve_options(opts: Mapping[str, Any] | UserOptions | None = None) -> UserOptions:
    """Deep-merge ``opts`` over :data:`DEFAULTS` and validate the result.

    Defaults are always the base, so repeated calls do not accumulate earlier
    overrides.

    :raises OptionsError: if the merged options do not validate.
    """
    if isinstance(opts, UserOptions):
        opts = opts.as_dict()

    merged = copy.deepcopy(DEFAULTS)
    if opts:
        _deep_merge(merged, _normalize_aliases(copy.deepcopy(dict(opts))))

    try:
        return UserOptions.model_validate(merged)
    except ValidationError as exc:
        raise OptionsError(f"Invalid user options: {exc}") from exc


def options_from_env(namespace: str = "IDENTITYSTORE") -> dict[str, Any]:
    """
    Minimal env support:
      IDENTITYSTORE_PERSIST=false
      IDENTITYSTORE_COOKIE_KEY=my_user_id

    Returns a partial mapping suitable for ``User.options(...)``; values are
    left as strings and coerced by :class:`UserOptions`.
    """
    ns = namespace.upper()
    out: dict[str, Any] = {}
    for suffix, (section, key) in _ENV_KEYS.items():
        value = os.environ.get(f"{ns}_{suffix}")
        if value is None:
            continue
        if section is None:
            out[key] = value
        else:
            out.setdefault(section, {})[key] = value
    if out:
        logger.debug("options from env %s_*: %r", ns, out)
    return out
