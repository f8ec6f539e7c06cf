"""JSON-file backed structured store, durable across processes."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from identitystore.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


class JSONFileStore:
    """
    Structured key/value store persisted as a single JSON document.

    Usage:
        store = JSONFileStore(Path("./state/identity.json"))
        store.set("ajs_user_traits", {"plan": "pro"})

    Every call re-reads the document, so two stores pointing at the same path
    see each other's writes (last writer wins). A document that cannot be
    decoded is treated as empty.
    """

    name = "json-file"

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise BackendUnavailableError(f"cannot read {self.path}: {exc}") from exc

        try:
            data = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            logger.warning("Ignoring undecodable store document at %s", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring non-object store document at %s", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            document = json.dumps(data)
        except (TypeError, ValueError) as exc:
            raise BackendUnavailableError(f"cannot encode store document: {exc}") from exc

        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(document, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise BackendUnavailableError(f"cannot write {self.path}: {exc}") from exc

    def get(self, key: str) -> Any | None:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


__all__ = ["JSONFileStore"]
