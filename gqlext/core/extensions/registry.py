from __future__ import annotations

import hashlib
import logging
from threading import Lock
from typing import Any, List

from .contracts import SchemaExtensionHandler

_log = logging.getLogger("gqlext.extensions")


class SchemaExtensionRegistry:
    """
    Ordered, append-only collection of schema extension handlers.

    Handlers are returned in registration order. Invalid handlers (None or a
    blank name) are dropped without raising. Duplicate names are kept.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._handlers: List[SchemaExtensionHandler] = []

    def register(self, handler: Any) -> None:
        if handler is None:
            _log.debug("extensions.register skipped: handler is None")
            return

        name = getattr(handler, "name", None)
        if not isinstance(name, str) or not name.strip():
            _log.debug("extensions.register skipped: blank name on %s", type(handler).__name__)
            return

        with self._lock:
            self._handlers.append(handler)
            count = len(self._handlers)

        _log.debug("extensions.register name=%s count=%s", name, count)

    def list(self) -> List[SchemaExtensionHandler]:
        with self._lock:
            return list(self._handlers)

    def fingerprint(self) -> str:
        """
        Stable fingerprint for the registered handler sequence.

        Order-sensitive: the same names registered in a different order
        produce a different fingerprint.
        """
        h = hashlib.sha256()
        for handler in self.list():
            h.update(handler.name.encode("utf-8"))
            h.update(b"\0")
        return h.hexdigest()[:16]

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)


def default_registry() -> SchemaExtensionRegistry:
    """Fresh registry with the shipped handlers registered in order."""
    from gqlext.plugins.extensions import BUILTIN_HANDLERS

    reg = SchemaExtensionRegistry()
    for handler in BUILTIN_HANDLERS:
        reg.register(handler)
    return reg
