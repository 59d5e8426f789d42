"""Host-wide key/value store shared between installer stages."""

from __future__ import annotations

import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)


class GlobalStorage:
    """Thread-safe key/value store written by one stage and read by later ones."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, Any] = {}

    def insert(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value
        logger.debug("GlobalStorage insert %s=%r", key, value)

    def value(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


_global_storage: GlobalStorage | None = None


def global_storage() -> GlobalStorage:
    """Return the process-wide storage, creating it on first use."""
    global _global_storage
    if _global_storage is None:
        _global_storage = GlobalStorage()
    return _global_storage
