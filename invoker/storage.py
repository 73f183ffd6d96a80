r"""Thread-safe local storage and the method cache built on it."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, Generic, Hashable, Iterator, List, MutableMapping, Optional, TypeVar

from .signature import MethodHandle, SignatureKey

logger = logging.getLogger(__name__)

__all__ = ["MethodCache", "ThreadSafeLocalStorage"]

KeyType = TypeVar("KeyType", bound=Hashable)
ValType = TypeVar("ValType")


class ThreadSafeLocalStorage(
    MutableMapping[KeyType, ValType], Generic[KeyType, ValType]
):
    """Thread-safe local storage; every access holds one re-entrant lock."""

    def __init__(self):
        self._storage: Dict[KeyType, ValType] = {}
        self._lock = RLock()

    def __getitem__(self, key: KeyType) -> ValType:
        with self._lock:
            return self._storage[key]

    def __setitem__(self, key: KeyType, value: ValType) -> None:
        with self._lock:
            self._storage[key] = value

    def __delitem__(self, key: KeyType) -> None:
        with self._lock:
            del self._storage[key]

    def __iter__(self) -> Iterator[KeyType]:
        with self._lock:
            return iter(list(self._storage.keys()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._storage

    def get(self, key: KeyType, default: Optional[ValType] = None) -> Optional[ValType]:
        with self._lock:
            return self._storage.get(key, default)

    def put_if_absent(self, key: KeyType, value: ValType) -> ValType:
        """Insert `value` unless `key` is present; return the stored value."""
        with self._lock:
            return self._storage.setdefault(key, value)

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def keys(self) -> List[KeyType]:  # type: ignore[override]
        with self._lock:
            return list(self._storage.keys())

    def values(self) -> List[ValType]:  # type: ignore[override]
        with self._lock:
            return list(self._storage.values())

    def items(self) -> List[tuple]:  # type: ignore[override]
        with self._lock:
            return list(self._storage.items())


class MethodCache(ThreadSafeLocalStorage[SignatureKey, MethodHandle]):
    """Signature key -> resolved method handle.

    Entries are only inserted or bulk-cleared. Insertion keeps the first
    writer's handle, so callers that race on a miss all receive the same
    handle until the next `clear`.
    """

    def lookup(self, key: SignatureKey) -> Optional[MethodHandle]:
        handle = self.get(key)
        if logger.isEnabledFor(logging.DEBUG):
            if handle is None:
                logger.debug("Cache miss for %s", key)
            else:
                logger.debug("Cache hit for %s", key)
        return handle

    def store(self, key: SignatureKey, handle: MethodHandle) -> MethodHandle:
        stored = self.put_if_absent(key, handle)
        if logger.isEnabledFor(logging.DEBUG):
            if stored is handle:
                logger.debug("Cached %s -> %s", key, handle.describe())
            else:
                logger.debug("Cache already held %s, keeping first entry", key)
        return stored

    def clear(self) -> None:
        super().clear()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Method cache cleared")
