r"""Mutable registry mixin with rich error context.

This module adds write operations on top of the read-only accessor mixin.

Behavior:
  - `_set_artifact` inserts a single component, refusing duplicate names.
  - `_del_artifact` removes a component, refusing unknown names.
  - `_clear_mapping` empties the registry.
"""

from __future__ import annotations

from typing import Hashable, TypeVar

from ..utils import RegistryError, get_type_name
from .accessor import RegistryAccessorMixin

__all__ = [
    "RegistryMutatorMixin",
]


KeyType = TypeVar("KeyType", bound=Hashable)
ValType = TypeVar("ValType")


class RegistryMutatorMixin(RegistryAccessorMixin[KeyType, ValType]):
    """Write-side extensions for a registry.

    Error semantics:
        Presence/absence checks raise `RegistryError` with rich context.
    """

    @classmethod
    def _clear_mapping(cls) -> None:
        """Clear all entries from the underlying mapping."""
        cls._get_mapping().clear()

    @classmethod
    def _set_artifact(cls, key: KeyType, item: ValType) -> None:
        """Insert `item` under `key`.

        Raises:
            RegistryError: if `key` is already present.
        """
        stored = cls._get_mapping().put_if_absent(key, item)
        if stored is not item:
            cls._raise_duplicate(key)

    @classmethod
    def _del_artifact(cls, key: KeyType) -> None:
        """Delete the entry under `key`.

        Raises:
            RegistryError: if `key` is not present.
        """
        try:
            del cls._get_mapping()[key]
        except KeyError:
            cls._raise_missing(key)
            raise

    @classmethod
    def _raise_duplicate(cls, key: KeyType) -> None:
        """Raise `RegistryError` describing the conflicting `key`."""
        mapping = cls._get_mapping()
        suggestions = [
            f"Key '{key}' already exists in {getattr(cls, '__name__', 'registry')}",
            "Use a different component name",
            "Remove the existing entry first with unregister_component()",
        ]
        context = {
            "operation": "assert_absence",
            "registry_name": getattr(cls, "__name__", "Unknown"),
            "registry_type": get_type_name(cls),
            "key": str(key),
            "key_type": get_type_name(type(key)),
            "registry_size": len(mapping),
            "conflicting_key": str(key),
        }
        raise RegistryError(
            f"Key '{key}' is already found in the mapping", suggestions, context
        )
