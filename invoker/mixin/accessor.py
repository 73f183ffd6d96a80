r"""Read-only registry mixin with rich error context.

This module implements `RegistryAccessorMixin`, an abstract, read-focused
interface over a mapping of component names to component instances. It
provides consistent error reporting and context when lookups fail.

Key points:
  - Subclasses must implement `_get_mapping()` to return the backing mapping.
  - Presence checks and retrieval raise `RegistryError` with suggestions.
  - No mutation APIs are exposed here; see `RegistryMutatorMixin` for writes.
"""

from __future__ import annotations

from typing import Generic, Hashable, Iterator, List, MutableMapping, TypeVar

from ..utils import RegistryError, get_type_name

__all__ = [
    "RegistryAccessorMixin",
]


# -----------------------------------------------------------------------------
# Type Variables
# -----------------------------------------------------------------------------

KeyType = TypeVar("KeyType", bound=Hashable)
ValType = TypeVar("ValType")


# -----------------------------------------------------------------------------
# Base Mixin for Accessing Registry Items
# -----------------------------------------------------------------------------


class RegistryAccessorMixin(Generic[KeyType, ValType]):
    """Abstract accessor over a registry mapping.

    Subclasses must provide a concrete storage via `_get_mapping()`.

    Error semantics:
        Missing keys are reported via `RegistryError` with
        a suggestions list and context payload suitable for logs.
    """

    @classmethod
    def _get_mapping(cls) -> MutableMapping[KeyType, ValType]:
        """Return the underlying mapping for this registry."""
        raise NotImplementedError(
            f"Subclasses must implement `{cls.__name__}._get_mapping` method."
        )

    @classmethod
    def _iter_mapping(cls) -> Iterator[KeyType]:
        """Iterate over all names in the registry."""
        return iter(cls._get_mapping())

    # -----------------------------------------------------------------------------
    # Getter Functions for Registry Contents
    # -----------------------------------------------------------------------------

    @classmethod
    def _get_artifact(cls, key: KeyType) -> ValType:
        """Return the component registered under `key`, or raise.

        Raises:
            RegistryError: if `key` is not present.
        """
        mapping = cls._get_mapping()
        try:
            return mapping[key]
        except KeyError:
            cls._raise_missing(key)
            raise

    @classmethod
    def _has_identifier(cls, key: KeyType) -> bool:
        """Return True if `key` exists in the registry."""
        return key in cls._get_mapping()

    @classmethod
    def _find_artifacts(cls, expected_type: type) -> List[ValType]:
        """Return every component that is an instance of `expected_type`."""
        return [
            item for item in cls._get_mapping().values() if isinstance(item, expected_type)
        ]

    # -----------------------------------------------------------------------------
    # Helper Functions
    # -----------------------------------------------------------------------------

    @classmethod
    def _raise_missing(cls, key: KeyType) -> None:
        """Raise `RegistryError` describing the missing `key`."""
        mapping = cls._get_mapping()
        keys = list(mapping.keys())
        suggestions = [
            f"Key '{key}' not found in {getattr(cls, '__name__', 'registry')}",
            "Check that the component was registered under this name",
            "Use resolve() to look components up without raising",
            f"Registry contains {len(keys)} items",
        ]
        context = {
            "operation": "assert_presence",
            "registry_name": getattr(cls, "__name__", "Unknown"),
            "registry_type": get_type_name(cls),
            "key": str(key),
            "key_type": type(key).__name__,
            "registry_size": len(keys),
            "available_keys": (
                keys if len(keys) <= 10 else f"{keys[:10]}. ({len(keys)} total)"
            ),
        }
        raise RegistryError(
            f"Key '{key}' is not found in the mapping", suggestions, context
        )
