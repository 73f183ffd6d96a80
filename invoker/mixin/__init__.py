"""Public API for the registry mixins package.

Exports:
    RegistryAccessorMixin: read-only registry interface.
    RegistryMutatorMixin: write-side extensions over accessor.
"""

from .accessor import RegistryAccessorMixin
from .mutator import RegistryMutatorMixin

__all__ = [
    "RegistryAccessorMixin",
    "RegistryMutatorMixin",
]
