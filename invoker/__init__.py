from ._version import __version__
from .config import InvokerSettings
from .engine import DispatchEngine
from .primitives import PRIMITIVE_EQUIVALENTS
from .registry import ComponentRegistry, ComponentResolver
from .signature import MethodHandle, SignatureKey
from .utils import (
    CoercionError,
    ComponentNotFoundError,
    ElementTypeMismatchError,
    InvalidArgumentError,
    InvokerError,
    MethodExecutionError,
    MethodNotFoundError,
    NotASequenceError,
    RegistryError,
    TypeMismatchError,
)

__all__ = [
    "DispatchEngine",
    "ComponentRegistry",
    "ComponentResolver",
    "InvokerSettings",
    "MethodHandle",
    "SignatureKey",
    "PRIMITIVE_EQUIVALENTS",
    "InvokerError",
    "InvalidArgumentError",
    "ComponentNotFoundError",
    "MethodNotFoundError",
    "MethodExecutionError",
    "CoercionError",
    "TypeMismatchError",
    "NotASequenceError",
    "ElementTypeMismatchError",
    "RegistryError",
    "__version__",
]
