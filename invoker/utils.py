"""Exceptions and naming helpers for the dispatch engine.

This module defines a small hierarchy of rich exceptions used by the engine,
the resolver, the result coercion helpers and the component registry.

Exceptions:
    InvokerError: Base class carrying `suggestions` and `context` metadata.
    InvalidArgumentError: Raised for malformed calls (blank names, bad identifiers).
    ComponentNotFoundError: Raised when the registry has no matching component.
    MethodNotFoundError: Raised when no candidate method matches the call.
    MethodExecutionError: Raised when the resolved method itself fails.
    CoercionError: Base for result coercion failures.
    TypeMismatchError: Raised when a scalar result has the wrong type.
    NotASequenceError: Raised when a list result is not a sequence.
    ElementTypeMismatchError: Raised when a list element has the wrong type.
    RegistryError: Raised when registry key errors occur.

Helpers:
    get_type_name(cls, qualname=False): Return a human-readable type name.
    describe_types(types): Render a tuple of argument types for messages.
"""

import logging
from inspect import isclass
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


class InvokerError(Exception):
    """Base exception for dispatch failures with structured context.

    Attributes:
        message: Human-readable error text.
        suggestions: List of short, imperative hints for remediation.
        context: Free-form key/value details safe to log and render.
    """

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.suggestions = suggestions or []
        self.context = context or {}
        super().__init__(self._build_enhanced_message())

    def _build_enhanced_message(self) -> str:
        """Embed key context and suggestions into the exception string."""
        lines = [self.message]

        if self.context:
            if "component" in self.context:
                lines.append(f"  Component: {self.context['component']}")
            if "method_name" in self.context:
                lines.append(f"  Method: {self.context['method_name']}")
            if "argument_types" in self.context:
                lines.append(f"  Arguments: ({self.context['argument_types']})")
            if "expected_type" in self.context and "actual_type" in self.context:
                lines.append(f"  Expected: {self.context['expected_type']}")
                lines.append(f"  Actual: {self.context['actual_type']}")

        if self.suggestions:
            lines.append("  Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"    • {suggestion}")

        return "\n".join(lines)


class InvalidArgumentError(InvokerError, ValueError):
    """Raised when a call is malformed, before any lookup takes place."""


class ComponentNotFoundError(InvokerError, LookupError):
    """Raised when the registry cannot resolve a component identifier."""


class MethodNotFoundError(InvokerError, LookupError):
    """Raised when no method on the component's hierarchy matches the call."""


class MethodExecutionError(InvokerError):
    """Raised when the resolved method raised during execution.

    The original exception is kept as `cause` and chained as `__cause__`.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException,
        suggestions: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.cause = cause
        super().__init__(message, suggestions, context)


class CoercionError(InvokerError, TypeError):
    """Raised when a result cannot be coerced into the requested type."""


class TypeMismatchError(CoercionError):
    """Raised when a scalar result is not an instance of the requested type."""


class NotASequenceError(CoercionError):
    """Raised when a list-typed call returns something that is not a sequence."""


class ElementTypeMismatchError(CoercionError):
    """Raised when an element of a list result has the wrong type."""

    def __init__(
        self,
        message: str,
        index: int,
        suggestions: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.index = index
        super().__init__(message, suggestions, context)


class RegistryError(InvokerError, LookupError):
    """Raised for key-related registry errors with rich context attached."""


def get_type_name(cls: Any, qualname: bool = False) -> str:
    """Return a readable name for a type.

    Args:
        cls: The class or type object. Tuples of classes are joined with ``|``.
        qualname: If True, return the module-qualified name when available.

    Returns:
        The type's qualified name, `__name__`, or a string fallback.
    """
    if isinstance(cls, tuple):
        return " | ".join(get_type_name(c, qualname) for c in cls)
    if not isclass(cls):
        return str(cls)
    if qualname and hasattr(cls, "__qualname__"):
        module = getattr(cls, "__module__", None)
        if module and module != "builtins":
            return f"{module}.{cls.__qualname__}"
        return cls.__qualname__
    return getattr(cls, "__name__", str(cls))


def describe_types(types: Iterable[Optional[type]]) -> str:
    """Render argument types as ``int, str, null`` for error messages."""
    return ", ".join("null" if tp is None else get_type_name(tp) for tp in types)


def describe_identifier(identifier: Any) -> str:
    """Render a component identifier (name or class) for messages."""
    if isclass(identifier):
        return get_type_name(identifier, qualname=True)
    return repr(identifier)
