r"""Dispatch engine: invoke a registered component's method by name.

Usage::

    engine = DispatchEngine(AppComponents)

    engine.invoke("user_service", "get_user", 42)
    engine.invoke_typed(UserService, "get_user", User, 42)
    engine.invoke_list("user_service", "list_users", User)

Every call runs synchronously on the caller's thread: validate the
identifier and method name, resolve the component through the injected
registry, resolve the best matching method (cached per call shape), invoke
it, then optionally coerce the result.
"""

import logging
from inspect import isclass
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar, Union

from .coercion import cast_list, cast_return
from .config import InvokerSettings
from .registry import ComponentResolver
from .resolver import find_best_match
from .signature import MethodHandle, SignatureKey
from .storage import MethodCache
from .utils import (
    ComponentNotFoundError,
    InvalidArgumentError,
    MethodExecutionError,
    MethodNotFoundError,
    describe_identifier,
    describe_types,
    get_type_name,
)

logger = logging.getLogger(__name__)

__all__ = ["DispatchEngine"]

T = TypeVar("T")
Identifier = Union[str, type]


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _validate_identifier(identifier: Any) -> None:
    if isclass(identifier) or _has_text(identifier):
        return
    if isinstance(identifier, str):
        message = "Component name must not be empty"
    elif identifier is None:
        message = "Component identifier must not be None"
    else:
        message = (
            "Component identifier must be a name or a class, "
            f"got {type(identifier).__name__}"
        )
    raise InvalidArgumentError(
        message,
        ["Pass the registered component name or its class"],
        {"component": repr(identifier)},
    )


def _validate_method_name(method_name: Any) -> None:
    if _has_text(method_name):
        return
    raise InvalidArgumentError(
        "Method name must not be empty",
        ["Pass the name of a method defined on the component"],
        {"method_name": repr(method_name)},
    )


def _validate_expected_type(expected: Any, argument: str) -> None:
    if expected is None:
        raise InvalidArgumentError(
            f"{argument} must not be None",
            ["Pass a class such as str, or a typing construct such as List[int]"],
            {"expected_type": "class", "actual_type": "None"},
        )


class DispatchEngine:
    """Resolves and invokes component methods by name, with a method cache.

    Args:
        registry: Maps names and classes to component instances. The engine
            never owns the components it receives.
        settings: Engine settings; defaults to `InvokerSettings()` which reads
            ``INVOKER_*`` environment variables.
    """

    def __init__(
        self,
        registry: ComponentResolver,
        settings: Optional[InvokerSettings] = None,
    ):
        if registry is None or not callable(getattr(registry, "resolve", None)):
            raise InvalidArgumentError(
                "registry must provide a resolve(identifier) method",
                ["Pass a ComponentRegistry subclass or any object with resolve()"],
                {"actual_type": type(registry).__name__, "expected_type": "ComponentResolver"},
            )
        self._registry = registry
        self._settings = settings if settings is not None else InvokerSettings()
        self._cache = MethodCache()

    @property
    def registry(self) -> ComponentResolver:
        return self._registry

    @property
    def settings(self) -> InvokerSettings:
        return self._settings

    # -----------------------------------------------------------------------------
    # Invocation entry points
    # -----------------------------------------------------------------------------

    def invoke(self, identifier: Identifier, method_name: str, *args: Any) -> Any:
        """Invoke `method_name` on the component named or typed `identifier`.

        Raises:
            InvalidArgumentError: blank name, or an identifier that is neither a
                name nor a class.
            ComponentNotFoundError: the registry has no such component.
            MethodNotFoundError: no method matches the name and arguments.
            MethodExecutionError: the method raised; the original is the cause.
        """
        _validate_identifier(identifier)
        _validate_method_name(method_name)
        component = self._resolve_component(identifier, method_name, args)
        return self._invoke_on(component, identifier, method_name, args)

    def invoke_typed(
        self,
        identifier: Identifier,
        method_name: str,
        return_type: Union[Type[T], Any],
        *args: Any,
    ) -> Optional[T]:
        """Like `invoke`, then check the result is a `return_type` (None passes).

        Raises:
            TypeMismatchError: the result is not an instance of `return_type`.
        """
        _validate_expected_type(return_type, "return_type")
        result = self.invoke(identifier, method_name, *args)
        return cast_return(result, return_type, self._context(identifier, method_name, args))

    def invoke_list(
        self,
        identifier: Identifier,
        method_name: str,
        element_type: Union[Type[T], Any],
        *args: Any,
    ) -> Optional[List[T]]:
        """Like `invoke`, then copy the sequence result into a checked list.

        Raises:
            NotASequenceError: the result is not a sequence.
            ElementTypeMismatchError: an element is not an `element_type`.
        """
        _validate_expected_type(element_type, "element_type")
        result = self.invoke(identifier, method_name, *args)
        return cast_list(result, element_type, self._context(identifier, method_name, args))

    # -----------------------------------------------------------------------------
    # Method resolution and cache
    # -----------------------------------------------------------------------------

    def resolve_method(
        self, owner: type, method_name: str, args: Sequence[Any] = ()
    ) -> MethodHandle:
        """Return the handle `invoke` would call for `args` on `owner`.

        Raises:
            MethodNotFoundError: naming the class, method and argument types.
        """
        key = SignatureKey.build(owner, method_name, args)
        if self._settings.cache_methods:
            cached = self._cache.lookup(key)
            if cached is not None:
                return cached

        handle = find_best_match(
            owner, method_name, args, self._settings.search_non_public
        )
        if handle is None:
            arg_types = describe_types(key.argument_types)
            raise MethodNotFoundError(
                f"No matching method {method_name}({arg_types}) "
                f"in class {get_type_name(owner, qualname=True)}",
                [
                    "Check the method name and the number of arguments",
                    "None cannot be passed where a ctypes primitive is declared",
                ],
                {
                    "component": get_type_name(owner, qualname=True),
                    "method_name": method_name,
                    "argument_types": arg_types,
                },
            )

        if self._settings.cache_methods:
            handle = self._cache.store(key, handle)
        return handle

    def clear_cache(self) -> None:
        """Drop every cached method handle."""
        self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)

    # -----------------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------------

    def _resolve_component(
        self, identifier: Identifier, method_name: str, args: Sequence[Any]
    ) -> Any:
        try:
            component = self._registry.resolve(identifier)
        except LookupError as e:
            raise ComponentNotFoundError(
                f"Component not found: {describe_identifier(identifier)}",
                ["Check that the component is registered"],
                self._context(identifier, method_name, args),
            ) from e
        if component is None:
            raise ComponentNotFoundError(
                f"Component not found: {describe_identifier(identifier)}",
                ["Check that the component is registered"],
                self._context(identifier, method_name, args),
            )
        return component

    def _invoke_on(
        self,
        component: Any,
        identifier: Identifier,
        method_name: str,
        args: Sequence[Any],
    ) -> Any:
        handle = self.resolve_method(type(component), method_name, args)

        if logger.isEnabledFor(logging.DEBUG):
            if self._settings.log_arguments:
                shown = ", ".join(repr(arg) for arg in args)
            else:
                shown = describe_types(None if a is None else type(a) for a in args)
            logger.debug(
                "Invoking %s.%s(%s)",
                get_type_name(type(component)),
                method_name,
                shown,
            )

        try:
            return handle.invoke(component, args)
        except Exception as e:
            raise MethodExecutionError(
                f"Method {describe_identifier(identifier)}.{method_name} "
                f"raised {type(e).__name__}: {e}",
                e,
                ["Inspect the chained exception for the original traceback"],
                self._context(identifier, method_name, args),
            ) from e

    @staticmethod
    def _context(
        identifier: Identifier, method_name: str, args: Sequence[Any]
    ) -> Dict[str, Any]:
        return {
            "component": describe_identifier(identifier),
            "method_name": method_name,
            "argument_types": describe_types(
                None if arg is None else type(arg) for arg in args
            ),
        }
