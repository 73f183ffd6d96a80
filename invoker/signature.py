r"""Signature keys, method handles and candidate enumeration.

A `SignatureKey` identifies one call shape: the component class, the method
name, and the runtime type of every positional argument (``None`` standing in
for a null argument). A `MethodHandle` is the resolved, invokable method for
such a key.

Candidates are read from class namespaces, never from instances:

- plain functions, `staticmethod` and `classmethod` attributes are one
  candidate each;
- a `functools.singledispatchmethod` expands into one candidate per
  registered implementation, in registration order, with the ``object``
  base implementation last;
- anything else (properties, data attributes, builtin slot wrappers) is
  not a candidate.
"""

import functools
import inspect
import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Callable,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    Union,
    get_type_hints,
)

from typing_extensions import get_args, get_origin

from .utils import get_type_name

if sys.version_info >= (3, 10):
    from types import UnionType
else:
    UnionType = None

logger = logging.getLogger(__name__)

__all__ = [
    "Binding",
    "DeclaredType",
    "MethodHandle",
    "SignatureKey",
    "declared_candidates",
    "declared_type",
    "expand_attribute",
    "is_public_name",
    "mangled_names",
    "public_candidates",
]

DeclaredType = Union[type, Tuple[type, ...]]
"""A parameter's declared type: one class, or the members of a union."""


class SignatureKey(NamedTuple):
    """Cache key for one call shape; a pure function of types, never values."""

    owner: type
    method_name: str
    argument_types: Tuple[Optional[type], ...]

    @classmethod
    def build(
        cls, owner: type, method_name: str, args: Sequence[Any]
    ) -> "SignatureKey":
        return cls(
            owner,
            method_name,
            tuple(None if arg is None else type(arg) for arg in args),
        )

    def __str__(self) -> str:
        if self.argument_types:
            shape = ",".join(
                "null" if tp is None else get_type_name(tp, qualname=True)
                for tp in self.argument_types
            )
        else:
            shape = "void"
        return f"{get_type_name(self.owner, qualname=True)}#{self.method_name}#{shape}"


class Binding(Enum):
    """How a handle's function receives the component."""

    INSTANCE = "instance"
    CLASS = "class"
    STATIC = "static"


@dataclass(frozen=True)
class MethodHandle:
    """A resolved method, invokable regardless of naming visibility.

    Attributes:
        declaring_class: The class level whose namespace holds the method.
        name: The requested method name.
        attribute_name: The actual attribute name (differs for mangled names).
        function: The underlying plain function.
        parameter_types: Declared type of every positional parameter.
        binding: Whether the function takes the instance, the class or nothing.
        public: Whether the attribute name is public.
    """

    declaring_class: type
    name: str
    attribute_name: str
    function: Callable[..., Any]
    parameter_types: Tuple[DeclaredType, ...]
    binding: Binding
    public: bool

    @property
    def arity(self) -> int:
        return len(self.parameter_types)

    def invoke(self, component: Any, args: Sequence[Any]) -> Any:
        if self.binding is Binding.STATIC:
            return self.function(*args)
        if self.binding is Binding.CLASS:
            return self.function(type(component), *args)
        return self.function(component, *args)

    def describe(self) -> str:
        """Render as ``Service.method(int, str)``."""
        params = ", ".join(get_type_name(tp) for tp in self.parameter_types)
        return f"{get_type_name(self.declaring_class)}.{self.attribute_name}({params})"

    def __repr__(self) -> str:
        return f"<MethodHandle {self.describe()} [{self.binding.value}]>"


def is_public_name(name: str) -> bool:
    """Return True for names outside the underscore convention (dunders are public)."""
    if name.startswith("__") and name.endswith("__"):
        return True
    return not name.startswith("_")


def mangled_names(level: type, name: str) -> List[str]:
    """Return the attribute names `name` may be stored under in `level`."""
    names = [name]
    if name.startswith("__") and not name.endswith("__"):
        stripped = level.__name__.lstrip("_")
        if stripped:
            names.append(f"_{stripped}{name}")
    return names


def declared_type(annotation: Any) -> DeclaredType:
    """Reduce an annotation to the class (or classes) checked at runtime.

    Unannotated parameters, `typing.Any` and anything that is not a runtime
    class reduce to ``object``.
    """
    if annotation is inspect.Parameter.empty or annotation is Any:
        return object
    if annotation is None:
        return type(None)

    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return declared_type(supertype)

    origin = get_origin(annotation)
    if origin is Union or (UnionType is not None and origin is UnionType):
        members: List[type] = []
        for arg in get_args(annotation):
            member = declared_type(arg)
            members.extend(member if isinstance(member, tuple) else (member,))
        if object in members:
            return object
        return tuple(dict.fromkeys(members))
    if origin is not None:
        return origin if isinstance(origin, type) else object

    if isinstance(annotation, type):
        return annotation
    return object


def _resolve_annotation(func: Callable[..., Any], name: str, annotation: Any) -> Any:
    """Evaluate one string annotation in `func`'s module namespace."""
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, dict(getattr(func, "__globals__", {})))
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Unresolvable annotation %r on %s.%s, treating as object: %s",
                annotation,
                getattr(func, "__qualname__", func),
                name,
                e,
            )
        return Any


def _resolve_hints(func: Callable[..., Any]) -> dict:
    """Resolve annotations; on failure, resolve each one on its own.

    A single unresolvable annotation (e.g. a ``TYPE_CHECKING``-only import)
    only degrades that parameter to ``object``.
    """
    try:
        return get_type_hints(func)
    except (NameError, AttributeError, SyntaxError, TypeError):
        pass
    return {
        name: _resolve_annotation(func, name, annotation)
        for name, annotation in getattr(func, "__annotations__", {}).items()
    }


def _parameter_types(
    func: Callable[..., Any],
    binding: Binding,
    first_type: Optional[type] = None,
) -> Optional[Tuple[DeclaredType, ...]]:
    """Return declared positional parameter types, or None if not a candidate."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    hints = _resolve_hints(func)
    params = list(sig.parameters.values())
    if binding is not Binding.STATIC:
        if not params or params[0].kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            return None
        params = params[1:]

    types: List[DeclaredType] = []
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            continue
        if param.kind is inspect.Parameter.KEYWORD_ONLY:
            if param.default is inspect.Parameter.empty:
                return None
            continue
        types.append(declared_type(hints.get(param.name, param.annotation)))

    if first_type is not None and types:
        types[0] = first_type
    return tuple(types)


def _unwrap(attr: Any) -> Tuple[Optional[Callable[..., Any]], Binding]:
    if isinstance(attr, staticmethod):
        return attr.__func__, Binding.STATIC
    if isinstance(attr, classmethod):
        return attr.__func__, Binding.CLASS
    if inspect.isfunction(attr):
        return attr, Binding.INSTANCE
    return None, Binding.INSTANCE


def _make_handle(
    level: type,
    name: str,
    attribute_name: str,
    attr: Any,
    first_type: Optional[type] = None,
) -> Optional[MethodHandle]:
    func, binding = _unwrap(attr)
    if func is None:
        return None
    parameter_types = _parameter_types(func, binding, first_type)
    if parameter_types is None:
        return None
    return MethodHandle(
        declaring_class=level,
        name=name,
        attribute_name=attribute_name,
        function=func,
        parameter_types=parameter_types,
        binding=binding,
        public=is_public_name(attribute_name),
    )


def expand_attribute(
    level: type, name: str, attribute_name: str, attr: Any
) -> List[MethodHandle]:
    """Expand one class attribute into its candidate handles."""
    if isinstance(attr, functools.singledispatchmethod):
        registry = attr.dispatcher.registry
        ordered = [(tp, impl) for tp, impl in registry.items() if tp is not object]
        if object in registry:
            ordered.append((object, registry[object]))
        handles = []
        for dispatch_type, impl in ordered:
            handle = _make_handle(level, name, attribute_name, impl, dispatch_type)
            if handle is not None and handle.arity > 0:
                handles.append(handle)
        return handles

    handle = _make_handle(level, name, attribute_name, attr)
    return [handle] if handle is not None else []


def public_candidates(owner: type, name: str) -> List[MethodHandle]:
    """Candidates reachable through `owner`'s public surface (MRO lookup)."""
    if not is_public_name(name):
        return []
    for level in owner.__mro__:
        namespace = vars(level)
        if name in namespace:
            return expand_attribute(level, name, name, namespace[name])
    return []


def declared_candidates(level: type, name: str) -> List[MethodHandle]:
    """Candidates declared directly on `level`, whatever their visibility."""
    namespace = vars(level)
    handles: List[MethodHandle] = []
    for attribute_name in mangled_names(level, name):
        if attribute_name in namespace:
            handles.extend(
                expand_attribute(level, name, attribute_name, namespace[attribute_name])
            )
    return handles
