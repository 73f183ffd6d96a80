r"""Primitive/boxed type equivalence.

Parameters annotated with a ``ctypes`` scalar type are *primitive slots*:
they stand for raw machine values and never accept ``None``. Each primitive
has a boxed Python counterpart, and the resolver treats the pair as
interchangeable in both directions during compatible matching::

    class Counter:
        def add(self, amount: ctypes.c_int) -> int: ...

    engine.invoke("counter", "add", 5)     # int matches c_int
    engine.invoke("counter", "add", None)  # never matches a primitive slot

The table is fixed; do not extend it at runtime.
"""

import ctypes
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Tuple

__all__ = [
    "PRIMITIVE_EQUIVALENTS",
    "PRIMITIVE_TYPES",
    "boxed_type",
    "is_primitive",
    "is_primitive_pair",
    "primitive_kind",
]

PRIMITIVE_EQUIVALENTS: Mapping[str, Tuple[type, type]] = MappingProxyType(
    {
        "boolean": (ctypes.c_bool, bool),
        "byte": (ctypes.c_byte, int),
        "character": (ctypes.c_wchar, str),
        "double": (ctypes.c_double, float),
        "float": (ctypes.c_float, float),
        "integer": (ctypes.c_int, int),
        "long": (ctypes.c_longlong, int),
        "short": (ctypes.c_short, int),
    }
)
"""Kind name -> (primitive type, boxed type)."""

PRIMITIVE_TYPES: FrozenSet[type] = frozenset(
    primitive for primitive, _ in PRIMITIVE_EQUIVALENTS.values()
)

_PAIRS: FrozenSet[Tuple[type, type]] = frozenset(PRIMITIVE_EQUIVALENTS.values())

_KINDS: Mapping[type, str] = MappingProxyType(
    {primitive: kind for kind, (primitive, _) in PRIMITIVE_EQUIVALENTS.items()}
)


def is_primitive(tp: Any) -> bool:
    """Return True if `tp` is a primitive slot type from the table."""
    return isinstance(tp, type) and tp in PRIMITIVE_TYPES


def is_primitive_pair(a: Any, b: Any) -> bool:
    """Return True if `a` and `b` form a primitive/boxed pair, in either order."""
    return (a, b) in _PAIRS or (b, a) in _PAIRS


def boxed_type(primitive: type) -> type:
    """Return the boxed counterpart of a primitive slot type.

    Raises:
        KeyError: if `primitive` is not in the table.
    """
    return PRIMITIVE_EQUIVALENTS[_KINDS[primitive]][1]


def primitive_kind(tp: Any) -> Optional[str]:
    """Return the kind name (``"integer"``, ``"long"``...) of a primitive type."""
    if not is_primitive(tp):
        return None
    return _KINDS[tp]
