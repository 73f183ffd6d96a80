r"""Result coercion for typed invocations.

`cast_return` narrows a scalar result, `cast_list` validates a sequence
result element by element and copies it into a new list. ``None`` results
pass through both untouched.

Expected types may be plain classes, tuples of classes, or typing constructs
(``Optional[int]``, ``List[str]``, ``Dict[str, Any]``); the latter are checked
with `typeguard.check_type` against every collection item.
"""

import collections.abc
import logging
from inspect import isclass
from typing import Any, Dict, List, Optional

from typeguard import CollectionCheckStrategy, TypeCheckError, check_type

from .utils import (
    ElementTypeMismatchError,
    NotASequenceError,
    TypeMismatchError,
    get_type_name,
)

logger = logging.getLogger(__name__)

__all__ = ["cast_list", "cast_return", "is_runtime_class", "is_sequence", "matches_type"]

_NON_SEQUENCE_TYPES = (str, bytes, bytearray, memoryview)


def is_runtime_class(expected: Any) -> bool:
    """Return True for a class or a non-empty tuple of classes."""
    if isinstance(expected, tuple):
        return bool(expected) and all(isclass(member) for member in expected)
    return isclass(expected)


def matches_type(value: Any, expected: Any) -> bool:
    """Return True if `value` is an instance of `expected`."""
    if is_runtime_class(expected):
        return isinstance(value, expected)
    try:
        check_type(
            value,
            expected,
            collection_check_strategy=CollectionCheckStrategy.ALL_ITEMS,
        )
    except TypeCheckError:
        return False
    return True


def is_sequence(value: Any) -> bool:
    """Return True for list-like results; strings and byte buffers are not."""
    return isinstance(value, collections.abc.Sequence) and not isinstance(
        value, _NON_SEQUENCE_TYPES
    )


def cast_return(
    result: Any, return_type: Any, context: Optional[Dict[str, Any]] = None
) -> Any:
    """Return `result` if it is None or an instance of `return_type`.

    Raises:
        TypeMismatchError: naming the expected and actual types.
    """
    if result is None:
        return None
    if matches_type(result, return_type):
        return result

    expected = get_type_name(return_type, qualname=True)
    actual = get_type_name(type(result), qualname=True)
    raise TypeMismatchError(
        f"Return value type mismatch: expected {expected}, got {actual}",
        [
            f"Request {actual} as the return type",
            "Check which overload the call resolved to",
        ],
        {**(context or {}), "expected_type": expected, "actual_type": actual},
    )


def cast_list(
    result: Any, element_type: Any, context: Optional[Dict[str, Any]] = None
) -> Optional[List[Any]]:
    """Return a new list holding the elements of `result`, each type-checked.

    Raises:
        NotASequenceError: if `result` is not a sequence.
        ElementTypeMismatchError: naming the first offending index.
    """
    if result is None:
        return None

    if not is_sequence(result):
        actual = get_type_name(type(result), qualname=True)
        raise NotASequenceError(
            f"Return value is not a sequence, got {actual}",
            ["Use invoke_typed() for scalar results"],
            {**(context or {}), "expected_type": "sequence", "actual_type": actual},
        )

    typed: List[Any] = []
    for index, item in enumerate(result):
        if item is not None and not matches_type(item, element_type):
            expected = get_type_name(element_type)
            actual = get_type_name(type(item), qualname=True)
            raise ElementTypeMismatchError(
                f"Element {index} type mismatch: expected {expected}, got {actual}",
                index,
                [f"Request {actual} as the element type"],
                {
                    **(context or {}),
                    "index": index,
                    "expected_type": expected,
                    "actual_type": actual,
                },
            )
        typed.append(item)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Coerced %d element(s) to %s", len(typed), get_type_name(element_type)
        )
    return typed
