r"""Method resolution: find the best candidate for a call shape.

Search order, stopping at the first success:

1. public surface, exact match
2. public surface, compatible match
3. for each class level from the most-derived up the MRO:
   declared methods, exact match then compatible match

Exact matching requires every argument to be non-null with a runtime type
identical to the declared type. Compatible matching accepts subclasses,
primitive/boxed pairs (see `invoker.primitives`) and null arguments for any
slot that is not primitive. A null argument in a primitive slot quietly
disqualifies that candidate; later candidates or tiers may still match.
"""

import logging
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .primitives import is_primitive, is_primitive_pair
from .signature import (
    DeclaredType,
    MethodHandle,
    declared_candidates,
    public_candidates,
)
from .utils import get_type_name

logger = logging.getLogger(__name__)

__all__ = [
    "PUBLIC_TIER",
    "DECLARED_TIER",
    "find_best_match",
    "is_assignable",
    "is_compatible_match",
    "is_exact_match",
    "iter_candidates",
    "search_methods",
]

PUBLIC_TIER = "public"
DECLARED_TIER = "declared"


def is_assignable(target: DeclaredType, source: type) -> bool:
    """Return True if a `source` value can be passed where `target` is declared."""
    if isinstance(target, tuple):
        return any(is_assignable(member, source) for member in target)
    try:
        if issubclass(source, target):
            return True
    except TypeError:
        # e.g. protocols that are not runtime checkable
        return False
    return is_primitive_pair(target, source)


def is_exact_match(handle: MethodHandle, args: Sequence[Any]) -> bool:
    if handle.arity != len(args):
        return False
    for arg, declared in zip(args, handle.parameter_types):
        if arg is None:
            return False
        if isinstance(declared, tuple):
            if type(arg) not in declared:
                return False
        elif type(arg) is not declared:
            return False
    return True


def is_compatible_match(handle: MethodHandle, args: Sequence[Any]) -> bool:
    if handle.arity != len(args):
        return False
    for arg, declared in zip(args, handle.parameter_types):
        if arg is None:
            if is_primitive(declared):
                return False
        elif not is_assignable(declared, type(arg)):
            return False
    return True


def search_methods(
    handles: Sequence[MethodHandle], args: Sequence[Any]
) -> Optional[Tuple[MethodHandle, bool]]:
    """Return ``(handle, exact)`` for the first exact, else first compatible match."""
    for handle in handles:
        if is_exact_match(handle, args):
            return handle, True
    for handle in handles:
        if is_compatible_match(handle, args):
            return handle, False
    return None


def iter_candidates(
    owner: type, method_name: str, search_non_public: bool = True
) -> Iterator[Tuple[str, List[MethodHandle]]]:
    """Yield ``(tier, handles)`` groups in the order the resolver searches them."""
    yield PUBLIC_TIER, public_candidates(owner, method_name)
    if search_non_public:
        for level in owner.__mro__:
            yield DECLARED_TIER, declared_candidates(level, method_name)


def find_best_match(
    owner: type,
    method_name: str,
    args: Sequence[Any],
    search_non_public: bool = True,
) -> Optional[MethodHandle]:
    """Run the tiered search; return None when nothing matches."""
    for tier, handles in iter_candidates(owner, method_name, search_non_public):
        if not handles:
            continue
        found = search_methods(handles, args)
        if found is None:
            continue
        handle, exact = found
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Resolved %s.%s via %s %s match: %s",
                get_type_name(owner),
                method_name,
                tier,
                "exact" if exact else "compatible",
                handle.describe(),
            )
        return handle
    return None
