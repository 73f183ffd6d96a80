import ctypes
from typing import Optional

import pytest

from invoker.resolver import (
    DECLARED_TIER,
    PUBLIC_TIER,
    find_best_match,
    is_assignable,
    is_compatible_match,
    is_exact_match,
    iter_candidates,
    search_methods,
)
from invoker.signature import public_candidates

from sample_components import (
    BaseService,
    OverriddenParent,
    OverridingChild,
    ShadowingChild,
    ShadowingParent,
    TestService,
)


class Animal:
    pass


class Dog(Animal):
    pass


class Kennel:
    def house(self, animal: Animal) -> str:
        return "animal"

    def pair(self, first: Animal, second: Optional[Dog]) -> str:
        return "pair"


# -----------------------------------------------------------------------------
# Assignability
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "target, source, expected",
    [
        (Animal, Dog, True),
        (Dog, Animal, False),
        (object, int, True),
        (int, bool, True),
        (ctypes.c_int, int, True),
        (int, ctypes.c_int, True),
        (ctypes.c_double, float, True),
        (ctypes.c_double, int, False),
        (ctypes.c_longlong, float, False),
        ((int, type(None)), int, True),
        ((str, bytes), int, False),
    ],
)
def test_is_assignable(target, source, expected):
    assert is_assignable(target, source) is expected


def test_exact_match_requires_identical_types():
    (handle,) = public_candidates(Kennel, "house")
    assert not is_exact_match(handle, [Dog()])
    assert is_exact_match(handle, [Animal()])


def test_exact_match_rejects_null():
    (handle,) = public_candidates(Kennel, "pair")
    assert not is_exact_match(handle, [Animal(), None])
    assert is_compatible_match(handle, [Animal(), None])


def test_arity_must_match():
    (handle,) = public_candidates(Kennel, "house")
    assert not is_exact_match(handle, [])
    assert not is_compatible_match(handle, [Animal(), Animal()])


def test_compatible_match_accepts_subclasses():
    (handle,) = public_candidates(Kennel, "house")
    assert is_compatible_match(handle, [Dog()])
    assert not is_compatible_match(handle, ["not an animal"])


def test_null_disqualifies_primitive_slot_only():
    (primitive,) = public_candidates(TestService, "primitive_method")
    (boxed,) = public_candidates(TestService, "wrapper_method")
    assert not is_compatible_match(primitive, [None])
    assert is_compatible_match(boxed, [None])


# -----------------------------------------------------------------------------
# Searching a candidate group
# -----------------------------------------------------------------------------


def test_search_prefers_exact_over_earlier_compatible():
    handles = public_candidates(TestService, "overloaded_method")
    handle, exact = search_methods(handles, [3.5])
    assert exact
    assert handle.parameter_types == (float,)


def test_search_falls_back_to_first_compatible():
    handles = public_candidates(TestService, "overloaded_method")
    handle, exact = search_methods(handles, [None])
    assert not exact
    assert handle.parameter_types == (str,)


def test_search_returns_none_without_match():
    handles = public_candidates(TestService, "method_with_param")
    assert search_methods(handles, [1, 2]) is None


# -----------------------------------------------------------------------------
# Tier order
# -----------------------------------------------------------------------------


def test_iter_candidates_order():
    groups = list(iter_candidates(OverridingChild, "process"))
    tiers = [tier for tier, _ in groups]
    assert tiers[0] == PUBLIC_TIER
    assert tiers[1:] == [DECLARED_TIER] * len(OverridingChild.__mro__)

    levels = [handles[0].declaring_class for _, handles in groups if handles]
    assert levels == [OverridingChild, OverridingChild, OverriddenParent]


def test_iter_candidates_public_only():
    groups = list(iter_candidates(OverridingChild, "process", search_non_public=False))
    assert [tier for tier, _ in groups] == [PUBLIC_TIER]


def test_non_public_name_has_no_public_group():
    groups = dict(iter_candidates(TestService, "_private_method", search_non_public=False))
    assert groups[PUBLIC_TIER] == []


def test_public_surface_prefers_most_derived():
    handle = find_best_match(TestService, "overridden_method", [])
    assert handle.declaring_class is TestService


def test_public_surface_reaches_inherited_methods():
    handle = find_best_match(TestService, "inherited_method", [])
    assert handle.declaring_class is BaseService


def test_declared_tier_stops_at_first_matching_level():
    assert find_best_match(ShadowingChild, "_helper", [1]).declaring_class is ShadowingChild
    assert find_best_match(ShadowingChild, "_helper", ["s"]).declaring_class is ShadowingParent


def test_declared_tier_disabled():
    assert find_best_match(ShadowingChild, "_helper", [1], search_non_public=False) is None


def test_find_best_match_none_for_unknown_method():
    assert find_best_match(TestService, "missing", []) is None


def test_null_in_primitive_slot_continues_to_next_tier():
    class Parent:
        def _convert(self, value: str) -> str:
            return "parent"

    class Child(Parent):
        def _convert(self, value: ctypes.c_int) -> str:
            return "child"

    assert find_best_match(Child, "_convert", [None]).declaring_class is Parent
    assert find_best_match(Child, "_convert", [5]).declaring_class is Child
