from collections import deque
from typing import Dict, List, Optional, Tuple

import pytest

from invoker.coercion import cast_list, cast_return, is_runtime_class, is_sequence, matches_type
from invoker.utils import (
    CoercionError,
    ElementTypeMismatchError,
    NotASequenceError,
    TypeMismatchError,
)


class Shape:
    pass


class Circle(Shape):
    pass


# -----------------------------------------------------------------------------
# Type checks
# -----------------------------------------------------------------------------


def test_is_runtime_class():
    assert is_runtime_class(int)
    assert is_runtime_class((int, str))
    assert not is_runtime_class(())
    assert not is_runtime_class(List[int])
    assert not is_runtime_class(Optional[int])


@pytest.mark.parametrize(
    "value, expected, result",
    [
        (Circle(), Shape, True),
        (Shape(), Circle, False),
        (1, (int, str), True),
        (1.0, (int, str), False),
        ([1, 2], List[int], True),
        ([1, "2"], List[int], False),
        ({"a": 1}, Dict[str, int], True),
        (None, Optional[int], True),
        ((1, "a"), Tuple[int, str], True),
    ],
)
def test_matches_type(value, expected, result):
    assert matches_type(value, expected) is result


@pytest.mark.parametrize(
    "value, result",
    [
        ([1], True),
        ((1,), True),
        (range(3), True),
        (deque([1]), True),
        ("abc", False),
        (b"abc", False),
        (bytearray(b"abc"), False),
        (memoryview(b"abc"), False),
        ({1}, False),
        ({"a": 1}, False),
    ],
)
def test_is_sequence(value, result):
    assert is_sequence(value) is result


# -----------------------------------------------------------------------------
# cast_return
# -----------------------------------------------------------------------------


class TestCastReturn:
    def test_passes_instances_through(self):
        circle = Circle()
        assert cast_return(circle, Shape) is circle

    def test_none_passes(self):
        assert cast_return(None, int) is None

    def test_mismatch(self):
        with pytest.raises(TypeMismatchError) as exc_info:
            cast_return("text", int, {"component": "'svc'", "method_name": "m"})
        error = exc_info.value
        assert isinstance(error, CoercionError)
        assert error.context["component"] == "'svc'"
        assert error.context["expected_type"] == "int"
        assert error.context["actual_type"] == "str"
        assert "Method: m" in str(error)

    def test_typing_construct(self):
        assert cast_return([1, 2], List[int]) == [1, 2]
        with pytest.raises(TypeMismatchError):
            cast_return([1, "x"], List[int])


# -----------------------------------------------------------------------------
# cast_list
# -----------------------------------------------------------------------------


class TestCastList:
    def test_copies_into_new_list(self):
        source = (1, 2, 3)
        result = cast_list(source, int)
        assert result == [1, 2, 3]
        assert isinstance(result, list)

        items = [1, 2]
        assert cast_list(items, int) is not items

    def test_none_result(self):
        assert cast_list(None, int) is None

    def test_none_elements_pass(self):
        assert cast_list([None, 1, None], int) == [None, 1, None]

    def test_subclass_elements(self):
        shapes = cast_list([Circle(), Shape()], Shape)
        assert len(shapes) == 2

    def test_not_a_sequence(self):
        with pytest.raises(NotASequenceError) as exc_info:
            cast_list("abc", str)
        assert exc_info.value.context["actual_type"] == "str"

        with pytest.raises(NotASequenceError):
            cast_list({1, 2}, int)

        with pytest.raises(NotASequenceError):
            cast_list(memoryview(b"ab"), int)

    def test_element_mismatch_reports_first_bad_index(self):
        with pytest.raises(ElementTypeMismatchError) as exc_info:
            cast_list([1, 2, "three", "four"], int)
        error = exc_info.value
        assert error.index == 2
        assert error.context["index"] == 2
        assert error.message.startswith("Element 2 type mismatch")

    def test_typing_construct_elements(self):
        assert cast_list([[1], [2, 3]], List[int]) == [[1], [2, 3]]
        with pytest.raises(ElementTypeMismatchError) as exc_info:
            cast_list([[1], ["x"]], List[int])
        assert exc_info.value.index == 1

    def test_empty_sequence(self):
        assert cast_list([], str) == []
