"""Component classes shared by the test suite."""

import ctypes
from functools import singledispatchmethod
from typing import List, Optional


class User:
    def __init__(self, user_id: int, name: str):
        self.id = user_id
        self.name = name

    def __repr__(self):
        return f"User(id={self.id}, name={self.name!r})"


class BaseService:
    def inherited_method(self) -> str:
        return "inherited result"

    def overridden_method(self) -> str:
        return "base"

    def _base_helper(self, value: str) -> str:
        return f"base helper: {value}"


class TestService(BaseService):
    __test__ = False  # not a pytest test class

    def simple_method(self) -> str:
        return "simple result"

    def method_with_param(self, param: str) -> str:
        return "param: " + param

    def method_with_multiple_params(self, text: str, num: int, flag: bool) -> str:
        return f"str={text}, num={num}, flag={flag}"

    def method_with_null_param(self, param: str) -> str:
        return "param is " + ("null" if param is None else param)

    def get_string_list(self) -> List[str]:
        return ["item1", "item2", "item3"]

    def get_user_list(self) -> List[User]:
        return [User(1, "Alice"), User(2, "Bob")]

    def get_mixed_list(self) -> list:
        return ["a", None, "c", 4]

    def get_user_by_id(self, user_id: int) -> User:
        return User(user_id, f"user{user_id}")

    def get_user_by_id_and_name(self, user_id: int, name: str) -> User:
        return User(user_id, name)

    @singledispatchmethod
    def overloaded_method(self, param):
        return f"object: {param}"

    @overloaded_method.register
    def _(self, param: str):
        return f"str: {param}"

    @overloaded_method.register
    def _(self, param: int):
        return f"int: {param}"

    @overloaded_method.register
    def _(self, param: float):
        return f"float: {param}"

    def primitive_method(self, value: ctypes.c_int) -> str:
        return f"primitive int: {value}"

    def wrapper_method(self, value: int) -> str:
        return f"wrapper int: {value}"

    def primitive_or_reference(self, value: Optional[int]) -> str:
        return f"optional: {value}"

    def flag_method(self, flag: ctypes.c_bool) -> str:
        return f"flag: {flag}"

    def throw_exception(self):
        raise RuntimeError("test failure")

    def return_null(self) -> Optional[str]:
        return None

    def overridden_method(self) -> str:
        return "derived"

    @staticmethod
    def static_method(a: int, b: int) -> int:
        return a + b

    @classmethod
    def class_method(cls) -> str:
        return cls.__name__

    @property
    def a_property(self) -> str:
        return "property"

    def _private_method(self) -> str:
        return "private method result"

    def __mangled_method(self) -> str:
        return "mangled method result"

    def varargs_method(self, *values):
        return values


class OverriddenParent:
    def process(self, value: str) -> str:
        return f"parent str: {value}"


class OverridingChild(OverriddenParent):
    def process(self, value: int) -> str:
        return f"child int: {value}"


class ShadowingParent:
    def _helper(self, value: str) -> str:
        return f"parent helper: {value}"


class ShadowingChild(ShadowingParent):
    def _helper(self, value: int) -> str:
        return f"child helper: {value}"


class PrimitiveService:
    def take_long(self, value: ctypes.c_longlong) -> str:
        return f"long: {value}"

    def take_double(self, value: ctypes.c_double) -> str:
        return f"double: {value}"

    def take_char(self, value: ctypes.c_wchar) -> str:
        return f"char: {value}"

    def take_boxed_int(self, value: int) -> str:
        return f"boxed: {value!r}"
