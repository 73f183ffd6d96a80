r"""Component registry: named, typed lookup of live component instances.

Each application subclasses `ComponentRegistry` and gets its own store::

    class AppComponents(ComponentRegistry):
        pass

    @AppComponents.register_class()
    class UserService:
        def get_user(self, user_id: int) -> dict: ...

    AppComponents.resolve("user_service")   # by name
    AppComponents.resolve(UserService)      # by type

`resolve` never raises for a missing component; it returns None, which is
what `DispatchEngine` expects from its registry.
"""

from __future__ import annotations

import logging
import re
from abc import ABC
from inspect import isclass
from typing import Any, Callable, ClassVar, List, Optional, Type, TypeVar, Union

from typing_extensions import Protocol, runtime_checkable

from .mixin import RegistryMutatorMixin
from .storage import ThreadSafeLocalStorage
from .utils import InvalidArgumentError, get_type_name

logger = logging.getLogger(__name__)

__all__ = ["ComponentRegistry", "ComponentResolver", "component_name"]

C = TypeVar("C")

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


@runtime_checkable
class ComponentResolver(Protocol):
    """Anything that maps a name or a class to a component instance."""

    def resolve(self, identifier: Union[str, type]) -> Optional[Any]: ...


def component_name(cls: type) -> str:
    """Return the default registration name: ``UserService`` -> ``user_service``."""
    return _CAMEL_BOUNDARY.sub("_", cls.__name__).lower()


class ComponentRegistry(RegistryMutatorMixin[str, Any], ABC):
    """Registry of component instances keyed by name.

    Subclasses get a fresh thread-safe store from `__init_subclass__`; the
    base class itself holds nothing.
    """

    _repository: ClassVar[ThreadSafeLocalStorage[str, Any]]
    __slots__ = ()

    @classmethod
    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls._repository = ThreadSafeLocalStorage()

    @classmethod
    def _get_mapping(cls) -> ThreadSafeLocalStorage[str, Any]:
        return cls._repository

    # -----------------------------------------------------------------------------
    # Registration
    # -----------------------------------------------------------------------------

    @classmethod
    def register_component(cls, instance: Any, name: Optional[str] = None) -> Any:
        """Register `instance` under `name` (default: snake_case class name).

        Raises:
            InvalidArgumentError: if `instance` is None or `name` is blank.
            RegistryError: if the name is already taken.
        """
        if instance is None:
            raise InvalidArgumentError(
                "Cannot register None as a component",
                ["Register an instantiated object"],
                {"registry_name": cls.__name__},
            )
        key = component_name(type(instance)) if name is None else name
        if not isinstance(key, str) or not key.strip():
            raise InvalidArgumentError(
                f"Component name must be a non-empty string, got {key!r}",
                ["Pass a descriptive name such as 'user_service'"],
                {"registry_name": cls.__name__},
            )
        cls._set_artifact(key, instance)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s: registered %s as %r",
                cls.__name__,
                get_type_name(type(instance)),
                key,
            )
        return instance

    @classmethod
    def register_class(
        cls, name: Optional[str] = None
    ) -> Callable[[Type[C]], Type[C]]:
        """Class decorator: instantiate with no arguments and register."""

        def decorator(component_cls: Type[C]) -> Type[C]:
            cls.register_component(component_cls(), name)
            return component_cls

        return decorator

    @classmethod
    def unregister_component(cls, name: str) -> None:
        """Remove the component registered under `name`."""
        cls._del_artifact(name)

    @classmethod
    def clear_registry(cls) -> None:
        cls._clear_mapping()

    # -----------------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------------

    @classmethod
    def component_names(cls) -> List[str]:
        return list(cls._iter_mapping())

    @classmethod
    def has_component(cls, name: str) -> bool:
        return cls._has_identifier(name)

    @classmethod
    def get_component(cls, name: str) -> Any:
        """Return the component registered under `name`.

        Raises:
            RegistryError: if no component has that name.
        """
        return cls._get_artifact(name)

    @classmethod
    def resolve(cls, identifier: Union[str, type]) -> Optional[Any]:
        """Return the component for a name or a class, or None.

        A class resolves to the single registered instance of that class or
        a subclass; none or several matches resolve to None.
        """
        if isinstance(identifier, str):
            return cls._get_mapping().get(identifier)
        if isclass(identifier):
            matches = cls._find_artifacts(identifier)
            if len(matches) == 1:
                return matches[0]
            if matches and logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "%s: %d components match %s, refusing to pick one",
                    cls.__name__,
                    len(matches),
                    get_type_name(identifier),
                )
        return None

    @classmethod
    def resolve_named(cls, name: str, component_type: Type[C]) -> Optional[C]:
        """Return the component named `name` if it is a `component_type`."""
        component = cls._get_mapping().get(name)
        if component is not None and isinstance(component, component_type):
            return component
        return None
