"""
Named plugin factory.

Resolves an implementation identifier from a parameter record to a concrete
class (or constructor function) registered for a capability interface, checks
it satisfies the interface, and instantiates it with the parameters.

Implementations are registered explicitly, keyed by a short name and/or
their dotted qualified name:

    factory = NamedPluginFactory(PolicyValidator, "PolicyValidator")
    factory.register("default", DefaultPolicyValidator)
    validator = factory.create(PolicyValidatorParameters())
"""

import logging
from http import HTTPStatus
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from .exceptions import InvalidArgumentError, PolicyModelError

logger = logging.getLogger(__name__)

C = TypeVar("C")


def qualified_name(obj: Any) -> str:
    """Return module.QualName for a class or function."""
    return f"{obj.__module__}.{obj.__qualname__}"


class NamedPluginFactory(Generic[C]):
    """Creates capability implementations by registered name."""

    def __init__(self, capability: type, label: Optional[str] = None):
        """
        Args:
            capability: Interface (usually an ABC) every implementation must satisfy
            label: Interface name used in error messages (defaults to the class name)
        """
        self.capability = capability
        self.label = label or capability.__name__
        self._registry: Dict[str, Callable[[Any], Any]] = {}

    def register(self, key: str, constructor: Callable[[Any], Any]) -> None:
        """Register an implementation under a key, replacing any previous one."""
        self._registry[key] = constructor

    def register_class(self, cls: type, *aliases: str) -> type:
        """Register a class under its qualified name and any aliases."""
        self.register(qualified_name(cls), cls)
        for alias in aliases:
            self.register(alias, cls)
        return cls

    def unregister(self, key: str) -> None:
        self._registry.pop(key, None)

    def registered(self):
        """Return the registered keys."""
        return sorted(self._registry)

    def create(self, parameters) -> C:
        """
        Create an implementation of the capability.

        Args:
            parameters: Parameter record; its `implementation` field names the
                implementation, and it is passed as the constructor's sole argument

        Returns:
            A fresh instance of the resolved implementation

        Raises:
            InvalidArgumentError: If parameters is None
            PolicyModelError: NOT_FOUND if the implementation is not registered,
                BAD_REQUEST if it does not implement the capability,
                INTERNAL_SERVER_ERROR if its construction fails
        """
        if parameters is None:
            raise InvalidArgumentError("parameters is marked non-null but is None")

        implementation = getattr(parameters, "implementation", None)
        constructor = self._registry.get(implementation) if implementation else None
        if constructor is None:
            error_msg = (
                f'could not find the implementation of "{self.label}" interface: '
                f'"{implementation}"'
            )
            logger.warning(error_msg)
            raise PolicyModelError(HTTPStatus.NOT_FOUND, error_msg)

        if isinstance(constructor, type) and not issubclass(constructor, self.capability):
            raise self._not_an_implementation(constructor)

        try:
            instance = constructor(parameters)
        except Exception as e:
            error_msg = f'could not create an instance of {self.label} "{implementation}"'
            logger.warning(error_msg, exc_info=True)
            raise PolicyModelError(HTTPStatus.INTERNAL_SERVER_ERROR, error_msg) from e

        # Constructor functions are only checked once they have produced something
        if not isinstance(instance, self.capability):
            raise self._not_an_implementation(type(instance))

        logger.debug(
            f"Created {self.label} implementation",
            extra={"implementation": implementation, "class": qualified_name(type(instance))},
        )
        return instance

    def _not_an_implementation(self, cls: type) -> PolicyModelError:
        error_msg = (
            f'the class "{qualified_name(cls)}" is not an implementation of the '
            f'"{self.label}" interface'
        )
        logger.warning(error_msg)
        return PolicyModelError(HTTPStatus.BAD_REQUEST, error_msg)
