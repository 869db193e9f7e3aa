"""Minimal constructor-injection container used to build actions and hooks."""

from __future__ import annotations

import inspect
import logging
import threading
import typing
from typing import Any, Dict, List, Type, TypeVar

from ..errors import ConstructionError

log = logging.getLogger(__name__)

T = TypeVar("T")


class ObjectContainer:
    """Resolves objects by type.

    Registered instances are shared; any other concrete class is built anew
    on every ``resolve`` call, with each annotated ``__init__`` parameter
    resolved recursively. Parameters with defaults that cannot be resolved
    keep their defaults. Cycle detection is tracked per thread, so
    concurrent resolves of the same type do not see each other.
    """

    def __init__(self) -> None:
        self._instances: Dict[type, Any] = {}
        self._local = threading.local()

    def register_instance(self, type_: Type[T], instance: T) -> None:
        self._instances[type_] = instance

    def is_registered(self, type_: type) -> bool:
        return type_ in self._instances

    def _resolving(self) -> List[type]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def resolve(self, type_: Type[T]) -> T:
        if type_ in self._instances:
            return self._instances[type_]
        resolving = self._resolving()
        if type_ in resolving:
            chain = " -> ".join(t.__name__ for t in [*resolving, type_])
            raise ConstructionError(type_.__name__, f"circular dependency {chain}")

        resolving.append(type_)
        try:
            return self._construct(type_)
        except ConstructionError:
            raise
        except Exception as exc:
            raise ConstructionError(type_.__name__, f"{type(exc).__name__}: {exc}") from exc
        finally:
            resolving.pop()

    def _construct(self, type_: Type[T]) -> T:
        if not inspect.isclass(type_):
            raise ConstructionError(repr(type_), "not a class")
        if inspect.isabstract(type_) or getattr(type_, "_is_protocol", False):
            raise ConstructionError(type_.__name__, "abstract types must be registered explicitly")

        try:
            hints = typing.get_type_hints(type_.__init__)
        except NameError as exc:
            raise ConstructionError(type_.__name__, f"unresolvable annotation ({exc})") from exc

        kwargs: Dict[str, Any] = {}
        for name, param in inspect.signature(type_).parameters.items():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            annotation = hints.get(name)
            has_default = param.default is not param.empty
            if annotation is None or not inspect.isclass(annotation):
                if has_default:
                    continue
                raise ConstructionError(type_.__name__, f"parameter '{name}' has no resolvable type")
            if has_default and not self.is_registered(annotation):
                continue
            kwargs[name] = self.resolve(annotation)

        log.debug("Constructing %s with %s", type_.__name__, sorted(kwargs))
        return type_(**kwargs)
