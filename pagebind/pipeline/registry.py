"""Process-wide repository of pre-, post- and locator-action hooks."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from enum import Flag, auto
from typing import Any, Iterable, Tuple, Type, TypeVar

from ..errors import ConstructionError
from .container import ObjectContainer

log = logging.getLogger(__name__)

A = TypeVar("A")


class Capability(Flag):
    NONE = 0
    PRE_ACTION = auto()
    POST_ACTION = auto()
    LOCATOR_ACTION = auto()


_HOOK_METHODS = {
    Capability.PRE_ACTION: ("on_pre_action",),
    Capability.POST_ACTION: ("on_post_action",),
    Capability.LOCATOR_ACTION: ("on_locate", "on_locate_complete"),
}


@dataclass(frozen=True, slots=True)
class _Snapshot:
    types: Tuple[type, ...] = ()
    pre_actions: Tuple[Any, ...] = ()
    post_actions: Tuple[Any, ...] = ()
    locator_actions: Tuple[Any, ...] = ()
    initialized: bool = False


def capabilities_of(type_: type) -> Capability:
    caps = getattr(type_, "capabilities", Capability.NONE)
    if not isinstance(caps, Capability):
        raise TypeError(f"{type_.__name__}.capabilities must be a Capability flag")
    return caps


class ActionRepository:
    """Classifies hook types by capability and caches one instance of each.

    All reads go through an immutable snapshot that is swapped in whole
    under a lock, so a reader sees either the previous cache or the new one.
    Hooks keep their registration order.
    """

    def __init__(self, container: ObjectContainer, known_types: Iterable[type] = ()) -> None:
        self._container = container
        self._known_types = tuple(known_types)
        self._lock = threading.Lock()
        self._snapshot = _Snapshot()

    @property
    def initialized(self) -> bool:
        return self._snapshot.initialized

    def initialize(self) -> None:
        if self._snapshot.initialized:
            return
        with self._lock:
            if self._snapshot.initialized:
                return
            snapshot = self._snapshot
            for type_ in self._known_types:
                snapshot = self._classify(snapshot, type_)
            self._snapshot = replace(snapshot, initialized=True)
            log.info(
                "Action repository initialized: %d pre, %d post, %d locator action(s)",
                len(self._snapshot.pre_actions),
                len(self._snapshot.post_actions),
                len(self._snapshot.locator_actions),
            )

    def register_type(self, type_: type) -> None:
        with self._lock:
            self._snapshot = self._classify(self._snapshot, type_)

    def get_pre_actions(self) -> Tuple[Any, ...]:
        return self._snapshot.pre_actions

    def get_post_actions(self) -> Tuple[Any, ...]:
        return self._snapshot.post_actions

    def get_locator_actions(self) -> Tuple[Any, ...]:
        return self._snapshot.locator_actions

    def create_action(self, type_: Type[A]) -> A:
        try:
            return self._container.resolve(type_)
        except ConstructionError:
            raise
        except Exception as exc:
            raise ConstructionError(getattr(type_, "__name__", repr(type_)), str(exc)) from exc

    def _classify(self, snapshot: _Snapshot, type_: type) -> _Snapshot:
        if type_ in snapshot.types:
            return snapshot
        caps = capabilities_of(type_)
        if not caps:
            log.debug("%s declares no hook capability; ignoring", type_.__name__)
            return replace(snapshot, types=snapshot.types + (type_,))

        for capability, methods in _HOOK_METHODS.items():
            if caps & capability:
                missing = [name for name in methods if not callable(getattr(type_, name, None))]
                if missing:
                    raise TypeError(f"{type_.__name__} declares {capability.name} but lacks {', '.join(missing)}")

        instance = self.create_action(type_)
        log.debug("Registered hook %s (%s)", type_.__name__, caps)
        return replace(
            snapshot,
            types=snapshot.types + (type_,),
            pre_actions=snapshot.pre_actions + ((instance,) if caps & Capability.PRE_ACTION else ()),
            post_actions=snapshot.post_actions + ((instance,) if caps & Capability.POST_ACTION else ()),
            locator_actions=snapshot.locator_actions + ((instance,) if caps & Capability.LOCATOR_ACTION else ()),
        )
