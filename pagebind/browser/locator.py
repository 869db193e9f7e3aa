"""Resolve logical element names to live controls on the current page."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..errors import ElementNotDefinedError, PropertyKindError
from ..naming import to_lookup_key
from ..pages import ElementKind, ListItems, PageObject, PropertyMetadata
from .driver import ControlHandle
from .waits import WaitCondition, WaitEngine

log = logging.getLogger(__name__)


class ElementLocator:
    """Locator chain for one page: metadata lookup, locator hooks, then polling.

    The locator holds no state between calls. A resolution either returns a
    live handle or raises; undefined names fail before the driver is touched.
    """

    def __init__(
        self,
        page: PageObject,
        wait_engine: WaitEngine,
        locator_actions: Sequence[Any] = (),
    ) -> None:
        self.page = page
        self.wait_engine = wait_engine
        self.locator_actions = tuple(locator_actions)

    def has_element(self, name: str) -> bool:
        return self.page.get_property(name) is not None

    def get_property(self, name: str) -> PropertyMetadata:
        metadata = self.page.get_property(name)
        if metadata is None:
            raise ElementNotDefinedError(self.page.name, name)
        return metadata

    def get_element(
        self,
        name: str,
        *,
        wait_for_still: bool = False,
        timeout_ms: Optional[int] = None,
    ) -> ControlHandle:
        metadata = self.get_property(name)
        handle = self._locate(metadata, timeout_ms)
        if wait_for_still:
            self.wait_engine.wait_for_element(handle, WaitCondition.NOT_MOVING, timeout_ms, element=metadata.name)
            self.wait_engine.wait_for_element(handle, WaitCondition.BECOMES_ENABLED, timeout_ms, element=metadata.name)
        return handle

    def get_list(self, name: str, *, timeout_ms: Optional[int] = None) -> ListItems:
        metadata = self.get_property(name)
        if not metadata.is_list:
            raise PropertyKindError(self.page.name, metadata.name, ElementKind.LIST.value, metadata.kind.value)
        container = self._locate(metadata, timeout_ms)
        return self.page.list_items(metadata, container)

    def _locate(self, metadata: PropertyMetadata, timeout_ms: Optional[int]) -> ControlHandle:
        key = to_lookup_key(metadata.name)
        for action in self.locator_actions:
            action.on_locate(self.page, key)

        handle = self.wait_engine.wait_for_value(
            lambda: self.page.locate(metadata),
            WaitCondition.EXISTS,
            timeout_ms=timeout_ms,
            element=f"{self.page.name}.{metadata.name}",
        )
        log.debug("Resolved %s on %s via %s", metadata.name, self.page.name, metadata.selector.describe())

        for action in self.locator_actions:
            action.on_locate_complete(self.page, key, handle)
        return handle
