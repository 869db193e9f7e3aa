"""Browser driver collaborator and its Playwright implementation.

Only the primitives the binding core needs are exposed: locating by
strategy, the click family, hover, reading text/attributes and the element
state sampled by the wait engine.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Tuple

from playwright.sync_api import Locator, Page

from ..pages import Selector

log = logging.getLogger(__name__)


class ControlHandle(Protocol):
    def click(self) -> None: ...

    def double_click(self) -> None: ...

    def right_click(self) -> None: ...

    def hover(self) -> None: ...

    def text(self) -> str: ...

    def attribute(self, name: str) -> Optional[str]: ...

    def is_present(self) -> bool: ...

    def is_enabled(self) -> bool: ...

    def is_visible(self) -> bool: ...

    def bounding_position(self) -> Optional[Tuple[float, float]]: ...

    def highlight(self) -> None: ...


class BrowserDriver(Protocol):
    def locate(self, selector: Selector, scope: Optional[ControlHandle] = None) -> Optional[ControlHandle]: ...

    def locate_nth(
        self, selector: Selector, index: int, scope: Optional[ControlHandle] = None
    ) -> Optional[ControlHandle]: ...

    def screenshot(self, path: Path) -> None: ...


class PlaywrightControl:
    """A single rendered control, wrapping a Playwright locator."""

    def __init__(self, locator: Locator, description: str = "") -> None:
        self.locator = locator
        self.description = description

    def click(self) -> None:
        self.locator.click()

    def double_click(self) -> None:
        self.locator.dblclick()

    def right_click(self) -> None:
        self.locator.click(button="right")

    def hover(self) -> None:
        self.locator.hover()

    def text(self) -> str:
        return (self.locator.inner_text() or "").strip()

    def attribute(self, name: str) -> Optional[str]:
        return self.locator.get_attribute(name)

    def is_present(self) -> bool:
        return self.locator.count() > 0

    def is_enabled(self) -> bool:
        return self.locator.is_enabled()

    def is_visible(self) -> bool:
        return self.locator.is_visible()

    def bounding_position(self) -> Optional[Tuple[float, float]]:
        box = self.locator.bounding_box()
        if box is None:
            return None
        return box["x"], box["y"]

    def highlight(self) -> None:
        self.locator.highlight()

    def __repr__(self) -> str:
        return f"PlaywrightControl({self.description!r})"


class PlaywrightDriver:
    """Locates controls on a Playwright page, trying strategies in priority order."""

    def __init__(self, page: Page) -> None:
        self.page = page

    def _root(self, scope: Optional[ControlHandle]) -> Page | Locator:
        if scope is None:
            return self.page
        if not isinstance(scope, PlaywrightControl):
            raise TypeError(f"scope must be a PlaywrightControl, got {type(scope).__name__}")
        return scope.locator

    def _candidates(self, selector: Selector, scope: Optional[ControlHandle]):
        root = self._root(scope)
        for strategy, value in selector.strategies():
            if strategy == "css":
                yield strategy, value, root.locator(value)
            elif strategy == "xpath":
                yield strategy, value, root.locator(f"xpath={value}")
            elif strategy == "text":
                yield strategy, value, root.get_by_text(value, exact=True)
            elif strategy == "role":
                name = selector.text or selector.aria_label or None
                yield strategy, value, root.get_by_role(value, name=name)  # type: ignore[arg-type]
            elif strategy == "aria_label":
                yield strategy, value, root.get_by_label(value, exact=True)
            elif strategy == "test_id":
                yield strategy, value, root.get_by_test_id(value)

    def locate(self, selector: Selector, scope: Optional[ControlHandle] = None) -> Optional[PlaywrightControl]:
        return self.locate_nth(selector, 0, scope=scope)

    def locate_nth(
        self, selector: Selector, index: int, scope: Optional[ControlHandle] = None
    ) -> Optional[PlaywrightControl]:
        for strategy, value, locator in self._candidates(selector, scope):
            count = locator.count()
            if count > index:
                log.debug("Located %s=%r (%d of %d)", strategy, value, index + 1, count)
                return PlaywrightControl(locator.nth(index), f"{strategy}={value}[{index}]")
            if count:
                # The first matching strategy owns the item sequence.
                return None
        return None

    def screenshot(self, path: Path) -> None:
        self.page.screenshot(path=str(path))
