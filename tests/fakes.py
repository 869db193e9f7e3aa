"""In-memory stand-ins for the browser driver used across the tests."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from pagebind.pages import ElementKind, PageDefinition, PropertyMetadata, Selector


class FakeControl:
    def __init__(
        self,
        text: str = "",
        *,
        enabled: bool = True,
        visible: bool = True,
        positions: Optional[Sequence[Tuple[float, float]]] = None,
        attributes: Optional[Dict[str, str]] = None,
        children: Optional[Dict[str, List["FakeControl"]]] = None,
    ) -> None:
        self._text = text
        self.enabled = enabled
        self.visible = visible
        self.present = True
        self.positions = list(positions or [(0.0, 0.0)])
        self.attributes = attributes or {}
        self.children = children or {}
        self.events: List[str] = []

    def click(self) -> None:
        self.events.append("click")

    def double_click(self) -> None:
        self.events.append("double_click")

    def right_click(self) -> None:
        self.events.append("right_click")

    def hover(self) -> None:
        self.events.append("hover")

    def highlight(self) -> None:
        self.events.append("highlight")

    def text(self) -> str:
        return self._text

    def attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def is_present(self) -> bool:
        return self.present

    def is_enabled(self) -> bool:
        return self.enabled

    def is_visible(self) -> bool:
        return self.visible

    def bounding_position(self) -> Optional[Tuple[float, float]]:
        if len(self.positions) > 1:
            return self.positions.pop(0)
        return self.positions[0]


class FakeDriver:
    """Looks controls up by their ``css`` selector in nested dictionaries.

    ``delays`` maps a css selector to the number of lookups that return
    nothing before the control shows up.
    """

    def __init__(self, root: Dict[str, List[FakeControl]], delays: Optional[Dict[str, int]] = None) -> None:
        self.root = root
        self.delays = dict(delays or {})
        self.calls: List[Tuple[str, int]] = []
        self.screenshots: List[Path] = []

    def locate(self, selector: Selector, scope: Optional[FakeControl] = None) -> Optional[FakeControl]:
        return self.locate_nth(selector, 0, scope=scope)

    def locate_nth(self, selector: Selector, index: int, scope: Optional[FakeControl] = None) -> Optional[FakeControl]:
        css = selector.css or ""
        self.calls.append((css, index))
        if self.delays.get(css, 0) > 0:
            self.delays[css] -= 1
            return None
        children = scope.children if scope is not None else self.root
        matches = children.get(css, [])
        return matches[index] if index < len(matches) else None

    def screenshot(self, path: Path) -> None:
        self.screenshots.append(path)


class VirtualClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def student_item_definition() -> PageDefinition:
    return PageDefinition(
        name="StudentItem",
        properties={
            "Last Name": PropertyMetadata(name="Last Name", locator=Selector(css=".last-name")),
            "First Name": PropertyMetadata(name="First Name", locator=Selector(css=".first-name")),
            "Enrollment Date": PropertyMetadata(name="Enrollment Date", locator=Selector(css=".enrolled")),
        },
    )


def students_search_definition() -> PageDefinition:
    return PageDefinition(
        name="StudentsSearch",
        properties={
            "Results": PropertyMetadata(
                name="Results",
                locator=Selector(css="#results"),
                kind=ElementKind.LIST,
                item_locator=Selector(css="tr"),
                item=student_item_definition(),
            ),
            "Students": PropertyMetadata(name="Students", locator=Selector(css="#students-link"), kind=ElementKind.LINK),
        },
    )
