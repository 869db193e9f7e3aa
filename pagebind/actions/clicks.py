"""Click, double-click, right-click and hover actions."""

from __future__ import annotations

from ..browser.driver import ControlHandle
from ..config import BindingConfig
from .base import ElementActionBase


class ButtonClickAction(ElementActionBase):
    def __init__(self, config: BindingConfig) -> None:
        super().__init__(wait_for_still=config.wait_for_still_element_before_clicking)

    def act(self, handle: ControlHandle) -> None:
        handle.click()


class ButtonDoubleClickAction(ElementActionBase):
    def __init__(self, config: BindingConfig) -> None:
        super().__init__(wait_for_still=config.wait_for_still_element_before_clicking)

    def act(self, handle: ControlHandle) -> None:
        handle.double_click()


class ButtonRightClickAction(ElementActionBase):
    def __init__(self, config: BindingConfig) -> None:
        super().__init__(wait_for_still=config.wait_for_still_element_before_clicking)

    def act(self, handle: ControlHandle) -> None:
        handle.right_click()


class HoverOverElementAction(ElementActionBase):
    """Hovers over the control as soon as it is attached."""

    def act(self, handle: ControlHandle) -> None:
        handle.hover()
