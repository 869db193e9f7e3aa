"""Base classes for actions and pipeline hooks."""

from __future__ import annotations

from typing import Any, ClassVar, Optional, Type

from ..browser.driver import ControlHandle
from ..browser.locator import ElementLocator
from ..pages import PageObject
from ..pipeline.models import ActionContext, ActionResult
from ..pipeline.registry import Capability


class ActionBase:
    """An operation dispatched through the pipeline against one page."""

    capabilities: ClassVar[Capability] = Capability.NONE
    context_type: ClassVar[Type[ActionContext]] = ActionContext

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name or type(self).__name__
        self.page: Optional[PageObject] = None
        self.context: Optional[ActionContext] = None
        self._element_locator: Optional[ElementLocator] = None

    def bind(self, page: PageObject, context: ActionContext, element_locator: ElementLocator) -> None:
        if not isinstance(context, self.context_type):
            raise TypeError(
                f"{self.name} expects {self.context_type.__name__}, got {type(context).__name__}"
            )
        self.page = page
        self.context = context
        self._element_locator = element_locator

    @property
    def element_locator(self) -> ElementLocator:
        if self._element_locator is None:
            raise RuntimeError(f"{self.name} has not been bound to a page")
        return self._element_locator

    def execute(self, context: Any) -> ActionResult:
        raise NotImplementedError


class ElementActionBase(ActionBase):
    """Action acting on a single control, optionally waiting for it to settle first."""

    def __init__(self, name: Optional[str] = None, *, wait_for_still: bool = False) -> None:
        super().__init__(name)
        self.wait_for_still = wait_for_still

    def execute(self, context: ActionContext) -> ActionResult:
        handle = self.element_locator.get_element(context.property_name, wait_for_still=self.wait_for_still)
        self.act(handle)
        return ActionResult.successful()

    def act(self, handle: ControlHandle) -> None:
        raise NotImplementedError


class Hook:
    """Base for pre-, post- and locator-action hooks.

    Subclasses declare what they observe through ``capabilities`` and
    override the matching callbacks; the rest stay no-ops.
    """

    capabilities: ClassVar[Capability] = Capability.NONE

    def on_pre_action(self, action: ActionBase) -> None:
        pass

    def on_post_action(self, action: ActionBase, result: ActionResult) -> None:
        pass

    def on_locate(self, page: PageObject, property_name: str) -> None:
        pass

    def on_locate_complete(self, page: PageObject, property_name: str, handle: ControlHandle) -> None:
        pass
