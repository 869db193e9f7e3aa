"""Built-in pipeline hooks."""

from __future__ import annotations

import logging
from typing import Optional

from ..browser.driver import ControlHandle
from ..config import BindingConfig
from ..pages import PageObject
from ..pipeline.models import ActionResult
from ..pipeline.registry import Capability
from ..structured_logging import ActionEvent, ActionEventLog
from .base import ActionBase, Hook

log = logging.getLogger(__name__)


class HighlightPreAction(Hook):
    """Highlights the target control before the action runs when highlight mode is on."""

    capabilities = Capability.PRE_ACTION

    def __init__(self, config: BindingConfig) -> None:
        self.enabled = config.highlight_mode

    def on_pre_action(self, action: ActionBase) -> None:
        if not self.enabled or action.context is None:
            return
        locator = action.element_locator
        if not locator.has_element(action.context.property_name):
            return
        locator.get_element(action.context.property_name).highlight()


class ActionLoggingHook(Hook):
    """Logs element resolutions and action outcomes.

    With ``event_log_root`` configured, every outcome is also appended to a
    JSONL event log and failures get a page screenshot.
    """

    capabilities = Capability.POST_ACTION | Capability.LOCATOR_ACTION

    def __init__(self, config: BindingConfig) -> None:
        self.config = config
        self._events: Optional[ActionEventLog] = None

    @property
    def events(self) -> Optional[ActionEventLog]:
        if self._events is None and self.config.event_log_root is not None:
            self._events = ActionEventLog(self.config.event_log_root)
        return self._events

    def on_locate(self, page: PageObject, property_name: str) -> None:
        log.debug("Locating %s on %s", property_name, page.name)

    def on_locate_complete(self, page: PageObject, property_name: str, handle: ControlHandle) -> None:
        log.debug("Located %s on %s: %r", property_name, page.name, handle)

    def on_post_action(self, action: ActionBase, result: ActionResult) -> None:
        page_name = action.page.name if action.page is not None else None
        if result.success:
            log.info("%s succeeded on %s", action.name, page_name)
        else:
            log.warning("%s failed on %s: %s", action.name, page_name, result.error)

        events = self.events
        if events is None:
            return
        screenshot_path = None
        if not result.success and action.page is not None:
            screenshot_path = events.screenshot_path()
            try:
                action.page.driver.screenshot(screenshot_path)
            except Exception as exc:
                log.warning("Failure screenshot for %s could not be taken: %s", action.name, exc)
                screenshot_path = None
        events.record(
            ActionEvent(
                action=action.name,
                page=page_name,
                success=result.success,
                context=action.context.model_dump() if action.context is not None else {},
                error=result.as_dict().get("error"),
                screenshot_path=str(screenshot_path) if screenshot_path else None,
            )
        )

    def close(self) -> None:
        if self._events is not None:
            self._events.close()
            self._events = None
