"""Action pipeline: pre-actions, the action itself, then post-actions."""

from __future__ import annotations

import logging
import time
from typing import Type

from ..browser.locator import ElementLocator
from ..browser.waits import WaitEngine
from ..pages import PageObject
from .models import ActionContext, ActionResult
from .registry import ActionRepository

log = logging.getLogger(__name__)


class ActionPipelineService:
    """Dispatches one action against the current page.

    Pre-actions run in registration order and any failure among them becomes
    the result without running the action. Post-actions always run after the
    action and observe its result. A post-action that raises is logged and
    the rest still run. The action's own result is returned unchanged and
    nothing is retried here.
    """

    def __init__(self, repository: ActionRepository, wait_engine: WaitEngine) -> None:
        self.repository = repository
        self.wait_engine = wait_engine

    def perform(self, action_type: Type, page: PageObject, context: ActionContext) -> ActionResult:
        self.repository.initialize()
        action = self.repository.create_action(action_type)
        locator = ElementLocator(page, self.wait_engine, self.repository.get_locator_actions())
        action.bind(page, context, locator)

        started = time.monotonic()
        for pre_action in self.repository.get_pre_actions():
            try:
                pre_action.on_pre_action(action)
            except Exception as exc:
                log.warning("Pre-action %s failed before %s: %s", type(pre_action).__name__, action.name, exc)
                return ActionResult.failure(exc)

        try:
            result = action.execute(context)
        except Exception as exc:
            log.debug("Action %s raised %s", action.name, type(exc).__name__, exc_info=True)
            result = ActionResult.failure(exc)

        for post_action in self.repository.get_post_actions():
            try:
                post_action.on_post_action(action, result)
            except Exception:
                log.exception("Post-action %s failed after %s", type(post_action).__name__, action.name)

        log.debug(
            "%s on %s finished in %.0f ms (success=%s)",
            action.name,
            page.name,
            (time.monotonic() - started) * 1000,
            result.success,
        )
        return result
