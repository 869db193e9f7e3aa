"""Bounded polling until an element reaches a required state."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, List, Optional, Tuple, TypeVar

from ..config import BindingConfig
from ..errors import WaitTimeoutError
from .driver import ControlHandle

log = logging.getLogger(__name__)

T = TypeVar("T")


class WaitCondition(str, Enum):
    EXISTS = "Exists"
    NOT_MOVING = "NotMoving"
    BECOMES_ENABLED = "BecomesEnabled"
    BECOMES_VISIBLE = "BecomesVisible"
    NOT_EXISTS = "NotExists"


class WaitEngine:
    """Synchronous poller driven by the configured interval and timeout.

    ``clock`` and ``sleep`` default to the real monotonic clock and
    :func:`time.sleep`; tests pass a virtual clock instead.
    """

    def __init__(
        self,
        config: BindingConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.poll_interval_ms = config.poll_interval_ms
        self.default_timeout_ms = config.default_element_timeout_ms
        self._clock = clock
        self._sleep = sleep

    def wait_for_value(
        self,
        supplier: Callable[[], Optional[T]],
        condition: WaitCondition,
        timeout_ms: Optional[int] = None,
        element: Optional[str] = None,
    ) -> T:
        """Poll ``supplier`` until it returns a truthy value and return it."""

        timeout = self.default_timeout_ms if timeout_ms is None else timeout_ms
        started = self._clock()
        attempts = 0
        while True:
            attempts += 1
            value = supplier()
            if value:
                if attempts > 1:
                    log.debug("%s satisfied for %s after %d polls", condition.value, element or "predicate", attempts)
                return value
            elapsed_ms = round((self._clock() - started) * 1000, 3)
            if elapsed_ms >= timeout:
                log.warning(
                    "Timed out after %.0f ms waiting for %s on %s",
                    elapsed_ms,
                    condition.value,
                    element or "predicate",
                )
                raise WaitTimeoutError(condition.value, elapsed_ms, timeout, element)
            self._sleep(min(self.poll_interval_ms, max(timeout - elapsed_ms, 0)) / 1000)

    def wait_for(
        self,
        predicate: Callable[[], bool],
        condition: WaitCondition,
        timeout_ms: Optional[int] = None,
        element: Optional[str] = None,
    ) -> None:
        self.wait_for_value(lambda: bool(predicate()), condition, timeout_ms=timeout_ms, element=element)

    def wait_for_element(
        self,
        handle: ControlHandle,
        condition: WaitCondition,
        timeout_ms: Optional[int] = None,
        element: Optional[str] = None,
    ) -> None:
        self.wait_for(element_predicate(handle, condition), condition, timeout_ms=timeout_ms, element=element)


def element_predicate(handle: ControlHandle, condition: WaitCondition) -> Callable[[], bool]:
    """Build the check a wait condition samples on each poll."""

    if condition is WaitCondition.EXISTS:
        return handle.is_present
    if condition is WaitCondition.NOT_EXISTS:
        return lambda: not handle.is_present()
    if condition is WaitCondition.BECOMES_ENABLED:
        return handle.is_enabled
    if condition is WaitCondition.BECOMES_VISIBLE:
        return handle.is_visible
    if condition is WaitCondition.NOT_MOVING:
        # The first poll only records a sample.
        samples: List[Optional[Tuple[float, float]]] = []

        def not_moving() -> bool:
            current = handle.bounding_position()
            stable = bool(samples) and current is not None and current == samples[-1]
            samples[:] = [current]
            return stable

        return not_moving
    raise ValueError(f"Unsupported wait condition {condition!r}")
