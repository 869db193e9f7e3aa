"""Wiring of the container, repository, wait engine and pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .actions import BUILTIN_HOOKS
from .browser.waits import WaitEngine
from .config import BindingConfig, load_config
from .pipeline.container import ObjectContainer
from .pipeline.registry import ActionRepository
from .pipeline.service import ActionPipelineService


@dataclass(slots=True)
class Runtime:
    config: BindingConfig
    container: ObjectContainer
    repository: ActionRepository
    wait_engine: WaitEngine
    pipeline: ActionPipelineService

    def close(self) -> None:
        """Close every hook instance that holds resources, once each."""

        seen = set()
        for hook in (
            *self.repository.get_pre_actions(),
            *self.repository.get_post_actions(),
            *self.repository.get_locator_actions(),
        ):
            if id(hook) in seen:
                continue
            seen.add(id(hook))
            close = getattr(hook, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "Runtime":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_runtime(
    config: Optional[BindingConfig] = None,
    *,
    hooks: Iterable[type] = BUILTIN_HOOKS,
    wait_engine: Optional[WaitEngine] = None,
) -> Runtime:
    """Create a runtime from one configuration snapshot.

    ``hooks`` are classified on first use, in the given order; more can be
    added later through ``runtime.repository.register_type``.
    """

    config = config or load_config()
    container = ObjectContainer()
    container.register_instance(BindingConfig, config)

    wait_engine = wait_engine or WaitEngine(config)
    container.register_instance(WaitEngine, wait_engine)

    repository = ActionRepository(container, known_types=hooks)
    container.register_instance(ActionRepository, repository)

    pipeline = ActionPipelineService(repository, wait_engine)
    container.register_instance(ActionPipelineService, pipeline)
    return Runtime(config, container, repository, wait_engine, pipeline)
