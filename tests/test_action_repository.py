import threading
from typing import Protocol

import pytest

from pagebind.actions import ActionLoggingHook, HighlightPreAction, Hook
from pagebind.config import BindingConfig
from pagebind.errors import ConstructionError
from pagebind.pipeline.container import ObjectContainer
from pagebind.pipeline.registry import ActionRepository, Capability


class PreHook(Hook):
    capabilities = Capability.PRE_ACTION


class SecondPreHook(Hook):
    capabilities = Capability.PRE_ACTION


class PrePostHook(Hook):
    capabilities = Capability.PRE_ACTION | Capability.POST_ACTION


class PlainType:
    pass


class BrokenHook:
    capabilities = Capability.POST_ACTION


class Clock(Protocol):
    def now(self) -> float: ...


class NeedsClock(Hook):
    capabilities = Capability.PRE_ACTION

    def __init__(self, clock: Clock) -> None:
        self.clock = clock


class NeedsConfig:
    def __init__(self, config: BindingConfig) -> None:
        self.config = config


class Egg:
    def __init__(self, chicken: "Chicken") -> None:
        self.chicken = chicken


class Chicken:
    def __init__(self, egg: Egg) -> None:
        self.egg = egg


@pytest.fixture
def container(config):
    container = ObjectContainer()
    container.register_instance(BindingConfig, config)
    return container


def test_getters_are_empty_before_initialize(container):
    repository = ActionRepository(container, known_types=[PreHook])

    assert not repository.initialized
    assert repository.get_pre_actions() == ()
    assert repository.get_post_actions() == ()
    assert repository.get_locator_actions() == ()


def test_initialize_classifies_builtin_hooks(container):
    repository = ActionRepository(container, known_types=[HighlightPreAction, ActionLoggingHook])

    repository.initialize()

    assert [type(hook) for hook in repository.get_pre_actions()] == [HighlightPreAction]
    assert [type(hook) for hook in repository.get_post_actions()] == [ActionLoggingHook]
    assert [type(hook) for hook in repository.get_locator_actions()] == [ActionLoggingHook]
    assert repository.get_post_actions()[0] is repository.get_locator_actions()[0]


def test_initialize_is_idempotent(container):
    repository = ActionRepository(container, known_types=[PreHook])

    repository.initialize()
    first = repository.get_pre_actions()
    repository.initialize()

    assert repository.get_pre_actions() is first


def test_registration_order_is_preserved(container):
    repository = ActionRepository(container, known_types=[SecondPreHook, PreHook])
    repository.initialize()

    assert [type(hook) for hook in repository.get_pre_actions()] == [SecondPreHook, PreHook]


def test_register_type_adds_to_every_declared_capability(container):
    repository = ActionRepository(container)
    repository.initialize()

    repository.register_type(PrePostHook)

    assert [type(hook) for hook in repository.get_pre_actions()] == [PrePostHook]
    assert [type(hook) for hook in repository.get_post_actions()] == [PrePostHook]
    assert repository.get_locator_actions() == ()


def test_registering_the_same_type_twice_is_a_no_op(container):
    repository = ActionRepository(container, known_types=[PreHook])
    repository.initialize()

    repository.register_type(PreHook)
    repository.register_type(PreHook)

    assert len(repository.get_pre_actions()) == 1


def test_type_without_capabilities_is_ignored(container):
    repository = ActionRepository(container, known_types=[PlainType])
    repository.initialize()

    assert repository.get_pre_actions() == ()
    assert repository.get_post_actions() == ()


def test_declared_capability_without_callback_is_rejected(container):
    repository = ActionRepository(container)

    with pytest.raises(TypeError, match="on_post_action"):
        repository.register_type(BrokenHook)


def test_create_action_injects_registered_dependencies(container, config):
    repository = ActionRepository(container)

    created = repository.create_action(NeedsConfig)

    assert created.config is config
    assert repository.create_action(NeedsConfig) is not created


def test_create_action_with_unresolvable_dependency_raises(container):
    repository = ActionRepository(container)

    with pytest.raises(ConstructionError) as excinfo:
        repository.create_action(NeedsClock)

    assert excinfo.value.type_name == "Clock"


def test_unresolvable_hook_fails_initialize(container):
    repository = ActionRepository(container, known_types=[NeedsClock])

    with pytest.raises(ConstructionError):
        repository.initialize()

    assert not repository.initialized


def test_concurrent_initialize_publishes_one_snapshot(container):
    repository = ActionRepository(container, known_types=[PreHook, PrePostHook])
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        repository.initialize()
        seen.append(repository.get_pre_actions())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(seen) == 8
    assert all(actions is seen[0] for actions in seen)
    assert len(seen[0]) == 2


def test_circular_dependency_raises_construction_error(container):
    with pytest.raises(ConstructionError, match="Egg -> Chicken -> Egg"):
        container.resolve(Egg)


def test_concurrent_resolves_of_the_same_type_both_succeed(container):
    barrier = threading.Barrier(2, timeout=5)

    class SlowToBuild:
        def __init__(self) -> None:
            barrier.wait()

    repository = ActionRepository(container)
    built, errors = [], []

    def worker():
        try:
            built.append(repository.create_action(SlowToBuild))
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(built) == 2
    assert built[0] is not built[1]
