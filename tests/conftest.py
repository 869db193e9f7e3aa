"""Pytest configuration ensuring local packages are importable."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_TESTS = Path(__file__).resolve().parent
for _path in (_ROOT, _TESTS):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from fakes import FakeControl, FakeDriver, VirtualClock, students_search_definition  # noqa: E402
from pagebind.browser.waits import WaitEngine  # noqa: E402
from pagebind.config import BindingConfig  # noqa: E402
from pagebind.pages import PageObject  # noqa: E402


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


@pytest.fixture
def config() -> BindingConfig:
    return BindingConfig(default_element_timeout_ms=1000, poll_interval_ms=100)


@pytest.fixture
def wait_engine(config, clock) -> WaitEngine:
    return WaitEngine(config, clock=clock, sleep=clock.sleep)


@pytest.fixture
def students_driver() -> FakeDriver:
    rows = [
        FakeControl(children={".last-name": [FakeControl("Alexander")], ".first-name": [FakeControl("Carson")]}),
        FakeControl(children={".last-name": [FakeControl("Alonso")], ".first-name": [FakeControl("Meredith")]}),
        FakeControl(children={".last-name": [FakeControl("Anand")], ".first-name": [FakeControl("Arturo")]}),
    ]
    results = FakeControl(children={"tr": rows})
    return FakeDriver({"#results": [results], "#students-link": [FakeControl("Students")]})


@pytest.fixture
def students_page(students_driver) -> PageObject:
    return PageObject(students_search_definition(), students_driver)
