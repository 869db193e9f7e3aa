"""Browser-facing pieces: driver adapter, wait engine and locator chain."""

from .driver import BrowserDriver, ControlHandle, PlaywrightControl, PlaywrightDriver
from .locator import ElementLocator
from .waits import WaitCondition, WaitEngine

__all__ = [
    "BrowserDriver",
    "ControlHandle",
    "ElementLocator",
    "PlaywrightControl",
    "PlaywrightDriver",
    "WaitCondition",
    "WaitEngine",
]
