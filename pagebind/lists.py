"""Locate items inside repeating list structures."""

from __future__ import annotations

import itertools
import logging
from typing import Optional

from .browser.locator import ElementLocator
from .criteria import CriteriaMatcher, ValidationTable
from .errors import IndexOutOfRangeError, NoMatchFoundError
from .pages import PageObject

log = logging.getLogger(__name__)


class ListItemResolver:
    """Find one item of a list property by ordinal or by criteria.

    Both lookups return the item's own page object and leave the page that
    owns the list untouched.
    """

    def __init__(self, element_locator: ElementLocator, matcher: Optional[CriteriaMatcher] = None) -> None:
        self.element_locator = element_locator
        self.matcher = matcher or CriteriaMatcher()

    def get_item_at(self, list_name: str, index: int) -> PageObject:
        """Return item ``index`` (1-based), reading no further than needed."""

        if index < 1:
            raise ValueError(f"list item numbers start at 1, got {index}")
        items = self.element_locator.get_list(list_name)
        seen = 0
        for item in itertools.islice(items, index):
            seen += 1
            if seen == index:
                return item
        raise IndexOutOfRangeError(items.name, index, seen)

    def find_item(self, list_name: str, table: ValidationTable, *, match: bool = True) -> PageObject:
        """Return the first item whose fields satisfy (or, with ``match=False``, fail) ``table``."""

        items = self.element_locator.get_list(list_name)
        checked = 0
        for item in items:
            checked += 1
            if self.matcher.evaluate(item.field_values(), table) is match:
                log.debug("Item %d of %s matched criteria", checked, items.name)
                return item
        log.info("No item in %s matched criteria after checking %d item(s)", items.name, checked)
        raise NoMatchFoundError(items.name, table.render(), match=match)
