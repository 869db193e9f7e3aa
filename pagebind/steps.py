"""Step handlers for clicking elements and moving onto list items.

The BDD runner parses step text and calls these handlers with plain
arguments, e.g. ``"I am on list Results item 2"`` becomes
``ensure_on_list_item("Results", 2)``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence, Type, Union

from .actions import (
    ButtonClickAction,
    ButtonDoubleClickAction,
    ButtonRightClickAction,
    GetListItemByCriteriaAction,
    GetListItemByIndexAction,
    HoverOverElementAction,
    ListItemByCriteriaContext,
    ListItemByIndexContext,
)
from .actions.base import ActionBase
from .criteria import ValidationTable
from .errors import NoPageContextError
from .naming import to_identifier
from .pages import PageObject
from .pipeline.models import ActionContext
from .pipeline.service import ActionPipelineService

log = logging.getLogger(__name__)

CriteriaRows = Union[ValidationTable, Iterable[Mapping[str, Any]], Iterable[Sequence[Any]]]


class ScenarioContext:
    """Holds the page the current scenario is on."""

    def __init__(self, page: Optional[PageObject] = None) -> None:
        self._page = page

    def get_page(self) -> PageObject:
        if self._page is None:
            raise NoPageContextError()
        return self._page

    def update_page(self, page: PageObject) -> None:
        log.info("Page context is now %s", page.name)
        self._page = page


def to_validation_table(rows: CriteriaRows) -> ValidationTable:
    if isinstance(rows, ValidationTable):
        return rows
    rows = list(rows)
    if rows and isinstance(rows[0], Mapping):
        return ValidationTable.from_step_table(rows)
    return ValidationTable.from_rows(rows)


class SelectionSteps:
    def __init__(self, pipeline: ActionPipelineService, scenario_context: ScenarioContext) -> None:
        self.pipeline = pipeline
        self.scenario_context = scenario_context

    def choose(self, link_name: str) -> None:
        """I choose <link>"""
        self._perform(ButtonClickAction, link_name)

    def click_explicit(self, link_name: str) -> None:
        """I click "<link>" """
        self._perform(ButtonClickAction, to_identifier(link_name))

    def double_click(self, element_name: str) -> None:
        self._perform(ButtonDoubleClickAction, to_identifier(element_name))

    def right_click(self, element_name: str) -> None:
        self._perform(ButtonRightClickAction, to_identifier(element_name))

    def hover_over(self, element_name: str) -> None:
        self._perform(HoverOverElementAction, element_name)

    def ensure_on_list_item(self, list_name: str, item_number: int) -> PageObject:
        """I am on list <list> item <n>"""

        page = self.scenario_context.get_page()
        context = ListItemByIndexContext(property_name=list_name, index=item_number)
        item = self.pipeline.perform(GetListItemByIndexAction, page, context).check_result(PageObject)
        self.scenario_context.update_page(item)
        return item

    def go_to_list_item_matching(self, list_name: str, criteria: CriteriaRows) -> PageObject:
        """I am on <list> list item matching criteria"""

        page = self.scenario_context.get_page()
        context = ListItemByCriteriaContext(property_name=list_name, validation_table=to_validation_table(criteria))
        item = self.pipeline.perform(GetListItemByCriteriaAction, page, context).check_result(PageObject)
        self.scenario_context.update_page(item)
        return item

    def _perform(self, action_type: Type[ActionBase], property_name: str) -> None:
        page = self.scenario_context.get_page()
        context = ActionContext(property_name=property_name)
        self.pipeline.perform(action_type, page, context).check_result()
