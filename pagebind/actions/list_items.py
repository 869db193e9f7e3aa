"""Actions that move the scenario onto a single item of a list."""

from __future__ import annotations

from pydantic import Field

from ..criteria import CriteriaMatcher, ValidationTable
from ..lists import ListItemResolver
from ..pipeline.models import ActionContext, ActionResult
from .base import ActionBase


class ListItemByIndexContext(ActionContext):
    index: int = Field(ge=1)


class ListItemByCriteriaContext(ActionContext):
    validation_table: ValidationTable
    match: bool = True


class GetListItemByIndexAction(ActionBase):
    context_type = ListItemByIndexContext

    def execute(self, context: ListItemByIndexContext) -> ActionResult:
        resolver = ListItemResolver(self.element_locator)
        item = resolver.get_item_at(context.property_name, context.index)
        return ActionResult.successful(item)


class GetListItemByCriteriaAction(ActionBase):
    context_type = ListItemByCriteriaContext

    def __init__(self, matcher: CriteriaMatcher) -> None:
        super().__init__()
        self.matcher = matcher

    def execute(self, context: ListItemByCriteriaContext) -> ActionResult:
        resolver = ListItemResolver(self.element_locator, self.matcher)
        item = resolver.find_item(context.property_name, context.validation_table, match=context.match)
        return ActionResult.successful(item)
