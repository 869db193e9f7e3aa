"""Built-in actions and hooks."""

from .base import ActionBase, ElementActionBase, Hook
from .clicks import ButtonClickAction, ButtonDoubleClickAction, ButtonRightClickAction, HoverOverElementAction
from .hooks import ActionLoggingHook, HighlightPreAction
from .list_items import (
    GetListItemByCriteriaAction,
    GetListItemByIndexAction,
    ListItemByCriteriaContext,
    ListItemByIndexContext,
)

# Registration order is execution order.
BUILTIN_HOOKS = (HighlightPreAction, ActionLoggingHook)

__all__ = [
    "ActionBase",
    "ActionLoggingHook",
    "BUILTIN_HOOKS",
    "ButtonClickAction",
    "ButtonDoubleClickAction",
    "ButtonRightClickAction",
    "ElementActionBase",
    "GetListItemByCriteriaAction",
    "GetListItemByIndexAction",
    "HighlightPreAction",
    "Hook",
    "HoverOverElementAction",
    "ListItemByCriteriaContext",
    "ListItemByIndexContext",
]
