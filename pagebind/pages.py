"""Page object model: logical element metadata bound to a browser driver."""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import PropertyKindError
from .naming import to_lookup_key

if TYPE_CHECKING:
    from .browser.driver import BrowserDriver, ControlHandle

SelectorStrategy = str


class Selector(BaseModel):
    """Composite locator strategy for a logical element."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    css: Optional[str] = None
    xpath: Optional[str] = None
    text: Optional[str] = None
    role: Optional[str] = None
    aria_label: Optional[str] = None
    test_id: Optional[str] = None
    priority: Optional[Tuple[SelectorStrategy, ...]] = None

    _DEFAULT_PRIORITY: ClassVar[Tuple[SelectorStrategy, ...]] = (
        "test_id",
        "css",
        "role",
        "aria_label",
        "text",
        "xpath",
    )

    @model_validator(mode="before")
    @classmethod
    def _coerce_from_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"css": value}
        return value

    @model_validator(mode="after")
    def _require_strategy(self) -> "Selector":
        if not self.strategies():
            raise ValueError("selector must define at least one locator strategy")
        return self

    @field_validator("priority", mode="before")
    @classmethod
    def _validate_priority(cls, value: Any) -> Optional[Tuple[str, ...]]:
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        ordered: List[str] = []
        for item in value:
            if item not in cls._DEFAULT_PRIORITY:
                raise ValueError(f"unknown locator strategy '{item}'")
            if item not in ordered:
                ordered.append(item)
        return tuple(ordered)

    def effective_priority(self) -> Tuple[SelectorStrategy, ...]:
        if self.priority:
            return self.priority
        return self._DEFAULT_PRIORITY

    def strategies(self) -> List[Tuple[SelectorStrategy, str]]:
        """Defined strategies in the order they should be tried."""

        return [
            (strategy, getattr(self, strategy))
            for strategy in self.effective_priority()
            if getattr(self, strategy)
        ]

    def describe(self) -> str:
        return ", ".join(f"{strategy}={value!r}" for strategy, value in self.strategies())


class ElementKind(str, Enum):
    BUTTON = "button"
    LINK = "link"
    TEXT = "text"
    INPUT = "input"
    CHECKBOX = "checkbox"
    SELECT = "select"
    IMAGE = "image"
    LIST = "list"
    ELEMENT = "element"


class PropertyMetadata(BaseModel):
    """How one logical element is located and what kind of control it is."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str
    selector: Selector = Field(alias="locator")
    kind: ElementKind = ElementKind.ELEMENT
    item_selector: Optional[Selector] = Field(default=None, alias="item_locator")
    item: Optional["PageDefinition"] = None

    @model_validator(mode="after")
    def _check_list_shape(self) -> "PropertyMetadata":
        if self.kind is ElementKind.LIST and (self.item_selector is None or self.item is None):
            raise ValueError(f"list property '{self.name}' needs item_locator and item")
        return self

    @property
    def key(self) -> str:
        return to_lookup_key(self.name)

    @property
    def is_list(self) -> bool:
        return self.kind is ElementKind.LIST


class PageDefinition(BaseModel):
    """Named set of logical elements, keyed by lookup key."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    properties: Dict[str, PropertyMetadata] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _name_properties(cls, value: Any) -> Any:
        if not isinstance(value, dict) or not isinstance(value.get("properties"), (dict, list)):
            return value
        raw = value["properties"]
        items = raw.items() if isinstance(raw, dict) else ((None, entry) for entry in raw)
        named: Dict[str, Any] = {}
        for display_name, entry in items:
            if isinstance(entry, dict):
                entry = {"name": display_name, **entry} if display_name is not None else dict(entry)
                label = entry.get("name")
            else:
                label = getattr(entry, "name", display_name)
            key = to_lookup_key(str(label or ""))
            if not key:
                raise ValueError("every property needs a name")
            if key in named:
                raise ValueError(f"duplicate property '{label}' on page '{value.get('name')}'")
            named[key] = entry
        return {**value, "properties": named}

    def get(self, name: str) -> Optional[PropertyMetadata]:
        return self.properties.get(to_lookup_key(name))


PropertyMetadata.model_rebuild()


class PageObject:
    """A page definition bound to a driver and, for list items, a scope handle.

    Page objects are never mutated after construction; navigating or
    selecting a list item produces a new one.
    """

    def __init__(
        self,
        definition: PageDefinition,
        driver: "BrowserDriver",
        scope: Optional["ControlHandle"] = None,
        *,
        label: Optional[str] = None,
    ) -> None:
        self.definition = definition
        self.driver = driver
        self.scope = scope
        self._label = label

    @property
    def name(self) -> str:
        return self._label or self.definition.name

    def get_property(self, name: str) -> Optional[PropertyMetadata]:
        return self.definition.get(name)

    def locate(self, metadata: PropertyMetadata) -> Optional["ControlHandle"]:
        return self.driver.locate(metadata.selector, scope=self.scope)

    def list_items(self, metadata: PropertyMetadata, container: "ControlHandle") -> "ListItems":
        return ListItems(self, metadata, container)

    def field_values(self) -> "FieldValues":
        return FieldValues(self)

    def __repr__(self) -> str:
        return f"PageObject({self.name!r})"


class ListItems:
    """Rendered items of a list property, materialized one at a time.

    Every iteration re-queries the driver, so the sequence reflects the
    items rendered at the moment it is enumerated.
    """

    def __init__(self, page: PageObject, metadata: PropertyMetadata, container: "ControlHandle") -> None:
        if not metadata.is_list:
            raise PropertyKindError(page.name, metadata.name, ElementKind.LIST.value, metadata.kind.value)
        self.page = page
        self.metadata = metadata
        self.container = container

    @property
    def name(self) -> str:
        return self.metadata.name

    def __iter__(self) -> Iterator[PageObject]:
        for index in itertools.count():
            handle = self.page.driver.locate_nth(self.metadata.item_selector, index, scope=self.container)
            if handle is None:
                return
            yield PageObject(
                self.metadata.item,
                self.page.driver,
                scope=handle,
                label=f"{self.page.name}.{self.metadata.name}[{index + 1}]",
            )


class FieldValues(Mapping):
    """Read-only view of an item's rendered field text, read on demand."""

    def __init__(self, page: PageObject) -> None:
        self._page = page
        self._cache: Dict[str, Optional[str]] = {}

    def __getitem__(self, name: str) -> Optional[str]:
        key = to_lookup_key(name)
        if key in self._cache:
            return self._cache[key]
        metadata = self._page.get_property(key)
        if metadata is None:
            raise KeyError(name)
        handle = self._page.locate(metadata)
        value = handle.text() if handle is not None else None
        self._cache[key] = value
        return value

    def __iter__(self) -> Iterator[str]:
        return iter(self._page.definition.properties)

    def __len__(self) -> int:
        return len(self._page.definition.properties)
