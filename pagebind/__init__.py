"""Action pipeline and dynamic element resolution for behaviour-driven UI tests."""

from .config import BindingConfig, load_config
from .criteria import ComparisonRule, CriteriaMatcher, ValidationRow, ValidationTable
from .pages import ElementKind, PageDefinition, PageObject, PropertyMetadata, Selector
from .pipeline import ActionContext, ActionPipelineService, ActionRepository, ActionResult, Capability
from .runtime import Runtime, build_runtime
from .steps import ScenarioContext, SelectionSteps

__all__ = [
    "ActionContext",
    "ActionPipelineService",
    "ActionRepository",
    "ActionResult",
    "BindingConfig",
    "Capability",
    "ComparisonRule",
    "CriteriaMatcher",
    "ElementKind",
    "PageDefinition",
    "PageObject",
    "PropertyMetadata",
    "Runtime",
    "ScenarioContext",
    "Selector",
    "SelectionSteps",
    "ValidationRow",
    "ValidationTable",
    "build_runtime",
    "load_config",
]
