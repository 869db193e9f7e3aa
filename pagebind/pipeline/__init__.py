"""Action pipeline: shared types, hook repository and dispatcher."""

from .models import ActionContext, ActionResult
from .container import ObjectContainer
from .registry import ActionRepository, Capability
from .service import ActionPipelineService

__all__ = [
    "ActionContext",
    "ActionPipelineService",
    "ActionRepository",
    "ActionResult",
    "Capability",
    "ObjectContainer",
]
