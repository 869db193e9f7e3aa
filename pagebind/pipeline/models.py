"""Context and result types shared by every action."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import ActionFailedError, ActionResultTypeError, PageBindError
from ..naming import to_lookup_key

T = TypeVar("T")

_NO_VALUE = object()


class ActionContext(BaseModel):
    """Identifies the logical element an action targets."""

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    property_name: str = Field(min_length=1)

    @field_validator("property_name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        key = to_lookup_key(value)
        if not key:
            raise ValueError("property_name must contain at least one letter or digit")
        return key


@dataclass(slots=True, frozen=True)
class ActionResult:
    """Outcome of a dispatched action.

    A result is either successful, optionally carrying a payload, or a
    failure carrying the error that caused it. :meth:`check_result` is the
    only supported way to read the payload.
    """

    success: bool
    error: Optional[BaseException] = None
    value: Any = _NO_VALUE

    @classmethod
    def successful(cls, value: Any = _NO_VALUE) -> "ActionResult":
        return cls(success=True, value=value)

    @classmethod
    def failure(cls, error: Union[BaseException, str]) -> "ActionResult":
        if isinstance(error, str):
            error = ActionFailedError(error)
        return cls(success=False, error=error)

    @property
    def has_value(self) -> bool:
        return self.success and self.value is not _NO_VALUE

    def check_result(self, expected_type: Optional[Type[T]] = None) -> Any:
        """Raise the carried error on failure, otherwise return the payload."""

        if not self.success:
            raise self.error or ActionFailedError("Action failed without a reason")
        if expected_type is None:
            return self.value if self.has_value else None
        if not self.has_value:
            raise ActionResultTypeError(
                f"Action result has no value; expected {expected_type.__name__}"
            )
        if not isinstance(self.value, expected_type):
            raise ActionResultTypeError(
                f"Action result is {type(self.value).__name__}, expected {expected_type.__name__}"
            )
        return self.value

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success}
        if self.has_value:
            payload["value"] = repr(self.value)
        if self.error is not None:
            if isinstance(self.error, PageBindError):
                payload["error"] = self.error.to_dict()
            else:
                payload["error"] = {"type": type(self.error).__name__, "message": str(self.error)}
        return payload
