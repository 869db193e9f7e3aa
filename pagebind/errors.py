"""
Error taxonomy for action execution and element resolution.

Every failure raised by the pipeline, the locator chain, the list resolvers
and the criteria matcher is a :class:`PageBindError`. Each carries a stable
error code and a details mapping so failures can be logged as structured
events and inspected by tests without parsing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Sequence


class ErrorCode(Enum):
    """Standardized error codes for step failures."""

    # Authoring errors
    ELEMENT_NOT_DEFINED = "ELEMENT_NOT_DEFINED"
    UNKNOWN_RULE = "UNKNOWN_RULE"
    FIELD_NOT_FOUND = "FIELD_NOT_FOUND"
    INVALID_PROPERTY_KIND = "INVALID_PROPERTY_KIND"
    NO_PAGE_CONTEXT = "NO_PAGE_CONTEXT"

    # Timing errors
    WAIT_TIMEOUT = "WAIT_TIMEOUT"

    # Lookup errors
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    NO_MATCH_FOUND = "NO_MATCH_FOUND"

    # Wiring errors
    CONSTRUCTION_FAILED = "CONSTRUCTION_FAILED"

    # Evaluation errors
    COMPARISON_FAILED = "COMPARISON_FAILED"
    ACTION_FAILED = "ACTION_FAILED"
    RESULT_TYPE_MISMATCH = "RESULT_TYPE_MISMATCH"


class PageBindError(Exception):
    """Base class for every structured failure."""

    code: ErrorCode = ErrorCode.ACTION_FAILED

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class AuthoringError(PageBindError):
    """A static defect in a scenario or page definition. Never retried."""


class ElementNotDefinedError(AuthoringError):
    code = ErrorCode.ELEMENT_NOT_DEFINED

    def __init__(self, page: str, element: str) -> None:
        super().__init__(
            f"Element '{element}' is not defined on page '{page}'",
            details={"page": page, "element": element},
        )
        self.page = page
        self.element = element


class UnknownRuleError(AuthoringError):
    code = ErrorCode.UNKNOWN_RULE

    def __init__(self, rule: str, known: Sequence[str] = ()) -> None:
        super().__init__(
            f"Unknown comparison rule '{rule}'",
            details={"rule": rule, "known_rules": list(known)},
        )
        self.rule = rule


class FieldNotFoundError(AuthoringError):
    code = ErrorCode.FIELD_NOT_FOUND

    def __init__(self, field: str, available: Sequence[str] = ()) -> None:
        super().__init__(
            f"Field '{field}' is not defined on the item",
            details={"field": field, "available_fields": sorted(available)},
        )
        self.field = field


class PropertyKindError(AuthoringError):
    code = ErrorCode.INVALID_PROPERTY_KIND

    def __init__(self, page: str, element: str, expected_kind: str, actual_kind: str) -> None:
        super().__init__(
            f"Element '{element}' on page '{page}' is a {actual_kind}, not a {expected_kind}",
            details={"page": page, "element": element, "expected": expected_kind, "actual": actual_kind},
        )


class NoPageContextError(AuthoringError):
    code = ErrorCode.NO_PAGE_CONTEXT

    def __init__(self) -> None:
        super().__init__("No page is active in the scenario context; navigate to a page first")


class WaitTimeoutError(PageBindError):
    """An element never reached the requested state."""

    code = ErrorCode.WAIT_TIMEOUT

    def __init__(
        self,
        condition: str,
        elapsed_ms: float,
        timeout_ms: int,
        element: Optional[str] = None,
    ) -> None:
        target = f"'{element}'" if element else "condition"
        super().__init__(
            f"Timed out waiting for {target} to satisfy {condition} after {elapsed_ms:.0f} ms",
            details={
                "condition": condition,
                "elapsed_ms": round(elapsed_ms, 1),
                "timeout_ms": timeout_ms,
                "element": element,
            },
        )
        self.condition = condition
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        self.element = element


class NotFoundError(PageBindError):
    """A requested list item does not exist."""


class IndexOutOfRangeError(NotFoundError):
    code = ErrorCode.INDEX_OUT_OF_RANGE

    def __init__(self, list_name: str, requested: int, count: int) -> None:
        super().__init__(
            f"List '{list_name}' has {count} item(s); item {requested} was requested",
            details={"list": list_name, "requested": requested, "count": count},
        )
        self.list_name = list_name
        self.requested = requested
        self.count = count


class NoMatchFoundError(NotFoundError):
    code = ErrorCode.NO_MATCH_FOUND

    def __init__(self, list_name: str, table: str, *, match: bool = True) -> None:
        wanted = "matching" if match else "not matching"
        super().__init__(
            f"No item in list '{list_name}' {wanted} criteria:\n{table}",
            details={"list": list_name, "criteria": table, "match": match},
        )
        self.list_name = list_name
        self.table = table


class ConstructionError(PageBindError):
    """An action or hook type could not be built by the container."""

    code = ErrorCode.CONSTRUCTION_FAILED

    def __init__(self, type_name: str, reason: str) -> None:
        super().__init__(
            f"Could not construct '{type_name}': {reason}",
            details={"type": type_name, "reason": reason},
        )
        self.type_name = type_name


class ComparisonError(PageBindError):
    code = ErrorCode.COMPARISON_FAILED

    def __init__(self, field: str, rule: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Cannot apply {rule} to field '{field}': {reason}",
            details={"field": field, "rule": rule, "value": value},
        )


class ActionFailedError(PageBindError):
    code = ErrorCode.ACTION_FAILED


class ActionResultTypeError(PageBindError):
    code = ErrorCode.RESULT_TYPE_MISMATCH
