"""Field/rule/value criteria evaluated against rendered list items."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ComparisonError, FieldNotFoundError, UnknownRuleError
from .naming import to_lookup_key

log = logging.getLogger(__name__)

DATE_FORMATS: Tuple[str, ...] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %I:%M %p",
    "%B %d, %Y",
    "%b %d, %Y",
)

_TRUE_VALUES = {"true", "yes", "1", "on", "checked"}
_FALSE_VALUES = {"false", "no", "0", "off", "unchecked", ""}


class ComparisonRule(str, Enum):
    EQUALS = "Equals"
    NOT_EQUALS = "NotEquals"
    CONTAINS = "Contains"
    NOT_CONTAINS = "NotContains"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"
    EXISTS = "Exists"
    NOT_EXISTS = "NotExists"
    REGEX = "Regex"
    GREATER_THAN = "GreaterThan"
    GREATER_THAN_OR_EQUAL = "GreaterThanOrEqual"
    LESS_THAN = "LessThan"
    LESS_THAN_OR_EQUAL = "LessThanOrEqual"

    @classmethod
    def parse(cls, name: Any) -> "ComparisonRule":
        """Resolve a rule name case-insensitively, accepting common aliases."""

        if isinstance(name, ComparisonRule):
            return name
        raw = str(name or "").strip()
        rule = _SYMBOL_ALIASES.get(raw) or _RULE_ALIASES.get(to_lookup_key(raw))
        if rule is None:
            raise UnknownRuleError(raw, known=[member.value for member in cls])
        return rule

    @property
    def is_ordering(self) -> bool:
        return self in _ORDERING_RULES


_RULE_ALIASES: Dict[str, ComparisonRule] = {to_lookup_key(rule.value): rule for rule in ComparisonRule}
_RULE_ALIASES.update(
    {
        "equal": ComparisonRule.EQUALS,
        "is": ComparisonRule.EQUALS,
        "doesnotequal": ComparisonRule.NOT_EQUALS,
        "notequal": ComparisonRule.NOT_EQUALS,
        "isnot": ComparisonRule.NOT_EQUALS,
        "doesnotcontain": ComparisonRule.NOT_CONTAINS,
        "notcontain": ComparisonRule.NOT_CONTAINS,
        "doesnotexist": ComparisonRule.NOT_EXISTS,
        "notexist": ComparisonRule.NOT_EXISTS,
        "matches": ComparisonRule.REGEX,
        "greaterthanequals": ComparisonRule.GREATER_THAN_OR_EQUAL,
        "lessthanequals": ComparisonRule.LESS_THAN_OR_EQUAL,
    }
)

_SYMBOL_ALIASES: Dict[str, ComparisonRule] = {
    "=": ComparisonRule.EQUALS,
    "==": ComparisonRule.EQUALS,
    "!=": ComparisonRule.NOT_EQUALS,
    ">": ComparisonRule.GREATER_THAN,
    ">=": ComparisonRule.GREATER_THAN_OR_EQUAL,
    "<": ComparisonRule.LESS_THAN,
    "<=": ComparisonRule.LESS_THAN_OR_EQUAL,
}

_ORDERING_RULES = {
    ComparisonRule.GREATER_THAN,
    ComparisonRule.GREATER_THAN_OR_EQUAL,
    ComparisonRule.LESS_THAN,
    ComparisonRule.LESS_THAN_OR_EQUAL,
}


class ValidationRow(BaseModel):
    """A single field/rule/value assertion."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    field_name: str = Field(min_length=1)
    rule: ComparisonRule
    expected_value: str = ""

    @field_validator("rule", mode="before")
    @classmethod
    def _parse_rule(cls, value: Any) -> ComparisonRule:
        return ComparisonRule.parse(value)

    @property
    def field_key(self) -> str:
        return to_lookup_key(self.field_name)

    def render(self) -> str:
        return f"| {self.field_name} | {self.rule.value} | {self.expected_value} |"


class ValidationTable(BaseModel):
    """Ordered set of rows that must all hold for an item to match."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rows: Tuple[ValidationRow, ...] = ()

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]]) -> "ValidationTable":
        parsed: List[ValidationRow] = []
        for row in rows:
            if len(row) != 3:
                raise ValueError(f"Validation rows need field, rule and value; got {list(row)!r}")
            field_name, rule, value = row
            parsed.append(
                ValidationRow(
                    field_name=str(field_name),
                    rule=ComparisonRule.parse(rule),
                    expected_value="" if value is None else str(value),
                )
            )
        return cls(rows=tuple(parsed))

    @classmethod
    def from_step_table(cls, rows: Iterable[Mapping[str, Any]]) -> "ValidationTable":
        """Build a table from header-keyed rows such as ``{"Field": ..., "Rule": ..., "Value": ...}``."""

        triples = []
        for row in rows:
            normalized = {to_lookup_key(str(key)): value for key, value in row.items()}
            triples.append((normalized.get("field", ""), normalized.get("rule", ""), normalized.get("value", "")))
        return cls.from_rows(triples)

    def render(self) -> str:
        header = "| Field | Rule | Value |"
        return "\n".join([header, *(row.render() for row in self.rows)])


def parse_number(text: str) -> Decimal:
    cleaned = text.strip().replace(",", "")
    for symbol in ("$", "€", "£", "%"):
        cleaned = cleaned.replace(symbol, "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"'{text}' is not a number") from exc
    if not value.is_finite():
        raise ValueError(f"'{text}' is not a finite number")
    return value


def parse_date(text: str) -> datetime:
    cleaned = text.strip()
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
    raise ValueError(f"'{text}' is not a date")


def parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"'{text}' is not a boolean")


def _coerce_pair(actual: Any, expected: str) -> Tuple[Any, Any]:
    """Coerce the expected text to the rendered value's type."""

    if isinstance(actual, bool):
        return actual, parse_bool(expected)
    if isinstance(actual, (int, float, Decimal)):
        return Decimal(str(actual)), parse_number(expected)
    if isinstance(actual, datetime):
        return actual, parse_date(expected)
    if isinstance(actual, date):
        return actual, parse_date(expected).date()
    return str(actual).strip(), expected.strip()


def _ordered_pair(actual: Any, expected: str) -> Tuple[Any, Any]:
    if isinstance(actual, (bool, int, float, Decimal, datetime, date)):
        return _coerce_pair(actual, expected)
    actual_text = str(actual)
    try:
        return parse_number(actual_text), parse_number(expected)
    except ValueError:
        pass
    return parse_date(actual_text), parse_date(expected)


_TEXT_COMPARERS: Dict[ComparisonRule, Callable[[str, str], bool]] = {
    ComparisonRule.CONTAINS: lambda actual, expected: expected in actual,
    ComparisonRule.NOT_CONTAINS: lambda actual, expected: expected not in actual,
    ComparisonRule.STARTS_WITH: lambda actual, expected: actual.startswith(expected),
    ComparisonRule.ENDS_WITH: lambda actual, expected: actual.endswith(expected),
    ComparisonRule.REGEX: lambda actual, expected: re.search(expected, actual) is not None,
}

_ORDER_COMPARERS: Dict[ComparisonRule, Callable[[Any, Any], bool]] = {
    ComparisonRule.GREATER_THAN: lambda actual, expected: actual > expected,
    ComparisonRule.GREATER_THAN_OR_EQUAL: lambda actual, expected: actual >= expected,
    ComparisonRule.LESS_THAN: lambda actual, expected: actual < expected,
    ComparisonRule.LESS_THAN_OR_EQUAL: lambda actual, expected: actual <= expected,
}


class CriteriaMatcher:
    """Evaluates validation rows against an item's field values.

    ``fields`` is any mapping keyed by lookup key. A missing key is an
    authoring defect and raises :class:`FieldNotFoundError`; a key whose value
    is ``None`` is a declared field that is not rendered.

    Textual rules compare trimmed text case-sensitively. Ordering rules parse
    both sides as finite numbers, falling back to dates, and raise
    :class:`ComparisonError` when neither parse succeeds or the field is
    not rendered.
    """

    def matches(self, fields: Mapping[str, Any], row: ValidationRow) -> bool:
        actual = self._lookup(fields, row)
        rule = row.rule
        expected = row.expected_value

        if rule is ComparisonRule.EXISTS:
            return actual is not None
        if rule is ComparisonRule.NOT_EXISTS:
            return actual is None
        if actual is None:
            if rule.is_ordering:
                raise ComparisonError(row.field_name, rule.value, expected, "field is not rendered")
            return rule in (ComparisonRule.NOT_EQUALS, ComparisonRule.NOT_CONTAINS)

        try:
            if rule in (ComparisonRule.EQUALS, ComparisonRule.NOT_EQUALS):
                left, right = _coerce_pair(actual, expected)
                equal = left == right
                return equal if rule is ComparisonRule.EQUALS else not equal
            if rule.is_ordering:
                left, right = _ordered_pair(actual, expected)
                return _ORDER_COMPARERS[rule](left, right)
            return _TEXT_COMPARERS[rule](str(actual).strip(), expected.strip())
        except (ValueError, TypeError, ArithmeticError, re.error) as exc:
            raise ComparisonError(row.field_name, rule.value, expected, str(exc)) from exc

    def evaluate(self, fields: Mapping[str, Any], table: ValidationTable) -> bool:
        for row in table.rows:
            if not self.matches(fields, row):
                log.debug("Row %s did not match", row.render())
                return False
        return True

    def _lookup(self, fields: Mapping[str, Any], row: ValidationRow) -> Optional[Any]:
        try:
            return fields[row.field_key]
        except KeyError:
            raise FieldNotFoundError(row.field_name, available=list(fields.keys())) from None
