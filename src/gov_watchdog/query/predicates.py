"""Typed predicates and the fluent builder that accumulates them.

Builders never produce query text. They collect ``Predicate`` objects
(column, operator, value) and ``OrderTerm`` objects into a ``RecordQuery``,
which :mod:`gov_watchdog.query.render` turns into a parameterized statement.
Every raw value coming from a request is coerced here and a bad value drops
the filter instead of failing the request.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union


class Operator(str, Enum):
    """Comparison operators supported by the renderer."""

    EQ = "eq"
    GTE = "gte"
    LIKE = "like"


@dataclass(frozen=True)
class Predicate:
    """A single ``column <operator> value`` condition."""

    column: str
    operator: Operator
    value: Any


@dataclass(frozen=True)
class AnyOf:
    """Predicates joined with OR; the group itself is ANDed with the rest."""

    predicates: Tuple[Predicate, ...]


Condition = Union[Predicate, AnyOf]


@dataclass(frozen=True)
class OrderTerm:
    """One ORDER BY term."""

    column: str
    descending: bool = False


@dataclass(frozen=True)
class RecordQuery:
    """A complete, bounded and ordered query against one collection."""

    conditions: Tuple[Condition, ...] = ()
    order_by: Tuple[OrderTerm, ...] = ()
    limit: int = 100


TRUE_VALUES = {"1", "true", "yes", "y", "on"}
FALSE_VALUES = {"0", "false", "no", "n", "off"}

# Largest magnitude SQLite can bind as INTEGER
INT64_MAX = 2**63 - 1
MAX_INT_EXPONENT = 18


def _clean(raw: Any) -> Optional[str]:
    """Return a stripped string, or None for missing/blank input."""
    if raw is None:
        return None
    value = str(raw).strip()
    return value or None


def coerce_int(raw: Any) -> Optional[int]:
    """Parse an integer filter value.

    Unparsable input, and values outside the signed 64-bit range the store
    can bind, yield None.
    """
    value = _clean(raw)
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        number = _integral_decimal(value)
        if number is None:
            return None
    if not -INT64_MAX <= number <= INT64_MAX:
        return None
    return number


def _integral_decimal(value: str) -> Optional[int]:
    """Parse "2024.0" or "1e3" style input without expanding huge exponents."""
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None
    if not number.is_finite() or number.adjusted() > MAX_INT_EXPONENT:
        return None
    if number != number.to_integral_value():
        return None
    return int(number)


def coerce_amount(raw: Any) -> Optional[float]:
    """Parse a currency threshold; unparsable or non-finite input yields None."""
    value = _clean(raw)
    if value is None:
        return None
    try:
        number = Decimal(value.replace(",", "").lstrip("$"))
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    amount = float(number)
    if math.isinf(amount):
        return None
    return amount


def coerce_bool(raw: Any) -> Optional[bool]:
    """Parse a boolean flag; anything unrecognised yields None."""
    value = _clean(raw)
    if value is None:
        return None
    value = value.lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


def coerce_limit(raw: Any, default: int) -> int:
    """Parse a result limit, falling back to ``default`` for bad or non-positive input."""
    limit = coerce_int(raw)
    if limit is None or limit <= 0:
        return default
    return limit


def escape_like(value: str, escape_char: str = "\\") -> str:
    """Escape LIKE wildcards so the value is matched literally."""
    return (
        value.replace(escape_char, escape_char * 2)
        .replace("%", f"{escape_char}%")
        .replace("_", f"{escape_char}_")
    )


class QueryBuilder:
    """Fluent accumulator of conditions, ordering and a bounded limit."""

    def __init__(self, default_limit: int = 100):
        self._conditions: List[Condition] = []
        self._order_by: List[OrderTerm] = []
        self._default_limit = default_limit
        self._limit = default_limit

    def where_equals(
        self,
        column: str,
        raw: Any,
        normalize: Optional[Callable[[str], Any]] = None,
    ) -> "QueryBuilder":
        """Exact match; ``normalize`` maps the raw string to the stored form.

        A normalizer returning None (e.g. an unparsable number) drops the filter.
        """
        value = _clean(raw)
        if value is None:
            return self
        if normalize is not None:
            value = normalize(value)
            if value is None:
                return self
        self._conditions.append(Predicate(column, Operator.EQ, value))
        return self

    def where_contains(self, columns: Union[str, Sequence[str]], raw: Any) -> "QueryBuilder":
        """Case-insensitive substring match against one column or any of several."""
        value = _clean(raw)
        if value is None:
            return self
        if isinstance(columns, str):
            columns = [columns]
        pattern = escape_like(value)
        predicates = tuple(Predicate(column, Operator.LIKE, pattern) for column in columns)
        if len(predicates) == 1:
            self._conditions.append(predicates[0])
        else:
            self._conditions.append(AnyOf(predicates))
        return self

    def where_at_least(self, column: str, raw: Any) -> "QueryBuilder":
        """Threshold filter ``column >= value``; unparsable thresholds are ignored."""
        amount = coerce_amount(raw)
        if amount is not None:
            self._conditions.append(Predicate(column, Operator.GTE, amount))
        return self

    def order_by(self, column: str, descending: bool = False) -> "QueryBuilder":
        self._order_by.append(OrderTerm(column, descending))
        return self

    def limit(self, raw: Any) -> "QueryBuilder":
        self._limit = coerce_limit(raw, self._default_limit)
        return self

    def build(self) -> RecordQuery:
        return RecordQuery(
            conditions=tuple(self._conditions),
            order_by=tuple(self._order_by),
            limit=self._limit,
        )
