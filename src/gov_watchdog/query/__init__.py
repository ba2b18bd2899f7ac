"""Filtered, bounded and ordered queries over the record collections."""

from .builders import (
    build_bill_query,
    build_legislator_query,
    build_lobbying_query,
    build_spending_query,
)
from .predicates import (
    AnyOf,
    Operator,
    OrderTerm,
    Predicate,
    QueryBuilder,
    RecordQuery,
    coerce_amount,
    coerce_bool,
    coerce_int,
    coerce_limit,
    escape_like,
)
from .render import render, render_condition

__all__ = [
    "AnyOf",
    "Operator",
    "OrderTerm",
    "Predicate",
    "QueryBuilder",
    "RecordQuery",
    "build_bill_query",
    "build_legislator_query",
    "build_lobbying_query",
    "build_spending_query",
    "coerce_amount",
    "coerce_bool",
    "coerce_int",
    "coerce_limit",
    "escape_like",
    "render",
    "render_condition",
]
