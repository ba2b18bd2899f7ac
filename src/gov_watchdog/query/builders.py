"""Per-collection query builders.

Each builder reads only the parameter names it recognizes from an already
sanitized mapping; anything else in the mapping is ignored.
"""

from typing import Any, Mapping

from .predicates import QueryBuilder, RecordQuery, coerce_bool, coerce_int

LEGISLATOR_DEFAULT_LIMIT = 100
BILL_DEFAULT_LIMIT = 50
SPENDING_DEFAULT_LIMIT = 100
LOBBYING_DEFAULT_LIMIT = 100

LEGISLATOR_KEYWORD_COLUMNS = ("first_name", "last_name")
BILL_KEYWORD_COLUMNS = ("title", "summary", "subjects")
SPENDING_KEYWORD_COLUMNS = ("recipient_name", "award_description", "awarding_agency")
LOBBYING_KEYWORD_COLUMNS = (
    "client_name",
    "client_description",
    "issue_areas",
    "specific_issues",
    "government_entities",
)


def _upper(value: str) -> str:
    return value.upper()


def _lower(value: str) -> str:
    return value.lower()


def build_legislator_query(params: Mapping[str, Any]) -> RecordQuery:
    """Filters: state, party, chamber, in_office, keyword. Ordered by name."""
    return (
        QueryBuilder(default_limit=LEGISLATOR_DEFAULT_LIMIT)
        .where_equals("state", params.get("state"), _upper)
        .where_equals("party", params.get("party"), _upper)
        .where_equals("chamber", params.get("chamber"), _lower)
        .where_equals("in_office", params.get("in_office"), coerce_bool)
        .where_contains(LEGISLATOR_KEYWORD_COLUMNS, params.get("keyword"))
        .order_by("last_name")
        .order_by("first_name")
        .limit(params.get("limit"))
        .build()
    )


def build_bill_query(params: Mapping[str, Any]) -> RecordQuery:
    """Filters: bill_type, congress, status, sponsor, subject, keyword. Newest first."""
    return (
        QueryBuilder(default_limit=BILL_DEFAULT_LIMIT)
        .where_equals("bill_type", params.get("bill_type"), _lower)
        .where_equals("congress", params.get("congress"), coerce_int)
        .where_equals("status", params.get("status"), _lower)
        .where_equals("sponsor_id", params.get("sponsor"), _upper)
        .where_contains("subjects", params.get("subject"))
        .where_contains(BILL_KEYWORD_COLUMNS, params.get("keyword"))
        .order_by("introduced_date", descending=True)
        .limit(params.get("limit"))
        .build()
    )


def build_spending_query(params: Mapping[str, Any]) -> RecordQuery:
    """Filters: agency, recipient, min_amount, fiscal_year, keyword. Largest first."""
    return (
        QueryBuilder(default_limit=SPENDING_DEFAULT_LIMIT)
        .where_contains(("awarding_agency", "funding_agency"), params.get("agency"))
        .where_contains("recipient_name", params.get("recipient"))
        .where_at_least("award_amount", params.get("min_amount"))
        .where_equals("fiscal_year", params.get("fiscal_year"), coerce_int)
        .where_contains(SPENDING_KEYWORD_COLUMNS, params.get("keyword"))
        .order_by("award_amount", descending=True)
        .limit(params.get("limit"))
        .build()
    )


def build_lobbying_query(params: Mapping[str, Any]) -> RecordQuery:
    """Filters: client, lobbyist, year, quarter, min_amount, keyword. Largest first."""
    return (
        QueryBuilder(default_limit=LOBBYING_DEFAULT_LIMIT)
        .where_contains("client_name", params.get("client"))
        .where_contains(("registrant_name", "lobbyist_name"), params.get("lobbyist"))
        .where_equals("year", params.get("year"), coerce_int)
        .where_equals("quarter", params.get("quarter"), coerce_int)
        .where_at_least("amount", params.get("min_amount"))
        .where_contains(LOBBYING_KEYWORD_COLUMNS, params.get("keyword"))
        .order_by("amount", descending=True)
        .limit(params.get("limit"))
        .build()
    )
