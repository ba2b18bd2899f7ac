"""Tests for the per-collection query builders."""

from gov_watchdog.query import (
    AnyOf,
    Operator,
    OrderTerm,
    Predicate,
    build_bill_query,
    build_legislator_query,
    build_lobbying_query,
    build_spending_query,
)


def _columns(query):
    """Flatten the columns referenced by a query's conditions."""
    columns = []
    for condition in query.conditions:
        if isinstance(condition, AnyOf):
            columns.append(tuple(p.column for p in condition.predicates))
        else:
            columns.append(condition.column)
    return columns


class TestLegislatorQuery:
    """Test legislator parameter handling."""

    def test_defaults(self):
        """Test no parameters means no filters, name ordering and limit 100."""
        query = build_legislator_query({})

        assert query.conditions == ()
        assert query.order_by == (OrderTerm("last_name"), OrderTerm("first_name"))
        assert query.limit == 100

    def test_enumerations_are_normalized(self):
        """Test state and party are upper-cased and chamber lower-cased."""
        query = build_legislator_query({"state": "ca", "party": "d", "chamber": "SENATE"})

        assert query.conditions == (
            Predicate("state", Operator.EQ, "CA"),
            Predicate("party", Operator.EQ, "D"),
            Predicate("chamber", Operator.EQ, "senate"),
        )

    def test_keyword_matches_either_name(self):
        """Test the keyword fans out over first and last name."""
        query = build_legislator_query({"keyword": "pel"})

        assert _columns(query) == [("first_name", "last_name")]

    def test_in_office_flag(self):
        """Test the in-office flag is parsed and garbage is ignored."""
        assert build_legislator_query({"in_office": "false"}).conditions == (
            Predicate("in_office", Operator.EQ, False),
        )
        assert build_legislator_query({"in_office": "sometimes"}).conditions == ()

    def test_unknown_parameters_are_ignored(self):
        """Test parameters the builder doesn't recognize have no effect."""
        assert build_legislator_query({"color": "blue", "sort": "x"}) == build_legislator_query({})


class TestBillQuery:
    """Test bill parameter handling."""

    def test_defaults(self):
        """Test newest-first ordering and the smaller default limit."""
        query = build_bill_query({})

        assert query.order_by == (OrderTerm("introduced_date", descending=True),)
        assert query.limit == 50

    def test_type_congress_keyword(self):
        """Test the type/congress/keyword combination used by the dashboard."""
        query = build_bill_query({"bill_type": "HR", "congress": "119", "keyword": "tax"})

        assert query.conditions[0] == Predicate("bill_type", Operator.EQ, "hr")
        assert query.conditions[1] == Predicate("congress", Operator.EQ, 119)
        assert _columns(query)[2] == ("title", "summary", "subjects")

    def test_unparsable_congress_is_dropped(self):
        """Test a non-numeric congress is ignored rather than rejected."""
        assert build_bill_query({"congress": "one-nineteen"}).conditions == ()

    def test_oversized_congress_and_limit_are_dropped(self):
        """Test integers beyond the storable range fall back like unparsable input."""
        query = build_bill_query({"congress": "99999999999999999999", "limit": "1e2000000"})

        assert query.conditions == ()
        assert query.limit == 50

    def test_sponsor_and_subject(self):
        """Test sponsor is an exact id match and subject a substring match."""
        query = build_bill_query({"sponsor": "p000197", "subject": "Energy"})

        assert query.conditions == (
            Predicate("sponsor_id", Operator.EQ, "P000197"),
            Predicate("subjects", Operator.LIKE, "Energy"),
        )


class TestSpendingQuery:
    """Test spending parameter handling."""

    def test_filters(self):
        """Test agency fans out over both agency columns and amounts are thresholds."""
        query = build_spending_query(
            {"agency": "Defense", "recipient": "Boeing", "min_amount": "200", "fiscal_year": "2024"}
        )

        assert _columns(query) == [
            ("awarding_agency", "funding_agency"),
            "recipient_name",
            "award_amount",
            "fiscal_year",
        ]
        assert query.conditions[2] == Predicate("award_amount", Operator.GTE, 200.0)
        assert query.order_by == (OrderTerm("award_amount", descending=True),)
        assert query.limit == 100

    def test_bad_min_amount_and_limit(self):
        """Test a non-numeric threshold is dropped and a bad limit falls back."""
        query = build_spending_query({"min_amount": "a lot", "limit": "-10"})

        assert query.conditions == ()
        assert query.limit == 100


class TestLobbyingQuery:
    """Test lobbying parameter handling."""

    def test_filters(self):
        """Test client, lobbyist, period and keyword filters."""
        query = build_lobbying_query(
            {
                "client": "Meta",
                "lobbyist": "Brownstein",
                "year": "2025",
                "quarter": "4",
                "keyword": "AI",
                "limit": "5",
            }
        )

        assert _columns(query) == [
            "client_name",
            ("registrant_name", "lobbyist_name"),
            "year",
            "quarter",
            (
                "client_name",
                "client_description",
                "issue_areas",
                "specific_issues",
                "government_entities",
            ),
        ]
        assert query.order_by == (OrderTerm("amount", descending=True),)
        assert query.limit == 5
