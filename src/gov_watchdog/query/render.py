"""Render a RecordQuery into a parameterized SQLAlchemy statement."""

from sqlalchemy import ColumnElement, Select, and_, or_, select

from .predicates import AnyOf, Condition, Operator, Predicate, RecordQuery

LIKE_ESCAPE = "\\"


def _column(model, name: str):
    try:
        return model.__table__.c[name]
    except KeyError:
        raise ValueError(f"Unknown column '{name}' for {model.__name__}") from None


def _render_predicate(model, predicate: Predicate) -> ColumnElement:
    column = _column(model, predicate.column)

    if predicate.operator is Operator.EQ:
        return column == predicate.value
    if predicate.operator is Operator.GTE:
        return column >= predicate.value
    if predicate.operator is Operator.LIKE:
        return column.ilike(f"%{predicate.value}%", escape=LIKE_ESCAPE)

    raise ValueError(f"Unsupported operator: {predicate.operator}")


def render_condition(model, condition: Condition) -> ColumnElement:
    """Render one predicate or OR-group into a SQL expression with bound values."""
    if isinstance(condition, AnyOf):
        return or_(*(_render_predicate(model, p) for p in condition.predicates))
    return _render_predicate(model, condition)


def render(model, query: RecordQuery) -> Select:
    """
    Build ``SELECT * FROM <model> WHERE ... ORDER BY ... LIMIT n``.

    All conditions are ANDed; with no conditions every row is eligible.
    The primary key is always appended ascending so the ordering is total.

    Args:
        model: ORM model class of the collection
        query: Accumulated conditions, ordering and limit

    Returns:
        A SQLAlchemy Select whose values are all bound parameters
    """
    statement = select(model)

    if query.conditions:
        statement = statement.where(
            and_(*(render_condition(model, c) for c in query.conditions))
        )

    ordering = []
    ordered_columns = set()
    for term in query.order_by:
        column = _column(model, term.column)
        ordering.append(column.desc() if term.descending else column.asc())
        ordered_columns.add(term.column)

    for key_column in model.__table__.primary_key.columns:
        if key_column.name not in ordered_columns:
            ordering.append(key_column.asc())

    return statement.order_by(*ordering).limit(query.limit)
