"""Base repository class with common functionality."""

import time
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config.logging import get_logger, log_performance
from ...config.settings import get_settings
from ...query import RecordQuery, render
from ...webapi.exceptions import DatabaseError
from ..database import get_session_sync

logger = get_logger(__name__)


class BaseRepository:
    """Base repository providing session management and the shared collection operations.

    Subclasses set ``model`` to the ORM class of their collection.
    """

    model = None

    def __init__(self, session: Optional[Session] = None):
        self.session = session or get_session_sync()
        self._external_session = session is not None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if not self._external_session:
            self.session.close()

    @property
    def collection(self) -> str:
        return self.model.__tablename__

    def _execute(self, operation: str, statement):
        """Execute a statement, timing it and translating store failures."""
        started = time.perf_counter()
        try:
            result = self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(
                "Query execution failed",
                collection=self.collection,
                operation=operation,
                error=str(e),
                exc_info=True,
            )
            raise DatabaseError(operation, str(e)) from e

        log_performance(
            f"{self.collection}.{operation}",
            (time.perf_counter() - started) * 1000,
            slow_threshold_ms=get_settings().slow_query_ms,
        )
        return result

    def search(self, query: RecordQuery) -> List[Any]:
        """Run a filtered, ordered and bounded query against this collection."""
        rows = self._execute("search", render(self.model, query)).scalars().all()
        logger.debug(
            "Search completed",
            collection=self.collection,
            conditions=len(query.conditions),
            limit=query.limit,
            returned=len(rows),
        )
        return rows

    def count(self) -> int:
        """Count every row in the collection."""
        statement = select(func.count()).select_from(self.model)
        return self._execute("count", statement).scalar_one()

    def upsert_many(self, rows: Iterable[Dict[str, Any]]) -> int:
        """Replace rows by primary key; a key seen twice keeps the last row.

        Rows must carry every column so a replace never keeps stale values.
        The caller owns the transaction.
        """
        key_columns = [c.name for c in self.model.__table__.primary_key.columns]
        latest: Dict[tuple, Dict[str, Any]] = {}
        for row in rows:
            latest[tuple(row[name] for name in key_columns)] = row

        try:
            for row in latest.values():
                self.session.merge(self.model(**row))
            self.session.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Upsert failed",
                collection=self.collection,
                error=str(e),
                exc_info=True,
            )
            raise DatabaseError("upsert", str(e)) from e

        return len(latest)
