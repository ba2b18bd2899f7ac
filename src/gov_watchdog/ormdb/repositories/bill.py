"""Repository for bill operations."""

from sqlalchemy import func, select

from ..models import Bill
from .base import BaseRepository

# Statuses a bill can still move on from
ACTIVE_BILL_STATUSES = ("introduced", "in_committee", "passed_house", "passed_senate")


class BillRepository(BaseRepository):
    """Repository for bill operations."""

    model = Bill

    def count_active(self) -> int:
        """Count bills in a non-terminal status."""
        statement = (
            select(func.count())
            .select_from(Bill)
            .where(Bill.status.in_(ACTIVE_BILL_STATUSES))
        )
        return self._execute("count_active", statement).scalar_one()
