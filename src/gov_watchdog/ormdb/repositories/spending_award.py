"""Repository for federal spending award operations."""

from sqlalchemy import func, select

from ..models import SpendingAward
from .base import BaseRepository


class SpendingAwardRepository(BaseRepository):
    """Repository for federal spending award operations."""

    model = SpendingAward

    def total_for_fiscal_year(self, fiscal_year: int) -> float:
        """Sum of award amounts for one fiscal year, 0 when there are none."""
        statement = select(
            func.coalesce(func.sum(SpendingAward.award_amount), 0)
        ).where(SpendingAward.fiscal_year == fiscal_year)
        return float(self._execute("total_for_fiscal_year", statement).scalar_one())
