"""Repository for legislator operations."""

from sqlalchemy import func, select

from ..models import Legislator
from .base import BaseRepository


class LegislatorRepository(BaseRepository):
    """Repository for legislator operations."""

    model = Legislator

    def count_in_office(self) -> int:
        """Count legislators currently in office."""
        statement = (
            select(func.count())
            .select_from(Legislator)
            .where(Legislator.in_office.is_(True))
        )
        return self._execute("count_in_office", statement).scalar_one()
