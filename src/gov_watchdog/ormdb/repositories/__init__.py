"""Repository classes for database operations using SQLAlchemy ORM."""

from .base import BaseRepository
from .bill import ACTIVE_BILL_STATUSES, BillRepository
from .legislator import LegislatorRepository
from .lobbying_filing import LobbyingFilingRepository
from .spending_award import SpendingAwardRepository

__all__ = [
    "ACTIVE_BILL_STATUSES",
    "BaseRepository",
    "BillRepository",
    "LegislatorRepository",
    "LobbyingFilingRepository",
    "SpendingAwardRepository",
]
