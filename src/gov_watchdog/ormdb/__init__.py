"""Database module for SQLAlchemy ORM integration."""

from .database import (
    Base,
    check_database_health,
    create_tables,
    dispose_engine,
    drop_tables,
    get_engine,
    get_session,
    get_session_factory,
    get_session_sync,
)
from .models import Bill, Legislator, LobbyingFiling, SpendingAward
from .repositories import (
    BillRepository,
    LegislatorRepository,
    LobbyingFilingRepository,
    SpendingAwardRepository,
)

__all__ = [
    # Database components
    "Base",
    "check_database_health",
    "create_tables",
    "dispose_engine",
    "drop_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
    "get_session_sync",
    # Models
    "Bill",
    "Legislator",
    "LobbyingFiling",
    "SpendingAward",
    # Repositories
    "BillRepository",
    "LegislatorRepository",
    "LobbyingFilingRepository",
    "SpendingAwardRepository",
]
