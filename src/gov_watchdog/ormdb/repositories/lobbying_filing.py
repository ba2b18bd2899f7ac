"""Repository for lobbying filing operations."""

from ..models import LobbyingFiling
from .base import BaseRepository


class LobbyingFilingRepository(BaseRepository):
    """Repository for lobbying filing operations."""

    model = LobbyingFiling
