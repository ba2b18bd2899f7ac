"""API Models package for request/response schemas."""

from .requests import ReseedRequest
from .responses import (
    BillResponse,
    ErrorResponse,
    HealthResponse,
    LegislatorResponse,
    LobbyingFilingResponse,
    ReseedResponse,
    SpendingAwardResponse,
    SummaryResponse,
)

__all__ = [
    # Response models
    "BillResponse",
    "ErrorResponse",
    "HealthResponse",
    "LegislatorResponse",
    "LobbyingFilingResponse",
    "ReseedResponse",
    "SpendingAwardResponse",
    "SummaryResponse",
    # Request models
    "ReseedRequest",
]
