"""Lobbying disclosure endpoint."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ...config.logging import get_logger
from ...ormdb import LobbyingFilingRepository, get_session
from ...query import build_lobbying_query
from ..models.responses import LobbyingFilingResponse

logger = get_logger(__name__)

router = APIRouter()


def get_lobbying_repository(
    session: Session = Depends(get_session),
) -> LobbyingFilingRepository:
    """Dependency to get a lobbying filing repository bound to the request session."""
    return LobbyingFilingRepository(session)


@router.get(
    "/lobbying",
    response_model=List[LobbyingFilingResponse],
    summary="List Lobbying Filings",
    description="Disclosure filings filtered by client, lobbyist, period, amount and keyword",
)
def list_lobbying(
    request: Request,
    client: Optional[str] = Query(None, description="Substring of client name"),
    lobbyist: Optional[str] = Query(None, description="Substring of registrant or lobbyist name"),
    year: Optional[str] = Query(None, description="Filing year"),
    quarter: Optional[str] = Query(None, description="Filing quarter, 1-4"),
    min_amount: Optional[str] = Query(None, description="Minimum reported amount in dollars"),
    keyword: Optional[str] = Query(
        None, description="Substring of client, issues or government entities"
    ),
    limit: Optional[str] = Query(None, description="Maximum rows returned (default 100)"),
    repository: LobbyingFilingRepository = Depends(get_lobbying_repository),
):
    """List lobbying filings, largest amount first."""
    query = build_lobbying_query(
        {
            "client": client,
            "lobbyist": lobbyist,
            "year": year,
            "quarter": quarter,
            "min_amount": min_amount,
            "keyword": keyword,
            "limit": limit,
        }
    )
    rows = repository.search(query)

    logger.info(
        "Lobbying filings listed",
        returned=len(rows),
        request_id=getattr(request.state, "request_id", None),
    )
    return rows
