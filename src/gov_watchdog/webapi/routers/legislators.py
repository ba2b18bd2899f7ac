"""Legislator directory endpoint."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ...config.logging import get_logger
from ...ormdb import LegislatorRepository, get_session
from ...query import build_legislator_query
from ..models.responses import LegislatorResponse

logger = get_logger(__name__)

router = APIRouter()


def get_legislator_repository(
    session: Session = Depends(get_session),
) -> LegislatorRepository:
    """Dependency to get a legislator repository bound to the request session."""
    return LegislatorRepository(session)


@router.get(
    "/legislators",
    response_model=List[LegislatorResponse],
    summary="List Legislators",
    description="Office holders filtered by state, party, chamber and name keyword",
)
def list_legislators(
    request: Request,
    state: Optional[str] = Query(None, description="Two-letter state code, e.g. CA"),
    party: Optional[str] = Query(None, description="Party code: D, R or I"),
    chamber: Optional[str] = Query(
        None, description="house, senate, executive, judicial, state or independent"
    ),
    in_office: Optional[str] = Query(None, description="true or false"),
    keyword: Optional[str] = Query(None, description="Substring of first or last name"),
    limit: Optional[str] = Query(None, description="Maximum rows returned (default 100)"),
    repository: LegislatorRepository = Depends(get_legislator_repository),
):
    """
    List legislators ordered by last name, then first name.

    Unparsable filter values are ignored rather than rejected.
    """
    query = build_legislator_query(
        {
            "state": state,
            "party": party,
            "chamber": chamber,
            "in_office": in_office,
            "keyword": keyword,
            "limit": limit,
        }
    )
    rows = repository.search(query)

    logger.info(
        "Legislators listed",
        returned=len(rows),
        request_id=getattr(request.state, "request_id", None),
    )
    return rows
