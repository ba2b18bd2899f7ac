"""Legislation endpoint."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ...config.logging import get_logger
from ...ormdb import BillRepository, get_session
from ...query import build_bill_query
from ..models.responses import BillResponse

logger = get_logger(__name__)

router = APIRouter()


def get_bill_repository(session: Session = Depends(get_session)) -> BillRepository:
    """Dependency to get a bill repository bound to the request session."""
    return BillRepository(session)


@router.get(
    "/bills",
    response_model=List[BillResponse],
    summary="List Bills",
    description="Bills filtered by type, congress, status, sponsor and keyword",
)
def list_bills(
    request: Request,
    bill_type: Optional[str] = Query(None, description="Bill type code, e.g. hr or s"),
    congress: Optional[str] = Query(None, description="Congress number, e.g. 119"),
    status: Optional[str] = Query(None, description="e.g. introduced, in_committee, enacted"),
    sponsor: Optional[str] = Query(None, description="Sponsor bioguide id"),
    subject: Optional[str] = Query(None, description="Substring of the subjects list"),
    keyword: Optional[str] = Query(None, description="Substring of title, summary or subjects"),
    limit: Optional[str] = Query(None, description="Maximum rows returned (default 50)"),
    repository: BillRepository = Depends(get_bill_repository),
):
    """List bills, most recently introduced first."""
    query = build_bill_query(
        {
            "bill_type": bill_type,
            "congress": congress,
            "status": status,
            "sponsor": sponsor,
            "subject": subject,
            "keyword": keyword,
            "limit": limit,
        }
    )
    rows = repository.search(query)

    logger.info(
        "Bills listed",
        returned=len(rows),
        request_id=getattr(request.state, "request_id", None),
    )
    return rows
