"""Federal spending endpoint."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from ...config.logging import get_logger
from ...ormdb import SpendingAwardRepository, get_session
from ...query import build_spending_query
from ..models.responses import SpendingAwardResponse

logger = get_logger(__name__)

router = APIRouter()


def get_spending_repository(
    session: Session = Depends(get_session),
) -> SpendingAwardRepository:
    """Dependency to get a spending award repository bound to the request session."""
    return SpendingAwardRepository(session)


@router.get(
    "/spending",
    response_model=List[SpendingAwardResponse],
    summary="List Spending Awards",
    description="Federal awards filtered by agency, recipient, amount, fiscal year and keyword",
)
def list_spending(
    request: Request,
    agency: Optional[str] = Query(None, description="Substring of awarding or funding agency"),
    recipient: Optional[str] = Query(None, description="Substring of recipient name"),
    min_amount: Optional[str] = Query(None, description="Minimum award amount in dollars"),
    fiscal_year: Optional[str] = Query(None, description="Fiscal year, e.g. 2024"),
    keyword: Optional[str] = Query(
        None, description="Substring of recipient, description or awarding agency"
    ),
    limit: Optional[str] = Query(None, description="Maximum rows returned (default 100)"),
    repository: SpendingAwardRepository = Depends(get_spending_repository),
):
    """List spending awards, largest first."""
    query = build_spending_query(
        {
            "agency": agency,
            "recipient": recipient,
            "min_amount": min_amount,
            "fiscal_year": fiscal_year,
            "keyword": keyword,
            "limit": limit,
        }
    )
    rows = repository.search(query)

    logger.info(
        "Spending awards listed",
        returned=len(rows),
        request_id=getattr(request.state, "request_id", None),
    )
    return rows
