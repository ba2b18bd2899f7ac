"""Dashboard summary endpoint."""

from typing import Any, Callable, Dict

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config.logging import get_logger
from ...config.settings import get_settings
from ...ormdb import (
    BillRepository,
    LegislatorRepository,
    SpendingAwardRepository,
    get_session_factory,
)
from ..exceptions import WatchdogException
from ..models.responses import SummaryResponse

logger = get_logger(__name__)

router = APIRouter()


def _run_aggregate(name: str, aggregate: Callable[[Session], Any], request_id=None):
    """Run one aggregate in its own session; failures are logged and yield None."""
    session = None
    try:
        session = get_session_factory()()
        return aggregate(session)
    except (WatchdogException, SQLAlchemyError) as e:
        logger.error(
            "Summary aggregate failed",
            aggregate=name,
            error=str(e),
            request_id=request_id,
        )
        return None
    finally:
        if session is not None:
            session.close()


@router.get(
    "/summary",
    response_model=SummaryResponse,
    response_model_exclude_none=True,
    summary="Dashboard Summary",
    description="Members in office, active bills and total spending for the summary fiscal year",
)
def get_summary(request: Request):
    """
    Compose the dashboard aggregates.

    Each aggregate is independent: one that fails is left out of the response
    and the others are still returned.
    """
    request_id = getattr(request.state, "request_id", None)
    fiscal_year = get_settings().summary_fiscal_year

    aggregates: Dict[str, Callable[[Session], Any]] = {
        "total_members": lambda s: LegislatorRepository(s).count_in_office(),
        "active_bills": lambda s: BillRepository(s).count_active(),
        "total_spending": lambda s: SpendingAwardRepository(s).total_for_fiscal_year(
            fiscal_year
        ),
    }

    values = {}
    for name, aggregate in aggregates.items():
        value = _run_aggregate(name, aggregate, request_id)
        if value is not None:
            values[name] = value

    logger.info("Summary composed", keys=sorted(values), request_id=request_id)
    return SummaryResponse(**values)
