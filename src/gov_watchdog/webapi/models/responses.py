"""Response models for the Watchdog API."""

from datetime import date
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error response model; the only shape a failed request ever returns."""

    error: str = Field(..., description="Generic, client-safe error message")


class RecordResponse(BaseModel):
    """Base for collection rows serialized straight from ORM objects."""

    model_config = ConfigDict(from_attributes=True)


class LegislatorResponse(RecordResponse):
    bioguide_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    party: Optional[str] = None
    state: Optional[str] = None
    chamber: Optional[str] = None
    district: Optional[str] = None
    in_office: Optional[bool] = None
    phone: Optional[str] = None
    twitter_handle: Optional[str] = None
    next_election: Optional[date] = None


class BillResponse(RecordResponse):
    bill_id: str
    congress: Optional[int] = None
    bill_type: Optional[str] = None
    number: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    status: Optional[str] = None
    introduced_date: Optional[date] = None
    latest_action: Optional[str] = None
    latest_action_date: Optional[date] = None
    sponsor_id: Optional[str] = None
    subjects: Optional[str] = None
    committees: Optional[str] = None


class SpendingAwardResponse(RecordResponse):
    award_id: str
    recipient_name: Optional[str] = None
    award_amount: Optional[float] = None
    award_type: Optional[str] = None
    awarding_agency: Optional[str] = None
    funding_agency: Optional[str] = None
    award_description: Optional[str] = None
    place_of_performance: Optional[str] = None
    award_date: Optional[date] = None
    fiscal_year: Optional[int] = None


class LobbyingFilingResponse(RecordResponse):
    registration_id: str
    client_name: Optional[str] = None
    client_description: Optional[str] = None
    registrant_name: Optional[str] = None
    registrant_address: Optional[str] = None
    lobbyist_name: Optional[str] = None
    lobbyist_title: Optional[str] = None
    amount: Optional[float] = None
    year: Optional[int] = None
    quarter: Optional[int] = None
    report_type: Optional[str] = None
    issue_areas: Optional[str] = None
    specific_issues: Optional[str] = None
    government_entities: Optional[str] = None
    foreign_entities: Optional[str] = None
    posted_date: Optional[date] = None


class SummaryResponse(BaseModel):
    """Dashboard aggregates. A key whose aggregate failed is left out."""

    total_members: Optional[int] = Field(None, description="Legislators currently in office")
    active_bills: Optional[int] = Field(None, description="Bills in a non-terminal status")
    total_spending: Optional[float] = Field(
        None, description="Sum of award amounts for the summary fiscal year"
    )


class ReseedResponse(BaseModel):
    """Result of a reseed request."""

    success: bool
    message: str
    counts: Dict[str, int] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Service health check."""

    status: str = Field(..., description="ok when the store is reachable, degraded otherwise")
    service: str
    version: str
    uptime: float = Field(..., description="Seconds since the application started")
    database: str = Field(..., description="Record store connectivity")
