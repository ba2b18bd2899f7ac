"""Request models for the Watchdog API."""

from pydantic import BaseModel, Field


class ReseedRequest(BaseModel):
    """Request model for reloading seed data."""

    source: str = Field(
        ...,
        description="Collection to reload: legislators, bills, spending, lobbying or all",
        max_length=50,
    )
