"""SQLAlchemy ORM models for the public record collections."""

import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, Numeric, String, Text

from .database import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class Legislator(Base):
    """Office holder: members of Congress, executive, judicial and state officials."""

    __tablename__ = "congress_members"

    bioguide_id = Column(String(20), primary_key=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False, index=True)
    party = Column(String(20), nullable=True, index=True)
    state = Column(String(2), nullable=True, index=True)
    chamber = Column(String(20), nullable=True, index=True)
    district = Column(String(10), nullable=True)
    in_office = Column(Boolean, default=True, nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    twitter_handle = Column(String(50), nullable=True)
    next_election = Column(Date, nullable=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<Legislator(bioguide_id='{self.bioguide_id}', name='{self.first_name} {self.last_name}')>"


class Bill(Base):
    """Bill introduced in a congressional session."""

    __tablename__ = "bills"

    bill_id = Column(String(50), primary_key=True)
    congress = Column(Integer, nullable=False, index=True)
    bill_type = Column(String(20), nullable=False, index=True)
    number = Column(String(20), nullable=False)
    title = Column(Text, nullable=False)
    summary = Column(Text, nullable=True)
    status = Column(String(50), nullable=True, index=True)
    introduced_date = Column(Date, nullable=True, index=True)
    latest_action = Column(Text, nullable=True)
    latest_action_date = Column(Date, nullable=True)
    # Soft reference to Legislator.bioguide_id, not enforced
    sponsor_id = Column(String(20), nullable=True, index=True)
    subjects = Column(Text, nullable=True)
    committees = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<Bill(bill_id='{self.bill_id}', status='{self.status}')>"


class SpendingAward(Base):
    """Federal contract, grant or allocation award."""

    __tablename__ = "federal_spending"

    award_id = Column(String(50), primary_key=True)
    recipient_name = Column(String(200), nullable=False)
    award_amount = Column(
        Numeric(15, 2, asdecimal=False), nullable=False, default=0, index=True
    )
    award_type = Column(String(100), nullable=True)
    awarding_agency = Column(String(200), nullable=True, index=True)
    funding_agency = Column(String(200), nullable=True)
    award_description = Column(Text, nullable=True)
    place_of_performance = Column(String(200), nullable=True)
    award_date = Column(Date, nullable=True)
    fiscal_year = Column(Integer, nullable=False, index=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<SpendingAward(award_id='{self.award_id}', amount={self.award_amount})>"


class LobbyingFiling(Base):
    """Quarterly or annual lobbying disclosure filing."""

    __tablename__ = "lobbying"

    registration_id = Column(String(50), primary_key=True)
    client_name = Column(String(200), nullable=False, index=True)
    client_description = Column(Text, nullable=True)
    registrant_name = Column(String(200), nullable=False)
    registrant_address = Column(Text, nullable=True)
    lobbyist_name = Column(String(200), nullable=True)
    lobbyist_title = Column(String(200), nullable=True)
    amount = Column(Numeric(15, 2, asdecimal=False), nullable=True, index=True)
    year = Column(Integer, nullable=False, index=True)
    quarter = Column(Integer, nullable=True)
    report_type = Column(String(50), nullable=True)
    issue_areas = Column(Text, nullable=True)
    specific_issues = Column(Text, nullable=True)
    government_entities = Column(Text, nullable=True)
    foreign_entities = Column(Text, nullable=True)
    posted_date = Column(Date, nullable=True)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self):
        return f"<LobbyingFiling(registration_id='{self.registration_id}', client='{self.client_name}')>"
