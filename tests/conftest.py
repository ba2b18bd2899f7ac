"""Shared test configuration and fixtures."""

from datetime import date
from types import SimpleNamespace

import pytest

from gov_watchdog.config.settings import get_settings
from gov_watchdog.ormdb import (
    Bill,
    Legislator,
    LobbyingFiling,
    SpendingAward,
    create_tables,
    dispose_engine,
    get_session_factory,
)
from gov_watchdog.seed import load_seed_file

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture(autouse=True)
def isolated_db(tmp_path, monkeypatch):
    """Point the application at an isolated SQLite database for each test."""
    db_path = tmp_path / "watchdog-test.db"
    test_env = {
        "ENVIRONMENT": "testing",
        "DATABASE_URL": f"sqlite:///{db_path}",
        "DATA_DIRECTORY": str(tmp_path),
        "SEED_ON_STARTUP": "false",
        "LOG_FILE_ENABLED": "false",
        "LOG_LEVEL": "WARNING",
        "ADMIN_AUTH_TOKEN": ADMIN_TOKEN,
    }
    for key, value in test_env.items():
        monkeypatch.setenv(key, value)

    get_settings.cache_clear()
    dispose_engine()
    create_tables()

    yield {"db_path": db_path, "db_url": test_env["DATABASE_URL"]}

    dispose_engine()
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_lru_cache():
    """Clear the seed file cache between tests to avoid state pollution."""
    yield
    load_seed_file.cache_clear()


@pytest.fixture
def session_factory(isolated_db):
    return get_session_factory()


@pytest.fixture
def db_session(session_factory):
    """A session on the isolated database, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_rows(session_factory):
    """Insert ORM rows and commit them; returns the inserter."""

    def _add(*rows):
        session = session_factory()
        try:
            session.add_all(rows)
            session.commit()
        finally:
            session.close()

    return _add


def make_legislator(bioguide_id, last_name, **fields):
    values = {
        "first_name": "Test",
        "party": "D",
        "state": "CA",
        "chamber": "house",
        "in_office": True,
    }
    values.update(fields)
    return Legislator(bioguide_id=bioguide_id, last_name=last_name, **values)


def make_bill(bill_id, title, **fields):
    values = {
        "congress": 118,
        "bill_type": "hr",
        "number": "1",
        "status": "introduced",
        "introduced_date": date(2024, 1, 1),
    }
    values.update(fields)
    return Bill(bill_id=bill_id, title=title, **values)


def make_award(award_id, recipient_name, award_amount, **fields):
    values = {
        "award_type": "Contract",
        "awarding_agency": "Department of Defense",
        "fiscal_year": 2024,
    }
    values.update(fields)
    return SpendingAward(
        award_id=award_id,
        recipient_name=recipient_name,
        award_amount=award_amount,
        **values,
    )


def make_filing(registration_id, client_name, amount, **fields):
    values = {
        "registrant_name": "Example Strategies LLC",
        "lobbyist_name": "Pat Example",
        "year": 2025,
        "quarter": 4,
    }
    values.update(fields)
    return LobbyingFiling(
        registration_id=registration_id,
        client_name=client_name,
        amount=amount,
        **values,
    )


@pytest.fixture
def make():
    """Row factories with sensible defaults for every collection."""
    return SimpleNamespace(
        legislator=make_legislator,
        bill=make_bill,
        award=make_award,
        filing=make_filing,
    )
