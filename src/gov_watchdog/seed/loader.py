"""Seed data loading and reseeding of the record collections."""

import threading
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import yaml
from sqlalchemy.orm import Session

from ..config.logging import get_logger, log_audit_event
from ..ormdb.database import get_session_factory
from ..ormdb.models import Bill, Legislator, LobbyingFiling, SpendingAward
from ..ormdb.repositories import (
    BillRepository,
    LegislatorRepository,
    LobbyingFilingRepository,
    SpendingAwardRepository,
)

logger = get_logger(__name__)

DATA_DIRECTORY = Path(__file__).parent / "data"
RESEED_FAILED_MESSAGE = "Reseed failed"


class SeedSource(str, Enum):
    """Collections that can be (re)loaded from seed data."""

    LEGISLATORS = "legislators"
    BILLS = "bills"
    SPENDING = "spending"
    LOBBYING = "lobbying"
    ALL = "all"

    @classmethod
    def collections(cls) -> Tuple["SeedSource", ...]:
        return (cls.LEGISLATORS, cls.BILLS, cls.SPENDING, cls.LOBBYING)

    def expand(self) -> Tuple["SeedSource", ...]:
        return SeedSource.collections() if self is SeedSource.ALL else (self,)


@dataclass
class ReseedResult:
    """Outcome of a reseed request; ``counts`` holds rows loaded per collection."""

    success: bool
    message: str
    counts: Dict[str, int] = field(default_factory=dict)


@lru_cache(maxsize=None)
def load_seed_file(filename: str) -> Dict[str, Any]:
    """
    Load one seed data file.

    Args:
        filename: Name of the YAML file under the seed data directory

    Returns:
        Parsed file contents

    Raises:
        FileNotFoundError: If the seed file doesn't exist
        yaml.YAMLError: If the YAML file is malformed
    """
    seed_file = DATA_DIRECTORY / filename

    try:
        with open(seed_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Seed data file not found: {seed_file}")
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Error parsing seed data file {seed_file}: {e}")


def get_seed_records(source: SeedSource) -> List[Dict[str, Any]]:
    """Return the raw records of one collection's seed file."""
    filename, key, _, _ = _LOADERS[source]
    return list(load_seed_file(filename).get(key) or [])


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _upper(value: Any) -> Optional[str]:
    value = _text(value)
    return value.upper() if value else None


def _lower(value: Any) -> Optional[str]:
    value = _text(value)
    return value.lower() if value else None


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None or value == "" else int(value)


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None or value == "" else float(value)


def _full_row(model, record: Dict[str, Any], loaded_at: datetime) -> Dict[str, Any]:
    """Every column of ``model``, filled from ``record`` where present."""
    row = {column.name: record.get(column.name) for column in model.__table__.columns}
    row["updated_at"] = loaded_at
    return row


def _legislator_row(record: Dict[str, Any], loaded_at: datetime) -> Dict[str, Any]:
    row = _full_row(Legislator, record, loaded_at)
    in_office = record.get("in_office")
    row.update(
        bioguide_id=_upper(record["bioguide_id"]),
        first_name=_text(record.get("first_name")),
        last_name=_text(record.get("last_name")),
        party=_upper(record.get("party")),
        state=_upper(record.get("state")),
        chamber=_lower(record.get("chamber")),
        district=_text(record.get("district")),
        in_office=True if in_office is None else bool(in_office),
        next_election=_parse_date(record.get("next_election")),
    )
    return row


def _bill_row(record: Dict[str, Any], loaded_at: datetime) -> Dict[str, Any]:
    row = _full_row(Bill, record, loaded_at)
    bill_type = _lower(record.get("bill_type"))
    number = _text(record.get("number"))
    congress = _optional_int(record.get("congress"))
    bill_id = _text(record.get("bill_id")) or f"{bill_type}{number}-{congress}"
    row.update(
        bill_id=bill_id.lower(),
        congress=congress,
        bill_type=bill_type,
        number=number,
        status=_lower(record.get("status")),
        sponsor_id=_upper(record.get("sponsor_id")),
        introduced_date=_parse_date(record.get("introduced_date")),
        latest_action_date=_parse_date(record.get("latest_action_date")),
    )
    return row


def _spending_row(record: Dict[str, Any], loaded_at: datetime) -> Dict[str, Any]:
    row = _full_row(SpendingAward, record, loaded_at)
    row.update(
        award_id=_upper(record["award_id"]),
        award_amount=_optional_float(record.get("award_amount")),
        award_date=_parse_date(record.get("award_date")),
        fiscal_year=_optional_int(record.get("fiscal_year")),
    )
    return row


def _lobbying_row(record: Dict[str, Any], loaded_at: datetime) -> Dict[str, Any]:
    row = _full_row(LobbyingFiling, record, loaded_at)
    row.update(
        registration_id=_upper(record["registration_id"]),
        amount=_optional_float(record.get("amount")),
        year=_optional_int(record.get("year")),
        quarter=_optional_int(record.get("quarter")),
        posted_date=_parse_date(record.get("posted_date")),
    )
    return row


# source -> (file, top-level key, row normalizer, repository class)
_LOADERS = {
    SeedSource.LEGISLATORS: ("legislators.yaml", "legislators", _legislator_row, LegislatorRepository),
    SeedSource.BILLS: ("bills.yaml", "bills", _bill_row, BillRepository),
    SeedSource.SPENDING: ("spending.yaml", "awards", _spending_row, SpendingAwardRepository),
    SeedSource.LOBBYING: ("lobbying.yaml", "filings", _lobbying_row, LobbyingFilingRepository),
}

_collection_locks = {source: threading.Lock() for source in SeedSource.collections()}


def normalized_rows(source: SeedSource) -> Iterator[Dict[str, Any]]:
    """Yield the seed records of one collection as complete table rows."""
    _, _, to_row, _ = _LOADERS[source]
    loaded_at = datetime.now(UTC)
    for record in get_seed_records(source):
        yield to_row(record, loaded_at)


def bulk_load(session: Session, source: SeedSource) -> Dict[str, int]:
    """
    Upsert the seed records of ``source`` into the store.

    Loading is idempotent: rows are replaced by primary key, and a key that
    appears twice in the seed data keeps its last record. The caller owns the
    transaction.

    Returns:
        Number of distinct rows written per collection
    """
    source = SeedSource(source)
    counts = {}
    for collection in source.expand():
        _, _, _, repository_class = _LOADERS[collection]
        repository = repository_class(session)
        counts[collection.value] = repository.upsert_many(normalized_rows(collection))
        logger.info(
            "Collection loaded",
            collection=collection.value,
            rows=counts[collection.value],
        )
    return counts


def reseed(
    source: SeedSource,
    session_factory: Optional[Callable[[], Session]] = None,
) -> ReseedResult:
    """
    Reload one collection, or all of them, from seed data.

    Each collection loads in its own transaction while holding that
    collection's lock, so concurrent reseeds of the same collection never
    interleave. Collections loaded before a failure stay committed.
    """
    source = SeedSource(source)
    session_factory = session_factory or get_session_factory()
    counts: Dict[str, int] = {}

    for collection in source.expand():
        with _collection_locks[collection]:
            session = session_factory()
            try:
                counts.update(bulk_load(session, collection))
                session.commit()
            except Exception as e:
                session.rollback()
                logger.error(
                    "Reseed failed",
                    source=source.value,
                    collection=collection.value,
                    error=str(e),
                    exc_info=True,
                )
                return ReseedResult(success=False, message=RESEED_FAILED_MESSAGE, counts=counts)
            finally:
                session.close()

    log_audit_event("reseed", source=source.value, counts=counts)
    return ReseedResult(
        success=True,
        message=f"Reseed of {source.value} completed",
        counts=counts,
    )
