"""Seed data for the record collections."""

from .loader import (
    ReseedResult,
    SeedSource,
    bulk_load,
    get_seed_records,
    load_seed_file,
    reseed,
)

__all__ = [
    "ReseedResult",
    "SeedSource",
    "bulk_load",
    "get_seed_records",
    "load_seed_file",
    "reseed",
]
