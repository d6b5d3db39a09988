"""
FastAPI dependencies — EventStore singleton, year-range parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from storm_report.config import TOP_N
from storm_report.data.store import EventStore
from storm_report.data.schemas import YearRange

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: EventStore | None = None


def set_store(store: EventStore | None) -> None:
    global _store
    _store = store


def get_store() -> EventStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Data not loaded yet")
    return _store


# ---------------------------------------------------------------------------
# Query params
# ---------------------------------------------------------------------------

def parse_year_range(
    start_year: Optional[int] = Query(None, description="First event year (inclusive)"),
    end_year: Optional[int] = Query(None, description="Last event year (inclusive)"),
) -> YearRange | None:
    """Parse year query parameters into a YearRange."""
    if start_year is None and end_year is None:
        return None
    try:
        return YearRange(start_year, end_year)
    except ValueError as exc:
        raise HTTPException(400, str(exc))


def parse_top(top: int = Query(TOP_N, ge=1, le=100, description="Number of categories")) -> int:
    return top
