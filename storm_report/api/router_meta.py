"""
Meta endpoints: health, categories.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from storm_report.data.store import EventStore
from storm_report.data.classify import category_legend
from storm_report.api.dependencies import get_store
from storm_report.api.response_models import HealthResponse, CategoriesResponse, CategoryRule

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: EventStore = Depends(get_store)):
    span = store.year_span()
    return HealthResponse(
        status="ok",
        rows=store.row_count(),
        categorized_rows=store.categorized_count(),
        uncategorized_pct=round(store.uncategorized_pct(), 4),
        categories=len(store.categories()),
        first_year=span[0] if span else None,
        last_year=span[1] if span else None,
    )


@router.get("/categories", response_model=CategoriesResponse)
def list_categories(store: EventStore = Depends(get_store)):
    """Classification rules in match order plus every category present in the data."""
    categories = store.categories()
    return CategoriesResponse(
        rules=[CategoryRule(category=c, keywords=k) for c, k in category_legend()],
        categories=categories,
        count=len(categories),
    )
