"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    rows: int
    categorized_rows: int
    uncategorized_pct: float
    categories: int
    first_year: Optional[int] = None
    last_year: Optional[int] = None


class CategoryRule(BaseModel):
    category: str
    keywords: str


class CategoriesResponse(BaseModel):
    rules: list[CategoryRule]
    categories: list[str]
    count: int
