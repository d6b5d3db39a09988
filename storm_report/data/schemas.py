"""
Year-range filter for time-based queries.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd


@dataclass
class YearRange:
    """Inclusive range of event years; either bound may be open."""
    start_year: Optional[int] = None
    end_year: Optional[int] = None

    def __post_init__(self) -> None:
        if (
            self.start_year is not None
            and self.end_year is not None
            and self.start_year > self.end_year
        ):
            raise ValueError(f"start_year {self.start_year} is after end_year {self.end_year}")

    @property
    def is_open(self) -> bool:
        return self.start_year is None and self.end_year is None

    @property
    def label(self) -> str:
        """Human-readable label for the range."""
        if self.is_open:
            return "All Years"
        if self.start_year is not None and self.end_year is not None:
            if self.start_year == self.end_year:
                return str(self.start_year)
            return f"{self.start_year} to {self.end_year}"
        if self.start_year is not None:
            return f"{self.start_year} onwards"
        return f"Through {self.end_year}"

    def mask(self, years: pd.Series) -> pd.Series:
        """Boolean mask selecting rows whose year lies in range.

        Rows without a year are only kept when the range is open.
        """
        keep = pd.Series(True, index=years.index)
        if self.start_year is not None:
            keep &= (years >= self.start_year).fillna(False).astype(bool)
        if self.end_year is not None:
            keep &= (years <= self.end_year).fillna(False).astype(bool)
        return keep
