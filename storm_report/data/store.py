"""
EventStore — In-memory storm event table backed by pandas.

Loaded once (downloading the raw file if it is not cached), then queried by
the report generators, the CLI and the API.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from storm_report.config import DATA_URL
from storm_report.data.classify import uncategorized_pct
from storm_report.data.download import dataset_path, fetch_dataset
from storm_report.data.loader import load_events
from storm_report.data.schemas import YearRange


class EventStore:
    """Classified storm events with year-filtered accessors."""

    def __init__(self) -> None:
        self.df: pd.DataFrame = pd.DataFrame()
        self.source: Optional[Path] = None
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(
        self,
        path: Path | None = None,
        url: str = DATA_URL,
        force_download: bool = False,
    ) -> "EventStore":
        """Fetch (if needed), parse and classify the dataset."""
        print("Loading storm events...")
        path = fetch_dataset(url, path if path is not None else dataset_path(), force=force_download)
        self.df = load_events(path)
        self.source = path
        self._loaded = True
        print(f"  {self.row_count():,} events, {len(self.categories())} categories, "
              f"{self.uncategorized_pct():.2f}% uncategorized")
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def get_events(self, year_range: YearRange | None = None) -> pd.DataFrame:
        """Events within the year range (all events when None).

        Returns a filtered view; callers that mutate should copy.
        """
        df = self.df
        if year_range is not None and not year_range.is_open and not df.empty:
            df = df[year_range.mask(df["year"])]
        return df

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def categories(self) -> list[str]:
        """Distinct category labels, canonical and fallback, sorted."""
        if self.df.empty:
            return []
        return sorted(self.df["category"].dropna().unique().tolist())

    def year_span(self) -> tuple[int, int] | None:
        if self.df.empty:
            return None
        years = self.df["year"].dropna()
        if years.empty:
            return None
        return int(years.min()), int(years.max())

    def date_range(self, year_range: YearRange | None = None) -> str:
        """Human-readable begin-date range string."""
        df = self.get_events(year_range)
        if df.empty:
            return "N/A"
        dates = df["begin_date"].dropna()
        if dates.empty:
            return "N/A"
        return f"{dates.min():%Y-%m-%d} to {dates.max():%Y-%m-%d}"

    def uncategorized_pct(self, year_range: YearRange | None = None) -> float:
        df = self.get_events(year_range)
        if df.empty:
            return 0.0
        return uncategorized_pct(df)

    def row_count(self) -> int:
        return len(self.df)

    def categorized_count(self) -> int:
        if self.df.empty:
            return 0
        return int(self.df["is_categorized"].sum())
