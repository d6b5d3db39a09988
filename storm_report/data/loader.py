"""
Raw CSV loading and the full parse → classify → damage pipeline.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from storm_report.config import COLUMN_MAP, TEXT_COLS
from storm_report.data.normalize import normalize_columns, add_damage_columns
from storm_report.data.classify import assign_categories


def load_raw_csv(filepath: Path) -> pd.DataFrame:
    """Read the (optionally compressed) storm CSV, keeping only mapped columns.

    Compression is inferred from the suffix (.bz2, .gz, .zip).
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Storm dataset not found at {filepath}")

    df = pd.read_csv(
        filepath,
        usecols=lambda c: c in COLUMN_MAP,
        dtype={c: str for c in TEXT_COLS},
        low_memory=False,
    )
    missing = [c for c in COLUMN_MAP if c not in df.columns]
    if missing:
        raise ValueError(f"{filepath.name} is missing required columns: {', '.join(missing)}")
    return df[list(COLUMN_MAP)]


def prepare_events(raw: pd.DataFrame) -> pd.DataFrame:
    """Normalize, classify and price a raw frame."""
    df = normalize_columns(raw.copy())
    df = assign_categories(df)
    df = add_damage_columns(df)
    return df


def load_events(filepath: Path) -> pd.DataFrame:
    """Load one storm CSV and return the classified event table."""
    raw = load_raw_csv(filepath)
    print(f"  Loaded {len(raw):,} events from {Path(filepath).name}")
    df = prepare_events(raw)

    undated = df["begin_date"].isna().sum()
    if undated:
        print(f"  Warning: {undated:,} rows had an unparseable begin date")
    return df
