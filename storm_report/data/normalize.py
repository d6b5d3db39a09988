"""
Column mapping, date normalization, damage exponent decoding.
"""
from __future__ import annotations

import pandas as pd

from storm_report.config import (
    COLUMN_MAP, NUMERIC_COLS, BEGIN_DATE_FORMAT,
    EXPONENT_MULTIPLIERS, DEFAULT_EXPONENT_MULTIPLIER,
)


# ---------------------------------------------------------------------------
# Column normalisation
# ---------------------------------------------------------------------------

def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename raw NOAA columns, parse types, add derived columns."""
    df = df.rename(columns=COLUMN_MAP)

    # Counts and magnitudes → float, blanks count as zero
    for col in NUMERIC_COLS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0).astype(float)

    # Unparseable dates become NaT; the row is kept
    df["begin_date"] = pd.to_datetime(
        df["begin_date"], format=BEGIN_DATE_FORMAT, errors="coerce"
    )
    df["year"] = df["begin_date"].dt.year.astype("Int64")

    df["event_type"] = df["event_type"].fillna("").astype(str).str.strip()
    return df


# ---------------------------------------------------------------------------
# Damage exponents
# ---------------------------------------------------------------------------

def decode_exponent(code) -> int:
    """Return the multiplier for a single-character damage exponent code."""
    if code is None or pd.isna(code):
        return DEFAULT_EXPONENT_MULTIPLIER
    return EXPONENT_MULTIPLIERS.get(str(code).strip().upper(), DEFAULT_EXPONENT_MULTIPLIER)


def exponent_multiplier(codes: pd.Series) -> pd.Series:
    """Vectorized decode_exponent."""
    cleaned = codes.fillna("").astype(str).str.strip().str.upper()
    result = pd.Series(float(DEFAULT_EXPONENT_MULTIPLIER), index=codes.index)
    for code, multiplier in EXPONENT_MULTIPLIERS.items():
        result[cleaned == code] = float(multiplier)
    return result


def add_damage_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Property, crop and total damage in USD."""
    df["prop_damage_usd"] = df["prop_dmg"] * exponent_multiplier(df["prop_dmg_exp"])
    df["crop_damage_usd"] = df["crop_dmg"] * exponent_multiplier(df["crop_dmg_exp"])
    df["total_damage_usd"] = df["prop_damage_usd"] + df["crop_damage_usd"]
    return df
