"""
Harm analytics — casualties and economic damage by event category, top-N rankings.
"""
from __future__ import annotations

import pandas as pd

from storm_report.config import TOP_N
from storm_report.analytics.common import pct_of_total

TOTAL_COLUMNS = [
    "category", "events", "fatalities", "injuries",
    "prop_damage_usd", "crop_damage_usd", "total_damage_usd",
]


def totals_by_category(df: pd.DataFrame) -> pd.DataFrame:
    """One row per category with event counts and summed harm metrics.

    Rows come out in group-by order (category name, ascending).
    """
    if df.empty:
        return pd.DataFrame(columns=TOTAL_COLUMNS)

    totals = df.groupby("category", sort=True).agg(
        events=("event_type", "size"),
        fatalities=("fatalities", "sum"),
        injuries=("injuries", "sum"),
        prop_damage_usd=("prop_damage_usd", "sum"),
        crop_damage_usd=("crop_damage_usd", "sum"),
        total_damage_usd=("total_damage_usd", "sum"),
    ).reset_index()
    return totals[TOTAL_COLUMNS]


def top_n(totals: pd.DataFrame, metric: str, n: int = TOP_N) -> pd.DataFrame:
    """The n categories with the largest metric, descending.

    The sort is stable, so ties keep their group-by order.
    """
    if metric not in totals.columns or metric == "category":
        raise ValueError(f"Unknown metric: {metric}")
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")

    ranked = totals.sort_values(metric, ascending=False, kind="mergesort").head(n).reset_index(drop=True)
    grand_total = totals[metric].sum()
    ranked["share"] = ranked[metric].apply(lambda v: pct_of_total(v, grand_total))
    ranked.insert(0, "rank", range(1, len(ranked) + 1))
    return ranked


def harm_summary(df: pd.DataFrame) -> dict:
    """Overall KPIs for a (possibly filtered) event table."""
    if df.empty:
        return {k: 0 for k in [
            "events", "fatalities", "injuries", "prop_damage_usd",
            "crop_damage_usd", "total_damage_usd", "categories", "first_year", "last_year",
        ]}

    years = df["year"].dropna()
    return {
        "events": len(df),
        "fatalities": float(df["fatalities"].sum()),
        "injuries": float(df["injuries"].sum()),
        "prop_damage_usd": float(df["prop_damage_usd"].sum()),
        "crop_damage_usd": float(df["crop_damage_usd"].sum()),
        "total_damage_usd": float(df["total_damage_usd"].sum()),
        "categories": int(df["category"].nunique()),
        "first_year": int(years.min()) if not years.empty else 0,
        "last_year": int(years.max()) if not years.empty else 0,
    }
